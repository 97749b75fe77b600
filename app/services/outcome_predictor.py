"""
Outcome Predictor
=================

Win probability and decimal odds from two Elo ratings.

Uses the standard Elo expected-score formula:

    expected_a = 1 / (1 + 10 ^ ((rating_b - rating_a) / 400))
    expected_b = 1 - expected_a

Decimal odds are the reciprocal of the win probability (stake multiplier for
a win). A 400-point gap is roughly 91% / 9%; equal ratings give 50% / 50% at
odds of 2.00 each.

Usage:
    from app.services.outcome_predictor import predict

    result = predict(2000, 1800)
    result.percent_a       # 75.97
    result.display_odds_b  # 4.16
"""

import math

from ..models.rating_models import PredictionResult, RatedEntity

SCALE = 400.0

# 10 ** 300 is still a finite float; anything past it has already saturated
# the expected score to 0.0 or 1.0
MAX_EXPONENT = 300.0


def expected_score(rating_a: float, rating_b: float) -> float:
    """Probability of A beating B under the Elo model."""
    exponent = (rating_b - rating_a) / SCALE
    exponent = max(-MAX_EXPONENT, min(MAX_EXPONENT, exponent))
    return 1.0 / (1.0 + 10.0 ** exponent)


def decimal_odds(probability: float) -> float:
    """Decimal odds for a win probability; inf when the probability is 0."""
    if probability <= 0.0:
        return math.inf
    return 1.0 / probability


def predict(rating_a: float, rating_b: float) -> PredictionResult:
    """
    Compute win probabilities and decimal odds for a pairing.

    Args:
        rating_a: Elo rating of player A
        rating_b: Elo rating of player B

    Returns:
        PredictionResult with prob_a + prob_b == 1 exactly
    """
    prob_a = expected_score(rating_a, rating_b)
    prob_b = 1.0 - prob_a

    return PredictionResult(
        prob_a=prob_a,
        prob_b=prob_b,
        odds_a=decimal_odds(prob_a),
        odds_b=decimal_odds(prob_b),
    )


def predict_matchup(entity_a: RatedEntity, entity_b: RatedEntity, category: str) -> PredictionResult:
    """Predict using both players' ratings for a category."""
    return predict(entity_a.rating(category), entity_b.rating(category))
