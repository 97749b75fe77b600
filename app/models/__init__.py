"""
Match predictor models package.
"""

from .rating_models import (
    RatedEntity,
    PredictionResult,
    PlayerCandidate,
    SlotSnapshot,
    MatchPrediction,
    SelectionSnapshot,
    PredictRequest,
    QueryUpdate,
    PlayerPick,
    DropdownUpdate,
    CategoryUpdate
)

__all__ = [
    "RatedEntity",
    "PredictionResult",
    "PlayerCandidate",
    "SlotSnapshot",
    "MatchPrediction",
    "SelectionSnapshot",
    "PredictRequest",
    "QueryUpdate",
    "PlayerPick",
    "DropdownUpdate",
    "CategoryUpdate"
]
