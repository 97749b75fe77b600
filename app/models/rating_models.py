"""
Pydantic models for rated players and match predictions.

RatedEntity and PredictionResult are the core data model; the remaining
classes are request/response schemas for the predictor router.
"""

import math
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field, computed_field


class RatedEntity(BaseModel):
    """A named player carrying one Elo rating per category."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1)
    ratings: Dict[str, float]

    def rating(self, category: str) -> float:
        """Rating for a category (KeyError if the category is not declared)."""
        return self.ratings[category]

    def __hash__(self) -> int:
        # names are unique within a catalog
        return hash(self.name)


def _display(value: float) -> float:
    if math.isinf(value):
        return value
    return round(value, 2)


class PredictionResult(BaseModel):
    """Win probabilities and decimal odds for a pairing."""
    model_config = ConfigDict(frozen=True)

    prob_a: float = Field(..., ge=0.0, le=1.0)
    prob_b: float = Field(..., ge=0.0, le=1.0)
    odds_a: float
    odds_b: float

    @computed_field
    @property
    def percent_a(self) -> float:
        """Player A win probability as a percentage, 2 decimals."""
        return round(self.prob_a * 100, 2)

    @computed_field
    @property
    def percent_b(self) -> float:
        """Player B win probability as a percentage, 2 decimals."""
        return round(self.prob_b * 100, 2)

    @computed_field
    @property
    def display_odds_a(self) -> float:
        return _display(self.odds_a)

    @computed_field
    @property
    def display_odds_b(self) -> float:
        return _display(self.odds_b)


class PlayerCandidate(BaseModel):
    """Search dropdown row: name plus overall rating."""
    name: str
    overall_rating: float

    @classmethod
    def from_entity(cls, entity: RatedEntity, overall_category: str = "overall") -> "PlayerCandidate":
        return cls(name=entity.name, overall_rating=entity.rating(overall_category))


class SlotSnapshot(BaseModel):
    """Read model of one selection slot."""
    query: str = ""
    player: Optional[str] = None
    dropdown_open: bool = False
    candidates: List[PlayerCandidate] = []


class MatchPrediction(BaseModel):
    """Prediction for two named players on a category."""
    player1: str
    player2: str
    category: str
    player1_rating: float
    player2_rating: float
    result: PredictionResult


class SelectionSnapshot(BaseModel):
    """Read model of the whole selection state."""
    first: SlotSnapshot
    second: SlotSnapshot
    category: str
    categories: List[str]
    can_compute: bool
    result_visible: bool
    prediction: Optional[MatchPrediction] = None


class PredictRequest(BaseModel):
    """Stateless prediction request."""
    player1: str = Field(min_length=1)
    player2: str = Field(min_length=1)
    category: str = "overall"


class QueryUpdate(BaseModel):
    text: str = ""


class PlayerPick(BaseModel):
    name: str = Field(min_length=1)


class DropdownUpdate(BaseModel):
    open: bool


class CategoryUpdate(BaseModel):
    category: str
