"""
Services package for the match predictor.
"""

from .rating_catalog import RatingCatalog, load_catalog
from .selection_state import SelectionState, Slot
from .outcome_predictor import predict, predict_matchup
from .ratings_source import load_catalog_async, load_catalog_from_settings, load_catalog_strict

__all__ = [
    "RatingCatalog",
    "load_catalog",
    "SelectionState",
    "Slot",
    "predict",
    "predict_matchup",
    "load_catalog_async",
    "load_catalog_from_settings",
    "load_catalog_strict",
]
