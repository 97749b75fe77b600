"""
Shared fixtures for the match predictor tests.

Builds small in-memory catalogs so no ratings file or network is needed.
"""

import logging

import pytest

from app.services.rating_catalog import RatingCatalog
from app.services.selection_state import SelectionState

HEADER = "player,elo_overall,elo_hard,elo_clay,elo_grass"


@pytest.fixture
def sample_rows():
    """Header plus five players, ratings in overall/hard/clay/grass order."""
    return [
        HEADER,
        "Jannik Sinner,2230.4,2251.7,2104.9,2063.2",
        "Carlos Alcaraz,2187.9,2120.3,2180.6,2112.5",
        "Novak Djokovic,2121.6,2106.8,2050.2,2088.4",
        "Alexander Zverev,2032.1,2015.4,2041.7,1921.3",
        "Alex de Minaur,1952.3,1961.0,1850.6,1899.7",
    ]


@pytest.fixture
def catalog(sample_rows):
    return RatingCatalog.load(sample_rows)


@pytest.fixture
def pair_catalog():
    """The two-player catalog from the 2000 vs 1800 worked example."""
    return RatingCatalog.load(["name,overall", "A,2000", "B,1800"], categories=["overall"])


@pytest.fixture
def state(catalog):
    return SelectionState(catalog)


@pytest.fixture
def restore_logging():
    """Undo setup_logging(): drop its handlers and let "app" records reach caplog again."""
    yield
    for name in ("MatchPredictor", "app"):
        logger = logging.getLogger(name)
        for handler in logger.handlers:
            handler.close()
        logger.handlers = []
        logger.propagate = True
        logger.setLevel(logging.NOTSET)


@pytest.fixture
def ratings_file(tmp_path, sample_rows):
    path = tmp_path / "player_elo_ratings.csv"
    path.write_text("\n".join(sample_rows) + "\n", encoding="utf-8")
    return path
