"""
Unit tests for app/services/rating_catalog.py: CSV record parsing, the
fail-fast load policy and name search.

Run from the project root:
    pytest tests/test_rating_catalog.py -v
"""

import logging

import pytest

from app.core.exceptions import ParseError
from app.services.rating_catalog import (
    DEFAULT_CATEGORIES,
    RatingCatalog,
    load_catalog,
)

from conftest import HEADER


# ---------------------------------------------------------------------------
# load
# ---------------------------------------------------------------------------

class TestLoad:
    """RatingCatalog.load(rows, categories) -> RatingCatalog | ParseError."""

    def test_loads_every_player(self, catalog):
        assert len(catalog) == 5
        assert not catalog.is_empty()
        assert catalog.categories == list(DEFAULT_CATEGORIES)

    def test_ratings_follow_column_order(self, catalog):
        zverev = catalog.get("Alexander Zverev")
        assert zverev.ratings == {
            "overall": 2032.1,
            "hard": 2015.4,
            "clay": 2041.7,
            "grass": 1921.3,
        }

    def test_keeps_insertion_order(self, catalog):
        assert [e.name for e in catalog][:2] == ["Jannik Sinner", "Carlos Alcaraz"]

    def test_header_only_gives_empty_catalog(self):
        catalog = RatingCatalog.load([HEADER])
        assert catalog.is_empty()
        assert len(catalog) == 0
        assert catalog.search("a") == []

    def test_no_rows_at_all_gives_empty_catalog(self):
        assert RatingCatalog.load([]).is_empty()

    def test_blank_lines_are_skipped(self, sample_rows):
        rows = sample_rows[:2] + ["", "   "] + sample_rows[2:] + [""]
        assert len(RatingCatalog.load(rows)) == 5

    def test_header_is_discarded_even_if_it_looks_like_data(self):
        catalog = RatingCatalog.load(["Roger,1,2,3,4", "Rafa,5,6,7,8"])
        assert [e.name for e in catalog] == ["Rafa"]

    def test_quoted_name_with_comma(self):
        catalog = RatingCatalog.load([HEADER, '"Auger-Aliassime, Felix",1950,1960,1800,1900'])
        assert catalog.get("Auger-Aliassime, Felix").rating("clay") == 1800.0

    def test_whitespace_around_fields(self):
        catalog = RatingCatalog.load([HEADER, "Ben Shelton, 1900.5, 1920 , 1800,1850\r\n"])
        shelton = catalog.get("Ben Shelton")
        assert shelton.rating("overall") == 1900.5
        assert shelton.rating("hard") == 1920.0

    def test_custom_categories(self):
        catalog = RatingCatalog.load(["name,overall,indoor", "X,1500,1600"], ["overall", "indoor"])
        assert catalog.categories == ["overall", "indoor"]
        assert catalog.get("X").rating("indoor") == 1600.0

    def test_non_numeric_rating_rejects_whole_load(self, sample_rows):
        rows = sample_rows + ["Casper Ruud,1934.7,abc,1990.4,1760.1"]
        with pytest.raises(ParseError) as exc_info:
            RatingCatalog.load(rows)
        assert exc_info.value.line == 7
        assert "hard" in exc_info.value.reason

    @pytest.mark.parametrize("bad", ["nan", "inf", "-inf", "NaN"])
    def test_non_finite_rating_is_rejected(self, bad):
        with pytest.raises(ParseError):
            RatingCatalog.load([HEADER, f"Casper Ruud,1934.7,{bad},1990.4,1760.1"])

    def test_empty_rating_is_rejected(self):
        with pytest.raises(ParseError):
            RatingCatalog.load([HEADER, "Casper Ruud,1934.7,,1990.4,1760.1"])

    @pytest.mark.parametrize("line", [
        "Casper Ruud,1934.7,1880.2,1990.4",
        "Casper Ruud,1934.7,1880.2,1990.4,1760.1,1700",
        "Casper Ruud",
    ])
    def test_wrong_field_count_is_rejected(self, line):
        with pytest.raises(ParseError) as exc_info:
            RatingCatalog.load([HEADER, line])
        assert "expected 5 fields" in str(exc_info.value)

    def test_empty_name_is_rejected(self):
        with pytest.raises(ParseError):
            RatingCatalog.load([HEADER, " ,1,2,3,4"])

    def test_duplicate_name_is_rejected(self, sample_rows):
        with pytest.raises(ParseError) as exc_info:
            RatingCatalog.load(sample_rows + [sample_rows[1]])
        assert "duplicate" in exc_info.value.reason

    def test_requires_a_category(self):
        with pytest.raises(ValueError):
            RatingCatalog([], categories=[])


class TestLoadCatalogFallback:
    """load_catalog() logs a ParseError and returns an empty catalog."""

    def test_malformed_row_gives_empty_usable_catalog(self, sample_rows, caplog):
        with caplog.at_level(logging.ERROR):
            catalog = load_catalog(sample_rows + ["broken"])

        assert catalog.is_empty()
        assert catalog.categories == list(DEFAULT_CATEGORIES)
        assert catalog.search("sinner") == []
        assert "line 7" in caplog.text

    def test_valid_rows_load_normally(self, sample_rows):
        assert len(load_catalog(sample_rows)) == 5


# ---------------------------------------------------------------------------
# search
# ---------------------------------------------------------------------------

class TestSearch:
    """search(query, limit) -> List[RatedEntity]."""

    @pytest.mark.parametrize("limit", [0, 1, 10, 1000])
    def test_empty_query_returns_nothing(self, catalog, limit):
        assert catalog.search("", limit) == []

    def test_case_insensitive_substring(self, catalog):
        names = [e.name for e in catalog.search("AL")]
        assert names == ["Carlos Alcaraz", "Alexander Zverev", "Alex de Minaur"]

    def test_matches_middle_of_name(self, catalog):
        assert [e.name for e in catalog.search("kov")] == ["Novak Djokovic"]

    @pytest.mark.parametrize("limit", [1, 2, 3, 50])
    def test_respects_limit(self, catalog, limit):
        results = catalog.search("a", limit)
        assert len(results) <= limit
        assert all("a" in e.name.lower() for e in results)

    def test_truncates_in_catalog_order(self, catalog):
        assert [e.name for e in catalog.search("a", 2)] == ["Jannik Sinner", "Carlos Alcaraz"]

    def test_default_limit_is_ten(self):
        rows = [HEADER] + [f"Player {i},1500,1500,1500,1500" for i in range(25)]
        catalog = RatingCatalog.load(rows)
        assert len(catalog.search("player")) == 10

    def test_no_match(self, catalog):
        assert catalog.search("federer") == []

    def test_non_positive_limit(self, catalog):
        assert catalog.search("a", 0) == []
        assert catalog.search("a", -3) == []


class TestAccessors:

    def test_get_is_exact(self, catalog):
        assert catalog.get("Jannik Sinner").name == "Jannik Sinner"
        assert catalog.get("jannik sinner") is None

    def test_contains_only_own_entities(self, catalog, sample_rows):
        other = RatingCatalog.load(sample_rows)
        assert catalog.get("Jannik Sinner") in catalog
        assert other.get("Jannik Sinner") not in catalog
        assert "Jannik Sinner" not in catalog

    def test_has_category(self, catalog):
        assert catalog.has_category("grass")
        assert not catalog.has_category("carpet")

    def test_entities_are_immutable(self, catalog):
        sinner = catalog.get("Jannik Sinner")
        with pytest.raises(Exception):
            sinner.name = "Someone Else"

    def test_empty(self):
        empty = RatingCatalog.empty(["overall"])
        assert empty.is_empty()
        assert empty.categories == ["overall"]

    def test_default_category_is_overall(self):
        catalog = RatingCatalog.empty(["hard", "overall"])
        assert catalog.default_category == "overall"

    def test_default_category_without_overall(self):
        catalog = RatingCatalog.load(["name,hard,clay", "A,1900,2000"], categories=["hard", "clay"])
        assert catalog.default_category == "hard"
