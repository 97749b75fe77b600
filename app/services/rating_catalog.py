"""
Rating Catalog
==============

Holds the parsed collection of rated players and answers name searches.

Input is the ratings CSV as text records: one header record (discarded)
followed by one record per player:

    name,elo_overall,elo_hard,elo_clay,elo_grass

Records are parsed with the csv module, so names containing commas must be
quoted. Any malformed record rejects the whole load (ParseError); callers that
want the empty-catalog fallback use load_catalog().

Usage:
    from app.services.rating_catalog import RatingCatalog

    catalog = RatingCatalog.load(lines)
    catalog.search("djok")      # [RatedEntity(name='Novak Djokovic', ...)]
"""

import csv
import logging
import math
from typing import Dict, Iterable, Iterator, List, Optional, Sequence

from ..core.exceptions import ParseError
from ..models.rating_models import RatedEntity

logger = logging.getLogger(__name__)

OVERALL_CATEGORY = "overall"
DEFAULT_CATEGORIES = (OVERALL_CATEGORY, "hard", "clay", "grass")
DEFAULT_SEARCH_LIMIT = 10


class RatingCatalog:
    """Immutable, insertion-ordered collection of rated players."""

    def __init__(self, entities: Sequence[RatedEntity] = (),
                 categories: Sequence[str] = DEFAULT_CATEGORIES):
        if not categories:
            raise ValueError("At least one rating category is required")
        self._categories = tuple(categories)
        self._entities = tuple(entities)
        self._by_name: Dict[str, RatedEntity] = {e.name: e for e in self._entities}
        # lowercased names, parallel to _entities
        self._search_keys = tuple(e.name.lower() for e in self._entities)

    @classmethod
    def empty(cls, categories: Sequence[str] = DEFAULT_CATEGORIES) -> "RatingCatalog":
        return cls((), categories)

    @classmethod
    def load(cls, rows: Iterable[str],
             categories: Sequence[str] = DEFAULT_CATEGORIES) -> "RatingCatalog":
        """
        Parse ratings records into a catalog.

        Args:
            rows: Text records, header first
            categories: Declared categories in column order after the name

        Returns:
            Populated RatingCatalog (empty if only the header is present)

        Raises:
            ParseError: On the first malformed record
        """
        expected_fields = 1 + len(categories)
        entities: List[RatedEntity] = []
        seen = set()

        records = iter(rows)
        next(records, None)  # header

        for line_number, line in enumerate(records, start=2):
            if not line.strip():
                continue

            try:
                fields = next(csv.reader([line], skipinitialspace=True))
            except csv.Error as e:
                raise ParseError(line_number, f"malformed record: {e}")

            if len(fields) != expected_fields:
                raise ParseError(
                    line_number,
                    f"expected {expected_fields} fields, got {len(fields)}"
                )

            name = fields[0].strip()
            if not name:
                raise ParseError(line_number, "empty player name")
            if name in seen:
                raise ParseError(line_number, f"duplicate player name '{name}'")

            ratings = {}
            for category, raw in zip(categories, fields[1:]):
                ratings[category] = _parse_rating(raw, category, line_number)

            entities.append(RatedEntity(name=name, ratings=ratings))
            seen.add(name)

        logger.info(f"Loaded {len(entities)} players ({', '.join(categories)})")
        return cls(entities, categories)

    @property
    def categories(self) -> List[str]:
        return list(self._categories)

    @property
    def entities(self) -> List[RatedEntity]:
        return list(self._entities)

    @property
    def default_category(self) -> str:
        """The "overall" category when declared, otherwise the first declared one."""
        if OVERALL_CATEGORY in self._categories:
            return OVERALL_CATEGORY
        return self._categories[0]

    def has_category(self, category: str) -> bool:
        return category in self._categories

    def get(self, name: str) -> Optional[RatedEntity]:
        """Exact name lookup."""
        return self._by_name.get(name)

    def search(self, query: str, limit: int = DEFAULT_SEARCH_LIMIT) -> List[RatedEntity]:
        """
        Case-insensitive substring search over player names.

        An empty query returns nothing rather than the whole catalog.
        Matches keep catalog order and are truncated to `limit`.
        """
        if not query or limit <= 0:
            return []

        needle = query.lower()
        matches = []
        for entity, key in zip(self._entities, self._search_keys):
            if needle in key:
                matches.append(entity)
                if len(matches) >= limit:
                    break

        logger.debug(f"Search '{query}' -> {len(matches)} match(es)")
        return matches

    def is_empty(self) -> bool:
        return not self._entities

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[RatedEntity]:
        return iter(self._entities)

    def __contains__(self, entity: object) -> bool:
        if not isinstance(entity, RatedEntity):
            return False
        return self._by_name.get(entity.name) is entity


def _parse_rating(raw: str, category: str, line_number: int) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise ParseError(line_number, f"{category} rating '{raw}' is not a number")
    if not math.isfinite(value):
        raise ParseError(line_number, f"{category} rating '{raw}' is not finite")
    return value


def load_catalog(rows: Iterable[str],
                 categories: Sequence[str] = DEFAULT_CATEGORIES) -> RatingCatalog:
    """
    Load a catalog, falling back to an empty one on a malformed record.

    The failure is logged once; the empty catalog stays usable (every search
    returns nothing).
    """
    try:
        return RatingCatalog.load(rows, categories)
    except ParseError as e:
        logger.error(f"Failed to load player ratings, using empty catalog: {e}")
        return RatingCatalog.empty(categories)
