"""
Selection State
===============

Tracks the two chosen players, the active rating category and whether the
prediction is shown. Framework independent: a presentation layer reads
snapshot() and registers a listener with subscribe() to re-render.

Rules:
- Typing in a slot clears that slot's chosen player.
- Any change to a slot's player or to the category hides the result.
- reveal() only has an effect when both slots are bound.

Usage:
    state = SelectionState(catalog)
    state.set_query(Slot.FIRST, "sinn")
    state.select(Slot.FIRST, state.candidates(Slot.FIRST)[0])
    ...
    state.reveal()
    state.result()      # PredictionResult or None
"""

import logging
from enum import Enum
from typing import Callable, Dict, List, Optional

from ..core.exceptions import InvalidCategory, UnknownPlayer
from ..models.rating_models import (
    MatchPrediction,
    PlayerCandidate,
    PredictionResult,
    RatedEntity,
    SelectionSnapshot,
    SlotSnapshot,
)
from .outcome_predictor import predict_matchup
from .rating_catalog import DEFAULT_SEARCH_LIMIT, RatingCatalog

logger = logging.getLogger(__name__)


class Slot(str, Enum):
    FIRST = "first"
    SECOND = "second"


Listener = Callable[["SelectionState", str], None]


class _SlotState:
    __slots__ = ("query", "entity", "dropdown_open")

    def __init__(self):
        self.query = ""
        self.entity: Optional[RatedEntity] = None
        self.dropdown_open = False


class SelectionState:
    """Selection/search state machine driving the outcome predictor."""

    def __init__(self, catalog: RatingCatalog, category: Optional[str] = None,
                 search_limit: int = DEFAULT_SEARCH_LIMIT):
        self.catalog = catalog
        self.search_limit = search_limit
        if category is None:
            category = catalog.default_category
        if not catalog.has_category(category):
            raise InvalidCategory(category, catalog.categories)
        self._category = category
        self._slots: Dict[Slot, _SlotState] = {Slot.FIRST: _SlotState(), Slot.SECOND: _SlotState()}
        self._result_visible = False
        self._listeners: List[Listener] = []

    # ------------------------------------------------------------------ #
    # Read accessors                                                       #
    # ------------------------------------------------------------------ #

    @property
    def category(self) -> str:
        return self._category

    @property
    def result_visible(self) -> bool:
        return self._result_visible

    @property
    def first(self) -> Optional[RatedEntity]:
        return self._slots[Slot.FIRST].entity

    @property
    def second(self) -> Optional[RatedEntity]:
        return self._slots[Slot.SECOND].entity

    def selected(self, slot: Slot) -> Optional[RatedEntity]:
        return self._slots[Slot(slot)].entity

    def query(self, slot: Slot) -> str:
        return self._slots[Slot(slot)].query

    def dropdown_open(self, slot: Slot) -> bool:
        return self._slots[Slot(slot)].dropdown_open

    def candidates(self, slot: Slot) -> List[RatedEntity]:
        """Players matching the slot's current query."""
        return self.catalog.search(self._slots[Slot(slot)].query, self.search_limit)

    def can_compute(self) -> bool:
        return self.first is not None and self.second is not None

    # ------------------------------------------------------------------ #
    # Mutations                                                            #
    # ------------------------------------------------------------------ #

    def set_query(self, slot: Slot, text: str) -> None:
        """Update the search text; drops the slot's chosen player."""
        state = self._slots[Slot(slot)]
        state.query = text
        state.entity = None
        state.dropdown_open = True
        self._result_visible = False
        self._notify("query")

    def select(self, slot: Slot, entity: RatedEntity) -> None:
        """Bind a catalog player to the slot and close its dropdown."""
        if entity not in self.catalog:
            raise UnknownPlayer(entity.name)
        state = self._slots[Slot(slot)]
        state.entity = entity
        state.query = entity.name
        state.dropdown_open = False
        self._result_visible = False
        logger.debug(f"Selected {entity.name} for {Slot(slot).value} slot")
        self._notify("select")

    def set_category(self, category: str) -> None:
        """Switch the rating category; unknown categories leave it unchanged."""
        if not self.catalog.has_category(category):
            raise InvalidCategory(category, self.catalog.categories)
        self._category = category
        self._result_visible = False
        self._notify("category")

    def open_dropdown(self, slot: Slot) -> None:
        state = self._slots[Slot(slot)]
        if not state.dropdown_open:
            state.dropdown_open = True
            self._notify("dropdown")

    def close_dropdown(self, slot: Slot) -> None:
        state = self._slots[Slot(slot)]
        if state.dropdown_open:
            state.dropdown_open = False
            self._notify("dropdown")

    def reveal(self) -> None:
        """Show the prediction; no effect unless both slots are bound."""
        if not self.can_compute() or self._result_visible:
            return
        self._result_visible = True
        self._notify("reveal")

    # ------------------------------------------------------------------ #
    # Prediction                                                           #
    # ------------------------------------------------------------------ #

    def result(self) -> Optional[PredictionResult]:
        """Prediction for the current pair and category, or None if hidden."""
        if not self._result_visible or not self.can_compute():
            return None
        return predict_matchup(self.first, self.second, self._category)

    def prediction(self) -> Optional[MatchPrediction]:
        result = self.result()
        if result is None:
            return None
        return MatchPrediction(
            player1=self.first.name,
            player2=self.second.name,
            category=self._category,
            player1_rating=self.first.rating(self._category),
            player2_rating=self.second.rating(self._category),
            result=result,
        )

    # ------------------------------------------------------------------ #
    # Observers                                                            #
    # ------------------------------------------------------------------ #

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a change listener; returns a function that removes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, change: str) -> None:
        for listener in list(self._listeners):
            listener(self, change)

    def snapshot(self) -> SelectionSnapshot:
        """Read model for the presentation layer."""
        return SelectionSnapshot(
            first=self._slot_snapshot(Slot.FIRST),
            second=self._slot_snapshot(Slot.SECOND),
            category=self._category,
            categories=self.catalog.categories,
            can_compute=self.can_compute(),
            result_visible=self._result_visible,
            prediction=self.prediction(),
        )

    def _slot_snapshot(self, slot: Slot) -> SlotSnapshot:
        state = self._slots[slot]
        overall = self.catalog.default_category
        return SlotSnapshot(
            query=state.query,
            player=state.entity.name if state.entity else None,
            dropdown_open=state.dropdown_open,
            candidates=[PlayerCandidate.from_entity(e, overall) for e in self.candidates(slot)],
        )
