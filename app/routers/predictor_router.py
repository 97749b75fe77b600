"""
Predictor API router: player search, stateless predictions and the
single-user selection flow (type, pick, switch surface, reveal).
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Path, Request

from ..core.config import settings
from ..core.exceptions import InvalidCategory
from ..models.rating_models import (
    CategoryUpdate,
    DropdownUpdate,
    MatchPrediction,
    PlayerCandidate,
    PlayerPick,
    PredictRequest,
    QueryUpdate,
    SelectionSnapshot,
)
from ..services.outcome_predictor import predict_matchup
from ..services.rating_catalog import RatingCatalog
from ..services.selection_state import SelectionState, Slot


def get_catalog(request: Request) -> RatingCatalog:
    """Loaded catalog; 503 while the ratings are still loading."""
    if getattr(request.app.state, "catalog_status", "loading") == "loading":
        raise HTTPException(status_code=503, detail="Player ratings are still loading")
    return request.app.state.catalog


def get_selection(request: Request, catalog: RatingCatalog = Depends(get_catalog)) -> SelectionState:
    return request.app.state.selection


def _lookup(catalog: RatingCatalog, name: str):
    entity = catalog.get(name)
    if entity is None:
        raise HTTPException(status_code=404, detail=f"Player '{name}' not found")
    return entity


# Initialize router
predictor_router = APIRouter(prefix="/predictor", tags=["predictor"])


@predictor_router.get(
    "/categories",
    response_model=List[str],
    summary="List rating categories"
)
async def get_categories(catalog: RatingCatalog = Depends(get_catalog)) -> List[str]:
    """Declared rating categories (overall plus surfaces)."""
    return catalog.categories


@predictor_router.get(
    "/players",
    response_model=List[PlayerCandidate],
    summary="Search players",
    description="Case-insensitive substring search over player names. An empty query returns no players."
)
async def search_players(
    q: str = Query("", description="Search text"),
    limit: Optional[int] = Query(None, ge=1, le=100, description="Maximum number of players"),
    catalog: RatingCatalog = Depends(get_catalog)
) -> List[PlayerCandidate]:
    """Search players by name."""
    matches = catalog.search(q, limit or settings.search_limit)
    overall = catalog.default_category
    return [PlayerCandidate.from_entity(e, overall) for e in matches]


@predictor_router.post(
    "/predict",
    response_model=MatchPrediction,
    summary="Predict a match",
    description="Win probability and decimal odds for two players on a category."
)
async def predict_match(
    body: PredictRequest,
    catalog: RatingCatalog = Depends(get_catalog)
) -> MatchPrediction:
    """Stateless prediction for two named players."""
    if not catalog.has_category(body.category):
        raise HTTPException(status_code=422, detail=str(InvalidCategory(body.category, catalog.categories)))

    player1 = _lookup(catalog, body.player1)
    player2 = _lookup(catalog, body.player2)

    return MatchPrediction(
        player1=player1.name,
        player2=player2.name,
        category=body.category,
        player1_rating=player1.rating(body.category),
        player2_rating=player2.rating(body.category),
        result=predict_matchup(player1, player2, body.category),
    )


@predictor_router.get(
    "/state",
    response_model=SelectionSnapshot,
    summary="Current selection state"
)
async def get_state(selection: SelectionState = Depends(get_selection)) -> SelectionSnapshot:
    return selection.snapshot()


@predictor_router.put(
    "/state/{slot}/query",
    response_model=SelectionSnapshot,
    summary="Type in a player search box"
)
async def set_query(
    body: QueryUpdate,
    slot: Slot = Path(..., description="Selection slot (first or second)"),
    selection: SelectionState = Depends(get_selection)
) -> SelectionSnapshot:
    """Update the search text; clears the slot's chosen player."""
    selection.set_query(slot, body.text)
    return selection.snapshot()


@predictor_router.put(
    "/state/{slot}/player",
    response_model=SelectionSnapshot,
    summary="Pick a player for a slot"
)
async def select_player(
    body: PlayerPick,
    slot: Slot = Path(..., description="Selection slot (first or second)"),
    selection: SelectionState = Depends(get_selection)
) -> SelectionSnapshot:
    """Bind a player (by exact name) to a slot."""
    selection.select(slot, _lookup(selection.catalog, body.name))
    return selection.snapshot()


@predictor_router.put(
    "/state/{slot}/dropdown",
    response_model=SelectionSnapshot,
    summary="Open or close a slot's dropdown"
)
async def set_dropdown(
    body: DropdownUpdate,
    slot: Slot = Path(..., description="Selection slot (first or second)"),
    selection: SelectionState = Depends(get_selection)
) -> SelectionSnapshot:
    if body.open:
        selection.open_dropdown(slot)
    else:
        selection.close_dropdown(slot)
    return selection.snapshot()


@predictor_router.put(
    "/state/category",
    response_model=SelectionSnapshot,
    summary="Switch the rating category"
)
async def set_category(
    body: CategoryUpdate,
    selection: SelectionState = Depends(get_selection)
) -> SelectionSnapshot:
    try:
        selection.set_category(body.category)
    except InvalidCategory as e:
        raise HTTPException(status_code=422, detail=str(e))
    return selection.snapshot()


@predictor_router.post(
    "/state/reveal",
    response_model=SelectionSnapshot,
    summary="Show the prediction",
    description="Has no effect until both players are selected."
)
async def reveal(selection: SelectionState = Depends(get_selection)) -> SelectionSnapshot:
    selection.reveal()
    return selection.snapshot()
