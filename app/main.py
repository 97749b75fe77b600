"""
Main FastAPI application for the Tennis Match Predictor.

Loads the player Elo ratings once at startup and serves player search,
match predictions and the selection flow that drives them.
"""

import asyncio
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .core.config import settings
from .core.exceptions import MatchPredictorError
from .routers.predictor_router import predictor_router
from .services.rating_catalog import RatingCatalog
from .services.ratings_source import load_catalog_async
from .services.selection_state import SelectionState
from logging_config import get_component_logger, setup_logging


logger = get_component_logger("API")


def install_catalog(app: FastAPI, catalog: RatingCatalog, status: Optional[str] = None) -> None:
    """Make a loaded catalog live and start a fresh selection on it."""
    app.state.catalog = catalog
    app.state.selection = SelectionState(catalog, search_limit=settings.search_limit)
    app.state.catalog_status = status or ("empty" if catalog.is_empty() else "ready")


def _fallback_catalog() -> RatingCatalog:
    try:
        return RatingCatalog.empty(settings.rating_categories)
    except ValueError:
        return RatingCatalog.empty()


async def _load_ratings(app: FastAPI) -> None:
    try:
        catalog = await load_catalog_async(settings)
        install_catalog(app, catalog)
    except MatchPredictorError as e:
        logger.error(f"❌ Failed to load player ratings: {e}")
        install_catalog(app, _fallback_catalog(), status="failed")
    except Exception as e:
        logger.exception(f"❌ Unexpected error while loading player ratings: {e}")
        install_catalog(app, _fallback_catalog(), status="failed")
    logger.info(f"Player ratings {app.state.catalog_status}: {len(app.state.catalog)} players")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    setup_logging(
        log_file=settings.log_file,
        level=settings.log_level,
        file_format=settings.log_format
    )
    logger.info("Starting Tennis Match Predictor API...")
    logger.info(f"API Version: {settings.api_version}")
    app.state.catalog_status = "loading"
    app.state.load_task = asyncio.create_task(_load_ratings(app))
    yield
    # Shutdown
    app.state.load_task.cancel()
    logger.info("Shutting down Tennis Match Predictor API...")


# Create FastAPI application
app = FastAPI(
    title=settings.api_title,
    version=settings.api_version,
    description=settings.api_description,
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=settings.allowed_methods,
    allow_headers=settings.allowed_headers,
)


# Exception handlers
@app.exception_handler(404)
async def not_found_handler(request, exc):
    """Handle 404 errors."""
    detail = getattr(exc, "detail", None) or "The requested resource was not found"
    return JSONResponse(
        status_code=404,
        content={"error": "Not Found", "detail": detail}
    )


@app.exception_handler(MatchPredictorError)
async def predictor_error_handler(request: Request, exc: MatchPredictorError):
    """Handle predictor errors that escaped a route."""
    logger.error(f"Predictor error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=400,
        content={"error": type(exc).__name__, "detail": str(exc)}
    )


# Health check endpoint
@app.get("/health", tags=["health"])
async def health_check():
    """Health check endpoint."""
    catalog = getattr(app.state, "catalog", None)
    return {
        "status": "healthy",
        "version": settings.api_version,
        "catalog_status": getattr(app.state, "catalog_status", "loading"),
        "players": len(catalog) if catalog is not None else 0
    }


@app.get("/", tags=["root"])
async def root():
    """Root endpoint with API information."""
    return {
        "message": "Welcome to Tennis Match Predictor API",
        "version": settings.api_version,
        "docs_url": "/docs",
        "health_check": "/health"
    }


# Include routers
app.include_router(predictor_router)


# For development server
if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower()
    )
