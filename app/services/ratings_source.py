"""
Ratings Source
==============

Reads the player ratings CSV from disk or over HTTP and hands the records to
the catalog. This is the only blocking step of the predictor; the async
wrapper runs it in an executor so the API stays responsive while loading.

load_catalog_strict() and load_catalog_async() raise on a bad source so the
caller can report the failure; load_catalog_from_settings() falls back to an
empty catalog.
"""

import asyncio
import logging
from functools import partial
from pathlib import Path
from typing import List

from curl_cffi import requests as curl_requests

from ..core.config import Settings
from ..core.exceptions import RatingsSourceError
from .rating_catalog import RatingCatalog, load_catalog

logger = logging.getLogger(__name__)


def read_rating_rows(path: str) -> List[str]:
    """Read ratings records from a local CSV file."""
    csv_path = Path(path)
    if not csv_path.exists():
        raise RatingsSourceError(f"Ratings file not found: {csv_path}")

    try:
        text = csv_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise RatingsSourceError(f"Failed to read {csv_path}: {e}")

    logger.info(f"📄 Read ratings from {csv_path}")
    return text.splitlines()


def fetch_rating_rows(url: str, timeout: int = 30) -> List[str]:
    """Fetch ratings records from a URL."""
    try:
        response = curl_requests.get(url, impersonate="chrome120", timeout=timeout)
        response.raise_for_status()
    except Exception as e:
        raise RatingsSourceError(f"Failed to fetch ratings from {url}: {e}")

    logger.info(f"🌐 Fetched ratings from {url}")
    return response.text.splitlines()


def load_rating_rows(settings: Settings) -> List[str]:
    """Records from the configured source (URL first, then local file)."""
    if settings.ratings_url:
        return fetch_rating_rows(settings.ratings_url, settings.ratings_timeout)
    return read_rating_rows(settings.ratings_csv_path)


def load_catalog_from_settings(settings: Settings) -> RatingCatalog:
    """
    Build the catalog from the configured source.

    Source and parse failures are logged once and produce an empty catalog.
    """
    try:
        rows = load_rating_rows(settings)
    except RatingsSourceError as e:
        logger.error(f"❌ {e}")
        return RatingCatalog.empty(settings.rating_categories)

    return load_catalog(rows, settings.rating_categories)


def load_catalog_strict(settings: Settings) -> RatingCatalog:
    """
    Build the catalog from the configured source, without a fallback.

    Raises:
        RatingsSourceError: The file or URL could not be read
        ParseError: A record is malformed
    """
    return RatingCatalog.load(load_rating_rows(settings), settings.rating_categories)


async def load_catalog_async(settings: Settings) -> RatingCatalog:
    """Async wrapper for load_catalog_strict; errors reach the awaiting caller."""
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, partial(load_catalog_strict, settings))
