#!/usr/bin/env python3
"""
Tennis Match Predictor - Command Line Runner

Loads the player Elo ratings configured in app/core/config.py (or .env) and:
1. Lists the rating categories
2. Searches players by name
3. Predicts a match between two players on a surface

Usage:
    python3 main.py categories
    python3 main.py search <query> [limit]
    python3 main.py predict "<player 1>" "<player 2>" [category]
"""

import sys
from typing import List

from app.core.config import settings
from app.core.exceptions import InvalidCategory
from app.services.ratings_source import load_catalog_from_settings
from app.services.rating_catalog import RatingCatalog
from app.services.selection_state import SelectionState, Slot
from logging_config import get_component_logger, log_match_info, setup_logging

logger = get_component_logger("CLI")


def show_help():
    """Show usage"""
    print("🎾 Tennis Match Predictor")
    print("=" * 60)
    print("Commands:")
    print("  categories                          List rating categories")
    print("  search <query> [limit]              Search players by name")
    print("  predict <player1> <player2> [cat]   Win probability and odds")
    print()
    print(f"Ratings source: {settings.ratings_url or settings.ratings_csv_path}")


def show_categories(catalog: RatingCatalog):
    print("📊 Rating categories:")
    for category in catalog.categories:
        print(f"   - {category}")


def show_search(catalog: RatingCatalog, query: str, limit: int):
    matches = catalog.search(query, limit)
    if not matches:
        print(f"❌ No players matching '{query}'")
        return

    overall = catalog.default_category
    print(f"🔍 {len(matches)} player(s) matching '{query}':")
    for entity in matches:
        print(f"   {entity.name:30s} | Elo: {entity.rating(overall):.0f}")


def show_prediction(catalog: RatingCatalog, names: List[str], category: str) -> bool:
    state = SelectionState(catalog, search_limit=settings.search_limit)
    try:
        state.set_category(category)
    except InvalidCategory as e:
        print(f"❌ {e}")
        return False

    for slot, name in zip((Slot.FIRST, Slot.SECOND), names):
        entity = catalog.get(name)
        if entity is None:
            print(f"❌ Player not found: {name}")
            suggestions = catalog.search(name, 5)
            if suggestions:
                print(f"   Did you mean: {', '.join(e.name for e in suggestions)}")
            return False
        state.select(slot, entity)

    state.reveal()
    prediction = state.prediction()
    result = prediction.result

    log_match_info(logger, prediction.player1, prediction.player2, category)
    print("=" * 60)
    print(f"{prediction.player1} vs {prediction.player2} ({category.capitalize()})")
    print("=" * 60)
    print(f"{'Player':<30} {'Elo':>8} {'Win %':>8} {'Odds':>7}")
    print("-" * 60)
    print(f"{prediction.player1:<30} {prediction.player1_rating:>8.1f} "
          f"{result.percent_a:>7.2f}% {result.display_odds_a:>7.2f}")
    print(f"{prediction.player2:<30} {prediction.player2_rating:>8.1f} "
          f"{result.percent_b:>7.2f}% {result.display_odds_b:>7.2f}")
    return True


def main() -> int:
    """Main command-line interface"""
    if len(sys.argv) < 2:
        show_help()
        return 0

    command = sys.argv[1].lower()

    if command in ("help", "-h", "--help"):
        show_help()
        return 0

    setup_logging(log_file=settings.log_file, level="WARNING", file_format=settings.log_format)
    catalog = load_catalog_from_settings(settings)
    if catalog.is_empty():
        print("⚠️  No player ratings loaded - check the log for details")

    if command == "categories":
        show_categories(catalog)

    elif command == "search":
        if len(sys.argv) < 3:
            print("❌ Usage: python3 main.py search <query> [limit]")
            return 1
        try:
            limit = int(sys.argv[3]) if len(sys.argv) > 3 else settings.search_limit
        except ValueError:
            print(f"❌ Limit must be a whole number, got '{sys.argv[3]}'")
            print("❌ Usage: python3 main.py search <query> [limit]")
            return 1
        show_search(catalog, sys.argv[2], limit)

    elif command == "predict":
        if len(sys.argv) < 4:
            print("❌ Usage: python3 main.py predict <player1> <player2> [category]")
            return 1
        category = sys.argv[4].lower() if len(sys.argv) > 4 else catalog.default_category
        if not show_prediction(catalog, sys.argv[2:4], category):
            return 1

    else:
        print(f"❌ Unknown command: {command}")
        show_help()
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
