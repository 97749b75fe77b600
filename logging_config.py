#!/usr/bin/env python3
"""
Logging Configuration

Sets up logging for the match predictor:
- Terminal output with colors
- File logging that clears on each run
- Child loggers per component (API, Catalog, CLI)
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Union

ROOT_LOGGER_NAME = "MatchPredictor"
DEFAULT_FILE_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"


class ColoredFormatter(logging.Formatter):
    """Custom formatter with colors for terminal output"""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
    }
    RESET = '\033[0m'

    def format(self, record):
        # Copy the record so other handlers keep the plain level name
        log_record = logging.makeLogRecord(record.__dict__)
        levelname = log_record.levelname
        if levelname in self.COLORS:
            log_record.levelname = f"{self.COLORS[levelname]}{levelname}{self.RESET}"

        return super().format(log_record)


def setup_logging(
    log_file: str = "logs/match_predictor.log",
    level: Union[int, str] = logging.INFO,
    clear_on_start: bool = True,
    file_format: str = DEFAULT_FILE_FORMAT
) -> logging.Logger:
    """
    Setup terminal and file logging

    Args:
        log_file: Path to log file (will be created/cleared)
        level: Logging level, as a number or a name such as "DEBUG"
        clear_on_start: Clear log file on startup
        file_format: Record format for the log file

    Returns:
        Main logger instance
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    if clear_on_start and log_path.exists():
        log_path.unlink()

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    logger.handlers = []

    # ====================
    # TERMINAL HANDLER (with colors)
    # ====================
    terminal_handler = logging.StreamHandler(sys.stdout)
    terminal_handler.setLevel(level)
    terminal_handler.setFormatter(ColoredFormatter('%(levelname)s | %(message)s'))
    logger.addHandler(terminal_handler)

    # ====================
    # FILE HANDLER (detailed)
    # ====================
    file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)  # File gets everything
    file_handler.setFormatter(logging.Formatter(
        file_format,
        datefmt='%Y-%m-%d %H:%M:%S'
    ))
    logger.addHandler(file_handler)

    # app.* modules log through logging.getLogger(__name__)
    app_logger = logging.getLogger("app")
    app_logger.setLevel(level)
    app_logger.handlers = [terminal_handler, file_handler]
    app_logger.propagate = False

    logger.info("=" * 80)
    logger.info(f"🎾 TENNIS MATCH PREDICTOR - {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")
    logger.info("=" * 80)
    logger.info(f"📝 Logging to: {log_file}")
    logger.info(f"📊 Log level: {logging.getLevelName(level)}")
    if clear_on_start:
        logger.info("🧹 Log file cleared on startup")
    logger.info("=" * 80)

    return logger


def get_component_logger(component_name: str, parent_logger: logging.Logger = None) -> logging.Logger:
    """
    Get a logger for a specific component

    Args:
        component_name: Name of the component (e.g., 'API', 'CLI')
        parent_logger: Parent logger to inherit from

    Returns:
        Component-specific logger
    """
    if parent_logger:
        logger_name = f"{parent_logger.name}.{component_name}"
    else:
        logger_name = f"{ROOT_LOGGER_NAME}.{component_name}"

    logger = logging.getLogger(logger_name)
    if parent_logger:
        logger.setLevel(parent_logger.level)

    return logger


def log_match_info(logger: logging.Logger, player1: str, player2: str, category: str = None):
    """Log formatted match information"""
    logger.info("")
    logger.info(f"🎾 {player1} vs {player2}")
    if category:
        logger.info(f"   📍 Surface: {category}")
