"""
Logging utilities for the Daily Puzzle Stats project.

Every module logs through ``logging.getLogger(__name__)``, so configuring the
``src`` logger here covers the loader, the normalizer, the layout code and the
renderers at once. Console output stays at warnings (dropped rows, calendar
month clipping, load failures); the full trace goes to a file under ``logs/``.
"""
import logging
import os
import sys

from config.settings import LOG_LEVEL, LOG_FORMAT
from config.paths import LOGS_DIR

PACKAGE_LOGGER = "src"

# One log file per entry point
LOG_FILES = {
    "build": "puzzle_stats.log",
    "generate": "generate_test_data.log",
}

def setup_logging(log_to_file: bool = True, log_level: str = None, log_type: str = "build",
                  logs_dir: str = LOGS_DIR) -> logging.Logger:
    """
    Configure the package logger for a pipeline or generator run.

    Args:
        log_to_file: Whether to also write a log file
        log_level: Log level (defaults to settings.LOG_LEVEL / PUZZLE_STATS_LOG_LEVEL)
        log_type: Entry point name, one of LOG_FILES ('build' or 'generate')
        logs_dir: Directory for the log file

    Returns:
        The configured ``src`` logger
    """
    if log_level is None:
        log_level = LOG_LEVEL

    numeric_level = getattr(logging, log_level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {log_level}")
    if log_type not in LOG_FILES:
        raise ValueError(f"Unknown log type: {log_type}")

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(numeric_level)

    # Repeated runs in one process (tests, --show sessions) must not stack handlers
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(max(numeric_level, logging.WARNING))
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_to_file:
        os.makedirs(logs_dir, exist_ok=True)
        # Participant and game names are free text
        file_handler = logging.FileHandler(os.path.join(logs_dir, LOG_FILES[log_type]), encoding="utf-8")
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False

    return logger
