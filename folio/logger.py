"""
Folio logger.

Provides the loguru configuration for the service and wrapper functions with
an automatic [folio] prefix. Modules log through the wrappers, not through
loguru directly.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

CONTEXT_PREFIX = "[folio]"

LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}


def setup_logger(level: str = "INFO", log_file: Optional[Path] = None) -> None:
    """
    Configure loguru for the service.

    Console output at the requested level, plus an optional file sink that
    captures everything at DEBUG.

    Args:
        level: Console log level (e.g. "INFO", "DEBUG")
        log_file: Optional path of a log file

    Example:
        from folio.logger import setup_logger, _log_info

        setup_logger("DEBUG")
        _log_info("Service started")
    """
    logger.remove()

    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    logger.add(
        sys.stderr,
        format="{time:YYYY-MM-DD HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>",
        level=level.upper(),
        colorize=True,
    )

    if log_file is not None:
        log_file.parent.mkdir(exist_ok=True, parents=True)
        logger.add(
            log_file, format="{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}", level="DEBUG"
        )


def _log_debug(message: str) -> None:
    """Log debug message with [folio] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def _log_info(message: str) -> None:
    """Log info message with [folio] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [folio] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [folio] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")
