"""
Preview context logger.

Provides logging interface for preview context with automatic [preview] prefix.
All preview modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from texdesk.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[preview]"


def setup_preview_logger(log_dir: Optional[Path] = None, console: bool = True) -> Path:
    """
    Setup logger for preview context.

    Args:
        log_dir: Directory for this preview run (default: a new preview_<timestamp> dir)
        console: Also log to stdout

    Returns:
        Path to log file
    """
    return _setup_logger(context_name="preview", log_dir=log_dir, console=console)


def _log_info(message: str) -> None:
    """Log info message with [preview] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [preview] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")
