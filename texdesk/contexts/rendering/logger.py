"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from loguru import logger

from texdesk.utils.logger import setup_logger as _setup_logger

load_dotenv()

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(log_dir: Optional[Path] = None, console: bool = True) -> Path:
    """
    Setup logger for rendering context.

    Configures loguru with provenance tracking and rendering-specific context.

    Args:
        log_dir: Directory for this rendering run (default: a new render_<timestamp> dir)
        console: Also log to stdout

    Returns:
        Path to log file

    Example:
        from texdesk.contexts.rendering.logger import setup_rendering_logger, _log_info

        log_file = setup_rendering_logger()
        _log_info("Starting compilation...")
    """
    return _setup_logger(
        context_name="render",
        log_dir=log_dir,
        extra_provenance={"LaTeX compiler": os.getenv("LATEX_COMPILER", "pdflatex")},
        console=console,
    )


# Wrapper functions with automatic [render] prefix


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_status_transition(old_status: str, new_status: str) -> None:
    """Log a compilation session state change."""
    _log_debug(f"Session status: {old_status} -> {new_status}")


def log_compilation_start(source_length: int, main_file: str) -> None:
    """Log start of compilation with context."""
    _log_info(f"Starting compilation of {main_file}")
    _log_debug(f"  Source length: {source_length} chars")


def log_compilation_result(
    success: bool,
    elapsed_time: float,
    errors: list,
    warnings: list,
    engine_log: str = "",
    verbose: bool = False,
) -> None:
    """
    Log compilation result with diagnostics.

    Args:
        success: Whether a PDF was produced
        elapsed_time: Time taken to compile
        errors: Errors parsed from the engine log
        warnings: Warnings parsed from the engine log
        engine_log: Raw engine log (dumped in verbose mode or on failure)
        verbose: Show detailed warnings/errors (default: False)
    """
    if success:
        _log_success(f"Compilation succeeded: {len(warnings)} warnings ({elapsed_time:.2f}s)")
    else:
        _log_error(f"Compilation failed: {len(errors)} errors ({elapsed_time:.2f}s)")
        error_limit = 10 if verbose else 5
        for i, err in enumerate(errors[:error_limit], 1):
            _log_error(f"  Error {i}: {err}")
        if len(errors) > error_limit:
            _log_error(f"  ... and {len(errors) - error_limit} more errors")

    if warnings:
        _log_warning(f"{len(warnings)} warnings detected")
        warning_limit = 10 if verbose else 3
        for i, warn in enumerate(warnings[:warning_limit], 1):
            _log_debug(f"  Warning {i}: {warn}")
        if len(warnings) > warning_limit:
            _log_debug(f"  ... and {len(warnings) - warning_limit} more warnings")

    # Raw output bypasses the format template so multi-line logs stay readable
    if engine_log and (verbose or not success):
        logger.opt(raw=True).debug(f"\n{'=' * 80}\nENGINE LOG:\n{'=' * 80}\n{engine_log}\n")
