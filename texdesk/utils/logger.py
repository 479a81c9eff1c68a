"""
Shared loguru setup for texdesk contexts.

Every CLI run gets its own directory under LOGS_PATH (e.g.,
outs/logs/render_20251114_123456/render.log) whose header records where the
run came from and which texdesk build produced it. Context-specific wrappers
with [render]/[preview]/[editor] prefixes live in contexts/{context}/logger.py.
"""

import os
import sys
from pathlib import Path
from typing import Dict, Optional

from dotenv import load_dotenv
from loguru import logger

from texdesk import __version__
from texdesk.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))

# Console colors; WARNING is yellow so compiler warnings stand out from progress lines
LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"


def run_log_dir(context_name: str, logs_path: Optional[Path] = None) -> Path:
    """
    Directory for one run of a context, timestamped so runs never share a file.

    Args:
        context_name: Context identifier ("render", "preview", "editor")
        logs_path: Root directory (default: LOGS_PATH from the environment)
    """
    return Path(logs_path or LOGS_PATH) / f"{context_name}_{now()}"


def setup_logger(
    context_name: str,
    log_dir: Optional[Path] = None,
    extra_provenance: Optional[Dict[str, str]] = None,
    level_colors: Optional[Dict[str, str]] = None,
    console: bool = True,
) -> Path:
    """
    Configure loguru for a context with provenance tracking.

    Sets up a DEBUG file sink in the run directory and, unless disabled, an INFO
    console sink. Replaces any sinks configured before, so the latest call wins.

    Args:
        context_name: Context identifier (e.g., "render", "preview", "editor")
        log_dir: Directory for this run (default: run_log_dir(context_name))
        extra_provenance: Additional key-value pairs for provenance header
        level_colors: Override default level colors (e.g., {"INFO": "<cyan>"})
        console: Also log INFO and above to stdout (default: True)

    Returns:
        Path to log file

    Example:
        log_file = setup_logger(
            context_name="render",
            extra_provenance={"LaTeX compiler": "pdflatex"},
        )
    """
    log_dir = Path(log_dir) if log_dir is not None else run_log_dir(context_name)
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()

    colors = {**LEVEL_COLORS, **(level_colors or {})}
    for level_name, color in colors.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG")
    if console:
        logger.add(sys.stdout, format=CONSOLE_FORMAT, level="INFO", colorize=True)

    log_provenance({"Context": context_name, **(extra_provenance or {})})

    return log_file


def log_provenance(extra_context: Optional[Dict[str, str]] = None) -> None:
    """
    Log the run header: script, command, working directory, Python and texdesk
    versions, plus any additional context provided.
    """
    logger.info("=" * 80)
    logger.info(f"Script: {sys.argv[0]}")
    logger.info(f"Command: {' '.join(sys.argv)}")
    logger.info(f"Working directory: {Path.cwd()}")
    logger.info(f"Python: {sys.version.split()[0]}")
    logger.info(f"texdesk: {__version__}")

    if extra_context:
        for key, value in extra_context.items():
            logger.info(f"{key}: {value}")

    logger.info("=" * 80)
