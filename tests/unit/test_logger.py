"""Unit tests for shared logger setup."""

import re

import pytest
from loguru import logger

from texdesk import __version__
from texdesk.contexts.rendering.logger import _log_info, setup_rendering_logger
from texdesk.utils.logger import run_log_dir, setup_logger


@pytest.fixture(autouse=True)
def reset_loguru():
    yield
    logger.remove()


@pytest.mark.unit
def test_run_log_dir_is_timestamped(tmp_path):
    log_dir = run_log_dir("render", logs_path=tmp_path)

    assert log_dir.parent == tmp_path
    assert re.fullmatch(r"render_\d{8}_\d{6}", log_dir.name)


@pytest.mark.unit
def test_setup_logger_writes_provenance_header(tmp_path):
    log_file = setup_logger(
        "preview",
        log_dir=tmp_path / "run",
        extra_provenance={"Preset": "a4"},
        console=False,
    )

    logger.remove()  # close the file sink
    content = log_file.read_text(encoding="utf-8")

    assert log_file == tmp_path / "run" / "preview.log"
    assert f"texdesk: {__version__}" in content
    assert "Context: preview" in content
    assert "Preset: a4" in content


@pytest.mark.unit
def test_rendering_logger_prefixes_messages(tmp_path):
    log_file = setup_rendering_logger(tmp_path, console=False)

    _log_info("Starting compilation")

    logger.remove()  # close the file sink
    content = log_file.read_text(encoding="utf-8")
    assert "LaTeX compiler:" in content
    assert "[render] Starting compilation" in content
