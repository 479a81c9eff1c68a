"""Unit tests for EditorWorkspace."""

import asyncio

import pytest

from texdesk.contexts.editing.defaults import DEFAULT_TEMPLATE
from texdesk.contexts.editing.workspace import PREVIEW_CACHE_SIZE, EditorWorkspace
from texdesk.contexts.rendering.engine import EngineResult
from texdesk.contexts.rendering.session import CompilationStatus


class StaticEngine:
    """Engine that always returns the same result."""

    def __init__(self, result):
        self.result = result
        self.sources = []

    async def load_engine(self):
        pass

    def write_file(self, name, contents):
        self.sources.append(contents)

    def set_engine_main_file(self, name):
        pass

    async def compile_latex(self):
        return self.result


def make_workspace(tmp_path, engine=None, **kwargs):
    factory = None
    if engine is not None:

        async def factory():
            return engine

    return EditorWorkspace(
        engine_factory=factory,
        storage_path=tmp_path / "saved.tex",
        telemetry=None,
        **kwargs,
    )


@pytest.mark.unit
def test_starts_with_default_template(tmp_path):
    workspace = make_workspace(tmp_path)

    assert workspace.source == DEFAULT_TEMPLATE
    assert "EXPERIENCE" in workspace.preview_html
    assert "\\documentclass" not in workspace.preview_html


@pytest.mark.unit
def test_set_source_refreshes_preview(tmp_path):
    workspace = make_workspace(tmp_path)

    html = workspace.set_source(r"\textbf{Hello}")

    assert html == "<strong>Hello</strong>"
    assert workspace.preview_html == html


@pytest.mark.unit
def test_preview_cache_is_bounded(tmp_path):
    workspace = make_workspace(tmp_path)

    for i in range(PREVIEW_CACHE_SIZE + 10):
        workspace.set_source(f"line {i}")

    assert len(workspace._preview_cache) == PREVIEW_CACHE_SIZE
    assert workspace.preview_html == f"line {PREVIEW_CACHE_SIZE + 9}"


@pytest.mark.unit
def test_save_and_restore(tmp_path):
    workspace = make_workspace(tmp_path)
    workspace.set_source(r"\textit{Saved}")
    workspace.save()

    restored = make_workspace(tmp_path)

    assert restored.source == r"\textit{Saved}"
    assert restored.preview_html == "<em>Saved</em>"


@pytest.mark.unit
def test_restore_can_be_disabled(tmp_path):
    workspace = make_workspace(tmp_path)
    workspace.set_source("saved")
    workspace.save()

    fresh = make_workspace(tmp_path, restore_saved=False)

    assert fresh.source == DEFAULT_TEMPLATE


@pytest.mark.unit
def test_reset_forgets_saved_copy(tmp_path):
    workspace = make_workspace(tmp_path)
    workspace.set_source("changed")
    workspace.save()

    workspace.reset()

    assert workspace.source == DEFAULT_TEMPLATE
    assert not (tmp_path / "saved.tex").exists()


@pytest.mark.unit
def test_load_file_and_export_tex(tmp_path):
    tex_file = tmp_path / "resume.tex"
    tex_file.write_text(r"\textbf{From file}", encoding="utf-8")
    workspace = make_workspace(tmp_path)

    workspace.load_file(tex_file)
    exported = workspace.export_tex(tmp_path / "out" / "copy.tex")

    assert workspace.preview_html == "<strong>From file</strong>"
    assert exported.read_text(encoding="utf-8") == r"\textbf{From file}"


@pytest.mark.unit
def test_load_missing_file(tmp_path):
    workspace = make_workspace(tmp_path)

    with pytest.raises(FileNotFoundError):
        workspace.load_file(tmp_path / "missing.tex")


@pytest.mark.unit
def test_export_pdf_requires_mount(tmp_path):
    workspace = make_workspace(tmp_path)

    with pytest.raises(RuntimeError, match="not mounted"):
        asyncio.run(workspace.export_pdf())


@pytest.mark.unit
def test_export_pdf_writes_artifact(tmp_path):
    engine = StaticEngine(EngineResult(pdf=b"%PDF-1.4 resume", log=""))
    workspace = make_workspace(tmp_path, engine=engine)
    output = tmp_path / "out" / "resume.pdf"

    async def scenario():
        session = await workspace.mount()
        await session.wait_until_loaded()
        status = await workspace.export_pdf(output)
        workspace.close()
        return status

    status = asyncio.run(scenario())

    assert status is CompilationStatus.READY
    assert output.read_bytes() == b"%PDF-1.4 resume"
    assert engine.sources == [DEFAULT_TEMPLATE]
    assert workspace.session.closed


@pytest.mark.unit
def test_export_pdf_failure_writes_nothing(tmp_path):
    engine = StaticEngine(EngineResult(pdf=None, log="! Emergency stop."))
    workspace = make_workspace(tmp_path, engine=engine)
    output = tmp_path / "resume.pdf"

    async def scenario():
        session = await workspace.mount()
        await session.wait_until_loaded()
        return await workspace.export_pdf(output)

    status = asyncio.run(scenario())

    assert status is CompilationStatus.ERROR
    assert workspace.session.diagnostic_log == "! Emergency stop."
    assert not output.exists()
