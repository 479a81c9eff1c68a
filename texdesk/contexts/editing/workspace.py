"""
Editor Workspace

The editing surface behind the resume editor: a LaTeX source buffer whose
preview is refreshed on every change, plus save/load/reset and export.

The preview path is synchronous and never waits on the engine; PDF export goes
through the workspace's CompilationSession and never blocks editing.
"""

import os
from collections import OrderedDict
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from texdesk.contexts.editing.defaults import DEFAULT_TEMPLATE
from texdesk.contexts.editing.logger import _log_debug, _log_info, _log_warning
from texdesk.contexts.preview.transformer import PreviewTransformer
from texdesk.contexts.rendering.engine import EngineFactory, subprocess_engine_factory
from texdesk.contexts.rendering.session import CompilationSession, CompilationStatus
from texdesk.utils.event_logging import TelemetrySink, log_event

load_dotenv()
WORKSPACE_STORAGE_PATH = Path(
    os.getenv("WORKSPACE_STORAGE_PATH", "outs/workspace/latex-resume.tex")
)

# Distinct sources kept in the preview cache (undo/redo hits these)
PREVIEW_CACHE_SIZE = 32


class EditorWorkspace:
    """
    Source buffer, live preview and export for one editor instance.

    Args:
        engine_factory: Engine factory for PDF export (default: local pdflatex)
        storage_path: Where save() keeps the source (default: WORKSPACE_STORAGE_PATH)
        transformer: Preview transformer (default: standard resume rules)
        telemetry: Telemetry sink passed to the compilation session
        restore_saved: Start from the saved copy if one exists (default: True)

    Example:
        workspace = EditorWorkspace()
        workspace.set_source(text)
        html = workspace.preview_html

        await workspace.mount()
        status = await workspace.export_pdf(Path("resume.pdf"))
        workspace.close()
    """

    def __init__(
        self,
        engine_factory: Optional[EngineFactory] = None,
        storage_path: Optional[Path] = None,
        transformer: Optional[PreviewTransformer] = None,
        telemetry: Optional[TelemetrySink] = log_event,
        restore_saved: bool = True,
    ):
        self.storage_path = (
            Path(storage_path) if storage_path is not None else WORKSPACE_STORAGE_PATH
        )
        self.transformer = transformer if transformer is not None else PreviewTransformer()
        self._engine_factory = (
            engine_factory if engine_factory is not None else subprocess_engine_factory()
        )
        self._telemetry = telemetry
        self._preview_cache: "OrderedDict[str, str]" = OrderedDict()

        self.session: Optional[CompilationSession] = None
        self.source = ""
        self.preview_html = ""

        if not (restore_saved and self.load_saved()):
            self.set_source(DEFAULT_TEMPLATE)

    # ------------------------------------------------------------------
    # Source buffer and preview
    # ------------------------------------------------------------------

    def set_source(self, source: str) -> str:
        """
        Replace the source and refresh the preview.

        Returns:
            The new preview HTML
        """
        self.source = source
        self.preview_html = self._render_preview(source)
        return self.preview_html

    def _render_preview(self, source: str) -> str:
        cached = self._preview_cache.get(source)
        if cached is not None:
            self._preview_cache.move_to_end(source)
            return cached

        html = self.transformer.transform(source)
        self._preview_cache[source] = html
        if len(self._preview_cache) > PREVIEW_CACHE_SIZE:
            self._preview_cache.popitem(last=False)
        return html

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def save(self) -> Path:
        """Persist the current source to storage_path."""
        self.storage_path.parent.mkdir(parents=True, exist_ok=True)
        self.storage_path.write_text(self.source, encoding="utf-8")
        _log_info(f"Saved source to {self.storage_path}")
        return self.storage_path

    def load_saved(self) -> bool:
        """Restore the saved source. Returns False if nothing is saved."""
        if not self.storage_path.exists():
            return False

        saved = self.storage_path.read_text(encoding="utf-8")
        if not saved:
            return False

        self.set_source(saved)
        _log_debug(f"Restored saved source from {self.storage_path}")
        return True

    def load_file(self, path: Path) -> None:
        """
        Replace the source with the contents of a .tex file.

        Raises:
            FileNotFoundError: If path does not exist
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"TeX file not found: {path}")
        if path.suffix != ".tex":
            _log_warning(f"Loading non-.tex file as LaTeX source: {path.name}")

        self.set_source(path.read_text(encoding="utf-8"))
        _log_info(f"Loaded source from {path}")

    def export_tex(self, path: Path) -> Path:
        """Write the current source to a .tex file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.source, encoding="utf-8")
        return path

    def reset(self) -> None:
        """Restore the default template and forget the saved copy."""
        self.set_source(DEFAULT_TEMPLATE)
        if self.storage_path.exists():
            self.storage_path.unlink()
        _log_info("Workspace reset to default template")

    # ------------------------------------------------------------------
    # PDF export
    # ------------------------------------------------------------------

    async def mount(self) -> CompilationSession:
        """Create the compilation session; engine loading starts immediately."""
        if self.session is None or self.session.closed:
            self.session = CompilationSession(self._engine_factory, telemetry=self._telemetry)
        return self.session

    async def export_pdf(self, output_path: Optional[Path] = None) -> CompilationStatus:
        """
        Compile the current source.

        Args:
            output_path: Also write the PDF here when compilation succeeds

        Returns:
            Session status after the request (READY, ERROR, or unchanged if dropped)

        Raises:
            RuntimeError: If the workspace is not mounted
        """
        if self.session is None or self.session.closed:
            raise RuntimeError("Workspace is not mounted")

        await self.session.compile(self.source)

        pdf = self.session.artifact_bytes()
        if output_path is not None and pdf is not None:
            output_path = Path(output_path)
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_bytes(pdf)
            _log_info(f"PDF saved to: {output_path}")

        return self.session.status

    def close(self) -> None:
        """Tear down the compilation session."""
        if self.session is not None:
            self.session.close()
