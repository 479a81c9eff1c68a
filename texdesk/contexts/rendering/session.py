"""
Compilation Session

Owns one typesetting engine for one editor and turns compile requests into a
PDF artifact or a diagnostic log.

State machine:

    LOADING --engine ready--> IDLE --compile()--> COMPILING --pdf--> READY
       |                                              |               |
       +--bootstrap failed--> ERROR <--no pdf/raised--+               |
                                |                                     |
                                +-------------compile()---------------+--> COMPILING

    any state --close()--> CLOSED (terminal)

At most one compile runs at a time; requests made while COMPILING, before the
engine has loaded, or after close() are dropped. Failures never propagate to the
caller: they land in `status` and `diagnostic_log`. Cancelling the task awaiting
compile() leaves the session in ERROR, so the next request is accepted.
"""

import asyncio
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Set, Tuple

from texdesk.contexts.rendering.artifacts import ArtifactStore
from texdesk.contexts.rendering.engine import EngineFactory, EngineResult, LatexEngine
from texdesk.contexts.rendering.log_parser import parse_latex_log
from texdesk.contexts.rendering.logger import (
    _log_debug,
    _log_error,
    _log_info,
    _log_warning,
    log_compilation_result,
    log_compilation_start,
    log_status_transition,
)
from texdesk.utils.event_logging import TelemetrySink, log_event
from texdesk.utils.pdf_processing import page_count

MAIN_FILE = "main.tex"
PDF_MEDIA_TYPE = "application/pdf"
COMPILATION_EVENT = "latex_compilation_completed"

SCRIPT_LOAD_FAILED = "Failed to load LaTeX engine script"
ENGINE_LOAD_FAILED = "Failed to load LaTeX engine"
COMPILATION_FAILED = "Compilation failed"
COMPILATION_CANCELLED = "Compilation cancelled"


class CompilationStatus(str, Enum):
    LOADING = "loading"
    IDLE = "idle"
    COMPILING = "compiling"
    READY = "ready"
    ERROR = "error"
    CLOSED = "closed"


@dataclass(frozen=True)
class Artifact:
    """
    A compiled PDF held by the session.

    Attributes:
        url: Revocable handle, resolvable through the session's ArtifactStore
        size_bytes: PDF size
        media_type: Always application/pdf for LaTeX output
        page_count: Number of pages (None if the PDF could not be read)
        warnings: Warnings parsed from the engine log
    """

    url: str
    size_bytes: int
    media_type: str = PDF_MEDIA_TYPE
    page_count: Optional[int] = None
    warnings: Tuple[str, ...] = ()


@dataclass(frozen=True)
class SessionSnapshot:
    """Point-in-time view of a session, delivered to observers."""

    status: CompilationStatus
    artifact: Optional[Artifact] = None
    diagnostic_log: str = ""


Observer = Callable[[SessionSnapshot], None]


def _close_engine(engine: Any) -> None:
    close = getattr(engine, "close", None)
    if callable(close):
        close()


def _describe(error: BaseException) -> str:
    return str(error) or type(error).__name__


def _coerce_result(result: Any) -> EngineResult:
    """Normalize an engine return value (EngineResult or a {pdf, log} mapping)."""
    if isinstance(result, Mapping):
        result = EngineResult(pdf=result.get("pdf"), log=result.get("log") or "")
    if not isinstance(result, EngineResult):
        raise TypeError(f"Engine returned {type(result).__name__}, expected EngineResult")

    pdf, log = result.pdf, result.log or ""
    if pdf is not None and not isinstance(pdf, (bytes, bytearray)):
        raise TypeError(f"Engine returned pdf of type {type(pdf).__name__}, expected bytes")
    if not isinstance(log, str):
        raise TypeError(f"Engine returned log of type {type(log).__name__}, expected str")
    return EngineResult(pdf=bytes(pdf) if pdf is not None else None, log=log)


class CompilationSession:
    """
    Engine lifecycle and compile orchestration for a single editor.

    Must be created inside a running event loop: engine loading starts
    immediately as a background task.

    Args:
        engine_factory: Async callable returning an unloaded engine
        telemetry: Sink receiving one event per compile attempt (None disables)
        artifact_store: Store for PDF handles (default: a private ArtifactStore)
        verbose: Log parsed warnings and the full engine log on success too

    Example:
        session = CompilationSession(subprocess_engine_factory())
        await session.wait_until_loaded()
        await session.compile(source)
        if session.status is CompilationStatus.READY:
            pdf = session.artifact_bytes()
        session.close()
    """

    def __init__(
        self,
        engine_factory: EngineFactory,
        telemetry: Optional[TelemetrySink] = log_event,
        artifact_store: Optional[ArtifactStore] = None,
        verbose: bool = False,
    ):
        loop = asyncio.get_running_loop()

        self._engine_factory = engine_factory
        self._telemetry = telemetry
        self._artifacts = artifact_store if artifact_store is not None else ArtifactStore()
        self.verbose = verbose

        self._engine: Optional[LatexEngine] = None
        self._status = CompilationStatus.LOADING
        self._artifact: Optional[Artifact] = None
        self._diagnostic_log = ""
        self._observers: List[Observer] = []
        self._closed = False
        self._pending_events: Set[asyncio.Future] = set()

        self._load_task = loop.create_task(self._bootstrap())

    async def __aenter__(self) -> "CompilationSession":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Observable state
    # ------------------------------------------------------------------

    @property
    def status(self) -> CompilationStatus:
        return self._status

    @property
    def artifact(self) -> Optional[Artifact]:
        return self._artifact

    @property
    def diagnostic_log(self) -> str:
        return self._diagnostic_log

    @property
    def engine_loaded(self) -> bool:
        return self._engine is not None

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def live_artifact_count(self) -> int:
        return self._artifacts.live_count

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            status=self._status,
            artifact=self._artifact,
            diagnostic_log=self._diagnostic_log,
        )

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """
        Register a callback invoked with a SessionSnapshot on every transition.

        Returns:
            Function that removes the observer
        """
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def artifact_bytes(self) -> Optional[bytes]:
        """PDF bytes of the current artifact, or None outside READY."""
        if self._artifact is None:
            return None
        return self._artifacts.resolve(self._artifact.url)

    def _transition(self, new_status: CompilationStatus) -> None:
        old_status = self._status
        self._status = new_status
        log_status_transition(old_status.value, new_status.value)

        snapshot = self.snapshot()
        for observer in list(self._observers):
            try:
                observer(snapshot)
            except Exception as e:
                _log_warning(f"Session observer raised {type(e).__name__}: {e}")

    # ------------------------------------------------------------------
    # Engine bootstrap
    # ------------------------------------------------------------------

    async def _bootstrap(self) -> None:
        try:
            engine = await self._engine_factory()
        except Exception as e:
            self._fail_bootstrap(SCRIPT_LOAD_FAILED, e)
            return

        try:
            await engine.load_engine()
        except Exception as e:
            _close_engine(engine)
            self._fail_bootstrap(ENGINE_LOAD_FAILED, e)
            return

        if self._closed:
            # Editor went away while the engine was loading
            _close_engine(engine)
            return

        self._engine = engine
        _log_info("LaTeX engine loaded")
        self._transition(CompilationStatus.IDLE)

    def _fail_bootstrap(self, message: str, error: BaseException) -> None:
        if self._closed:
            return
        self._diagnostic_log = f"{message}: {_describe(error)}"
        _log_error(self._diagnostic_log)
        self._transition(CompilationStatus.ERROR)

    async def wait_until_loaded(self) -> bool:
        """Wait for the bootstrap to finish. Returns True if the engine is usable."""
        await self._load_task
        return self.engine_loaded

    # ------------------------------------------------------------------
    # Compilation
    # ------------------------------------------------------------------

    def _discard_artifact(self) -> None:
        if self._artifact is not None:
            self._artifacts.revoke(self._artifact.url)
            self._artifact = None

    async def compile(self, source: str) -> None:
        """
        Compile LaTeX source to PDF.

        No-op if the engine has not loaded, a compile is already running, or the
        session is closed. Ends in READY with an artifact or ERROR with a log.
        If the awaiting task is cancelled, the session moves to ERROR before the
        cancellation propagates.

        Args:
            source: Complete LaTeX document, written to the engine as main.tex
        """
        if self._closed or self._engine is None:
            _log_debug("Compile request ignored: engine not loaded")
            return
        if self._status is CompilationStatus.COMPILING:
            _log_debug("Compile request ignored: compilation already in progress")
            return

        engine = self._engine
        self._diagnostic_log = ""
        self._discard_artifact()
        self._transition(CompilationStatus.COMPILING)
        log_compilation_start(len(source), MAIN_FILE)

        start_time = time.monotonic()
        try:
            pdf, engine_log, error = await self._run_engine(engine, source)
            elapsed_time = time.monotonic() - start_time
            self._finish_compile(source, pdf, engine_log, error, elapsed_time)
        finally:
            if self._status is CompilationStatus.COMPILING and not self._closed:
                # Cancelled (or interrupted) while in flight
                elapsed_time = time.monotonic() - start_time
                self._emit_compilation_event(
                    False, len(source), elapsed_time, COMPILATION_CANCELLED
                )
                _log_warning(f"{COMPILATION_CANCELLED} after {elapsed_time:.2f}s")
                self._diagnostic_log = COMPILATION_CANCELLED
                self._transition(CompilationStatus.ERROR)

    async def _run_engine(
        self, engine: LatexEngine, source: str
    ) -> Tuple[Optional[bytes], str, Optional[Exception]]:
        try:
            engine.write_file(MAIN_FILE, source)
            engine.set_engine_main_file(MAIN_FILE)
            result = _coerce_result(await engine.compile_latex())
        except Exception as e:
            return None, "", e
        return result.pdf, result.log, None

    def _finish_compile(
        self,
        source: str,
        pdf: Optional[bytes],
        engine_log: str,
        error: Optional[Exception],
        elapsed_time: float,
    ) -> None:
        success = error is None and bool(pdf)
        diagnostic = ""
        if not success:
            diagnostic = engine_log or (error and _describe(error)) or COMPILATION_FAILED

        self._emit_compilation_event(success, len(source), elapsed_time, diagnostic)

        if self._closed:
            _log_debug("Session closed during compilation, discarding result")
            return

        errors, warnings = parse_latex_log(engine_log)
        if error is not None and not errors:
            errors = [_describe(error)]
        log_compilation_result(
            success=success,
            elapsed_time=elapsed_time,
            errors=errors,
            warnings=warnings,
            engine_log=engine_log,
            verbose=self.verbose,
        )

        if success:
            url = self._artifacts.create(pdf, PDF_MEDIA_TYPE)
            self._artifact = Artifact(
                url=url,
                size_bytes=len(pdf),
                page_count=page_count(pdf),
                warnings=tuple(warnings),
            )
            self._transition(CompilationStatus.READY)
        else:
            self._diagnostic_log = diagnostic
            self._transition(CompilationStatus.ERROR)

    def _emit_compilation_event(
        self, success: bool, source_length: int, elapsed_time: float, diagnostic: str
    ) -> None:
        if self._telemetry is None:
            return

        attributes: Dict[str, Any] = {
            "success": success,
            "source_length": source_length,
            "duration_s": round(elapsed_time, 3),
        }
        if not success:
            attributes["error"] = diagnostic

        # Sinks may do file I/O; run them off the event loop
        future = asyncio.get_running_loop().run_in_executor(
            None, self._deliver_event, COMPILATION_EVENT, attributes
        )
        self._pending_events.add(future)
        future.add_done_callback(self._pending_events.discard)

    def _deliver_event(self, event_name: str, attributes: Mapping[str, Any]) -> None:
        try:
            self._telemetry(event_name, attributes)
        except Exception as e:
            _log_debug(f"Telemetry sink failed for {event_name}: {e}")

    async def flush_telemetry(self) -> None:
        """Wait until every telemetry event emitted so far has been delivered."""
        if self._pending_events:
            await asyncio.gather(*list(self._pending_events))

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------

    def close(self) -> None:
        """
        Release the engine, revoke any outstanding artifact and move to CLOSED.

        An in-flight compile is not aborted; its result is discarded when it
        resolves. Safe to call more than once.
        """
        if self._closed:
            return
        self._closed = True

        revoked = self._artifacts.revoke_all()
        self._artifact = None
        self._diagnostic_log = ""

        engine, self._engine = self._engine, None
        if engine is not None:
            _close_engine(engine)

        self._transition(CompilationStatus.CLOSED)
        self._observers.clear()
        _log_debug(f"Session closed ({revoked} artifact handles revoked)")
