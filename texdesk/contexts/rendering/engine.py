"""
Typesetting Engine Boundary

Defines the capability a CompilationSession drives, and a local implementation
that runs a TeX binary (pdflatex by default) in a private working directory.

The session only relies on this contract:
    await engine.load_engine()
    engine.write_file(name, contents)
    engine.set_engine_main_file(name)
    result = await engine.compile_latex()   # EngineResult(pdf, log)
    engine.close()                          # optional
"""

import asyncio
import os
import shutil
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Awaitable, Callable, List, Optional, Protocol, Union

from dotenv import load_dotenv

from texdesk.contexts.rendering.exceptions import EngineCompileError, EngineError, EngineLoadError
from texdesk.contexts.rendering.log_parser import parse_latex_log
from texdesk.contexts.rendering.logger import _log_debug, _log_warning

load_dotenv()
LATEX_COMPILER = os.getenv("LATEX_COMPILER", "pdflatex")
COMPILE_TIMEOUT_SECONDS = float(os.getenv("LATEX_COMPILE_TIMEOUT_SECONDS", "90"))

# Intermediate files written next to the main file
LATEX_ARTIFACTS = [".aux", ".log", ".out", ".toc"]


@dataclass
class EngineResult:
    """
    Outcome of one engine compile call.

    Attributes:
        pdf: Compiled document bytes (None if nothing usable was produced)
        log: Engine transcript
    """

    pdf: Optional[bytes] = None
    log: str = ""


class LatexEngine(Protocol):
    """Capability exposed by a loadable typesetting engine."""

    async def load_engine(self) -> None: ...

    def write_file(self, name: str, contents: Union[str, bytes]) -> None: ...

    def set_engine_main_file(self, name: str) -> None: ...

    async def compile_latex(self) -> EngineResult: ...


# Produces an engine instance; awaiting it is the "fetch the engine" step
EngineFactory = Callable[[], Awaitable[LatexEngine]]


async def _terminate(proc: asyncio.subprocess.Process) -> None:
    """Kill a compiler process and wait for it to exit."""
    if proc.returncode is None:
        try:
            proc.kill()
        except ProcessLookupError:
            pass
    await proc.wait()


class SubprocessLatexEngine:
    """
    Engine backed by a locally installed TeX binary.

    Files live in a temporary working directory created by load_engine() and
    removed by close().

    Example:
        engine = SubprocessLatexEngine()
        await engine.load_engine()
        engine.write_file("main.tex", source)
        engine.set_engine_main_file("main.tex")
        result = await engine.compile_latex()
        engine.close()
    """

    def __init__(
        self,
        compiler: str = LATEX_COMPILER,
        num_passes: int = 2,
        timeout_s: float = COMPILE_TIMEOUT_SECONDS,
        work_root: Optional[Path] = None,
    ):
        self.compiler = compiler
        self.num_passes = num_passes
        self.timeout_s = timeout_s
        self.work_root = work_root
        self.work_dir: Optional[Path] = None
        self.main_file: Optional[str] = None
        self._compiler_path: Optional[str] = None

    @property
    def name(self) -> str:
        return Path(self.compiler).name

    @property
    def is_loaded(self) -> bool:
        return self.work_dir is not None

    async def load_engine(self) -> None:
        """
        Locate the TeX binary and create the working directory.

        Raises:
            EngineLoadError: If the compiler is not installed
        """
        compiler_path = shutil.which(self.compiler)
        if compiler_path is None:
            raise EngineLoadError(
                f"LaTeX compiler not found on PATH: {self.compiler}", engine_name=self.name
            )

        self._compiler_path = compiler_path
        self.work_dir = Path(tempfile.mkdtemp(prefix="texdesk_", dir=self.work_root))
        _log_debug(f"Engine {self.name} loaded, working directory: {self.work_dir}")

    def _resolve(self, name: str) -> Path:
        if self.work_dir is None:
            raise EngineError("Engine is not loaded", engine_name=self.name)

        path = (self.work_dir / name).resolve()
        if self.work_dir.resolve() not in path.parents:
            raise ValueError(f"File name escapes the engine working directory: {name}")
        return path

    def write_file(self, name: str, contents: Union[str, bytes]) -> None:
        """Write a file into the engine working directory."""
        path = self._resolve(name)
        path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(contents, bytes):
            path.write_bytes(contents)
        else:
            path.write_text(contents, encoding="utf-8")

    def set_engine_main_file(self, name: str) -> None:
        self._resolve(name)
        self.main_file = name

    def _clean_outputs(self, main_path: Path) -> None:
        # Missing PDF afterwards then unambiguously means failure
        for ext in [".pdf"] + LATEX_ARTIFACTS:
            old_file = main_path.with_suffix(ext)
            if old_file.exists():
                old_file.unlink()

    async def _run_pass(self, main_path: Path) -> tuple[int, str]:
        cmd = [
            self._compiler_path,
            "-interaction=nonstopmode",
            "-file-line-error",
            main_path.name,
        ]
        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                cwd=str(main_path.parent),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.STDOUT,
            )
        except FileNotFoundError as e:
            raise EngineCompileError(
                f"LaTeX compiler disappeared: {self._compiler_path}", engine_name=self.name
            ) from e

        try:
            stdout, _ = await asyncio.wait_for(proc.communicate(), timeout=self.timeout_s)
        except asyncio.TimeoutError as e:
            await _terminate(proc)
            raise EngineCompileError(
                f"Compilation timed out after {self.timeout_s:g} seconds", engine_name=self.name
            ) from e
        except BaseException:
            # Cancelled: reap the compiler before letting the cancellation through
            await _terminate(proc)
            raise

        return proc.returncode, stdout.decode("utf-8", errors="replace")

    async def compile_latex(self) -> EngineResult:
        """
        Typeset the main file.

        Runs the compiler num_passes times (cross-references need two), stopping
        early if a pass crashes.

        Returns:
            EngineResult with PDF bytes when a PDF was produced without errors

        Raises:
            EngineError: If the engine is not loaded or no main file is set
            EngineCompileError: If the compiler cannot run or times out
        """
        if self.main_file is None:
            raise EngineError("No main file set", engine_name=self.name)

        main_path = self._resolve(self.main_file)
        self._clean_outputs(main_path)

        outputs: List[str] = []
        returncode = 0
        for _ in range(self.num_passes):
            returncode, output = await self._run_pass(main_path)
            outputs.append(output)
            if returncode != 0:
                break

        log_file = main_path.with_suffix(".log")
        if log_file.exists():
            # pdflatex writes logs in latin-1 (font metadata is not UTF-8)
            log = log_file.read_text(encoding="latin-1")
        else:
            log = "\n".join(outputs)

        pdf_path = main_path.with_suffix(".pdf")
        pdf = pdf_path.read_bytes() if pdf_path.exists() else None

        # A PDF from a failing run is only kept if the log shows no errors
        if pdf and returncode != 0:
            errors, _ = parse_latex_log(log)
            if errors:
                _log_warning(f"Discarding PDF from failed run ({len(errors)} errors)")
                pdf = None

        return EngineResult(pdf=pdf or None, log=log)

    def close(self) -> None:
        """Remove the working directory."""
        if self.work_dir is not None:
            shutil.rmtree(self.work_dir, ignore_errors=True)
            _log_debug(f"Engine {self.name} closed")
        self.work_dir = None
        self.main_file = None


def subprocess_engine_factory(**engine_kwargs) -> EngineFactory:
    """
    Build an engine factory for CompilationSession.

    Args:
        **engine_kwargs: Passed to SubprocessLatexEngine (compiler, num_passes, ...)
    """

    async def factory() -> SubprocessLatexEngine:
        return SubprocessLatexEngine(**engine_kwargs)

    return factory
