"""
Rendering Context

Responsibilities:
- Owns the lifecycle of the external typesetting engine
- Compiles LaTeX source to PDF asynchronously, one request at a time
- Holds the compiled PDF behind a revocable handle
- Captures engine logs and failure diagnostics

Owns: Engine bootstrap, compilation state, PDF artifacts
Never: Modifies document source
"""

from texdesk.contexts.rendering.artifacts import ArtifactStore
from texdesk.contexts.rendering.engine import (
    EngineResult,
    LatexEngine,
    SubprocessLatexEngine,
    subprocess_engine_factory,
)
from texdesk.contexts.rendering.exceptions import EngineCompileError, EngineError, EngineLoadError
from texdesk.contexts.rendering.session import (
    Artifact,
    CompilationSession,
    CompilationStatus,
    SessionSnapshot,
)

__all__ = [
    "Artifact",
    "ArtifactStore",
    "CompilationSession",
    "CompilationStatus",
    "EngineCompileError",
    "EngineError",
    "EngineLoadError",
    "EngineResult",
    "LatexEngine",
    "SessionSnapshot",
    "SubprocessLatexEngine",
    "subprocess_engine_factory",
]
