"""Custom exceptions for the rendering context with engine references."""

from typing import Optional


class EngineError(Exception):
    """
    Base exception for typesetting engine failures.

    Attributes:
        message: Error description
        engine_name: Engine identifier (e.g., "pdflatex")
        log_excerpt: Tail of the engine log, if any
    """

    def __init__(
        self,
        message: str,
        engine_name: Optional[str] = None,
        log_excerpt: Optional[str] = None,
    ):
        self.message = message
        self.engine_name = engine_name
        self.log_excerpt = log_excerpt

        parts = [message]

        if engine_name:
            parts.append(f"Engine: {engine_name}")

        if log_excerpt:
            # Keep the tail, that is where TeX reports fatal errors
            excerpt = "..." + log_excerpt[-500:] if len(log_excerpt) > 500 else log_excerpt
            parts.append(f"\nEngine log:\n{excerpt}")

        super().__init__("\n".join(parts))


class EngineLoadError(EngineError):
    """Raised when the engine cannot be located or initialized."""

    pass


class EngineCompileError(EngineError):
    """Raised when the engine process crashes or times out during compilation."""

    pass
