"""
Editing Context

Responsibilities:
- Holds the LaTeX source buffer for one editor
- Refreshes the preview on every change
- Saves, loads and resets the source
- Exports the source as .tex or compiled PDF through a CompilationSession

Owns: Source buffer, saved copy, preview cache
Never: Parses LaTeX itself or talks to the engine directly
"""

from texdesk.contexts.editing.defaults import DEFAULT_TEMPLATE
from texdesk.contexts.editing.workspace import EditorWorkspace

__all__ = ["DEFAULT_TEMPLATE", "EditorWorkspace"]
