"""
Preview Context

Responsibilities:
- Rewrites LaTeX resume source into inline-styled HTML for live preview
- Converts LaTeX lengths to approximate screen pixels
- Wraps preview markup in a printable paper page

Owns: LaTeX to HTML approximation, page presets
Never: Runs a typesetting engine or promises fidelity with the compiled PDF
"""

from texdesk.contexts.preview.page import render_page
from texdesk.contexts.preview.transformer import PreviewTransformer, latex_to_html

__all__ = ["PreviewTransformer", "latex_to_html", "render_page"]
