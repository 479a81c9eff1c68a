"""
TEXDESK - LaTeX resume editing toolkit

Live preview and PDF compilation for the resume editor of the tools desktop.

Architecture:
- Preview Context: Approximate LaTeX to HTML rewriting for instant on-screen preview
- Rendering Context: Typesetting engine lifecycle and asynchronous PDF compilation
- Editing Context: Editor workspace tying the source buffer to preview and export
"""

__version__ = "0.1.0"
