"""
Preview Pattern Constants

Regex patterns matched against LaTeX source and the inline styles substituted
for them in the HTML preview. Organized into frozen dataclasses by rewrite stage.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class PreambleRegex:
    """
    Preamble and document boundary patterns.

    These carry no visual content and are removed before any other rewrite.
    """
    DOCUMENTCLASS: str = r'\\documentclass[\s\S]*?\{[\s\S]*?\}'
    USEPACKAGE: str = r'\\usepackage[\s\S]*?\{[\s\S]*?\}'
    PAGESTYLE: str = r'\\pagestyle\{[\s\S]*?\}'
    BEGIN_DOCUMENT: str = r'\\begin\{document\}'
    END_DOCUMENT: str = r'\\end\{document\}'


@dataclass(frozen=True)
class EnvironmentRegex:
    """Block environment patterns (centering and bulleted lists)."""
    BEGIN_CENTER: str = r'\\begin\{center\}'
    END_CENTER: str = r'\\end\{center\}'
    # Optional enumitem options, e.g. \begin{itemize}[leftmargin=*]
    BEGIN_ITEMIZE: str = r'\\begin\{itemize\}(\s*\[.*?\])?'
    END_ITEMIZE: str = r'\\end\{itemize\}'
    ITEM: str = r'\\item\s*'


@dataclass(frozen=True)
class SpacingRegex:
    """Line break and spacing directive patterns."""
    # \\ with an optional length, e.g. \\[2pt]
    LINE_BREAK: str = r'\\\\(\s*\[.*?\])?'
    VSPACE: str = r'\\vspace\{([^}]+)\}'
    NOINDENT: str = r'\\noindent'
    # Everything after \hfill up to the end of line, next command or tag
    HFILL: str = r'\\hfill\s*([^\n\\<]*)'


@dataclass(frozen=True)
class EmphasisRegex:
    """
    Heading and inline formatting patterns.

    Large-then-bold is the name line; bold-then-large is a section header.
    Both must run before the generic \\textbf rule.
    """
    TITLE: str = r'\{\\Large\s+\\textbf\{([\s\S]*?)\}\}'
    SECTION_HEADER: str = r'\\textbf\{\\large\s+([\s\S]*?)\}'
    TEXTBF: str = r'\\textbf\{([\s\S]*?)\}'
    TEXTIT: str = r'\\textit\{([\s\S]*?)\}'
    LARGE_GROUP: str = r'\{\\large\s+([\s\S]*?)\}'
    LARGE_BARE: str = r'\\large\s+'


@dataclass(frozen=True)
class SymbolRegex:
    """Escaped special characters and their literal replacements."""
    HASH: str = r'\\#'
    DOLLAR: str = r'\\\$'
    PERCENT: str = r'\\%'
    UNDERSCORE: str = r'\\_'
    AMPERSAND: str = r'\\&'


@dataclass(frozen=True)
class CleanupRegex:
    """Residual cleanup patterns applied last."""
    # Only innermost groups match, so one layer is stripped per pass
    SINGLE_BRACES: str = r'\{([^{}]*)\}'
    BLANK_LINE_RUN: str = r'\n\n+'


@dataclass(frozen=True)
class PreviewStyles:
    """Inline CSS emitted for each structural fragment."""
    CENTER_BLOCK: str = 'text-align: center; margin-bottom: 16px;'
    LIST: str = 'margin: 0; padding-left: 24px; list-style-type: disc;'
    LIST_ITEM: str = 'margin-bottom: 4px; padding-left: 4px;'
    RIGHT_FLOAT: str = 'float: right;'
    TITLE: str = (
        'font-size: 24px; font-weight: bold; line-height: 1.2; '
        'display: inline-block; margin-bottom: 4px;'
    )
    SECTION_HEADER: str = (
        'display: block; font-size: 16px; font-weight: bold; margin-top: 24px; '
        'margin-bottom: 8px; border-bottom: 2px solid #000; padding-bottom: 6px; '
        'text-transform: uppercase; letter-spacing: 0.5px;'
    )
    LARGE_INLINE: str = 'font-size: 16px; font-weight: bold;'
