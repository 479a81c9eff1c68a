"""
LaTeX to HTML Preview Transformer

Rewrites a constrained LaTeX resume into inline-styled HTML for live preview.

The transform is an ordered list of (pattern, replacement) rules applied one
after another over the whole text. Order matters: the heading rules must see
\\textbf before the generic bold rule consumes it, and the brace cleanup must
come after every command that uses braces. Anything no rule recognises is left
in place, so malformed input degrades to partially rewritten text.

Stages:
    1. preamble   - drop \\documentclass, \\usepackage, \\pagestyle, document markers
    2. environment - center and itemize blocks, \\item entries
    3. spacing    - \\\\, \\vspace, \\noindent, \\hfill
    4. heading    - {\\Large \\textbf{...}} title, \\textbf{\\large ...} section header
    5. formatting - \\textbf, \\textit, {\\large ...}, bare \\large
    6. symbols    - \\# \\$ \\% \\_ \\&
    7. cleanup    - one layer of braces, blank line runs, outer whitespace
"""

import re
from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Tuple, Union

from texdesk.contexts.preview.preview_patterns import (
    CleanupRegex,
    EmphasisRegex,
    EnvironmentRegex,
    PreambleRegex,
    PreviewStyles,
    SpacingRegex,
    SymbolRegex,
)
from texdesk.contexts.preview.units import latex_length_to_px

Replacement = Union[str, Callable[[re.Match], str]]


@dataclass(frozen=True)
class RewriteRule:
    """
    A single rewrite step.

    Attributes:
        name: Identifier used in diagnostics (e.g., "section_header")
        stage: Pipeline stage the rule belongs to (e.g., "heading")
        pattern: Compiled regex matched against the whole document
        replacement: Literal text, or a function of the match
    """

    name: str
    stage: str
    pattern: re.Pattern
    replacement: Replacement

    def apply(self, text: str) -> str:
        if isinstance(self.replacement, str):
            # Literal replacement; no group references or escapes
            literal = self.replacement
            return self.pattern.sub(lambda _match: literal, text)
        return self.pattern.sub(self.replacement, text)


def _rule(name: str, stage: str, pattern: str, replacement: Replacement) -> RewriteRule:
    return RewriteRule(name=name, stage=stage, pattern=re.compile(pattern), replacement=replacement)


def _wrap(open_tag: str, close_tag: str) -> Callable[[re.Match], str]:
    """Replacement that surrounds the first capture group with tags."""

    def replace(match: re.Match) -> str:
        return f"{open_tag}{match.group(1)}{close_tag}"

    return replace


def _spacer(match: re.Match) -> str:
    return f'<div style="height: {latex_length_to_px(match.group(1))};"></div>'


def build_default_rules() -> Tuple[RewriteRule, ...]:
    """Return the standard resume preview rules in application order."""
    styles = PreviewStyles
    return (
        # 1. Preamble
        _rule("documentclass", "preamble", PreambleRegex.DOCUMENTCLASS, ""),
        _rule("usepackage", "preamble", PreambleRegex.USEPACKAGE, ""),
        _rule("pagestyle", "preamble", PreambleRegex.PAGESTYLE, ""),
        _rule("begin_document", "preamble", PreambleRegex.BEGIN_DOCUMENT, ""),
        _rule("end_document", "preamble", PreambleRegex.END_DOCUMENT, ""),
        # 2. Environments
        _rule(
            "begin_center",
            "environment",
            EnvironmentRegex.BEGIN_CENTER,
            f'<div style="{styles.CENTER_BLOCK}">',
        ),
        _rule("end_center", "environment", EnvironmentRegex.END_CENTER, "</div>"),
        _rule(
            "begin_itemize",
            "environment",
            EnvironmentRegex.BEGIN_ITEMIZE,
            f'<ul style="{styles.LIST}">',
        ),
        _rule("end_itemize", "environment", EnvironmentRegex.END_ITEMIZE, "</ul>"),
        _rule("item", "environment", EnvironmentRegex.ITEM, f'<li style="{styles.LIST_ITEM}">'),
        # 3. Spacing and layout
        _rule("line_break", "spacing", SpacingRegex.LINE_BREAK, "<br/>"),
        _rule("vspace", "spacing", SpacingRegex.VSPACE, _spacer),
        _rule("noindent", "spacing", SpacingRegex.NOINDENT, ""),
        _rule(
            "hfill",
            "spacing",
            SpacingRegex.HFILL,
            _wrap(f'<span style="{styles.RIGHT_FLOAT}">', "</span>"),
        ),
        # 4. Headings
        _rule(
            "title",
            "heading",
            EmphasisRegex.TITLE,
            _wrap(f'<span style="{styles.TITLE}">', "</span>"),
        ),
        _rule(
            "section_header",
            "heading",
            EmphasisRegex.SECTION_HEADER,
            _wrap(f'<div style="{styles.SECTION_HEADER}">', "</div>"),
        ),
        # 5. Generic formatting
        _rule("textbf", "formatting", EmphasisRegex.TEXTBF, _wrap("<strong>", "</strong>")),
        _rule("textit", "formatting", EmphasisRegex.TEXTIT, _wrap("<em>", "</em>")),
        _rule(
            "large_group",
            "formatting",
            EmphasisRegex.LARGE_GROUP,
            _wrap(f'<span style="{styles.LARGE_INLINE}">', "</span>"),
        ),
        _rule("large_bare", "formatting", EmphasisRegex.LARGE_BARE, ""),
        # 6. Symbols
        _rule("hash", "symbols", SymbolRegex.HASH, "#"),
        _rule("dollar", "symbols", SymbolRegex.DOLLAR, "$"),
        _rule("percent", "symbols", SymbolRegex.PERCENT, "%"),
        _rule("underscore", "symbols", SymbolRegex.UNDERSCORE, "_"),
        _rule("ampersand", "symbols", SymbolRegex.AMPERSAND, "&"),
        # 7. Cleanup
        _rule("single_braces", "cleanup", CleanupRegex.SINGLE_BRACES, _wrap("", "")),
        _rule("blank_lines", "cleanup", CleanupRegex.BLANK_LINE_RUN, "\n"),
    )


class PreviewTransformer:
    """
    Ordered rule pipeline turning LaTeX source into preview HTML.

    The transformer holds no state beyond its rule list, so one instance can
    serve every editor.

    Example:
        transformer = PreviewTransformer()
        html = transformer.transform(r"\\textbf{\\large Experience}")
    """

    def __init__(self, rules: Optional[Iterable[RewriteRule]] = None):
        self.rules: Tuple[RewriteRule, ...] = (
            tuple(rules) if rules is not None else build_default_rules()
        )

    def transform(self, source: str) -> str:
        """
        Rewrite LaTeX source into preview HTML.

        Never raises: unknown commands pass through untouched and empty or
        non-string input yields an empty string.

        Args:
            source: LaTeX document source

        Returns:
            Preview HTML string
        """
        if not isinstance(source, str) or not source:
            return ""

        html = source
        for rule in self.rules:
            html = rule.apply(html)

        return html.strip()

    def rule_names(self, stage: Optional[str] = None) -> list[str]:
        """List rule names in application order, optionally for one stage."""
        return [rule.name for rule in self.rules if stage is None or rule.stage == stage]


_DEFAULT_TRANSFORMER = PreviewTransformer()


def latex_to_html(source: str) -> str:
    """Rewrite LaTeX source into preview HTML with the standard rules."""
    return _DEFAULT_TRANSFORMER.transform(source)
