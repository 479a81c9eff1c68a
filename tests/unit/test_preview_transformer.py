"""
Unit tests for the LaTeX to HTML preview transformer.

Tests rule ordering, heading conventions and degradation on malformed input
in texdesk.contexts.preview.transformer.
"""

import pytest

from texdesk.contexts.editing.defaults import DEFAULT_TEMPLATE
from texdesk.contexts.preview.preview_patterns import PreviewStyles
from texdesk.contexts.preview.transformer import (
    PreviewTransformer,
    RewriteRule,
    build_default_rules,
    latex_to_html,
)

SECTION_OPEN = f'<div style="{PreviewStyles.SECTION_HEADER}">'
TITLE_OPEN = f'<span style="{PreviewStyles.TITLE}">'
LIST_OPEN = f'<ul style="{PreviewStyles.LIST}">'
ITEM_OPEN = f'<li style="{PreviewStyles.LIST_ITEM}">'
RIGHT_OPEN = f'<span style="{PreviewStyles.RIGHT_FLOAT}">'


@pytest.mark.unit
class TestHeadings:
    """Tests for the order-sensitive heading rules."""

    def test_bold_large_is_section_header(self):
        """Bold wrapping large renders as a bordered, uppercased section header."""
        html = latex_to_html(r"\textbf{\large Jane Doe}")

        assert html == f"{SECTION_OPEN}Jane Doe</div>"
        assert "border-bottom" in html
        assert "text-transform: uppercase" in html
        assert "font-weight: bold" in html

    def test_large_bold_is_title(self):
        """Large wrapping bold renders as the title span, not a section header."""
        html = latex_to_html(r"{\Large \textbf{Jane Doe}}")

        assert html == f"{TITLE_OPEN}Jane Doe</span>"
        assert "border-bottom" not in html
        assert "uppercase" not in html

    def test_section_header_after_noindent(self):
        """A leading \\noindent does not stop section header detection."""
        html = latex_to_html(r"\noindent\textbf{\large EXPERIENCE}")

        assert html == f"{SECTION_OPEN}EXPERIENCE</div>"

    def test_plain_bold_is_strong(self):
        html = latex_to_html(r"\textbf{Jane Doe}")

        assert html == "<strong>Jane Doe</strong>"


@pytest.mark.unit
class TestFormatting:
    """Tests for generic inline formatting."""

    def test_italic(self):
        assert latex_to_html(r"\textit{Company}") == "<em>Company</em>"

    def test_large_group_is_inline_large(self):
        html = latex_to_html(r"{\large Big}")

        assert html == f'<span style="{PreviewStyles.LARGE_INLINE}">Big</span>'

    def test_bare_large_is_dropped(self):
        assert latex_to_html(r"\large Plain text") == "Plain text"

    def test_bold_and_italic_in_one_line(self):
        html = latex_to_html(r"\textbf{Bold} and \textit{italic} text")

        assert html == "<strong>Bold</strong> and <em>italic</em> text"


@pytest.mark.unit
class TestSpacing:
    """Tests for line breaks and spacing directives."""

    def test_vspace_between_paragraphs_is_spacer_block(self):
        """\\vspace becomes a fixed-height block, never a line break."""
        html = latex_to_html("First paragraph.\n\n\\vspace{1em}\n\nSecond paragraph.")

        assert html == (
            'First paragraph.\n<div style="height: 16px;"></div>\nSecond paragraph.'
        )
        assert "<br/>" not in html

    def test_negative_vspace(self):
        assert latex_to_html(r"\vspace{-4mm}") == '<div style="height: -15.12px;"></div>'

    def test_vspace_unknown_unit_falls_back(self):
        assert latex_to_html(r"\vspace{\baselineskip}") == '<div style="height: 12px;"></div>'

    def test_line_break(self):
        assert latex_to_html("one \\\\ two") == "one <br/> two"

    def test_line_break_with_length(self):
        assert latex_to_html("one \\\\[2pt] two") == "one <br/> two"

    def test_noindent_removed(self):
        assert latex_to_html(r"\noindent Text") == "Text"

    def test_hfill_floats_rest_of_line(self):
        html = latex_to_html(r"\textbf{Engineer} \hfill 2020 -- 2024")

        assert html == f"<strong>Engineer</strong> {RIGHT_OPEN}2020 -- 2024</span>"

    def test_hfill_stops_at_line_break(self):
        html = latex_to_html("A \\hfill B \\\\")

        assert html == f"A {RIGHT_OPEN}B </span><br/>"


@pytest.mark.unit
class TestEnvironments:
    """Tests for center and itemize environments."""

    def test_itemize_with_options(self):
        source = "\\begin{itemize}[leftmargin=*, itemsep=1pt]\n\\item First\n\\item Second\n\\end{itemize}"

        html = latex_to_html(source)

        assert html == f"{LIST_OPEN}\n{ITEM_OPEN}First\n{ITEM_OPEN}Second\n</ul>"

    def test_center(self):
        html = latex_to_html("\\begin{center}\nName\n\\end{center}")

        assert html == f'<div style="{PreviewStyles.CENTER_BLOCK}">\nName\n</div>'


@pytest.mark.unit
class TestPreambleAndSymbols:
    """Tests for preamble stripping and escaped symbols."""

    def test_preamble_removed(self):
        source = (
            "\\documentclass{article}\n"
            "\\usepackage[margin=0.75in]{geometry}\n"
            "\\pagestyle{empty}\n"
            "\\begin{document}\n"
            "Hello\n"
            "\\end{document}"
        )

        assert latex_to_html(source) == "Hello"

    def test_escaped_symbols(self):
        html = latex_to_html(r"50\% of \$100 \& \#1 my\_var")

        assert html == "50% of $100 & #1 my_var"


@pytest.mark.unit
class TestCleanupAndDegradation:
    """Tests for residual cleanup and malformed input."""

    def test_blank_line_runs_collapse(self):
        assert latex_to_html("A\n\n\n\nB") == "A\nB"

    def test_outer_whitespace_trimmed(self):
        assert latex_to_html("  \n text \n  ") == "text"

    def test_single_brace_layer_stripped(self):
        assert latex_to_html("{PyTorch} and {JAX}") == "PyTorch and JAX"

    def test_deep_nesting_leaves_stray_braces(self):
        """Only one brace layer is removed; the outer one survives."""
        assert latex_to_html("{{deep}}") == "{deep}"

    def test_unknown_command_left_in_place(self):
        assert latex_to_html(r"\unknowncmd text") == r"\unknowncmd text"

    def test_unclosed_group_does_not_raise(self):
        assert latex_to_html(r"\textbf{unclosed") == r"\textbf{unclosed"

    @pytest.mark.parametrize("source", ["", None, 42])
    def test_empty_or_non_string_input(self, source):
        assert latex_to_html(source) == ""

    def test_deterministic(self):
        assert latex_to_html(DEFAULT_TEMPLATE) == latex_to_html(DEFAULT_TEMPLATE)


@pytest.mark.unit
class TestDefaultTemplate:
    """Smoke test over the editor's default resume."""

    def test_default_template_preview(self):
        html = latex_to_html(DEFAULT_TEMPLATE)

        assert f"{TITLE_OPEN}[YOUR FULL NAME]</span>" in html
        assert f"{SECTION_OPEN}EXPERIENCE</div>" in html
        assert f"{SECTION_OPEN}SKILLS</div>" in html
        assert f"{RIGHT_OPEN}[Start Date] -- [End Date] </span><br/>" in html
        assert '<div style="height: -15.12px;"></div>' in html
        assert "\\documentclass" not in html
        assert "\\begin{document}" not in html


@pytest.mark.unit
class TestPreviewTransformer:
    """Tests for the rule pipeline container."""

    def test_rule_order_by_stage(self):
        stages = [rule.stage for rule in build_default_rules()]
        expected = ["preamble", "environment", "spacing", "heading", "formatting", "symbols", "cleanup"]

        # Stages appear as contiguous runs in pipeline order
        runs = [stage for i, stage in enumerate(stages) if i == 0 or stages[i - 1] != stage]
        assert runs == expected

    def test_heading_rules_precede_textbf(self):
        names = PreviewTransformer().rule_names()

        assert names.index("title") < names.index("textbf")
        assert names.index("section_header") < names.index("textbf")

    def test_rule_names_by_stage(self):
        assert PreviewTransformer().rule_names("heading") == ["title", "section_header"]

    def test_custom_rules(self):
        import re

        rule = RewriteRule(
            name="smallcaps",
            stage="formatting",
            pattern=re.compile(r"\\textsc\{([^}]*)\}"),
            replacement=lambda m: m.group(1).upper(),
        )
        transformer = PreviewTransformer(rules=[rule])

        assert transformer.transform(r"\textsc{Name}") == "NAME"

    def test_literal_replacement_not_expanded(self):
        """Literal replacements are inserted verbatim, backslashes included."""
        import re

        rule = RewriteRule(
            name="literal",
            stage="cleanup",
            pattern=re.compile("x"),
            replacement=r"\1",
        )

        assert PreviewTransformer(rules=[rule]).transform("x") == r"\1"
