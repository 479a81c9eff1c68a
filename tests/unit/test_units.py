"""Unit tests for LaTeX length conversion."""

import pytest

from texdesk.contexts.preview.units import DEFAULT_PX, latex_length_to_px


@pytest.mark.unit
@pytest.mark.parametrize(
    "latex_size, expected",
    [
        ("1em", "16px"),
        ("2mm", "7.56px"),
        ("-4mm", "-15.12px"),
        ("0.5in", "48px"),
        ("2cm", "75.6px"),
        ("1pt", "1.33px"),
        ("0mm", "0px"),
    ],
)
def test_known_units(latex_size, expected):
    assert latex_length_to_px(latex_size) == expected


@pytest.mark.unit
@pytest.mark.parametrize("latex_size", ["3ex", "\\baselineskip", "abc", "", "mm"])
def test_fallback(latex_size):
    """Unknown units and missing numbers fall back to the default height."""
    assert latex_length_to_px(latex_size) == DEFAULT_PX
