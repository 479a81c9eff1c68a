"""
LaTeX length to screen pixel conversion.

Approximate factors at 96 DPI; good enough for on-screen spacing in the preview.
"""

import re

DEFAULT_PX = "12px"

# Checked in order by substring, first hit wins
PX_PER_UNIT = (
    ("mm", 3.78),
    ("cm", 37.8),
    ("in", 96.0),
    ("pt", 1.33),
    ("em", 16.0),
)

_LEADING_NUMBER = re.compile(r"^\s*[-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?")


def _leading_float(text: str):
    """Parse the number at the start of text (e.g. '-4mm' -> -4.0), or None."""
    match = _LEADING_NUMBER.match(text)
    if not match:
        return None
    return float(match.group(0))


def _format_px(value: float) -> str:
    # 16.0 -> "16px", 15.12 -> "15.12px"
    if value.is_integer():
        return f"{int(value)}px"
    return f"{value!r}px"


def latex_length_to_px(latex_size: str) -> str:
    """
    Convert a LaTeX length to a CSS pixel length.

    Unparseable numbers and unknown units fall back to DEFAULT_PX.

    Args:
        latex_size: LaTeX length such as "2mm", "-4mm", "1em", "0.5in"

    Returns:
        CSS length string

    Examples:
        >>> latex_length_to_px("1em")
        '16px'
        >>> latex_length_to_px("-4mm")
        '-15.12px'
        >>> latex_length_to_px("\\\\baselineskip")
        '12px'
    """
    number = _leading_float(latex_size)
    if number is None:
        return DEFAULT_PX

    for unit, factor in PX_PER_UNIT:
        if unit in latex_size:
            return _format_px(number * factor)

    return DEFAULT_PX
