"""
TeX engine log parsing.

Pulls error and warning lines out of a TeX log so failures can be summarized
without showing the whole transcript.
"""

import re
from typing import List, Tuple

# "! Error message" lines
ERROR_LINE = re.compile(r"^! (.+)$", re.MULTILINE)

# Fatal conditions TeX reports without a leading "!"
ADDITIONAL_ERROR_PATTERNS = [
    r"Undefined control sequence",
    r"File ended while scanning use of",
    r"Emergency stop",
]

WARNING_PATTERNS = [
    re.compile(r"LaTeX Warning: (.+)", re.MULTILINE),
    re.compile(r"Package \w+ Warning: (.+)", re.MULTILINE),
    re.compile(r"Overfull \\hbox \((.+)\)", re.MULTILINE),
    re.compile(r"Underfull \\hbox \((.+)\)", re.MULTILINE),
]


def parse_latex_log(log_content: str) -> Tuple[List[str], List[str]]:
    """
    Parse a TeX log for errors and warnings.

    Args:
        log_content: Content of the engine log

    Returns:
        Tuple of (errors, warnings)

    Example:
        >>> parse_latex_log("! Undefined control sequence.\\nl.7 \\\\foo")
        (['Undefined control sequence.'], [])
    """
    if not log_content:
        return [], []

    errors = [match.group(1).strip() for match in ERROR_LINE.finditer(log_content)]

    for pattern in ADDITIONAL_ERROR_PATTERNS:
        match = re.search(rf"({pattern}.*?)$", log_content, re.MULTILINE)
        if match and not any(pattern in err for err in errors):
            errors.append(match.group(1).strip())

    warnings = []
    for compiled in WARNING_PATTERNS:
        for match in compiled.finditer(log_content):
            warnings.append(match.group(1).strip())

    return errors, warnings
