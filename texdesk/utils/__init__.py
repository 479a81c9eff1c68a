"""
Shared utilities for TEXDESK.

Common functionality used across contexts:
- Logger setup
- Telemetry event logging
- Timestamps
"""

from texdesk.utils.timestamp import now, now_exact, today

__all__ = ["now", "now_exact", "today"]
