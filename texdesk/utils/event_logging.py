"""
Telemetry event logging utilities for TEXDESK.

Provides the default telemetry sink: named events with an attribute mapping,
appended to a JSON Lines event log (one JSON object per line).

For detailed within-context logging, use texdesk.utils.logger instead.

Usage:
    from texdesk.utils.event_logging import log_event, get_recent_events

    log_event(
        "latex_compilation_completed",
        {"success": True, "source_length": 4213},
    )

    events = get_recent_events(5, event_name="latex_compilation_completed")
"""

import json
import os
from pathlib import Path
from typing import Any, Callable, Mapping, Optional

from dotenv import load_dotenv

from texdesk.utils.timestamp import now_exact

load_dotenv()
EVENTS_FILE = Path(os.getenv("EVENTS_FILE", "outs/logs/texdesk_events.log"))

# Signature every telemetry sink must follow
TelemetrySink = Callable[[str, Mapping[str, Any]], None]


def log_event(
    event_name: str, attributes: Mapping[str, Any], events_file: Optional[Path] = None
) -> None:
    """
    Append a named event to the telemetry event log.

    Args:
        event_name: Event identifier (e.g., "latex_compilation_completed")
        attributes: Event-specific fields, must be JSON serializable
        events_file: Override log location (default: EVENTS_FILE env variable)

    Example:
        log_event(
            "latex_compilation_completed",
            {"success": False, "source_length": 812, "error": "Emergency stop"},
        )
    """
    events_file = Path(events_file) if events_file is not None else EVENTS_FILE
    events_file.parent.mkdir(parents=True, exist_ok=True)

    event = {
        "timestamp": now_exact(),
        "event_name": event_name,
        **attributes,
    }

    with open(events_file, "a", encoding="utf-8") as f:
        f.write(json.dumps(event, default=str) + "\n")


def file_event_sink(events_file: Path) -> TelemetrySink:
    """Build a telemetry sink bound to a specific event log file."""

    def sink(event_name: str, attributes: Mapping[str, Any]) -> None:
        log_event(event_name, attributes, events_file=events_file)

    return sink


def get_recent_events(
    n: int = 10, event_name: Optional[str] = None, events_file: Optional[Path] = None
) -> list[dict]:
    """
    Get the last n events from the event log, optionally filtered by name.

    Args:
        n: Number of recent events to return (default: 10)
        event_name: Filter to only events with this name (optional)
        events_file: Override log location (default: EVENTS_FILE env variable)

    Returns:
        List of event dicts (most recent last)
    """
    events_file = Path(events_file) if events_file is not None else EVENTS_FILE
    if not events_file.exists():
        return []

    events = []
    with open(events_file, "r", encoding="utf-8") as f:
        for line in f:
            try:
                events.append(json.loads(line.strip()))
            except json.JSONDecodeError:
                # Skip malformed lines
                continue

    if event_name:
        events = [e for e in events if e.get("event_name") == event_name]

    return events[-n:] if len(events) > n else events
