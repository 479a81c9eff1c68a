"""Unit tests for the JSON Lines telemetry sink."""

import json

import pytest

from texdesk.utils.event_logging import file_event_sink, get_recent_events, log_event


@pytest.mark.unit
def test_log_event_appends_json_line(tmp_path):
    events_file = tmp_path / "logs" / "events.log"

    log_event("latex_compilation_completed", {"success": True, "source_length": 10}, events_file)
    log_event("latex_compilation_completed", {"success": False, "error": "boom"}, events_file)

    lines = events_file.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2

    first = json.loads(lines[0])
    assert first["event_name"] == "latex_compilation_completed"
    assert first["success"] is True
    assert first["source_length"] == 10
    assert "timestamp" in first


@pytest.mark.unit
def test_file_event_sink(tmp_path):
    events_file = tmp_path / "events.log"
    sink = file_event_sink(events_file)

    sink("preview_rendered", {"length": 3})

    events = get_recent_events(events_file=events_file)
    assert events[0]["event_name"] == "preview_rendered"
    assert events[0]["length"] == 3


@pytest.mark.unit
def test_get_recent_events_filters_and_limits(tmp_path):
    events_file = tmp_path / "events.log"
    for i in range(5):
        log_event("a", {"i": i}, events_file)
    log_event("b", {"i": 99}, events_file)

    assert [e["i"] for e in get_recent_events(2, event_name="a", events_file=events_file)] == [3, 4]
    assert [e["i"] for e in get_recent_events(10, event_name="b", events_file=events_file)] == [99]


@pytest.mark.unit
def test_get_recent_events_skips_malformed_lines(tmp_path):
    events_file = tmp_path / "events.log"
    log_event("a", {}, events_file)
    with open(events_file, "a", encoding="utf-8") as f:
        f.write("not json\n")

    assert len(get_recent_events(events_file=events_file)) == 1


@pytest.mark.unit
def test_get_recent_events_missing_file(tmp_path):
    assert get_recent_events(events_file=tmp_path / "missing.log") == []
