"""
Tests for event normalization and dwell computation
"""
from datetime import datetime, timezone

import pytest

from core.engine.timeline import normalize_events, stage_key
from conftest import NOW, make_event


class TestStageKey:

    def test_collapses_whitespace_and_case(self):
        assert stage_key("  Port   Arrival ") == stage_key("port arrival")


class TestNormalizeEvents:
    """Test ordering, staleness and dropped events"""

    def test_empty(self):
        history = normalize_events([], NOW)
        assert history.is_empty
        assert history.last_event is None
        assert history.days_since_last_event is None
        assert dict(history.max_dwell_days) == {}

    def test_none_events(self):
        assert normalize_events(None, NOW).is_empty

    def test_sorted_by_time(self):
        """Events arrive out of order and are sorted ascending"""
        history = normalize_events([
            make_event(1, "Departed"),
            make_event(3, "Picked up"),
            make_event(2, "In transit"),
        ], NOW)
        assert [e.stage for e in history.events] == ["Picked up", "In transit", "Departed"]
        assert history.last_event.stage == "Departed"
        assert history.days_since_last_event == pytest.approx(1.0)

    def test_equal_timestamps_keep_input_order(self):
        history = normalize_events([
            make_event(1, "First"),
            make_event(1, "Second"),
        ], NOW)
        assert history.last_event.stage == "Second"

    def test_unparseable_timestamps_are_dropped(self, caplog):
        """Bad timestamps are skipped and logged, not raised"""
        history = normalize_events([
            make_event(4, "Picked up"),
            {"event_time": "yesterday-ish", "event_stage": "Departed"},
            {"event_time": None, "event_stage": "Departed"},
            {"event_time": ["not", "a", "time"], "event_stage": "Departed"},
        ], NOW, shipment_id="SHP-X")
        assert len(history.events) == 1
        assert history.dropped == 3
        assert "SHP-X" in caplog.text

    def test_accepts_epoch_and_naive_timestamps(self):
        epoch = datetime(2025, 11, 20, tzinfo=timezone.utc).timestamp()
        history = normalize_events([
            {"event_time": epoch, "event_stage": "Picked up"},
            {"event_time": "2025-11-21T00:00:00", "event_stage": "Departed"},
        ], NOW)
        assert [e.time for e in history.events] == [
            datetime(2025, 11, 20, tzinfo=timezone.utc),
            datetime(2025, 11, 21, tzinfo=timezone.utc),
        ]


class TestDwell:
    """Test dwell between adjacent same-stage events"""

    def test_run_of_same_stage(self):
        """A run contributes last minus first"""
        history = normalize_events([
            make_event(10, "Port Arrival"),
            make_event(8, "port arrival"),
            make_event(5, "Port  Arrival"),
        ], NOW)
        assert history.dwell_for("Port Arrival") == pytest.approx(5.0)

    def test_single_event_has_no_dwell(self):
        history = normalize_events([make_event(10, "Port Arrival")], NOW)
        assert history.dwell_for("Port Arrival") == 0.0

    def test_longest_run_wins(self):
        history = normalize_events([
            make_event(20, "Hub"),
            make_event(19, "Hub"),
            make_event(15, "In transit"),
            make_event(10, "Hub"),
            make_event(6, "Hub"),
        ], NOW)
        assert history.dwell_for("hub") == pytest.approx(4.0)

    def test_interrupted_stage_is_not_a_run(self):
        history = normalize_events([
            make_event(10, "Hub"),
            make_event(8, "In transit"),
            make_event(2, "Hub"),
        ], NOW)
        assert history.dwell_for("Hub") == 0.0

    def test_blank_stages_ignored(self):
        history = normalize_events([
            make_event(10, ""),
            make_event(2, ""),
        ], NOW)
        assert list(history.dwell_items()) == []

    def test_dwell_items_use_display_label(self):
        history = normalize_events([
            make_event(6, "Customs Clearance"),
            make_event(3, "customs clearance"),
        ], NOW)
        assert list(history.dwell_items()) == [("Customs Clearance", pytest.approx(3.0))]


