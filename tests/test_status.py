"""
Tests for status resolution and status filters
"""
from datetime import timedelta

import pytest

from core.engine import (
    NOT_YET_SHIPPED,
    ORDER_PLACED,
    coerce_shipment,
    matches_status_filter,
    normalize_events,
    normalize_status_filter,
    resolve_current_stage,
    resolve_status,
)
from core.exceptions import InvalidStatusFilterError, ShipmentValidationError
from core.models import ShipmentStatus, StatusFilter
from conftest import NOW, make_event, make_shipment


def resolve(events=(), **overrides):
    shipment = coerce_shipment(make_shipment(**overrides))
    history = normalize_events(events, NOW)
    status = resolve_status(shipment, history, NOW)
    return status, resolve_current_stage(shipment, history, status)


class TestResolveStatus:
    """Test lifecycle to display status mapping"""

    def test_delivered(self):
        assert resolve(current_status="Delivered")[0] == ShipmentStatus.COMPLETED

    def test_canceled_spellings(self):
        assert resolve(current_status="Cancelled")[0] == ShipmentStatus.CANCELED
        assert resolve(current_status="canceled")[0] == ShipmentStatus.CANCELED

    def test_future(self):
        future = (NOW + timedelta(days=3)).isoformat()
        status, stage = resolve(order_date=future, expected_delivery=(NOW + timedelta(days=9)).isoformat())
        assert status == ShipmentStatus.FUTURE
        assert stage == NOT_YET_SHIPPED

    def test_future_order_with_events_is_in_progress(self):
        future = (NOW + timedelta(days=3)).isoformat()
        status, _ = resolve(
            [make_event(1, "Picked up")],
            order_date=future,
            expected_delivery=(NOW + timedelta(days=9)).isoformat(),
        )
        assert status == ShipmentStatus.IN_PROGRESS

    def test_in_progress_without_events(self):
        status, stage = resolve(current_status="Ordered")
        assert status == ShipmentStatus.IN_PROGRESS
        assert stage == ORDER_PLACED

    def test_stage_from_latest_event(self):
        _, stage = resolve([make_event(2, "Picked up"), make_event(1, "Departed")])
        assert stage == "Departed"

    def test_blank_stage_on_latest_event(self):
        """The latest event with a stage label wins over a blank one"""
        _, stage = resolve([make_event(3, "Picked up"), make_event(2, "Departed"), make_event(1, "  ")])
        assert stage == "Departed"

    def test_terminal_without_events_shows_lifecycle(self):
        _, stage = resolve(current_status="Delivered")
        assert stage == "Delivered"

    def test_unknown_lifecycle_rejected(self):
        with pytest.raises(ShipmentValidationError):
            coerce_shipment(make_shipment(current_status="Lost in space"))


class TestStatusFilter:
    """Test status filter parsing"""

    @pytest.mark.parametrize("value,expected", [
        (None, StatusFilter.ALL),
        ("", StatusFilter.ALL),
        ("all", StatusFilter.ALL),
        ("Completed", StatusFilter.COMPLETED),
        ("in-progress", StatusFilter.IN_PROGRESS),
        ("In Progress", StatusFilter.IN_PROGRESS),
        ("cancelled", StatusFilter.CANCELED),
        ("future", StatusFilter.FUTURE),
        (StatusFilter.CANCELED, StatusFilter.CANCELED),
    ])
    def test_spellings(self, value, expected):
        assert normalize_status_filter(value) == expected

    def test_unknown_rejected(self):
        with pytest.raises(InvalidStatusFilterError) as exc_info:
            normalize_status_filter("shipped")
        assert exc_info.value.errors[0]["loc"] == ["status"]

    def test_matches(self):
        assert matches_status_filter(ShipmentStatus.FUTURE, "all")
        assert matches_status_filter(ShipmentStatus.FUTURE, "future")
        assert not matches_status_filter(ShipmentStatus.COMPLETED, "in_progress")
        assert not StatusFilter.COMPLETED.matches(None)
