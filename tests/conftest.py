"""
Shared fixtures for the risk engine and API tests
"""
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from core.engine import FixedClock, RiskAssessor, RiskRules
from services.acknowledgement_store import AcknowledgementStore
from services.alert_service import AlertService
from services.shipment_repository import ShipmentRepository

NOW = datetime(2025, 11, 25, 0, 0, tzinfo=timezone.utc)
SAMPLE_FILE = Path(__file__).resolve().parents[1] / "data" / "sample_shipments.json"


def days_ago(days: float) -> datetime:
    return NOW - timedelta(days=days)


def make_shipment(**overrides):
    """Raw in-transit Road shipment ordered two days before NOW"""
    shipment = {
        "shipment_id": "SHP-T1",
        "order_date": days_ago(2).isoformat(),
        "expected_delivery": (NOW + timedelta(days=5)).isoformat(),
        "current_status": "InTransit",
        "carrier": "Test Carrier",
        "mode": "Road",
        "origin_city": "Lyon",
        "origin_country": "FR",
        "dest_city": "Milan",
        "dest_country": "IT",
        "service_level": "Standard",
        "owner": "tester",
    }
    shipment.update(overrides)
    return shipment


def make_event(days_before: float, stage: str, description=None, location=None):
    return {
        "event_time": days_ago(days_before).isoformat(),
        "event_stage": stage,
        "description": description,
        "location": location,
    }


@pytest.fixture
def clock():
    return FixedClock(NOW)


@pytest.fixture
def rules():
    return RiskRules()


@pytest.fixture
def assessor(rules, clock):
    return RiskAssessor(rules=rules, clock=clock)


@pytest.fixture
def sample_repository():
    return ShipmentRepository.from_json_file(SAMPLE_FILE)


@pytest.fixture
def alert_service(sample_repository, assessor, clock):
    return AlertService(
        repository=sample_repository,
        acknowledgements=AcknowledgementStore(clock=clock),
        assessor=assessor,
    )
