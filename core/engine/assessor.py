"""
Delay & risk assessment: composes normalization, detection, scoring and
status resolution into one AlertShipment per shipment.
"""
import logging
from datetime import datetime
from typing import Any, Iterable, Mapping, Optional, Union

from pydantic import ValidationError

from core.exceptions import ShipmentValidationError
from core.models import ShipmentStatus
from core.schemas import (
    Acknowledgement,
    AlertShipment,
    RiskFactorPoint,
    ShipmentRecord,
    ShipmentStep,
)
from core.timeutils import days_between, ensure_utc, floor_days, truncate_days
from .clock import Clock, SystemClock
from .detectors import DetectorContext, run_detectors
from .rules import RiskRules
from .scoring import NO_RISK, RiskScore, aggregate
from .status import resolve_current_stage, resolve_status
from .timeline import EventHistory, normalize_events

logger = logging.getLogger(__name__)

_UNSCORED_STATUSES = (ShipmentStatus.COMPLETED, ShipmentStatus.CANCELED, ShipmentStatus.FUTURE)


def coerce_shipment(shipment: Union[ShipmentRecord, Mapping[str, Any]]) -> ShipmentRecord:
    """Validate a raw shipment, raising ShipmentValidationError on bad input"""
    if isinstance(shipment, ShipmentRecord):
        return shipment
    if not isinstance(shipment, Mapping):
        raise ShipmentValidationError(
            f"Shipment record must be a mapping, got {type(shipment).__name__}"
        )
    try:
        return ShipmentRecord.model_validate(dict(shipment))
    except ValidationError as e:
        shipment_id = shipment.get("shipment_id", "<unknown>")
        raise ShipmentValidationError(
            f"Invalid shipment record {shipment_id}: {e.error_count()} validation error(s)",
            errors=e.errors(include_url=False, include_context=False, include_input=False),
        ) from e


class RiskAssessor:
    """
    Stateless risk engine.

    One instance can be shared between threads and requests: it holds only
    immutable rules and a clock, and never keeps references to its inputs.
    """

    def __init__(self, rules: Optional[RiskRules] = None, clock: Optional[Clock] = None):
        self.rules = rules or RiskRules()
        self.clock = clock or SystemClock()

    def assess(
        self,
        shipment: Union[ShipmentRecord, Mapping[str, Any]],
        events: Iterable[Any] = (),
        now: Optional[datetime] = None,
        acknowledgement: Optional[Acknowledgement] = None,
    ) -> AlertShipment:
        """
        Assess one shipment.

        Args:
            shipment: ShipmentRecord or raw mapping (validated first)
            events: milestone events, any order; bad timestamps are skipped
            now: reference instant; defaults to the assessor's clock
            acknowledgement: only used to fill the acknowledged* fields

        Raises:
            ShipmentValidationError: shipment is missing or has malformed fields
        """
        record = coerce_shipment(shipment)
        reference = ensure_utc(now) if now is not None else self.clock.now()

        history = normalize_events(events, reference, shipment_id=record.shipment_id)
        status = resolve_status(record, history, reference)

        if status in _UNSCORED_STATUSES:
            result = NO_RISK
        else:
            context = DetectorContext(shipment=record, history=history, now=reference, rules=self.rules)
            result = aggregate(run_detectors(context), self.rules)

        alert = self._build_alert(record, history, status, result, reference, acknowledgement)
        logger.debug(
            f"Assessed shipment {record.shipment_id}: status={status.value} "
            f"score={alert.risk_score} severity={alert.severity.value} "
            f"reasons={[r.value for r in alert.risk_reasons]} dropped_events={history.dropped}"
        )
        return alert

    def _build_alert(
        self,
        record: ShipmentRecord,
        history: EventHistory,
        status: ShipmentStatus,
        result: RiskScore,
        now: datetime,
        acknowledgement: Optional[Acknowledgement],
    ) -> AlertShipment:
        last = history.last_event
        days_since = history.days_since_last_event
        steps = [
            ShipmentStep(
                step_name=event.stage,
                step_description=event.description,
                actual_completion_time=event.time,
                step_order=index,
                location=event.location,
            )
            for index, event in enumerate(history.events, start=1)
        ]

        return AlertShipment(
            shipment_id=record.shipment_id,
            origin=record.origin,
            destination=record.destination,
            mode=record.mode,
            carrier_name=record.carrier,
            service_level=record.service_level,
            current_stage=resolve_current_stage(record, history, status),
            planned_eta=record.expected_delivery,
            days_to_eta=floor_days(days_between(now, record.expected_delivery)),
            last_milestone_update=last.time if last is not None else record.order_date,
            days_since_last_update=truncate_days(days_since) if days_since is not None else None,
            order_date=record.order_date,
            risk_score=result.score,
            severity=result.severity,
            risk_reasons=result.reasons,
            risk_factor_points=[
                RiskFactorPoint(factor=f.reason, points=f.weight, description=f.description)
                for f in result.findings
            ],
            owner=record.owner,
            status=status,
            steps=steps or None,
            acknowledged=acknowledgement is not None,
            acknowledged_by=acknowledgement.user_id if acknowledgement else None,
            acknowledged_at=acknowledgement.timestamp if acknowledgement else None,
        )


_default_assessor = RiskAssessor()


def assess(
    shipment: Union[ShipmentRecord, Mapping[str, Any]],
    events: Iterable[Any] = (),
    now: Optional[datetime] = None,
    acknowledgement: Optional[Acknowledgement] = None,
) -> AlertShipment:
    """Assess with the default rules and the system clock"""
    return _default_assessor.assess(shipment, events, now=now, acknowledgement=acknowledgement)
