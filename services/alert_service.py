"""
Alert service: fetches shipments, runs the risk engine and applies list filters
"""
import logging
from collections import Counter
from datetime import datetime
from typing import Any, Iterable, List, Mapping, Optional, Union

from config.settings import settings
from core.engine import RiskAssessor, RiskRules, matches_status_filter, normalize_status_filter
from core.exceptions import ShipmentValidationError
from core.models import Severity, StatusFilter
from core.schemas import (
    AcknowledgeResponse,
    AlertShipment,
    AlertsSummary,
    RiskReasonCount,
    ShipmentRecord,
)
from .acknowledgement_store import AcknowledgementStore
from .shipment_repository import ShipmentRepository

logger = logging.getLogger(__name__)

TOP_RISK_REASONS = 5


def parse_severity(value: Union[str, Severity, None]) -> Optional[Severity]:
    """Case-insensitive severity parsing for query parameters"""
    if value is None or isinstance(value, Severity):
        return value
    text = str(value).strip()
    if not text:
        return None
    for severity in Severity:
        if severity.value.lower() == text.lower():
            return severity
    raise ShipmentValidationError(
        "severity must be High, Medium, or Low",
        errors=[{"loc": ["severity"], "msg": f"invalid severity {value!r}", "type": "value_error"}],
    )


class AlertService:
    """Service class for alert operations"""

    def __init__(
        self,
        repository: ShipmentRepository,
        acknowledgements: AcknowledgementStore,
        assessor: Optional[RiskAssessor] = None,
    ):
        self.repository = repository
        self.acknowledgements = acknowledgements
        self.assessor = assessor or RiskAssessor()

    def assess_shipment(
        self,
        shipment: Union[ShipmentRecord, Mapping[str, Any]],
        events: Iterable[Any] = (),
        now: Optional[datetime] = None,
    ) -> AlertShipment:
        """Assess a caller-supplied shipment, attaching any stored acknowledgement"""
        if isinstance(shipment, ShipmentRecord):
            shipment_id = shipment.shipment_id
        elif isinstance(shipment, Mapping):
            shipment_id = str(shipment.get("shipment_id", ""))
        else:
            shipment_id = ""
        acknowledgement = self.acknowledgements.get(shipment_id) if shipment_id else None
        return self.assessor.assess(shipment, events, now=now, acknowledgement=acknowledgement)

    def get_alert(self, shipment_id: str, now: Optional[datetime] = None) -> AlertShipment:
        """Assess one stored shipment; raises ShipmentNotFoundError if unknown"""
        stored = self.repository.get(shipment_id)
        return self.assess_shipment(stored.shipment, stored.events, now=now)

    def _assess_all(self, now: Optional[datetime]) -> List[AlertShipment]:
        # One reference instant for the whole batch
        reference = now or self.assessor.clock.now()
        alerts = []
        for stored in self.repository:
            try:
                alerts.append(self.assess_shipment(stored.shipment, stored.events, now=reference))
            except ShipmentValidationError as e:
                logger.error(f"Skipping shipment {stored.shipment_id}: {e}")
        return alerts

    def list_shipments(
        self,
        status: Union[str, StatusFilter, None] = None,
        now: Optional[datetime] = None,
    ) -> List[AlertShipment]:
        """Every stored shipment, assessed and filtered by lifecycle status"""
        status_filter = normalize_status_filter(status)
        alerts = [alert for alert in self._assess_all(now) if matches_status_filter(alert.status, status_filter)]
        return sorted(alerts, key=lambda a: (a.order_date or a.planned_eta, a.shipment_id))

    def list_alerts(
        self,
        status: Union[str, StatusFilter, None] = None,
        severity: Union[str, Severity, None] = None,
        include_low: bool = False,
        now: Optional[datetime] = None,
    ) -> List[AlertShipment]:
        """
        At-risk shipments ordered by planned ETA.

        Low severity alerts are left out unless a severity filter is given
        or include_low is set.
        """
        status_filter = normalize_status_filter(status)
        wanted = parse_severity(severity)

        alerts = []
        for alert in self._assess_all(now):
            if not matches_status_filter(alert.status, status_filter):
                continue
            if wanted is not None:
                if alert.severity != wanted:
                    continue
            elif alert.severity == Severity.LOW and not include_low:
                continue
            alerts.append(alert)

        return sorted(alerts, key=lambda a: (a.planned_eta, a.shipment_id))

    def summarize(self, alerts: List[AlertShipment], now: Optional[datetime] = None) -> AlertsSummary:
        """Severity counts and the most frequent risk reasons"""
        by_severity = {severity.value: 0 for severity in Severity}
        reason_counts: Counter = Counter()
        for alert in alerts:
            by_severity[alert.severity.value] += 1
            reason_counts.update(alert.risk_reasons)

        top_reasons = sorted(reason_counts.items(), key=lambda item: (-item[1], item[0].value))
        return AlertsSummary(
            total=len(alerts),
            high_risk_count=by_severity[Severity.HIGH.value],
            acknowledged_count=sum(1 for alert in alerts if alert.acknowledged),
            by_severity=by_severity,
            top_risk_reasons=[
                RiskReasonCount(reason=reason, count=count)
                for reason, count in top_reasons[:TOP_RISK_REASONS]
            ],
            last_updated=now or self.assessor.clock.now(),
        )

    def acknowledge(self, shipment_id: str, user_id: str) -> AcknowledgeResponse:
        """Acknowledge the alert of a stored shipment"""
        self.repository.get(shipment_id)
        acknowledged_at = self.acknowledgements.set(shipment_id, user_id)
        return AcknowledgeResponse(
            message=f"Shipment {shipment_id} acknowledged by {user_id}",
            acknowledged_at=acknowledged_at,
        )

    def clear_acknowledgements(self) -> int:
        return self.acknowledgements.clear()


def create_alert_service(
    repository: Optional[ShipmentRepository] = None,
    acknowledgements: Optional[AcknowledgementStore] = None,
    rules: Optional[RiskRules] = None,
) -> AlertService:
    """Wire an AlertService from settings, with optional overrides"""
    return AlertService(
        repository=repository if repository is not None else ShipmentRepository.from_json_file(settings.shipments_path),
        acknowledgements=acknowledgements if acknowledgements is not None else AcknowledgementStore(),
        assessor=RiskAssessor(rules=rules or RiskRules.from_settings(settings)),
    )
