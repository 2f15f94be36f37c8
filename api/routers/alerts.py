"""
Alert endpoints
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from core.schemas import (
    AcknowledgeRequest,
    AcknowledgeResponse,
    AlertShipment,
    AlertsMeta,
    AlertsResponse,
    AlertsSummary,
    AssessRequest,
)
from services.alert_service import AlertService
from api.dependencies import get_alert_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/assess", response_model=AlertShipment)
async def assess_shipment(
    request: AssessRequest,
    service: AlertService = Depends(get_alert_service),
):
    """Assess a shipment supplied in the request body"""
    return service.assess_shipment(request.shipment, request.events, now=request.now)


@router.get("/", response_model=AlertsResponse)
async def get_alerts(
    status_filter: Optional[str] = Query(None, alias="status", description="all, completed, in_progress, canceled, future"),
    severity: Optional[str] = Query(None, description="High, Medium or Low"),
    include_low: bool = Query(False, description="Include Low severity alerts"),
    service: AlertService = Depends(get_alert_service),
):
    """At-risk shipments, ordered by planned ETA"""
    now = service.assessor.clock.now()
    alerts = service.list_alerts(status=status_filter, severity=severity, include_low=include_low, now=now)
    return AlertsResponse(data=alerts, meta=AlertsMeta(last_updated=now, count=len(alerts)))


@router.get("/summary", response_model=AlertsSummary)
async def get_alerts_summary(
    status_filter: Optional[str] = Query(None, alias="status"),
    include_low: bool = Query(False),
    service: AlertService = Depends(get_alert_service),
):
    """Counts by severity and the most frequent risk reasons"""
    now = service.assessor.clock.now()
    alerts = service.list_alerts(status=status_filter, include_low=include_low, now=now)
    return service.summarize(alerts, now=now)


@router.post("/acknowledge", response_model=AcknowledgeResponse)
async def acknowledge_alert(
    body: AcknowledgeRequest,
    service: AlertService = Depends(get_alert_service),
):
    """Mark a shipment's alert as acknowledged"""
    return service.acknowledge(body.shipment_id, body.user_id)


@router.delete("/acknowledgements", status_code=status.HTTP_200_OK)
async def clear_acknowledgements(service: AlertService = Depends(get_alert_service)):
    """Administrative reset of every acknowledgement"""
    removed = service.clear_acknowledgements()
    return {"cleared": removed}


@router.get("/{shipment_id}", response_model=AlertShipment)
async def get_alert(shipment_id: str, service: AlertService = Depends(get_alert_service)):
    """Assessment for one stored shipment"""
    return service.get_alert(shipment_id)
