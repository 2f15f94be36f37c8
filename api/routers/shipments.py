"""
Shipment list endpoints
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from core.schemas import AlertShipment
from services.alert_service import AlertService
from api.dependencies import get_alert_service

router = APIRouter()


@router.get("/", response_model=List[AlertShipment])
async def get_shipments(
    status_filter: Optional[str] = Query(None, alias="status", description="all, completed, in_progress, canceled, future"),
    service: AlertService = Depends(get_alert_service),
):
    """Every shipment with its assessment, filtered by lifecycle status"""
    return service.list_shipments(status=status_filter)
