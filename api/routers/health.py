"""
Health check endpoints
"""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from core.engine import KEYWORD_TABLE_VERSION
from services.alert_service import AlertService
from api.dependencies import get_alert_service

router = APIRouter()


@router.get("/")
async def health_check(service: AlertService = Depends(get_alert_service)):
    """System health check"""
    return {
        "status": "healthy",
        "service": "Shipment Risk Alerting System",
        "version": "1.0.0",
        "shipments_loaded": len(service.repository),
        "keyword_table_version": KEYWORD_TABLE_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/liveness")
async def liveness_probe():
    """Kubernetes liveness probe"""
    return {"status": "alive", "timestamp": datetime.now(timezone.utc).isoformat()}
