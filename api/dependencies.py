"""
FastAPI dependencies
"""
from fastapi import Request

from services.alert_service import AlertService, create_alert_service


def get_alert_service(request: Request) -> AlertService:
    """The process-wide AlertService, created on first use if startup did not"""
    service = getattr(request.app.state, "alert_service", None)
    if service is None:
        service = create_alert_service()
        request.app.state.alert_service = service
    return service
