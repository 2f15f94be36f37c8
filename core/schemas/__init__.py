"""
Pydantic schemas for the Shipment Risk Alerting System
"""
from .shipment import (
    ShipmentRecord,
    ShipmentEvent,
    ShipmentStep,
)
from .alert import (
    RiskFactorPoint,
    Acknowledgement,
    AlertShipment,
    AssessRequest,
    AlertsMeta,
    AlertsResponse,
    RiskReasonCount,
    AlertsSummary,
    AcknowledgeRequest,
    AcknowledgeResponse,
)

__all__ = [
    # Shipment schemas
    "ShipmentRecord",
    "ShipmentEvent",
    "ShipmentStep",
    # Alert schemas
    "RiskFactorPoint",
    "Acknowledgement",
    "AlertShipment",
    "AssessRequest",
    "AlertsMeta",
    "AlertsResponse",
    "RiskReasonCount",
    "AlertsSummary",
    "AcknowledgeRequest",
    "AcknowledgeResponse",
]
