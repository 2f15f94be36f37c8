"""
Core domain models for the Shipment Risk Alerting System
"""
from .shipment import LifecycleCode, TransportMode, ShipmentStatus, StatusFilter
from .alert import RiskReason, Severity

__all__ = [
    "LifecycleCode",
    "TransportMode",
    "ShipmentStatus",
    "StatusFilter",
    "RiskReason",
    "Severity",
]
