"""
Domain exceptions for the Shipment Risk Alerting System
"""
from typing import Any, Dict, List, Optional


class AlertEngineError(Exception):
    """Base class for all alerting errors"""


class ShipmentValidationError(AlertEngineError):
    """A shipment record (or query parameter) is missing or malformed"""

    def __init__(self, message: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.errors = errors or []


class InvalidStatusFilterError(ShipmentValidationError):
    """A status filter value outside the accepted spellings"""


class ShipmentNotFoundError(AlertEngineError):
    """No shipment with the requested identifier"""

    def __init__(self, shipment_id: str):
        super().__init__(f"Shipment with id {shipment_id} was not found")
        self.shipment_id = shipment_id
