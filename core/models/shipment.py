"""
Shipment domain enumerations for the Shipment Risk Alerting System
"""
import enum
from typing import Optional


class LifecycleCode(str, enum.Enum):
    """Canonical shipment state as recorded by the carrier feed"""
    ORDERED = "Ordered"
    IN_TRANSIT = "InTransit"
    DELIVERED = "Delivered"
    CANCELED = "Canceled"

    @classmethod
    def parse(cls, value: "str | LifecycleCode") -> "LifecycleCode":
        """Accept the loose spellings found in shipment feeds"""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace("-", "").replace("_", "").replace(" ", "")
        try:
            return _LIFECYCLE_SPELLINGS[key]
        except KeyError:
            raise ValueError(f"Unknown lifecycle code: {value!r}") from None

    @property
    def is_terminal(self) -> bool:
        return self in (LifecycleCode.DELIVERED, LifecycleCode.CANCELED)


_LIFECYCLE_SPELLINGS = {
    "ordered": LifecycleCode.ORDERED,
    "pending": LifecycleCode.ORDERED,
    "intransit": LifecycleCode.IN_TRANSIT,
    "delivered": LifecycleCode.DELIVERED,
    "canceled": LifecycleCode.CANCELED,
    "cancelled": LifecycleCode.CANCELED,
}


class TransportMode(str, enum.Enum):
    """Transport mode of a shipment"""
    AIR = "Air"
    SEA = "Sea"
    ROAD = "Road"


class ShipmentStatus(str, enum.Enum):
    """Derived display status used by dashboards and list filters"""
    COMPLETED = "completed"
    IN_PROGRESS = "in_progress"
    CANCELED = "canceled"
    FUTURE = "future"


class StatusFilter(str, enum.Enum):
    """Lifecycle status filter vocabulary for list queries"""
    ALL = "all"
    COMPLETED = "completed"
    IN_PROGRESS = "in_progress"
    CANCELED = "canceled"
    FUTURE = "future"

    def matches(self, status: Optional[ShipmentStatus]) -> bool:
        if self is StatusFilter.ALL:
            return True
        return status is not None and status.value == self.value
