"""
Lifecycle status and current-stage resolution, plus status filter parsing
"""
from datetime import datetime
from typing import Optional, Union

from core.exceptions import InvalidStatusFilterError
from core.models import LifecycleCode, ShipmentStatus, StatusFilter
from core.schemas import ShipmentRecord
from .timeline import EventHistory

NOT_YET_SHIPPED = "Not yet shipped"
ORDER_PLACED = "Order placed"

_STATUS_FILTER_SPELLINGS = {
    "all": StatusFilter.ALL,
    "completed": StatusFilter.COMPLETED,
    "complete": StatusFilter.COMPLETED,
    "in_progress": StatusFilter.IN_PROGRESS,
    "in-progress": StatusFilter.IN_PROGRESS,
    "inprogress": StatusFilter.IN_PROGRESS,
    "in progress": StatusFilter.IN_PROGRESS,
    "canceled": StatusFilter.CANCELED,
    "cancelled": StatusFilter.CANCELED,
    "future": StatusFilter.FUTURE,
}


def resolve_status(shipment: ShipmentRecord, history: EventHistory, now: datetime) -> ShipmentStatus:
    if shipment.current_status == LifecycleCode.DELIVERED:
        return ShipmentStatus.COMPLETED
    if shipment.current_status == LifecycleCode.CANCELED:
        return ShipmentStatus.CANCELED
    if shipment.order_date > now and history.is_empty:
        return ShipmentStatus.FUTURE
    return ShipmentStatus.IN_PROGRESS


def resolve_current_stage(shipment: ShipmentRecord, history: EventHistory, status: ShipmentStatus) -> str:
    """Stage of the latest event that has a stage label, else a lifecycle fallback"""
    for event in reversed(history.events):
        if event.stage:
            return event.stage
    if status == ShipmentStatus.FUTURE:
        return NOT_YET_SHIPPED
    if status == ShipmentStatus.IN_PROGRESS:
        return ORDER_PLACED
    return shipment.current_status.value


def normalize_status_filter(value: Union[str, StatusFilter, None]) -> StatusFilter:
    """
    Map a loosely-typed status query parameter to StatusFilter.

    Missing or blank values mean "all". Unknown spellings are rejected.
    """
    if isinstance(value, StatusFilter):
        return value
    if value is None or not str(value).strip():
        return StatusFilter.ALL
    key = " ".join(str(value).split()).lower()
    try:
        return _STATUS_FILTER_SPELLINGS[key]
    except KeyError:
        accepted = ", ".join(sorted(_STATUS_FILTER_SPELLINGS))
        raise InvalidStatusFilterError(
            f"status must be one of: {accepted}",
            errors=[{"loc": ["status"], "msg": f"invalid status filter {value!r}", "type": "value_error"}],
        ) from None


def matches_status_filter(status: Optional[ShipmentStatus], value: Union[str, StatusFilter, None]) -> bool:
    return normalize_status_filter(value).matches(status)
