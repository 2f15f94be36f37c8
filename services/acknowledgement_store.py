"""
In-process acknowledgement store keyed by shipment identifier
"""
import logging
from datetime import datetime
from typing import Dict, Optional

from core.engine import Clock, SystemClock
from core.schemas import Acknowledgement

logger = logging.getLogger(__name__)


class AcknowledgementStore:
    """
    Records who acknowledged which alert.

    Created once at application start and shared by the alert service;
    entries live until clear() is called. A single writer at a time is
    assumed, not enforced.
    """

    def __init__(self, clock: Optional[Clock] = None):
        self.clock = clock or SystemClock()
        self._entries: Dict[str, Acknowledgement] = {}

    def set(self, shipment_id: str, user_id: str) -> datetime:
        timestamp = self.clock.now()
        self._entries[shipment_id] = Acknowledgement(user_id=user_id, timestamp=timestamp)
        logger.info(f"Shipment {shipment_id} acknowledged by {user_id}")
        return timestamp

    def get(self, shipment_id: str) -> Optional[Acknowledgement]:
        return self._entries.get(shipment_id)

    def clear(self) -> int:
        """Drop every acknowledgement; returns how many were removed"""
        removed = len(self._entries)
        self._entries.clear()
        logger.warning(f"Cleared {removed} acknowledgement(s)")
        return removed

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, shipment_id: str) -> bool:
        return shipment_id in self._entries
