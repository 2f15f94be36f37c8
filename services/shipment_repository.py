"""
In-memory shipment repository seeded from a JSON file
"""
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

from core.exceptions import ShipmentNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredShipment:
    """Raw shipment row plus its milestone events, exactly as stored"""
    shipment: Dict[str, Any]
    events: List[Dict[str, Any]] = field(default_factory=list)

    @property
    def shipment_id(self) -> str:
        return str(self.shipment.get("shipment_id", ""))


class ShipmentRepository:
    """Read-only access to shipments and their events"""

    def __init__(self, shipments: Optional[List[StoredShipment]] = None):
        self._shipments: Dict[str, StoredShipment] = {}
        for stored in shipments or []:
            self._shipments[stored.shipment_id] = stored

    @classmethod
    def from_records(cls, records: List[Dict[str, Any]]) -> "ShipmentRepository":
        """
        Build from a list of shipment dicts, each carrying an "events" list.

        Shipments without a shipment_id are skipped.
        """
        shipments = []
        for record in records:
            row = dict(record)
            events = row.pop("events", None) or []
            if not row.get("shipment_id"):
                logger.warning("Skipping shipment record without shipment_id")
                continue
            shipments.append(StoredShipment(shipment=row, events=list(events)))
        return cls(shipments)

    @classmethod
    def from_json_file(cls, path: Path) -> "ShipmentRepository":
        """Load {"shipments": [...]} (or a bare list) from disk; a missing file gives an empty repository"""
        if not path.exists():
            logger.warning(f"Shipments file not found: {path}")
            return cls()
        with path.open("r", encoding="utf-8") as f:
            payload = json.load(f)
        records = payload.get("shipments", []) if isinstance(payload, dict) else payload
        repository = cls.from_records(records)
        logger.info(f"Loaded {len(repository)} shipments from {path}")
        return repository

    def get(self, shipment_id: str) -> StoredShipment:
        try:
            return self._shipments[shipment_id]
        except KeyError:
            raise ShipmentNotFoundError(shipment_id) from None

    def __iter__(self) -> Iterator[StoredShipment]:
        return iter(self._shipments.values())

    def __len__(self) -> int:
        return len(self._shipments)
