"""
Event history normalization: ordering, staleness and stage dwell times
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from pydantic import ValidationError

from core.schemas import ShipmentEvent
from core.timeutils import days_between, parse_timestamp

logger = logging.getLogger(__name__)


def stage_key(label: str) -> str:
    """Normalized form of a stage label used to compare stages"""
    return " ".join(label.split()).casefold()


@dataclass(frozen=True)
class TimedEvent:
    """A milestone event whose timestamp parsed successfully"""
    time: datetime
    stage: str
    description: Optional[str] = None
    location: Optional[str] = None
    position: int = 0


@dataclass(frozen=True)
class EventHistory:
    """Normalized view over a shipment's milestone events"""
    events: Tuple[TimedEvent, ...] = ()
    days_since_last_event: Optional[float] = None
    max_dwell_days: Mapping[str, float] = field(default_factory=dict)
    stage_labels: Mapping[str, str] = field(default_factory=dict)
    dropped: int = 0

    @property
    def last_event(self) -> Optional[TimedEvent]:
        return self.events[-1] if self.events else None

    @property
    def is_empty(self) -> bool:
        return not self.events

    def dwell_for(self, stage: str) -> float:
        return self.max_dwell_days.get(stage_key(stage), 0.0)

    def dwell_items(self) -> Iterable[Tuple[str, float]]:
        """(display label, max dwell days) for every stage with a dwell"""
        for key, days in self.max_dwell_days.items():
            yield self.stage_labels.get(key, key), days


def _coerce_event(raw: Any) -> ShipmentEvent:
    if isinstance(raw, ShipmentEvent):
        return raw
    return ShipmentEvent.model_validate(raw)


def normalize_events(raw_events: Iterable[Any], now: datetime, shipment_id: str = "") -> EventHistory:
    """
    Validate and order a shipment's milestone events.

    Events whose timestamp cannot be parsed (or that are not event-shaped
    at all) are dropped and logged, never raised.

    Dwell is measured between adjacent events that share a stage label;
    a run of same-stage events contributes (last - first) of the run, and
    each stage keeps the longest run observed.
    """
    timed = []
    dropped = 0
    for position, raw in enumerate(raw_events or ()):
        try:
            event = _coerce_event(raw)
        except ValidationError as e:
            dropped += 1
            logger.warning(f"Dropping malformed event #{position} for shipment {shipment_id}: {e.error_count()} error(s)")
            continue

        event_time = parse_timestamp(event.event_time)
        if event_time is None:
            dropped += 1
            logger.warning(
                f"Dropping event #{position} for shipment {shipment_id}: "
                f"unparseable timestamp {event.event_time!r}"
            )
            continue

        timed.append(TimedEvent(
            time=event_time,
            stage=event.event_stage.strip(),
            description=event.description,
            location=event.location,
            position=position,
        ))

    # Equal timestamps keep input order, so the last input among ties ends up last
    ordered = tuple(sorted(timed, key=lambda e: (e.time, e.position)))

    max_dwell: Dict[str, float] = {}
    labels: Dict[str, str] = {}
    run_start: Optional[TimedEvent] = None
    for previous, current in zip(ordered, ordered[1:]):
        if not current.stage or stage_key(previous.stage) != stage_key(current.stage):
            run_start = None
            continue
        if run_start is None:
            run_start = previous
        key = stage_key(current.stage)
        labels.setdefault(key, run_start.stage)
        dwell = days_between(run_start.time, current.time)
        if dwell > max_dwell.get(key, 0.0):
            max_dwell[key] = dwell
        else:
            max_dwell.setdefault(key, dwell)

    days_since_last = days_between(ordered[-1].time, now) if ordered else None

    return EventHistory(
        events=ordered,
        days_since_last_event=days_since_last,
        max_dwell_days=max_dwell,
        stage_labels=labels,
        dropped=dropped,
    )
