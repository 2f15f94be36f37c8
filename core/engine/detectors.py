"""
Risk detectors.

Each detector looks at one risk condition and returns a Finding (reason,
weight, explanation) or None. Detectors are independent pure functions of
a DetectorContext; DETECTORS fixes their evaluation order, which is also
the tie-break when findings of equal weight are ranked.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, FrozenSet, List, Optional, Tuple

from core.models import RiskReason, TransportMode
from core.schemas import ShipmentRecord
from core.timeutils import days_between
from .keywords import StageCategory, classify, matches, matches_any
from .rules import RiskRules
from .timeline import EventHistory, stage_key


@dataclass(frozen=True)
class DetectorContext:
    shipment: ShipmentRecord
    history: EventHistory
    now: datetime
    rules: RiskRules

    @property
    def days_since_order(self) -> float:
        return days_between(self.shipment.order_date, self.now)

    @property
    def is_terminal(self) -> bool:
        return self.shipment.current_status.is_terminal


@dataclass(frozen=True)
class Finding:
    reason: RiskReason
    weight: int
    description: str
    # Stage label the finding is about, for dwell-based findings
    stage: Optional[str] = None


Detector = Callable[[DetectorContext], Optional[Finding]]

_CLOSED_CATEGORIES = frozenset({StageCategory.TERMINAL, StageCategory.REFUND})
_DEPARTED_CATEGORIES = (
    StageCategory.DEPARTURE,
    StageCategory.ARRIVAL,
    StageCategory.CUSTOMS,
    StageCategory.TERMINAL,
)
# A milestone in any of these means the goods are already with the carrier
_PICKED_UP_CATEGORIES = (
    StageCategory.PICKUP,
    StageCategory.DEPARTURE,
    StageCategory.ARRIVAL,
    StageCategory.CUSTOMS,
    StageCategory.PORT,
    StageCategory.HUB,
    StageCategory.TERMINAL,
)


def _finding(ctx: DetectorContext, reason: RiskReason, description: str, stage: Optional[str] = None) -> Finding:
    return Finding(reason=reason, weight=ctx.rules.weight(reason), description=description, stage=stage)


def _has_milestone(ctx: DetectorContext, categories: Tuple[StageCategory, ...]) -> bool:
    return any(matches(event.stage, category) for event in ctx.history.events for category in categories)


def _is_lost(ctx: DetectorContext) -> bool:
    days = ctx.history.days_since_last_event
    return days is not None and days > ctx.rules.lost_days and not ctx.is_terminal


def detect_lost(ctx: DetectorContext) -> Optional[Finding]:
    if not _is_lost(ctx):
        return None
    return _finding(
        ctx, RiskReason.LOST,
        f"No milestone update for {ctx.history.days_since_last_event:.1f} days "
        f"(lost after {ctx.rules.lost_days:g})",
    )


def detect_stale_status(ctx: DetectorContext) -> Optional[Finding]:
    days = ctx.history.days_since_last_event
    if days is None or ctx.is_terminal or _is_lost(ctx):
        return None
    threshold = ctx.rules.stale_days.get(ctx.shipment.mode)
    if threshold is None or days <= threshold:
        return None
    return _finding(
        ctx, RiskReason.STALE_STATUS,
        f"No milestone update for {days:.1f} days ({ctx.shipment.mode.value} threshold {threshold:g})",
    )


def detect_no_pickup(ctx: DetectorContext) -> Optional[Finding]:
    if _has_milestone(ctx, _PICKED_UP_CATEGORIES):
        return None
    waited = ctx.days_since_order
    if waited <= ctx.rules.no_pickup_days:
        return None
    return _finding(
        ctx, RiskReason.NO_PICKUP,
        f"No pickup recorded {waited:.1f} days after the order (threshold {ctx.rules.no_pickup_days:g})",
    )


def detect_missed_departure(ctx: DetectorContext) -> Optional[Finding]:
    # Departure is only expected once the goods are with the carrier
    if not _has_milestone(ctx, _PICKED_UP_CATEGORIES):
        return None
    window = ctx.rules.departure_window(ctx.shipment.mode, ctx.shipment.service_level)
    if window is None:
        return None
    if _has_milestone(ctx, _DEPARTED_CATEGORIES):
        return None
    elapsed = ctx.days_since_order
    if elapsed <= window:
        return None
    return _finding(
        ctx, RiskReason.MISSED_DEPARTURE,
        f"No departure {elapsed:.1f} days after the order "
        f"({ctx.shipment.mode.value}/{ctx.shipment.service_level} window {window:g})",
    )


def detect_customs_hold(ctx: DetectorContext) -> Optional[Finding]:
    last = ctx.history.last_event
    if last is not None and matches(last.stage, StageCategory.CUSTOMS_HOLD):
        return _finding(
            ctx, RiskReason.CUSTOMS_HOLD, f"Latest milestone '{last.stage}' is a customs hold", stage=last.stage,
        )
    for stage, dwell in ctx.history.dwell_items():
        if matches(stage, StageCategory.CUSTOMS) and dwell > ctx.rules.customs_dwell_days:
            return _finding(
                ctx, RiskReason.CUSTOMS_HOLD,
                f"Dwell of {dwell:.1f} days at '{stage}' (threshold {ctx.rules.customs_dwell_days:g})",
                stage=stage,
            )
    return None


def _latest_stage_dwell(
    ctx: DetectorContext,
    category: StageCategory,
    threshold: float,
    reason: RiskReason,
) -> Optional[Finding]:
    last = ctx.history.last_event
    if last is None or not matches(last.stage, category):
        return None
    dwell = ctx.history.dwell_for(last.stage)
    if dwell <= threshold:
        return None
    return _finding(
        ctx, reason, f"Dwell of {dwell:.1f} days at '{last.stage}' (threshold {threshold:g})", stage=last.stage,
    )


def detect_port_congestion(ctx: DetectorContext) -> Optional[Finding]:
    if ctx.shipment.mode != TransportMode.SEA:
        return None
    return _latest_stage_dwell(ctx, StageCategory.PORT, ctx.rules.port_dwell_days, RiskReason.PORT_CONGESTION)


def detect_hub_congestion(ctx: DetectorContext) -> Optional[Finding]:
    if ctx.shipment.mode not in (TransportMode.AIR, TransportMode.ROAD):
        return None
    return _latest_stage_dwell(ctx, StageCategory.HUB, ctx.rules.hub_dwell_days, RiskReason.HUB_CONGESTION)


def _stages_reported_by_location_detectors(ctx: DetectorContext) -> FrozenSet[str]:
    findings = (
        detect_customs_hold(ctx),
        detect_port_congestion(ctx),
        detect_hub_congestion(ctx),
    )
    return frozenset(stage_key(f.stage) for f in findings if f is not None and f.stage)


def detect_long_dwell(ctx: DetectorContext) -> Optional[Finding]:
    """
    Longest dwell at any stage except terminal and refund stages.

    A stage already reported by the customs, port or hub detector is not
    reported twice; any other customs, port or hub dwell still counts here.
    """
    reported = _stages_reported_by_location_detectors(ctx)
    worst: Optional[Tuple[str, float]] = None
    for stage, dwell in ctx.history.dwell_items():
        if classify(stage) & _CLOSED_CATEGORIES or stage_key(stage) in reported:
            continue
        if dwell > ctx.rules.long_dwell_days and (worst is None or dwell > worst[1]):
            worst = (stage, dwell)
    if worst is None:
        return None
    stage, dwell = worst
    return _finding(
        ctx, RiskReason.LONG_DWELL,
        f"Dwell of {dwell:.1f} days at '{stage}' (threshold {ctx.rules.long_dwell_days:g})",
    )


def _latest_text_finding(
    ctx: DetectorContext,
    category: StageCategory,
    reason: RiskReason,
    fields: Tuple[str, ...],
    label: str,
) -> Optional[Finding]:
    last = ctx.history.last_event
    if last is None:
        return None
    keyword = matches_any((getattr(last, name) for name in fields), category)
    if not keyword:
        return None
    return _finding(ctx, reason, f"Latest milestone mentions {label} ('{keyword}')")


def detect_docs_missing(ctx: DetectorContext) -> Optional[Finding]:
    return _latest_text_finding(
        ctx, StageCategory.DOCS_MISSING, RiskReason.DOCS_MISSING,
        ("description", "stage"), "missing documentation",
    )


def detect_capacity_shortage(ctx: DetectorContext) -> Optional[Finding]:
    return _latest_text_finding(
        ctx, StageCategory.CAPACITY, RiskReason.CAPACITY_SHORTAGE,
        ("description", "stage"), "a capacity shortage",
    )


def detect_weather_alert(ctx: DetectorContext) -> Optional[Finding]:
    return _latest_text_finding(
        ctx, StageCategory.WEATHER, RiskReason.WEATHER_ALERT,
        ("description", "location"), "a weather disruption",
    )


DETECTORS: Tuple[Tuple[RiskReason, Detector], ...] = (
    (RiskReason.LOST, detect_lost),
    (RiskReason.STALE_STATUS, detect_stale_status),
    (RiskReason.NO_PICKUP, detect_no_pickup),
    (RiskReason.MISSED_DEPARTURE, detect_missed_departure),
    (RiskReason.CUSTOMS_HOLD, detect_customs_hold),
    (RiskReason.PORT_CONGESTION, detect_port_congestion),
    (RiskReason.HUB_CONGESTION, detect_hub_congestion),
    (RiskReason.LONG_DWELL, detect_long_dwell),
    (RiskReason.DOCS_MISSING, detect_docs_missing),
    (RiskReason.CAPACITY_SHORTAGE, detect_capacity_shortage),
    (RiskReason.WEATHER_ALERT, detect_weather_alert),
)

DETECTOR_ORDER = {reason: index for index, (reason, _) in enumerate(DETECTORS)}


def run_detectors(ctx: DetectorContext) -> List[Finding]:
    """Evaluate every detector in declaration order"""
    findings = []
    for _, detector in DETECTORS:
        finding = detector(ctx)
        if finding is not None:
            findings.append(finding)
    return findings
