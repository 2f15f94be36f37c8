"""
Delay & risk assessment engine
"""
from .clock import Clock, SystemClock, FixedClock
from .rules import RiskRules, DEFAULT_WEIGHTS
from .keywords import KEYWORD_TABLE, KEYWORD_TABLE_VERSION, StageCategory, classify
from .timeline import EventHistory, TimedEvent, normalize_events
from .detectors import DETECTORS, DetectorContext, Finding, run_detectors
from .scoring import NO_RISK, RiskScore, aggregate, rank_findings, severity_for_score
from .status import (
    NOT_YET_SHIPPED,
    ORDER_PLACED,
    matches_status_filter,
    normalize_status_filter,
    resolve_current_stage,
    resolve_status,
)
from .assessor import RiskAssessor, assess, coerce_shipment

__all__ = [
    "Clock",
    "SystemClock",
    "FixedClock",
    "RiskRules",
    "DEFAULT_WEIGHTS",
    "KEYWORD_TABLE",
    "KEYWORD_TABLE_VERSION",
    "StageCategory",
    "classify",
    "EventHistory",
    "TimedEvent",
    "normalize_events",
    "DETECTORS",
    "DetectorContext",
    "Finding",
    "run_detectors",
    "NO_RISK",
    "RiskScore",
    "aggregate",
    "rank_findings",
    "severity_for_score",
    "NOT_YET_SHIPPED",
    "ORDER_PLACED",
    "matches_status_filter",
    "normalize_status_filter",
    "resolve_current_stage",
    "resolve_status",
    "RiskAssessor",
    "assess",
    "coerce_shipment",
]
