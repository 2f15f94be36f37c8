"""
Keyword table mapping free-text milestone data to semantic categories.

Stage labels, descriptions and locations come from carrier feeds as free
text. Every detector that keys off text asks this module instead of doing
its own string checks, so the vocabulary lives in one place and can be
reviewed (and tested) as data.

Matching is a case-insensitive substring test against the phrases listed
for a category. Bump KEYWORD_TABLE_VERSION whenever a phrase is added or
removed so stored assessments can be traced back to the table that
produced them.
"""
import enum
from typing import Dict, FrozenSet, Iterable, Optional, Tuple

KEYWORD_TABLE_VERSION = "2024.3"


class StageCategory(str, enum.Enum):
    PICKUP = "pickup"
    DEPARTURE = "departure"
    ARRIVAL = "arrival"
    CUSTOMS = "customs"
    CUSTOMS_HOLD = "customs_hold"
    PORT = "port"
    HUB = "hub"
    WEATHER = "weather"
    CAPACITY = "capacity"
    DOCS_MISSING = "docs_missing"
    TERMINAL = "terminal"
    REFUND = "refund"


KEYWORD_TABLE: Dict[StageCategory, Tuple[str, ...]] = {
    # "awaiting pickup" must not count as a completed pickup
    StageCategory.PICKUP: (
        "picked up",
        "pickup completed",
        "pickup complete",
        "pickup confirmed",
        "collected",
        "received by carrier",
        "handed over to carrier",
    ),
    StageCategory.DEPARTURE: (
        "departed",
        "departure confirmed",
        "dispatched",
        "in transit",
        "on board",
        "loaded onto",
        "sailed",
        "left origin",
        "shipped",
    ),
    StageCategory.ARRIVAL: (
        "arrived",
        "arrival",
        "unloaded",
        "discharged",
        "out for delivery",
    ),
    StageCategory.CUSTOMS: (
        "customs",
    ),
    StageCategory.CUSTOMS_HOLD: (
        "customs hold",
        "held by customs",
        "held at customs",
        "held in customs",
        "customs inspection",
        "customs exam",
        "customs review",
        "awaiting customs",
    ),
    StageCategory.PORT: (
        "port arrival",
        "port loading",
        "port discharge",
        "arrived at port",
        "at port",
        "port of ",
        "destination port",
        "origin port",
        "to port",
        "seaport",
        "container terminal",
        "berth",
        "anchorage",
    ),
    StageCategory.HUB: (
        "hub",
        "sort facility",
        "sorting facility",
        "sort center",
        "sorting center",
        "sortation",
        "distribution center",
        "cross-dock",
        "cross dock",
    ),
    StageCategory.WEATHER: (
        "weather",
        "storm",
        "hurricane",
        "typhoon",
        "cyclone",
        "blizzard",
        "snow",
        "flood",
        "heavy rain",
        "fog",
    ),
    StageCategory.CAPACITY: (
        "capacity",
        "overbooked",
        "over-booked",
        "overbooking",
        "no space",
        "shortage",
        "rolled over",
        "rolled to next",
    ),
    StageCategory.DOCS_MISSING: (
        "missing doc",
        "documents missing",
        "documentation missing",
        "missing paperwork",
        "paperwork missing",
        "incomplete documentation",
        "incomplete paperwork",
        "awaiting documents",
        "awaiting documentation",
        "awaiting docs",
        "docs missing",
        "missing docs",
        "documents pending",
        "document discrepancy",
        "missing invoice",
        "missing commercial invoice",
    ),
    StageCategory.TERMINAL: (
        "delivered",
        "received by customer",
        "package received",
        "delivery completed",
        "proof of delivery",
    ),
    StageCategory.REFUND: (
        "refund",
    ),
}


def matched_keyword(text: Optional[str], category: StageCategory) -> Optional[str]:
    """Return the first keyword of `category` found in `text`, if any."""
    if not text:
        return None
    haystack = text.casefold()
    for keyword in KEYWORD_TABLE[category]:
        if keyword in haystack:
            return keyword
    return None


def matches(text: Optional[str], category: StageCategory) -> bool:
    return matched_keyword(text, category) is not None


def matches_any(texts: Iterable[Optional[str]], category: StageCategory) -> Optional[str]:
    """First keyword of `category` found in any of `texts`."""
    for text in texts:
        keyword = matched_keyword(text, category)
        if keyword:
            return keyword
    return None


def classify(text: Optional[str]) -> FrozenSet[StageCategory]:
    """All categories whose keywords appear in `text`."""
    return frozenset(category for category in StageCategory if matches(text, category))
