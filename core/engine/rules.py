"""
Tunable thresholds and weights for the risk detectors
"""
from typing import Dict, Optional
from pydantic import BaseModel, Field, ConfigDict, model_validator

from core.models import RiskReason, TransportMode

DEFAULT_WEIGHTS: Dict[RiskReason, int] = {
    RiskReason.LOST: 40,
    RiskReason.STALE_STATUS: 20,
    RiskReason.NO_PICKUP: 15,
    RiskReason.MISSED_DEPARTURE: 15,
    RiskReason.CUSTOMS_HOLD: 15,
    RiskReason.PORT_CONGESTION: 10,
    RiskReason.HUB_CONGESTION: 10,
    RiskReason.LONG_DWELL: 10,
    RiskReason.DOCS_MISSING: 10,
    RiskReason.CAPACITY_SHORTAGE: 5,
    RiskReason.WEATHER_ALERT: 5,
}

# Checked in order; the first key contained in the service level wins
DEFAULT_SERVICE_LEVEL_FACTORS: Dict[str, float] = {
    "express": 0.5,
    "priority": 0.5,
    "standard": 1.0,
    "economy": 1.5,
}


class RiskRules(BaseModel):
    """All thresholds are in days unless stated otherwise"""
    lost_days: float = Field(default=21.0, gt=0)
    stale_days: Dict[TransportMode, float] = Field(default_factory=lambda: {
        TransportMode.AIR: 5.0,
        TransportMode.ROAD: 7.0,
        TransportMode.SEA: 10.0,
    })
    no_pickup_days: float = Field(default=3.0, gt=0)
    departure_window_days: Dict[TransportMode, float] = Field(default_factory=lambda: {
        TransportMode.AIR: 2.0,
        TransportMode.ROAD: 3.0,
        TransportMode.SEA: 5.0,
    })
    service_level_factors: Dict[str, float] = Field(default_factory=lambda: dict(DEFAULT_SERVICE_LEVEL_FACTORS))
    customs_dwell_days: float = Field(default=2.0, gt=0)
    port_dwell_days: float = Field(default=3.0, gt=0)
    hub_dwell_days: float = Field(default=2.0, gt=0)
    long_dwell_days: float = Field(default=4.0, gt=0)
    weights: Dict[RiskReason, int] = Field(default_factory=lambda: dict(DEFAULT_WEIGHTS))
    high_severity_score: int = Field(default=70, ge=0, le=100)
    medium_severity_score: int = Field(default=40, ge=0, le=100)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def _check_consistency(self):
        if self.medium_severity_score > self.high_severity_score:
            raise ValueError("medium_severity_score must not exceed high_severity_score")
        missing = [reason.value for reason in RiskReason if reason not in self.weights]
        if missing:
            raise ValueError(f"weights missing for: {', '.join(missing)}")
        if any(weight < 0 for weight in self.weights.values()):
            raise ValueError("weights must be non-negative")
        return self

    @classmethod
    def from_settings(cls, settings) -> "RiskRules":
        """Build rules from the application Settings object"""
        return cls(
            lost_days=settings.RISK_LOST_DAYS,
            stale_days={
                TransportMode.AIR: settings.RISK_STALE_DAYS_AIR,
                TransportMode.ROAD: settings.RISK_STALE_DAYS_ROAD,
                TransportMode.SEA: settings.RISK_STALE_DAYS_SEA,
            },
            no_pickup_days=settings.RISK_NO_PICKUP_DAYS,
            departure_window_days={
                TransportMode.AIR: settings.RISK_DEPARTURE_WINDOW_AIR,
                TransportMode.ROAD: settings.RISK_DEPARTURE_WINDOW_ROAD,
                TransportMode.SEA: settings.RISK_DEPARTURE_WINDOW_SEA,
            },
            customs_dwell_days=settings.RISK_CUSTOMS_DWELL_DAYS,
            port_dwell_days=settings.RISK_PORT_DWELL_DAYS,
            hub_dwell_days=settings.RISK_HUB_DWELL_DAYS,
            long_dwell_days=settings.RISK_LONG_DWELL_DAYS,
            high_severity_score=settings.RISK_HIGH_SEVERITY_SCORE,
            medium_severity_score=settings.RISK_MEDIUM_SEVERITY_SCORE,
        )

    def weight(self, reason: RiskReason) -> int:
        return self.weights[reason]

    def departure_window(self, mode: TransportMode, service_level: str) -> Optional[float]:
        """Days after ordering by which a departure milestone is expected"""
        window = self.departure_window_days.get(mode)
        if window is None:
            return None
        level = (service_level or "").casefold()
        for key, factor in self.service_level_factors.items():
            if key in level:
                return window * factor
        return window
