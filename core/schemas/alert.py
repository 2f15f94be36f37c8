"""
Pydantic schemas for alert data
"""
from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, ConfigDict

from core.models import RiskReason, Severity, ShipmentStatus, TransportMode
from .shipment import ShipmentEvent, ShipmentStep


class RiskFactorPoint(BaseModel):
    """Contribution of one triggered detector to the risk score"""
    factor: RiskReason
    points: int = Field(..., ge=0)
    description: str

    model_config = ConfigDict(frozen=True)


class Acknowledgement(BaseModel):
    """Who acknowledged an alert, and when"""
    user_id: str
    timestamp: datetime

    model_config = ConfigDict(frozen=True)


class AlertShipment(BaseModel):
    """Assessed shipment as shown on the monitoring dashboard"""
    shipment_id: str
    origin: str
    destination: str
    mode: TransportMode
    carrier_name: str
    service_level: str
    current_stage: str
    planned_eta: datetime
    days_to_eta: float = Field(..., description="Days until ETA, negative when overdue")
    last_milestone_update: datetime
    days_since_last_update: Optional[float] = Field(None, description="Age of the latest milestone in days")
    order_date: Optional[datetime] = None
    risk_score: int = Field(..., ge=0, le=100)
    severity: Severity
    risk_reasons: List[RiskReason] = Field(default_factory=list)
    risk_factor_points: List[RiskFactorPoint] = Field(default_factory=list)
    owner: str
    status: ShipmentStatus
    steps: Optional[List[ShipmentStep]] = None
    acknowledged: bool = False
    acknowledged_by: Optional[str] = None
    acknowledged_at: Optional[datetime] = None

    model_config = ConfigDict(frozen=True)


class AssessRequest(BaseModel):
    """Ad-hoc assessment of a shipment supplied by the caller"""
    shipment: Dict[str, Any] = Field(..., description="Raw shipment record")
    events: List[ShipmentEvent] = Field(default_factory=list)
    now: Optional[datetime] = Field(None, description="Pin the reference instant")


class AlertsMeta(BaseModel):
    last_updated: datetime
    count: int


class AlertsResponse(BaseModel):
    data: List[AlertShipment]
    meta: AlertsMeta


class RiskReasonCount(BaseModel):
    reason: RiskReason
    count: int


class AlertsSummary(BaseModel):
    """Dashboard summary cards"""
    total: int
    high_risk_count: int
    acknowledged_count: int
    by_severity: Dict[str, int]
    top_risk_reasons: List[RiskReasonCount]
    last_updated: datetime


class AcknowledgeRequest(BaseModel):
    shipment_id: str = Field(..., min_length=1)
    user_id: str = Field(..., min_length=1)


class AcknowledgeResponse(BaseModel):
    message: str
    acknowledged_at: datetime
