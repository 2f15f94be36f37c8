"""
Pydantic schemas for shipment records and milestone events
"""
from datetime import datetime
from typing import Optional, Union
from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator

from core.models import LifecycleCode, TransportMode
from core.timeutils import ensure_utc


class ShipmentRecord(BaseModel):
    """Shipment as delivered by the storage layer, read-only to the engine"""
    shipment_id: str = Field(..., min_length=1, description="Shipment identifier")
    order_date: datetime = Field(..., description="When the order was placed")
    expected_delivery: datetime = Field(..., description="Planned delivery (ETA)")
    current_status: LifecycleCode = Field(..., description="Lifecycle code")
    carrier: str = Field(..., description="Carrier name")
    mode: TransportMode = Field(..., description="Transport mode")
    origin_city: str = Field(..., description="Origin city")
    origin_country: Optional[str] = Field(None, description="Origin country")
    dest_city: str = Field(..., description="Destination city")
    dest_country: Optional[str] = Field(None, description="Destination country")
    service_level: str = Field(default="Standard", description="Service level, e.g. Express")
    owner: str = Field(default="", description="Owner / assignee")

    model_config = ConfigDict(frozen=True)

    @field_validator("current_status", mode="before")
    @classmethod
    def _parse_lifecycle(cls, value):
        return LifecycleCode.parse(value)

    @field_validator("mode", mode="before")
    @classmethod
    def _parse_mode(cls, value):
        if isinstance(value, str):
            return value.strip().capitalize()
        return value

    @field_validator("order_date", "expected_delivery")
    @classmethod
    def _to_utc(cls, value: datetime) -> datetime:
        return ensure_utc(value)

    @model_validator(mode="after")
    def _check_delivery_window(self):
        if self.expected_delivery < self.order_date:
            raise ValueError("expected_delivery must not be earlier than order_date")
        return self

    @property
    def origin(self) -> str:
        return _place(self.origin_city, self.origin_country)

    @property
    def destination(self) -> str:
        return _place(self.dest_city, self.dest_country)


def _place(city: str, country: Optional[str]) -> str:
    return f"{city}, {country}" if country else city


class ShipmentEvent(BaseModel):
    """A milestone event; event_time is kept raw so bad values can be skipped"""
    event_time: Union[datetime, str, float, None] = Field(None, description="When the milestone happened")
    event_stage: str = Field(default="", description="Free-text stage label")
    description: Optional[str] = Field(None, description="Free-text description")
    location: Optional[str] = Field(None, description="Free-text location")

    model_config = ConfigDict(frozen=True)


class ShipmentStep(BaseModel):
    """Display step derived from a milestone event"""
    step_name: str
    step_description: Optional[str] = None
    actual_completion_time: datetime
    step_order: int = Field(..., ge=1)
    location: Optional[str] = None

    model_config = ConfigDict(frozen=True)
