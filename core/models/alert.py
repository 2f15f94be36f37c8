"""
Risk and severity enumerations for shipment alerts
"""
import enum


class RiskReason(str, enum.Enum):
    """Reasons a shipment can be flagged as at risk"""
    STALE_STATUS = "StaleStatus"
    PORT_CONGESTION = "PortCongestion"
    CUSTOMS_HOLD = "CustomsHold"
    MISSED_DEPARTURE = "MissedDeparture"
    LONG_DWELL = "LongDwell"
    NO_PICKUP = "NoPickup"
    HUB_CONGESTION = "HubCongestion"
    WEATHER_ALERT = "WeatherAlert"
    CAPACITY_SHORTAGE = "CapacityShortage"
    DOCS_MISSING = "DocsMissing"
    LOST = "Lost"


class Severity(str, enum.Enum):
    """Severity tier of an alert"""
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"
