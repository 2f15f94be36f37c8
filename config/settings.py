"""
Configuration management for the Shipment Risk Alerting System
"""
from pathlib import Path
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings"""

    # API Configuration
    API_HOST: str = Field(default="localhost")
    API_PORT: int = Field(default=8000)
    API_DEBUG: bool = Field(default=True)
    API_RELOAD: bool = Field(default=True)

    # Logging Configuration
    LOG_LEVEL: str = Field(default="INFO")

    # Data Configuration
    DATA_PATH: Path = Field(default=Path("data"))
    SHIPMENTS_FILE: str = Field(default="sample_shipments.json")

    # Risk Engine Thresholds (days)
    RISK_LOST_DAYS: float = Field(default=21.0, gt=0)
    RISK_STALE_DAYS_AIR: float = Field(default=5.0, gt=0)
    RISK_STALE_DAYS_ROAD: float = Field(default=7.0, gt=0)
    RISK_STALE_DAYS_SEA: float = Field(default=10.0, gt=0)
    RISK_NO_PICKUP_DAYS: float = Field(default=3.0, gt=0)
    RISK_DEPARTURE_WINDOW_AIR: float = Field(default=2.0, gt=0)
    RISK_DEPARTURE_WINDOW_ROAD: float = Field(default=3.0, gt=0)
    RISK_DEPARTURE_WINDOW_SEA: float = Field(default=5.0, gt=0)
    RISK_CUSTOMS_DWELL_DAYS: float = Field(default=2.0, gt=0)
    RISK_PORT_DWELL_DAYS: float = Field(default=3.0, gt=0)
    RISK_HUB_DWELL_DAYS: float = Field(default=2.0, gt=0)
    RISK_LONG_DWELL_DAYS: float = Field(default=4.0, gt=0)

    # Severity cut-offs (risk score)
    RISK_HIGH_SEVERITY_SCORE: int = Field(default=70, ge=0, le=100)
    RISK_MEDIUM_SEVERITY_SCORE: int = Field(default=40, ge=0, le=100)

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    @property
    def shipments_path(self) -> Path:
        return self.DATA_PATH / self.SHIPMENTS_FILE


# Global settings instance
settings = Settings()
