"""
Application Configuration

All settings loaded from environment variables.
"""

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from tradesignal.schemas.alerts import AlertThresholds
from tradesignal.schemas.indicators import IndicatorParams


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "Trade Signal Engine"
    app_version: str = "0.1.0"
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000

    # CORS (Frontend URL)
    allowed_origins: list[str] = ["http://localhost:3000"]

    # Indicator engine
    indicator_params: IndicatorParams = IndicatorParams()

    # MACD signal line history (per symbol)
    track_macd_state: bool = True
    macd_history_size: int = 100
    macd_state_max_symbols: int = Field(default=1000, ge=1)

    # Signal fusion: confidence reported for HOLD
    hold_confidence: int = Field(default=60, ge=50, le=90)

    # Market alerts
    alert_thresholds: AlertThresholds = AlertThresholds()


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
