"""
CONTRACT 4: Market Alert Generator

Input: MarketSnapshot
Output: list[MarketAlert] sorted by priority (highest first)
"""

from datetime import datetime
from enum import Enum
from typing import Any
from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# ENUMS
# =============================================================================


class AlertType(str, Enum):
    INFO = "INFO"
    WARNING = "WARNING"
    CRITICAL = "CRITICAL"


class AlertCategory(str, Enum):
    VOLATILITY = "VOLATILITY"
    SECTOR = "SECTOR"
    TECHNICAL = "TECHNICAL"
    VOLUME = "VOLUME"


# =============================================================================
# CONFIGURATION
# =============================================================================


SECTOR_ETFS: dict[str, str] = {
    "XLK": "Technology",
    "XLF": "Financial",
    "XLV": "Healthcare",
    "XLY": "Consumer Discretionary",
    "XLC": "Communication Services",
    "XLI": "Industrial",
    "XLP": "Consumer Staples",
    "XLE": "Energy",
    "XLU": "Utilities",
    "XLRE": "Real Estate",
    "XLB": "Materials",
}


class AlertThresholds(BaseModel):
    """
    Threshold table for the alert rules.

    Immutable; pass a different instance to evaluate alternate thresholds.
    """

    model_config = ConfigDict(frozen=True)

    # VIX tiers
    vix_low: float = 12.0
    vix_elevated: float = 30.0
    vix_high: float = 40.0
    vix_spike: float = Field(default=3.0, gt=0, description="Points of daily VIX change")

    # Sector rotation
    rs_weight_1d: float = 1.0
    rs_weight_5d: float = 0.5
    rs_weight_1m: float = 0.3
    rs_divisor: float = Field(default=1.8, gt=0)
    rotation_spread: float = 5.0
    sector_spike: float = 3.0
    sector_spike_warning: float = 5.0
    sector_names: dict[str, str] = Field(default_factory=lambda: dict(SECTOR_ETFS))

    # Headline index volatility
    headline_indices: tuple[str, ...] = ("S&P 500", "NASDAQ", "DOW")
    index_volatility: float = 2.0

    # Volume anomalies
    volume_ratio: float = Field(default=3.0, gt=0)


# =============================================================================
# OUTPUT: MarketAlert
# =============================================================================


class MarketAlert(BaseModel):
    """
    Single market alert.

    Immutable. The id embeds a uuid4 so alerts stored by id never collide.
    """

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "id": "vix-critical-6f1c2e9b4a0d4f7e8b1a2c3d4e5f6a7b",
                "type": "CRITICAL",
                "category": "VOLATILITY",
                "title": "VIX at danger level",
                "description": "VIX reached 42.3, signalling extreme market instability.",
                "timestamp": "2024-02-04T15:30:00Z",
                "priority": 9,
                "data": {"vix": 42.3, "vix_change": 1.2, "threshold": 40.0},
            }
        },
    )

    id: str
    type: AlertType
    category: AlertCategory
    title: str
    description: str
    timestamp: datetime
    priority: int = Field(..., ge=1, le=10)
    data: dict[str, Any] = Field(default_factory=dict)
