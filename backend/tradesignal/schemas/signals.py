"""
CONTRACT 3: Signal Fusion

Input: IndicatorBundle + current close/volume
Output: TradingSignal

Rule-based majority vote over four indicator families.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# ENUMS
# =============================================================================


class SignalType(str, Enum):
    BUY = "BUY"
    SELL = "SELL"
    NEUTRAL = "NEUTRAL"


class Recommendation(str, Enum):
    BUY = "BUY"
    SELL = "SELL"
    HOLD = "HOLD"


class BollingerPosition(str, Enum):
    UPPER = "UPPER"
    MIDDLE = "MIDDLE"
    LOWER = "LOWER"


class VolumeSignal(str, Enum):
    HIGH = "HIGH"
    LOW = "LOW"
    NORMAL = "NORMAL"


# =============================================================================
# OUTPUT: Sub-signal Components
# =============================================================================


class ValueSignal(BaseModel):
    """Indicator reading with its vote."""

    model_config = ConfigDict(frozen=True)

    value: float
    signal: SignalType


class BollingerSignal(BaseModel):
    model_config = ConfigDict(frozen=True)

    position: BollingerPosition
    signal: SignalType


class MovingAverageSignal(BaseModel):
    model_config = ConfigDict(frozen=True)

    signal: SignalType


class VolumeQualifier(BaseModel):
    """Informational only, does not vote."""

    model_config = ConfigDict(frozen=True)

    signal: VolumeSignal


class SubSignals(BaseModel):
    """Per-family votes that went into a TradingSignal."""

    model_config = ConfigDict(frozen=True)

    rsi: ValueSignal
    macd: ValueSignal
    bollinger: BollingerSignal
    moving_average: MovingAverageSignal
    volume: VolumeQualifier


# =============================================================================
# OUTPUT: TradingSignal (Complete Response)
# =============================================================================


class TradingSignal(BaseModel):
    """
    Fused recommendation for one symbol.
    Returned by: Signal Service

    Serialize with by_alias=True to get the public JSON shape, where the
    sub-signals live under "indicators".
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "type": "BUY",
                "symbol": "AAPL",
                "confidence": 80,
                "reason": "RSI oversold rebound, MACD bullish cross",
                "strength": 50,
                "indicators": {
                    "rsi": {"value": 27.4, "signal": "BUY"},
                    "macd": {"value": 0.83, "signal": "BUY"},
                    "bollinger": {"position": "MIDDLE", "signal": "NEUTRAL"},
                    "moving_average": {"signal": "NEUTRAL"},
                    "volume": {"signal": "HIGH"},
                },
            }
        },
    )

    type: Recommendation
    symbol: str
    confidence: int = Field(..., ge=0, le=100)
    strength: int = Field(..., ge=0, le=100)
    reason: str
    sub_signals: SubSignals = Field(..., alias="indicators")


class BatchSignalResponse(BaseModel):
    """Signals for several symbols, each attributable to its symbol."""

    signals: dict[str, TradingSignal] = Field(default_factory=dict)
    errors: dict[str, str] = Field(default_factory=dict)
    latency_ms: Optional[int] = Field(default=None, ge=0)
