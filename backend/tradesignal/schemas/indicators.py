"""
CONTRACT 2: Indicator Engine

Input: SymbolSeries (OHLCV bars)
Output: IndicatorBundle

This module performs ALL mathematical calculations.
Pure Python/NumPy - deterministic and reproducible.
"""

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# PARAMETERS
# =============================================================================


class IndicatorParams(BaseModel):
    """Window lengths used by the indicator engine."""

    model_config = ConfigDict(frozen=True)

    rsi_period: int = Field(default=14, ge=1)
    macd_fast: int = Field(default=12, ge=1)
    macd_slow: int = Field(default=26, ge=1)
    macd_signal: int = Field(default=9, ge=1)
    bollinger_period: int = Field(default=20, ge=1)
    bollinger_std_dev: float = Field(default=2.0, gt=0)
    sma_short: int = Field(default=20, ge=1)
    sma_long: int = Field(default=50, ge=1)
    stochastic_k: int = Field(default=14, ge=1)
    stochastic_d: int = Field(default=3, ge=1)
    williams_period: int = Field(default=14, ge=1)
    atr_period: int = Field(default=14, ge=1)
    volume_window: int = Field(default=20, ge=1)


# =============================================================================
# OUTPUT: Indicator Components
# =============================================================================


class MACDData(BaseModel):
    """MACD indicator values."""

    macd: float
    signal: float
    histogram: float


class BollingerBandsData(BaseModel):
    """Bollinger Bands values."""

    upper: float
    middle: float
    lower: float


class StochasticData(BaseModel):
    """Stochastic oscillator values."""

    k: float = Field(..., ge=0, le=100)
    d: float = Field(..., ge=0, le=100)


# =============================================================================
# OUTPUT: IndicatorBundle (Complete Response)
# =============================================================================


class IndicatorBundle(BaseModel):
    """
    Latest-bar indicator snapshot for one series.
    Returned by: Indicator Service
    Consumed by: Signal Fusion

    Valid only for the series it was computed from. Values are unrounded so
    that identities such as histogram == macd - signal hold exactly.
    """

    rsi: float = Field(..., ge=0, le=100)
    macd: MACDData
    bollinger: BollingerBandsData
    sma20: float
    sma50: float
    ema12: float
    ema26: float
    stochastic: StochasticData
    williams_r: float = Field(..., ge=-100, le=0)
    atr: float = Field(..., ge=0)
    degraded: list[str] = Field(
        default_factory=list,
        description="Indicators that fell back to a neutral default",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "rsi": 61.8,
                "macd": {"macd": 1.42, "signal": 1.05, "histogram": 0.37},
                "bollinger": {"upper": 192.4, "middle": 186.0, "lower": 179.6},
                "sma20": 186.0,
                "sma50": 181.3,
                "ema12": 187.2,
                "ema26": 185.8,
                "stochastic": {"k": 74.2, "d": 69.9},
                "williams_r": -25.8,
                "atr": 3.1,
                "degraded": [],
            }
        }
    )
