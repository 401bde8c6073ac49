"""
CONTRACT 1: Market Inputs

Input to: Indicator Engine, Signal Fusion, Market Alert Generator

Price series are supplied per symbol by the caller; market snapshots carry
the cross-asset data (VIX, headline indices, sector ETFs, symbol volumes)
used for alerting. Upstream fetching is not part of this package.
"""

import datetime as dt
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# PRICE SERIES
# =============================================================================


class PriceBar(BaseModel):
    """
    Single daily OHLCV bar.

    Only field types are enforced here. OHLC invariants are checked by the
    series validator so a malformed bar surfaces as InvalidBarError.
    """

    date: dt.date
    open: float
    high: float
    low: float
    close: float
    volume: int


class SymbolSeries(BaseModel):
    """Ordered (oldest -> newest) bars for one symbol."""

    symbol: str = Field(..., min_length=1)
    bars: list[PriceBar]

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "symbol": "AAPL",
                "bars": [
                    {
                        "date": "2024-02-02",
                        "open": 186.1,
                        "high": 187.3,
                        "low": 185.2,
                        "close": 186.9,
                        "volume": 52000000,
                    }
                ],
            }
        }
    )


# =============================================================================
# MARKET SNAPSHOT
# =============================================================================


class IndexQuote(BaseModel):
    """Headline index (or VIX) level and daily move."""

    model_config = ConfigDict(populate_by_name=True)

    value: float
    change: float
    change_percent: float = Field(..., alias="changePercent")


class SectorPerformance(BaseModel):
    """Sector ETF returns over three horizons, in percent."""

    sector: Optional[str] = Field(
        default=None, description="Resolved from the ETF symbol when omitted"
    )
    symbol: str
    change_1d: float
    change_5d: float
    change_1m: float


class VolumeStat(BaseModel):
    """Current session volume against its trailing average."""

    current: float = Field(..., ge=0)
    average: float = Field(..., ge=0)


class MarketSnapshot(BaseModel):
    """
    Market-wide data for one alert-generation pass.

    A source that could not be fetched is left as None; the matching
    analysis is skipped rather than failing the whole pass.
    """

    vix: Optional[float] = Field(default=None, ge=0)
    vix_change: float = 0.0
    index_returns: Optional[dict[str, IndexQuote]] = None
    sector_returns: Optional[list[SectorPerformance]] = None
    symbol_volumes: Optional[dict[str, VolumeStat]] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "vix": 31.4,
                "vix_change": 3.8,
                "index_returns": {
                    "S&P 500": {"value": 4958.6, "change": -52.1, "changePercent": -1.04},
                    "NASDAQ": {"value": 15628.9, "change": -301.2, "changePercent": -1.89},
                    "DOW": {"value": 38654.4, "change": -274.3, "changePercent": -0.70},
                },
                "sector_returns": [
                    {"sector": "Technology", "symbol": "XLK", "change_1d": -2.1, "change_5d": -3.4, "change_1m": 1.2},
                    {"sector": "Energy", "symbol": "XLE", "change_1d": 1.4, "change_5d": 4.9, "change_1m": 8.0},
                ],
                "symbol_volumes": {"NVDA": {"current": 152000000, "average": 41000000}},
            }
        }
    )
