"""
Trade Signal Schema Contracts

This module defines all JSON contracts between system components.
These are the authoritative interfaces - all modules must conform to these schemas.
"""

from tradesignal.schemas.market import (
    PriceBar,
    SymbolSeries,
    IndexQuote,
    SectorPerformance,
    VolumeStat,
    MarketSnapshot,
)
from tradesignal.schemas.indicators import (
    IndicatorParams,
    IndicatorBundle,
    MACDData,
    BollingerBandsData,
    StochasticData,
)
from tradesignal.schemas.signals import (
    SignalType,
    Recommendation,
    BollingerPosition,
    VolumeSignal,
    SubSignals,
    TradingSignal,
    BatchSignalResponse,
)
from tradesignal.schemas.alerts import (
    AlertType,
    AlertCategory,
    AlertThresholds,
    MarketAlert,
)

__all__ = [
    # Market
    "PriceBar",
    "SymbolSeries",
    "IndexQuote",
    "SectorPerformance",
    "VolumeStat",
    "MarketSnapshot",
    # Indicators
    "IndicatorParams",
    "IndicatorBundle",
    "MACDData",
    "BollingerBandsData",
    "StochasticData",
    # Signals
    "SignalType",
    "Recommendation",
    "BollingerPosition",
    "VolumeSignal",
    "SubSignals",
    "TradingSignal",
    "BatchSignalResponse",
    # Alerts
    "AlertType",
    "AlertCategory",
    "AlertThresholds",
    "MarketAlert",
]
