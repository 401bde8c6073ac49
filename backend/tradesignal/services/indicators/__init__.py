"""
Indicator Engine Service

CONTRACT:
    Input:  SymbolSeries (OHLCV bars)
    Output: IndicatorBundle

RESPONSIBILITIES:
    - Validate the price series
    - Calculate RSI, MACD, EMA/SMA, Bollinger Bands, Stochastic,
      Williams %R and ATR for the latest bar
    - Thread the per-symbol MACD history for the signal line

PURE PYTHON - Uses NumPy for calculations.
All math is deterministic and reproducible.
"""

from tradesignal.services.indicators.interface import IndicatorServiceInterface
from tradesignal.services.indicators.service import IndicatorService, get_indicator_service
from tradesignal.services.indicators.state import MacdState, MacdStateStore
from tradesignal.services.indicators.validation import validate_series

__all__ = [
    "IndicatorServiceInterface",
    "IndicatorService",
    "get_indicator_service",
    "MacdState",
    "MacdStateStore",
    "validate_series",
]
