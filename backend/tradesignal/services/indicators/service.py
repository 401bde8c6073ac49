"""
Indicator Engine Service Implementation

Calculates the indicator bundle from OHLCV bars.
Pure Python/NumPy calculations.
"""

import logging
import datetime as dt
from typing import Optional, Sequence

import numpy as np

from tradesignal.core.config import settings
from tradesignal.schemas.market import PriceBar, SymbolSeries
from tradesignal.schemas.indicators import (
    IndicatorBundle,
    IndicatorParams,
    MACDData,
    BollingerBandsData,
    StochasticData,
)
from tradesignal.services.indicators.interface import IndicatorServiceInterface
from tradesignal.services.indicators.state import MacdState
from tradesignal.services.indicators.validation import validate_series
from tradesignal.services.indicators.calculations import (
    OHLCVData,
    sma,
    ema,
    rsi,
    macd,
    macd_history,
    stochastic,
    williams_r,
    atr,
    bollinger_bands,
)

logger = logging.getLogger(__name__)


class IndicatorService(IndicatorServiceInterface):
    """
    Indicator Engine Service.

    Stateless apart from the optional MacdState the caller passes in.
    Short series never fail: each indicator degrades to its documented
    neutral value and is listed in IndicatorBundle.degraded.
    """

    def __init__(self, params: Optional[IndicatorParams] = None):
        self._params = params or settings.indicator_params

    @property
    def name(self) -> str:
        return "IndicatorService"

    @property
    def params(self) -> IndicatorParams:
        return self._params

    async def execute(self, input_data: SymbolSeries) -> IndicatorBundle:
        """Calculate the indicator bundle for one series."""
        return self.compute(input_data.bars)

    def compute(
        self,
        bars: Sequence[PriceBar],
        macd_state: Optional[MacdState] = None,
    ) -> IndicatorBundle:
        """Calculate all indicators for the last bar of `bars`."""
        validate_series(bars, min_length=1)

        p = self._params
        data = OHLCVData.from_bars(bars)
        closes, highs, lows = data.closes, data.highs, data.lows

        history = None
        if macd_state is not None:
            history = self._fold_macd_state([b.date for b in bars], closes, macd_state)

        macd_val, signal_val, hist_val = macd(
            closes, p.macd_fast, p.macd_slow, p.macd_signal, history
        )
        upper, middle, lower = bollinger_bands(
            closes, p.bollinger_period, p.bollinger_std_dev
        )
        k_val, d_val = stochastic(highs, lows, closes, p.stochastic_k, p.stochastic_d)

        degraded = self._degraded(len(data))
        if degraded:
            logger.debug(
                f"{len(data)} bars: neutral fallback for {', '.join(degraded)}"
            )

        return IndicatorBundle(
            rsi=rsi(closes, p.rsi_period),
            macd=MACDData(macd=macd_val, signal=signal_val, histogram=hist_val),
            bollinger=BollingerBandsData(upper=upper, middle=middle, lower=lower),
            sma20=sma(closes, p.sma_short),
            sma50=sma(closes, p.sma_long),
            ema12=ema(closes, p.macd_fast),
            ema26=ema(closes, p.macd_slow),
            stochastic=StochasticData(k=k_val, d=d_val),
            williams_r=williams_r(highs, lows, closes, p.williams_period),
            atr=atr(highs, lows, closes, p.atr_period),
            degraded=degraded,
        )

    def _fold_macd_state(
        self, dates: list[dt.date], closes: np.ndarray, state: MacdState
    ) -> list[float]:
        """Bring `state` up to the last bar and return its MACD history."""
        line = macd_history(closes, self._params.macd_fast, self._params.macd_slow)
        last = state.last_date

        if last is None:
            state.prime(dates, closes, line)
        elif dates[-1] < last:
            logger.warning(
                f"Series ends {dates[-1]}, before stored MACD history ({last}); re-priming"
            )
            state.prime(dates, closes, line)
        elif not state.matches(dates, closes):
            logger.warning(
                "Series disagrees with stored MACD history; re-priming from submitted bars"
            )
            state.prime(dates, closes, line)
        else:
            for date, close, value in zip(dates, closes, line):
                if date >= last:
                    state.update(date, close, value)

        return state.values()

    def _degraded(self, length: int) -> list[str]:
        """Indicators whose window is longer than the series."""
        p = self._params
        minimums = {
            "rsi": p.rsi_period + 1,
            "macd": p.macd_slow,
            "bollinger": p.bollinger_period,
            "sma20": p.sma_short,
            "sma50": p.sma_long,
            "ema12": p.macd_fast,
            "ema26": p.macd_slow,
            "stochastic": p.stochastic_k,
            "williams_r": p.williams_period,
            "atr": p.atr_period + 1,
        }
        return [name for name, minimum in minimums.items() if length < minimum]

    async def health_check(self) -> bool:
        """Indicator service is always healthy (pure computation)."""
        return True


# Singleton instance
_service_instance: Optional[IndicatorService] = None


def get_indicator_service() -> IndicatorService:
    """Get or create indicator service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = IndicatorService()
    return _service_instance
