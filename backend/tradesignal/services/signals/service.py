"""
Signal Fusion Service Implementation

Orchestrates the signal pipeline for a symbol:
    Series Validator → Indicator Engine → Signal Fusion

Fan-out across symbols runs one task per symbol and joins the results.
"""

import asyncio
import logging
import time
from collections import Counter
from typing import Optional, Sequence

import numpy as np

from tradesignal.core.config import settings
from tradesignal.schemas.market import PriceBar, SymbolSeries
from tradesignal.schemas.signals import TradingSignal, BatchSignalResponse
from tradesignal.services.base import ServiceError, DuplicateSymbolError
from tradesignal.services.indicators import (
    IndicatorService,
    MacdStateStore,
    get_indicator_service,
)
from tradesignal.services.indicators.calculations import volume_average
from tradesignal.services.signals.interface import SignalServiceInterface
from tradesignal.services.signals.fusion import fuse_signal

logger = logging.getLogger(__name__)


class SignalService(SignalServiceInterface):
    """
    Signal Fusion Service.

    Owns the per-symbol MACD history used for the signal line. Pass
    `macd_states=None` with `track_macd_state` disabled to run fully
    stateless.
    """

    def __init__(
        self,
        indicator_service: Optional[IndicatorService] = None,
        hold_confidence: Optional[int] = None,
        macd_states: Optional[MacdStateStore] = None,
    ):
        self._indicators = indicator_service or get_indicator_service()
        self._hold_confidence = (
            settings.hold_confidence if hold_confidence is None else hold_confidence
        )
        if macd_states is None and settings.track_macd_state:
            macd_states = MacdStateStore(
                settings.macd_history_size, settings.macd_state_max_symbols
            )
        self._macd_states = macd_states

    @property
    def name(self) -> str:
        return "SignalService"

    @property
    def macd_states(self) -> Optional[MacdStateStore]:
        return self._macd_states

    async def execute(self, input_data: SymbolSeries) -> TradingSignal:
        """Generate the trading signal for one symbol."""
        return self.generate(input_data.symbol, input_data.bars)

    def generate(self, symbol: str, bars: Sequence[PriceBar]) -> TradingSignal:
        """Synchronous pipeline for one symbol."""
        state = self._macd_states.get(symbol) if self._macd_states is not None else None
        bundle = self._indicators.compute(bars, macd_state=state)

        last = bars[-1]
        volumes = np.array([b.volume for b in bars], dtype=float)
        avg_volume = volume_average(volumes, self._indicators.params.volume_window)

        signal = fuse_signal(
            symbol,
            bundle,
            close=last.close,
            volume=last.volume,
            avg_volume=avg_volume,
            hold_confidence=self._hold_confidence,
        )
        logger.debug(
            f"{symbol}: {signal.type.value} confidence={signal.confidence} "
            f"strength={signal.strength}"
        )
        return signal

    async def analyze_symbols(self, series: list[SymbolSeries]) -> BatchSignalResponse:
        """
        Generate signals for several symbols concurrently.

        Raises:
            DuplicateSymbolError: If a symbol appears more than once, since
                results are keyed by symbol
        """
        counts = Counter(item.symbol for item in series)
        duplicates = sorted(symbol for symbol, count in counts.items() if count > 1)
        if duplicates:
            raise DuplicateSymbolError(
                self.name, "Duplicate symbols in batch", {"symbols": duplicates}
            )

        start = time.perf_counter()

        results = await asyncio.gather(
            *(self.execute(item) for item in series),
            return_exceptions=True,
        )

        response = BatchSignalResponse()
        for item, result in zip(series, results):
            if isinstance(result, ServiceError):
                # Log error but continue with other symbols
                logger.error(f"Signal generation failed for {item.symbol}: {result.message}")
                response.errors[item.symbol] = result.message
            elif isinstance(result, BaseException):
                raise result
            else:
                response.signals[item.symbol] = result

        response.latency_ms = int((time.perf_counter() - start) * 1000)
        return response

    async def health_check(self) -> bool:
        return await self._indicators.health_check()


# Singleton instance
_service_instance: Optional[SignalService] = None


def get_signal_service() -> SignalService:
    """Get or create signal service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = SignalService()
    return _service_instance
