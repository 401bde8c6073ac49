"""
Indicator Engine Service Interface

Defines the contract for the indicator calculation layer.
"""

from abc import abstractmethod
from typing import Optional, Sequence

from tradesignal.services.base import BaseService
from tradesignal.schemas.market import PriceBar, SymbolSeries
from tradesignal.schemas.indicators import IndicatorBundle
from tradesignal.services.indicators.state import MacdState


class IndicatorServiceInterface(BaseService[SymbolSeries, IndicatorBundle]):
    """
    Indicator Engine Service Contract.

    INPUT: SymbolSeries
        - bars: OHLCV bars, oldest first

    OUTPUT: IndicatorBundle
        - Latest-bar values of RSI, MACD, Bollinger, SMA/EMA, Stochastic,
          Williams %R and ATR
    """

    @property
    def name(self) -> str:
        return "IndicatorService"

    @abstractmethod
    async def execute(self, input_data: SymbolSeries) -> IndicatorBundle:
        """Calculate the indicator bundle for one series."""
        pass

    @abstractmethod
    def compute(
        self,
        bars: Sequence[PriceBar],
        macd_state: Optional[MacdState] = None,
    ) -> IndicatorBundle:
        """
        Calculate the indicator bundle synchronously.

        Args:
            bars: Validated or raw bars; they are validated here
            macd_state: Caller-owned MACD history, updated in place

        Returns:
            IndicatorBundle for the last bar

        Raises:
            InvalidBarError: A bar breaks the OHLCV invariants
            InsufficientDataError: The series is empty
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Indicator service is always healthy (pure computation)."""
        pass
