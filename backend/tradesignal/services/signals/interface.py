"""
Signal Fusion Service Interface

Defines the contract for turning a price series into a trading signal.
"""

from abc import abstractmethod

from tradesignal.services.base import BaseService
from tradesignal.schemas.market import SymbolSeries
from tradesignal.schemas.signals import TradingSignal, BatchSignalResponse


class SignalServiceInterface(BaseService[SymbolSeries, TradingSignal]):
    """
    Signal Fusion Service Contract.

    INPUT: SymbolSeries
        - symbol and its OHLCV bars, oldest first

    OUTPUT: TradingSignal
        - BUY / SELL / HOLD with confidence, strength, reason and the
          per-indicator sub-signals
    """

    @property
    def name(self) -> str:
        return "SignalService"

    @abstractmethod
    async def execute(self, input_data: SymbolSeries) -> TradingSignal:
        """Generate the trading signal for one symbol."""
        pass

    @abstractmethod
    async def analyze_symbols(self, series: list[SymbolSeries]) -> BatchSignalResponse:
        """
        Generate signals for several symbols concurrently.

        Returns:
            Signals keyed by symbol; symbols whose series was rejected are
            reported under `errors` instead.
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        pass
