"""
Market Alert Service Interface
"""

from abc import abstractmethod

from tradesignal.services.base import BaseService
from tradesignal.schemas.market import MarketSnapshot
from tradesignal.schemas.alerts import MarketAlert


class AlertServiceInterface(BaseService[MarketSnapshot, list[MarketAlert]]):
    """
    Market Alert Service Contract.

    INPUT: MarketSnapshot
        - vix / vix_change, index_returns, sector_returns, symbol_volumes
        - None for any source that could not be fetched

    OUTPUT: list[MarketAlert]
        - Sorted by priority, highest first; equal priorities keep the
          order volatility, sector, index volatility, volume
    """

    @property
    def name(self) -> str:
        return "AlertService"

    @abstractmethod
    async def execute(self, input_data: MarketSnapshot) -> list[MarketAlert]:
        """Generate market alerts for one snapshot."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        pass
