"""
Market Alert Service Implementation

Runs the four alert analyses over a snapshot, merges their output and sorts
it by priority. A missing data source only drops its own category; when no
analysis can run at all a fixed fallback set is returned so consumers
always have something to show.
"""

import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from tradesignal.core.config import settings
from tradesignal.schemas.alerts import AlertThresholds, MarketAlert
from tradesignal.schemas.market import MarketSnapshot
from tradesignal.services.base import PartialSourceFailure, TotalSourceFailure
from tradesignal.services.alerts.interface import AlertServiceInterface
from tradesignal.services.alerts.rules import (
    analyze_vix,
    analyze_sector_rotation,
    analyze_index_volatility,
    analyze_volume_anomalies,
    fallback_alerts,
)

logger = logging.getLogger(__name__)

Analysis = Callable[[MarketSnapshot, AlertThresholds, Optional[datetime]], list[MarketAlert]]

ANALYSES: tuple[tuple[str, Analysis], ...] = (
    ("volatility", analyze_vix),
    ("sector", analyze_sector_rotation),
    ("index_volatility", analyze_index_volatility),
    ("volume", analyze_volume_anomalies),
)


class AlertService(AlertServiceInterface):
    """
    Market Alert Service.

    Usage:
        service = AlertService()
        alerts = await service.execute(snapshot)
    """

    def __init__(self, thresholds: Optional[AlertThresholds] = None):
        self._thresholds = thresholds or settings.alert_thresholds

    @property
    def name(self) -> str:
        return "AlertService"

    @property
    def thresholds(self) -> AlertThresholds:
        return self._thresholds

    async def execute(self, input_data: MarketSnapshot) -> list[MarketAlert]:
        """Generate market alerts for one snapshot."""
        now = datetime.now(timezone.utc)

        outcomes = await asyncio.gather(
            *(self._run(name, analysis, input_data, now) for name, analysis in ANALYSES)
        )

        completed = [alerts for alerts in outcomes if alerts is not None]
        if not completed:
            error = TotalSourceFailure(
                self.name,
                "No market data source available",
                {"analyses": [name for name, _ in ANALYSES]},
            )
            logger.error(f"{error}; returning fallback alerts")
            return fallback_alerts(now)

        alerts = [alert for group in completed for alert in group]
        # sorted() is stable, so equal priorities keep analysis order
        return sorted(alerts, key=lambda alert: alert.priority, reverse=True)

    async def _run(
        self,
        name: str,
        analysis: Analysis,
        snapshot: MarketSnapshot,
        now: datetime,
    ) -> Optional[list[MarketAlert]]:
        try:
            return analysis(snapshot, self._thresholds, now)
        except PartialSourceFailure as e:
            logger.warning(f"Skipping {name} alerts: {e.message}")
            return None

    async def health_check(self) -> bool:
        """Alert service is always healthy (pure computation)."""
        return True


# Singleton instance
_service_instance: Optional[AlertService] = None


def get_alert_service() -> AlertService:
    """Get or create alert service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = AlertService()
    return _service_instance
