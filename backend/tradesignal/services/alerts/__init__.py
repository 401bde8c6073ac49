"""
Market Alert Service

CONTRACT:
    Input:  MarketSnapshot
    Output: list[MarketAlert]

Scans VIX, sector ETFs, headline indices and symbol volumes for
threshold breaches.
"""

from tradesignal.services.alerts.interface import AlertServiceInterface
from tradesignal.services.alerts.service import AlertService, get_alert_service
from tradesignal.services.alerts.rules import (
    analyze_vix,
    analyze_sector_rotation,
    analyze_index_volatility,
    analyze_volume_anomalies,
    fallback_alerts,
    relative_strength,
)

__all__ = [
    "AlertServiceInterface",
    "AlertService",
    "get_alert_service",
    "analyze_vix",
    "analyze_sector_rotation",
    "analyze_index_volatility",
    "analyze_volume_anomalies",
    "fallback_alerts",
    "relative_strength",
]
