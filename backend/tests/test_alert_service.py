"""
Alert service: merge, priority ordering and source fallback.
"""

import asyncio
import logging

from tradesignal.schemas.alerts import AlertType, AlertCategory, AlertThresholds, MarketAlert
from tradesignal.schemas.market import MarketSnapshot, IndexQuote, SectorPerformance, VolumeStat
from tradesignal.services.alerts import AlertService


def run(snapshot: MarketSnapshot, thresholds: AlertThresholds = None) -> list[MarketAlert]:
    return asyncio.run(AlertService(thresholds or AlertThresholds()).execute(snapshot))


def test_vix_only_snapshot_skips_other_analyses(caplog):
    with caplog.at_level(logging.WARNING):
        alerts = run(MarketSnapshot(vix=45.0, vix_change=1.0))

    assert [(a.type, a.priority) for a in alerts] == [(AlertType.CRITICAL, 9)]
    assert all(a.data.get("source") != "fallback" for a in alerts)
    assert "Skipping sector alerts" in caplog.text


def test_no_sources_returns_fallback(caplog):
    with caplog.at_level(logging.ERROR):
        alerts = run(MarketSnapshot())

    assert len(alerts) == 2
    assert all(a.data == {"source": "fallback"} for a in alerts)
    assert alerts[0].priority >= alerts[1].priority
    assert "No market data source available" in caplog.text


def test_quiet_market_returns_no_alerts():
    snapshot = MarketSnapshot(
        vix=18.0,
        index_returns={"S&P 500": IndexQuote(value=5000.0, change=10.0, change_percent=0.2)},
        sector_returns=[],
        symbol_volumes={},
    )
    assert run(snapshot) == []


def test_alerts_are_sorted_by_priority():
    snapshot = MarketSnapshot(
        vix=35.0,
        vix_change=4.0,
        index_returns={
            "S&P 500": IndexQuote(value=4900.0, change=-120.0, change_percent=-2.4),
            "NASDAQ": IndexQuote(value=15500.0, change=-480.0, change_percent=-3.0),
        },
        sector_returns=[
            SectorPerformance(symbol="XLK", change_1d=-6.5, change_5d=-8.0, change_1m=-4.0),
            SectorPerformance(symbol="XLE", change_1d=1.0, change_5d=3.0, change_1m=6.0),
        ],
        symbol_volumes={"NVDA": VolumeStat(current=160_000_000, average=40_000_000)},
    )
    alerts = run(snapshot)
    priorities = [a.priority for a in alerts]

    assert priorities == sorted(priorities, reverse=True)
    assert priorities == [7, 7, 6, 6, 5, 4]
    # equal priorities keep analysis order: volatility, sector, index, volume
    assert alerts[0].id.startswith("vix-spike-")
    assert alerts[1].id.startswith("sector-spike-XLK-")
    assert alerts[2].id.startswith("vix-warning-")
    assert alerts[3].id.startswith("high-volatility-")
    assert alerts[4].category == AlertCategory.SECTOR
    assert alerts[5].category == AlertCategory.VOLUME


def test_custom_thresholds():
    alerts = run(MarketSnapshot(vix=45.0), AlertThresholds(vix_high=50.0))
    assert [a.type for a in alerts] == [AlertType.WARNING]


def test_default_thresholds_come_from_settings():
    from tradesignal.core.config import settings

    assert AlertService().thresholds == settings.alert_thresholds


def test_alert_json_round_trip():
    alert = run(MarketSnapshot(vix=45.0))[0]
    restored = MarketAlert.model_validate_json(alert.model_dump_json())
    assert restored == alert


def test_health_check():
    assert asyncio.run(AlertService().health_check()) is True
