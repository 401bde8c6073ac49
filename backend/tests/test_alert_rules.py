"""
Market alert rules, one analysis at a time.
"""

import pytest

from tradesignal.schemas.alerts import AlertType, AlertCategory, AlertThresholds
from tradesignal.schemas.market import (
    MarketSnapshot,
    IndexQuote,
    SectorPerformance,
    VolumeStat,
)
from tradesignal.services.base import PartialSourceFailure
from tradesignal.services.alerts.rules import (
    analyze_vix,
    analyze_sector_rotation,
    analyze_index_volatility,
    analyze_volume_anomalies,
    fallback_alerts,
    relative_strength,
)

THRESHOLDS = AlertThresholds()


def quote(change_percent: float, value: float = 100.0) -> IndexQuote:
    return IndexQuote(value=value, change=value * change_percent / 100, change_percent=change_percent)


class TestVix:
    def test_critical_level(self):
        alerts = analyze_vix(MarketSnapshot(vix=45.0, vix_change=1.0), THRESHOLDS)

        assert len(alerts) == 1
        assert alerts[0].type == AlertType.CRITICAL
        assert alerts[0].priority == 9
        assert alerts[0].id.startswith("vix-critical-")

    def test_critical_boundary(self):
        alerts = analyze_vix(MarketSnapshot(vix=40.0), THRESHOLDS)
        assert [a.type for a in alerts] == [AlertType.CRITICAL]

    def test_elevated_level(self):
        alerts = analyze_vix(MarketSnapshot(vix=35.0), THRESHOLDS)
        assert [(a.type, a.priority) for a in alerts] == [(AlertType.WARNING, 6)]

    def test_low_level(self):
        alerts = analyze_vix(MarketSnapshot(vix=10.0, vix_change=0.0), THRESHOLDS)

        assert [(a.type, a.priority) for a in alerts] == [(AlertType.INFO, 3)]
        assert alerts[0].data["threshold"] == 12.0

    @pytest.mark.parametrize("vix", [12.0, 20.0, 30.0])
    def test_normal_range_is_quiet(self, vix):
        assert analyze_vix(MarketSnapshot(vix=vix), THRESHOLDS) == []

    def test_rising_spike_fires_with_level_alert(self):
        alerts = analyze_vix(MarketSnapshot(vix=33.0, vix_change=4.5), THRESHOLDS)

        assert [(a.type, a.priority) for a in alerts] == [
            (AlertType.WARNING, 6),
            (AlertType.WARNING, 7),
        ]

    def test_falling_spike_is_info(self):
        alerts = analyze_vix(MarketSnapshot(vix=22.0, vix_change=-3.5), THRESHOLDS)
        assert [(a.type, a.priority) for a in alerts] == [(AlertType.INFO, 4)]

    def test_change_of_exactly_threshold_is_not_a_spike(self):
        assert analyze_vix(MarketSnapshot(vix=22.0, vix_change=3.0), THRESHOLDS) == []

    def test_reads_vix_from_index_returns(self):
        snapshot = MarketSnapshot(index_returns={"VIX": IndexQuote(value=42.0, change=5.0, change_percent=13.5)})
        alerts = analyze_vix(snapshot, THRESHOLDS)
        assert [a.priority for a in alerts] == [9, 7]

    def test_missing_vix(self):
        with pytest.raises(PartialSourceFailure):
            analyze_vix(MarketSnapshot(), THRESHOLDS)

    def test_alternate_thresholds(self):
        strict = AlertThresholds(vix_high=50.0)
        alerts = analyze_vix(MarketSnapshot(vix=45.0), strict)
        assert [a.type for a in alerts] == [AlertType.WARNING]


class TestSectorRotation:
    def test_relative_strength_formula(self):
        sector = SectorPerformance(symbol="XLE", change_1d=2.0, change_5d=8.0, change_1m=12.0)
        assert relative_strength(sector, THRESHOLDS) == pytest.approx((2.0 + 4.0 + 3.6) / 1.8)

    def test_rotation_alert_names_strongest_and_weakest(self):
        snapshot = MarketSnapshot(sector_returns=[
            SectorPerformance(symbol="XLE", change_1d=2.0, change_5d=8.0, change_1m=12.0),
            SectorPerformance(symbol="XLV", change_1d=0.1, change_5d=0.2, change_1m=0.5),
            SectorPerformance(symbol="XLK", change_1d=-2.0, change_5d=-6.0, change_1m=-10.0),
        ])
        alerts = analyze_sector_rotation(snapshot, THRESHOLDS)

        assert len(alerts) == 1
        rotation = alerts[0]
        assert (rotation.type, rotation.category, rotation.priority) == (
            AlertType.INFO, AlertCategory.SECTOR, 5,
        )
        assert "Technology" in rotation.description
        assert "Energy" in rotation.description
        assert rotation.data["strongest_sector"]["symbol"] == "XLE"
        assert rotation.data["weakest_sector"]["symbol"] == "XLK"
        assert rotation.data["strength_difference"] > 5

    def test_small_spread_is_quiet(self):
        snapshot = MarketSnapshot(sector_returns=[
            SectorPerformance(sector="Tech", symbol="XLK", change_1d=1.0, change_5d=1.0, change_1m=1.0),
            SectorPerformance(sector="Energy", symbol="XLE", change_1d=-1.0, change_5d=-1.0, change_1m=-1.0),
        ])
        assert analyze_sector_rotation(snapshot, THRESHOLDS) == []

    def test_single_sector_spikes(self):
        snapshot = MarketSnapshot(sector_returns=[
            SectorPerformance(symbol="XLF", change_1d=4.0, change_5d=0.0, change_1m=0.0),
            SectorPerformance(symbol="XLU", change_1d=-6.0, change_5d=0.0, change_1m=0.0),
        ])
        alerts = analyze_sector_rotation(snapshot, THRESHOLDS)

        # spread (4 + 6) / 1.8 = 5.6 also triggers rotation
        assert [(a.type, a.priority) for a in alerts] == [
            (AlertType.INFO, 5),
            (AlertType.INFO, 4),
            (AlertType.WARNING, 7),
        ]
        assert alerts[1].title == "Financial sector surges"
        assert alerts[2].title == "Utilities sector plunges"

    def test_empty_sector_list(self):
        assert analyze_sector_rotation(MarketSnapshot(sector_returns=[]), THRESHOLDS) == []

    def test_missing_sectors(self):
        with pytest.raises(PartialSourceFailure):
            analyze_sector_rotation(MarketSnapshot(), THRESHOLDS)


class TestIndexVolatility:
    def test_high_average_move(self):
        snapshot = MarketSnapshot(index_returns={
            "S&P 500": quote(-2.5),
            "NASDAQ": quote(-3.1),
            "DOW": quote(-1.2),
        })
        alerts = analyze_index_volatility(snapshot, THRESHOLDS)

        assert [(a.type, a.priority) for a in alerts] == [(AlertType.WARNING, 6)]
        assert alerts[0].data["avg_volatility"] == pytest.approx((2.5 + 3.1 + 1.2) / 3)

    def test_calm_market(self):
        snapshot = MarketSnapshot(index_returns={"S&P 500": quote(0.4), "NASDAQ": quote(-0.8)})
        assert analyze_index_volatility(snapshot, THRESHOLDS) == []

    def test_no_headline_index(self):
        snapshot = MarketSnapshot(index_returns={"VIX": quote(10.0)})
        with pytest.raises(PartialSourceFailure):
            analyze_index_volatility(snapshot, THRESHOLDS)


class TestVolumeAnomalies:
    def test_every_symbol_over_ratio_alerts(self):
        snapshot = MarketSnapshot(symbol_volumes={
            f"SYM{i}": VolumeStat(current=4_000_000, average=1_000_000) for i in range(25)
        })
        alerts = analyze_volume_anomalies(snapshot, THRESHOLDS)

        assert len(alerts) == 25
        assert all(a.category == AlertCategory.VOLUME and a.priority == 4 for a in alerts)
        assert len({a.id for a in alerts}) == 25

    def test_ratio_must_exceed_threshold(self):
        snapshot = MarketSnapshot(symbol_volumes={
            "AAPL": VolumeStat(current=3_000_000, average=1_000_000),
            "MSFT": VolumeStat(current=3_500_000, average=1_000_000),
        })
        alerts = analyze_volume_anomalies(snapshot, THRESHOLDS)
        assert [a.data["symbol"] for a in alerts] == ["MSFT"]
        assert alerts[0].data["volume_ratio"] == 3.5

    def test_zero_average_is_skipped(self):
        snapshot = MarketSnapshot(symbol_volumes={"IPO": VolumeStat(current=9_000_000, average=0)})
        assert analyze_volume_anomalies(snapshot, THRESHOLDS) == []

    def test_missing_volumes(self):
        with pytest.raises(PartialSourceFailure):
            analyze_volume_anomalies(MarketSnapshot(), THRESHOLDS)


def test_fallback_alerts_are_fixed():
    alerts = fallback_alerts()
    assert [(a.type, a.category, a.priority) for a in alerts] == [
        (AlertType.WARNING, AlertCategory.VOLATILITY, 6),
        (AlertType.INFO, AlertCategory.SECTOR, 5),
    ]
    assert all(a.data == {"source": "fallback"} for a in alerts)


def test_alert_ids_are_unique_within_a_pass():
    snapshot = MarketSnapshot(vix=45.0, vix_change=5.0)
    first = analyze_vix(snapshot, THRESHOLDS)
    second = analyze_vix(snapshot, THRESHOLDS)
    ids = [a.id for a in first + second]
    assert len(set(ids)) == len(ids)
