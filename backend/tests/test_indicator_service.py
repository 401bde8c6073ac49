"""
Indicator service: bundle assembly, degradation and MACD state threading.
"""

import asyncio
from datetime import timedelta

import pytest

from tradesignal.schemas.market import SymbolSeries
from tradesignal.services.base import InsufficientDataError, InvalidBarError
from tradesignal.services.indicators import IndicatorService, MacdState, MacdStateStore


@pytest.fixture
def service():
    return IndicatorService()


def test_full_history_has_no_degraded_indicators(service, uptrend_bars):
    bundle = service.compute(uptrend_bars)

    assert bundle.degraded == []
    assert bundle.rsi == 100.0
    assert bundle.sma20 == pytest.approx(sum(range(140, 160)) / 20)
    assert bundle.sma50 == pytest.approx(sum(range(110, 160)) / 50)
    assert bundle.macd.histogram == bundle.macd.macd - bundle.macd.signal
    assert bundle.bollinger.upper >= bundle.bollinger.middle >= bundle.bollinger.lower
    assert bundle.atr > 0


def test_short_series_degrades_to_neutral_values(service, make_bars):
    bundle = service.compute(make_bars([100.0, 101.0, 100.5, 102.0, 101.0]))

    assert bundle.rsi == 50.0
    assert (bundle.stochastic.k, bundle.stochastic.d) == (50.0, 50.0)
    assert bundle.williams_r == -50.0
    assert bundle.sma20 == bundle.sma50 == 101.0
    assert set(bundle.degraded) == {
        "rsi", "macd", "bollinger", "sma20", "sma50", "ema12", "ema26",
        "stochastic", "williams_r", "atr",
    }


def test_medium_series_degrades_only_long_windows(service, make_bars):
    bundle = service.compute(make_bars([100.0 + (i % 5) for i in range(30)]))
    assert bundle.degraded == ["sma50"]


def test_empty_series_is_rejected(service):
    with pytest.raises(InsufficientDataError):
        service.compute([])


def test_malformed_bar_is_rejected(service, make_bars):
    bars = make_bars([100.0, 101.0, 102.0])
    bars[1] = bars[1].model_copy(update={"volume": -5})
    with pytest.raises(InvalidBarError):
        service.compute(bars)


def test_execute_matches_compute(service, uptrend_bars):
    bundle = asyncio.run(service.execute(SymbolSeries(symbol="AAPL", bars=uptrend_bars)))
    assert bundle == service.compute(uptrend_bars)


def test_health_check(service):
    assert asyncio.run(service.health_check()) is True


class TestMacdState:
    def test_empty_state_is_primed_from_series(self, service, uptrend_bars):
        state = MacdState(max_size=100)
        bundle = service.compute(uptrend_bars, macd_state=state)

        assert len(state) == len(uptrend_bars)
        assert state.last_date == uptrend_bars[-1].date
        assert state.values()[-1] == bundle.macd.macd
        assert bundle.macd.histogram == bundle.macd.macd - bundle.macd.signal

    def test_state_is_bounded(self, service, uptrend_bars):
        state = MacdState(max_size=30)
        service.compute(uptrend_bars, macd_state=state)
        assert len(state) == 30

    def test_new_bar_appends_one_point(self, service, make_bars):
        closes = [100.0 + i for i in range(61)]
        state = MacdState()
        service.compute(make_bars(closes[:60]), macd_state=state)
        service.compute(make_bars(closes), macd_state=state)

        assert len(state) == 61

    def test_recomputing_same_bar_overwrites(self, service, uptrend_bars):
        state = MacdState()
        first = service.compute(uptrend_bars, macd_state=state)
        second = service.compute(uptrend_bars, macd_state=state)

        assert len(state) == len(uptrend_bars)
        assert first == second

    def test_older_series_reprimes(self, service, make_bars, uptrend_bars):
        state = MacdState()
        service.compute(uptrend_bars, macd_state=state)
        shorter = uptrend_bars[:40]
        service.compute(shorter, macd_state=state)

        assert len(state) == 40
        assert state.last_date == shorter[-1].date

    def test_update_rejects_older_dates(self, uptrend_bars):
        state = MacdState()
        assert state.update(uptrend_bars[5].date, 105.0, 1.0)
        assert not state.update(uptrend_bars[4].date, 104.0, 2.0)
        assert state.values() == [1.0]

    def test_conflicting_history_is_rebuilt(self, service, make_bars):
        target = make_bars([100.0 + i for i in range(30)] + [129.0] * 10)
        other = make_bars([200.0 - i for i in range(40)])

        state = MacdState()
        service.compute(other, macd_state=state)
        reused = service.compute(target, macd_state=state)
        fresh = service.compute(target, macd_state=MacdState())

        assert reused.macd == fresh.macd
        assert state.matches([b.date for b in target], [b.close for b in target])

    def test_one_changed_close_is_detected(self, service, make_bars):
        closes = [100.0 + (i % 7) for i in range(40)]
        state = MacdState()
        service.compute(make_bars(closes), macd_state=state)

        revised = list(closes)
        revised[20] += 5.0
        bars = make_bars(revised)
        assert not state.matches([b.date for b in bars], [b.close for b in bars])

        reused = service.compute(bars, macd_state=state)
        assert reused.macd == service.compute(bars, macd_state=MacdState()).macd

    def test_later_series_without_overlap_extends_history(self, service, make_bars):
        state = MacdState()
        first = make_bars([100.0 + i for i in range(30)])
        service.compute(first, macd_state=state)

        later = make_bars([140.0 + i for i in range(5)], start=first[-1].date + timedelta(days=10))
        service.compute(later, macd_state=state)

        assert len(state) == 35
        assert state.last_date == later[-1].date


def test_state_store_is_keyed_by_symbol():
    store = MacdStateStore(max_size=10)
    aapl = store.get("AAPL")
    assert store.get("AAPL") is aapl
    assert store.get("MSFT") is not aapl
    assert len(store) == 2

    store.reset("AAPL")
    assert "AAPL" not in store
    store.reset()
    assert len(store) == 0


def test_state_store_evicts_least_recently_used():
    store = MacdStateStore(max_size=10, max_symbols=3)
    for symbol in ("AAPL", "MSFT", "NVDA"):
        store.get(symbol)

    store.get("AAPL")
    store.get("TSLA")

    assert len(store) == 3
    assert "MSFT" not in store
    assert all(s in store for s in ("AAPL", "NVDA", "TSLA"))


def test_state_store_stays_bounded():
    store = MacdStateStore(max_size=5, max_symbols=100)
    for i in range(5000):
        store.get(f"SYM{i}")

    assert len(store) == 100
    assert "SYM4999" in store
    assert "SYM0" not in store


def test_state_store_rejects_zero_capacity():
    with pytest.raises(ValueError):
        MacdStateStore(max_symbols=0)
