"""
Shared fixtures: synthetic OHLCV series.
"""

from datetime import date, timedelta
from typing import Optional, Sequence

import pytest

from tradesignal.schemas.market import PriceBar
from tradesignal.schemas.indicators import (
    IndicatorBundle,
    MACDData,
    BollingerBandsData,
    StochasticData,
)

START = date(2024, 1, 1)


def build_bars(
    closes: Sequence[float],
    volumes: Optional[Sequence[int]] = None,
    spread: float = 1.0,
    start: date = START,
) -> list[PriceBar]:
    """Bars whose open is the previous close and whose range pads open/close by `spread`."""
    bars = []
    for i, close in enumerate(closes):
        open_ = closes[i - 1] if i else close
        bars.append(PriceBar(
            date=start + timedelta(days=i),
            open=open_,
            high=max(open_, close) + spread,
            low=min(open_, close) - spread,
            close=close,
            volume=volumes[i] if volumes is not None else 1_000_000,
        ))
    return bars


def build_bundle(
    rsi: float = 50.0,
    macd: float = 0.0,
    signal: float = 0.0,
    upper: float = 110.0,
    middle: float = 100.0,
    lower: float = 90.0,
    sma20: float = 100.0,
    sma50: float = 100.0,
) -> IndicatorBundle:
    return IndicatorBundle(
        rsi=rsi,
        macd=MACDData(macd=macd, signal=signal, histogram=macd - signal),
        bollinger=BollingerBandsData(upper=upper, middle=middle, lower=lower),
        sma20=sma20,
        sma50=sma50,
        ema12=100.0,
        ema26=100.0,
        stochastic=StochasticData(k=50.0, d=50.0),
        williams_r=-50.0,
        atr=1.0,
    )


@pytest.fixture
def make_bars():
    return build_bars


@pytest.fixture
def make_bundle():
    return build_bundle


@pytest.fixture
def uptrend_bars():
    """60 strictly rising closes, 100 -> 159."""
    return build_bars([100.0 + i for i in range(60)])


@pytest.fixture
def downtrend_bars():
    """60 strictly falling closes, 200 -> 141."""
    return build_bars([200.0 - i for i in range(60)])
