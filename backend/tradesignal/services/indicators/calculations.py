"""
Technical Indicator Calculations

Pure Python/NumPy implementations of technical indicators.
Each function returns the value for the most recent bar only.
All math is deterministic.
"""

import numpy as np
from dataclasses import dataclass
from typing import Optional, Sequence

from tradesignal.schemas.market import PriceBar


@dataclass
class OHLCVData:
    """OHLCV data arrays for calculations."""

    opens: np.ndarray
    highs: np.ndarray
    lows: np.ndarray
    closes: np.ndarray
    volumes: np.ndarray

    @classmethod
    def from_bars(cls, bars: Sequence[PriceBar]) -> "OHLCVData":
        return cls(
            opens=np.array([b.open for b in bars], dtype=float),
            highs=np.array([b.high for b in bars], dtype=float),
            lows=np.array([b.low for b in bars], dtype=float),
            closes=np.array([b.close for b in bars], dtype=float),
            volumes=np.array([b.volume for b in bars], dtype=float),
        )

    def __len__(self) -> int:
        return len(self.closes)


def clamp(value: float, lower: float, upper: float) -> float:
    return float(min(max(value, lower), upper))


# =============================================================================
# MOVING AVERAGES
# =============================================================================


def sma(data: np.ndarray, period: int) -> float:
    """Simple Moving Average of the trailing window (last value if too short)."""
    if len(data) == 0:
        return 0.0
    if len(data) < period:
        return float(data[-1])
    return float(np.mean(data[-period:]))


def ema_series(data: np.ndarray, period: int) -> np.ndarray:
    """
    Exponential Moving Average at every index.

    Seeded with the first element rather than an SMA, so early values lean
    toward the first observed price.
    """
    result = np.empty(len(data))
    if len(data) == 0:
        return result

    multiplier = 2 / (period + 1)
    result[0] = data[0]
    for i in range(1, len(data)):
        result[i] = data[i] * multiplier + result[i - 1] * (1 - multiplier)
    return result


def ema(data: np.ndarray, period: int) -> float:
    """Exponential Moving Average (last value if fewer than `period` points)."""
    if len(data) == 0:
        return 0.0
    if len(data) < period:
        return float(data[-1])
    return float(ema_series(data, period)[-1])


def volume_average(volumes: np.ndarray, window: int = 20) -> float:
    """Mean volume over the trailing window (or all bars if fewer)."""
    if len(volumes) == 0:
        return 0.0
    return float(np.mean(volumes[-window:]))


# =============================================================================
# MOMENTUM INDICATORS
# =============================================================================


def rsi(closes: np.ndarray, period: int = 14) -> float:
    """
    Relative Strength Index over the trailing window.

    Gains and losses are simple averages of the last `period` deltas, not
    Wilder-smoothed over the full history. Returns 50 when there are fewer
    than `period + 1` closes.
    """
    if len(closes) < period + 1:
        return 50.0

    deltas = np.diff(closes[-(period + 1):])
    gains = np.where(deltas > 0, deltas, 0.0)
    losses = np.where(deltas < 0, -deltas, 0.0)

    avg_gain = np.mean(gains)
    avg_loss = np.mean(losses)

    if avg_loss == 0:
        return 100.0

    rs = avg_gain / avg_loss
    return clamp(100 - (100 / (1 + rs)), 0.0, 100.0)


def macd_history(
    closes: np.ndarray, fast_period: int = 12, slow_period: int = 26
) -> np.ndarray:
    """
    MACD line value for every prefix of the series.

    Element i equals ema(closes[:i+1], fast) - ema(closes[:i+1], slow), so the
    last element is the current MACD value.
    """
    if len(closes) == 0:
        return np.array([], dtype=float)

    prefix_len = np.arange(1, len(closes) + 1)
    fast_ema = np.where(prefix_len < fast_period, closes, ema_series(closes, fast_period))
    slow_ema = np.where(prefix_len < slow_period, closes, ema_series(closes, slow_period))
    return fast_ema - slow_ema


def macd(
    closes: np.ndarray,
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
    history: Optional[Sequence[float]] = None,
) -> tuple[float, float, float]:
    """
    MACD (Moving Average Convergence Divergence).

    `history` is the MACD value history ending with the current bar. When it
    is omitted the history is rebuilt from the series prefixes.

    Returns: (macd, signal, histogram)
    """
    line = macd_history(closes, fast_period, slow_period)
    if len(line) == 0:
        return 0.0, 0.0, 0.0

    macd_val = float(line[-1])
    values = line if history is None else np.asarray(history, dtype=float)
    signal_val = ema(values, signal_period)

    return macd_val, signal_val, macd_val - signal_val


def _percent_k(
    highs: np.ndarray, lows: np.ndarray, closes: np.ndarray, end: int, period: int
) -> float:
    """%K for the window ending at index `end` (inclusive)."""
    highest_high = np.max(highs[end - period + 1 : end + 1])
    lowest_low = np.min(lows[end - period + 1 : end + 1])

    if highest_high == lowest_low:
        return 50.0
    k = ((closes[end] - lowest_low) / (highest_high - lowest_low)) * 100
    return clamp(k, 0.0, 100.0)


def stochastic(
    highs: np.ndarray,
    lows: np.ndarray,
    closes: np.ndarray,
    k_period: int = 14,
    d_period: int = 3,
) -> tuple[float, float]:
    """
    Stochastic Oscillator.

    %D is the mean of the last `d_period` %K values. When there is not
    enough history for that, %D equals %K.

    Returns: (k, d)
    """
    n = len(closes)
    if n < k_period:
        return 50.0, 50.0

    k = _percent_k(highs, lows, closes, n - 1, k_period)

    if n < k_period + d_period - 1:
        return k, k

    k_values = [_percent_k(highs, lows, closes, i, k_period) for i in range(n - d_period, n)]
    d = clamp(float(np.mean(k_values)), 0.0, 100.0)
    return k, d


def williams_r(
    highs: np.ndarray, lows: np.ndarray, closes: np.ndarray, period: int = 14
) -> float:
    """Williams %R."""
    if len(closes) < period:
        return -50.0

    highest_high = np.max(highs[-period:])
    lowest_low = np.min(lows[-period:])

    if highest_high == lowest_low:
        return -50.0

    result = ((highest_high - closes[-1]) / (highest_high - lowest_low)) * -100
    return clamp(result, -100.0, 0.0)


# =============================================================================
# VOLATILITY INDICATORS
# =============================================================================


def true_range(highs: np.ndarray, lows: np.ndarray, closes: np.ndarray) -> np.ndarray:
    """True range for every bar after the first."""
    if len(closes) < 2:
        return np.array([], dtype=float)

    prev_close = closes[:-1]
    return np.maximum.reduce([
        highs[1:] - lows[1:],
        np.abs(highs[1:] - prev_close),
        np.abs(lows[1:] - prev_close),
    ])


def atr(
    highs: np.ndarray, lows: np.ndarray, closes: np.ndarray, period: int = 14
) -> float:
    """Average True Range (SMA of true range)."""
    if len(closes) < 2:
        return 0.0
    return sma(true_range(highs, lows, closes), period)


def bollinger_bands(
    closes: np.ndarray, period: int = 20, std_dev: float = 2.0
) -> tuple[float, float, float]:
    """
    Bollinger Bands.

    Population standard deviation of the trailing window around the middle
    band.

    Returns: (upper, middle, lower)
    """
    if len(closes) == 0:
        return 0.0, 0.0, 0.0

    middle = sma(closes, period)
    window = closes[-period:]
    std = float(np.sqrt(np.mean((window - middle) ** 2)))

    return middle + (std_dev * std), middle, middle - (std_dev * std)
