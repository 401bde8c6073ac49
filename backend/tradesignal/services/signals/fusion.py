"""
Signal Fusion Rules

Majority vote over RSI, MACD, Bollinger and moving-average sub-signals.
Volume is reported alongside but does not vote.
"""

from tradesignal.schemas.indicators import IndicatorBundle
from tradesignal.schemas.signals import (
    SignalType,
    Recommendation,
    BollingerPosition,
    VolumeSignal,
    ValueSignal,
    BollingerSignal,
    MovingAverageSignal,
    VolumeQualifier,
    SubSignals,
    TradingSignal,
)

RSI_OVERSOLD = 30
RSI_OVERBOUGHT = 70
VOLUME_HIGH_RATIO = 1.5
VOLUME_LOW_RATIO = 0.5

BASE_CONFIDENCE = 60
CONFIDENCE_PER_VOTE = 10
MAX_CONFIDENCE = 90
STRENGTH_PER_VOTE = 25
HOLD_STRENGTH = 50
DEFAULT_HOLD_CONFIDENCE = 60

NEUTRAL_REASON = "Technical indicators are neutral"

BUY_REASONS = {
    "rsi": "RSI oversold rebound",
    "macd": "MACD bullish cross",
    "bollinger": "Bounce off lower Bollinger band",
    "moving_average": "Price above rising moving averages",
}

SELL_REASONS = {
    "rsi": "RSI overbought",
    "macd": "MACD bearish cross",
    "bollinger": "Price at upper Bollinger band",
    "moving_average": "Price below falling moving averages",
}


# =============================================================================
# SUB-SIGNALS
# =============================================================================


def rsi_signal(value: float) -> SignalType:
    if value < RSI_OVERSOLD:
        return SignalType.BUY
    if value > RSI_OVERBOUGHT:
        return SignalType.SELL
    return SignalType.NEUTRAL


def macd_signal(macd: float, signal: float) -> SignalType:
    """MACD never votes NEUTRAL."""
    return SignalType.BUY if macd > signal else SignalType.SELL


def bollinger_position(close: float, upper: float, lower: float) -> BollingerPosition:
    if close > upper:
        return BollingerPosition.UPPER
    if close < lower:
        return BollingerPosition.LOWER
    return BollingerPosition.MIDDLE


def bollinger_signal(position: BollingerPosition) -> SignalType:
    if position == BollingerPosition.LOWER:
        return SignalType.BUY
    if position == BollingerPosition.UPPER:
        return SignalType.SELL
    return SignalType.NEUTRAL


def moving_average_signal(close: float, sma_short: float, sma_long: float) -> SignalType:
    if close > sma_short and sma_short > sma_long:
        return SignalType.BUY
    if close < sma_short and sma_short < sma_long:
        return SignalType.SELL
    return SignalType.NEUTRAL


def volume_signal(volume: float, avg_volume: float) -> VolumeSignal:
    if volume > avg_volume * VOLUME_HIGH_RATIO:
        return VolumeSignal.HIGH
    if volume < avg_volume * VOLUME_LOW_RATIO:
        return VolumeSignal.LOW
    return VolumeSignal.NORMAL


# =============================================================================
# FUSION
# =============================================================================


def _reason(votes: dict[str, SignalType], direction: SignalType) -> str:
    reasons = BUY_REASONS if direction == SignalType.BUY else SELL_REASONS
    agreeing = [reasons[name] for name, vote in votes.items() if vote == direction]
    return ", ".join(agreeing) if agreeing else NEUTRAL_REASON


def fuse_signal(
    symbol: str,
    indicators: IndicatorBundle,
    close: float,
    volume: float,
    avg_volume: float,
    hold_confidence: int = DEFAULT_HOLD_CONFIDENCE,
) -> TradingSignal:
    """
    Combine indicator sub-signals into one recommendation.

    BUY/SELL confidence is min(90, 60 + 10 * votes) and strength 25 * votes.
    A tie is HOLD with a fixed confidence and strength 50.
    """
    position = bollinger_position(close, indicators.bollinger.upper, indicators.bollinger.lower)
    votes = {
        "rsi": rsi_signal(indicators.rsi),
        "macd": macd_signal(indicators.macd.macd, indicators.macd.signal),
        "bollinger": bollinger_signal(position),
        "moving_average": moving_average_signal(close, indicators.sma20, indicators.sma50),
    }

    buy_count = sum(1 for vote in votes.values() if vote == SignalType.BUY)
    sell_count = sum(1 for vote in votes.values() if vote == SignalType.SELL)

    if buy_count > sell_count:
        overall = Recommendation.BUY
        confidence = min(MAX_CONFIDENCE, BASE_CONFIDENCE + buy_count * CONFIDENCE_PER_VOTE)
        strength = buy_count * STRENGTH_PER_VOTE
        reason = _reason(votes, SignalType.BUY)
    elif sell_count > buy_count:
        overall = Recommendation.SELL
        confidence = min(MAX_CONFIDENCE, BASE_CONFIDENCE + sell_count * CONFIDENCE_PER_VOTE)
        strength = sell_count * STRENGTH_PER_VOTE
        reason = _reason(votes, SignalType.SELL)
    else:
        overall = Recommendation.HOLD
        confidence = hold_confidence
        strength = HOLD_STRENGTH
        reason = NEUTRAL_REASON

    return TradingSignal(
        type=overall,
        symbol=symbol,
        confidence=confidence,
        strength=strength,
        reason=reason,
        sub_signals=SubSignals(
            rsi=ValueSignal(value=round(indicators.rsi, 2), signal=votes["rsi"]),
            macd=ValueSignal(value=round(indicators.macd.macd, 2), signal=votes["macd"]),
            bollinger=BollingerSignal(position=position, signal=votes["bollinger"]),
            moving_average=MovingAverageSignal(signal=votes["moving_average"]),
            volume=VolumeQualifier(signal=volume_signal(volume, avg_volume)),
        ),
    )
