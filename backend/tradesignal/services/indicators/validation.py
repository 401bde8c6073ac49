"""
Series Validator

Guards a price series before any indicator is computed.
"""

import math
from typing import Sequence

from tradesignal.schemas.market import PriceBar
from tradesignal.services.base import InsufficientDataError, InvalidBarError

SERVICE_NAME = "SeriesValidator"


def _check_bar(bar: PriceBar, index: int) -> None:
    prices = {"open": bar.open, "high": bar.high, "low": bar.low, "close": bar.close}
    for field_name, value in prices.items():
        if not math.isfinite(value):
            raise InvalidBarError(
                SERVICE_NAME,
                f"Bar {index} has non-finite {field_name}",
                {"index": index, "date": str(bar.date), "field": field_name},
            )

    if bar.volume < 0:
        raise InvalidBarError(
            SERVICE_NAME,
            f"Bar {index} has negative volume",
            {"index": index, "date": str(bar.date), "volume": bar.volume},
        )

    if bar.high < max(bar.open, bar.close) or bar.low > min(bar.open, bar.close):
        raise InvalidBarError(
            SERVICE_NAME,
            f"Bar {index} violates low <= open/close <= high",
            {"index": index, "date": str(bar.date), **prices},
        )


def validate_series(bars: Sequence[PriceBar], min_length: int = 0) -> Sequence[PriceBar]:
    """
    Return `bars` unchanged if well-formed.

    Raises:
        InsufficientDataError: fewer than `min_length` bars
        InvalidBarError: a bar breaks the OHLCV invariants or dates are not
            strictly increasing
    """
    if len(bars) < min_length:
        raise InsufficientDataError(
            SERVICE_NAME,
            f"Series has {len(bars)} bars, need at least {min_length}",
            {"length": len(bars), "min_length": min_length},
        )

    previous = None
    for index, bar in enumerate(bars):
        _check_bar(bar, index)
        if previous is not None and bar.date <= previous.date:
            raise InvalidBarError(
                SERVICE_NAME,
                f"Bar {index} is not after the previous bar ({bar.date} <= {previous.date})",
                {"index": index, "date": str(bar.date), "previous_date": str(previous.date)},
            )
        previous = bar

    return bars
