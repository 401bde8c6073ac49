"""
Incremental MACD State

The MACD signal line is an EMA of MACD values, so a meaningful signal needs a
history of past MACD readings. MacdState holds that history for one symbol
and is folded forward one bar at a time. The caller owns the state and
passes it into the indicator service on each call.

Each point remembers the close it was computed from, so a series that
disagrees with the stored bars can be detected and the history rebuilt.
"""

import datetime as dt
import logging
from collections import OrderedDict, deque
from typing import Iterable, NamedTuple, Optional, Sequence

logger = logging.getLogger(__name__)


class MacdPoint(NamedTuple):
    date: dt.date
    close: float
    macd: float


class MacdState:
    """Bounded (date, close, macd) history for one symbol."""

    def __init__(self, max_size: int = 100):
        self._points: deque[MacdPoint] = deque(maxlen=max_size)

    def __len__(self) -> int:
        return len(self._points)

    @property
    def last_date(self) -> Optional[dt.date]:
        return self._points[-1].date if self._points else None

    def values(self) -> list[float]:
        return [point.macd for point in self._points]

    def prime(
        self,
        dates: Iterable[dt.date],
        closes: Iterable[float],
        values: Iterable[float],
    ) -> None:
        """Replace the history (only the newest `max_size` points are kept)."""
        self._points.clear()
        self._points.extend(
            MacdPoint(d, float(c), float(v)) for d, c, v in zip(dates, closes, values)
        )

    def update(self, date: dt.date, close: float, value: float) -> bool:
        """
        Record the MACD value for `date`.

        A newer date is appended, the current date is overwritten (a bar that
        was recomputed). Returns False for a date older than the last one.
        """
        point = MacdPoint(date, float(close), float(value))
        last = self.last_date
        if last is None or date > last:
            self._points.append(point)
            return True
        if date == last:
            self._points[-1] = point
            return True
        return False

    def matches(self, dates: Sequence[dt.date], closes: Sequence[float]) -> bool:
        """
        True when every stored point inside the span of `dates` has a bar on
        the same date with the same close.

        Points older than the first date cannot be checked and are trusted.
        """
        if not dates:
            return not self._points
        submitted = dict(zip(dates, (float(c) for c in closes)))
        first = dates[0]
        for point in self._points:
            if point.date < first:
                continue
            if submitted.get(point.date) != point.close:
                return False
        return True


class MacdStateStore:
    """
    MacdState per symbol, least recently used symbols evicted first.

    Holds at most `max_symbols` states so the store stays bounded however
    many distinct symbols are requested.
    """

    def __init__(self, max_size: int = 100, max_symbols: int = 1000):
        if max_symbols < 1:
            raise ValueError("max_symbols must be at least 1")
        self._max_size = max_size
        self._max_symbols = max_symbols
        self._states: OrderedDict[str, MacdState] = OrderedDict()

    def __contains__(self, symbol: str) -> bool:
        return symbol in self._states

    def __len__(self) -> int:
        return len(self._states)

    @property
    def max_symbols(self) -> int:
        return self._max_symbols

    def get(self, symbol: str) -> MacdState:
        """Get or create the state for a symbol."""
        if symbol in self._states:
            self._states.move_to_end(symbol)
            return self._states[symbol]

        state = MacdState(self._max_size)
        self._states[symbol] = state
        if len(self._states) > self._max_symbols:
            evicted, _ = self._states.popitem(last=False)
            logger.debug(f"Evicted MACD history for {evicted}")
        return state

    def reset(self, symbol: Optional[str] = None) -> None:
        if symbol is None:
            self._states.clear()
        else:
            self._states.pop(symbol, None)
