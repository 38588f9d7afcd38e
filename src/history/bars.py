"""Append-only bar history with offset and absolute addressing.

Bars are addressed two ways:
- by offset from the newest bar (offset 0 = newest, offset k = k bars back)
- by absolute index with a seek origin (BEGIN: 0 = oldest, END: 0 = newest)

Only confirmed bars are stored; a bar never changes once appended.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum, auto
from typing import Iterator, List

import pandas as pd

from config.config import PriceType


class SeekOrigin(Enum):
    """Where an absolute bar index is counted from."""
    BEGIN = auto()
    END = auto()


class UpdateReason(Enum):
    """Why the host is notifying the detector."""
    NEW_TICK = auto()          # Forming bar changed, ignored by the detector
    NEW_BAR = auto()           # A bar closed
    HISTORY_UPDATE = auto()    # Preloaded / reloaded bar


@dataclass(frozen=True)
class Bar:
    """A single confirmed OHLCV bar."""
    timestamp: datetime
    open: float
    high: float
    low: float
    close: float
    volume: float = 0.0

    def __getitem__(self, price_type: PriceType) -> float:
        """Price of this bar for a price type, including derived prices."""
        price_type = PriceType(price_type)
        if price_type is PriceType.MEDIAN:
            return (self.high + self.low) / 2
        if price_type is PriceType.TYPICAL:
            return (self.high + self.low + self.close) / 3
        if price_type is PriceType.WEIGHTED:
            return (self.high + self.low + 2 * self.close) / 4
        return getattr(self, price_type.value)


class BarHistory:
    """
    Historical price data for one symbol/timeframe.

    Usage:
        history = BarHistory()
        history.append(Bar(ts, 100, 101, 99, 100.5))

        low = history.get_price(PriceType.LOW, offset=5)
        first = history[0, SeekOrigin.BEGIN][PriceType.CLOSE]
    """

    def __init__(self):
        self._bars: List[Bar] = []

    @property
    def count(self) -> int:
        """Number of confirmed bars."""
        return len(self._bars)

    def __len__(self) -> int:
        return len(self._bars)

    def __iter__(self) -> Iterator[Bar]:
        return iter(list(self._bars))

    def append(self, bar: Bar) -> None:
        """Append a confirmed bar. Timestamps must not go backwards."""
        if self._bars and bar.timestamp < self._bars[-1].timestamp:
            raise ValueError(
                f"Bar at {bar.timestamp} is older than the last bar at {self._bars[-1].timestamp}"
            )
        self._bars.append(bar)

    def clear(self) -> None:
        """Drop all bars (series reload)."""
        self._bars.clear()

    def absolute_index(self, index: int, origin: SeekOrigin = SeekOrigin.END) -> int:
        """Convert an index with origin into a position counted from the oldest bar."""
        position = index if origin is SeekOrigin.BEGIN else len(self._bars) - 1 - index
        if index < 0 or position < 0 or position >= len(self._bars):
            raise IndexError(
                f"Bar index {index} ({origin.name}) out of range for {len(self._bars)} bars"
            )
        return position

    def bar_at(self, index: int, origin: SeekOrigin = SeekOrigin.END) -> Bar:
        """Get a bar by absolute index and seek origin."""
        return self._bars[self.absolute_index(index, origin)]

    def __getitem__(self, key) -> Bar:
        """history[offset] or history[index, origin]."""
        if isinstance(key, tuple):
            index, origin = key
            return self.bar_at(index, origin)
        return self.bar_at(key, SeekOrigin.END)

    def get_price(self, price_type: PriceType, offset: int = 0) -> float:
        """Price of the bar `offset` bars back from the newest."""
        return self.bar_at(offset, SeekOrigin.END)[price_type]

    def time(self, offset: int = 0) -> datetime:
        """Timestamp of the bar `offset` bars back from the newest."""
        return self.bar_at(offset, SeekOrigin.END).timestamp

    def to_frame(self) -> pd.DataFrame:
        """OHLCV DataFrame indexed by timestamp, oldest first."""
        return pd.DataFrame(
            {
                "open": [bar.open for bar in self._bars],
                "high": [bar.high for bar in self._bars],
                "low": [bar.low for bar in self._bars],
                "close": [bar.close for bar in self._bars],
                "volume": [bar.volume for bar in self._bars],
            },
            index=pd.DatetimeIndex([bar.timestamp for bar in self._bars], name="timestamp"),
            dtype=float,
        )
