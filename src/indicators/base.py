"""Price sources, streaming averages and the offset-addressable oscillator series."""

import math
from collections import deque
from typing import List

import numpy as np
import pandas as pd

from config.config import PriceType
from history.bars import BarHistory, SeekOrigin


def price_source(df: pd.DataFrame, source: PriceType) -> pd.Series:
    """
    Get an input price series from OHLC data.

    Args:
        df: DataFrame with open/high/low/close (and optionally volume) columns
        source: Price type, including derived median/typical/weighted prices

    Returns:
        Price Series aligned with df
    """
    source = PriceType(source)

    if source is PriceType.MEDIAN:
        return (df['high'] + df['low']) / 2
    if source is PriceType.TYPICAL:
        return (df['high'] + df['low'] + df['close']) / 3
    if source is PriceType.WEIGHTED:
        return (df['high'] + df['low'] + 2 * df['close']) / 4
    if source.value not in df.columns:
        raise ValueError(f"Source column '{source.value}' not found in DataFrame")
    return df[source.value].astype(float)


class EMAState:
    """
    One-value-at-a-time equivalent of `Series.ewm(alpha=..., adjust=False, min_periods=...).mean()`.

    NaN inputs are only expected as a leading run (warm-up of an upstream
    series); they are skipped and the current average is carried.
    """

    def __init__(self, alpha: float, min_periods: int):
        self.alpha = alpha
        self.min_periods = min_periods
        self._average = math.nan
        self._observations = 0

    def update(self, x: float) -> float:
        if not math.isnan(x):
            self._observations += 1
            if math.isnan(self._average):
                self._average = x
            elif self._average != x:
                old_weight = 1.0 - self.alpha
                self._average = (old_weight * self._average + self.alpha * x) / (old_weight + self.alpha)
        return self._average if self._observations >= self.min_periods else math.nan


class SMAState:
    """One-value-at-a-time equivalent of `Series.rolling(period).mean()`."""

    def __init__(self, period: int):
        self.period = period
        self._window = deque(maxlen=period)

    def update(self, x: float) -> float:
        self._window.append(x)
        if len(self._window) < self.period:
            return math.nan
        # NaN anywhere in the window propagates, as in pandas
        return sum(self._window) / self.period


class OscillatorSeries:
    """
    Oscillator output bound to a bar history.

    Each appended bar is fed once to the indicator's streaming state, so
    keeping up with the history costs O(window) per bar regardless of its
    length. A history that is cleared and reloaded is recomputed from its
    first bar.

    Usage:
        series = OscillatorSeries(RSI(14), history)
        newest = series.get_value(0)
        oldest = series.get_value_at(0, SeekOrigin.BEGIN)
    """

    def __init__(self, indicator, history: BarHistory):
        """
        Args:
            indicator: Calculator exposing stream() -> object with update(bar) -> float
            history: Bar history the values are computed from
        """
        self.indicator = indicator
        self.history = history
        self._values: List[float] = []
        self._first_bar = None
        self._stream = indicator.stream()

    @property
    def name(self) -> str:
        return getattr(self.indicator, "name", type(self.indicator).__name__)

    @property
    def count(self) -> int:
        """Number of bars with an output slot (NaN during warm-up)."""
        return self.history.count

    @property
    def values(self) -> np.ndarray:
        """Snapshot of all values, oldest first."""
        self._refresh()
        return np.array(self._values, dtype=float)

    def get_value(self, offset: int = 0) -> float:
        """Value `offset` bars back from the newest bar."""
        return self.get_value_at(offset, SeekOrigin.END)

    def get_value_at(self, index: int, origin: SeekOrigin = SeekOrigin.END) -> float:
        """Value at an absolute index counted from the given origin."""
        self._refresh()
        position = self.history.absolute_index(index, origin)
        return self._values[position]

    def _refresh(self) -> None:
        count = self.history.count
        first_bar = self.history.bar_at(0, SeekOrigin.BEGIN) if count else None
        if count < len(self._values) or (self._values and first_bar is not self._first_bar):
            # History was cleared and reloaded
            self._values = []
            self._stream = self.indicator.stream()
        self._first_bar = first_bar

        for position in range(len(self._values), count):
            bar = self.history.bar_at(position, SeekOrigin.BEGIN)
            self._values.append(float(self._stream.update(bar)))
