"""Awesome Oscillator implementation."""

import pandas as pd
from dataclasses import dataclass

from config.config import PriceType
from .base import SMAState, price_source


@dataclass
class AOResult:
    """Awesome Oscillator calculation results."""
    ao: pd.Series        # SMA(median, fast) - SMA(median, slow)
    rising: pd.Series    # Bar is above the previous bar (green histogram)


class AwesomeOscillator:
    """Bill Williams' Awesome Oscillator on the median price."""

    name = "AO"

    def __init__(self, fast: int = 5, slow: int = 34):
        if min(fast, slow) < 1:
            raise ValueError(f"AO periods must be >= 1, got {fast}/{slow}")
        if fast >= slow:
            raise ValueError(f"AO fast period ({fast}) must be below slow period ({slow})")
        self.fast = fast
        self.slow = slow

    @property
    def warmup(self) -> int:
        """Number of leading bars without a value."""
        return self.slow - 1

    def calculate(self, df: pd.DataFrame) -> AOResult:
        median = price_source(df, PriceType.MEDIAN)
        ao = median.rolling(window=self.fast).mean() - median.rolling(window=self.slow).mean()
        return AOResult(ao=ao, rising=ao > ao.shift(1))

    def values(self, df: pd.DataFrame) -> pd.Series:
        """Series compared against price for divergences."""
        return self.calculate(df).ao

    def stream(self) -> "AOStream":
        """Bar-by-bar calculator producing the same values as `values`."""
        return AOStream(self)


class AOStream:
    """Incremental Awesome Oscillator over the last `slow` median prices."""

    def __init__(self, ao: AwesomeOscillator):
        self._fast = SMAState(ao.fast)
        self._slow = SMAState(ao.slow)

    def update(self, bar) -> float:
        median = bar[PriceType.MEDIAN]
        return self._fast.update(median) - self._slow.update(median)
