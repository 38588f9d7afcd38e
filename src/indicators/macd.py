"""MACD (Moving Average Convergence Divergence) implementation."""

import pandas as pd
from dataclasses import dataclass
from typing import Tuple

from config.config import PriceType
from .base import EMAState, price_source


@dataclass
class MACDResult:
    """MACD calculation results."""
    macd: pd.Series       # EMA(fast) - EMA(slow)
    signal: pd.Series     # EMA(macd, signal)
    histogram: pd.Series  # macd - signal


class MACD:
    """
    MACD oscillator.

    The MACD line is the divergence series; signal and histogram are
    returned for inspection and plotting.
    """

    name = "MACD"

    def __init__(
        self,
        fast: int = 12,
        slow: int = 26,
        signal: int = 1,
        source: PriceType = PriceType.CLOSE
    ):
        """
        Initialize MACD indicator.

        Args:
            fast: Fast EMA period (default 12)
            slow: Slow EMA period (default 26)
            signal: Signal line EMA period (default 1)
            source: Input price (default close)
        """
        if min(fast, slow, signal) < 1:
            raise ValueError(f"MACD periods must be >= 1, got {fast}/{slow}/{signal}")
        if fast >= slow:
            raise ValueError(f"MACD fast period ({fast}) must be below slow period ({slow})")
        self.fast = fast
        self.slow = slow
        self.signal = signal
        self.source = PriceType(source)

    @property
    def warmup(self) -> int:
        """Number of leading bars without a value."""
        return self.slow - 1

    def calculate(self, df: pd.DataFrame) -> MACDResult:
        """
        Calculate MACD values.

        Args:
            df: DataFrame with OHLC data

        Returns:
            MACDResult with MACD line, signal and histogram
        """
        src = price_source(df, self.source)

        ema_fast = self._ema(src, self.fast)
        ema_slow = self._ema(src, self.slow)
        macd = ema_fast - ema_slow

        signal = self._ema(macd, self.signal)
        histogram = macd - signal

        return MACDResult(macd=macd, signal=signal, histogram=histogram)

    def values(self, df: pd.DataFrame) -> pd.Series:
        """Series compared against price for divergences."""
        return self.calculate(df).macd

    def stream(self) -> "MACDStream":
        """Bar-by-bar calculator producing the same values as `values`."""
        return MACDStream(self)

    @staticmethod
    def _ema(series: pd.Series, period: int) -> pd.Series:
        """Calculate Exponential Moving Average, NaN until `period` values exist."""
        return series.ewm(span=period, adjust=False, min_periods=period).mean()


class MACDStream:
    """Incremental MACD line from carried fast and slow EMA state."""

    def __init__(self, macd: MACD):
        self.source = macd.source
        self._fast = EMAState(alpha=2 / (macd.fast + 1), min_periods=macd.fast)
        self._slow = EMAState(alpha=2 / (macd.slow + 1), min_periods=macd.slow)

    def update(self, bar) -> float:
        price = bar[self.source]
        return self._fast.update(price) - self._slow.update(price)


def calculate_macd(
    df: pd.DataFrame,
    fast: int = 12,
    slow: int = 26,
    signal: int = 1
) -> Tuple[pd.Series, pd.Series, pd.Series]:
    """
    Convenience function to calculate MACD values.

    Args:
        df: DataFrame with OHLC data
        fast: Fast EMA period
        slow: Slow EMA period
        signal: Signal EMA period

    Returns:
        Tuple of (macd, signal, histogram) Series
    """
    result = MACD(fast, slow, signal).calculate(df)
    return result.macd, result.signal, result.histogram
