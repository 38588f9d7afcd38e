"""Relative Strength Index implementation."""

import math

import pandas as pd
import numpy as np
from dataclasses import dataclass

from config.config import PriceType, RSIMode
from .base import EMAState, SMAState, price_source


@dataclass
class RSIResult:
    """RSI calculation results."""
    rsi: pd.Series        # 0-100, NaN during warm-up
    avg_gain: pd.Series   # Smoothed gains
    avg_loss: pd.Series   # Smoothed losses


class RSI:
    """
    Relative Strength Index oscillator.

    RSI = 100 - 100 / (1 + avg_gain / avg_loss)

    Exponential mode smooths gains and losses with Wilder's average
    (alpha = 1 / period); simple mode uses a rolling mean.
    The first `period` bars are NaN.
    """

    name = "RSI"

    def __init__(
        self,
        period: int = 14,
        source: PriceType = PriceType.CLOSE,
        mode: RSIMode = RSIMode.EXPONENTIAL
    ):
        """
        Initialize RSI indicator.

        Args:
            period: Averaging period (default 14)
            source: Price used as input (default close)
            mode: Simple or exponential averaging (default exponential)
        """
        if period < 1:
            raise ValueError(f"RSI period must be >= 1, got {period}")
        self.period = period
        self.source = PriceType(source)
        self.mode = RSIMode(mode)

    @property
    def warmup(self) -> int:
        """Number of leading bars without a value."""
        return self.period

    def calculate(self, df: pd.DataFrame) -> RSIResult:
        """
        Calculate RSI values.

        Args:
            df: DataFrame with OHLC data

        Returns:
            RSIResult with RSI and the smoothed averages
        """
        src = price_source(df, self.source)

        delta = src.diff()
        gain = delta.clip(lower=0)
        loss = (-delta).clip(lower=0)

        if self.mode is RSIMode.EXPONENTIAL:
            avg_gain = gain.ewm(alpha=1 / self.period, adjust=False, min_periods=self.period).mean()
            avg_loss = loss.ewm(alpha=1 / self.period, adjust=False, min_periods=self.period).mean()
        else:
            avg_gain = gain.rolling(window=self.period).mean()
            avg_loss = loss.rolling(window=self.period).mean()

        # Handle division by zero: no losses means RSI 100, a flat window means 50
        rs = avg_gain / avg_loss.replace(0, np.nan)
        rsi = 100 - 100 / (1 + rs)
        rsi = rsi.mask((avg_loss == 0) & (avg_gain > 0), 100.0)
        rsi = rsi.mask((avg_loss == 0) & (avg_gain == 0), 50.0)

        return RSIResult(rsi=rsi, avg_gain=avg_gain, avg_loss=avg_loss)

    def values(self, df: pd.DataFrame) -> pd.Series:
        """Series compared against price for divergences."""
        return self.calculate(df).rsi

    def stream(self) -> "RSIStream":
        """Bar-by-bar calculator producing the same values as `values`."""
        return RSIStream(self)


class RSIStream:
    """Incremental RSI: keeps the previous price and the smoothed gain/loss state."""

    def __init__(self, rsi: RSI):
        self.source = rsi.source
        self._prev_price = math.nan
        if rsi.mode is RSIMode.EXPONENTIAL:
            self._gain = EMAState(alpha=1 / rsi.period, min_periods=rsi.period)
            self._loss = EMAState(alpha=1 / rsi.period, min_periods=rsi.period)
        else:
            self._gain = SMAState(rsi.period)
            self._loss = SMAState(rsi.period)

    def update(self, bar) -> float:
        price = bar[self.source]
        delta = price - self._prev_price
        self._prev_price = price
        if math.isnan(delta):
            return math.nan

        avg_gain = self._gain.update(max(delta, 0.0))
        avg_loss = self._loss.update(max(-delta, 0.0))

        if math.isnan(avg_gain) or math.isnan(avg_loss):
            return math.nan
        if avg_loss == 0:
            return 100.0 if avg_gain > 0 else 50.0
        return 100 - 100 / (1 + avg_gain / avg_loss)


def calculate_rsi(
    df: pd.DataFrame,
    period: int = 14,
    source: PriceType = PriceType.CLOSE,
    mode: RSIMode = RSIMode.EXPONENTIAL
) -> pd.Series:
    """
    Convenience function to calculate RSI.

    Args:
        df: DataFrame with OHLC data
        period: Averaging period
        source: Input price
        mode: Simple or exponential averaging

    Returns:
        RSI Series
    """
    return RSI(period, source, mode).calculate(df).rsi
