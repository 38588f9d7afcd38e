"""
Shared fixtures and test configuration for the divergence detector test suite.

This module provides:
- Sample OHLCV data generators
- Bar builders for hand-written scenarios
- A scripted oscillator whose values are fixed per bar
- Detector instances wired to a bar history and replay feed
"""

import pytest
import pandas as pd
import numpy as np
from datetime import datetime, timedelta

# Path setup for imports
import sys
from pathlib import Path

project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))
sys.path.insert(0, str(project_root / "src"))

from history.bars import Bar, BarHistory
from history.replay import ReplayFeed
from indicators.base import OscillatorSeries


START = datetime(2024, 1, 1)


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================

@pytest.fixture
def sample_ohlcv_data():
    """Generate 300 bars of random-walk OHLCV data."""
    np.random.seed(42)
    n = 300

    timestamps = pd.date_range(start=START, periods=n, freq='4h')

    trend = np.cumsum(np.random.randn(n) * 50) + 95000

    df = pd.DataFrame({
        'open': trend + np.random.randn(n) * 100,
        'high': trend + np.abs(np.random.randn(n)) * 200,
        'low': trend - np.abs(np.random.randn(n)) * 200,
        'close': trend + np.random.randn(n) * 100,
        'volume': np.random.rand(n) * 1000000
    }, index=timestamps)

    # Ensure high is highest and low is lowest
    df['high'] = df[['open', 'high', 'close']].max(axis=1)
    df['low'] = df[['open', 'low', 'close']].min(axis=1)

    return df


@pytest.fixture
def swing_ohlcv_data():
    """Fixed-size swings on a fading downtrend, producing regular pivots in every oscillator."""
    n = 400
    timestamps = pd.date_range(start=START, periods=n, freq='1h')

    t = np.arange(n)
    # Drift fades from -0.5 to 0 per bar: every swing low is lower than the
    # last while momentum at the lows recovers (regular bullish)
    drift = -0.5 * (t - t ** 2 / (2 * n))
    close = 1000 + drift + 30 * np.sin(t * 2 * np.pi / 40)

    open_ = np.roll(close, 1)

    return pd.DataFrame({
        'open': open_,
        'high': np.maximum(open_, close) + 2,
        'low': np.minimum(open_, close) - 2,
        'close': close,
        'volume': np.full(n, 1000.0)
    }, index=timestamps).iloc[1:]


@pytest.fixture
def flat_price_data():
    """Flat prices for division-by-zero testing."""
    n = 100
    timestamps = pd.date_range(start=START, periods=n, freq='4h')

    return pd.DataFrame({
        'open': [100.0] * n,
        'high': [100.0] * n,
        'low': [100.0] * n,
        'close': [100.0] * n,
        'volume': [1000.0] * n
    }, index=timestamps)


# =============================================================================
# SCENARIO HELPERS
# =============================================================================

class ScriptedIndicator:
    """Indicator returning preset values, one per bar, oldest first."""

    name = "Scripted"
    warmup = 0

    def __init__(self, script):
        self.script = list(script)

    def stream(self):
        return _ScriptStream(self.script)


class _ScriptStream:
    """Hands out the scripted values in order, one per bar."""

    def __init__(self, script):
        self._values = iter(script)

    def update(self, bar) -> float:
        return float(next(self._values))


def make_bars(lows, spread: float = 2.0):
    """Bars one hour apart with the given lows; highs sit `spread` above."""
    return [
        Bar(
            timestamp=START + timedelta(hours=i),
            open=low + spread / 2,
            high=low + spread,
            low=low,
            close=low + spread / 2,
            volume=1000.0,
        )
        for i, low in enumerate(lows)
    ]


@pytest.fixture
def bar_factory():
    """Build bars from a list of lows."""
    return make_bars


@pytest.fixture
def scripted_setup():
    """
    Build (history, oscillator, feed-builder) around a scripted oscillator.

    Usage:
        history, oscillator = scripted_setup([50, 40, 50])
    """
    def _build(script):
        history = BarHistory()
        oscillator = OscillatorSeries(ScriptedIndicator(script), history)
        return history, oscillator
    return _build


@pytest.fixture
def replay_feed():
    """Wrap a history and listener in a replay feed."""
    def _build(history, listener, ticks_per_bar: int = 0):
        return ReplayFeed(history, listener, ticks_per_bar=ticks_per_bar)
    return _build


# Oscillator lows at bars 1, 3, 5, 7 and highs at 2, 4, 6 with left = right = 1.
# Confirmations arrive one bar later. The lows pair (3, 5) is a regular
# bullish divergence: oscillator 30 -> 35 while price 102 -> 99.
# The first pair (1, 3) would be hidden bullish if it were compared.
BULLISH_SCRIPT = [50, 40, 50, 30, 50, 35, 50, 45, 50]
BULLISH_LOWS = [101, 100, 103, 102, 104, 99, 105, 106, 107]


@pytest.fixture
def bullish_scenario():
    """Oscillator script and price lows for the regular bullish scenario."""
    return BULLISH_SCRIPT, BULLISH_LOWS
