"""
Unit tests for oscillator pivot detection.

Tests verify:
1. Strict comparison (ties are not pivots)
2. Window bounds and insufficient history
3. NaN warm-up values suppress pivots
"""

import pytest
import numpy as np

import sys
from pathlib import Path

project_root = Path(__file__).parent.parent.parent.parent
sys.path.insert(0, str(project_root))
sys.path.insert(0, str(project_root / "src"))

from divergence.pivots import is_pivot_low, is_pivot_high, pivot_value_low, pivot_value_high


class TestPivotLow:
    """Test pivot low confirmation."""

    def test_simple_pivot_low(self):
        series = [50, 40, 30, 45, 55]
        assert is_pivot_low(series, index=4, left=2, right=2)
        assert pivot_value_low(series, index=4, left=2, right=2) == 30

    def test_confirmation_waits_for_right_bars(self):
        """The candidate is `right` bars before the index, not at it."""
        series = [50, 40, 30, 45, 55]
        assert not is_pivot_low(series, index=3, left=2, right=2)

    def test_tie_is_not_a_pivot(self):
        series = [50, 30, 30, 45, 55]
        assert not is_pivot_low(series, index=4, left=2, right=2)
        assert np.isnan(pivot_value_low(series, index=4, left=2, right=2))

    def test_tie_outside_window_is_ignored(self):
        series = [30, 50, 40, 30.5, 45, 55]
        assert is_pivot_low(series, index=5, left=2, right=2)

    def test_asymmetric_window(self):
        series = [60, 55, 50, 45, 40, 50]
        assert is_pivot_low(series, index=5, left=4, right=1)
        assert not is_pivot_low(series, index=5, left=1, right=4)


class TestPivotHigh:
    """Test pivot high confirmation."""

    def test_simple_pivot_high(self):
        series = [50, 60, 70, 65, 55]
        assert is_pivot_high(series, index=4, left=2, right=2)
        assert pivot_value_high(series, index=4, left=2, right=2) == 70

    def test_tie_is_not_a_pivot(self):
        series = [50, 70, 70, 65, 55]
        assert not is_pivot_high(series, index=4, left=2, right=2)

    def test_never_both_low_and_high(self):
        np.random.seed(7)
        series = np.random.randn(200)
        for index in range(len(series)):
            assert not (
                is_pivot_low(series, index, 3, 2) and is_pivot_high(series, index, 3, 2)
            )


class TestPivotWindow:
    """Test window availability rules."""

    def test_insufficient_history(self):
        series = [50, 30, 45]
        assert not is_pivot_low(series, index=2, left=2, right=1)
        assert not is_pivot_high(series, index=2, left=2, right=1)

    def test_index_beyond_series(self):
        series = [50, 30, 45]
        assert not is_pivot_low(series, index=3, left=1, right=1)

    def test_nan_in_window_suppresses_pivot(self):
        series = [np.nan, 40, 30, 45, 55]
        assert not is_pivot_low(series, index=4, left=2, right=2)

    def test_nan_outside_window_is_ignored(self):
        series = [np.nan, 50, 40, 30, 45, 55]
        assert is_pivot_low(series, index=5, left=2, right=2)

    @pytest.mark.parametrize("left,right", [(0, 2), (2, 0), (-1, 1)])
    def test_non_positive_offsets_rejected(self, left, right):
        with pytest.raises(ValueError):
            is_pivot_low([1, 2, 3, 4, 5], 4, left, right)
