"""Pivot detection on an oscillator series.

A pivot is confirmed `right` bars after it happens: at newest position
`index`, the candidate is `p = index - right` and it must be strictly below
(pivot low) or strictly above (pivot high) every other value in
`[p - left, p + right]`. Once confirmed it never changes.
"""

from typing import Sequence

import numpy as np


def _window(series: Sequence[float], index: int, left: int, right: int):
    """Values in [index - right - left, index], or None if unavailable or NaN."""
    if left < 1 or right < 1:
        raise ValueError(f"Pivot window must be positive, got left={left}, right={right}")

    start = index - right - left
    if start < 0 or index >= len(series):
        return None

    window = np.asarray(series[start:index + 1], dtype=float)
    if np.isnan(window).any():
        return None
    return window


def pivot_value_low(series: Sequence[float], index: int, left: int, right: int) -> float:
    """
    Value of the pivot low `right` bars before `index`.

    Args:
        series: Oscillator values, oldest first
        index: Position of the newest bar to consider
        left: Bars required before the candidate
        right: Bars required after the candidate

    Returns:
        Candidate value if it is a strict minimum of the window, NaN otherwise
    """
    window = _window(series, index, left, right)
    if window is None:
        return np.nan

    candidate = window[left]
    others = np.delete(window, left)
    return float(candidate) if (candidate < others).all() else np.nan


def pivot_value_high(series: Sequence[float], index: int, left: int, right: int) -> float:
    """Value of the pivot high `right` bars before `index`, NaN if there is none."""
    window = _window(series, index, left, right)
    if window is None:
        return np.nan

    candidate = window[left]
    others = np.delete(window, left)
    return float(candidate) if (candidate > others).all() else np.nan


def is_pivot_low(series: Sequence[float], index: int, left: int, right: int) -> bool:
    """True if the bar `right` bars before `index` is a strict local minimum."""
    return not np.isnan(pivot_value_low(series, index, left, right))


def is_pivot_high(series: Sequence[float], index: int, left: int, right: int) -> bool:
    """True if the bar `right` bars before `index` is a strict local maximum."""
    return not np.isnan(pivot_value_high(series, index, left, right))
