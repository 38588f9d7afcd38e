"""Price/oscillator divergence detection.

Finds pivots on an oscillator series bar by bar, pairs each new pivot with
the previous one of the same kind and classifies the pair as a regular or
hidden, bullish or bearish divergence.
"""

from .pivots import is_pivot_low, is_pivot_high, pivot_value_low, pivot_value_high
from .tracker import Direction, ExtremumTracker
from .classifier import (
    DivergenceType,
    DivergenceRecord,
    DivergenceClassifier,
    classify,
    MIN_EXTREMA,
)
from .store import DivergenceStore
from .detector import DivergenceDetector, OscillatorSource, detect_divergences

__all__ = [
    "is_pivot_low",
    "is_pivot_high",
    "pivot_value_low",
    "pivot_value_high",
    "Direction",
    "ExtremumTracker",
    "DivergenceType",
    "DivergenceRecord",
    "DivergenceClassifier",
    "classify",
    "MIN_EXTREMA",
    "DivergenceStore",
    "DivergenceDetector",
    "OscillatorSource",
    "detect_divergences",
]
