"""Incremental price/oscillator divergence detector."""

from typing import List, Optional, Protocol

import pandas as pd

from config.config import DetectorConfig
from history.bars import BarHistory, SeekOrigin, UpdateReason
from history.replay import ReplayFeed
from indicators.factory import bind_oscillator
from utils.logger import get_logger

from .classifier import DivergenceClassifier, DivergenceRecord
from .pivots import is_pivot_high, is_pivot_low
from .store import DivergenceStore
from .tracker import Direction, ExtremumTracker

logger = get_logger("detector")


class OscillatorSource(Protocol):
    """Oscillator output the detector reads. One value per bar, NaN while warming up."""

    @property
    def count(self) -> int: ...

    def get_value(self, offset: int = 0) -> float: ...

    def get_value_at(self, index: int, origin: SeekOrigin = SeekOrigin.END) -> float: ...


class DivergenceDetector:
    """
    Detects regular and hidden divergences bar by bar.

    On every confirmed bar:
    1. Test the oscillator value `right` bars back for a pivot low/high
    2. Record the confirming bar index in the extremum tracker
    3. Classify the new extremum against the previous one
    4. Append any divergence to the store

    Tick updates are ignored, and processing the same bar twice adds nothing.

    Usage:
        history = BarHistory()
        detector = DivergenceDetector(history, bind_oscillator(RSISettings(), history), left=5, right=5)

        history.append(bar)
        new_records = detector.on_update(UpdateReason.NEW_BAR)
    """

    def __init__(
        self,
        history: BarHistory,
        oscillator: OscillatorSource,
        left: int = 5,
        right: int = 5,
        retention: Optional[int] = None
    ):
        """
        Initialize divergence detector.

        Args:
            history: Confirmed bars supplied by the host
            oscillator: Oscillator values aligned with history
            left: Bars before a candidate pivot (>= 1)
            right: Bars after a candidate pivot, i.e. the confirmation lag (>= 1)
            retention: Optional cap on extrema kept per direction (>= 3)
        """
        if left < 1 or right < 1:
            raise ValueError(f"Pivot window must be positive, got left={left}, right={right}")

        self.history = history
        self.oscillator = oscillator
        self.left = left
        self.right = right

        self.tracker = ExtremumTracker(retention=retention)
        self.classifier = DivergenceClassifier(right=right)
        self.store = DivergenceStore()

    @classmethod
    def from_config(cls, config: DetectorConfig, history: BarHistory) -> "DivergenceDetector":
        """Build a detector with the configured oscillator bound to `history`."""
        return cls(
            history=history,
            oscillator=bind_oscillator(config.oscillator, history),
            left=config.pivots.left,
            right=config.pivots.right,
            retention=config.pivots.retention,
        )

    @property
    def min_bars(self) -> int:
        """Bars needed before the first pivot can be evaluated."""
        return self.left + self.right + 1

    def reset(self) -> None:
        """Clear all extrema and divergences (series reloaded)."""
        self.tracker.reset()
        self.store.clear()
        logger.info("Divergence state reset")

    def reconfigure(self, oscillator_settings) -> None:
        """
        Switch to another oscillator.

        Values of different oscillators are not comparable, so all extremum
        and divergence state is discarded.

        Args:
            oscillator_settings: RSISettings, MACDSettings or AOSettings
        """
        new_oscillator = bind_oscillator(oscillator_settings, self.history)
        old_name = getattr(self.oscillator, "name", type(self.oscillator).__name__)
        self.oscillator = new_oscillator
        self.reset()
        logger.info(f"Oscillator switched from {old_name} to {new_oscillator.name}")

    def on_update(self, reason: UpdateReason) -> List[DivergenceRecord]:
        """
        Process a host update notification.

        Args:
            reason: Why the host is notifying (ticks are ignored)

        Returns:
            Divergences detected by this update (possibly empty)
        """
        if reason is UpdateReason.NEW_TICK:
            return []

        count = self.history.count
        if count < self.min_bars or self.oscillator.count < self.min_bars:
            logger.debug(f"Skipping bar {count - 1}: {count} bars, need {self.min_bars}")
            return []

        # Oscillator values from `left + right` bars back up to the newest bar
        window = [self.oscillator.get_value(offset) for offset in range(self.left + self.right, -1, -1)]
        newest = len(window) - 1
        bar_index = count - 1

        new_records: List[DivergenceRecord] = []
        pivot_tests = (
            (Direction.LOW, is_pivot_low),
            (Direction.HIGH, is_pivot_high),
        )

        for direction, is_pivot in pivot_tests:
            if not is_pivot(window, newest, self.left, self.right):
                continue

            if not self.tracker.on_pivot_confirmed(direction, bar_index):
                logger.debug(f"Pivot {direction.value} at bar {bar_index} already recorded")
                continue

            logger.debug(
                f"Pivot {direction.value} confirmed at bar {bar_index} "
                f"(pivot bar {bar_index - self.right}, {self.tracker.count(direction)} recorded)"
            )

            record = self.classifier.evaluate(direction, self.tracker, self.history, self.oscillator)
            if record is None:
                continue

            self.store.add(record)
            new_records.append(record)
            logger.info(
                f"{record.divergence_type.value} divergence: "
                f"{record.start_time} @ {record.start_price:.5g} -> {record.end_time} @ {record.end_price:.5g}"
            )

        return new_records


def detect_divergences(df: pd.DataFrame, config: Optional[DetectorConfig] = None) -> DivergenceStore:
    """
    Convenience function to replay a DataFrame through a fresh detector.

    Args:
        df: OHLC(V) DataFrame with a DatetimeIndex or 'timestamp' column
        config: Detector configuration (defaults if None)

    Returns:
        DivergenceStore with every divergence found
    """
    config = config or DetectorConfig()
    history = BarHistory()
    detector = DivergenceDetector.from_config(config, history)
    ReplayFeed(history, detector).replay(df)
    return detector.store
