"""Divergence classification between price and oscillator extrema.

Divergence types:
- Regular Bullish: price lower low, oscillator higher low (reversal up)
- Hidden Bullish: price higher low, oscillator lower low (uptrend continuation)
- Regular Bearish: price higher high, oscillator lower high (reversal down)
- Hidden Bearish: price lower high, oscillator higher high (downtrend continuation)
"""

import math
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from config.config import PriceType
from history.bars import SeekOrigin
from .tracker import Direction, ExtremumTracker

# The newest extremum is compared with entry Count-2 of its list, which
# needs at least three recorded extrema.
MIN_EXTREMA = 3


class DivergenceType(str, Enum):
    """The four divergence patterns."""
    REGULAR_BULLISH = "regular_bullish"
    HIDDEN_BULLISH = "hidden_bullish"
    REGULAR_BEARISH = "regular_bearish"
    HIDDEN_BEARISH = "hidden_bearish"

    @property
    def is_bullish(self) -> bool:
        return self in (DivergenceType.REGULAR_BULLISH, DivergenceType.HIDDEN_BULLISH)

    @property
    def is_regular(self) -> bool:
        return self in (DivergenceType.REGULAR_BULLISH, DivergenceType.REGULAR_BEARISH)

    @property
    def label(self) -> str:
        """Short chart label, e.g. 'R Bull'."""
        return f"{'R' if self.is_regular else 'H'} {'Bull' if self.is_bullish else 'Bear'}"


@dataclass(frozen=True)
class DivergenceRecord:
    """A detected divergence, drawn from the earlier extremum to the newer one."""
    start_time: datetime
    start_price: float
    end_time: datetime
    end_price: float
    divergence_type: DivergenceType
    start_value: float = math.nan   # Oscillator value at the earlier extremum
    end_value: float = math.nan     # Oscillator value at the newer extremum
    start_index: int = -1           # Absolute bar index of the earlier extremum
    end_index: int = -1             # Absolute bar index of the newer extremum

    def to_dict(self) -> Dict[str, Any]:
        return {
            "divergence_type": self.divergence_type.value,
            "start_time": self.start_time.isoformat() if isinstance(self.start_time, datetime) else str(self.start_time),
            "start_price": self.start_price,
            "end_time": self.end_time.isoformat() if isinstance(self.end_time, datetime) else str(self.end_time),
            "end_price": self.end_price,
            "start_value": self.start_value,
            "end_value": self.end_value,
            "start_index": self.start_index,
            "end_index": self.end_index,
        }


def classify(
    direction: Direction,
    prev_value: float,
    curr_value: float,
    prev_price: float,
    curr_price: float
) -> Optional[DivergenceType]:
    """
    Classify a pair of same-direction extrema.

    Args:
        direction: LOW for bullish patterns, HIGH for bearish patterns
        prev_value: Oscillator value at the earlier extremum
        curr_value: Oscillator value at the newer extremum
        prev_price: Low (or high) price at the earlier extremum
        curr_price: Low (or high) price at the newer extremum

    Returns:
        DivergenceType, or None when price and oscillator agree (or are equal/NaN)
    """
    oscillator_up = curr_value > prev_value
    oscillator_down = curr_value < prev_value
    price_up = curr_price > prev_price
    price_down = curr_price < prev_price

    if Direction(direction) is Direction.LOW:
        if oscillator_up and price_down:
            return DivergenceType.REGULAR_BULLISH
        if oscillator_down and price_up:
            return DivergenceType.HIDDEN_BULLISH
    else:
        if oscillator_down and price_up:
            return DivergenceType.REGULAR_BEARISH
        if oscillator_up and price_down:
            return DivergenceType.HIDDEN_BEARISH
    return None


class DivergenceClassifier:
    """
    Compares the newest confirmed extremum with the previous one.

    Tracker entries are the indices of the bars that confirmed each pivot;
    the pivot itself sits `right` bars earlier. The comparison partner is
    entry Count-2 of the list after the newest index has been appended.
    """

    def __init__(self, right: int):
        if right < 1:
            raise ValueError(f"Right offset must be >= 1, got {right}")
        self.right = right

    def evaluate(self, direction: Direction, tracker: ExtremumTracker, history, oscillator) -> Optional[DivergenceRecord]:
        """
        Classify the newest extremum of a direction against its predecessor.

        Must be called right after the newest bar was appended to the tracker.

        Args:
            direction: LOW or HIGH
            tracker: Extremum tracker holding the confirmation indices
            history: Bar history (prices and times)
            oscillator: Oscillator source aligned with history

        Returns:
            DivergenceRecord if the pair diverges, None otherwise
        """
        direction = Direction(direction)
        if tracker.count(direction) < MIN_EXTREMA:
            return None

        price_type = PriceType.LOW if direction is Direction.LOW else PriceType.HIGH

        prev_position = tracker.last(direction, 1) - self.right
        curr_position = history.count - 1 - self.right

        prev_value = oscillator.get_value_at(prev_position, SeekOrigin.BEGIN)
        curr_value = oscillator.get_value(self.right)
        prev_bar = history[prev_position, SeekOrigin.BEGIN]
        prev_price = prev_bar[price_type]
        curr_price = history.get_price(price_type, self.right)

        divergence_type = classify(direction, prev_value, curr_value, prev_price, curr_price)
        if divergence_type is None:
            return None

        return DivergenceRecord(
            start_time=prev_bar.timestamp,
            start_price=prev_price,
            end_time=history.time(self.right),
            end_price=curr_price,
            divergence_type=divergence_type,
            start_value=prev_value,
            end_value=curr_value,
            start_index=prev_position,
            end_index=curr_position,
        )
