"""Confirmed extremum bookkeeping per direction."""

from enum import Enum
from typing import Dict, List, Optional, Tuple


class Direction(str, Enum):
    """Which extremum a pivot is."""
    LOW = "low"      # Bullish divergences are found on lows
    HIGH = "high"    # Bearish divergences are found on highs


class ExtremumTracker:
    """
    Ordered bar indices at which pivots were confirmed, one list per direction.

    Confirming the same bar twice (the host may notify more than once per
    bar) records it once. Lists only grow; with `retention` set, the oldest
    entries beyond that size are dropped.
    """

    def __init__(self, retention: Optional[int] = None):
        if retention is not None and retention < 3:
            raise ValueError(f"Retention must keep at least 3 extrema, got {retention}")
        self.retention = retention
        self._entries: Dict[Direction, List[int]] = {
            Direction.LOW: [],
            Direction.HIGH: [],
        }

    def on_pivot_confirmed(self, direction: Direction, bar_index: int) -> bool:
        """
        Record a confirmed pivot.

        Args:
            direction: LOW or HIGH
            bar_index: Absolute index of the bar that confirmed the pivot

        Returns:
            True if the index was appended, False if it was already the last entry

        Raises:
            ValueError: If bar_index is older than the last recorded entry
        """
        entries = self._entries[Direction(direction)]

        if entries:
            if entries[-1] == bar_index:
                return False
            if bar_index < entries[-1]:
                raise ValueError(
                    f"Pivot index {bar_index} is older than the last {Direction(direction).value} at {entries[-1]}"
                )

        entries.append(bar_index)
        if self.retention is not None and len(entries) > self.retention:
            del entries[:-self.retention]
        return True

    def count(self, direction: Direction) -> int:
        return len(self._entries[Direction(direction)])

    def last(self, direction: Direction, k: int = 0) -> int:
        """
        The k-th most recent entry (0 = most recent).

        Raises:
            IndexError: If fewer than k + 1 entries exist
        """
        entries = self._entries[Direction(direction)]
        if k < 0 or k >= len(entries):
            raise IndexError(
                f"Extremum {k} out of range: {len(entries)} {Direction(direction).value} entries recorded"
            )
        return entries[-1 - k]

    def entries(self, direction: Direction) -> Tuple[int, ...]:
        """Snapshot of all recorded indices, oldest first."""
        return tuple(self._entries[Direction(direction)])

    def reset(self) -> None:
        for entries in self._entries.values():
            entries.clear()
