"""Append-only collection of detected divergences."""

from typing import Iterator, List, Tuple

import pandas as pd

from .classifier import DivergenceRecord, DivergenceType

COLUMNS = [
    "divergence_type",
    "start_time",
    "start_price",
    "end_time",
    "end_price",
    "start_value",
    "end_value",
    "start_index",
    "end_index",
]


class DivergenceStore:
    """Divergence records in detection order. Records are never modified."""

    def __init__(self):
        self._records: List[DivergenceRecord] = []

    def add(self, record: DivergenceRecord) -> None:
        self._records.append(record)

    def get_all(self) -> Tuple[DivergenceRecord, ...]:
        """Snapshot of the records at call time; may be iterated repeatedly."""
        return tuple(self._records)

    def of_type(self, divergence_type: DivergenceType) -> Tuple[DivergenceRecord, ...]:
        divergence_type = DivergenceType(divergence_type)
        return tuple(r for r in self._records if r.divergence_type is divergence_type)

    def clear(self) -> None:
        """Drop everything. Only used when the whole series is reset."""
        self._records.clear()

    def to_frame(self) -> pd.DataFrame:
        """Records as a DataFrame, one row per divergence."""
        return pd.DataFrame([r.to_dict() for r in self._records], columns=COLUMNS)

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[DivergenceRecord]:
        return iter(self.get_all())
