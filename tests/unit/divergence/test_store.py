"""Unit tests for the divergence store."""

from datetime import datetime, timedelta

import pytest

import sys
from pathlib import Path

project_root = Path(__file__).parent.parent.parent.parent
sys.path.insert(0, str(project_root))
sys.path.insert(0, str(project_root / "src"))

from divergence.classifier import DivergenceRecord, DivergenceType
from divergence.store import COLUMNS, DivergenceStore


def _record(hour: int, divergence_type: DivergenceType) -> DivergenceRecord:
    start = datetime(2024, 1, 1) + timedelta(hours=hour)
    return DivergenceRecord(
        start_time=start,
        start_price=100.0 + hour,
        end_time=start + timedelta(hours=5),
        end_price=99.0 + hour,
        divergence_type=divergence_type,
        start_index=hour,
        end_index=hour + 5,
    )


@pytest.fixture
def store():
    store = DivergenceStore()
    store.add(_record(0, DivergenceType.REGULAR_BULLISH))
    store.add(_record(3, DivergenceType.HIDDEN_BEARISH))
    store.add(_record(8, DivergenceType.REGULAR_BULLISH))
    return store


class TestDivergenceStore:
    """Test append-only storage."""

    def test_preserves_detection_order(self, store):
        assert [r.start_index for r in store.get_all()] == [0, 3, 8]
        assert len(store) == 3

    def test_snapshot_is_stable(self, store):
        snapshot = store.get_all()
        store.add(_record(12, DivergenceType.REGULAR_BEARISH))

        assert len(snapshot) == 3
        assert len(store.get_all()) == 4
        # A snapshot can be walked any number of times
        assert list(snapshot) == list(snapshot)

    def test_of_type(self, store):
        bullish = store.of_type(DivergenceType.REGULAR_BULLISH)
        assert [r.start_index for r in bullish] == [0, 8]
        assert store.of_type("hidden_bearish")[0].start_index == 3
        assert store.of_type(DivergenceType.HIDDEN_BULLISH) == ()

    def test_to_frame(self, store):
        frame = store.to_frame()
        assert list(frame.columns) == COLUMNS
        assert len(frame) == 3
        assert frame["divergence_type"].tolist() == ["regular_bullish", "hidden_bearish", "regular_bullish"]

    def test_empty_frame_has_columns(self):
        frame = DivergenceStore().to_frame()
        assert frame.empty
        assert list(frame.columns) == COLUMNS

    def test_clear(self, store):
        store.clear()
        assert len(store) == 0
        assert store.get_all() == ()
