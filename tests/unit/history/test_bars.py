"""Unit tests for bars and bar history addressing."""

from datetime import datetime, timedelta

import pytest
import pandas as pd

import sys
from pathlib import Path

project_root = Path(__file__).parent.parent.parent.parent
sys.path.insert(0, str(project_root))
sys.path.insert(0, str(project_root / "src"))

from config.config import PriceType
from history.bars import Bar, BarHistory, SeekOrigin


@pytest.fixture
def history(bar_factory):
    history = BarHistory()
    for bar in bar_factory([100, 101, 102, 103, 104]):
        history.append(bar)
    return history


class TestBar:
    """Test price access on a single bar."""

    def test_raw_prices(self):
        bar = Bar(datetime(2024, 1, 1), open=10, high=14, low=8, close=12, volume=5)
        assert bar[PriceType.OPEN] == 10
        assert bar[PriceType.HIGH] == 14
        assert bar[PriceType.LOW] == 8
        assert bar[PriceType.CLOSE] == 12
        assert bar[PriceType.VOLUME] == 5

    def test_derived_prices(self):
        bar = Bar(datetime(2024, 1, 1), open=10, high=14, low=8, close=12)
        assert bar[PriceType.MEDIAN] == 11
        assert bar[PriceType.TYPICAL] == pytest.approx(34 / 3)
        assert bar[PriceType.WEIGHTED] == 11.5
        assert bar["close"] == 12


class TestBarHistory:
    """Test offset and absolute addressing."""

    def test_count(self, history):
        assert history.count == 5
        assert len(history) == 5

    def test_offset_from_newest(self, history):
        assert history.get_price(PriceType.LOW) == 104
        assert history.get_price(PriceType.LOW, 4) == 100
        assert history[1].low == 103

    def test_absolute_index(self, history):
        assert history[0, SeekOrigin.BEGIN].low == 100
        assert history[0, SeekOrigin.END].low == 104
        assert history.absolute_index(1, SeekOrigin.END) == 3

    def test_time(self, history):
        assert history.time(0) - history.time(4) == timedelta(hours=4)

    @pytest.mark.parametrize("index,origin", [
        (5, SeekOrigin.BEGIN),
        (5, SeekOrigin.END),
        (-1, SeekOrigin.BEGIN),
        (-1, SeekOrigin.END),
    ])
    def test_out_of_range(self, history, index, origin):
        with pytest.raises(IndexError):
            history.bar_at(index, origin)

    def test_empty_history(self):
        with pytest.raises(IndexError):
            BarHistory().get_price(PriceType.CLOSE)

    def test_rejects_older_bar(self, history):
        older = Bar(history.time(4) - timedelta(hours=1), 1, 1, 1, 1)
        with pytest.raises(ValueError):
            history.append(older)
        assert history.count == 5

    def test_iteration_is_oldest_first(self, history):
        assert [bar.low for bar in history] == [100, 101, 102, 103, 104]

    def test_clear(self, history):
        history.clear()
        assert history.count == 0

    def test_to_frame(self, history):
        frame = history.to_frame()
        assert list(frame.columns) == ['open', 'high', 'low', 'close', 'volume']
        assert isinstance(frame.index, pd.DatetimeIndex)
        assert frame['low'].tolist() == [100, 101, 102, 103, 104]

    def test_to_frame_empty(self):
        frame = BarHistory().to_frame()
        assert frame.empty
        assert 'close' in frame.columns
