"""Replay historical bars into a bar history, notifying a listener per update."""

from typing import Iterator, List, Protocol

import pandas as pd

from utils.logger import get_logger
from .bars import Bar, BarHistory, UpdateReason

logger = get_logger("replay")

REQUIRED_COLUMNS = ['open', 'high', 'low', 'close']


class UpdateListener(Protocol):
    def on_update(self, reason: UpdateReason) -> list: ...


def load_bars_from_csv(filepath: str) -> pd.DataFrame:
    """
    Load OHLCV data from a CSV file.

    Expected columns: timestamp (or date), open, high, low, close, volume

    Args:
        filepath: Path to CSV file

    Returns:
        DataFrame indexed by timestamp with open/high/low/close/volume

    Raises:
        ValueError: If a required price column is missing
    """
    df = pd.read_csv(filepath)

    # Handle different timestamp formats
    if 'timestamp' in df.columns:
        df['timestamp'] = pd.to_datetime(df['timestamp'])
        df.set_index('timestamp', inplace=True)
    elif 'date' in df.columns:
        df['timestamp'] = pd.to_datetime(df['date'])
        df.set_index('timestamp', inplace=True)

    for col in REQUIRED_COLUMNS:
        if col not in df.columns:
            raise ValueError(f"Missing required column: {col}")

    if 'volume' not in df.columns:
        df['volume'] = 0

    logger.info(f"Loaded {len(df)} bars from {filepath}")
    return df[REQUIRED_COLUMNS + ['volume']]


def bars_from_dataframe(df: pd.DataFrame) -> Iterator[Bar]:
    """
    Convert OHLCV rows into bars, oldest first.

    Args:
        df: DataFrame with a DatetimeIndex (or a 'timestamp' column) and OHLC columns

    Raises:
        ValueError: If a required column or the timestamps are missing
    """
    missing = [col for col in REQUIRED_COLUMNS if col not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}")

    if 'timestamp' in df.columns:
        timestamps = pd.to_datetime(df['timestamp'])
    elif isinstance(df.index, pd.DatetimeIndex):
        timestamps = df.index.to_series()
    else:
        raise ValueError("DataFrame needs a DatetimeIndex or a 'timestamp' column")

    volumes = df['volume'] if 'volume' in df.columns else pd.Series(0.0, index=df.index)

    for ts, o, h, l, c, v in zip(timestamps, df['open'], df['high'], df['low'], df['close'], volumes):
        yield Bar(
            timestamp=ts.to_pydatetime(),
            open=float(o),
            high=float(h),
            low=float(l),
            close=float(c),
            volume=float(v),
        )


class ReplayFeed:
    """
    Drives a listener the way a charting host does.

    Each bar is appended to the history and announced once. Optional tick
    notifications are sent before each bar closes.

    Usage:
        feed = ReplayFeed(history, detector)
        records = feed.replay(df, preload=100)
    """

    def __init__(self, history: BarHistory, listener: UpdateListener, ticks_per_bar: int = 0):
        """
        Args:
            history: History the bars are appended to
            listener: Object with on_update(reason) returning new records
            ticks_per_bar: Tick notifications sent while each bar is forming
        """
        if ticks_per_bar < 0:
            raise ValueError(f"ticks_per_bar must be >= 0, got {ticks_per_bar}")
        self.history = history
        self.listener = listener
        self.ticks_per_bar = ticks_per_bar

    def push(self, bar: Bar, reason: UpdateReason = UpdateReason.NEW_BAR) -> list:
        """Append one confirmed bar and notify the listener."""
        for _ in range(self.ticks_per_bar):
            self.listener.on_update(UpdateReason.NEW_TICK)

        self.history.append(bar)
        return self.listener.on_update(reason)

    def replay(self, df: pd.DataFrame, preload: int = 0) -> List:
        """
        Feed all rows of a DataFrame.

        Args:
            df: OHLCV data, oldest first
            preload: Leading bars announced as HISTORY_UPDATE instead of NEW_BAR

        Returns:
            All records returned by the listener, in order
        """
        records = []
        for i, bar in enumerate(bars_from_dataframe(df)):
            reason = UpdateReason.HISTORY_UPDATE if i < preload else UpdateReason.NEW_BAR
            records.extend(self.push(bar, reason))

        logger.info(f"Replayed {self.history.count} bars, {len(records)} divergences")
        return records
