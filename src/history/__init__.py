"""Bar history and replay feed (the host side of the detector)."""

from .bars import Bar, BarHistory, SeekOrigin, UpdateReason
from .replay import ReplayFeed, load_bars_from_csv, bars_from_dataframe

__all__ = [
    "Bar",
    "BarHistory",
    "SeekOrigin",
    "UpdateReason",
    "ReplayFeed",
    "load_bars_from_csv",
    "bars_from_dataframe",
]
