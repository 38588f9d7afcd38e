"""Rendering of detected divergences."""

from .pens import Pen, LineSegment, pen_for, visible_segments, LINESTYLES
from .chart import plot_divergences

__all__ = [
    "Pen",
    "LineSegment",
    "pen_for",
    "visible_segments",
    "LINESTYLES",
    "plot_divergences",
]
