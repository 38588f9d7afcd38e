"""Derive drawing pens from line style configuration."""

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional

from config.config import LineStyle, LineStyleConfig, StylesConfig
from divergence.classifier import DivergenceRecord

# matplotlib linestyle for each stroke pattern
LINESTYLES = {
    LineStyle.SOLID: "-",
    LineStyle.DASH: "--",
    LineStyle.DOT: ":",
    LineStyle.DASH_DOT: "-.",
}


@dataclass(frozen=True)
class Pen:
    """Resolved stroke for one divergence type."""
    color: str
    width: int
    linestyle: str


@dataclass(frozen=True)
class LineSegment:
    """A divergence ready to be drawn."""
    record: DivergenceRecord
    pen: Pen


def pen_for(style: LineStyleConfig) -> Optional[Pen]:
    """
    Build the pen for a style.

    Returns:
        Pen, or None if the style is disabled
    """
    if not style.enabled:
        return None
    return Pen(color=style.color, width=style.width, linestyle=LINESTYLES[LineStyle(style.line_style)])


def visible_segments(records: Iterable[DivergenceRecord], styles: StylesConfig) -> Iterator[LineSegment]:
    """Records whose divergence type is enabled, paired with their pens."""
    pens = {}
    for record in records:
        key = record.divergence_type
        if key not in pens:
            pens[key] = pen_for(styles.for_type(key))
        if pens[key] is not None:
            yield LineSegment(record=record, pen=pens[key])
