"""Price and oscillator chart with divergence lines."""

from pathlib import Path
from typing import Iterable, Optional

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd

from config.config import StylesConfig
from divergence.classifier import DivergenceRecord
from .pens import visible_segments


def plot_divergences(
    df: pd.DataFrame,
    oscillator: np.ndarray,
    records: Iterable[DivergenceRecord],
    styles: Optional[StylesConfig] = None,
    title: str = "Divergences",
    oscillator_name: str = "Oscillator",
    save_path: Optional[str] = None
) -> None:
    """
    Plot price with divergence lines and the oscillator underneath.

    Args:
        df: OHLC DataFrame indexed by timestamp
        oscillator: Oscillator values aligned with df
        records: Detected divergences
        styles: Line styles (defaults if None); disabled types are skipped
        title: Plot title
        oscillator_name: Label for the oscillator pane
        save_path: Path to save figure. If None, the figure is shown.
    """
    styles = styles or StylesConfig()
    fig, axes = plt.subplots(2, 1, figsize=(14, 10), sharex=True, gridspec_kw={'height_ratios': [3, 1]})

    # Price
    ax1 = axes[0]
    ax1.plot(df.index, df['close'], label='Close', color='black', linewidth=0.8)
    ax1.fill_between(df.index, df['low'], df['high'], color='gray', alpha=0.2)
    ax1.set_title(title)
    ax1.set_ylabel('Price')
    ax1.grid(True, alpha=0.3)

    # Oscillator
    ax2 = axes[1]
    ax2.plot(df.index, oscillator, label=oscillator_name, color='blue', linewidth=1.0)
    ax2.set_ylabel(oscillator_name)
    ax2.grid(True, alpha=0.3)

    for segment in visible_segments(records, styles):
        record, pen = segment.record, segment.pen
        times = [record.start_time, record.end_time]

        ax1.plot(times, [record.start_price, record.end_price],
                 color=pen.color, linewidth=pen.width, linestyle=pen.linestyle)
        ax1.annotate(record.divergence_type.label, (record.end_time, record.end_price),
                     ha='center', va='top' if record.divergence_type.is_bullish else 'bottom',
                     color=pen.color, fontsize=8)

        ax2.plot(times, [record.start_value, record.end_value],
                 color=pen.color, linewidth=pen.width, linestyle=pen.linestyle)

    ax1.legend()
    plt.tight_layout()

    if save_path:
        Path(save_path).parent.mkdir(parents=True, exist_ok=True)
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        plt.close(fig)
        return

    plt.show()
