"""Main entry point for the divergence detector."""

from pathlib import Path
from typing import Optional

import click

from config import DetectorConfig, OscillatorKind, load_config, create_default_config, default_oscillator_settings
from divergence import DivergenceDetector
from history import BarHistory, ReplayFeed, load_bars_from_csv
from render import plot_divergences
from utils.logger import setup_logger, get_logger

logger = get_logger("main")


def run_scan(config: DetectorConfig, data_path: str, plot_path: Optional[str] = None, preload: int = 0) -> DivergenceDetector:
    """
    Replay a CSV file through a fresh detector.

    Args:
        config: Detector configuration
        data_path: OHLCV CSV file
        plot_path: Optional PNG path for a chart
        preload: Leading bars treated as history rather than live bars

    Returns:
        The detector after the replay
    """
    df = load_bars_from_csv(data_path)

    history = BarHistory()
    detector = DivergenceDetector.from_config(config, history)
    ReplayFeed(history, detector).replay(df, preload=preload)

    if plot_path:
        plot_divergences(
            df,
            detector.oscillator.values,
            detector.store.get_all(),
            styles=config.styles,
            title=f"{Path(data_path).stem} divergences",
            oscillator_name=detector.oscillator.name,
            save_path=plot_path,
        )
        logger.info(f"Chart saved to {plot_path}")

    return detector


@click.group()
def cli():
    """Price/oscillator divergence detector."""
    pass


@cli.command()
@click.option('--data', '-d', required=True, type=click.Path(exists=True, dir_okay=False), help='OHLCV CSV file')
@click.option('--config', '-c', default=None, help='Path to config file (defaults if omitted)')
@click.option('--plot', '-p', default=None, help='Write a chart to this PNG file')
@click.option('--oscillator', '-o', 'oscillator', default=None,
              type=click.Choice([kind.value for kind in OscillatorKind]),
              help='Override the configured oscillator with its defaults')
@click.option('--preload', default=0, type=click.IntRange(min=0), help='Bars replayed as history updates')
def scan(data: str, config: Optional[str], plot: Optional[str], oscillator: Optional[str], preload: int):
    """Replay a CSV file and list the divergences found."""
    cfg = load_config(config) if config else DetectorConfig()
    if oscillator:
        cfg = cfg.model_copy(update={"oscillator": default_oscillator_settings(oscillator)})
    setup_logger(log_level=cfg.logging.level, log_file=cfg.logging.file)

    detector = run_scan(cfg, data, plot_path=plot, preload=preload)
    frame = detector.store.to_frame()

    if frame.empty:
        click.echo("No divergences found.")
        return

    click.echo(frame[["divergence_type", "start_time", "start_price", "end_time", "end_price"]].to_string(index=False))
    click.echo(f"\n{len(frame)} divergences ({detector.oscillator.name}, left={detector.left}, right={detector.right})")


@cli.command()
@click.option('--output', '-o', default='config/config.yaml', help='Output path')
def init(output: str):
    """Create a default configuration file."""
    create_default_config(output)
    click.echo(f"Created default config at: {output}")


if __name__ == "__main__":
    cli()
