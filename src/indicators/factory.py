"""Build the oscillator selected in the configuration."""

from config.config import AOSettings, MACDSettings, RSISettings
from history.bars import BarHistory
from utils.logger import get_logger

from .awesome_oscillator import AwesomeOscillator
from .base import OscillatorSeries
from .macd import MACD
from .rsi import RSI

logger = get_logger("indicators")


class ConfigurationError(ValueError):
    """Raised when the oscillator selection is outside the supported set."""


def create_oscillator(settings):
    """
    Create the oscillator calculator for a settings variant.

    Args:
        settings: RSISettings, MACDSettings or AOSettings

    Returns:
        Calculator exposing values(df), stream() and warmup

    Raises:
        ConfigurationError: If settings is not one of the supported variants
    """
    if isinstance(settings, RSISettings):
        return RSI(period=settings.period, source=settings.source, mode=settings.mode)
    if isinstance(settings, MACDSettings):
        return MACD(fast=settings.fast, slow=settings.slow, signal=settings.signal, source=settings.source)
    if isinstance(settings, AOSettings):
        return AwesomeOscillator(fast=settings.fast, slow=settings.slow)
    raise ConfigurationError(
        f"Unsupported oscillator settings: {settings!r} (expected rsi, macd or ao)"
    )


def bind_oscillator(settings, history: BarHistory) -> OscillatorSeries:
    """Create the configured oscillator and bind it to a bar history."""
    indicator = create_oscillator(settings)
    logger.debug(f"Created {indicator.name} oscillator (warm-up {indicator.warmup} bars)")
    return OscillatorSeries(indicator, history)
