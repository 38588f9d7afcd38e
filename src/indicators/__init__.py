"""Momentum oscillators used as the divergence comparison series."""

from .base import EMAState, SMAState, OscillatorSeries, price_source
from .rsi import RSI, RSIResult, calculate_rsi
from .macd import MACD, MACDResult, calculate_macd
from .awesome_oscillator import AwesomeOscillator, AOResult
from .factory import ConfigurationError, create_oscillator, bind_oscillator

__all__ = [
    "EMAState",
    "SMAState",
    "OscillatorSeries",
    "price_source",
    "RSI",
    "RSIResult",
    "calculate_rsi",
    "MACD",
    "MACDResult",
    "calculate_macd",
    "AwesomeOscillator",
    "AOResult",
    "ConfigurationError",
    "create_oscillator",
    "bind_oscillator",
]
