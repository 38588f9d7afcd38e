"""Configuration module."""

from .config import (
    DetectorConfig,
    PivotConfig,
    RSISettings,
    MACDSettings,
    AOSettings,
    OscillatorSettings,
    LineStyleConfig,
    StylesConfig,
    LoggingConfig,
    PriceType,
    RSIMode,
    OscillatorKind,
    default_oscillator_settings,
    LineStyle,
    load_config,
    save_config,
    create_default_config,
)

__all__ = [
    "DetectorConfig",
    "PivotConfig",
    "RSISettings",
    "MACDSettings",
    "AOSettings",
    "OscillatorSettings",
    "LineStyleConfig",
    "StylesConfig",
    "LoggingConfig",
    "PriceType",
    "RSIMode",
    "OscillatorKind",
    "default_oscillator_settings",
    "LineStyle",
    "load_config",
    "save_config",
    "create_default_config",
]
