"""Configuration models and loader for the divergence detector."""

from enum import Enum
from pathlib import Path
from typing import Annotated, Literal, Optional, Union

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator


class PriceType(str, Enum):
    """Bar price fields and derived prices usable as an oscillator source."""
    OPEN = "open"
    HIGH = "high"
    LOW = "low"
    CLOSE = "close"
    MEDIAN = "median"        # (high + low) / 2
    TYPICAL = "typical"      # (high + low + close) / 3
    WEIGHTED = "weighted"    # (high + low + 2 * close) / 4
    VOLUME = "volume"


class RSIMode(str, Enum):
    """Averaging used for RSI gains and losses."""
    SIMPLE = "simple"
    EXPONENTIAL = "exponential"


class OscillatorKind(str, Enum):
    """Closed set of oscillators the detector can compare price against."""
    RSI = "rsi"
    MACD = "macd"
    AO = "ao"


class LineStyle(str, Enum):
    """Stroke pattern for a divergence line."""
    SOLID = "solid"
    DASH = "dash"
    DOT = "dot"
    DASH_DOT = "dash_dot"


class PivotConfig(BaseModel):
    """Pivot window around a candidate bar.

    A pivot `right` bars back is confirmed once `left + right + 1` bars exist.
    """
    left: int = Field(default=5, ge=1, le=9999, description="Pivot lookback left offset")
    right: int = Field(default=5, ge=1, le=9999, description="Pivot lookback right offset")
    retention: Optional[int] = Field(
        default=None,
        ge=3,
        description="Keep only this many extrema per direction (None = unbounded)"
    )


class RSISettings(BaseModel):
    """Relative Strength Index parameters."""
    kind: Literal["rsi"] = "rsi"
    period: int = Field(default=14, ge=1)
    source: PriceType = Field(default=PriceType.CLOSE)
    mode: RSIMode = Field(default=RSIMode.EXPONENTIAL)


class MACDSettings(BaseModel):
    """MACD parameters. The MACD line is used as the divergence series."""
    kind: Literal["macd"] = "macd"
    fast: int = Field(default=12, ge=1)
    slow: int = Field(default=26, ge=1)
    signal: int = Field(default=1, ge=1)
    source: PriceType = Field(default=PriceType.CLOSE)

    @model_validator(mode="after")
    def check_periods(self) -> "MACDSettings":
        if self.fast >= self.slow:
            raise ValueError(f"MACD fast period ({self.fast}) must be below slow period ({self.slow})")
        return self


class AOSettings(BaseModel):
    """Awesome Oscillator parameters (SMA of the median price)."""
    kind: Literal["ao"] = "ao"
    fast: int = Field(default=5, ge=1)
    slow: int = Field(default=34, ge=1)

    @model_validator(mode="after")
    def check_periods(self) -> "AOSettings":
        if self.fast >= self.slow:
            raise ValueError(f"AO fast period ({self.fast}) must be below slow period ({self.slow})")
        return self


OscillatorSettings = Annotated[
    Union[RSISettings, MACDSettings, AOSettings],
    Field(discriminator="kind"),
]

SETTINGS_BY_KIND = {
    OscillatorKind.RSI: RSISettings,
    OscillatorKind.MACD: MACDSettings,
    OscillatorKind.AO: AOSettings,
}


def default_oscillator_settings(kind: OscillatorKind):
    """Default settings for an oscillator kind ('rsi', 'macd' or 'ao')."""
    try:
        return SETTINGS_BY_KIND[OscillatorKind(kind)]()
    except ValueError:
        raise ValueError(f"Unknown oscillator kind: {kind}") from None


class LineStyleConfig(BaseModel):
    """How one divergence type is drawn. Disabled types are not rendered."""
    model_config = {"frozen": True}

    color: str = Field(default="green")
    enabled: bool = Field(default=True)
    line_style: LineStyle = Field(default=LineStyle.SOLID)
    width: int = Field(default=1, ge=1, le=20)

    @field_validator("color")
    @classmethod
    def check_color(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Line color must not be empty")
        return v.strip()


class StylesConfig(BaseModel):
    """Line styles for the four divergence types."""
    model_config = {"frozen": True}

    regular_bullish: LineStyleConfig = Field(
        default_factory=lambda: LineStyleConfig(color="green", enabled=True, line_style=LineStyle.SOLID, width=2)
    )
    hidden_bullish: LineStyleConfig = Field(
        default_factory=lambda: LineStyleConfig(color="green", enabled=False, line_style=LineStyle.DASH_DOT, width=1)
    )
    regular_bearish: LineStyleConfig = Field(
        default_factory=lambda: LineStyleConfig(color="red", enabled=True, line_style=LineStyle.SOLID, width=2)
    )
    hidden_bearish: LineStyleConfig = Field(
        default_factory=lambda: LineStyleConfig(color="red", enabled=False, line_style=LineStyle.DASH_DOT, width=1)
    )

    def for_type(self, divergence_type: str) -> LineStyleConfig:
        """Get the style for a divergence type (enum member or its value)."""
        key = getattr(divergence_type, "value", divergence_type)
        if key not in type(self).model_fields:
            raise ValueError(f"Unknown divergence type: {divergence_type}")
        return getattr(self, key)


class LoggingConfig(BaseModel):
    """Log sink configuration."""
    level: str = Field(default="INFO")
    file: Optional[str] = Field(default=None)

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid_levels = ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()


class DetectorConfig(BaseModel):
    """Main configuration model."""
    pivots: PivotConfig = Field(default_factory=PivotConfig)
    oscillator: OscillatorSettings = Field(default_factory=RSISettings)
    styles: StylesConfig = Field(default_factory=StylesConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(config_path: str | Path) -> DetectorConfig:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to configuration YAML file

    Returns:
        DetectorConfig object with validated settings

    Raises:
        FileNotFoundError: If config file doesn't exist
        ValidationError: If config values are invalid (including an unknown oscillator kind)
    """
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path, "r") as f:
        raw_config = yaml.safe_load(f) or {}

    return DetectorConfig(**raw_config)


def save_config(config: DetectorConfig, config_path: str | Path) -> None:
    """
    Save configuration to YAML file.

    Args:
        config: DetectorConfig object to save
        config_path: Path to save configuration file
    """
    path = Path(config_path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        yaml.dump(config.model_dump(mode="json"), f, default_flow_style=False, sort_keys=False)


def create_default_config(config_path: str | Path) -> DetectorConfig:
    """
    Create a default configuration file.

    Args:
        config_path: Path to save the default config

    Returns:
        Default DetectorConfig object
    """
    config = DetectorConfig()
    save_config(config, config_path)
    return config
