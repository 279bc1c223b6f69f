"""Configuration management for Contribution Charts."""

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from contribution_charts.exceptions import ConfigError
from contribution_charts.models.chart import Color
from contribution_charts.utils.colors import DEFAULT_PALETTE, parse_palette


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value.strip())
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {value!r}", setting=name) from e


@dataclass
class Config:
    """Application configuration."""

    palette: tuple[Color, ...] = field(default_factory=lambda: DEFAULT_PALETTE)

    # Axis thinning for daily charts (every Nth label is shown)
    daily_tick_interval: int = 5

    # Generate every month/year in range instead of only observed buckets
    dense_calendar: bool = False

    # Dataset styling
    border_width: int = 1
    line_tension: float = 0.1

    log_level: str = "WARNING"

    def __post_init__(self):
        if self.daily_tick_interval < 1:
            raise ConfigError(
                f"Daily tick interval must be positive, got {self.daily_tick_interval}",
                setting="daily_tick_interval",
            )
        # getLevelName maps known level names to their numeric value
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ConfigError(f"Unknown log level: {self.log_level!r}", setting="log_level")

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables.

        Raises:
            ConfigError: If a numeric setting or the log level is invalid
            PaletteError: If CONTRIB_PALETTE cannot be parsed
        """
        # override=False ensures environment variables take precedence over .env
        load_dotenv(override=False)

        palette_spec = os.getenv("CONTRIB_PALETTE")
        palette = parse_palette(palette_spec) if palette_spec else DEFAULT_PALETTE

        return cls(
            palette=palette,
            daily_tick_interval=_env_int("CONTRIB_DAILY_TICK_INTERVAL", 5),
            dense_calendar=_env_flag("CONTRIB_DENSE_CALENDAR"),
            log_level=os.getenv("CONTRIB_LOG_LEVEL", "WARNING").strip().upper(),
        )


# Global config instance
_config: Config | None = None


def get_config() -> Config:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def set_config(config: Config | None) -> None:
    """Set the global configuration instance (useful for testing)."""
    global _config
    _config = config
