"""
Configuration management for the cargo flight board.

Loads settings from environment variables with sensible defaults.
All configuration is centralized here to avoid magic strings scattered
throughout the codebase.
"""

import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

from dotenv import load_dotenv

from cargotracker.models.cargo import CargoMatchRule

load_dotenv()


DEFAULT_CARGO_CODES: Tuple[str, ...] = (
    'UPS', '5X', 'BCS', 'ES', 'QY', 'D0',
    'APF', 'HP', 'QAF', 'Q7', 'QR',
)

DEFAULT_CARGO_KEYWORDS: Tuple[str, ...] = (
    'cargo', 'dhl', 'ups', 'amapola',
    'qatar', 'freight', 'postal',
)


def _parse_list(value: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
    """Parse a comma-separated string into a tuple, or the default if empty."""
    if not value:
        return default
    items = tuple(item.strip() for item in value.split(',') if item.strip())
    return items or default


def _parse_timeout(value: str) -> Optional[float]:
    """Parse a timeout in seconds; empty or non-positive means no timeout."""
    if not value:
        return None
    try:
        seconds = float(value)
    except ValueError:
        return None
    return seconds if seconds > 0 else None


@dataclass(frozen=True)
class FeedConfig:
    """Avinor XML feed configuration."""
    base_url: str = os.getenv('AVINOR_BASE_URL', 'https://asrv.avinor.no')
    airport: str = os.getenv('AIRPORT', 'OSL')
    time_from_hours: int = int(os.getenv('TIME_FROM_HOURS', '1'))
    time_to_hours: int = int(os.getenv('TIME_TO_HOURS', '24'))
    timeout_seconds: Optional[float] = _parse_timeout(os.getenv('FEED_TIMEOUT_SECONDS', ''))


@dataclass(frozen=True)
class DisplayConfig:
    """Presentation settings."""
    timezone: str = os.getenv('DISPLAY_TIMEZONE', 'Europe/Oslo')


@dataclass(frozen=True)
class CargoConfig:
    """Static cargo operator classification lists."""
    codes: Tuple[str, ...] = field(
        default_factory=lambda: _parse_list(os.getenv('CARGO_CODES', ''), DEFAULT_CARGO_CODES)
    )
    keywords: Tuple[str, ...] = field(
        default_factory=lambda: _parse_list(os.getenv('CARGO_KEYWORDS', ''), DEFAULT_CARGO_KEYWORDS)
    )

    @property
    def rule(self) -> CargoMatchRule:
        return CargoMatchRule.from_lists(self.codes, self.keywords)


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration."""
    feed: FeedConfig
    display: DisplayConfig
    cargo: CargoConfig

    # Kick off a background load when the web app starts
    load_on_start: bool

    # Flask settings
    secret_key: str
    debug: bool


def load_config() -> AppConfig:
    """Load and validate all configuration."""
    return AppConfig(
        feed=FeedConfig(),
        display=DisplayConfig(),
        cargo=CargoConfig(),
        load_on_start=os.getenv('LOAD_ON_START', '1') == '1',
        secret_key=os.getenv('SECRET_KEY', 'dev-key-change-in-prod'),
        debug=os.getenv('FLASK_DEBUG', '0') == '1',
    )


# Singleton instance
config = load_config()
