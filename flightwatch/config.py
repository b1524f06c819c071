"""
Configuration management for FlightWatch.

Loads settings from environment variables with sensible defaults.
All configuration is centralized here to avoid magic strings scattered
throughout the codebase.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


@dataclass(frozen=True)
class OpenSkyConfig:
    """OpenSky API configuration."""
    username: Optional[str] = os.getenv('OPENSKY_USERNAME') or None
    password: Optional[str] = os.getenv('OPENSKY_PASSWORD') or None
    base_url: str = 'https://opensky-network.org/api'
    timeout_seconds: float = float(os.getenv('OPENSKY_TIMEOUT_SECONDS', '30'))

    @property
    def is_authenticated(self) -> bool:
        return bool(self.username and self.password)

    @property
    def rate_limit_seconds(self) -> int:
        # Authenticated users can poll more frequently
        return 5 if self.is_authenticated else 10


@dataclass(frozen=True)
class TrackingConfig:
    """Tracking loop settings."""
    poll_interval: int = int(os.getenv('TRACKING_POLL_SECONDS', '60'))
    error_backoff: int = int(os.getenv('TRACKING_RETRY_SECONDS', '5'))
    stop_timeout: float = float(os.getenv('TRACKING_STOP_TIMEOUT_SECONDS', '10'))

    # Re-query the feed by aircraft address after a callsign match
    refine_by_aircraft: bool = _parse_bool(os.getenv('TRACKING_REFINE_BY_AIRCRAFT', '1'))


@dataclass(frozen=True)
class DatabaseConfig:
    """Database configuration."""
    url: str = os.getenv('DATABASE_URL', 'sqlite:///flightwatch.db')


@dataclass(frozen=True)
class RetentionConfig:
    """Track history retention policy."""
    hours: int = int(os.getenv('RETENTION_HOURS', '24'))


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration."""
    opensky: OpenSkyConfig
    tracking: TrackingConfig
    database: DatabaseConfig
    retention: RetentionConfig

    # Flask settings
    secret_key: str
    debug: bool


def load_config() -> AppConfig:
    """Load and validate all configuration."""
    return AppConfig(
        opensky=OpenSkyConfig(),
        tracking=TrackingConfig(),
        database=DatabaseConfig(),
        retention=RetentionConfig(),
        secret_key=os.getenv('SECRET_KEY', 'dev-key-change-in-prod'),
        debug=os.getenv('FLASK_DEBUG', '0') == '1',
    )


# Singleton instance
config = load_config()
