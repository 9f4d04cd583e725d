"""
Application configuration settings.

Configuration sections are pydantic models aggregated by ApplicationConfig.
Values can be overridden from the environment (or a .env file next to the
package) using the KIOSK_* variables.
"""

import os
from pathlib import Path
from typing import Dict, List, Tuple

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

# Load environment variables from .env file
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(env_path)


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class DatabaseConfig(BaseModel):
    """Database configuration settings."""

    database_path: str = os.getenv(
        "KIOSK_DB_PATH", "db/kiosk_electricity.db")  # Relative to package directory
    connection_timeout: int = 30


class APIConfig(BaseModel):
    """API configuration settings."""

    title: str = "Kiosk Electricity Window API"
    description: str = "REST API that labels zonal electricity prices into cheap/expensive windows and recommends appliance run times"
    version: str = "1.0.0"
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    reload: bool = False

    # CORS settings
    allow_origins: list = ["*"]
    allow_credentials: bool = True
    allow_methods: list = ["*"]
    allow_headers: list = ["*"]


class FeedConfig(BaseModel):
    """Upstream price feed settings."""

    day_ahead_url: str = "http://mis.nyiso.com/public/csv/damlbmp/{date}damlbmp_zone.csv"
    real_time_url: str = "http://mis.nyiso.com/public/csv/realtime/{date}realtime_zone.csv"
    request_timeout: int = 30
    user_agent: str = "kiosk-electricity-api/1.0"
    # When every real source fails, synthesize a curve instead of failing
    simulate_on_failure: bool = _env_flag("KIOSK_SIMULATE_ON_FAILURE", True)


class ZoneConfig(BaseModel):
    """Pricing zone definition."""

    model_config = ConfigDict(frozen=True)

    zone_id: str
    aliases: Tuple[str, ...] = ()
    timezone: str = "America/New_York"
    # Feed timestamps are published in the zone's standard time
    utc_offset_hours: int = -5

    def matches(self, name: str) -> bool:
        """Check whether a feed zone name refers to this zone."""
        candidate = name.strip().upper()
        known = {self.zone_id.upper()} | {alias.upper() for alias in self.aliases}
        return candidate in known


class PricingConfig(BaseModel):
    """Immutable pricing and recommendation parameters."""

    model_config = ConfigDict(frozen=True)

    appliance_durations: Dict[str, int] = {
        "dishwasher": 120,
        "laundry": 90,
        "dryer": 60,
    }
    default_duration_minutes: int = 90
    fallback_breakpoints: Tuple[float, float, float] = (25.0, 35.0, 45.0)
    lookback_days: int = 30
    minutes_per_observation: int = 60
    waking_hours: Tuple[int, int] = (8, 23)
    tonight_start_hour: int = 18
    tonight_end_hour: int = 6
    historical_weeks_default: int = 2
    # Upper bound on weeks_back, roughly one year of history
    historical_weeks_max: int = 52

    def required_duration(self, appliance: str) -> int:
        """Required contiguous run time for an appliance, in minutes."""
        return self.appliance_durations.get(
            (appliance or "").lower(), self.default_duration_minutes)


class SchedulerConfig(BaseModel):
    """Periodic ingestion settings."""

    enabled: bool = _env_flag("KIOSK_SCHEDULER_ENABLED", False)
    interval_hours: int = 6


DEFAULT_ZONES: List[ZoneConfig] = [
    ZoneConfig(zone_id="J", aliases=("N.Y.C.", "NYC", "ZONE J", "NEW YORK CITY")),
    ZoneConfig(zone_id="K", aliases=("LONGIL", "LONG ISLAND", "ZONE K")),
    ZoneConfig(zone_id="A", aliases=("WEST", "ZONE A")),
]


class ApplicationConfig:
    """Main application configuration."""

    def __init__(self):
        self.database = DatabaseConfig()
        self.api = APIConfig()
        self.feed = FeedConfig()
        self.pricing = PricingConfig()
        self.scheduler = SchedulerConfig()
        self.zones: Dict[str, ZoneConfig] = {z.zone_id: z for z in DEFAULT_ZONES}
        self.default_zone: str = os.getenv("KIOSK_DEFAULT_ZONE", "J")

    def get_zone(self, zone_id: str) -> ZoneConfig:
        """Zone settings by id, falling back to a bare definition for unknown zones."""
        zone = self.zones.get(zone_id)
        if zone is None:
            zone = ZoneConfig(zone_id=zone_id)
        return zone

    @property
    def database_path(self) -> str:
        """Get database path."""
        if os.path.isabs(self.database.database_path):
            return self.database.database_path
        package_dir = os.path.dirname(
            os.path.dirname(os.path.abspath(__file__)))
        return os.path.join(package_dir, self.database.database_path)

    @property
    def is_debug(self) -> bool:
        """Check if debug mode is enabled."""
        return self.api.debug


# Global configuration instance
app_config = ApplicationConfig()
