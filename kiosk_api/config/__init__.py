"""
Configuration package for application settings.
"""

from .settings import (
    ApplicationConfig,
    APIConfig,
    DatabaseConfig,
    FeedConfig,
    PricingConfig,
    SchedulerConfig,
    ZoneConfig,
    app_config,
)
from .database import DatabaseManager, db_manager

__all__ = [
    "ApplicationConfig",
    "APIConfig",
    "DatabaseConfig",
    "FeedConfig",
    "PricingConfig",
    "SchedulerConfig",
    "ZoneConfig",
    "app_config",
    "DatabaseManager",
    "db_manager"
]
