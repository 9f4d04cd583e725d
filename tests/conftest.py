"""Shared fixtures for the kiosk electricity API tests."""

import random
from datetime import datetime, timedelta

import pytest
import pytz
import requests

from kiosk_api.config import ApplicationConfig, DatabaseManager
from kiosk_api.models import PriceObservation, PriceSource
from kiosk_api.repositories import PriceRepository, WindowRepository

NEW_YORK = pytz.timezone("America/New_York")


def local(year, month, day, hour=0, minute=0):
    """UTC instant for a New York wall-clock time."""
    return NEW_YORK.localize(datetime(year, month, day, hour, minute)).astimezone(pytz.utc)


def hourly_series(start, values, zone="J", source=PriceSource.DAY_AHEAD, step_minutes=60):
    """Observations spaced `step_minutes` apart starting at `start`."""
    return [
        PriceObservation(
            timestamp=start + timedelta(minutes=i * step_minutes),
            zone=zone,
            value=value,
            source=source,
        )
        for i, value in enumerate(values)
    ]


class FakeResponse:
    def __init__(self, status_code=200, text=""):
        self.status_code = status_code
        self.text = text

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")


class FakeSession:
    """requests.Session stand-in that serves canned responses by URL fragment."""

    def __init__(self, routes=None, default=None):
        self.headers = {}
        self.routes = routes or {}
        self.default = default or FakeResponse(500)
        self.requested = []

    def get(self, url, timeout=None):
        self.requested.append(url)
        for fragment, response in self.routes.items():
            if fragment in url:
                if isinstance(response, Exception):
                    raise response
                return response
        return self.default


@pytest.fixture
def database(tmp_path):
    db = DatabaseManager(str(tmp_path / "kiosk_test.db"))
    db.initialize_schema()
    return db


@pytest.fixture
def price_repository(database):
    return PriceRepository(database)


@pytest.fixture
def window_repository(database):
    return WindowRepository(database)


@pytest.fixture
def config():
    return ApplicationConfig()


@pytest.fixture
def no_simulation_config():
    cfg = ApplicationConfig()
    cfg.feed = cfg.feed.model_copy(update={"simulate_on_failure": False})
    return cfg


@pytest.fixture
def now():
    """Wednesday 2025-10-15, 14:30 in New York."""
    return local(2025, 10, 15, 14, 30)


@pytest.fixture
def rng():
    return random.Random(42)
