from datetime import datetime

import pytest
import pytz

from kiosk_api.config import ApplicationConfig, PricingConfig, ZoneConfig
from kiosk_api.utils.time_utils import (
    fixed_offset_to_utc,
    format_clock,
    from_db_timestamp,
    local_day_bounds,
    to_db_timestamp,
)

from .conftest import local


class TestPricingConfig:
    @pytest.mark.parametrize("appliance,minutes", [
        ("dishwasher", 120),
        ("laundry", 90),
        ("dryer", 60),
        ("kettle", 90),
    ])
    def test_required_duration(self, appliance, minutes):
        assert PricingConfig().required_duration(appliance) == minutes


class TestZoneConfig:
    def test_aliases_match_case_insensitively(self):
        zone = ApplicationConfig().get_zone("J")
        assert zone.matches("N.Y.C.")
        assert zone.matches(" nyc ")
        assert zone.matches("j")
        assert not zone.matches("WEST")

    def test_unknown_zone_gets_defaults(self):
        zone = ApplicationConfig().get_zone("Z")
        assert zone == ZoneConfig(zone_id="Z")
        assert zone.timezone == "America/New_York"


class TestTimeUtils:
    def test_db_timestamp_round_trip_is_utc(self):
        value = local(2025, 10, 15, 14, 30)
        assert to_db_timestamp(value) == "2025-10-15 18:30:00"
        assert from_db_timestamp("2025-10-15T18:30:00.000") == value

    def test_day_bounds_follow_local_calendar(self, now):
        start, end = local_day_bounds(now, "America/New_York")
        assert start == pytz.utc.localize(datetime(2025, 10, 15, 4))
        assert end.strftime("%Y-%m-%d %H:%M:%S") == "2025-10-16 03:59:59"

    def test_day_bounds_on_dst_change(self):
        start, end = local_day_bounds(local(2025, 11, 2, 12), "America/New_York")
        assert (end - start).total_seconds() > 24 * 3600

    def test_fixed_offset(self):
        assert fixed_offset_to_utc(datetime(2025, 7, 1, 0), -5) == \
            pytz.utc.localize(datetime(2025, 7, 1, 5))

    @pytest.mark.parametrize("hour,label", [(0, "12:00 AM"), (9, "9:00 AM"), (12, "12:00 PM"), (19, "7:00 PM")])
    def test_format_clock(self, hour, label):
        assert format_clock(local(2025, 10, 15, hour), "America/New_York") == label
