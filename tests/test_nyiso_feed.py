from datetime import date, datetime

import pytest
import pytz
import requests

from kiosk_api.config import FeedConfig, ZoneConfig
from kiosk_api.exceptions import SourceFormatError, SourceUnavailableError
from kiosk_api.models import PriceObservation, PriceSource
from kiosk_api.utils.feeds import NYISOPriceFeed, deduplicate

from .conftest import FakeResponse, FakeSession

NYC = ZoneConfig(zone_id="J", aliases=("N.Y.C.", "NYC"))

REORDERED_CSV = '''"Name","Time Stamp","PTID","LBMP ($/MWHr)"
"N.Y.C.","10/15/2025 00:00","61761","31.50"
"WEST","10/15/2025 00:00","61752","20.00"
"N.Y.C.","10/15/2025 01:00","61761","28.00"
"N.Y.C.","10/15/2025 01:00","61761","29.00"
'''


def utc(*args):
    return pytz.utc.localize(datetime(*args))


@pytest.fixture
def feed():
    return NYISOPriceFeed(FeedConfig(), session=FakeSession())


class TestParseCsv:
    def test_columns_located_by_header_name(self, feed):
        observations = feed.parse_csv(REORDERED_CSV, NYC, PriceSource.DAY_AHEAD)

        assert [o.timestamp for o in observations] == [utc(2025, 10, 15, 5), utc(2025, 10, 15, 6)]
        assert all(o.zone == "J" for o in observations)
        assert all(o.source is PriceSource.DAY_AHEAD for o in observations)

    def test_duplicate_timestamps_keep_last_row(self, feed):
        observations = feed.parse_csv(REORDERED_CSV, NYC, PriceSource.DAY_AHEAD)
        assert [o.value for o in observations] == [31.5, 29.0]

    def test_header_case_is_ignored(self, feed):
        text = 'TIME STAMP,NAME,LBMP ($/MWHr)\n10/15/2025 13:00,nyc,44.1\n'
        observations = feed.parse_csv(text, NYC, PriceSource.REAL_TIME)

        assert len(observations) == 1
        assert observations[0].timestamp == utc(2025, 10, 15, 18)
        assert observations[0].value == 44.1

    def test_fixed_offset_ignores_daylight_saving(self, feed):
        text = 'Time Stamp,Name,LBMP\n07/01/2025 12:00,N.Y.C.,50\n'
        observations = feed.parse_csv(text, NYC, PriceSource.DAY_AHEAD)
        assert observations[0].timestamp == utc(2025, 7, 1, 17)

    def test_unparseable_rows_are_skipped(self, feed):
        text = ('Time Stamp,Name,LBMP\n'
                'not a date,N.Y.C.,50\n'
                '10/15/2025 02:00,N.Y.C.,n/a\n'
                '10/15/2025 03:00,N.Y.C.,40\n')
        observations = feed.parse_csv(text, NYC, PriceSource.DAY_AHEAD)
        assert [o.value for o in observations] == [40.0]

    def test_missing_column_raises_format_error(self, feed):
        text = 'Date,Zone,Cost\n10/15/2025,N.Y.C.,31\n'
        with pytest.raises(SourceFormatError):
            feed.parse_csv(text, NYC, PriceSource.DAY_AHEAD)

    def test_empty_payload_is_unavailable(self, feed):
        with pytest.raises(SourceUnavailableError):
            feed.parse_csv("", NYC, PriceSource.DAY_AHEAD)


class TestFetch:
    def test_day_ahead_url_uses_trading_day(self):
        session = FakeSession(routes={"damlbmp": FakeResponse(200, REORDERED_CSV)})
        feed = NYISOPriceFeed(FeedConfig(), session=session)

        observations = feed.fetch_day_ahead(NYC, date(2025, 10, 15))

        assert len(observations) == 2
        assert "20251015damlbmp_zone.csv" in session.requested[0]

    def test_http_error_is_unavailable(self):
        feed = NYISOPriceFeed(FeedConfig(), session=FakeSession(default=FakeResponse(500)))
        with pytest.raises(SourceUnavailableError) as exc_info:
            feed.fetch_real_time(NYC, date(2025, 10, 15))
        assert exc_info.value.source == "real-time"

    def test_connection_error_is_unavailable(self):
        session = FakeSession(routes={"realtime": requests.ConnectionError("refused")})
        feed = NYISOPriceFeed(FeedConfig(), session=session)
        with pytest.raises(SourceUnavailableError):
            feed.fetch_real_time(NYC, date(2025, 10, 15))

    def test_zone_missing_from_file_is_unavailable(self):
        text = 'Time Stamp,Name,LBMP\n10/15/2025 00:00,WEST,20\n'
        session = FakeSession(routes={"damlbmp": FakeResponse(200, text)})
        feed = NYISOPriceFeed(FeedConfig(), session=session)
        with pytest.raises(SourceUnavailableError):
            feed.fetch_day_ahead(NYC, date(2025, 10, 15))

    def test_session_gets_user_agent(self):
        session = FakeSession()
        NYISOPriceFeed(FeedConfig(user_agent="test-agent"), session=session)
        assert session.headers["User-Agent"] == "test-agent"


class TestDeduplicate:
    def test_sorted_oldest_first(self):
        def obs(hour, value):
            return PriceObservation(
                timestamp=utc(2025, 10, 15, hour), zone="J", value=value,
                source=PriceSource.DAY_AHEAD)

        result = deduplicate([obs(3, 1.0), obs(1, 2.0), obs(3, 5.0)])
        assert [(o.timestamp.hour, o.value) for o in result] == [(1, 2.0), (3, 5.0)]
