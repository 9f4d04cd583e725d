"""
Client for NYISO zonal LBMP CSV files.

This module downloads the day-ahead and real-time zonal price files for a
trading day, locates the needed columns by header name, keeps the rows of the
requested zone and converts local timestamps to UTC instants.

CSV layout (columns may appear in any order):
    "Time Stamp","Name","PTID","LBMP ($/MWHr)","Marginal Cost Losses ($/MWHr)",...
    "10/18/2025 00:00","N.Y.C.","61761","31.52","1.20",...
"""

import io
import logging
from datetime import date, datetime
from typing import Dict, Iterable, List, Optional

import pandas as pd
import requests

from ...config import FeedConfig, ZoneConfig, app_config
from ...exceptions import SourceFormatError, SourceUnavailableError
from ...models import PriceObservation, PriceSource
from ..time_utils import fixed_offset_to_utc

logger = logging.getLogger(__name__)

TIMESTAMP_FORMATS = (
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %H:%M",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
)

# Header fragments accepted for each required field, matched case-insensitively
COLUMN_CANDIDATES: Dict[str, tuple] = {
    "timestamp": ("time stamp", "timestamp", "time"),
    "zone": ("name", "zone"),
    "price": ("lbmp", "price"),
}


def deduplicate(observations: Iterable[PriceObservation]) -> List[PriceObservation]:
    """Keep the last observation per timestamp, returned oldest first."""
    by_timestamp: Dict[datetime, PriceObservation] = {}
    for observation in observations:
        by_timestamp[observation.timestamp] = observation
    return [by_timestamp[ts] for ts in sorted(by_timestamp)]


class NYISOPriceFeed:
    """
    Fetch and parse NYISO zonal price files.

    Features:
    - Day-ahead (hourly) and real-time (5-minute) zonal files
    - Header lookup by name so column order changes do not break parsing
    - Zone alias matching ("J", "N.Y.C.", "NYC", ...)
    - Fixed standard-time offset conversion to UTC
    - Deduplication by timestamp, last row wins
    """

    def __init__(self, feed_config: Optional[FeedConfig] = None, session=None):
        """
        Initialize the feed client.

        Args:
            feed_config: URLs and timeouts. Defaults to the application config.
            session: requests.Session compatible object used for downloads.
        """
        self.config = feed_config or app_config.feed
        self.session = session or requests.Session()
        self.session.headers.update({
            'User-Agent': self.config.user_agent,
            'Accept': 'text/csv,text/plain,*/*',
        })

    def fetch_day_ahead(self, zone: ZoneConfig, trading_day: date) -> List[PriceObservation]:
        """Full-day hourly series published for `trading_day`."""
        url = self.config.day_ahead_url.format(date=trading_day.strftime("%Y%m%d"))
        return self._fetch(url, zone, PriceSource.DAY_AHEAD)

    def fetch_real_time(self, zone: ZoneConfig, trading_day: date) -> List[PriceObservation]:
        """Most recent real-time series for `trading_day`, updated through the day."""
        url = self.config.real_time_url.format(date=trading_day.strftime("%Y%m%d"))
        return self._fetch(url, zone, PriceSource.REAL_TIME)

    def _fetch(self, url: str, zone: ZoneConfig, source: PriceSource) -> List[PriceObservation]:
        text = self.fetch_csv(url, source)
        observations = self.parse_csv(text, zone, source)
        if not observations:
            raise SourceUnavailableError(
                source.value, f"no rows for zone {zone.zone_id} in {url}")
        logger.info(f"Parsed {len(observations)} {source.value} prices for zone {zone.zone_id}")
        return observations

    def fetch_csv(self, url: str, source: PriceSource) -> str:
        """
        Download a CSV file.

        Raises:
            SourceUnavailableError: On network failure or non-success status.
        """
        try:
            logger.info(f"Fetching {source.value} prices: {url}")
            response = self.session.get(url, timeout=self.config.request_timeout)
            response.raise_for_status()
            return response.text
        except requests.RequestException as e:
            logger.warning(f"Error fetching {url}: {e}")
            raise SourceUnavailableError(source.value, str(e)) from e

    @staticmethod
    def locate_columns(columns: Iterable[str]) -> Dict[str, str]:
        """
        Map each required field to the first header that matches it.

        Raises:
            SourceFormatError: If any required field has no matching header.
        """
        headers = [str(c) for c in columns]
        located = {}
        for field_name, fragments in COLUMN_CANDIDATES.items():
            for fragment in fragments:
                match = next(
                    (h for h in headers
                     if fragment in h.strip().lower() and h not in located.values()),
                    None)
                if match is not None:
                    located[field_name] = match
                    break

        missing = [f for f in COLUMN_CANDIDATES if f not in located]
        if missing:
            raise SourceFormatError(
                f"Missing required columns {missing} in headers {headers}")
        return located

    @staticmethod
    def parse_timestamp(value: str, utc_offset_hours: int) -> Optional[datetime]:
        text = str(value).strip()
        for fmt in TIMESTAMP_FORMATS:
            try:
                local = datetime.strptime(text, fmt)
            except ValueError:
                continue
            return fixed_offset_to_utc(local, utc_offset_hours)
        return None

    def parse_csv(
        self, text: str, zone: ZoneConfig, source: PriceSource
    ) -> List[PriceObservation]:
        """
        Parse a zonal CSV payload into the zone's deduplicated observations.

        Rows with unparseable timestamps or prices are skipped.

        Raises:
            SourceFormatError: If required columns cannot be located.
            SourceUnavailableError: If the payload is empty.
        """
        try:
            df = pd.read_csv(io.StringIO(text), dtype=str, skipinitialspace=True)
        except pd.errors.EmptyDataError as e:
            raise SourceUnavailableError(source.value, "empty payload") from e

        columns = self.locate_columns(df.columns)

        observations = []
        skipped = 0
        for _, row in df.iterrows():
            name = row[columns["zone"]]
            if pd.isna(name) or not zone.matches(str(name)):
                continue

            timestamp = self.parse_timestamp(row[columns["timestamp"]], zone.utc_offset_hours)
            try:
                value = float(str(row[columns["price"]]).replace(",", ""))
            except ValueError:
                value = None

            if timestamp is None or value is None or pd.isna(value):
                skipped += 1
                continue

            observations.append(PriceObservation(
                timestamp=timestamp,
                zone=zone.zone_id,
                value=value,
                source=source
            ))

        if skipped:
            logger.warning(f"Skipped {skipped} unparseable {source.value} rows")
        return deduplicate(observations)
