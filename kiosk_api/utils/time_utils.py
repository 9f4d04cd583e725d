"""
Timestamp helpers.

All instants are held as timezone-aware UTC datetimes in memory and as
'YYYY-MM-DD HH:MM:SS' UTC strings in the database, so lexical ordering in
SQL matches chronological ordering.
"""

from datetime import datetime
from typing import Tuple

import pytz

DB_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def utc_now() -> datetime:
    return datetime.now(pytz.utc)


def ensure_utc(value: datetime) -> datetime:
    """Convert an aware datetime to UTC; naive values are taken as UTC."""
    if value.tzinfo is None:
        return pytz.utc.localize(value)
    return value.astimezone(pytz.utc)


def to_db_timestamp(value: datetime) -> str:
    return ensure_utc(value).strftime(DB_TIMESTAMP_FORMAT)


def from_db_timestamp(value: str) -> datetime:
    # pandas may hand back ISO strings with a 'T' separator or fractions
    text = str(value).replace("T", " ")[:19]
    return pytz.utc.localize(datetime.strptime(text, DB_TIMESTAMP_FORMAT))


def to_local(value: datetime, timezone_name: str) -> datetime:
    return ensure_utc(value).astimezone(pytz.timezone(timezone_name))


def local_day_bounds(now: datetime, timezone_name: str) -> Tuple[datetime, datetime]:
    """
    UTC bounds of the local calendar day containing `now`.

    Returns (local midnight, local 23:59:59.999) both expressed in UTC.
    """
    tz = pytz.timezone(timezone_name)
    local_now = to_local(now, timezone_name)
    day = (local_now.year, local_now.month, local_now.day)
    midnight = tz.localize(datetime(*day))
    end = tz.localize(datetime(*day, 23, 59, 59, 999000))
    return midnight.astimezone(pytz.utc), end.astimezone(pytz.utc)


def local_trading_day(now: datetime, timezone_name: str):
    """Calendar date of `now` in the zone's local time."""
    return to_local(now, timezone_name).date()


def fixed_offset_to_utc(local_value: datetime, utc_offset_hours: int) -> datetime:
    """Attach a fixed UTC offset to a naive local timestamp and convert to UTC."""
    offset = pytz.FixedOffset(utc_offset_hours * 60)
    return offset.localize(local_value).astimezone(pytz.utc)


def format_clock(value: datetime, timezone_name: str) -> str:
    """12-hour clock label such as '7:00 PM' in the zone's local time."""
    local = to_local(value, timezone_name)
    hour = local.hour % 12 or 12
    return f"{hour}:{local.minute:02d} {'AM' if local.hour < 12 else 'PM'}"
