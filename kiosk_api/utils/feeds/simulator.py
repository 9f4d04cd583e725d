"""
Synthetic day-curve generator used when every real price source fails.
"""

import math
import random
from datetime import date, datetime
from typing import List, Optional

import pytz

from ...config import ZoneConfig
from ...models import PriceObservation, PriceSource

BASE_PRICE = 30.0
DIURNAL_AMPLITUDE = 15.0
NOISE = 5.0
FLOOR_PRICE = 10.0


def simulate_day(
    zone: ZoneConfig,
    trading_day: date,
    rng: Optional[random.Random] = None
) -> List[PriceObservation]:
    """
    Generate 24 hourly prices for the zone's local trading day.

    Shape is a sine wave peaking mid-afternoon with bounded uniform noise,
    floored at FLOOR_PRICE so values are always positive.
    """
    rng = rng or random.Random()
    tz = pytz.timezone(zone.timezone)

    observations = []
    for hour in range(24):
        local = tz.localize(datetime(trading_day.year, trading_day.month, trading_day.day, hour))
        hour_factor = math.sin((hour - 6) * math.pi / 12) * DIURNAL_AMPLITUDE
        noise = rng.uniform(-NOISE, NOISE)
        price = max(FLOOR_PRICE, BASE_PRICE + hour_factor + noise)

        observations.append(PriceObservation(
            timestamp=local.astimezone(pytz.utc),
            zone=zone.zone_id,
            value=round(price, 2),
            source=PriceSource.SIMULATED
        ))
    return observations
