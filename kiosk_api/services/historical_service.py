"""
Service for historical price trends.
"""

import logging
from datetime import datetime, timedelta
from typing import List, Optional, Sequence

import pandas as pd

from .base_service import BaseService
from ..config import ApplicationConfig, app_config
from ..models import (
    DailySummary,
    HistoricalAveragesResponse,
    HourlyAverage,
    PriceObservation,
)
from ..repositories import PriceRepository
from ..utils.time_utils import local_day_bounds, to_local, utc_now
from .recommendation_service import select_data_source

logger = logging.getLogger(__name__)


def _local_frame(prices: Sequence[PriceObservation], timezone_name: str) -> pd.DataFrame:
    """Observations as a DataFrame with local weekday and hour columns."""
    if not prices:
        return pd.DataFrame(columns=['timestamp', 'value', 'weekday', 'hour'])

    df = pd.DataFrame({
        'timestamp': [p.timestamp for p in prices],
        'value': [float(p.value) for p in prices],
    })
    local = pd.to_datetime(df['timestamp'], utc=True).dt.tz_convert(timezone_name)
    df['weekday'] = local.dt.weekday
    df['hour'] = local.dt.hour
    return df


def hourly_table(df: pd.DataFrame) -> List[HourlyAverage]:
    """Mean value per local hour, always 24 entries; empty hours carry None."""
    grouped = df.groupby('hour')['value'].agg(['mean', 'count']) if not df.empty else None

    averages = []
    for hour in range(24):
        if grouped is not None and hour in grouped.index:
            averages.append(HourlyAverage(
                hour=hour,
                avg_price=float(grouped.loc[hour, 'mean']),
                sample_count=int(grouped.loc[hour, 'count'])
            ))
        else:
            averages.append(HourlyAverage(hour=hour, avg_price=None, sample_count=0))
    return averages


class HistoricalPriceService(BaseService):
    """Service for same-weekday hourly averages and daily summaries."""

    def __init__(self, repository: PriceRepository = None, config: ApplicationConfig = None):
        """Initialize service with repository dependency injection."""
        self.config = config or app_config
        super().__init__(repository or PriceRepository(), self.config.pricing)

    def validate_input(self, **kwargs) -> bool:
        """Validate input parameters for historical queries."""
        super().validate_input(**kwargs)
        weeks_back = kwargs.get('weeks_back')
        max_weeks = self.pricing.historical_weeks_max

        if weeks_back is not None and (weeks_back < 1 or weeks_back > max_weeks):
            raise ValueError(f"weeks_back must be between 1 and {max_weeks}")

        return True

    def hourly_averages(
        self,
        zone: Optional[str] = None,
        weeks_back: Optional[int] = None,
        now: Optional[datetime] = None
    ) -> HistoricalAveragesResponse:
        """
        Average price per local hour for today's weekday over the past weeks.

        All prices of the zone since now - weeks_back * 7 days are loaded,
        restricted to observations falling on the same local weekday as today
        and averaged per local hour. Hours without samples report None.
        """
        zone = zone or self.config.default_zone
        if weeks_back is None:
            weeks_back = self.pricing.historical_weeks_default
        self.validate_input(zone=zone, weeks_back=weeks_back)

        now = now or utc_now()
        timezone_name = self.config.get_zone(zone).timezone
        today_weekday = to_local(now, timezone_name).weekday()

        prices = self.repository.find_since(zone, now - timedelta(days=weeks_back * 7))
        df = _local_frame(prices, timezone_name)
        same_day = df[df['weekday'] == today_weekday] if not df.empty else df

        averages = hourly_table(same_day)
        logger.info(
            f"Computed averages for {sum(1 for a in averages if a.avg_price is not None)} hours "
            f"from {len(same_day)} of {len(df)} prices (zone {zone}, {weeks_back} weeks)")

        return HistoricalAveragesResponse(
            hourly_averages=averages,
            # Sunday = 0 like the dashboard's day index
            day_of_week=(today_weekday + 1) % 7,
            weeks_analyzed=weeks_back,
            zone=zone
        )

    def daily_summary(
        self, zone: Optional[str] = None, now: Optional[datetime] = None
    ) -> DailySummary:
        """Today's prices averaged per local hour, with min/max/avg and cheapest/peak hour."""
        zone = zone or self.config.default_zone
        self.validate_input(zone=zone)
        now = now or utc_now()
        timezone_name = self.config.get_zone(zone).timezone
        start, end = local_day_bounds(now, timezone_name)

        prices = self.repository.find_between(zone, start, end)
        source = select_data_source(prices)
        prices = [p for p in prices if p.source == source]

        hourly = hourly_table(_local_frame(prices, timezone_name))
        filled = [h for h in hourly if h.avg_price is not None]
        summary = DailySummary(
            zone=zone,
            date=to_local(now, timezone_name).strftime('%Y-%m-%d'),
            hourly_prices=hourly
        )
        if not filled:
            return summary

        values = [h.avg_price for h in filled]
        min_price, max_price = min(values), max(values)
        summary.min_price = round(min_price, 2)
        summary.max_price = round(max_price, 2)
        summary.avg_price = round(sum(values) / len(values), 2)
        summary.cheapest_hour = next(h.hour for h in filled if h.avg_price == min_price)
        summary.peak_hour = next(h.hour for h in filled if h.avg_price == max_price)
        return summary
