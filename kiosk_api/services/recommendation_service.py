"""
Appliance run-time recommendations.

Picks the earliest "great" window that is still open and long enough for the
appliance. When no single window is long enough, runs of back-to-back great
windows are merged until their combined duration suffices.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, List, Optional, Sequence

from .base_service import BaseService
from ..config import ApplicationConfig, PricingConfig, app_config
from ..models import (
    CheapestHour,
    PriceLabel,
    PriceObservation,
    PriceSource,
    PriceWindow,
    Recommendation,
    RecommendationResponse,
    TimeOfDay,
)
from ..repositories import PriceRepository, WindowRepository
from ..utils.time_utils import format_clock, local_day_bounds, to_local, utc_now

logger = logging.getLogger(__name__)

SOURCE_PREFERENCE = [PriceSource.DAY_AHEAD, PriceSource.REAL_TIME, PriceSource.SIMULATED]


def future_windows(windows: Sequence[PriceWindow], now: datetime) -> List[PriceWindow]:
    """Windows that have not ended yet, in start_time order."""
    return sorted((w for w in windows if w.end_time > now), key=lambda w: w.start_time)


def _is_adjacent(previous: PriceWindow, following: PriceWindow, max_gap: timedelta) -> bool:
    return following.start_time - previous.end_time <= max_gap


def _merge(run: Sequence[PriceWindow]) -> PriceWindow:
    total = sum(w.duration_minutes for w in run)
    weighted = sum(w.avg_price * w.duration_minutes for w in run) / total
    return PriceWindow(
        start_time=run[0].start_time,
        end_time=run[-1].end_time,
        zone=run[0].zone,
        label=PriceLabel.GREAT,
        avg_price=weighted,
        percentile=run[0].percentile,
        duration_minutes=total,
    )


def find_best_window(
    upcoming: Sequence[PriceWindow],
    required_minutes: int,
    max_gap: timedelta = timedelta(minutes=60)
) -> Optional[PriceWindow]:
    """
    First-fit search over upcoming windows (already filtered and ordered).

    1. The earliest single great window with enough duration.
    2. Otherwise the earliest run of consecutive great windows whose summed
       duration reaches the requirement. A run breaks at the first non-great
       window or at a gap wider than `max_gap` between two great windows.

    Returns None when nothing fits.
    """
    for window in upcoming:
        if window.label is PriceLabel.GREAT and window.duration_minutes >= required_minutes:
            return window

    for i, first in enumerate(upcoming):
        if first.label is not PriceLabel.GREAT:
            continue

        run = [first]
        total = first.duration_minutes
        for following in upcoming[i + 1:]:
            if following.label is not PriceLabel.GREAT or not _is_adjacent(run[-1], following, max_gap):
                break
            run.append(following)
            total += following.duration_minutes
            if total >= required_minutes:
                return _merge(run)

    return None


def classify_time_of_day(start_time: datetime, timezone_name: str, pricing: PricingConfig) -> TimeOfDay:
    """'tonight' for local start hours >= 18 or < 6, otherwise 'today'."""
    hour = to_local(start_time, timezone_name).hour
    if hour >= pricing.tonight_start_hour or hour < pricing.tonight_end_hour:
        return TimeOfDay.TONIGHT
    return TimeOfDay.TODAY


def cheapest_waking_hour(
    prices: Sequence[PriceObservation],
    timezone_name: str,
    waking_hours=(8, 23)
) -> Optional[CheapestHour]:
    """
    Lowest-priced observation with local hour in the inclusive waking range.

    Ties keep the first observation in scan order.
    """
    first_hour, last_hour = waking_hours
    best = None
    best_hour = None
    for observation in prices:
        hour = to_local(observation.timestamp, timezone_name).hour
        if not first_hour <= hour <= last_hour:
            continue
        if best is None or observation.value < best.value:
            best = observation
            best_hour = hour

    if best is None:
        return None
    return CheapestHour(hour=best_hour, timestamp=best.timestamp, price=best.value)


def select_data_source(prices: Sequence[PriceObservation]) -> Optional[PriceSource]:
    """Most trusted source present in a day's prices."""
    present = {p.source for p in prices}
    for source in SOURCE_PREFERENCE:
        if source in present:
            return source
    return None


class RecommendationService(BaseService):
    """Service that answers "when should I run this appliance today"."""

    def __init__(
        self,
        repository: WindowRepository = None,
        price_repository: PriceRepository = None,
        config: ApplicationConfig = None,
        warm_trigger: Optional[Callable[[str], None]] = None
    ):
        """
        Initialize service with repository dependency injection.

        Args:
            warm_trigger: Called with the zone when today has no day-ahead
                prices yet. It must schedule work and return immediately.
        """
        self.config = config or app_config
        super().__init__(repository or WindowRepository(), self.config.pricing)
        self.price_repository = price_repository or PriceRepository(
            self.repository.db_manager)
        self.warm_trigger = warm_trigger

    def validate_input(self, **kwargs) -> bool:
        super().validate_input(**kwargs)
        appliance = kwargs.get('appliance')
        if appliance is not None and not str(appliance).strip():
            raise ValueError("Appliance must not be empty")
        return True

    def recommend(
        self,
        zone: str,
        appliance: str,
        now: Optional[datetime] = None,
        windows: Optional[Sequence[PriceWindow]] = None
    ) -> Optional[Recommendation]:
        """
        Best upcoming window for the appliance, or None when nothing fits.

        Args:
            windows: Today's windows if already loaded; read from the store otherwise.
        """
        self.validate_input(zone=zone, appliance=appliance)
        now = now or utc_now()
        timezone_name = self.config.get_zone(zone).timezone
        required = self.pricing.required_duration(appliance)

        if windows is None:
            start, end = local_day_bounds(now, timezone_name)
            windows = self.repository.find_starting_between(zone, start, end)

        upcoming = future_windows(windows, now)
        logger.info(
            f"Found {len(upcoming)} future windows out of {len(windows)} for zone {zone}")

        best = find_best_window(
            upcoming, required, timedelta(minutes=self.pricing.minutes_per_observation))
        if best is None:
            logger.info(f"No suitable window for {appliance} ({required} min) in zone {zone}")
            return None

        logger.info(
            f"Best window for {appliance}: {best.start_time.isoformat()} - "
            f"{best.end_time.isoformat()}, avg price {best.avg_price:.2f}")

        return Recommendation(
            time_of_day=classify_time_of_day(best.start_time, timezone_name, self.pricing),
            start_time=best.start_time,
            end_time=best.end_time,
            label=best.label,
            avg_price=round(best.avg_price, 2),
            duration_minutes=best.duration_minutes,
            display_start=format_clock(best.start_time, timezone_name),
            display_end=format_clock(best.end_time, timezone_name),
        )

    def get_recommendations(
        self,
        appliance: str = "laundry",
        zone: Optional[str] = None,
        now: Optional[datetime] = None
    ) -> RecommendationResponse:
        """Full dashboard payload: recommendation, today's windows and prices."""
        zone = zone or self.config.default_zone
        now = now or utc_now()
        timezone_name = self.config.get_zone(zone).timezone
        start, end = local_day_bounds(now, timezone_name)

        if not self.price_repository.has_source_between(zone, PriceSource.DAY_AHEAD, start, end):
            self._trigger_warm(zone)

        windows = self.repository.find_starting_between(zone, start, end)
        recommendation = self.recommend(zone, appliance, now, windows)

        all_prices = self.price_repository.find_between(zone, start, end)
        data_source = select_data_source(all_prices)
        prices = [p for p in all_prices if p.source == data_source]

        return RecommendationResponse(
            recommendation=recommendation,
            windows=windows,
            prices=prices,
            appliance=appliance,
            required_duration=self.pricing.required_duration(appliance),
            data_source=data_source,
            cheapest_waking_hour=cheapest_waking_hour(
                prices, timezone_name, self.pricing.waking_hours),
        )

    def _trigger_warm(self, zone: str) -> None:
        if self.warm_trigger is None:
            return
        logger.info(f"No day-ahead prices for zone {zone} today, requesting ingestion")
        try:
            self.warm_trigger(zone)
        except Exception as e:
            logger.error(f"❌ Could not schedule ingestion for zone {zone}: {e}")
