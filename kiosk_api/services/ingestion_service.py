"""
Price ingestion cycle.

One cycle fetches a trading day's prices through the source fallback chain
(day-ahead, then real-time, then simulated), upserts them, recomputes the
zone's percentile breakpoints and swaps in the rebuilt window set.
"""

import logging
import random
from datetime import date, datetime
from typing import Callable, List, Optional, Tuple

from .base_service import BaseService
from .percentile_classifier import PercentileClassifier
from .window_builder import build_windows
from ..config import ApplicationConfig, app_config
from ..exceptions import SourceUnavailableError
from ..models import IngestResponse, Percentiles, PriceObservation, PriceSource
from ..repositories import PriceRepository, WindowRepository
from ..utils.feeds import NYISOPriceFeed, deduplicate, simulate_day
from ..utils.time_utils import local_trading_day, utc_now

logger = logging.getLogger(__name__)

# (zone, trading_day) -> observations, raising SourceUnavailableError on failure
SourceStrategy = Callable[[object, date], List[PriceObservation]]


class PriceIngestionService(BaseService):
    """Service that runs ingestion cycles for a zone."""

    def __init__(
        self,
        repository: PriceRepository = None,
        window_repository: WindowRepository = None,
        feed: NYISOPriceFeed = None,
        classifier: PercentileClassifier = None,
        config: ApplicationConfig = None,
        rng: Optional[random.Random] = None
    ):
        """Initialize service with repository and feed dependency injection."""
        self.config = config or app_config
        super().__init__(repository or PriceRepository(), self.config.pricing)
        self.window_repository = window_repository or WindowRepository(
            self.repository.db_manager)
        self.feed = feed or NYISOPriceFeed(self.config.feed)
        self.classifier = classifier or PercentileClassifier(self.repository, self.pricing)
        self.rng = rng or random.Random()

    def sources(self) -> List[Tuple[PriceSource, SourceStrategy]]:
        """Source strategies in priority order."""
        chain: List[Tuple[PriceSource, SourceStrategy]] = [
            (PriceSource.DAY_AHEAD, self.feed.fetch_day_ahead),
            (PriceSource.REAL_TIME, self.feed.fetch_real_time),
        ]
        if self.config.feed.simulate_on_failure:
            chain.append((PriceSource.SIMULATED, self._simulate))
        return chain

    def _simulate(self, zone, trading_day: date) -> List[PriceObservation]:
        return simulate_day(zone, trading_day, self.rng)

    def fetch_prices(
        self, zone: str, trading_day: date
    ) -> Tuple[List[PriceObservation], PriceSource]:
        """
        Fetch a trading day's prices from the first source that delivers.

        Observations are deduplicated by timestamp and upserted keyed by
        (timestamp, zone, source).

        Raises:
            SourceFormatError: If a source payload is malformed.
            SourceUnavailableError: If every source in the chain failed.
            StoreError: If the upsert fails.
        """
        self.validate_input(zone=zone)
        zone_config = self.config.get_zone(zone)

        failures = []
        for source, strategy in self.sources():
            try:
                observations = deduplicate(strategy(zone_config, trading_day))
            except SourceUnavailableError as e:
                logger.warning(f"⚠️  {e}; trying next source")
                failures.append(str(e))
                continue

            if not observations:
                logger.warning(f"⚠️  {source.value} returned no prices for zone {zone}")
                failures.append(f"{source.value}: empty series")
                continue

            if source is PriceSource.SIMULATED:
                logger.warning(f"Using simulated prices for zone {zone} on {trading_day}")

            stored = self.repository.upsert_many(observations)
            logger.info(f"Upserted {stored} {source.value} prices for zone {zone}")
            return observations, source

        raise SourceUnavailableError("all", "; ".join(failures) or "no sources configured")

    def run_ingestion(
        self,
        zone: Optional[str] = None,
        trading_day: Optional[date] = None,
        now: Optional[datetime] = None
    ) -> IngestResponse:
        """Run one full ingestion cycle and report what was stored."""
        zone = zone or self.config.default_zone
        now = now or utc_now()
        zone_config = self.config.get_zone(zone)
        trading_day = trading_day or local_trading_day(now, zone_config.timezone)

        logger.info(f"🔄 Ingesting prices for zone {zone}, trading day {trading_day}")
        observations, source = self.fetch_prices(zone, trading_day)

        breakpoints = self.classifier.compute_breakpoints(
            zone, self.pricing.lookback_days, now)
        windows = build_windows(
            observations, breakpoints, self.pricing.minutes_per_observation)
        inserted = self.window_repository.replace_windows(zone, windows, now)

        logger.info(
            f"✅ Ingestion completed: {len(observations)} prices from {source.value}, "
            f"{inserted} windows")

        return IngestResponse(
            success=True,
            prices=len(observations),
            windows=inserted,
            percentiles=Percentiles(
                p25=breakpoints.p25, p50=breakpoints.p50, p75=breakpoints.p75),
            data_source=source
        )

    def warm_cache(self, zone: str) -> None:
        """
        Fire-and-forget ingestion used to fill a zone's prices on demand.

        Failures are logged and never raised to the caller.
        """
        try:
            self.run_ingestion(zone)
        except Exception as e:
            logger.error(f"❌ Cache warm ingestion for zone {zone} failed: {e}")
