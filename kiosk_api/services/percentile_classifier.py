"""
Percentile breakpoints and price labeling.

Breakpoints use nearest-rank indexing on the ascending sample:
sorted[floor(n * q)] for q in (0.25, 0.50, 0.75), index clamped to n - 1.
This estimator is biased for small samples but keeps labels reproducible.
"""

import logging
import math
from datetime import datetime, timedelta
from typing import Optional, Sequence, Tuple

import numpy as np

from .base_service import BaseService
from ..config import PricingConfig
from ..models import PercentileBreakpoints, PriceLabel
from ..repositories import PriceRepository
from ..utils.time_utils import utc_now

logger = logging.getLogger(__name__)

QUANTILES = (0.25, 0.50, 0.75)


def nearest_rank(sorted_values: Sequence[float], q: float) -> float:
    """Value at index floor(n * q) of an ascending sample, clamped to range."""
    n = len(sorted_values)
    index = min(max(int(math.floor(n * q)), 0), n - 1)
    return float(sorted_values[index])


def breakpoints_from_sample(
    zone: str,
    values: Sequence[float],
    fallback: Tuple[float, float, float] = (25.0, 35.0, 45.0)
) -> PercentileBreakpoints:
    """Compute p25/p50/p75 from a sample, or the fallback constants when empty."""
    if len(values) == 0:
        p25, p50, p75 = fallback
        return PercentileBreakpoints(zone=zone, p25=p25, p50=p50, p75=p75, sample_size=0)

    ordered = np.sort(np.asarray(values, dtype=float))
    p25, p50, p75 = (nearest_rank(ordered, q) for q in QUANTILES)
    return PercentileBreakpoints(
        zone=zone, p25=p25, p50=p50, p75=p75, sample_size=len(ordered))


def classify(price: float, breakpoints: PercentileBreakpoints) -> PriceLabel:
    """
    Map a price onto the label ladder.

    Ties at a breakpoint go to the cheaper label.
    """
    if price <= breakpoints.p25:
        return PriceLabel.GREAT
    if price <= breakpoints.p50:
        return PriceLabel.GOOD
    if price <= breakpoints.p75:
        return PriceLabel.OKAY
    return PriceLabel.AVOID


class PercentileClassifier(BaseService):
    """Service that derives a zone's breakpoints from its trailing history."""

    def __init__(self, repository: PriceRepository = None, pricing: PricingConfig = None):
        super().__init__(repository or PriceRepository(), pricing)

    def compute_breakpoints(
        self,
        zone: str,
        lookback_days: Optional[int] = None,
        now: Optional[datetime] = None
    ) -> PercentileBreakpoints:
        """Breakpoints over all of the zone's prices in the last `lookback_days`."""
        self.validate_input(zone=zone)
        lookback_days = lookback_days or self.pricing.lookback_days
        since = (now or utc_now()) - timedelta(days=lookback_days)

        values = self.repository.find_values_since(zone, since)
        breakpoints = breakpoints_from_sample(
            zone, values, self.pricing.fallback_breakpoints)

        if breakpoints.is_fallback:
            logger.warning(
                f"No price history for zone {zone} in the last {lookback_days} days, "
                f"using default breakpoints")
        else:
            logger.info(
                f"Breakpoints for zone {zone} from {breakpoints.sample_size} prices: "
                f"p25={breakpoints.p25} p50={breakpoints.p50} p75={breakpoints.p75}")
        return breakpoints
