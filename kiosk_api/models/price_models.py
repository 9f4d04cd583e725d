"""
Domain models for electricity price observations and percentile labels.
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict


class PriceSource(str, Enum):
    """Price feed tier, listed in fallback priority order."""
    DAY_AHEAD = "day-ahead"
    REAL_TIME = "real-time"
    SIMULATED = "simulated"


class PriceLabel(str, Enum):
    """Affordability tier, ordered from cheapest to most expensive."""
    GREAT = "great"
    GOOD = "good"
    OKAY = "okay"
    AVOID = "avoid"

    @property
    def percentile(self) -> int:
        """Upper percentile bound that defines the label."""
        return _LABEL_PERCENTILES[self]


_LABEL_PERCENTILES = {
    PriceLabel.GREAT: 25,
    PriceLabel.GOOD: 50,
    PriceLabel.OKAY: 75,
    PriceLabel.AVOID: 100,
}


class PriceObservation(BaseModel):
    """Model for one zonal price point."""
    model_config = ConfigDict(frozen=True)

    timestamp: datetime  # UTC instant
    zone: str
    value: float  # USD/MWh
    source: PriceSource


class PercentileBreakpoints(BaseModel):
    """p25/p50/p75 of a zone's trailing price sample."""
    model_config = ConfigDict(frozen=True)

    zone: str
    p25: float
    p50: float
    p75: float
    sample_size: int = 0

    @property
    def is_fallback(self) -> bool:
        return self.sample_size == 0
