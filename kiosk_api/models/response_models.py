"""
Response models for API endpoints.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .price_models import PriceObservation, PriceSource
from .window_models import CheapestHour, PriceWindow, Recommendation


class RecommendationResponse(BaseModel):
    """Model for the appliance recommendation response."""
    model_config = ConfigDict(populate_by_name=True)

    recommendation: Optional[Recommendation] = None
    windows: List[PriceWindow]
    prices: List[PriceObservation]
    appliance: str
    required_duration: int = Field(alias="requiredDuration")
    data_source: Optional[PriceSource] = Field(default=None, alias="dataSource")
    cheapest_waking_hour: Optional[CheapestHour] = Field(
        default=None, alias="cheapestWakingHour")


class Percentiles(BaseModel):
    p25: float
    p50: float
    p75: float


class IngestResponse(BaseModel):
    """Model for the ingestion cycle result."""
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    prices: int
    windows: int
    percentiles: Percentiles
    data_source: PriceSource = Field(alias="dataSource")


class HourlyAverage(BaseModel):
    """Average price for one local hour of day."""
    model_config = ConfigDict(populate_by_name=True)

    hour: int
    avg_price: Optional[float] = Field(default=None, alias="avgPrice")
    sample_count: int = Field(alias="sampleCount")


class HistoricalAveragesResponse(BaseModel):
    """Model for same-weekday hourly averages."""
    model_config = ConfigDict(populate_by_name=True)

    hourly_averages: List[HourlyAverage] = Field(alias="hourlyAverages")
    day_of_week: int = Field(alias="dayOfWeek")  # 0 = Sunday
    weeks_analyzed: int = Field(alias="weeksAnalyzed")
    zone: str


class DailySummary(BaseModel):
    """Model for today's hourly price summary."""
    model_config = ConfigDict(populate_by_name=True)

    zone: str
    date: str
    hourly_prices: List[HourlyAverage] = Field(alias="hourlyPrices")
    min_price: Optional[float] = Field(default=None, alias="minPrice")
    max_price: Optional[float] = Field(default=None, alias="maxPrice")
    avg_price: Optional[float] = Field(default=None, alias="avgPrice")
    cheapest_hour: Optional[int] = Field(default=None, alias="cheapestHour")
    peak_hour: Optional[int] = Field(default=None, alias="peakHour")


class SchedulerStatus(BaseModel):
    """Model for the periodic ingestion status."""
    is_running: bool
    interval_hours: int
    zone: str
    last_run: Optional[str] = None
    last_result: Optional[dict] = None


class APIInfo(BaseModel):
    """Model for API information."""
    message: str
    version: str
    endpoints: dict


class HealthResponse(BaseModel):
    """Model for health check response."""
    status: str
    service: str
