"""
Models package for API data structures.
Imports all models for easy access.
"""

# Price models
from .price_models import PriceSource, PriceLabel, PriceObservation, PercentileBreakpoints

# Window models
from .window_models import TimeOfDay, PriceWindow, Recommendation, CheapestHour

# Request models
from .request_models import RecommendationRequest, IngestRequest, HistoricalAveragesRequest

# Response models
from .response_models import (
    RecommendationResponse,
    Percentiles,
    IngestResponse,
    HourlyAverage,
    HistoricalAveragesResponse,
    DailySummary,
    SchedulerStatus,
    APIInfo,
    HealthResponse
)

__all__ = [
    # Price models
    "PriceSource",
    "PriceLabel",
    "PriceObservation",
    "PercentileBreakpoints",

    # Window models
    "TimeOfDay",
    "PriceWindow",
    "Recommendation",
    "CheapestHour",

    # Request models
    "RecommendationRequest",
    "IngestRequest",
    "HistoricalAveragesRequest",

    # Response models
    "RecommendationResponse",
    "Percentiles",
    "IngestResponse",
    "HourlyAverage",
    "HistoricalAveragesResponse",
    "DailySummary",
    "SchedulerStatus",
    "APIInfo",
    "HealthResponse"
]
