"""
Request bodies for POST endpoints.
"""

from typing import Optional

from pydantic import BaseModel, Field


class RecommendationRequest(BaseModel):
    appliance: str = "laundry"
    zone: Optional[str] = None


class IngestRequest(BaseModel):
    zone: Optional[str] = None
    trading_day: Optional[str] = Field(
        default=None, pattern=r"^\d{4}-\d{2}-\d{2}$",
        description="Trading day in YYYY-MM-DD format (defaults to today)")


class HistoricalAveragesRequest(BaseModel):
    zone: Optional[str] = None
    weeks_back: int = Field(default=2, ge=1)
