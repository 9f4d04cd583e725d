"""
Models for labeled price windows and appliance recommendations.
"""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .price_models import PriceLabel


class TimeOfDay(str, Enum):
    TODAY = "today"
    TONIGHT = "tonight"


class PriceWindow(BaseModel):
    """Maximal run of consecutive observations sharing one label."""
    start_time: datetime
    end_time: datetime
    zone: str
    label: PriceLabel
    avg_price: float
    percentile: int
    duration_minutes: int


class Recommendation(BaseModel):
    """Suggested run window for an appliance."""
    model_config = ConfigDict(populate_by_name=True)

    time_of_day: TimeOfDay = Field(alias="timeOfDay")
    start_time: datetime = Field(alias="startTime")
    end_time: datetime = Field(alias="endTime")
    label: PriceLabel
    avg_price: float = Field(alias="avgPrice")
    duration_minutes: int = Field(alias="durationMinutes")
    # Local clock labels such as "7:00 PM"
    display_start: Optional[str] = Field(default=None, alias="displayStart")
    display_end: Optional[str] = Field(default=None, alias="displayEnd")


class CheapestHour(BaseModel):
    """Lowest single price inside the waking-hours range."""
    hour: int
    timestamp: datetime
    price: float
