"""
Controller for historical trend endpoints.
"""

from typing import Optional

from fastapi import Depends, HTTPException, Query

from .base_controller import BaseController
from .dependencies import get_historical_service
from ..models import DailySummary, HistoricalAveragesRequest, HistoricalAveragesResponse
from ..services import HistoricalPriceService


class HistoryController(BaseController):
    """Controller for historical averages and daily summaries."""

    def _setup_routes(self):
        """Setup routes for historical operations."""

        @self.router.post(
            "/electricity/historical-averages",
            response_model=HistoricalAveragesResponse,
            tags=["Historical Trends"],
            summary="Average price per hour for today's weekday",
            description="""
            Average price per local hour over the past `weeks_back` weeks, using only
            days that fall on the same weekday as today.

            All 24 hours are returned; hours without samples have `avgPrice: null`
            and `sampleCount: 0`.
            """
        )
        async def historical_averages(
            request: Optional[HistoricalAveragesRequest] = None,
            service: HistoricalPriceService = Depends(get_historical_service)
        ):
            request = request or HistoricalAveragesRequest()
            try:
                return service.hourly_averages(zone=request.zone, weeks_back=request.weeks_back)
            except HTTPException:
                raise
            except Exception as e:
                self.handle_exception(e, "Error computing historical averages")

        @self.router.get(
            "/electricity/daily-summary",
            response_model=DailySummary,
            tags=["Historical Trends"],
            summary="Today's hourly prices with cheapest and peak hour"
        )
        async def daily_summary(
            zone: Optional[str] = Query(None, description="Pricing zone"),
            service: HistoricalPriceService = Depends(get_historical_service)
        ):
            try:
                return service.daily_summary(zone=zone)
            except HTTPException:
                raise
            except Exception as e:
                self.handle_exception(e, "Error computing daily summary")
