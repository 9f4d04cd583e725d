"""
Controller for appliance recommendation endpoints.

Endpoints:
    - GET  /electricity/recommendations: Recommendation from query parameters
    - POST /electricity/recommendations: Recommendation from a JSON body
    - GET  /electricity/windows: Today's persisted windows for a zone
"""

from typing import List, Optional

from fastapi import Depends, HTTPException, Query

from .base_controller import BaseController
from .dependencies import get_recommendation_service, get_window_repository
from ..config import app_config
from ..models import PriceWindow, RecommendationRequest, RecommendationResponse
from ..repositories import WindowRepository
from ..services import RecommendationService
from ..utils.time_utils import local_day_bounds, utc_now


class RecommendationController(BaseController):
    """Controller for recommendation endpoints."""

    def _setup_routes(self):
        """Setup routes for recommendation operations."""

        @self.router.get(
            "/electricity/recommendations",
            response_model=RecommendationResponse,
            tags=["Recommendations"],
            summary="Get the best time to run an appliance today",
            description="""
            Find the earliest upcoming "great" price window long enough for the appliance.

            **Appliance durations:** dishwasher 120 min, laundry 90 min, dryer 60 min,
            anything else 90 min.

            **Selection:**
            - Only windows that have not ended yet are considered
            - The earliest single great window that is long enough wins
            - Otherwise back-to-back great windows are merged until long enough
            - `recommendation` is null when nothing fits

            If today has no day-ahead prices yet, an ingestion run is scheduled in
            the background; the response is not delayed by it.
            """,
            response_description="Recommendation with today's windows and prices"
        )
        async def get_recommendations(
            appliance: str = Query("laundry", description="Appliance identifier"),
            zone: Optional[str] = Query(None, description="Pricing zone (defaults to configured zone)"),
            service: RecommendationService = Depends(get_recommendation_service)
        ):
            try:
                return service.get_recommendations(appliance=appliance, zone=zone)
            except HTTPException:
                raise
            except Exception as e:
                self.handle_exception(e, "Error computing recommendation")

        @self.router.post(
            "/electricity/recommendations",
            response_model=RecommendationResponse,
            tags=["Recommendations"],
            summary="Get the best time to run an appliance today (JSON body)"
        )
        async def post_recommendations(
            request: Optional[RecommendationRequest] = None,
            service: RecommendationService = Depends(get_recommendation_service)
        ):
            request = request or RecommendationRequest()
            try:
                return service.get_recommendations(appliance=request.appliance, zone=request.zone)
            except HTTPException:
                raise
            except Exception as e:
                self.handle_exception(e, "Error computing recommendation")

        @self.router.get(
            "/electricity/windows",
            response_model=List[PriceWindow],
            tags=["Recommendations"],
            summary="Get today's labeled price windows"
        )
        async def get_windows(
            zone: Optional[str] = Query(None, description="Pricing zone"),
            repository: WindowRepository = Depends(get_window_repository)
        ):
            zone = zone or app_config.default_zone
            try:
                start, end = local_day_bounds(utc_now(), app_config.get_zone(zone).timezone)
                return repository.find_starting_between(zone, start, end)
            except Exception as e:
                self.handle_exception(e, "Error retrieving windows")
