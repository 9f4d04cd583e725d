"""
Controller for API information and health endpoints.
"""

from .base_controller import BaseController
from ..config import app_config
from ..models import APIInfo, HealthResponse


class InfoController(BaseController):
    """Controller for API information and health endpoints."""

    def _setup_routes(self):
        """Setup routes for API info and health."""

        @self.router.get("/", response_model=APIInfo, tags=["System Information"])
        async def get_api_info():
            """API root endpoint with basic information."""
            return APIInfo(
                message="Kiosk Electricity Window API",
                version=app_config.api.version,
                endpoints={
                    "recommendations": "/electricity/recommendations - Best run window for an appliance",
                    "windows": "/electricity/windows - Today's labeled price windows",
                    "ingest": "/electricity/ingest - Run one ingestion cycle",
                    "historical_averages": "/electricity/historical-averages - Same-weekday hourly averages",
                    "daily_summary": "/electricity/daily-summary - Today's hourly prices with cheapest/peak hour",
                    "scheduler_status": "/electricity/scheduler/status - Periodic ingestion status",
                    "health": "/health - Health check"
                }
            )

        @self.router.get("/health", response_model=HealthResponse, tags=["System Information"])
        async def health_check():
            """Health check endpoint."""
            return HealthResponse(
                status="healthy",
                service="kiosk-electricity-api"
            )
