"""
Controller for price ingestion endpoints.

Endpoints:
    - POST /electricity/ingest: Run one ingestion cycle
    - GET  /electricity/scheduler/status: Periodic ingestion status
"""

from datetime import date
from typing import Optional

from fastapi import Depends, HTTPException

from .base_controller import BaseController
from .dependencies import get_ingestion_service
from ..models import IngestRequest, IngestResponse, SchedulerStatus
from ..services import PriceIngestionService, ingestion_scheduler


class IngestionController(BaseController):
    """Controller for ingestion endpoints."""

    def _setup_routes(self):
        """Setup routes for ingestion operations."""

        @self.router.post(
            "/electricity/ingest",
            response_model=IngestResponse,
            tags=["Ingestion"],
            summary="Fetch prices and rebuild windows",
            description="""
            Fetch a trading day's prices, store them and rebuild the zone's windows.

            **Source priority:** day-ahead, then real-time, then a simulated curve.

            **Errors:**
            - 503 when every upstream source failed and simulation is disabled
            - 500 for malformed upstream data or store failures
            """,
            response_description="Counts, percentile breakpoints and the source used"
        )
        async def ingest(
            request: Optional[IngestRequest] = None,
            service: PriceIngestionService = Depends(get_ingestion_service)
        ):
            request = request or IngestRequest()
            try:
                trading_day = date.fromisoformat(request.trading_day) if request.trading_day else None
                return service.run_ingestion(zone=request.zone, trading_day=trading_day)
            except HTTPException:
                raise
            except Exception as e:
                self.handle_exception(e, "Error ingesting prices")

        @self.router.get(
            "/electricity/scheduler/status",
            response_model=SchedulerStatus,
            tags=["Ingestion"],
            summary="Get the periodic ingestion status"
        )
        async def scheduler_status():
            return SchedulerStatus(
                is_running=ingestion_scheduler.is_running,
                interval_hours=ingestion_scheduler.interval_hours,
                zone=ingestion_scheduler.zone,
                last_run=ingestion_scheduler.last_run.isoformat() if ingestion_scheduler.last_run else None,
                last_result=ingestion_scheduler.last_result
            )
