"""
Periodic price ingestion bound to the application lifespan.

The loop ingests immediately, then sleeps until the next cycle or until
stop() is called, whichever comes first. A failed cycle is retried after
a short delay instead of a full interval.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from .ingestion_service import PriceIngestionService
from ..config import app_config

logger = logging.getLogger(__name__)

RETRY_SECONDS = 60


class IngestionScheduler:
    """Run ingestion cycles for one zone on a fixed interval."""

    def __init__(
        self,
        interval_hours: int = 6,
        zone: Optional[str] = None,
        service: Optional[PriceIngestionService] = None,
        retry_seconds: int = RETRY_SECONDS
    ):
        """
        Initialize the scheduler.

        Args:
            interval_hours: Hours between successful ingestion runs.
            zone: Zone to ingest. Defaults to the configured default zone.
            service: Ingestion service. Created lazily when omitted.
            retry_seconds: Delay before retrying a failed run.
        """
        self.interval_hours = interval_hours
        self.zone = zone or app_config.default_zone
        self.retry_seconds = retry_seconds
        self._service = service
        self.last_run: Optional[datetime] = None
        self.last_result: Optional[dict] = None
        self._task: Optional[asyncio.Task] = None
        self._stopping: Optional[asyncio.Event] = None

    @property
    def service(self) -> PriceIngestionService:
        if self._service is None:
            self._service = PriceIngestionService()
        return self._service

    @property
    def is_running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run_once(self) -> dict:
        """
        Run one ingestion cycle in a worker thread and record its result.

        Returns:
            Dictionary with the ingestion result or an 'error' key.
        """
        logger.info(f"🔄 Scheduled ingestion for zone {self.zone}")
        loop = asyncio.get_running_loop()
        try:
            result = await loop.run_in_executor(None, self.service.run_ingestion, self.zone)
            self.last_result = result.model_dump(by_alias=True)
        except Exception as e:
            logger.error(f"❌ Scheduled ingestion for zone {self.zone} failed: {e}")
            self.last_result = {'error': str(e)}

        self.last_run = datetime.now()
        return self.last_result

    def next_delay(self, result: Optional[dict]) -> float:
        """Seconds until the next cycle given the last cycle's result."""
        if result is None or 'error' in result:
            return self.retry_seconds
        return self.interval_hours * 3600

    async def start(self) -> None:
        if self.is_running:
            logger.warning(f"Ingestion scheduler for zone {self.zone} already running")
            return
        logger.info(f"🚀 Ingesting zone {self.zone} every {self.interval_hours}h")
        self._stopping = asyncio.Event()
        self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        if not self.is_running:
            return
        logger.info("🛑 Stopping ingestion scheduler")
        self._stopping.set()
        await self._task
        self._task = None

    async def _run(self) -> None:
        while not self._stopping.is_set():
            result = await self.run_once()
            try:
                await asyncio.wait_for(self._stopping.wait(), timeout=self.next_delay(result))
            except asyncio.TimeoutError:
                continue


ingestion_scheduler = IngestionScheduler(interval_hours=app_config.scheduler.interval_hours)


@asynccontextmanager
async def lifespan(app):
    """Start the scheduler with the app when enabled and stop it on shutdown."""
    if app_config.scheduler.enabled:
        await ingestion_scheduler.start()
    try:
        yield
    finally:
        await ingestion_scheduler.stop()
