"""
Dependency providers shared by the controllers.

Tests swap the store or the upstream feed through
app.dependency_overrides[get_database] / [get_price_feed].
"""

from fastapi import BackgroundTasks, Depends

from ..config import DatabaseManager, app_config, db_manager
from ..repositories import PriceRepository, WindowRepository
from ..services import HistoricalPriceService, PriceIngestionService, RecommendationService
from ..utils.feeds import NYISOPriceFeed


def get_database() -> DatabaseManager:
    return db_manager


# One client, and so one requests.Session, for the whole process
price_feed = NYISOPriceFeed(app_config.feed)


def get_price_feed() -> NYISOPriceFeed:
    return price_feed


def get_ingestion_service(
    database: DatabaseManager = Depends(get_database),
    feed: NYISOPriceFeed = Depends(get_price_feed)
) -> PriceIngestionService:
    """Dependency injection for PriceIngestionService."""
    return PriceIngestionService(
        repository=PriceRepository(database),
        window_repository=WindowRepository(database),
        feed=feed
    )


def get_recommendation_service(
    background_tasks: BackgroundTasks,
    database: DatabaseManager = Depends(get_database),
    ingestion: PriceIngestionService = Depends(get_ingestion_service)
) -> RecommendationService:
    """Dependency injection for RecommendationService with background cache warming."""

    def warm(zone: str) -> None:
        background_tasks.add_task(ingestion.warm_cache, zone)

    return RecommendationService(
        repository=WindowRepository(database),
        price_repository=PriceRepository(database),
        warm_trigger=warm
    )


def get_historical_service(
    database: DatabaseManager = Depends(get_database)
) -> HistoricalPriceService:
    """Dependency injection for HistoricalPriceService."""
    return HistoricalPriceService(PriceRepository(database))


def get_window_repository(
    database: DatabaseManager = Depends(get_database)
) -> WindowRepository:
    return WindowRepository(database)
