"""
Controllers package for API endpoint handlers.
Imports all controllers for easy access.
"""

from fastapi import APIRouter

# Base controller
from .base_controller import BaseController

# Individual controllers
from .info_controller import InfoController
from .recommendation_controller import RecommendationController
from .ingestion_controller import IngestionController
from .history_controller import HistoryController

# Dependency providers
from .dependencies import (
    get_database,
    get_price_feed,
    get_ingestion_service,
    get_recommendation_service,
    get_historical_service,
)


class ElectricityController:
    """Aggregate controller that combines all endpoint controllers under one router."""

    def __init__(self):
        """Initialize aggregate controller with all sub-controllers."""
        self.router = APIRouter()

        self.info_controller = InfoController()
        self.recommendation_controller = RecommendationController()
        self.ingestion_controller = IngestionController()
        self.history_controller = HistoryController()

        self._setup_aggregate_routes()

    def _setup_aggregate_routes(self):
        """Include every controller router."""
        self.router.include_router(self.info_controller.router)
        self.router.include_router(self.recommendation_controller.router)
        self.router.include_router(self.ingestion_controller.router)
        self.router.include_router(self.history_controller.router)


electricity_controller = ElectricityController()

__all__ = [
    # Base controller
    "BaseController",

    # Individual controllers
    "InfoController",
    "RecommendationController",
    "IngestionController",
    "HistoryController",

    # Aggregate controller
    "ElectricityController",
    "electricity_controller",

    # Dependency providers
    "get_database",
    "get_price_feed",
    "get_ingestion_service",
    "get_recommendation_service",
    "get_historical_service"
]
