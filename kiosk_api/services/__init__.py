"""
Services package for business logic layer.
Imports all services for easy access.
"""

# Base service
from .base_service import BaseService

# Pricing core
from .percentile_classifier import PercentileClassifier, breakpoints_from_sample, classify
from .window_builder import build_windows

# Individual services
from .ingestion_service import PriceIngestionService
from .recommendation_service import RecommendationService, find_best_window
from .historical_service import HistoricalPriceService
from .ingestion_scheduler import IngestionScheduler, ingestion_scheduler, lifespan

__all__ = [
    # Base service
    "BaseService",

    # Pricing core
    "PercentileClassifier",
    "breakpoints_from_sample",
    "classify",
    "build_windows",

    # Individual services
    "PriceIngestionService",
    "RecommendationService",
    "find_best_window",
    "HistoricalPriceService",
    "IngestionScheduler",
    "ingestion_scheduler",
    "lifespan"
]
