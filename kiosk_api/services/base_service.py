"""
Base service interface for business logic.
"""

from abc import ABC
from typing import Optional

from ..config import PricingConfig, app_config


class BaseService(ABC):
    """Abstract base service with repository and pricing config dependencies."""

    def __init__(self, repository=None, pricing: Optional[PricingConfig] = None):
        """Initialize service with repository dependency."""
        self.repository = repository
        self.pricing = pricing or app_config.pricing

    def validate_input(self, **kwargs) -> bool:
        """Validate input parameters. Raises ValueError on invalid input."""
        zone = kwargs.get('zone')
        if zone is not None and not str(zone).strip():
            raise ValueError("Zone must not be empty")
        return True
