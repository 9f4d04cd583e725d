"""
Base controller interface for API endpoints.

All controllers inherit from BaseController and implement _setup_routes().
Errors raised by the service layer are converted to HTTP responses in one
place, handle_exception():

    - SourceUnavailableError -> 503 (upstream feed down, no fallback)
    - ValueError             -> 400 (invalid input)
    - anything else          -> 500 (store failures, malformed feeds, bugs)

Usage:
    ```python
    class MyController(BaseController):
        def _setup_routes(self):
            @self.router.get("/my-endpoint")
            async def my_endpoint():
                return {"message": "Hello World"}
    ```
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from fastapi import APIRouter, HTTPException

from ..exceptions import SourceUnavailableError

logger = logging.getLogger(__name__)


class BaseController(ABC):
    """
    Abstract base controller for consistent API endpoint patterns.

    Attributes:
        router (APIRouter): FastAPI router instance for endpoint registration
    """

    def __init__(self):
        """Initialize controller with a router and register its routes."""
        self.router = APIRouter()
        self._setup_routes()

    @abstractmethod
    def _setup_routes(self):
        """Setup routes for this controller."""
        pass

    def handle_exception(self, e: Exception, context: Optional[str] = None) -> None:
        """
        Log an exception with context and re-raise it as an HTTPException.

        Raises:
            HTTPException: Always, with a status code chosen by exception type.
        """
        error_message = f"{context}: {str(e)}" if context else str(e)

        if isinstance(e, SourceUnavailableError):
            status_code = 503
        elif isinstance(e, ValueError):
            status_code = 400
        else:
            status_code = 500

        if status_code >= 500:
            logger.error(f"❌ {error_message}")
        else:
            logger.warning(error_message)
        raise HTTPException(status_code=status_code, detail=error_message) from e
