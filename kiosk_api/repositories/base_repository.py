"""
Base repository interface for data access.
"""

from abc import ABC
from typing import Optional

from ..config import DatabaseManager, db_manager


class BaseRepository(ABC):
    """Abstract base repository bound to one table."""

    table_name: str = ""

    def __init__(self, database: Optional[DatabaseManager] = None):
        self.db_manager = database or db_manager

    def count(self, zone: Optional[str] = None) -> int:
        """Count records, optionally restricted to one zone."""
        query = f"SELECT COUNT(*) FROM {self.table_name}"
        params = []
        if zone is not None:
            query += " WHERE zone = ?"
            params.append(zone)
        return int(self.db_manager.execute_scalar(query, params) or 0)
