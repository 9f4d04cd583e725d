"""
Repository for electricity price observations.

Rows are unique per (timestamp, zone, source); writes are upserts so that
repeated ingestion of the same trading day replaces values instead of
duplicating rows.
"""

from datetime import datetime
from typing import Iterable, List, Optional

import pandas as pd

from .base_repository import BaseRepository
from ..models import PriceObservation, PriceSource
from ..utils.time_utils import from_db_timestamp, to_db_timestamp


class PriceRepository(BaseRepository):
    """Repository for price observation operations."""

    table_name = "electricity_prices"

    UPSERT_QUERY = """
        INSERT INTO electricity_prices (timestamp, zone, value, source)
        VALUES (?, ?, ?, ?)
        ON CONFLICT (timestamp, zone, source)
        DO UPDATE SET value = excluded.value
    """

    def upsert_many(self, observations: Iterable[PriceObservation]) -> int:
        """Insert or replace observations keyed by (timestamp, zone, source)."""
        rows = [
            (to_db_timestamp(o.timestamp), o.zone, float(o.value), o.source.value)
            for o in observations
        ]
        return self.db_manager.execute_many(self.UPSERT_QUERY, rows)

    def find_values_since(self, zone: str, since: datetime) -> List[float]:
        """Price values for a zone at or after `since`, sorted ascending."""
        query = """
            SELECT value
            FROM electricity_prices
            WHERE zone = ? AND timestamp >= ?
            ORDER BY value ASC
        """
        df = self.db_manager.execute_query(query, [zone, to_db_timestamp(since)])
        return [float(v) for v in df['value']] if not df.empty else []

    def find_between(
        self,
        zone: str,
        start: datetime,
        end: datetime,
        source: Optional[PriceSource] = None
    ) -> List[PriceObservation]:
        """Observations with start <= timestamp <= end, oldest first."""
        query = """
            SELECT timestamp, zone, value, source
            FROM electricity_prices
            WHERE zone = ? AND timestamp >= ? AND timestamp <= ?
        """
        params = [zone, to_db_timestamp(start), to_db_timestamp(end)]

        if source is not None:
            query += " AND source = ?"
            params.append(source.value)

        query += " ORDER BY timestamp ASC"
        return self._to_observations(self.db_manager.execute_query(query, params))

    def find_since(self, zone: str, since: datetime) -> List[PriceObservation]:
        """All observations for a zone at or after `since`, oldest first."""
        query = """
            SELECT timestamp, zone, value, source
            FROM electricity_prices
            WHERE zone = ? AND timestamp >= ?
            ORDER BY timestamp ASC
        """
        df = self.db_manager.execute_query(query, [zone, to_db_timestamp(since)])
        return self._to_observations(df)

    def has_source_between(
        self, zone: str, source: PriceSource, start: datetime, end: datetime
    ) -> bool:
        """Check whether any row of the given source exists in the range."""
        query = """
            SELECT 1 FROM electricity_prices
            WHERE zone = ? AND source = ? AND timestamp >= ? AND timestamp <= ?
            LIMIT 1
        """
        result = self.db_manager.execute_scalar(
            query, [zone, source.value, to_db_timestamp(start), to_db_timestamp(end)])
        return result is not None

    @staticmethod
    def _to_observations(df: pd.DataFrame) -> List[PriceObservation]:
        if df.empty:
            return []

        observations = []
        for _, row in df.iterrows():
            observations.append(PriceObservation(
                timestamp=from_db_timestamp(row['timestamp']),
                zone=row['zone'],
                value=float(row['value']),
                source=PriceSource(row['source'])
            ))
        return observations
