"""
Repository for labeled price windows.

Windows are never updated in place. A refresh deletes the stale set and
inserts the freshly built one inside a single transaction.
"""

from datetime import datetime
from typing import List, Sequence

from .base_repository import BaseRepository
from ..models import PriceLabel, PriceWindow
from ..utils.time_utils import from_db_timestamp, to_db_timestamp


class WindowRepository(BaseRepository):
    """Repository for price window operations."""

    table_name = "electricity_windows"

    INSERT_QUERY = """
        INSERT INTO electricity_windows
        (start_time, end_time, zone, label, avg_price, percentile, duration_minutes)
        VALUES (?, ?, ?, ?, ?, ?, ?)
    """

    def replace_windows(self, zone: str, windows: Sequence[PriceWindow], now: datetime) -> int:
        """
        Swap in a freshly built window set for a zone.

        Deletes windows that started before `now` and windows starting inside
        the new horizon (between its first and last start_time), then inserts
        the new set. Windows of later horizons are left alone. Both steps
        commit together.

        Returns:
            int: Number of windows inserted.
        """
        rows = [
            (
                to_db_timestamp(w.start_time),
                to_db_timestamp(w.end_time),
                w.zone,
                w.label.value,
                round(w.avg_price, 2),
                w.percentile,
                w.duration_minutes,
            )
            for w in windows
        ]

        delete_query = "DELETE FROM electricity_windows WHERE zone = ? AND (start_time < ?"
        params = [zone, to_db_timestamp(now)]
        if rows:
            starts = [row[0] for row in rows]
            delete_query += " OR (start_time >= ? AND start_time <= ?)"
            params.extend([min(starts), max(starts)])
        delete_query += ")"

        with self.db_manager.transaction() as conn:
            conn.execute(delete_query, params)
            if rows:
                conn.executemany(self.INSERT_QUERY, rows)
        return len(rows)

    def find_starting_between(
        self, zone: str, start: datetime, end: datetime
    ) -> List[PriceWindow]:
        """Windows with start <= start_time <= end, ordered by start_time."""
        query = """
            SELECT start_time, end_time, zone, label, avg_price, percentile, duration_minutes
            FROM electricity_windows
            WHERE zone = ? AND start_time >= ? AND start_time <= ?
            ORDER BY start_time ASC
        """
        df = self.db_manager.execute_query(
            query, [zone, to_db_timestamp(start), to_db_timestamp(end)])

        windows = []
        for _, row in df.iterrows():
            windows.append(PriceWindow(
                start_time=from_db_timestamp(row['start_time']),
                end_time=from_db_timestamp(row['end_time']),
                zone=row['zone'],
                label=PriceLabel(row['label']),
                avg_price=float(row['avg_price']),
                percentile=int(row['percentile']),
                duration_minutes=int(row['duration_minutes'])
            ))
        return windows
