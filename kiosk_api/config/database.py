"""
Database Configuration and Management Module

This module provides centralized database connection and query management for
the kiosk electricity API. Repositories share a DatabaseManager so that every
read, write and schema operation goes through one place.

Features:
    - Schema bootstrap for the price and window tables
    - Automatic connection cleanup and transaction handling
    - Parameter binding for every statement
    - Pandas DataFrame integration for reads
    - sqlite3 failures surfaced as StoreError

Usage:
    ```python
    from kiosk_api.config import db_manager

    df = db_manager.execute_query(
        "SELECT * FROM electricity_prices WHERE zone = ?", ["J"])

    with db_manager.transaction() as conn:
        conn.execute("DELETE FROM electricity_windows WHERE zone = ?", ["J"])
    ```

Database Schema:
    - Table: electricity_prices
      Columns: timestamp, zone, value, source, created_at
      Unique: (timestamp, zone, source)
    - Table: electricity_windows
      Columns: start_time, end_time, zone, label, avg_price, percentile,
               duration_minutes, created_at
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from typing import Any, Iterable, Iterator, List, Optional, Sequence, Union

import pandas as pd

from .settings import app_config
from ..exceptions import StoreError

logger = logging.getLogger(__name__)

SCHEMA_STATEMENTS = [
    """
    CREATE TABLE IF NOT EXISTS electricity_prices (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        timestamp TEXT NOT NULL,
        zone TEXT NOT NULL DEFAULT 'J',
        value REAL NOT NULL,
        source TEXT NOT NULL CHECK (source IN ('day-ahead', 'real-time', 'simulated')),
        created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP,
        UNIQUE (timestamp, zone, source)
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS idx_electricity_prices_zone_timestamp
        ON electricity_prices (zone, timestamp)
    """,
    """
    CREATE TABLE IF NOT EXISTS electricity_windows (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        start_time TEXT NOT NULL,
        end_time TEXT NOT NULL,
        zone TEXT NOT NULL DEFAULT 'J',
        label TEXT NOT NULL CHECK (label IN ('great', 'good', 'okay', 'avoid')),
        avg_price REAL,
        percentile INTEGER,
        duration_minutes INTEGER,
        created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS idx_electricity_windows_zone_start
        ON electricity_windows (zone, start_time)
    """,
]


class DatabaseManager:
    """
    Centralized database connection and query management.

    Every public method opens its own connection and closes it before
    returning; callers that need several statements to commit together use
    transaction().

    Examples:
        >>> db = DatabaseManager("/tmp/kiosk.db")
        >>> db.initialize_schema()
        >>> df = db.execute_query("SELECT * FROM electricity_prices LIMIT 5")
        >>> db.execute_scalar("SELECT COUNT(*) FROM electricity_windows")
        0
    """

    def __init__(self, database_path: Optional[str] = None):
        """
        Initialize the DatabaseManager.

        Args:
            database_path: Path to the sqlite file. Defaults to the configured path.
        """
        self.database_path = database_path or app_config.database_path
        self.timeout = app_config.database.connection_timeout
        self._schema_ready = False

    def get_connection(self) -> sqlite3.Connection:
        """
        Get a database connection with row factory enabled.

        Creates the parent directory and the schema on first use.

        Raises:
            StoreError: If the database cannot be opened.
        """
        try:
            directory = os.path.dirname(self.database_path)
            if directory and not os.path.exists(directory):
                os.makedirs(directory, exist_ok=True)
                logger.info(f"Created database directory: {directory}")
            conn = sqlite3.connect(self.database_path, timeout=self.timeout)
            conn.row_factory = sqlite3.Row  # Enable column access by name
        except (sqlite3.Error, OSError) as e:
            raise StoreError(f"Cannot open database {self.database_path}: {e}") from e

        if not self._schema_ready:
            try:
                self._create_schema(conn)
            except sqlite3.Error as e:
                conn.close()
                raise StoreError(f"Cannot create schema: {e}") from e
        return conn

    def _create_schema(self, conn: sqlite3.Connection) -> None:
        for statement in SCHEMA_STATEMENTS:
            conn.execute(statement)
        conn.commit()
        self._schema_ready = True

    def initialize_schema(self) -> None:
        """Create tables and indexes if they do not exist yet."""
        conn = self.get_connection()
        conn.close()
        logger.info(f"Database ready at {self.database_path}")

    def execute_query(self, query: str, params: Optional[List[Any]] = None) -> pd.DataFrame:
        """
        Execute a SELECT query and return results as a pandas DataFrame.

        Args:
            query (str): SQL SELECT query. Use ? placeholders for parameters.
            params (Optional[List[Any]]): Parameters bound to the placeholders.

        Returns:
            pd.DataFrame: Query results with column names preserved.

        Raises:
            StoreError: If the query execution fails.
        """
        conn = self.get_connection()
        try:
            if params is None:
                params = []
            return pd.read_sql_query(query, conn, params=params)
        except (sqlite3.Error, pd.errors.DatabaseError) as e:
            raise StoreError(f"Query failed: {e}") from e
        finally:
            conn.close()

    def execute_many(self, query: str, rows: Iterable[Sequence[Any]]) -> int:
        """
        Execute one statement for every parameter row in a single transaction.

        Returns:
            int: Number of parameter rows applied.
        """
        rows = list(rows)
        if not rows:
            return 0
        with self.transaction() as conn:
            conn.executemany(query, rows)
        return len(rows)

    def execute_scalar(self, query: str, params: Optional[List[Any]] = None) -> Union[Any, None]:
        """
        Execute a query and return the first column of the first row, or None.

        Raises:
            StoreError: If the query execution fails.
        """
        conn = self.get_connection()
        try:
            cursor = conn.execute(query, params or [])
            result = cursor.fetchone()
            return result[0] if result else None
        except sqlite3.Error as e:
            raise StoreError(f"Query failed: {e}") from e
        finally:
            conn.close()

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """
        Run several statements atomically.

        Commits when the block exits normally, rolls back on any exception.
        sqlite3 errors raised inside the block are re-raised as StoreError.
        """
        conn = self.get_connection()
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise StoreError(f"Transaction failed: {e}") from e
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()


# Singleton instance used by the repositories unless one is injected
db_manager = DatabaseManager()
