"""
SQLite connection helper.
Provides the Database handle that the application factory injects into
the services.
"""

import logging
import os
import sqlite3
from datetime import datetime, timezone
from typing import Any, Iterable, List, Optional

from flask import current_app

from eventboard.database.init_db import init_db

EXTENSION_KEY = "eventboard.db"

# SQLite INTEGER is a signed 64-bit value
SQLITE_INT_MIN = -(2 ** 63)
SQLITE_INT_MAX = 2 ** 63 - 1


def utc_timestamp() -> str:
    """Current UTC time as an ISO-8601 string, e.g. 2024-01-01T09:30:00.000Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def is_storable_id(value: int) -> bool:
    """False for ids that cannot exist in an INTEGER PRIMARY KEY column."""
    return SQLITE_INT_MIN <= value <= SQLITE_INT_MAX


class Database:
    """
    A single SQLite connection with dictionary-like row access.

    The connection runs in autocommit mode, so every statement is its own
    transaction. Open it once per process and close it on shutdown:

        with Database("eventboard.db") as db:
            app = create_app(db)
            ...
    """

    def __init__(self, path: str):
        self.path = path
        if path != ":memory:":
            directory = os.path.dirname(os.path.abspath(path))
            os.makedirs(directory, exist_ok=True)

        # check_same_thread=False: the dev server handles requests on worker threads
        self.conn: Optional[sqlite3.Connection] = sqlite3.connect(
            path, isolation_level=None, check_same_thread=False
        )
        self.conn.row_factory = sqlite3.Row
        init_db(self.conn)
        logging.info(f"[DB] Opened {path}")

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def connection(self) -> sqlite3.Connection:
        if self.conn is None:
            raise sqlite3.ProgrammingError("Database handle is closed")
        return self.conn

    def execute(self, sql: str, params: Iterable[Any] = ()) -> sqlite3.Cursor:
        return self.connection.execute(sql, tuple(params))

    def insert(self, sql: str, params: Iterable[Any] = ()) -> int:
        """
        Run an `INSERT ... RETURNING id` statement and return the new id.

        The id comes back from the statement itself, so concurrent inserts on
        the shared connection never see each other's rowid.
        """
        rows = self.execute(sql, params).fetchall()
        return rows[0][0]

    def fetch_one(self, sql: str, params: Iterable[Any] = ()) -> Optional[dict]:
        row = self.execute(sql, params).fetchone()
        return dict(row) if row else None

    def fetch_all(self, sql: str, params: Iterable[Any] = ()) -> List[dict]:
        return [dict(row) for row in self.execute(sql, params).fetchall()]

    def close(self) -> None:
        """Release the connection. Safe to call more than once."""
        if self.conn is not None:
            self.conn.close()
            self.conn = None
            logging.info(f"[DB] Closed {self.path}")


def get_db() -> Database:
    """
    Return the Database handle injected into the running application.

    Usage (inside a request):
        store = UserStore(get_db())
    """
    return current_app.extensions[EXTENSION_KEY]
