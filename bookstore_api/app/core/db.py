"""
SQLite database integration and simple migration system.

``Database`` is the store handle handed to the service layer.  It
exposes ``execute`` for parameterized statements and ``init_db`` for
applying migrations on application start.  Each call opens a
short‑lived connection, commits on success and always closes it, so a
handle can be shared freely between requests.

Applied migration versions are stored in the ``migrations`` table and
new migrations are executed in order.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Dict, Iterator, List, Sequence

logger = logging.getLogger(__name__)

# Writes rely on ``RETURNING``.
MIN_SQLITE_VERSION = (3, 35, 0)


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: Initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS books (
            isbn TEXT PRIMARY KEY,
            amazon_url TEXT,
            author TEXT NOT NULL,
            language TEXT,
            pages INTEGER,
            publisher TEXT,
            title TEXT NOT NULL,
            year INTEGER
        );
        """,
    ),
]


def resolve_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    Absolute paths are returned as is; anything else is resolved
    relative to the project root.
    """
    if os.path.isabs(database_url):
        return database_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / database_url).resolve())


class Database:
    """Handle to the relational store backing the catalog."""

    def __init__(self, database_url: str):
        self.path = resolve_database_path(database_url)

    def get_connection(self) -> sqlite3.Connection:
        """Create and return a new SQLite connection.

        Rows are returned as ``sqlite3.Row`` objects so columns can be
        accessed by name.
        """
        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def get_cursor(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor, commit on success and close the connection on exit."""
        conn = self.get_connection()
        try:
            yield conn.cursor()
            conn.commit()
        finally:
            conn.close()

    def execute(self, query: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        """Run one parameterized statement and return its rows as dicts.

        Rows are fetched before the commit so ``RETURNING`` clauses work
        for inserts, updates and deletes.  Driver errors (including
        ``sqlite3.IntegrityError``) propagate to the caller.
        """
        with self.get_cursor() as cursor:
            rows = cursor.execute(query, tuple(params)).fetchall()
        return [dict(row) for row in rows]

    def init_db(self) -> None:
        """Initialise the database and apply pending migrations.

        Creates the ``migrations`` table if it does not exist, checks the
        current schema version and applies any newer entries of
        ``MIGRATIONS``.  Append new migrations with an incremented version.

        Raises ``RuntimeError`` when the linked SQLite library is older than
        ``MIN_SQLITE_VERSION``.
        """
        if sqlite3.sqlite_version_info < MIN_SQLITE_VERSION:
            raise RuntimeError(
                f"SQLite {sqlite3.sqlite_version} is too old; "
                f"{'.'.join(map(str, MIN_SQLITE_VERSION))} or newer is required"
            )
        with self.get_cursor() as cursor:
            cursor.execute(
                "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
            )
            cursor.execute("SELECT MAX(version) as version FROM migrations")
            row = cursor.fetchone()
            current_version = row["version"] if row and row["version"] is not None else 0

            for version, sql in MIGRATIONS:
                if version > current_version:
                    cursor.executescript(sql)
                    cursor.execute(
                        "INSERT INTO migrations (version) VALUES (?)", (version,)
                    )
                    logger.info("Applied migration %s", version)
                    current_version = version
