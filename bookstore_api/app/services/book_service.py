"""
Service layer for books.

``BookService`` maps validated book payloads to rows of the ``books``
table and back.  It is constructed with a store handle exposing
``execute(query, params)`` rather than reaching for a global
connection, so tests can point it at an isolated database.

Every operation is a single parameterized statement.  Uniqueness of the
isbn and existence of a row on update or delete are checked by the
store itself (primary key constraint, ``RETURNING`` on the affected
row), never by a separate read beforehand.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Any, Dict, List

from bookstore_api.app.core.db import Database
from bookstore_api.app.core.exceptions import ConflictError, NotFoundError
from bookstore_api.app.schemas.book import BOOK_FIELDS, Book, BookCreate, BookUpdate

logger = logging.getLogger(__name__)

COLUMNS = ", ".join(BOOK_FIELDS)


class BookService:
    """Repository of books backed by a relational store."""

    def __init__(self, database: Database):
        self.database = database

    async def list_books(self) -> List[Book]:
        """Return every book, ordered by isbn."""
        rows = self.database.execute(f"SELECT {COLUMNS} FROM books ORDER BY isbn")
        return [self._row_to_book(row) for row in rows]

    async def get_book_by_isbn(self, isbn: str) -> Book:
        """Retrieve a single book by its isbn.

        Raises ``NotFoundError`` if no row matches.
        """
        rows = self.database.execute(
            f"SELECT {COLUMNS} FROM books WHERE isbn = ?",
            (isbn,),
        )
        if not rows:
            raise NotFoundError(isbn)
        return self._row_to_book(rows[0])

    async def create_book(self, data: BookCreate) -> Book:
        """Insert a new book and return the stored record.

        Optional fields missing from ``data`` are stored as null.  Raises
        ``ConflictError`` when the store rejects a duplicate isbn.
        """
        values = data.model_dump()
        placeholders = ", ".join("?" for _ in BOOK_FIELDS)
        try:
            rows = self.database.execute(
                f"INSERT INTO books ({COLUMNS}) VALUES ({placeholders}) RETURNING {COLUMNS}",
                [values[name] for name in BOOK_FIELDS],
            )
        except sqlite3.IntegrityError as exc:
            logger.info("Rejected duplicate book %s", data.isbn)
            raise ConflictError(data.isbn) from exc
        logger.info("Created book %s", data.isbn)
        return self._row_to_book(rows[0])

    async def update_book(self, isbn: str, data: BookUpdate) -> Book:
        """Update an existing book.

        Only fields provided in ``data`` are replaced; the others keep
        their stored values.  Raises ``NotFoundError`` if no row matches.
        """
        changes = data.model_dump(exclude_unset=True)
        if not changes:
            return await self.get_book_by_isbn(isbn)
        assignments = ", ".join(f"{name} = ?" for name in changes)
        rows = self.database.execute(
            f"UPDATE books SET {assignments} WHERE isbn = ? RETURNING {COLUMNS}",
            [*changes.values(), isbn],
        )
        if not rows:
            raise NotFoundError(isbn)
        logger.info("Updated book %s (%s)", isbn, ", ".join(changes))
        return self._row_to_book(rows[0])

    async def delete_book_by_isbn(self, isbn: str) -> None:
        """Delete a book by isbn.

        Raises ``NotFoundError`` if no row matches.
        """
        rows = self.database.execute(
            "DELETE FROM books WHERE isbn = ? RETURNING isbn",
            (isbn,),
        )
        if not rows:
            raise NotFoundError(isbn)
        logger.info("Deleted book %s", isbn)

    @staticmethod
    def _row_to_book(row: Dict[str, Any]) -> Book:
        """Convert a database row to a ``Book`` instance."""
        return Book(**{name: row[name] for name in BOOK_FIELDS})
