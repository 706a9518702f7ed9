"""
Domain exceptions raised by the service layer.

Endpoints translate these into HTTP errors; nothing here knows about
status codes.
"""

from typing import List


class BookstoreError(Exception):
    """Base class for all catalog errors."""


class BookValidationError(BookstoreError):
    """A payload does not conform to the book schema."""

    def __init__(self, messages: List[str]):
        super().__init__("; ".join(messages))
        self.messages = list(messages)


class NotFoundError(BookstoreError):
    """No book exists with the requested isbn."""

    def __init__(self, isbn: str):
        super().__init__(f"There is no book with an isbn of '{isbn}'")
        self.isbn = isbn


class ConflictError(BookstoreError):
    """A book with the same isbn already exists."""

    def __init__(self, isbn: str):
        super().__init__(f"A book with an isbn of '{isbn}' already exists")
        self.isbn = isbn
