"""
Schemas for book payloads.

Two kinds of schema live here.  The JSON schemas (``BOOK_CREATE_SCHEMA``
and ``BOOK_UPDATE_SCHEMA``) describe what an incoming request body must
look like and drive the violation messages returned to clients.  The
Pydantic models are the typed shapes a payload is narrowed into once it
has passed validation, and the shape of books read back from the store.

Property order in the JSON schemas is significant: type violations are
reported in declaration order.
"""

from typing import List, Optional

from pydantic import BaseModel, Field


# SQLite stores INTEGER as a signed 64-bit value.
SQLITE_INTEGER = {"type": "integer", "minimum": -(2**63), "maximum": 2**63 - 1}

BOOK_PROPERTIES = {
    "isbn": {"type": "string"},
    "amazon_url": {"type": "string"},
    "author": {"type": "string"},
    "language": {"type": "string"},
    "pages": SQLITE_INTEGER,
    "publisher": {"type": "string"},
    "title": {"type": "string"},
    "year": SQLITE_INTEGER,
}

# Column order used when reading and writing rows.
BOOK_FIELDS = tuple(BOOK_PROPERTIES)

BOOK_CREATE_SCHEMA = {
    "$schema": "http://json-schema.org/draft-04/schema#",
    "title": "BookCreate",
    "required": ["isbn", "author", "title"],
    "properties": BOOK_PROPERTIES,
}

BOOK_UPDATE_SCHEMA = {
    "$schema": "http://json-schema.org/draft-04/schema#",
    "title": "BookUpdate",
    "type": "object",
    "properties": BOOK_PROPERTIES,
}

# Request body documentation for the OpenAPI schema; validation itself
# runs on the raw body.
BOOK_CREATE_BODY_DOC = {
    "requestBody": {
        "required": True,
        "content": {
            "application/json": {
                "schema": {
                    "type": "object",
                    "required": BOOK_CREATE_SCHEMA["required"],
                    "properties": BOOK_PROPERTIES,
                }
            }
        },
    }
}

BOOK_UPDATE_BODY_DOC = {
    "requestBody": {
        "required": True,
        "content": {
            "application/json": {
                "schema": {"type": "object", "properties": BOOK_PROPERTIES}
            }
        },
    }
}


class Book(BaseModel):
    """Schema for a book as stored in the catalog."""

    isbn: str = Field(..., description="ISBN; unique and immutable")
    amazon_url: Optional[str] = None
    author: str
    language: Optional[str] = None
    pages: Optional[int] = None
    publisher: Optional[str] = None
    title: str
    year: Optional[int] = None


class BookCreate(Book):
    """Schema for creating a new book.

    Same shape as ``Book``; omitted optional fields are stored as null.
    """


class BookUpdate(BaseModel):
    """Schema for updating an existing book.

    All fields are optional; only provided values will be updated.  There is
    no isbn field, so an isbn supplied in a payload is dropped.
    """

    amazon_url: Optional[str] = None
    author: Optional[str] = None
    language: Optional[str] = None
    pages: Optional[int] = None
    publisher: Optional[str] = None
    title: Optional[str] = None
    year: Optional[int] = None


class BookResponse(BaseModel):
    """Envelope for a single book."""

    book: Book


class BookListResponse(BaseModel):
    """Envelope for the list of books."""

    books: List[Book]


class MessageResponse(BaseModel):
    message: str
