"""
Book endpoints.

These routes expose CRUD over the catalog, keyed by isbn.  Request
bodies are read as raw JSON and run through the schema validator before
anything reaches the service layer; a rejected payload is answered with
400 and the ordered list of violations.
"""

import json
import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Request, status

from bookstore_api.app.api.errors import error_response
from bookstore_api.app.core.exceptions import BookValidationError, ConflictError, NotFoundError
from bookstore_api.app.core.validation import validate_book_create, validate_book_update
from bookstore_api.app.schemas.book import (
    BOOK_CREATE_BODY_DOC,
    BOOK_UPDATE_BODY_DOC,
    BookListResponse,
    BookResponse,
    MessageResponse,
)
from bookstore_api.app.services.book_service import BookService

logger = logging.getLogger(__name__)

router = APIRouter()


def get_book_service(request: Request) -> BookService:
    """Build a ``BookService`` over the store attached to the application."""
    return BookService(request.app.state.database)


async def read_payload(request: Request) -> Any:
    """Decode the request body as JSON.

    An empty or undecodable body yields ``None``, which the validator
    treats like any other non-object value.  Undecodable covers malformed
    JSON, nesting too deep for the decoder and strings holding lone
    surrogates (``"\\ud800"``), which cannot be stored as UTF-8.
    """
    body = await request.body()
    if not body:
        return None
    try:
        payload = json.loads(body)
        json.dumps(payload, ensure_ascii=False).encode("utf-8")
    except (ValueError, RecursionError):
        return None
    return payload


@router.get("/", response_model=BookListResponse)
async def list_books(service: BookService = Depends(get_book_service)):
    """Return every book in the catalog."""
    books = await service.list_books()
    return {"books": books}


@router.get("/{isbn}", response_model=BookResponse)
async def get_book(isbn: str, service: BookService = Depends(get_book_service)):
    """Retrieve a single book by isbn.  Returns 404 if it does not exist."""
    try:
        book = await service.get_book_by_isbn(isbn)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return {"book": book}


@router.post(
    "/",
    response_model=BookResponse,
    status_code=status.HTTP_201_CREATED,
    openapi_extra=BOOK_CREATE_BODY_DOC,
)
async def create_book(
    payload: Any = Depends(read_payload),
    service: BookService = Depends(get_book_service),
):
    """Create a new book.

    ``isbn``, ``author`` and ``title`` are required.  A duplicate isbn
    is answered with 409.
    """
    try:
        book_in = validate_book_create(payload)
    except BookValidationError as e:
        logger.info("Rejected book payload with %d violation(s)", len(e.messages))
        return error_response(status.HTTP_400_BAD_REQUEST, e.messages)
    try:
        book = await service.create_book(book_in)
    except ConflictError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    return {"book": book}


@router.put("/{isbn}", response_model=BookResponse, openapi_extra=BOOK_UPDATE_BODY_DOC)
async def update_book(
    isbn: str,
    payload: Any = Depends(read_payload),
    service: BookService = Depends(get_book_service),
):
    """Update some or all fields of an existing book.

    No field is required, but the body must be an object.  The isbn of
    a book cannot be changed; one present in the body is ignored.
    """
    try:
        changes = validate_book_update(payload)
    except BookValidationError as e:
        logger.info("Rejected update of %s with %d violation(s)", isbn, len(e.messages))
        return error_response(status.HTTP_400_BAD_REQUEST, e.messages)
    try:
        book = await service.update_book(isbn, changes)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return {"book": book}


@router.delete("/{isbn}", response_model=MessageResponse)
async def delete_book(isbn: str, service: BookService = Depends(get_book_service)):
    """Delete a book by isbn.  Returns 404 if it does not exist."""
    try:
        await service.delete_book_by_isbn(isbn)
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e)) from e
    return {"message": "Book deleted"}
