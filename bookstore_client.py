"""Bookstore API client.

A thin wrapper around the catalog's REST endpoints built on the
``requests`` library.  Every method returns a tuple ``(data, error)``:
on success ``error`` is ``None``; on failure ``data`` is ``None`` (or an
empty list for :meth:`list_books`) and ``error`` is a dictionary with
``status_code`` and ``message``.

``message`` is taken verbatim from the server's error envelope, so when
a payload is rejected it is the ordered list of violations, e.g.::

    ['instance requires property "isbn"', 'instance requires property "title"']

Transport failures (connection refused, timeouts) are reported with a
``status_code`` of ``None``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote

import requests


logger = logging.getLogger(__name__)

Result = Tuple[Optional[Any], Optional[Dict[str, Any]]]


class BookstoreAPI:
    """Client for the bookstore catalog API."""

    def __init__(
        self,
        *,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API, e.g. ``http://localhost:8000``.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Seconds to wait for each response.
        """
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    def _request(self, method: str, path: str, *, json_body: Any = None) -> Result:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PUT``, ``DELETE``).
            path: Path relative to :attr:`base_url` (e.g. ``/books/``).
            json_body: JSON body to send with the request (for POST/PUT).
        Returns:
            A tuple ``(data, error)``.
        """
        url = f"{self.base_url}{path}"
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                json=json_body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = self._error_message(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    @staticmethod
    def _error_message(exc: requests.HTTPError) -> Any:
        """Pull ``error.message`` out of the server's error envelope."""
        if exc.response is None:
            return str(exc)
        try:
            body = exc.response.json()
        except ValueError:
            return exc.response.text or str(exc)
        error = body.get("error") if isinstance(body, dict) else None
        if isinstance(error, dict) and error.get("message"):
            return error["message"]
        return str(body)

    @staticmethod
    def _book_path(isbn: str) -> str:
        return f"/books/{quote(str(isbn), safe='')}"

    # ------------------------------------------------------------------
    # Book operations
    # ------------------------------------------------------------------
    def list_books(self) -> Tuple[List[Dict[str, Any]], Optional[Dict[str, Any]]]:
        """Retrieve every book in the catalog."""
        data, error = self._request("GET", "/books/")
        if error:
            return [], error
        return (data or {}).get("books", []), None

    def get_book(self, isbn: str) -> Result:
        """Retrieve a single book by isbn."""
        data, error = self._request("GET", self._book_path(isbn))
        if error:
            return None, error
        return data["book"], None

    def create_book(self, payload: Any) -> Result:
        """Create a book.

        Args:
            payload: Book fields; ``isbn``, ``author`` and ``title`` are
                required by the server.
        """
        data, error = self._request("POST", "/books/", json_body=payload)
        if error:
            return None, error
        return data["book"], None

    def update_book(self, isbn: str, payload: Any) -> Result:
        """Replace some or all fields of a book."""
        data, error = self._request("PUT", self._book_path(isbn), json_body=payload)
        if error:
            return None, error
        return data["book"], None

    def delete_book(self, isbn: str) -> Tuple[bool, Optional[Dict[str, Any]]]:
        """Delete a book.  Returns ``(True, None)`` on success."""
        _, error = self._request("DELETE", self._book_path(isbn))
        if error:
            return False, error
        return True, None
