"""
Tests for the bookstore API client.
"""

import json
from unittest.mock import MagicMock

import pytest
import requests

from bookstore_client import BookstoreAPI


def make_response(status_code, body=None, text=None):
    response = requests.Response()
    response.status_code = status_code
    response.url = "http://bookstore.test/books/"
    if body is not None:
        response._content = json.dumps(body).encode("utf-8")
    else:
        response._content = (text or "").encode("utf-8")
    response.encoding = "utf-8"
    return response


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def api(session):
    return BookstoreAPI(base_url="http://bookstore.test/", session=session)


def test_list_books(api, session):
    session.request.return_value = make_response(200, {"books": [{"isbn": "0691161518"}]})

    books, error = api.list_books()

    assert error is None
    assert books == [{"isbn": "0691161518"}]
    session.request.assert_called_once_with(
        method="GET", url="http://bookstore.test/books/", json=None, timeout=15
    )


def test_create_book_returns_violations_verbatim(api, session):
    violations = [
        'instance requires property "isbn"',
        'instance requires property "author"',
        'instance requires property "title"',
    ]
    session.request.return_value = make_response(
        400, {"error": {"status": 400, "message": violations}}
    )

    book, error = api.create_book({"pages": 555})

    assert book is None
    assert error == {"status_code": 400, "message": violations}


def test_create_book(api, session):
    session.request.return_value = make_response(201, {"book": {"isbn": "5555555555"}})

    book, error = api.create_book({"isbn": "5555555555", "author": "Dr Test", "title": "Test"})

    assert error is None
    assert book == {"isbn": "5555555555"}
    assert session.request.call_args.kwargs["json"]["author"] == "Dr Test"


def test_update_book_quotes_isbn(api, session):
    session.request.return_value = make_response(200, {"book": {"isbn": "12/34"}})

    book, error = api.update_book("12/34", {"year": 2023})

    assert error is None
    assert session.request.call_args.kwargs["url"] == "http://bookstore.test/books/12%2F34"
    assert session.request.call_args.kwargs["method"] == "PUT"


def test_get_book_not_found(api, session):
    session.request.return_value = make_response(
        404, {"error": {"status": 404, "message": "There is no book with an isbn of 'x'"}}
    )

    book, error = api.get_book("x")

    assert book is None
    assert error == {"status_code": 404, "message": "There is no book with an isbn of 'x'"}


def test_delete_book(api, session):
    session.request.return_value = make_response(200, {"message": "Book deleted"})

    deleted, error = api.delete_book("0691161518")

    assert deleted is True
    assert error is None


def test_non_json_error_body(api, session):
    session.request.return_value = make_response(502, text="Bad Gateway")

    deleted, error = api.delete_book("0691161518")

    assert deleted is False
    assert error == {"status_code": 502, "message": "Bad Gateway"}


def test_transport_failure(api, session):
    session.request.side_effect = requests.ConnectionError("connection refused")

    books, error = api.list_books()

    assert books == []
    assert error == {"status_code": None, "message": "connection refused"}
