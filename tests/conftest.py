"""
Pytest configuration and shared fixtures.
"""

import pytest
from fastapi.testclient import TestClient

from bookstore_api.app.core.config import Settings
from bookstore_api.app.core.db import Database
from bookstore_api.app.main import create_app
from bookstore_api.app.services.book_service import BookService


@pytest.fixture
def database(tmp_path):
    """A migrated database in a temporary directory."""
    db = Database(str(tmp_path / "bookstore.db"))
    db.init_db()
    return db


@pytest.fixture
def book_service(database):
    return BookService(database)


@pytest.fixture
def sample_book_data():
    """Complete payload for a single book."""
    return {
        "isbn": "0691161518",
        "amazon_url": "http://a.co/eobPtX2",
        "author": "Matthew Lane",
        "language": "english",
        "pages": 264,
        "publisher": "Princeton University Press",
        "title": "Power-Up: Unlocking the Hidden Mathematics in Video Games",
        "year": 2017,
    }


@pytest.fixture
def app(tmp_path):
    return create_app(Settings(database_url=str(tmp_path / "api.db")))


@pytest.fixture
def client(app):
    """Test client with the lifespan (migrations) running."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def seeded_client(client, sample_book_data):
    """Test client whose catalog holds the sample book."""
    response = client.post("/books/", json=sample_book_data)
    assert response.status_code == 201
    return client
