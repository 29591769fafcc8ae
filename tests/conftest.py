"""Shared fixtures: one in-memory database per test run, emptied after every test."""
import os

# Must be set before `models` is imported anywhere: the engine is chosen at import
os.environ["APP_ENV"] = "test"

import pytest

from api import create_app
from models import storage
from models.book import Book
from models.book_detail import BookDetail
from models.publisher import Publisher
from services.book_service import BookService
from services.publisher_service import PublisherService
from services.simple_book_service import SimpleBookService


@pytest.fixture(scope="session")
def app():
    return create_app("testing")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture(autouse=True)
def clean_db():
    yield
    session = storage.get_session()
    session.rollback()
    # Children first so foreign keys never block the cleanup
    session.query(BookDetail).delete()
    session.query(Book).delete()
    session.query(Publisher).delete()
    session.commit()
    storage.close()


@pytest.fixture
def session():
    return storage.get_session()


@pytest.fixture
def book_service():
    return BookService()


@pytest.fixture
def publisher_service():
    return PublisherService()


@pytest.fixture
def simple_book_service():
    return SimpleBookService()


@pytest.fixture
def acme(publisher_service):
    return publisher_service.create_publisher({"name": "Acme", "address": "X"})


@pytest.fixture
def book_payload(acme):
    """Builds a create/update payload for the publisher-aware book service."""
    def _payload(**overrides):
        data = {
            "title": "T",
            "author": "A",
            "isbn": "978-0000000000",
            "price": 10000,
            "publish_date": None,
            "publisher_id": acme["id"],
        }
        data.update(overrides)
        return data

    return _payload
