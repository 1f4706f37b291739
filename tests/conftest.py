"""
Pytest configuration and shared fixtures.
"""

import pytest
from typing import List
from unittest.mock import AsyncMock, MagicMock, Mock

from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo.errors import ServerSelectionTimeoutError

from books_api.database import BookStore, MongoDBManager
from books_api.exceptions import StorageUnavailable
from books_api.main import create_app
from books_api.models import Book
from utilities.config import ServiceConfig


class InMemoryBookStore(BookStore):
    """Book store keeping records in a list."""

    def __init__(self):
        self.books: List[Book] = []
        self.create_calls = 0

    async def list_all(self) -> List[Book]:
        return list(self.books)

    async def create(self, title: str, description: str) -> Book:
        self.create_calls += 1
        book = Book(id=str(ObjectId()), title=title, description=description)
        self.books.append(book)
        return book


class FailingBookStore(BookStore):
    """Book store whose database is unreachable."""

    def __init__(self):
        self.create_calls = 0

    async def list_all(self) -> List[Book]:
        raise StorageUnavailable("Failed to list books") from ServerSelectionTimeoutError(
            "mongo:27017: [Errno 111] Connection refused"
        )

    async def create(self, title: str, description: str) -> Book:
        self.create_calls += 1
        raise StorageUnavailable("Failed to insert book") from ServerSelectionTimeoutError(
            "mongo:27017: [Errno 111] Connection refused"
        )


@pytest.fixture
def memory_store():
    """Create an empty in-memory book store."""
    return InMemoryBookStore()


@pytest.fixture
def failing_store():
    """Create a book store that always fails."""
    return FailingBookStore()


@pytest.fixture
def client(memory_store):
    """Create test client backed by the in-memory store."""
    return TestClient(create_app(book_store=memory_store), raise_server_exceptions=False)


@pytest.fixture
def failing_client(failing_store):
    """Create test client whose storage is unavailable."""
    return TestClient(create_app(book_store=failing_store), raise_server_exceptions=False)


@pytest.fixture
def mock_collection():
    """Create a mock motor collection."""
    collection = MagicMock()
    collection.find.return_value.to_list = AsyncMock(return_value=[])
    collection.insert_one = AsyncMock(return_value=Mock(inserted_id=ObjectId()))
    return collection


@pytest.fixture
def service_config():
    """Create service configuration for testing."""
    return ServiceConfig(
        _env_file=None,
        mongodb_username="books",
        mongodb_password="secret",
        mongodb_url="mongodb",
        connect_retry_attempts=2,
        connect_retry_delay=0.5,
    )


@pytest.fixture
def mock_db_manager(memory_store):
    """Create a mock MongoDB manager for lifespan testing."""
    manager = AsyncMock(spec=MongoDBManager)
    manager.get_book_store = Mock(return_value=memory_store)
    return manager
