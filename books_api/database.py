"""
Database layer for the book service.
Handles the MongoDB connection lifecycle and book persistence.
"""

import asyncio
from typing import Any, Dict, List, Optional

import structlog
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from books_api.exceptions import StartupFailure, StorageUnavailable
from books_api.models import Book
from utilities.config import ServiceConfig

logger = structlog.get_logger(__name__)


class BookStore:
    """Persistence of book records in a MongoDB collection."""

    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection

    @staticmethod
    def _to_book(book_doc: Dict[str, Any]) -> Book:
        """Project a stored document onto the public book fields."""
        return Book(
            id=str(book_doc["_id"]),
            title=book_doc.get("title") or "",
            description=book_doc.get("description") or "",
        )

    async def list_all(self) -> List[Book]:
        """
        Get every stored book in the collection's natural order.

        Returns:
            List of books, empty when the collection is empty

        Raises:
            StorageUnavailable: If the query fails
        """
        try:
            cursor = self.collection.find({})
            books_docs = await cursor.to_list(length=None)
        except PyMongoError as e:
            logger.error("Failed to list books", error=str(e))
            raise StorageUnavailable("Failed to list books") from e

        return [self._to_book(book_doc) for book_doc in books_docs]

    async def create(self, title: str, description: str) -> Book:
        """
        Persist a new book.

        Args:
            title: Book title, stored as given
            description: Book description, stored as given

        Returns:
            The stored book with its generated identifier

        Raises:
            StorageUnavailable: If the insert fails
        """
        book_doc = {"title": title, "description": description}
        try:
            result = await self.collection.insert_one(book_doc)
        except PyMongoError as e:
            logger.error("Failed to insert book", error=str(e))
            raise StorageUnavailable("Failed to insert book") from e

        book_id = str(result.inserted_id)
        logger.info("Book created", book_id=book_id)
        return Book(id=book_id, title=title, description=description)


class MongoDBManager:
    """
    Async MongoDB manager for the book service.
    Connects at startup with bounded retries and hands out the book store.
    """

    def __init__(self, settings: ServiceConfig):
        """
        Initialize MongoDB manager.

        Args:
            settings: Service configuration with connection details
        """
        self.settings = settings
        self.client: Optional[AsyncIOMotorClient] = None
        self.database: Optional[AsyncIOMotorDatabase] = None

    async def connect(self) -> None:
        """
        Establish the connection to MongoDB.

        Retries with exponential backoff up to the configured number of
        extra attempts.

        Raises:
            StartupFailure: If every attempt fails, or at once when the
                connection settings cannot be parsed
        """
        attempts = self.settings.connect_retry_attempts
        last_exception: Optional[Exception] = None

        for attempt in range(attempts + 1):
            try:
                client = AsyncIOMotorClient(
                    self.settings.get_connection_url(),
                    serverSelectionTimeoutMS=self.settings.mongodb_timeout_ms,
                )
            except (PyMongoError, ValueError) as e:
                # Malformed URL or client options, retrying cannot help
                logger.error(
                    "Connection to MongoDB has failed",
                    url=self.settings.get_redacted_connection_url(),
                    attempts=attempt + 1,
                    error=str(e),
                )
                raise StartupFailure("Invalid MongoDB connection settings") from e

            try:
                await client.admin.command("ping")
            except PyMongoError as e:
                client.close()
                last_exception = e
                if attempt < attempts:
                    delay = self.settings.connect_retry_delay * (2 ** attempt)
                    logger.warning(
                        "Retrying MongoDB connection",
                        attempt=attempt + 1,
                        max_attempts=attempts + 1,
                        delay_seconds=delay,
                        error=str(e),
                    )
                    await asyncio.sleep(delay)
                continue

            self.client = client
            self.database = client[self.settings.mongodb_database]
            logger.info(
                "Connection to MongoDB has succeeded",
                url=self.settings.get_redacted_connection_url(),
                database=self.settings.mongodb_database,
                collection=self.settings.mongodb_collection,
            )
            return

        logger.error(
            "Connection to MongoDB has failed",
            url=self.settings.get_redacted_connection_url(),
            attempts=attempts + 1,
            error=str(last_exception),
        )
        raise StartupFailure("Could not connect to MongoDB") from last_exception

    async def disconnect(self) -> None:
        """Close MongoDB connection."""
        if self.client:
            self.client.close()
            self.client = None
            self.database = None
            logger.info("Disconnected from MongoDB")

    def get_book_store(self) -> BookStore:
        """Book store bound to the configured collection."""
        if self.database is None:
            raise StartupFailure("MongoDB connection has not been established")
        return BookStore(self.database[self.settings.mongodb_collection])
