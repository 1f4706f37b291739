"""
Error types raised by the book service.
"""


class BookServiceError(Exception):
    """Base class for book service errors."""


class StorageUnavailable(BookServiceError):
    """The database could not complete a read or a write."""


class StartupFailure(BookServiceError):
    """The initial database connection could not be established."""
