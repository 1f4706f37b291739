"""
API models and schemas for the book service.
"""

from typing import List

from pydantic import BaseModel, Field, validator


# Fixed response messages
INVALID_ENTRY_MESSAGE = "Invalid book entry"
BOOK_SAVED_MESSAGE = "Book saved with success"
LOAD_FAILED_MESSAGE = "Failed to load books."
SAVE_FAILED_MESSAGE = "Failed to save the book."
INTERNAL_ERROR_MESSAGE = "Internal server error"


class Book(BaseModel):
    """Book as exposed by the API."""
    id: str = Field(..., description="Unique book identifier")
    title: str = Field(..., description="Book title")
    description: str = Field(..., description="Book description")


class BookCreateRequest(BaseModel):
    """
    Request body for creating a book.

    Both fields must be strings that are non-empty once surrounding
    whitespace is removed. The submitted values are kept untrimmed.
    """
    title: str = Field(..., description="Book title")
    description: str = Field(..., description="Book description")

    @validator('title', 'description')
    def validate_not_blank(cls, v):
        """Reject values that are empty after trimming."""
        if not v.strip():
            raise ValueError('must not be blank')
        return v


class BookListResponse(BaseModel):
    """Response model for the book list."""
    books: List[Book] = Field(..., description="List of books")


class MessageResponse(BaseModel):
    """Response model carrying a single message."""
    message: str = Field(..., description="Outcome message")
