"""
FastAPI main application for the Course Books API.
"""

from contextlib import asynccontextmanager
from typing import Optional

import structlog
from fastapi import APIRouter, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from books_api.config import config as api_config
from books_api.database import BookStore, MongoDBManager
from books_api.exceptions import BookServiceError, StorageUnavailable
from books_api.models import (
    BookCreateRequest, BookListResponse, MessageResponse,
    INVALID_ENTRY_MESSAGE, BOOK_SAVED_MESSAGE, LOAD_FAILED_MESSAGE,
    SAVE_FAILED_MESSAGE, INTERNAL_ERROR_MESSAGE,
)
from utilities.config import config

# Setup logging
logger = structlog.get_logger(__name__)

router = APIRouter()


def _message(status_code: int, message: str, **headers) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=MessageResponse(message=message).dict(),
        headers=headers or None,
    )


def get_book_store(request: Request) -> BookStore:
    """Book store created at startup."""
    book_store = getattr(request.app.state, "book_store", None)
    if book_store is None:
        raise StorageUnavailable("Book store is not initialized")
    return book_store


@router.get("/books", response_model=BookListResponse, tags=["Books"])
async def get_books(request: Request):
    """List every stored book as id, title and description."""
    try:
        books = await get_book_store(request).list_all()
    except StorageUnavailable as e:
        logger.error("Failed to load books", error=str(e), cause=str(e.__cause__))
        return _message(status.HTTP_500_INTERNAL_SERVER_ERROR, LOAD_FAILED_MESSAGE)

    return BookListResponse(books=books)


@router.post(
    "/books",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["Books"],
)
async def create_book(
    payload: BookCreateRequest,
    request: Request
):
    """
    Create a book.

    - **title**: non-blank book title
    - **description**: non-blank book description
    """
    try:
        await get_book_store(request).create(payload.title, payload.description)
    except StorageUnavailable as e:
        logger.error("Failed to save the book", error=str(e), cause=str(e.__cause__))
        return _message(status.HTTP_500_INTERNAL_SERVER_ERROR, SAVE_FAILED_MESSAGE)

    return MessageResponse(message=BOOK_SAVED_MESSAGE)


def create_app(
    book_store: Optional[BookStore] = None,
    db_manager: Optional[MongoDBManager] = None
) -> FastAPI:
    """
    Build the API application.

    Args:
        book_store: Store to serve from; when omitted the lifespan
            connects to MongoDB before the server accepts requests
        db_manager: Connection manager used when no store is given

    Returns:
        Configured FastAPI application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        logger.info("Starting Course Books API")

        manager = None
        if app.state.book_store is None:
            manager = db_manager or MongoDBManager(config)
            # StartupFailure propagates and aborts server startup
            await manager.connect()
            app.state.book_store = manager.get_book_store()

        yield

        logger.info("Shutting down Course Books API")
        if manager:
            await manager.disconnect()
            app.state.book_store = None

    app = FastAPI(
        title=api_config.api_title,
        description=api_config.api_description,
        version=api_config.api_version,
        lifespan=lifespan
    )
    app.state.book_store = book_store

    @app.middleware("http")
    async def add_cors_headers(request: Request, call_next):
        """Attach the CORS headers to every response and answer preflight."""
        if request.method == "OPTIONS":
            response = Response(status_code=status.HTTP_200_OK)
        else:
            response = await call_next(request)
        response.headers.update(api_config.cors_headers())
        return response

    # Exception handlers
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Reject malformed book entries."""
        logger.info("Rejected invalid book entry", path=request.url.path, errors=len(exc.errors()))
        return _message(422, INVALID_ENTRY_MESSAGE)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTP exceptions."""
        return _message(exc.status_code, str(exc.detail), **(exc.headers or {}))

    @app.exception_handler(BookServiceError)
    async def service_exception_handler(request: Request, exc: BookServiceError):
        """Handle service errors raised outside a route's own handling."""
        logger.error("Book service error", error=str(exc), path=request.url.path)
        return _message(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle general exceptions."""
        logger.error("Unhandled exception", error=str(exc), path=request.url.path)
        # Runs outside the middleware stack, so CORS headers are added here
        return _message(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            INTERNAL_ERROR_MESSAGE,
            **api_config.cors_headers()
        )

    app.include_router(router)
    return app


# Create FastAPI application
app = create_app()
