"""
Tests for the logging setup.
"""

import logging

import pytest
import structlog
import structlog.testing

from utilities.logger import get_logger, setup_logging


@pytest.fixture
def restore_logging():
    """Restore root handlers and structlog defaults after a test."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    structlog.reset_defaults()


def test_setup_logging_creates_log_file(tmp_path, restore_logging):
    """Test that the log directory and file are created."""
    log_file = tmp_path / "logs" / "api.log"

    setup_logging(log_level="DEBUG", log_format="console", log_file=log_file)

    assert log_file.exists()
    assert any(
        isinstance(handler, logging.FileHandler) and handler.baseFilename == str(log_file)
        for handler in logging.getLogger().handlers
    )


def test_setup_logging_json_without_file(restore_logging):
    """Test JSON setup without a file handler."""
    setup_logging(log_level="WARNING", log_format="json", debug=True)

    assert not any(
        isinstance(handler, logging.FileHandler)
        for handler in logging.getLogger().handlers
    )
    assert isinstance(
        structlog.get_config()["processors"][-1], structlog.processors.JSONRenderer
    )


def test_get_logger_emits_structured_events(restore_logging):
    """Test that events carry their key-value context."""
    with structlog.testing.capture_logs() as logs:
        get_logger("books_api.database").info("Book created", book_id="abc")

    assert logs == [{"event": "Book created", "book_id": "abc", "log_level": "info"}]
