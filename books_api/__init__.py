"""
FastAPI service for the course books collection.

This package provides:
- Listing every stored book
- Creating new book entries with input validation
- MongoDB persistence through motor
"""

__version__ = "1.0.0"
