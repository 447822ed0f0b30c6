"""Pydantic models for API requests and responses."""
from .book_model import (
    Book,
    BookCreate,
    BookListResponse,
    BookResponse,
    BookUpdate,
    ErrorResponse,
    MessageResponse,
)
