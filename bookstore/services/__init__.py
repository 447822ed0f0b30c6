"""Services package."""
from . import book_service

__all__ = ["book_service"]
