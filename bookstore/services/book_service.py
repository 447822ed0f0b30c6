"""Book service helpers.

Every operation is a single statement against the ``books`` table.
Payloads are validated before any write; the table's primary key is what
enforces isbn uniqueness.
"""
from typing import Any, List

import asyncpg

from bookstore.db.connection import get_pool
from bookstore.models.book_model import Book
from bookstore.utils.errors import BookConflictError, BookNotFoundError, BookValidationError
from bookstore.utils.logger import get_logger
from bookstore.utils.validation import validate_book

logger = get_logger(__name__)

# Content columns in statement parameter order; isbn is handled separately.
CONTENT_FIELDS = ("amazon_url", "author", "language", "pages", "publisher", "title", "year")


def _check(payload: Any, require_isbn: bool) -> None:
    violations = validate_book(payload, require_isbn=require_isbn)
    if violations:
        logger.warning(f"Rejected book payload: {[str(v) for v in violations]}")
        raise BookValidationError(violations)


async def create_book(payload: Any) -> Book:
    """Insert a new book; the caller supplies the isbn."""
    _check(payload, require_isbn=True)
    pool = await get_pool()
    async with pool.acquire() as conn:
        try:
            row = await conn.fetchrow(
                """
                INSERT INTO books (isbn, amazon_url, author, language, pages, publisher, title, year)
                VALUES ($1, $2, $3, $4, $5, $6, $7, $8)
                RETURNING *
                """,
                payload["isbn"],
                *(payload[field] for field in CONTENT_FIELDS),
            )
        except asyncpg.UniqueViolationError:
            logger.warning(f"Duplicate isbn on create: {payload['isbn']}")
            raise BookConflictError(payload["isbn"]) from None
    logger.info(f"Created book {row['isbn']}")
    return Book.from_db_record(row)


async def list_books() -> List[Book]:
    """All books ordered by title."""
    pool = await get_pool()
    async with pool.acquire() as conn:
        rows = await conn.fetch("SELECT * FROM books ORDER BY title, isbn")
    return [Book.from_db_record(row) for row in rows]


async def get_book(isbn: str) -> Book:
    pool = await get_pool()
    async with pool.acquire() as conn:
        row = await conn.fetchrow("SELECT * FROM books WHERE isbn = $1", isbn)
    if row is None:
        raise BookNotFoundError(isbn)
    return Book.from_db_record(row)


async def update_book(isbn: str, payload: Any) -> Book:
    """Replace every content field of the book at ``isbn``.

    An ``isbn`` inside the payload is accepted but ignored.
    """
    _check(payload, require_isbn=False)
    pool = await get_pool()
    async with pool.acquire() as conn:
        row = await conn.fetchrow(
            """
            UPDATE books
            SET amazon_url = $1, author = $2, language = $3, pages = $4,
                publisher = $5, title = $6, year = $7
            WHERE isbn = $8
            RETURNING *
            """,
            *(payload[field] for field in CONTENT_FIELDS),
            isbn,
        )
    if row is None:
        raise BookNotFoundError(isbn)
    logger.info(f"Updated book {isbn}")
    return Book.from_db_record(row)


async def delete_book(isbn: str) -> None:
    pool = await get_pool()
    async with pool.acquire() as conn:
        deleted = await conn.fetchval("DELETE FROM books WHERE isbn = $1 RETURNING isbn", isbn)
    if deleted is None:
        raise BookNotFoundError(isbn)
    logger.info(f"Deleted book {isbn}")


async def count_books() -> int:
    pool = await get_pool()
    async with pool.acquire() as conn:
        return await conn.fetchval("SELECT COUNT(*) FROM books")
