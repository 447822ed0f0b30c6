"""Shared fixtures: an in-memory stand-in for the asyncpg pool and a test client."""
import os
from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

os.environ["APP_ENV"] = "test"

import asyncpg
import pytest
from fastapi.testclient import TestClient

from bookstore.db import connection
from bookstore.services.book_service import CONTENT_FIELDS

SAMPLE_BOOK = {
    "isbn": "1234321234",
    "amazon_url": "https://amazon.com/test-book",
    "author": "Lily",
    "language": "English",
    "pages": 403,
    "publisher": "Publishers AB",
    "title": "Test Book",
    "year": 2020,
}


class FakeConnection:
    """Answers the handful of statements the book service issues."""

    def __init__(self, rows: Dict[str, Dict[str, Any]]):
        self.rows = rows

    @staticmethod
    def _statement(query: str) -> str:
        return " ".join(query.split())

    async def fetchrow(self, query: str, *args) -> Optional[Dict[str, Any]]:
        sql = self._statement(query)
        if sql.startswith("INSERT INTO books"):
            isbn = args[0]
            if isbn in self.rows:
                raise asyncpg.UniqueViolationError(
                    'duplicate key value violates unique constraint "books_pkey"'
                )
            self.rows[isbn] = {"isbn": isbn, **dict(zip(CONTENT_FIELDS, args[1:]))}
            return dict(self.rows[isbn])
        if sql.startswith("SELECT * FROM books WHERE isbn"):
            row = self.rows.get(args[0])
            return dict(row) if row else None
        if sql.startswith("UPDATE books"):
            isbn = args[-1]
            if isbn not in self.rows:
                return None
            self.rows[isbn].update(zip(CONTENT_FIELDS, args[:-1]))
            return dict(self.rows[isbn])
        raise AssertionError(f"unexpected fetchrow: {sql}")

    async def fetch(self, query: str, *args) -> List[Dict[str, Any]]:
        sql = self._statement(query)
        if sql.startswith("SELECT * FROM books ORDER BY"):
            return [dict(row) for row in sorted(self.rows.values(), key=lambda r: (r["title"], r["isbn"]))]
        raise AssertionError(f"unexpected fetch: {sql}")

    async def fetchval(self, query: str, *args):
        sql = self._statement(query)
        if sql.startswith("DELETE FROM books"):
            row = self.rows.pop(args[0], None)
            return row["isbn"] if row else None
        if sql.startswith("SELECT COUNT(*) FROM books"):
            return len(self.rows)
        if sql.startswith("SELECT version()"):
            return "PostgreSQL 16.0 (fake), compiled by pytest"
        raise AssertionError(f"unexpected fetchval: {sql}")

    async def execute(self, query: str, *args) -> str:
        return "OK"


class FakePool:
    def __init__(self):
        self.rows: Dict[str, Dict[str, Any]] = {}
        self.closed = False

    @asynccontextmanager
    async def acquire(self):
        yield FakeConnection(self.rows)

    async def close(self):
        self.closed = True


@pytest.fixture
def fake_pool(monkeypatch) -> FakePool:
    """Install an empty in-memory pool in place of the real one."""
    pool = FakePool()
    monkeypatch.setattr(connection, "_pool", pool)
    return pool


@pytest.fixture
def sample_book(fake_pool) -> Dict[str, Any]:
    """Seed the sample book; the pool fixture discards it after the test."""
    fake_pool.rows[SAMPLE_BOOK["isbn"]] = dict(SAMPLE_BOOK)
    return dict(SAMPLE_BOOK)


@pytest.fixture
def new_book() -> Dict[str, Any]:
    return {
        "isbn": "1234512345",
        "amazon_url": "https://amazon.com/new-book",
        "author": "latest author",
        "language": "english",
        "pages": 895,
        "publisher": "new publisher",
        "title": "new book",
        "year": 2021,
    }


@pytest.fixture
def client(fake_pool):
    from bookstore.main import app

    with TestClient(app) as test_client:
        yield test_client
