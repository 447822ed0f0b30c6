"""Tests for health checks and the error envelope."""
from fastapi.testclient import TestClient

from bookstore.db import connection


def test_healthcheck(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "env": "test"}


def test_db_healthcheck_reports_book_count(client, sample_book):
    body = client.get("/health/db").json()

    assert body["status"] == "connected"
    assert body["database"] == {"version": "PostgreSQL 16.0 (fake)", "books": 1}


def test_db_healthcheck_reports_errors(client, monkeypatch):
    async def unreachable():
        raise ConnectionRefusedError("connection refused")

    monkeypatch.setattr("bookstore.main.get_pool", unreachable)
    body = client.get("/health/db").json()

    assert body["status"] == "error"
    assert body["type"] == "ConnectionRefusedError"


def test_unknown_route_uses_error_envelope(client):
    response = client.get("/authors")

    assert response.status_code == 404
    assert response.json() == {"error": {"message": "Not Found", "status": 404}}


def test_storage_failure_is_a_500(fake_pool, monkeypatch):
    from bookstore.main import app

    async def broken_list():
        raise RuntimeError("storage exploded")

    monkeypatch.setattr("bookstore.services.book_service.list_books", broken_list)
    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/books")

    assert response.status_code == 500
    assert response.json() == {"error": {"message": "Internal Server Error", "status": 500}}


def test_shutdown_closes_pool(fake_pool):
    from bookstore.main import app

    with TestClient(app):
        pass

    assert fake_pool.closed is True
    assert connection._pool is None


def test_openapi_documents_error_body(client):
    paths = client.get("/openapi.json").json()["paths"]

    create = paths["/books"]["post"]["responses"]
    assert create["400"]["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorResponse")
    assert "409" in create
    assert "404" in paths["/books/{isbn}"]["delete"]["responses"]
    assert {"400", "404"} <= set(paths["/books/{isbn}"]["put"]["responses"])
