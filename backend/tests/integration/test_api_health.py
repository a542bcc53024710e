"""Smoke tests for the public surface of the API."""

from __future__ import annotations

from tests.helpers.assertions import assert_problem
from tests.helpers.auth import expired_token


def test_health(client) -> None:
    """Health endpoint reports the database and the business timezone."""

    # Act
    resp = client.get("/api/v1/health")

    # Assert
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["status"] == "ok"
    assert body["db"] == "ok"
    assert body["timezone"] == "America/Lima"


def test_request_id_is_echoed(client) -> None:
    resp = client.get("/api/v1/health", headers={"X-Request-ID": "trace-me"})
    assert resp.headers["X-Request-ID"] == "trace-me"


def test_request_id_is_generated_per_request(client) -> None:
    first = client.get("/api/v1/health").headers["X-Request-ID"]
    second = client.get("/api/v1/health").headers["X-Request-ID"]
    assert first and second and first != second


def test_cors_headers(client) -> None:
    """CORS headers should reflect allowed origins."""

    resp = client.get("/api/v1/health", headers={"Origin": "http://localhost:5173"})
    assert resp.status_code == 200
    assert resp.headers["Access-Control-Allow-Origin"] == "http://localhost:5173"


def test_unknown_route_is_problem_json(client) -> None:
    body = assert_problem(client.get("/api/v1/nowhere"), 404, "not_found")
    assert body["instance"] == "/api/v1/nowhere"


def test_listing_requires_token(client) -> None:
    assert client.get("/api/v1/orders").status_code == 401


def test_expired_token_is_rejected(client, user) -> None:
    headers = {"Authorization": f"Bearer {expired_token(user.id)}"}
    assert client.get("/api/v1/orders", headers=headers).status_code == 401
