"""Unit tests for RFC 7807 error rendering."""

from __future__ import annotations

from http import HTTPStatus

from orderdesk.core.errors import STORAGE_ERRORS, APIError, _storage_error_handler
from sqlalchemy.exc import IntegrityError, OperationalError


def test_api_error_problem_payload(app) -> None:
    err = APIError("Bad day", code="invalid_range", details={"value": "x"})

    with app.test_request_context("/api/v1/orders", headers={"X-Request-ID": "r-1"}):
        problem = err.to_problem()

    assert problem["status"] == 400
    assert problem["title"] == "Bad Request"
    assert problem["code"] == "invalid_range"
    assert problem["details"] == {"value": "x"}
    assert problem["instance"] == "/api/v1/orders"
    assert problem["request_id"] == "r-1"


def test_storage_errors_hide_driver_message(app) -> None:
    handler = _storage_error_handler(HTTPStatus.CONFLICT, "conflict", "Resource conflict")

    with app.test_request_context("/api/v1/orders"):
        resp, status = handler(IntegrityError("INSERT ...", {}, Exception("UNIQUE failed")))
        text = resp.get_data(as_text=True)

    assert status == HTTPStatus.CONFLICT
    assert resp.mimetype == "application/problem+json"
    assert "UNIQUE" not in text


def test_storage_error_table() -> None:
    mapping = {exc: (status, code) for exc, status, code, _ in STORAGE_ERRORS}
    assert mapping[IntegrityError] == (HTTPStatus.CONFLICT, "conflict")
    assert mapping[OperationalError] == (HTTPStatus.SERVICE_UNAVAILABLE, "service_unavailable")
