"""Unit tests for the logging utility."""

from __future__ import annotations

import json
import logging

from freezegun import freeze_time
from orderdesk.core.logger import JSONFormatter, configure_logging, ensure_request_id


def _record(msg: str = "order.created", **extra) -> logging.LogRecord:
    record = logging.LogRecord("orderdesk.test", logging.INFO, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_configure_logging_sets_level() -> None:
    """``configure_logging`` should set the root logger level."""

    # Act
    configure_logging("DEBUG")

    # Assert
    assert logging.getLogger().level == logging.DEBUG


@freeze_time("2024-03-15T17:00:00Z")
def test_json_formatter_renders_known_extras() -> None:
    record = _record(order_id=7, area_id=3, request_id="req-1", unrelated="dropped")

    payload = json.loads(JSONFormatter().format(record))

    assert payload["time"] == "2024-03-15T17:00:00.000+00:00"
    assert payload["level"] == "INFO"
    assert payload["message"] == "order.created"
    assert payload["request_id"] == "req-1"
    assert payload["order_id"] == 7
    assert payload["area_id"] == 3
    assert "unrelated" not in payload


def test_request_id_is_taken_from_header(app) -> None:
    with app.test_request_context("/", headers={"X-Request-ID": "abc-123"}):
        assert ensure_request_id() == "abc-123"
        assert ensure_request_id() == "abc-123"


def test_request_id_is_generated_once_per_request(app) -> None:
    with app.test_request_context("/"):
        first = ensure_request_id()
        assert first
        assert ensure_request_id() == first
