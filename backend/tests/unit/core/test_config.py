"""Unit tests for environment-driven configuration helpers."""

from __future__ import annotations

import pytest
from orderdesk.core.config import (
    DevelopmentConfig,
    ProductionConfig,
    TestingConfig,
    env_bool,
    env_int,
    get_config,
)
from orderdesk.core.extensions import get_business_timezone


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("production", ProductionConfig),
        ("testing", TestingConfig),
        (" Testing ", TestingConfig),
        ("unknown", DevelopmentConfig),
    ],
)
def test_get_config_selects_by_env(monkeypatch, name, expected) -> None:
    monkeypatch.setenv("APP_ENV", name)
    assert get_config() is expected


def test_env_helpers(monkeypatch) -> None:
    monkeypatch.setenv("FLAG_ON", "Yes")
    monkeypatch.setenv("LIMIT", "25")
    monkeypatch.delenv("MISSING", raising=False)

    assert env_bool("FLAG_ON") is True
    assert env_bool("MISSING", default=True) is True
    assert env_int("LIMIT", 10) == 25
    assert env_int("MISSING", 10) == 10


def test_business_settings_reach_the_app(app) -> None:
    assert app.config["BUSINESS_TIMEZONE"] == "America/Lima"
    assert app.config["PAGINATION_DEFAULT_LIMIT"] == 10
    assert app.config["PAGINATION_MAX_LIMIT"] == 100
    assert str(get_business_timezone()) == "America/Lima"
