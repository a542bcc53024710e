"""Global Flask extension instances and initialization helpers."""

from __future__ import annotations

from zoneinfo import ZoneInfo

from flask import Flask, current_app
from flask_jwt_extended import JWTManager
from flask_migrate import Migrate
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import MetaData

from orderdesk.core.clock import Clock, SystemClock

# Global naming convention for all constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)

# Global singletons (import-safe)
db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)
migrate = Migrate(render_as_batch=True)
jwt = JWTManager()

CLOCK_KEY = "orderdesk.clock"
BUSINESS_TZ_KEY = "orderdesk.business_tz"


def init_app(app: Flask) -> None:
    """Initialize SQLAlchemy, migrations, JWT and the business calendar.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances. This call imports the
        :mod:`orderdesk.models` package so SQLAlchemy metadata is ready for
        migrations, and registers the process clock plus the configured
        business timezone under ``app.extensions``.
    """
    db.init_app(app)

    # Ensure models are imported so Alembic sees metadata
    from orderdesk import models as _models  # noqa: F401

    migrate.init_app(app, db)
    jwt.init_app(app)

    app.extensions.setdefault(CLOCK_KEY, SystemClock())
    app.extensions[BUSINESS_TZ_KEY] = ZoneInfo(app.config["BUSINESS_TIMEZONE"])


def get_clock() -> Clock:
    """Return the clock registered on the current application."""
    return current_app.extensions[CLOCK_KEY]


def get_business_timezone() -> ZoneInfo:
    """Return the business timezone registered on the current application."""
    return current_app.extensions[BUSINESS_TZ_KEY]
