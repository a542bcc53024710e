"""Pytest fixtures configuring an isolated transactional database layer.

Each test runs inside a SAVEPOINT-backed transaction against an in-memory
SQLite database so data changes never leak between cases. The application
clock is frozen at :data:`FROZEN_NOW` (noon in Lima) and reset per test.
"""

from __future__ import annotations

import os
from datetime import UTC, datetime

import pytest
from flask_jwt_extended import create_access_token
from sqlalchemy import event
from sqlalchemy.orm import scoped_session, sessionmaker

from orderdesk import create_app
from orderdesk.core.clock import FrozenClock
from orderdesk.core.config import TestingConfig
from orderdesk.core.extensions import CLOCK_KEY
from orderdesk.core.extensions import db as _db

# 2024-03-15 12:00 in America/Lima
FROZEN_NOW = datetime(2024, 3, 15, 17, 0, tzinfo=UTC)


class TestConfig(TestingConfig):
    """Testing configuration for creating the Flask app.

    Notes
    -----
    - Uses an in-memory SQLite database for speed.
    - Skips ProxyFix; the test client talks to the app directly.
    """

    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    USE_PROXYFIX = False
    LOG_LEVEL = "WARNING"


@pytest.fixture(scope="session")
def app():
    """Create a Flask application configured for testing."""
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    app = create_app(TestConfig, clock=FrozenClock(FROZEN_NOW))
    app.logger.setLevel("WARNING")
    return app


@pytest.fixture(scope="session")
def db(app):
    """Create database tables once per test session.

    The application context stays pushed for the whole session so test-client
    requests reuse it and see the per-test transactional session.
    """
    with app.app_context():
        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope="session")
def connection(db):
    """Keep a dedicated DBAPI connection open for the whole session."""
    conn = db.engine.connect()
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="function")
def session(db, connection):
    """Provide a SQLAlchemy session wrapped in a nested transaction.

    Notes
    -----
    The fixture mirrors the SQLAlchemy 2.0 pattern for transactional tests: it
    begins a top-level transaction, starts a SAVEPOINT per test, and reinstalls
    the SAVEPOINT whenever SQLAlchemy ends one. A service that rolls back on
    error discards everything written since the last commit, factory rows
    included, so tests assert on the raised error only.
    """
    # 1) Top-level transaction
    top_trans = connection.begin()

    # 2) Scoped session bound to the connection
    SessionFactory = sessionmaker(bind=connection, autoflush=False)
    scoped = scoped_session(SessionFactory)

    # 3) SAVEPOINT per test
    nested = connection.begin_nested()

    # 4) Re-create SAVEPOINT when the previous nested transaction ends
    @event.listens_for(scoped(), "after_transaction_end")
    def _restart_savepoint(sess, trans):  # pragma: no cover
        if trans.nested and not trans._parent.nested:
            nonlocal nested
            nested = connection.begin_nested()

    # 5) Monkey-patch db.session so app code uses this scoped session
    original_session = db.session
    db.session.remove()
    db.session = scoped

    try:
        yield scoped
    finally:
        scoped.remove()
        db.session = original_session
        top_trans.rollback()


@pytest.fixture()
def clock(app) -> FrozenClock:
    """Fresh frozen clock registered on the app for the current test."""
    frozen = FrozenClock(FROZEN_NOW)
    app.extensions[CLOCK_KEY] = frozen
    return frozen


@pytest.fixture()
def client(app):
    """Return a Flask test client."""
    return app.test_client()


@pytest.fixture()
def user(session):
    """Persist and return a user instance."""
    from tests.factories.user import UserFactory

    return UserFactory()


@pytest.fixture()
def auth_header(user) -> dict[str, str]:
    """Authorization header carrying a valid access token for ``user``."""
    token = create_access_token(identity=str(user.id))
    return {"Authorization": f"Bearer {token}"}


# -- Hook up Factory Boy to pytest SQLAlchemy session --------------------------
@pytest.fixture(autouse=True)
def _factories_session(session, clock):
    """Wire Factory Boy's session helper to the transactional session fixture."""
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(session)
    yield
