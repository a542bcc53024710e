"""Health check endpoint."""

from __future__ import annotations

from flask import Blueprint, current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from orderdesk.api.deps import json_response, timing
from orderdesk.core.extensions import db, get_business_timezone

bp = Blueprint("health", __name__)


@bp.get("/health")
@timing
def healthcheck():
    """Return liveness, database reachability and the business timezone."""

    db_status = "ok"
    try:
        db.session.execute(text("SELECT 1"))
    except SQLAlchemyError:  # pragma: no cover - depends on DB backend
        current_app.logger.exception("healthcheck.db_error")
        db_status = "fail"
    payload = {
        "status": "ok",
        "db": db_status,
        "timezone": str(get_business_timezone()),
        "version": current_app.config.get("APP_VERSION", "dev"),
    }
    return json_response(payload)
