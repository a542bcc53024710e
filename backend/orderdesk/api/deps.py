"""Shared API helpers for request parsing and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Mapping
from typing import Any, TypeVar

from flask import Response, current_app, jsonify, request
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request

from orderdesk.core.extensions import get_business_timezone, get_clock
from orderdesk.core.logger import ensure_request_id
from orderdesk.services._shared.base import ServiceContext
from orderdesk.services._shared.dates import TimezoneDateResolver
from orderdesk.services._shared.pagination import PageRequest
from orderdesk.services._shared.projection import OrderApiProjector

F = TypeVar("F", bound=Callable[..., Any])


def parse_page_request(params: Mapping[str, Any]) -> PageRequest:
    """Build a :class:`PageRequest` from loaded query parameters and app limits.

    :param params: Output of a :class:`~orderdesk.schemas.common.PageQuerySchema` load.
    :raises InvalidPageParameterError: On invalid ``page``/``limit``.
    """
    return PageRequest.from_params(
        page=params.get("page"),
        limit=params.get("limit"),
        sort_by=params.get("sort_by"),
        order=params.get("order"),
        query=params.get("q"),
        default_limit=current_app.config["PAGINATION_DEFAULT_LIMIT"],
        max_limit=current_app.config["PAGINATION_MAX_LIMIT"],
    )


def get_date_resolver() -> TimezoneDateResolver:
    """Business calendar bound to the configured timezone and the app clock."""
    return TimezoneDateResolver(tz=get_business_timezone(), clock=get_clock())


def get_order_projector() -> OrderApiProjector:
    return OrderApiProjector(get_date_resolver())


def service_kwargs() -> dict[str, Any]:
    """Keyword arguments shared by every service built inside an authenticated view."""
    dates = get_date_resolver()
    identity = get_jwt_identity()
    ctx = ServiceContext(
        actor_id=int(identity) if identity is not None else None,
        request_id=ensure_request_id(),
    )
    return {"ctx": ctx, "clock": dates.clock, "dates": dates}


def require_auth(func: F) -> F:
    """Ensure the request carries a valid JWT access token."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        verify_jwt_in_request(optional=False)
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
