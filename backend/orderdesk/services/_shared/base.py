from __future__ import annotations

from dataclasses import dataclass

from orderdesk.core import errors as api_errors
from orderdesk.core.clock import Clock, SystemClock
from orderdesk.services._shared.dates import TimezoneDateResolver
from orderdesk.services._shared.errors import ConflictError, NotFoundError, ServiceError
from orderdesk.services._shared.pagination import PaginationEngine
from orderdesk.uow.sqlalchemy_uow import (
    SQLAlchemyReadOnlyUnitOfWork,
    SQLAlchemyUnitOfWork,
)


@dataclass(slots=True)
class ServiceContext:
    """
    Carry cross-cutting request-scoped data (auth, request ids).

    :param actor_id: Authenticated user identifier.
    :param request_id: Correlation id for logging/tracing.
    """

    actor_id: int | None = None
    request_id: str | None = None


class BaseService:
    """
    Base class for application services.

    Responsibilities
    ----------------
    * Provide helpers to run read-only and read-write units of work.
    * Hold the injected clock, business calendar and pagination engine.
    * Centralize error translation to API errors.

    Notes
    -----
    - Services must never touch the global session; always use a Unit of Work.
    - Services never read the wall clock directly; "now" comes from ``clock``.
    """

    def __init__(
        self,
        *,
        ctx: ServiceContext | None = None,
        clock: Clock | None = None,
        dates: TimezoneDateResolver | None = None,
        pagination: PaginationEngine | None = None,
    ) -> None:
        """
        Initialize the base service.

        :param ctx: Optional request-scoped context.
        :type ctx: ServiceContext | None
        :param clock: Source of the current instant. Defaults to the system clock.
        :type clock: Clock | None
        :param dates: Business calendar. Defaults to one built on ``clock``.
        :type dates: TimezoneDateResolver | None
        :param pagination: Engine used by listing operations.
        :type pagination: PaginationEngine | None
        """
        self.ctx = ctx or ServiceContext()
        self.clock = clock or (dates.clock if dates is not None else SystemClock())
        self.dates = dates or TimezoneDateResolver(clock=self.clock)
        self.pagination = pagination or PaginationEngine()

    # -------------------------- UoW helpers ---------------------------------

    def rw_uow(self) -> SQLAlchemyUnitOfWork:
        """Create a read-write Unit of Work."""
        return SQLAlchemyUnitOfWork()

    def ro_uow(self) -> SQLAlchemyReadOnlyUnitOfWork:
        """Create a read-only Unit of Work."""
        return SQLAlchemyReadOnlyUnitOfWork()

    # -------------------------- Error handling ------------------------------

    @staticmethod
    def translate_exceptions(exc: Exception) -> Exception:
        """
        Map service-level errors to API-level (HTTP) errors.

        :param exc: Exception raised within the service.
        :type exc: Exception
        :returns: Translated :class:`~orderdesk.core.errors.APIError`, or
            ``exc`` unchanged when it is not a service error.
        :rtype: Exception
        """
        if isinstance(exc, NotFoundError):
            return api_errors.NotFound(str(exc))

        if isinstance(exc, ConflictError):
            return api_errors.Conflict(str(exc))

        # Query-parameter and business-rule errors → 400 Bad Request
        if isinstance(exc, ServiceError):
            return api_errors.APIError(
                message=str(exc),
                status_code=400,
                code=exc.code,
                details=dict(exc.details),
            )

        return exc
