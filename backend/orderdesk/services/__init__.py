"""Service layer.

Each aggregate lives in its own subpackage (``orders``, ``products``,
``suppliers``, ``users``) with a ``dto.py`` of frozen input/output contracts
and a ``service.py`` holding the application service. Shared primitives
(base service, errors, pagination, sorting, business dates, projection) live
in ``orderdesk.services._shared``.

Nothing is re-exported here: repositories import the shared query helpers
from this package, so eager imports would be circular.
"""
