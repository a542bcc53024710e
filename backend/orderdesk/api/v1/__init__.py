"""API v1 blueprint package bundling versioned routes."""

from __future__ import annotations

from flask import Blueprint

API_VERSION = "v1"

# Import blueprints *only here* to keep imports localized and avoid cycles.
from .areas import bp as areas_bp  # noqa: E402
from .health import bp as health_bp  # noqa: E402
from .orders import bp as orders_bp  # noqa: E402
from .products import bp as products_bp  # noqa: E402
from .suppliers import bp as suppliers_bp  # noqa: E402
from .unit_measurements import bp as unit_measurements_bp  # noqa: E402
from .users import bp as users_bp  # noqa: E402

# Each tuple: (blueprint, url_prefix_relative_to_version)
REGISTRY: list[tuple[Blueprint, str]] = [
    (health_bp, ""),  # -> /api/v1
    (areas_bp, "/areas"),
    (orders_bp, "/orders"),
    (products_bp, "/products"),
    (suppliers_bp, "/suppliers"),
    (unit_measurements_bp, "/unit-measurements"),
    (users_bp, "/users"),
]
