"""Repository package exposing persistence-layer access for all domain models."""

from __future__ import annotations

from orderdesk.repositories.base import BaseRepository, apply_sorting
from orderdesk.repositories.catalog import (
    AreaRepository,
    CategoryRepository,
    CompanyRepository,
    UnitMeasurementRepository,
)
from orderdesk.repositories.filters import QueryFilterBuilder
from orderdesk.repositories.order import OrderRepository
from orderdesk.repositories.product import ProductRepository
from orderdesk.repositories.supplier import PurchaseRepository, SupplierRepository
from orderdesk.repositories.user import UserRepository

__all__ = [
    # Base
    "BaseRepository",
    "QueryFilterBuilder",
    "apply_sorting",
    # Domain
    "AreaRepository",
    "CategoryRepository",
    "CompanyRepository",
    "OrderRepository",
    "ProductRepository",
    "PurchaseRepository",
    "SupplierRepository",
    "UnitMeasurementRepository",
    "UserRepository",
]
