"""
Abstract Unit of Work contract shared by read-write and read-only scopes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from orderdesk.repositories import (
        AreaRepository,
        CategoryRepository,
        CompanyRepository,
        OrderRepository,
        ProductRepository,
        PurchaseRepository,
        SupplierRepository,
        UnitMeasurementRepository,
        UserRepository,
    )


class UnitOfWork(ABC):
    """
    Transactional boundary for one use case.

    Every repository attribute is bound to the same session, so reads and
    writes made through them belong to one transaction. A read-write scope
    commits on a clean exit; a read-only scope never commits.
    """

    orders: OrderRepository
    products: ProductRepository
    suppliers: SupplierRepository
    purchases: PurchaseRepository
    users: UserRepository
    areas: AreaRepository
    unit_measurements: UnitMeasurementRepository
    companies: CompanyRepository
    categories: CategoryRepository

    @abstractmethod
    def __enter__(self) -> UnitOfWork: ...
    @abstractmethod
    def __exit__(self, exc_type, exc, tb) -> None: ...
    @abstractmethod
    def commit(self) -> None: ...
    @abstractmethod
    def rollback(self) -> None: ...
