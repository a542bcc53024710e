"""Factory Boy definitions for suppliers and purchases."""

from __future__ import annotations

from datetime import date

import factory
from orderdesk.core.clock import utc_now
from orderdesk.models.supplier import Purchase, PurchaseItem, Supplier

from tests.factories import BaseFactory


class SupplierFactory(BaseFactory):
    class Meta:
        model = Supplier

    name = factory.Sequence(lambda n: f"Supplier {n}")
    company_name = factory.Faker("company")
    contact_name = factory.Faker("name")
    phone = factory.Sequence(lambda n: f"01{n:07d}")
    email = factory.Sequence(lambda n: f"supplier{n}@example.com")
    address = None


class PurchaseFactory(BaseFactory):
    class Meta:
        model = Purchase

    supplier = factory.SubFactory(SupplierFactory)
    area_id = None
    total_amount = 50.0
    purchase_date = date(2024, 3, 15)
    created_at = factory.LazyFunction(utc_now)


class PurchaseItemFactory(BaseFactory):
    class Meta:
        model = PurchaseItem

    purchase = factory.SubFactory(PurchaseFactory)
    description = factory.Faker("word")
    quantity = 2.0
    unit_cost = 25.0
    total_cost = 50.0
