"""Factory Boy definitions for the product catalog."""

from __future__ import annotations

import factory
from orderdesk.models.catalog import Category, Product, UnitMeasurement

from tests.factories import BaseFactory


class CategoryFactory(BaseFactory):
    class Meta:
        model = Category

    name = factory.Sequence(lambda n: f"Category {n}")


class UnitMeasurementFactory(BaseFactory):
    class Meta:
        model = UnitMeasurement

    name = factory.Sequence(lambda n: f"unit-{n}")
    description = None


class ProductFactory(BaseFactory):
    class Meta:
        model = Product

    name = factory.Sequence(lambda n: f"Product {n}")
    description = factory.Faker("sentence", nb_words=6)
    price = 10.0
    stock = 5
    category = factory.SubFactory(CategoryFactory)
