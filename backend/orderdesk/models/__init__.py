from orderdesk.models.catalog import Category, Product, UnitMeasurement
from orderdesk.models.company import Area, Company
from orderdesk.models.order import ORDER_STATUSES, Order, OrderItem
from orderdesk.models.supplier import Purchase, PurchaseItem, Supplier
from orderdesk.models.user import USER_ROLES, User

__all__ = [
    "ORDER_STATUSES",
    "USER_ROLES",
    "Area",
    "Category",
    "Company",
    "Order",
    "OrderItem",
    "Product",
    "Purchase",
    "PurchaseItem",
    "Supplier",
    "UnitMeasurement",
    "User",
]
