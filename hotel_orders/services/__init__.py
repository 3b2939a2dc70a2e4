"""Order domain services."""

from hotel_orders.services.authorization import OrderAuthorizationService
from hotel_orders.services.lifecycle import OrderLifecycle
from hotel_orders.services.menu_resolver import MenuSnapshotResolver
from hotel_orders.services.order_service import OrderService
from hotel_orders.services.totals import OrderTotals, OrderTotalsCalculator

__all__ = [
    "MenuSnapshotResolver",
    "OrderTotals",
    "OrderTotalsCalculator",
    "OrderAuthorizationService",
    "OrderLifecycle",
    "OrderService",
]
