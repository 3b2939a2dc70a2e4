"""Data models for the order service."""

from hotel_orders.models.actor import Actor, ActorRole
from hotel_orders.models.catalog import Hotel, Media, Menu, MenuCategory, MenuItem
from hotel_orders.models.events import (
    BaseOrderEvent,
    OrderCreatedEvent,
    OrderEvent,
    OrderSnapshotEvent,
    OrderStatusUpdateEvent,
    build_order_event,
)
from hotel_orders.models.order import (
    DeliveryAddress,
    FulfillmentType,
    GeoPoint,
    Order,
    OrderItem,
    OrderStatus,
    PaymentStatus,
    StatusTimelineEntry,
)
from hotel_orders.models.requests import (
    CreateOrderRequest,
    DeliveryAddressRequest,
    OrderItemRequest,
    UpdateOrderStatusRequest,
)

__all__ = [
    # Actor
    "Actor",
    "ActorRole",
    # Catalog
    "Hotel",
    "Media",
    "Menu",
    "MenuCategory",
    "MenuItem",
    # Events
    "BaseOrderEvent",
    "OrderCreatedEvent",
    "OrderEvent",
    "OrderSnapshotEvent",
    "OrderStatusUpdateEvent",
    "build_order_event",
    # Order
    "DeliveryAddress",
    "FulfillmentType",
    "GeoPoint",
    "Order",
    "OrderItem",
    "OrderStatus",
    "PaymentStatus",
    "StatusTimelineEntry",
    # Requests
    "CreateOrderRequest",
    "DeliveryAddressRequest",
    "OrderItemRequest",
    "UpdateOrderStatusRequest",
]
