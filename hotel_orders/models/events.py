"""Events published to live order streams."""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter

from hotel_orders.models.order import (
    FulfillmentType,
    Order,
    OrderStatus,
    PaymentStatus,
    StatusTimelineEntry,
    utc_now,
)


class BaseOrderEvent(BaseModel):
    """Fields shared by every order event."""

    order_id: str
    status: OrderStatus
    status_timeline: list[StatusTimelineEntry]
    latest_update: StatusTimelineEntry | None = None
    total_amount: Decimal
    payment_status: PaymentStatus
    fulfillment_type: FulfillmentType
    estimated_ready_time: datetime | None = None
    estimated_delivery_time: datetime | None = None
    updated_at: datetime = Field(default_factory=utc_now)


class OrderCreatedEvent(BaseOrderEvent):
    """Order was placed."""

    type: Literal["created"] = "created"


class OrderStatusUpdateEvent(BaseOrderEvent):
    """Order moved to a new status."""

    type: Literal["status-update"] = "status-update"


class OrderSnapshotEvent(BaseOrderEvent):
    """Current state, sent first to every new subscriber."""

    type: Literal["snapshot"] = "snapshot"


OrderEvent = Annotated[
    Union[OrderCreatedEvent, OrderStatusUpdateEvent, OrderSnapshotEvent],
    Field(discriminator="type"),
]
OrderEventType = Literal["created", "status-update", "snapshot"]

order_event_adapter = TypeAdapter(OrderEvent)

_EVENT_CLASSES: dict[str, type[BaseOrderEvent]] = {
    "created": OrderCreatedEvent,
    "status-update": OrderStatusUpdateEvent,
    "snapshot": OrderSnapshotEvent,
}


def build_order_event(order: Order, event_type: OrderEventType) -> BaseOrderEvent:
    """Summarize ``order`` as an event of the given type."""
    if order.id is None:
        raise ValueError("Cannot build an event for an unsaved order")

    event_cls = _EVENT_CLASSES[event_type]
    return event_cls(
        order_id=order.id,
        status=order.status,
        status_timeline=list(order.status_timeline),
        latest_update=order.latest_update,
        total_amount=order.total_amount,
        payment_status=order.payment_status,
        fulfillment_type=order.fulfillment_type,
        estimated_ready_time=order.estimated_ready_time,
        estimated_delivery_time=order.estimated_delivery_time,
    )
