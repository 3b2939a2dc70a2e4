"""Request payloads accepted by the order service."""

from datetime import datetime

from pydantic import BaseModel, Field

from hotel_orders.models.order import FulfillmentType, OrderStatus


class OrderItemRequest(BaseModel):
    """A menu item the customer wants, by reference."""

    id: str = Field(min_length=1)
    quantity: int = Field(gt=0)
    notes: str | None = None


class DeliveryAddressRequest(BaseModel):
    """Delivery address as typed by the customer."""

    street: str = Field(min_length=1)
    city: str = Field(min_length=1)
    instructions: str | None = None
    coordinates: tuple[float, float] | None = None


class CreateOrderRequest(BaseModel):
    """Request to place an order."""

    hotel_id: str = Field(min_length=1)
    items: list[OrderItemRequest] = Field(min_length=1)
    fulfillment_type: FulfillmentType | None = None
    delivery_address: DeliveryAddressRequest | None = None
    customer_phone: str = Field(min_length=1)


class UpdateOrderStatusRequest(BaseModel):
    """Request to move an order to a new status."""

    status: OrderStatus
    notes: str | None = None
    estimated_ready_time: datetime | None = None
    estimated_delivery_time: datetime | None = None
