"""Order-related data models."""

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

PLACED_NOTE = "Order placed by customer"


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class OrderStatus(str, Enum):
    """Order status progression."""

    PENDING = "pending"
    CONFIRMED = "confirmed"
    PREPARING = "preparing"
    COOKING = "cooking"
    READY_FOR_PICKUP = "ready_for_pickup"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
    """Payment state; recorded but never transitioned here."""

    PENDING = "pending"
    PAID = "paid"
    REFUNDED = "refunded"


class FulfillmentType(str, Enum):
    """How the order reaches the customer."""

    DELIVERY = "delivery"
    PICKUP = "pickup"
    DINE_IN = "dine_in"


class OrderItem(BaseModel):
    """Priced line item, copied from the menu when the order is placed."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str | None = None
    unit_price: Decimal = Field(ge=0)
    quantity: int = Field(ge=1)
    line_total: Decimal = Field(ge=0)
    notes: str | None = None
    images: list[str] = Field(default_factory=list)


class StatusTimelineEntry(BaseModel):
    """One step of the order's audit trail."""

    model_config = ConfigDict(frozen=True)

    status: OrderStatus
    timestamp: datetime = Field(default_factory=utc_now)
    notes: str | None = None
    updated_by: str | None = None


class GeoPoint(BaseModel):
    """GeoJSON point; coordinates are ``[longitude, latitude]``."""

    type: Literal["Point"] = "Point"
    coordinates: tuple[float, float]


class DeliveryAddress(BaseModel):
    """Where a delivery order is taken."""

    street: str
    city: str
    instructions: str | None = None
    location: GeoPoint | None = None


class Order(BaseModel):
    """Complete order details."""

    id: str | None = None
    hotel_id: str
    customer_id: str

    # Customer snapshot
    customer_name: str
    customer_phone: str

    # Items
    items: list[OrderItem] = Field(default_factory=list)

    # Pricing
    subtotal: Decimal = Field(default=Decimal("0"), ge=0)
    total_amount: Decimal = Field(default=Decimal("0"), ge=0)

    # Lifecycle
    status: OrderStatus = OrderStatus.PENDING
    status_timeline: list[StatusTimelineEntry] = Field(default_factory=list)
    payment_status: PaymentStatus = PaymentStatus.PENDING

    # Fulfillment
    fulfillment_type: FulfillmentType = FulfillmentType.DELIVERY
    delivery_address: DeliveryAddress | None = None
    estimated_ready_time: datetime | None = None
    estimated_delivery_time: datetime | None = None

    # Store-managed
    created_at: datetime | None = None
    updated_at: datetime | None = None
    version: int = 0

    @model_validator(mode="after")
    def check_invariants(self) -> "Order":
        """Reject documents that break the timeline or pricing invariants."""
        if not self.status_timeline:
            raise ValueError("status_timeline must not be empty")
        if self.status_timeline[-1].status != self.status:
            raise ValueError("last status_timeline entry must match status")
        if self.total_amount < self.subtotal:
            raise ValueError("total_amount must not be lower than subtotal")
        if self.fulfillment_type == FulfillmentType.DELIVERY and self.delivery_address is None:
            raise ValueError("delivery orders require a delivery_address")
        if self.fulfillment_type != FulfillmentType.DELIVERY and self.delivery_address is not None:
            raise ValueError("only delivery orders carry a delivery_address")
        return self

    @property
    def latest_update(self) -> StatusTimelineEntry:
        """The most recent timeline entry."""
        return self.status_timeline[-1]

    def apply_status(
        self,
        status: OrderStatus,
        notes: str | None = None,
        updated_by: str | None = None,
        estimated_ready_time: datetime | None = None,
        estimated_delivery_time: datetime | None = None,
    ) -> StatusTimelineEntry:
        """Append a timeline entry and move the order to ``status``.

        Estimates are only overwritten when given; they are never cleared.
        """
        entry = StatusTimelineEntry(status=status, notes=notes, updated_by=updated_by)
        self.status_timeline.append(entry)
        self.status = status

        if estimated_ready_time is not None:
            self.estimated_ready_time = estimated_ready_time
        if estimated_delivery_time is not None:
            self.estimated_delivery_time = estimated_delivery_time

        return entry
