"""Order aggregate creation and status transitions."""

from datetime import datetime

from hotel_orders.exceptions import ForbiddenError, InvalidInputError
from hotel_orders.models.actor import Actor
from hotel_orders.models.order import (
    PLACED_NOTE,
    DeliveryAddress,
    FulfillmentType,
    GeoPoint,
    Order,
    OrderStatus,
    PaymentStatus,
    StatusTimelineEntry,
)
from hotel_orders.models.requests import CreateOrderRequest, DeliveryAddressRequest
from hotel_orders.services.authorization import OrderAuthorizationService
from hotel_orders.services.menu_resolver import MenuSnapshotResolver
from hotel_orders.services.totals import OrderTotalsCalculator
from hotel_orders.state.workflow import PermissiveTransitionPolicy, TransitionPolicy


def build_delivery_address(address: DeliveryAddressRequest | None) -> DeliveryAddress | None:
    """Convert the request address, turning coordinates into a GeoJSON point."""
    if address is None:
        return None

    return DeliveryAddress(
        street=address.street,
        city=address.city,
        instructions=address.instructions,
        location=GeoPoint(coordinates=address.coordinates) if address.coordinates else None,
    )


class OrderLifecycle:
    """
    Builds new orders and applies status transitions.

    Neither operation persists anything; the caller saves the returned order.
    """

    def __init__(
        self,
        resolver: MenuSnapshotResolver,
        calculator: OrderTotalsCalculator,
        authorization: OrderAuthorizationService,
        policy: TransitionPolicy | None = None,
        default_fulfillment_type: FulfillmentType = FulfillmentType.DELIVERY,
    ):
        self.resolver = resolver
        self.calculator = calculator
        self.authorization = authorization
        self.policy = policy or PermissiveTransitionPolicy()
        self.default_fulfillment_type = FulfillmentType(default_fulfillment_type)

    async def create(self, customer: Actor, request: CreateOrderRequest) -> Order:
        """
        Build a pending order for ``customer``.

        Raises:
            NotFoundError: the hotel has no active menu.
            InvalidInputError: an item cannot be ordered, or a delivery order
                has no address.
        """
        items = await self.resolver.resolve(request.hotel_id, request.items)
        totals = self.calculator.totals(items)

        fulfillment_type = request.fulfillment_type or self.default_fulfillment_type
        if fulfillment_type == FulfillmentType.DELIVERY and request.delivery_address is None:
            raise InvalidInputError("Delivery address is required for delivery orders")

        return Order(
            hotel_id=request.hotel_id,
            customer_id=customer.id,
            customer_name=customer.name,
            customer_phone=request.customer_phone,
            items=items,
            subtotal=totals.subtotal,
            total_amount=totals.total_amount,
            status=OrderStatus.PENDING,
            status_timeline=[StatusTimelineEntry(status=OrderStatus.PENDING, notes=PLACED_NOTE)],
            payment_status=PaymentStatus.PENDING,
            fulfillment_type=fulfillment_type,
            delivery_address=(
                build_delivery_address(request.delivery_address)
                if fulfillment_type == FulfillmentType.DELIVERY
                else None
            ),
        )

    async def transition_status(
        self,
        order: Order,
        actor: Actor,
        new_status: OrderStatus,
        notes: str | None = None,
        estimated_ready_time: datetime | None = None,
        estimated_delivery_time: datetime | None = None,
    ) -> Order:
        """
        Move ``order`` to ``new_status`` on behalf of ``actor``.

        Raises:
            ForbiddenError: the actor may not manage the order.
            InvalidInputError: the configured policy rejects the transition.
        """
        if not await self.authorization.can_manage(order, actor):
            raise ForbiddenError("You are not allowed to update this order")

        if not self.policy.can_transition(order.status, new_status):
            raise InvalidInputError(
                f"Cannot move order from {order.status.value} to {new_status.value}"
            )

        order.apply_status(
            new_status,
            notes=notes,
            updated_by=actor.id,
            estimated_ready_time=estimated_ready_time,
            estimated_delivery_time=estimated_delivery_time,
        )
        return order
