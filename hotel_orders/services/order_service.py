"""Order Service - the create, update and stream use cases."""

from hotel_orders.events.hub import EventBroadcastHub, Subscription
from hotel_orders.exceptions import (
    ConcurrentUpdateError,
    ForbiddenError,
    InvalidInputError,
    NotFoundError,
)
from hotel_orders.models.actor import Actor, ActorRole
from hotel_orders.models.events import build_order_event
from hotel_orders.models.order import Order
from hotel_orders.models.requests import CreateOrderRequest, UpdateOrderStatusRequest
from hotel_orders.services.authorization import OrderAuthorizationService
from hotel_orders.services.lifecycle import OrderLifecycle
from hotel_orders.services.menu_resolver import is_valid_identifier
from hotel_orders.state.orders import OrderRepository
from hotel_orders.utils.logging import OrderLogger
from hotel_orders.utils.tracing import OperationTracer


class OrderService:
    """
    Orchestrates the order use cases.

    Responsibilities:
    - Place orders and announce them on the hub
    - Authorize reads and status updates
    - Persist transitions with an optimistic version check
    - Open live streams seeded with a snapshot
    """

    def __init__(
        self,
        orders: OrderRepository,
        lifecycle: OrderLifecycle,
        authorization: OrderAuthorizationService,
        hub: EventBroadcastHub,
        max_transition_retries: int = 3,
    ):
        self.orders = orders
        self.lifecycle = lifecycle
        self.authorization = authorization
        self.hub = hub
        self.max_transition_retries = max_transition_retries
        self.logger = OrderLogger("order_service")

    async def create_order(self, actor: Actor, request: CreateOrderRequest) -> Order:
        """Place an order for a customer and publish a ``created`` event."""
        if actor.role != ActorRole.CUSTOMER:
            raise ForbiddenError("Only customers can place orders")

        tracer = OperationTracer("create_order")

        with tracer.trace_step("build", hotel_id=request.hotel_id):
            order = await self.lifecycle.create(actor, request)

        with tracer.trace_step("insert"):
            order = await self.orders.insert(order)

        self.hub.publish(order.id, build_order_event(order, "created"))

        self.logger.log_created(
            order_id=order.id,
            hotel_id=order.hotel_id,
            customer_id=order.customer_id,
            item_count=len(order.items),
            total_amount=str(order.total_amount),
            trace_id=tracer.trace_id,
            duration_ms=round(tracer.elapsed_ms, 3),
            steps=tracer.step_durations(),
        )
        return order

    async def list_customer_orders(self, actor: Actor) -> list[Order]:
        """The actor's own orders, newest first."""
        if actor.role != ActorRole.CUSTOMER:
            raise ForbiddenError("Only customers have order history")

        return await self.orders.find_by_customer(actor.id)

    async def get_order(self, order_id: str, actor: Actor) -> Order:
        """Load an order the actor is allowed to view."""
        order = await self._load(order_id)

        if not await self.authorization.can_view(order, actor):
            self.logger.log_denied("view", order_id, actor.id)
            raise ForbiddenError("You are not allowed to access this order")

        return order

    async def update_order_status(
        self,
        order_id: str,
        actor: Actor,
        request: UpdateOrderStatusRequest,
    ) -> Order:
        """
        Apply a status transition and publish a ``status-update`` event.

        A save that loses a race is retried on a freshly loaded order, so
        concurrent transitions are all recorded.

        Raises:
            NotFoundError: unknown order.
            ForbiddenError: the actor may not manage the order.
            ConcurrentUpdateError: every retry lost a race.
        """
        tracer = OperationTracer("update_order_status")
        last_error: ConcurrentUpdateError | None = None

        for attempt in range(1, self.max_transition_retries + 1):
            with tracer.trace_step("load", attempt=attempt):
                order = await self._load(order_id)
            previous_status = order.status

            try:
                order = await self.lifecycle.transition_status(
                    order,
                    actor,
                    request.status,
                    notes=request.notes,
                    estimated_ready_time=request.estimated_ready_time,
                    estimated_delivery_time=request.estimated_delivery_time,
                )
            except ForbiddenError:
                self.logger.log_denied("manage", order_id, actor.id)
                raise

            try:
                with tracer.trace_step("save", attempt=attempt):
                    order = await self.orders.save(order)
            except ConcurrentUpdateError as e:
                last_error = e
                continue

            self.hub.publish(order.id, build_order_event(order, "status-update"))
            self.logger.log_transition(
                order_id=order.id,
                from_status=previous_status.value,
                to_status=order.status.value,
                actor_id=actor.id,
                attempt=attempt,
                trace_id=tracer.trace_id,
                duration_ms=round(tracer.elapsed_ms, 3),
                steps=tracer.step_durations(),
            )
            return order

        raise last_error

    async def open_stream(self, order_id: str, actor: Actor) -> Subscription:
        """
        Subscribe to an order's events, starting with a fresh snapshot.

        The subscription is registered before the snapshot is read, so an
        update that lands in between is either in the snapshot or delivered
        after it.
        """
        await self.get_order(order_id, actor)

        subscription = self.hub.subscribe(order_id)
        try:
            order = await self._load(order_id)
        except BaseException:
            subscription.close()
            raise

        subscription.prime(build_order_event(order, "snapshot"))
        return subscription

    async def _load(self, order_id: str) -> Order:
        if not is_valid_identifier(order_id):
            raise InvalidInputError(f"Invalid order id: {order_id}")

        order = await self.orders.find_by_id(order_id)
        if order is None:
            raise NotFoundError("Order not found")
        return order
