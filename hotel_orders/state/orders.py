"""Order persistence."""

from typing import Any
from uuid import uuid4

from hotel_orders.exceptions import ConcurrentUpdateError, NotFoundError
from hotel_orders.models.order import Order, utc_now
from hotel_orders.state.manager import StaleDocumentError, StateManager
from hotel_orders.utils.logging import get_logger

logger = get_logger(__name__)


class OrderRepository:
    """Stores orders as whole JSON documents.

    Each save rewrites the full document, guarded by the ``version`` field.
    """

    def __init__(self, state_manager: StateManager):
        self.state = state_manager

    def _order_key(self, order_id: str) -> str:
        """Generate Redis key for an order."""
        return f"order:{order_id}"

    def _customer_index_key(self, customer_id: str) -> str:
        """Generate Redis key for a customer's order index."""
        return f"orders:customer:{customer_id}"

    async def insert(self, order: Order) -> Order:
        """Assign id and timestamps, then store a new order."""
        now = utc_now()
        stored = order.model_copy(
            update={
                "id": uuid4().hex,
                "created_at": now,
                "updated_at": now,
                "version": 1,
            }
        )

        await self.state.set(self._order_key(stored.id), stored.model_dump(mode="json"))
        await self.state.zadd(
            self._customer_index_key(stored.customer_id),
            {stored.id: now.timestamp()},
        )

        logger.debug("order_inserted", order_id=stored.id, customer_id=stored.customer_id)
        return stored

    async def find_by_id(self, order_id: str) -> Order | None:
        """Retrieve an order by ID."""
        data = await self.state.get(self._order_key(order_id))

        if not data:
            return None

        return Order.model_validate(data)

    async def find_by_customer(self, customer_id: str) -> list[Order]:
        """All orders placed by a customer, newest first."""
        order_ids = await self.state.zrange(
            self._customer_index_key(customer_id), 0, -1, desc=True
        )
        documents = await self.state.mget([self._order_key(order_id) for order_id in order_ids])

        return [Order.model_validate(data) for data in documents if data]

    async def save(self, order: Order) -> Order:
        """
        Replace the stored document with ``order``.

        Raises:
            NotFoundError: the order was never inserted.
            ConcurrentUpdateError: another save landed since ``order`` was read.
        """
        if order.id is None:
            raise NotFoundError("Cannot save an order that was never inserted")

        expected_version = order.version
        stored = order.model_copy(
            update={"updated_at": utc_now(), "version": expected_version + 1}
        )

        def _unchanged(current: dict[str, Any] | None) -> bool:
            if current is None:
                raise NotFoundError("Order not found")
            return current.get("version") == expected_version

        try:
            await self.state.compare_and_set(
                self._order_key(order.id),
                stored.model_dump(mode="json"),
                _unchanged,
            )
        except StaleDocumentError as e:
            raise ConcurrentUpdateError(order.id, expected_version) from e

        logger.debug("order_saved", order_id=order.id, version=stored.version)
        return stored
