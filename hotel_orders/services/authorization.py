"""Order Authorization Service."""

from typing import Protocol

from hotel_orders.models.actor import Actor, ActorRole
from hotel_orders.models.catalog import Hotel
from hotel_orders.models.order import Order


class HotelOwnershipLookup(Protocol):
    async def find_hotel_by_id_and_owner(self, hotel_id: str, owner_id: str) -> Hotel | None: ...


class OrderAuthorizationService:
    """Decides who may view or manage an order.

    Only answers yes/no; callers turn a refusal into ``ForbiddenError``.
    """

    def __init__(self, hotels: HotelOwnershipLookup):
        self.hotels = hotels

    async def can_view(self, order: Order, actor: Actor) -> bool:
        """Customer of the order, an admin, or the hotel's owner."""
        if order.customer_id == actor.id:
            return True

        if actor.is_admin:
            return True

        return await self._is_hotel_owner(order.hotel_id, actor.id)

    async def can_manage(self, order: Order, actor: Actor) -> bool:
        """An admin, or a hotel owner who owns the order's hotel."""
        if actor.is_admin:
            return True

        if actor.role == ActorRole.HOTEL_OWNER:
            return await self._is_hotel_owner(order.hotel_id, actor.id)

        return False

    async def _is_hotel_owner(self, hotel_id: str, owner_id: str) -> bool:
        hotel = await self.hotels.find_hotel_by_id_and_owner(hotel_id, owner_id)
        return hotel is not None
