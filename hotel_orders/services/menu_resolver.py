"""Menu Snapshot Resolver - turns requested items into priced order items."""

import re
from decimal import Decimal
from typing import Protocol, Sequence

from hotel_orders.exceptions import InvalidInputError, NotFoundError
from hotel_orders.models.catalog import Menu
from hotel_orders.models.order import OrderItem
from hotel_orders.models.requests import OrderItemRequest

IDENTIFIER_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


def is_valid_identifier(value: str) -> bool:
    """Check that ``value`` has the shape of a stored id."""
    return bool(IDENTIFIER_PATTERN.match(value))


class ActiveMenuLookup(Protocol):
    async def find_active_menu_by_hotel(self, hotel_id: str) -> Menu | None: ...


class MenuSnapshotResolver:
    """
    Resolves requested items against the hotel's active menu.

    Names, descriptions, prices and images are copied so that later menu
    edits never change a placed order.
    """

    def __init__(self, menus: ActiveMenuLookup):
        self.menus = menus

    async def resolve(
        self,
        hotel_id: str,
        requested_items: Sequence[OrderItemRequest],
    ) -> list[OrderItem]:
        """
        Price every requested item.

        Raises:
            NotFoundError: the hotel has no active menu.
            InvalidInputError: an id is malformed, unknown or unavailable.
        """
        menu = await self.menus.find_active_menu_by_hotel(hotel_id)
        if menu is None:
            raise NotFoundError("Active menu not found for the selected hotel")

        return [self._snapshot(menu, requested) for requested in requested_items]

    def _snapshot(self, menu: Menu, requested: OrderItemRequest) -> OrderItem:
        if not is_valid_identifier(requested.id):
            raise InvalidInputError(f"Invalid menu item id: {requested.id}")

        menu_item = menu.find_item(requested.id)
        if menu_item is None or not menu_item.is_available:
            raise InvalidInputError(f"Menu item {requested.id} is unavailable")

        return OrderItem(
            id=menu_item.id,
            name=menu_item.name,
            description=menu_item.description,
            unit_price=menu_item.price,
            quantity=requested.quantity,
            line_total=menu_item.price * Decimal(requested.quantity),
            notes=requested.notes,
            images=[media.link for media in menu_item.media],
        )
