"""Read access to hotels and menus managed elsewhere in the platform."""

from hotel_orders.models.catalog import Hotel, Menu
from hotel_orders.state.manager import StateManager
from hotel_orders.utils.logging import get_logger

logger = get_logger(__name__)


class MenuRepository:
    """Looks up the active menu of a hotel."""

    def __init__(self, state_manager: StateManager):
        self.state = state_manager

    def _active_menu_key(self, hotel_id: str) -> str:
        return f"menu:active:{hotel_id}"

    async def find_active_menu_by_hotel(self, hotel_id: str) -> Menu | None:
        """Return the hotel's active menu, if it has one."""
        data = await self.state.get(self._active_menu_key(hotel_id))

        if not data:
            return None

        menu = Menu.model_validate(data)
        return menu if menu.is_active else None

    async def save_active_menu(self, menu: Menu) -> None:
        """Publish ``menu`` as the hotel's active menu (used by seeding)."""
        active = menu.model_copy(update={"is_active": True})
        await self.state.set(self._active_menu_key(menu.hotel_id), active.model_dump(mode="json"))
        logger.info("active_menu_saved", hotel_id=menu.hotel_id, menu_id=menu.id)


class HotelRepository:
    """Resolves hotel ownership."""

    def __init__(self, state_manager: StateManager):
        self.state = state_manager

    def _hotel_key(self, hotel_id: str) -> str:
        return f"hotel:{hotel_id}"

    async def find_hotel_by_id_and_owner(self, hotel_id: str, owner_id: str) -> Hotel | None:
        """Return the hotel only when ``owner_id`` owns it."""
        data = await self.state.get(self._hotel_key(hotel_id))

        if not data:
            return None

        hotel = Hotel.model_validate(data)
        return hotel if hotel.owner_id == owner_id else None

    async def save_hotel(self, hotel: Hotel) -> None:
        """Store a hotel record (used by seeding)."""
        await self.state.set(self._hotel_key(hotel.id), hotel.model_dump(mode="json"))
        logger.info("hotel_saved", hotel_id=hotel.id, owner_id=hotel.owner_id)
