"""State management modules."""

from hotel_orders.state.catalog import HotelRepository, MenuRepository
from hotel_orders.state.manager import StateManager
from hotel_orders.state.orders import OrderRepository

__all__ = ["StateManager", "OrderRepository", "MenuRepository", "HotelRepository"]
