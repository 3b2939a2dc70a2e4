"""Tests for order view and manage permissions."""

from typing import Callable

import pytest

from hotel_orders.models.actor import Actor
from hotel_orders.models.order import Order
from hotel_orders.services.authorization import OrderAuthorizationService
from hotel_orders.state import HotelRepository, StateManager


@pytest.fixture
def authorization(seeded_state: StateManager) -> OrderAuthorizationService:
    return OrderAuthorizationService(HotelRepository(seeded_state))


@pytest.mark.asyncio
async def test_view_permissions(
    authorization: OrderAuthorizationService,
    make_order: Callable[..., Order],
    customer: Actor,
    other_customer: Actor,
    owner: Actor,
    other_owner: Actor,
    admin: Actor,
) -> None:
    """Test who may view an order placed by cust-1 at H1."""
    order = make_order()

    assert await authorization.can_view(order, customer) is True
    assert await authorization.can_view(order, owner) is True
    assert await authorization.can_view(order, admin) is True
    assert await authorization.can_view(order, other_customer) is False
    assert await authorization.can_view(order, other_owner) is False


@pytest.mark.asyncio
async def test_manage_permissions(
    authorization: OrderAuthorizationService,
    make_order: Callable[..., Order],
    customer: Actor,
    owner: Actor,
    other_owner: Actor,
    admin: Actor,
) -> None:
    """Test who may change an order's status."""
    order = make_order()

    assert await authorization.can_manage(order, owner) is True
    assert await authorization.can_manage(order, admin) is True
    assert await authorization.can_manage(order, customer) is False
    assert await authorization.can_manage(order, other_owner) is False


@pytest.mark.asyncio
async def test_unknown_hotel_grants_owner_nothing(
    authorization: OrderAuthorizationService,
    make_order: Callable[..., Order],
    owner: Actor,
) -> None:
    """Test that an order at an unknown hotel is not manageable by owners."""
    order = make_order(hotel_id="H404")

    assert await authorization.can_view(order, owner) is False
    assert await authorization.can_manage(order, owner) is False
