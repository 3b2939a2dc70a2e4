"""Pytest configuration and fixtures."""

import asyncio
from decimal import Decimal
from typing import AsyncGenerator, Callable

import fakeredis
import fakeredis.aioredis
import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from hotel_orders.api.dependencies import build_order_service
from hotel_orders.config import Settings
from hotel_orders.events.hub import EventBroadcastHub
from hotel_orders.main import create_app
from hotel_orders.models.actor import Actor, ActorRole
from hotel_orders.models.catalog import Hotel, Media, Menu, MenuCategory, MenuItem
from hotel_orders.models.order import (
    DeliveryAddress,
    FulfillmentType,
    Order,
    OrderItem,
    OrderStatus,
    StatusTimelineEntry,
)
from hotel_orders.services.order_service import OrderService
from hotel_orders.state import HotelRepository, MenuRepository, OrderRepository, StateManager

HOTEL_ID = "H1"
OTHER_HOTEL_ID = "H2"
OWNER_ID = "owner-1"
OTHER_OWNER_ID = "owner-2"


def make_state_manager(server: fakeredis.FakeServer) -> StateManager:
    """A state manager backed by an in-process fake Redis."""
    return StateManager(
        redis_url="redis://fake",
        client_factory=lambda: fakeredis.aioredis.FakeRedis(server=server, decode_responses=True),
    )


def build_menu(hotel_id: str = HOTEL_ID) -> Menu:
    """Active menu with one available (I1, 10.00) and one unavailable (I2) item."""
    return Menu(
        id="M1",
        hotel_id=hotel_id,
        name="Main Menu",
        is_active=True,
        categories=[
            MenuCategory(
                id="C1",
                name="Mains",
                items=[
                    MenuItem(
                        id="I1",
                        name="Margherita",
                        description="Tomato, mozzarella, basil",
                        price=Decimal("10.00"),
                        media=[Media(link="https://img.example/i1.jpg", public_id="i1")],
                    ),
                    MenuItem(id="I2", name="Calzone", price=Decimal("12.00"), is_available=False),
                ],
            ),
            MenuCategory(
                id="C2",
                name="Drinks",
                items=[MenuItem(id="I3", name="Lemonade", price=Decimal("3.35"))],
            ),
        ],
    )


async def seed_catalog(state_manager: StateManager) -> None:
    """Store hotels H1 (owner-1), H2 (owner-2) and H1's active menu."""
    hotels = HotelRepository(state_manager)
    await hotels.save_hotel(Hotel(id=HOTEL_ID, name="Hotel One", owner_id=OWNER_ID))
    await hotels.save_hotel(Hotel(id=OTHER_HOTEL_ID, name="Hotel Two", owner_id=OTHER_OWNER_ID))
    await MenuRepository(state_manager).save_active_menu(build_menu())


def actor_headers(actor: Actor) -> dict[str, str]:
    return {
        "X-Actor-Id": actor.id,
        "X-Actor-Role": actor.role.value,
        "X-Actor-Name": actor.name,
    }


@pytest.fixture
def settings() -> Settings:
    """Settings independent of the developer's environment."""
    return Settings(
        _env_file=None,
        redis_url="redis://fake",
        log_format="text",
        subscriber_queue_size=10,
        stream_heartbeat_seconds=0.05,
    )


@pytest.fixture
def redis_server() -> fakeredis.FakeServer:
    return fakeredis.FakeServer()


@pytest_asyncio.fixture
async def state_manager(
    redis_server: fakeredis.FakeServer,
) -> AsyncGenerator[StateManager, None]:
    """Create a test state manager."""
    manager = make_state_manager(redis_server)
    await manager.connect()
    yield manager
    await manager.disconnect()


@pytest_asyncio.fixture
async def seeded_state(state_manager: StateManager) -> StateManager:
    await seed_catalog(state_manager)
    return state_manager


@pytest.fixture
def hub() -> EventBroadcastHub:
    return EventBroadcastHub(queue_size=10)


@pytest.fixture
def order_repository(state_manager: StateManager) -> OrderRepository:
    return OrderRepository(state_manager)


@pytest.fixture
def order_service(
    seeded_state: StateManager,
    hub: EventBroadcastHub,
    settings: Settings,
) -> OrderService:
    return build_order_service(seeded_state, hub, settings)


@pytest_asyncio.fixture
async def test_client(
    seeded_state: StateManager,
    hub: EventBroadcastHub,
    settings: Settings,
) -> AsyncGenerator[AsyncClient, None]:
    """Create a test HTTP client."""
    app = create_app(settings=settings, state_manager=seeded_state, hub=hub)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


# Sample data fixtures


@pytest.fixture
def customer() -> Actor:
    return Actor(id="cust-1", role=ActorRole.CUSTOMER, name="Asha Customer")


@pytest.fixture
def other_customer() -> Actor:
    return Actor(id="cust-2", role=ActorRole.CUSTOMER, name="Ben Customer")


@pytest.fixture
def owner() -> Actor:
    return Actor(id=OWNER_ID, role=ActorRole.HOTEL_OWNER, name="Olga Owner")


@pytest.fixture
def other_owner() -> Actor:
    return Actor(id=OTHER_OWNER_ID, role=ActorRole.HOTEL_OWNER, name="Omar Owner")


@pytest.fixture
def admin() -> Actor:
    return Actor(id="admin-1", role=ActorRole.ADMIN, name="Ada Admin")


@pytest.fixture
def make_order() -> Callable[..., Order]:
    """Build an order as the store would hold it."""

    def _make(
        order_id: str = "O1",
        customer_id: str = "cust-1",
        hotel_id: str = HOTEL_ID,
        status: OrderStatus = OrderStatus.PENDING,
    ) -> Order:
        item = OrderItem(
            id="I1",
            name="Margherita",
            unit_price=Decimal("10.00"),
            quantity=2,
            line_total=Decimal("20.00"),
        )
        return Order(
            id=order_id,
            hotel_id=hotel_id,
            customer_id=customer_id,
            customer_name="Asha Customer",
            customer_phone="+15550100",
            items=[item],
            subtotal=Decimal("20.00"),
            total_amount=Decimal("20.00"),
            status=status,
            status_timeline=[StatusTimelineEntry(status=status)],
            fulfillment_type=FulfillmentType.DELIVERY,
            delivery_address=DeliveryAddress(street="1 Main St", city="Springfield"),
            version=1,
        )

    return _make


@pytest.fixture
def auth_headers() -> Callable[[Actor], dict[str, str]]:
    return actor_headers


@pytest.fixture
def live_app(settings: Settings, redis_server: fakeredis.FakeServer) -> FastAPI:
    """App whose own lifespan connects it, for use with a synchronous TestClient."""

    async def _seed() -> None:
        manager = make_state_manager(redis_server)
        await manager.connect()
        await seed_catalog(manager)
        await manager.disconnect()

    asyncio.run(_seed())
    return create_app(settings=settings, state_manager=make_state_manager(redis_server))
