"""Dependency wiring for the API layer."""

from typing import Mapping

from fastapi import Header, HTTPException, Request, status
from pydantic import ValidationError

from hotel_orders.config import Settings
from hotel_orders.events.hub import EventBroadcastHub
from hotel_orders.models.actor import Actor
from hotel_orders.services import (
    MenuSnapshotResolver,
    OrderAuthorizationService,
    OrderLifecycle,
    OrderService,
    OrderTotalsCalculator,
)
from hotel_orders.state import HotelRepository, MenuRepository, OrderRepository, StateManager
from hotel_orders.state.workflow import get_transition_policy

ACTOR_ID_HEADER = "x-actor-id"
ACTOR_ROLE_HEADER = "x-actor-role"
ACTOR_NAME_HEADER = "x-actor-name"


def build_order_service(
    state_manager: StateManager,
    hub: EventBroadcastHub,
    settings: Settings,
) -> OrderService:
    """Assemble the order service and its collaborators."""
    authorization = OrderAuthorizationService(HotelRepository(state_manager))
    lifecycle = OrderLifecycle(
        resolver=MenuSnapshotResolver(MenuRepository(state_manager)),
        calculator=OrderTotalsCalculator(),
        authorization=authorization,
        policy=get_transition_policy(settings.transition_policy),
        default_fulfillment_type=settings.default_fulfillment_type,
    )
    return OrderService(
        orders=OrderRepository(state_manager),
        lifecycle=lifecycle,
        authorization=authorization,
        hub=hub,
        max_transition_retries=settings.max_transition_retries,
    )


def actor_from_headers(headers: Mapping[str, str]) -> Actor | None:
    """Read the caller forwarded by the authenticating gateway."""
    actor_id = headers.get(ACTOR_ID_HEADER)
    role = headers.get(ACTOR_ROLE_HEADER)
    if not actor_id or not role:
        return None

    try:
        return Actor(id=actor_id, role=role, name=headers.get(ACTOR_NAME_HEADER) or actor_id)
    except ValidationError:
        return None


async def get_order_service(request: Request) -> OrderService:
    """Get the order service built at startup."""
    return request.app.state.order_service


async def get_current_actor(
    x_actor_id: str | None = Header(default=None),
    x_actor_role: str | None = Header(default=None),
    x_actor_name: str | None = Header(default=None),
) -> Actor:
    """Require an authenticated caller."""
    actor = actor_from_headers(
        {
            ACTOR_ID_HEADER: x_actor_id or "",
            ACTOR_ROLE_HEADER: x_actor_role or "",
            ACTOR_NAME_HEADER: x_actor_name or "",
        }
    )
    if actor is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing or invalid actor headers",
        )
    return actor
