"""API routes for the order service."""

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import StreamingResponse

from hotel_orders.api.dependencies import get_current_actor, get_order_service
from hotel_orders.api.streaming import sse_event_stream
from hotel_orders.models.actor import Actor
from hotel_orders.models.order import Order
from hotel_orders.models.requests import CreateOrderRequest, UpdateOrderStatusRequest
from hotel_orders.services.order_service import OrderService
from hotel_orders.utils.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.post(
    "/orders",
    response_model=Order,
    status_code=status.HTTP_201_CREATED,
)
async def create_order(
    request: CreateOrderRequest,
    actor: Actor = Depends(get_current_actor),
    service: OrderService = Depends(get_order_service),
) -> Order:
    """
    Place an order.

    Items are priced from the hotel's active menu at the time of the call.
    """
    return await service.create_order(actor, request)


@router.get("/orders/mine", response_model=list[Order])
async def list_my_orders(
    actor: Actor = Depends(get_current_actor),
    service: OrderService = Depends(get_order_service),
) -> list[Order]:
    """List the caller's orders, newest first."""
    return await service.list_customer_orders(actor)


@router.get("/orders/{order_id}", response_model=Order)
async def get_order(
    order_id: str,
    actor: Actor = Depends(get_current_actor),
    service: OrderService = Depends(get_order_service),
) -> Order:
    """Get order details."""
    return await service.get_order(order_id, actor)


@router.patch("/orders/{order_id}/status", response_model=Order)
async def update_order_status(
    order_id: str,
    request: UpdateOrderStatusRequest,
    actor: Actor = Depends(get_current_actor),
    service: OrderService = Depends(get_order_service),
) -> Order:
    """Move an order to a new status (hotel owner or admin)."""
    return await service.update_order_status(order_id, actor, request)


@router.get("/orders/{order_id}/events")
async def stream_order_events(
    order_id: str,
    http_request: Request,
    actor: Actor = Depends(get_current_actor),
    service: OrderService = Depends(get_order_service),
) -> StreamingResponse:
    """
    Stream live order events as Server-Sent Events.

    The first frame is a snapshot of the current order.
    """
    subscription = await service.open_stream(order_id, actor)
    settings = http_request.app.state.settings

    logger.info("sse_stream_opened", order_id=order_id, actor_id=actor.id)

    return StreamingResponse(
        sse_event_stream(subscription, settings.stream_heartbeat_seconds),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )
