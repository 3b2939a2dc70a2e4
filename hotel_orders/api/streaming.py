"""Live order streams over Server-Sent Events and WebSocket."""

import asyncio
import json
from typing import AsyncIterator

import anyio
from fastapi import WebSocket, WebSocketDisconnect

from hotel_orders.api.dependencies import actor_from_headers
from hotel_orders.events.hub import Subscription
from hotel_orders.exceptions import OrderError
from hotel_orders.models.events import BaseOrderEvent
from hotel_orders.services.order_service import OrderService
from hotel_orders.utils.logging import get_logger

logger = get_logger(__name__)

SSE_KEEPALIVE = ": keep-alive\n\n"


def format_sse(event: BaseOrderEvent) -> str:
    """Render an event as one SSE frame."""
    return f"event: {event.type}\nid: {event.order_id}\ndata: {event.model_dump_json()}\n\n"


async def sse_event_stream(
    subscription: Subscription,
    heartbeat_seconds: float,
) -> AsyncIterator[str]:
    """
    Yield SSE frames until the subscription ends.

    A keep-alive comment is sent whenever no event arrives for
    ``heartbeat_seconds``. The subscription is released however the
    generator exits (client disconnect cancels it).
    """
    try:
        while True:
            try:
                event = await asyncio.wait_for(subscription.__anext__(), heartbeat_seconds)
            except asyncio.TimeoutError:
                yield SSE_KEEPALIVE
                continue
            except StopAsyncIteration:
                break
            yield format_sse(event)
    finally:
        subscription.close()
        logger.info("sse_stream_closed", order_id=subscription.order_id)


class OrderStreamHandler:
    """Serves one WebSocket connection for an order's events."""

    def __init__(self, websocket: WebSocket, service: OrderService):
        self.websocket = websocket
        self.service = service

    async def run(self, order_id: str) -> None:
        """Authorize, subscribe, then forward events until either side stops."""
        actor = actor_from_headers(self.websocket.headers)
        if actor is None:
            await self.websocket.close(code=1008, reason="Missing or invalid actor headers")
            return

        try:
            subscription = await self.service.open_stream(order_id, actor)
        except OrderError as e:
            logger.info("websocket_stream_refused", order_id=order_id, error=e.error_code)
            await self.websocket.close(code=1008, reason=e.message)
            return

        server_closed = False
        try:
            await self.websocket.accept()
            logger.info("websocket_connected", order_id=order_id, actor_id=actor.id)

            async with anyio.create_task_group() as task_group:

                async def forward() -> None:
                    nonlocal server_closed
                    server_closed = await self._forward(subscription)
                    task_group.cancel_scope.cancel()

                async def listen() -> None:
                    await self._listen()
                    task_group.cancel_scope.cancel()

                task_group.start_soon(forward)
                task_group.start_soon(listen)
        except Exception as e:
            logger.error("websocket_error", order_id=order_id, error=str(e))
            raise
        finally:
            subscription.close()
            logger.info("websocket_disconnected", order_id=order_id)

        if server_closed:
            # Server side ended the stream (shutdown or slow consumer)
            await self._close_quietly()

    async def _forward(self, subscription: Subscription) -> bool:
        """Send events until the subscription ends; False if the client left first."""
        try:
            async for event in subscription:
                await self.websocket.send_text(event.model_dump_json())
        except WebSocketDisconnect:
            return False
        return True

    async def _listen(self) -> None:
        try:
            while True:
                data = await self.websocket.receive_text()
                try:
                    message = json.loads(data)
                except json.JSONDecodeError:
                    continue
                if isinstance(message, dict) and message.get("type") == "ping":
                    await self.websocket.send_json({"type": "pong"})
        except WebSocketDisconnect:
            return

    async def _close_quietly(self) -> None:
        try:
            await self.websocket.close()
        except RuntimeError:
            # Already closed by the client
            pass
