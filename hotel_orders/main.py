"""FastAPI application entry point."""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import AsyncGenerator
from uuid import uuid4

from fastapi import FastAPI, Request, WebSocket
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hotel_orders.api.dependencies import build_order_service
from hotel_orders.api.routes import router
from hotel_orders.api.streaming import OrderStreamHandler
from hotel_orders.config import Settings, get_settings
from hotel_orders.events.hub import EventBroadcastHub
from hotel_orders.exceptions import OrderError
from hotel_orders.state.manager import StateManager
from hotel_orders.utils.logging import (
    bind_request_context,
    clear_request_context,
    get_logger,
    setup_logging,
)

# Setup logging first
setup_logging()
logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    # Startup
    logger.info("application_starting")

    state_manager: StateManager = app.state.state_manager
    await state_manager.connect()
    logger.info("state_manager_initialized")

    yield

    # Shutdown
    logger.info("application_shutting_down")
    app.state.hub.close_all()
    await state_manager.disconnect()


def create_app(
    settings: Settings | None = None,
    state_manager: StateManager | None = None,
    hub: EventBroadcastHub | None = None,
) -> FastAPI:
    """Build the application with its services attached to ``app.state``."""
    settings = settings or get_settings()
    state_manager = state_manager or StateManager(settings.redis_url)
    hub = hub or EventBroadcastHub(queue_size=settings.subscriber_queue_size)

    app = FastAPI(
        title="Hotel Order Service",
        description="Order placement, status lifecycle and live order tracking",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.state_manager = state_manager
    app.state.hub = hub
    app.state.order_service = build_order_service(state_manager, hub, settings)

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        """Tag every log line of a request with its request id."""
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        request.state.request_id = request_id
        clear_request_context()
        bind_request_context(request_id=request_id)

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            "request_completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
        )
        return response

    @app.exception_handler(OrderError)
    async def order_error_handler(request: Request, exc: OrderError) -> JSONResponse:
        """Render domain errors with a stable body."""
        body = {
            "status_code": exc.status_code,
            "message": exc.message,
            "error_code": exc.error_code,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "path": request.url.path,
            "request_id": getattr(request.state, "request_id", None),
        }
        logger.warning("request_failed", **body)
        return JSONResponse(status_code=exc.status_code, content=body)

    @app.get("/health")
    async def health_check() -> dict[str, str | int]:
        """Health check endpoint."""
        return {
            "status": "healthy",
            "service": "hotel-order-service",
            "live_channels": app.state.hub.channel_count(),
        }

    @app.get("/")
    async def root() -> dict[str, str]:
        """Root endpoint."""
        return {
            "message": "Hotel Order Service API",
            "docs": "/docs",
            "health": "/health",
        }

    app.include_router(router, prefix="/api/v1", tags=["orders"])

    @app.websocket("/ws/orders/{order_id}")
    async def order_websocket(websocket: WebSocket, order_id: str) -> None:
        """WebSocket endpoint for live order events."""
        handler = OrderStreamHandler(websocket, app.state.order_service)
        await handler.run(order_id)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "hotel_orders.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.environment == "development",
    )
