"""Structured logging configuration."""

import logging
import sys
from typing import Any

import structlog
from pythonjsonlogger import jsonlogger

from hotel_orders.config import get_settings


def setup_logging() -> None:
    """Configure structured logging for the application."""
    settings = get_settings()

    # Configure standard library logging
    log_level = getattr(logging, settings.log_level)

    if settings.log_format == "json":
        # JSON logging for production
        handler = logging.StreamHandler(sys.stdout)
        formatter = jsonlogger.JsonFormatter(
            fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
            rename_fields={"levelname": "level", "asctime": "timestamp"},
        )
        handler.setFormatter(formatter)
    else:
        # Human-readable logging for development
        handler = logging.StreamHandler(sys.stdout)
        formatter = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        handler.setFormatter(formatter)

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()
    root_logger.addHandler(handler)

    # request_completed lines replace the access log
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    # Configure structlog
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.JSONRenderer() if settings.log_format == "json"
            else structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


def bind_request_context(**values: Any) -> None:
    """Bind values (e.g. request_id) to every log event of the current task."""
    structlog.contextvars.bind_contextvars(**values)


def clear_request_context() -> None:
    """Drop values bound by ``bind_request_context``."""
    structlog.contextvars.clear_contextvars()


class OrderLogger:
    """Specialized logger for order lifecycle and stream events."""

    def __init__(self, component: str):
        self.component = component
        self.logger = get_logger(component)

    def log_created(
        self,
        order_id: str,
        hotel_id: str,
        customer_id: str,
        item_count: int,
        **kwargs: Any,
    ) -> None:
        """Log a newly placed order."""
        self.logger.info(
            "order_created",
            component=self.component,
            order_id=order_id,
            hotel_id=hotel_id,
            customer_id=customer_id,
            item_count=item_count,
            **kwargs,
        )

    def log_transition(
        self,
        order_id: str,
        from_status: str,
        to_status: str,
        actor_id: str,
        attempt: int = 1,
        **kwargs: Any,
    ) -> None:
        """Log a persisted status transition."""
        self.logger.info(
            "order_status_updated",
            component=self.component,
            order_id=order_id,
            from_status=from_status,
            to_status=to_status,
            actor_id=actor_id,
            attempt=attempt,
            **kwargs,
        )

    def log_stream(
        self,
        action: str,
        order_id: str,
        subscribers: int,
        **kwargs: Any,
    ) -> None:
        """Log a stream subscription change."""
        self.logger.info(
            f"stream_{action}",
            component=self.component,
            order_id=order_id,
            subscribers=subscribers,
            **kwargs,
        )

    def log_denied(
        self,
        action: str,
        order_id: str,
        actor_id: str,
        **kwargs: Any,
    ) -> None:
        """Log an authorization refusal."""
        self.logger.warning(
            "order_access_denied",
            component=self.component,
            action=action,
            order_id=order_id,
            actor_id=actor_id,
            **kwargs,
        )
