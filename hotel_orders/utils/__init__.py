"""Utility modules."""

from hotel_orders.utils.logging import OrderLogger, get_logger, setup_logging
from hotel_orders.utils.tracing import OperationTracer

__all__ = ["setup_logging", "get_logger", "OrderLogger", "OperationTracer"]
