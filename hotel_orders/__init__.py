"""Hotel order service: order lifecycle and live order tracking."""

__version__ = "0.1.0"
