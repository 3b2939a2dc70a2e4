"""Live order event distribution."""

from hotel_orders.events.hub import Channel, EventBroadcastHub, Subscription

__all__ = ["EventBroadcastHub", "Channel", "Subscription"]
