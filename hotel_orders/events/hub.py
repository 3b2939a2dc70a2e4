"""
In-process fan-out of order events to live subscribers.

One channel exists per order id while it has subscribers. Every subscriber
owns a bounded queue, so publishing never waits on a consumer: a subscriber
that falls a full queue behind is disconnected and is expected to resubscribe
(it then receives a fresh snapshot).

The hub is bound to the event loop that consumes the subscriptions; locks
only guard the registry and subscriber sets and are never held across an
``await``.
"""

import asyncio
import threading
from typing import Any

from hotel_orders.models.events import BaseOrderEvent
from hotel_orders.utils.logging import OrderLogger

_CLOSED = object()


class Subscription:
    """A live view of one order's events.

    Iterate it with ``async for``; leaving an ``async with`` block or calling
    ``close()`` releases the slot. Consumers close it in a ``finally`` so a
    cancelled consumer releases it too.
    """

    def __init__(self, hub: "EventBroadcastHub", channel: "Channel", queue_size: int):
        self.order_id = channel.order_id
        self.channel = channel
        self._hub = hub
        self._queue: asyncio.Queue[Any] = asyncio.Queue(maxsize=queue_size)
        self._closed = False
        self._snapshot: BaseOrderEvent | None = None
        self._reflected_steps = 0

    @property
    def closed(self) -> bool:
        return self._closed

    def prime(self, snapshot: BaseOrderEvent) -> None:
        """
        Make ``snapshot`` the next event, ahead of anything already queued.

        Queued events whose timeline the snapshot already covers are skipped,
        so a snapshot taken after subscribing never precedes stale updates.
        """
        if self._closed:
            return
        self._snapshot = snapshot
        self._reflected_steps = len(snapshot.status_timeline)

    def _offer(self, event: BaseOrderEvent) -> bool:
        """Queue an event without waiting; False when the queue is full."""
        if self._closed:
            return False
        try:
            self._queue.put_nowait(event)
        except asyncio.QueueFull:
            return False
        return True

    def _wake(self) -> None:
        """Discard pending events and unblock a waiting ``__anext__``."""
        while not self._queue.empty():
            self._queue.get_nowait()
        self._queue.put_nowait(_CLOSED)

    def close(self) -> None:
        """Release this subscriber's slot. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        self._wake()
        self._hub._release(self)

    def __aiter__(self) -> "Subscription":
        return self

    async def __anext__(self) -> BaseOrderEvent:
        if self._snapshot is not None and not self._closed:
            snapshot, self._snapshot = self._snapshot, None
            return snapshot

        while True:
            if self._closed and self._queue.empty():
                raise StopAsyncIteration

            event = await self._queue.get()
            if event is _CLOSED:
                self.close()
                raise StopAsyncIteration
            if len(event.status_timeline) > self._reflected_steps:
                return event

    async def __aenter__(self) -> "Subscription":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        self.close()


class Channel:
    """Subscribers of a single order."""

    def __init__(self, order_id: str):
        self.order_id = order_id
        self._subscribers: list[Subscription] = []
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def add(self, subscription: Subscription) -> int:
        with self._lock:
            self._subscribers.append(subscription)
            return len(self._subscribers)

    def remove(self, subscription: Subscription) -> int:
        with self._lock:
            if subscription in self._subscribers:
                self._subscribers.remove(subscription)
            return len(self._subscribers)

    def broadcast(self, event: BaseOrderEvent) -> tuple[int, list[Subscription]]:
        """Offer ``event`` to every subscriber.

        Returns the number of subscribers reached and those whose queue was full.
        """
        delivered = 0
        overflowed: list[Subscription] = []
        with self._lock:
            for subscription in self._subscribers:
                if subscription._offer(event):
                    delivered += 1
                elif not subscription.closed:
                    overflowed.append(subscription)
        return delivered, overflowed


class EventBroadcastHub:
    """Registry of per-order channels."""

    def __init__(self, queue_size: int = 100):
        if queue_size < 1:
            raise ValueError("queue_size must be at least 1")
        self.queue_size = queue_size
        self._channels: dict[str, Channel] = {}
        self._lock = threading.Lock()
        self.logger = OrderLogger("event_hub")

    def _get_or_create_channel(self, order_id: str) -> Channel:
        """Return the order's channel, creating it on first access.

        Only ``subscribe`` calls this, under the registry lock and together
        with adding the subscriber, so no channel exists without one.
        """
        channel = self._channels.get(order_id)
        if channel is None:
            channel = Channel(order_id)
            self._channels[order_id] = channel
        return channel

    def subscribe(
        self,
        order_id: str,
        initial_snapshot: BaseOrderEvent | None = None,
    ) -> Subscription:
        """
        Register a subscriber for ``order_id``.

        Registration is complete when this returns: every event published
        afterwards is delivered. ``initial_snapshot``, when given, is the
        first event the subscriber sees.
        """
        with self._lock:
            channel = self._get_or_create_channel(order_id)
            subscription = Subscription(self, channel, self.queue_size)
            if initial_snapshot is not None:
                subscription._offer(initial_snapshot)
            count = channel.add(subscription)

        self.logger.log_stream("subscribed", order_id, count)
        return subscription

    def publish(self, order_id: str, event: BaseOrderEvent) -> int:
        """
        Deliver ``event`` to the order's current subscribers.

        Returns how many subscribers received it; with no channel the event
        is dropped.
        """
        with self._lock:
            channel = self._channels.get(order_id)

        if channel is None:
            return 0

        delivered, overflowed = channel.broadcast(event)
        for subscription in overflowed:
            self.logger.log_stream(
                "overflow", order_id, len(channel), queue_size=self.queue_size
            )
            subscription.close()

        return delivered

    def _release(self, subscription: Subscription) -> None:
        """Drop a subscriber and tear its channel down once it is empty."""
        with self._lock:
            channel = self._channels.get(subscription.order_id)
            if channel is not subscription.channel:
                return
            remaining = channel.remove(subscription)
            if remaining == 0:
                del self._channels[subscription.order_id]

        self.logger.log_stream("unsubscribed", subscription.order_id, remaining)

    def close_all(self) -> None:
        """End every live subscription, e.g. on server shutdown."""
        with self._lock:
            channels = list(self._channels.values())

        for channel in channels:
            with channel._lock:
                subscriptions = list(channel._subscribers)
            for subscription in subscriptions:
                subscription.close()

    def channel_count(self) -> int:
        with self._lock:
            return len(self._channels)

    def subscriber_count(self, order_id: str) -> int:
        with self._lock:
            channel = self._channels.get(order_id)
        return len(channel) if channel is not None else 0

    def has_channel(self, order_id: str) -> bool:
        with self._lock:
            return order_id in self._channels
