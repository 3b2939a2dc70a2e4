"""Redis-backed document store shared by the repositories."""

import json
from typing import Any, Callable

import redis.asyncio as redis
from redis.exceptions import WatchError

from hotel_orders.config import get_settings
from hotel_orders.utils.logging import get_logger

logger = get_logger(__name__)

ClientFactory = Callable[[], redis.Redis]


class StaleDocumentError(Exception):
    """Raised by ``compare_and_set`` when the stored document no longer matches."""

    def __init__(self, key: str, current: Any):
        self.key = key
        self.current = current
        super().__init__(f"Document at {key} changed before it could be written")


class StateManager:
    """Centralized JSON document storage using Redis."""

    def __init__(
        self,
        redis_url: str | None = None,
        client_factory: ClientFactory | None = None,
    ) -> None:
        self.redis_client: redis.Redis | None = None
        self.redis_url = redis_url or get_settings().redis_url
        self._client_factory = client_factory

    async def connect(self) -> None:
        """Establish Redis connection."""
        if self.redis_client is None:
            if self._client_factory is not None:
                self.redis_client = self._client_factory()
            else:
                self.redis_client = redis.from_url(
                    self.redis_url,
                    encoding="utf-8",
                    decode_responses=True,
                )
            logger.info("redis_connected", url=self.redis_url)

    async def disconnect(self) -> None:
        """Close Redis connection."""
        if self.redis_client:
            await self.redis_client.aclose()
            self.redis_client = None
            logger.info("redis_disconnected")

    async def ping(self) -> bool:
        """Check that Redis answers."""
        if not self.redis_client:
            await self.connect()

        return bool(await self.redis_client.ping())

    async def set(self, key: str, value: Any) -> None:
        """Set a value in Redis."""
        if not self.redis_client:
            await self.connect()

        # Serialize complex objects to JSON
        if isinstance(value, (dict, list)):
            value = json.dumps(value)

        await self.redis_client.set(key, value)

        logger.debug("state_set", key=key)

    async def get(self, key: str) -> Any:
        """Get a value from Redis."""
        if not self.redis_client:
            await self.connect()

        value = await self.redis_client.get(key)

        if value:
            # Try to deserialize JSON
            try:
                return json.loads(value)
            except (json.JSONDecodeError, TypeError):
                return value

        return None

    async def mget(self, keys: list[str]) -> list[Any]:
        """Get several JSON values at once, preserving order."""
        if not self.redis_client:
            await self.connect()

        if not keys:
            return []

        values = await self.redis_client.mget(keys)
        return [json.loads(value) if value else None for value in values]

    async def compare_and_set(
        self,
        key: str,
        value: dict[str, Any],
        check: Callable[[dict[str, Any] | None], bool],
    ) -> None:
        """
        Write ``value`` only if ``check`` accepts the currently stored document.

        The read and the write run under WATCH/MULTI, so a concurrent writer
        between them aborts this write instead of being overwritten.

        Raises:
            StaleDocumentError: the stored document failed ``check`` or changed
                while the write was being prepared.
        """
        if not self.redis_client:
            await self.connect()

        async with self.redis_client.pipeline(transaction=True) as pipe:
            try:
                await pipe.watch(key)
                raw = await pipe.get(key)
                current = json.loads(raw) if raw else None

                if not check(current):
                    await pipe.unwatch()
                    raise StaleDocumentError(key, current)

                pipe.multi()
                pipe.set(key, json.dumps(value))
                await pipe.execute()
            except WatchError as e:
                raise StaleDocumentError(key, None) from e

        logger.debug("state_compare_and_set", key=key)

    async def zadd(
        self,
        key: str,
        mapping: dict[str, float],
    ) -> None:
        """Add members to a sorted set."""
        if not self.redis_client:
            await self.connect()

        await self.redis_client.zadd(key, mapping)

    async def zrange(
        self,
        key: str,
        start: int = 0,
        end: int = -1,
        desc: bool = False,
    ) -> list[str]:
        """Get members from a sorted set."""
        if not self.redis_client:
            await self.connect()

        return await self.redis_client.zrange(key, start, end, desc=desc)

    async def delete_matching(self, pattern: str) -> int:
        """Delete every key matching ``pattern`` using SCAN."""
        if not self.redis_client:
            await self.connect()

        deleted = 0
        async for key in self.redis_client.scan_iter(match=pattern):
            deleted += await self.redis_client.delete(key)

        logger.info("state_cleared", pattern=pattern, deleted=deleted)
        return deleted
