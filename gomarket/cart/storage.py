"""Key-value backends for the cart snapshot."""
import asyncio
from typing import Dict, List, Optional, Protocol, Tuple, Union

from gomarket.db import get_redis, RedisKeys, TTL
from gomarket.errors import (
    ERROR_STORAGE_READ,
    ERROR_STORAGE_WRITE,
    PersistenceReadFailure,
    PersistenceWriteFailure,
)


__all__ = [
    "KeyValueStore",
    "RedisKeyValueStore",
    "MemoryKeyValueStore",
    "RedisKeys",
    "TTL",
]


class KeyValueStore(Protocol):
    """Opaque async store the cart persists into."""

    async def get(self, key: str) -> Optional[Union[bytes, str]]:
        ...

    async def set(self, key: str, value: bytes) -> None:
        ...


class RedisKeyValueStore:
    """Cart snapshot storage in Upstash Redis."""

    def __init__(self, redis=None, ttl: int = TTL.CART_SNAPSHOT):
        self._redis = redis  # Lazy initialization
        self._ttl = ttl

    @property
    def redis(self):
        """Get Redis client (lazy initialization)."""
        if self._redis is None:
            try:
                self._redis = get_redis()
            except ValueError as e:
                raise PersistenceReadFailure(
                    f"Redis not available: {e}. Check UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN environment variables."
                ) from e
        return self._redis

    async def get(self, key: str) -> Optional[str]:
        try:
            return await self.redis.get(key)
        except PersistenceReadFailure:
            raise
        except Exception as e:
            raise PersistenceReadFailure(f"{ERROR_STORAGE_READ}: {e}") from e

    async def set(self, key: str, value: bytes) -> None:
        # The REST API takes text
        payload = value.decode("utf-8") if isinstance(value, bytes) else value
        try:
            if self._ttl > 0:
                await self.redis.set(key, payload, ex=self._ttl)
            else:
                await self.redis.set(key, payload)
        except Exception as e:
            raise PersistenceWriteFailure(f"{ERROR_STORAGE_WRITE}: {e}") from e


class MemoryKeyValueStore:
    """
    In-process storage for development and tests.

    `fail_reads` / `fail_writes` simulate a storage outage. Every successful
    write is appended to `writes` so callers can check ordering.
    """

    def __init__(self, initial: Optional[Dict[str, bytes]] = None):
        self._data: Dict[str, bytes] = dict(initial or {})
        self.writes: List[Tuple[str, bytes]] = []
        self.fail_reads = False
        self.fail_writes = False

    async def get(self, key: str) -> Optional[bytes]:
        await asyncio.sleep(0)
        if self.fail_reads:
            raise PersistenceReadFailure(ERROR_STORAGE_READ)
        return self._data.get(key)

    async def set(self, key: str, value: bytes) -> None:
        await asyncio.sleep(0)
        if self.fail_writes:
            raise PersistenceWriteFailure(ERROR_STORAGE_WRITE)
        self._data[key] = value
        self.writes.append((key, value))
