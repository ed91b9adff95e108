"""
Database Module - Upstash Redis Client

Provides the singleton async Upstash Redis client used as the
cart snapshot backend, plus key and TTL constants.
"""

import os
from typing import Optional

from upstash_redis.asyncio import Redis as AsyncRedis


# Upstash Redis - standard env var names per docs
UPSTASH_REDIS_REST_URL = os.environ.get("UPSTASH_REDIS_REST_URL", "")
UPSTASH_REDIS_REST_TOKEN = os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")


# Singleton instance
_redis_client: Optional[AsyncRedis] = None


def get_redis() -> AsyncRedis:
    """
    Get async Upstash Redis client (singleton).

    Uses standard Upstash env var names:
    - UPSTASH_REDIS_REST_URL
    - UPSTASH_REDIS_REST_TOKEN
    """
    global _redis_client

    if _redis_client is None:
        if not UPSTASH_REDIS_REST_URL or not UPSTASH_REDIS_REST_TOKEN:
            raise ValueError("UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set")
        _redis_client = AsyncRedis(url=UPSTASH_REDIS_REST_URL, token=UPSTASH_REDIS_REST_TOKEN)

    return _redis_client


class RedisKeys:
    """Redis keys used by the cart."""

    # Single snapshot of the whole cart, overwritten on every mutation
    CART_SNAPSHOT = os.environ.get("CART_STORAGE_KEY", "@GoMarketplace:products")


# TTL constants (in seconds)
class TTL:
    """Time-to-live constants for Redis keys."""

    # 0 keeps the snapshot until it is overwritten
    CART_SNAPSHOT = int(os.environ.get("CART_SNAPSHOT_TTL", "0"))
