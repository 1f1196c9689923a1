"""
Redis caching service for trainer schedules.

CACHING STRATEGY
================

What we cache:
  - view_trainer_schedule responses, JSON-serialized
  - Key pattern: "schedule:{namespace}:{trainer_id}"

The namespace is the owning Ledger's instance id. The ledger is in-memory,
so a schedule cached for one Ledger says nothing about the next one; keys
written by an earlier ledger are never read again and are cleared on
shutdown.

Invalidation:
  - A booking deletes its trainer's key
  - TTL-based expiry as safety net

Both the cache fill and the invalidation run while the ledger lock is held,
so a reader can never write back a schedule computed before a booking that
has since committed.

Redis is optional (REDIS_ENABLED). If it is disabled or unreachable every
call degrades to a no-op / miss and the ledger answers directly.
"""

import json
from typing import Optional

import redis.asyncio as redis
from fastapi import Request

from training_ledger.core.config import get_settings
from training_ledger.core.logging import get_logger
from training_ledger.core.metrics import record_cache_operation

logger = get_logger(__name__)


async def connect_redis() -> Optional[redis.Redis]:
    """Open the Redis connection. Returns None if Redis is disabled or unreachable."""
    settings = get_settings()

    if not settings.REDIS_ENABLED:
        return None

    client = None
    try:
        client = redis.from_url(
            settings.REDIS_URL,
            encoding="utf-8",
            decode_responses=True,
            socket_connect_timeout=5,
            socket_timeout=5,
            retry_on_timeout=True,
        )
        await client.ping()
    except Exception as e:
        logger.error("redis_connection_failed", error=str(e))
        if client is not None:
            await client.aclose()
        return None

    logger.info("redis_connected", url=settings.REDIS_URL)
    return client


class ScheduleCache:
    """Trainer schedules cached in Redis, scoped to one ledger."""

    def __init__(self, client: Optional[redis.Redis], namespace: str, ttl: Optional[int] = None):
        self.client = client
        self.namespace = namespace
        self.ttl = get_settings().REDIS_CACHE_TTL if ttl is None else ttl

    @property
    def enabled(self) -> bool:
        return self.client is not None

    def _key(self, trainer_id: int) -> str:
        return f"schedule:{self.namespace}:{trainer_id}"

    async def get(self, trainer_id: int) -> Optional[dict]:
        if not self.client:
            return None

        key = self._key(trainer_id)
        try:
            data = await self.client.get(key)
            record_cache_operation("get", hit=bool(data))
            if data:
                logger.debug("cache_hit", key=key)
                return json.loads(data)
            logger.debug("cache_miss", key=key)
        except Exception as e:
            logger.error("cache_get_error", key=key, error=str(e))

        return None

    async def set(self, trainer_id: int, data: dict) -> None:
        if not self.client:
            return

        key = self._key(trainer_id)
        try:
            await self.client.setex(key, self.ttl, json.dumps(data))
            record_cache_operation("set", hit=False)
            logger.debug("cache_set", key=key, ttl=self.ttl)
        except Exception as e:
            logger.error("cache_set_error", key=key, error=str(e))

    async def invalidate(self, trainer_id: int) -> None:
        if not self.client:
            return

        key = self._key(trainer_id)
        try:
            await self.client.delete(key)
            logger.info("cache_invalidated", key=key)
        except Exception as e:
            logger.error("cache_invalidation_error", key=key, error=str(e))

    async def clear(self) -> int:
        """Drop every schedule cached for this ledger. Returns the number of keys removed."""
        if not self.client:
            return 0

        removed = 0
        try:
            async for key in self.client.scan_iter(match=f"schedule:{self.namespace}:*"):
                removed += await self.client.delete(key)
            logger.info("cache_cleared", namespace=self.namespace, keys=removed)
        except Exception as e:
            logger.error("cache_clear_error", namespace=self.namespace, error=str(e))
        return removed

    async def close(self) -> None:
        """Close the Redis connection on shutdown."""
        if self.client:
            await self.client.aclose()
            self.client = None

    async def stats(self) -> dict:
        """Get Redis cache statistics for monitoring."""
        if not self.client:
            return {"status": "disabled"}

        try:
            info = await self.client.info("stats")
            hits = info.get("keyspace_hits", 0)
            misses = info.get("keyspace_misses", 0)
            return {
                "status": "connected",
                "hits": hits,
                "misses": misses,
                "hit_rate": round(hits / max(hits + misses, 1) * 100, 2),
            }
        except Exception as e:
            return {"status": "error", "error": str(e)}


def get_schedule_cache(request: Request) -> ScheduleCache:
    """FastAPI dependency returning the application's schedule cache."""
    return request.app.state.schedule_cache
