import json
import logging

import redis.asyncio as redis
from sqlalchemy.ext.asyncio import AsyncSession

from news_api.config import settings

logger = logging.getLogger(__name__)

# Session.info key holding article ids whose cache entries await a commit.
_PENDING_KEY = "pending_article_invalidations"


class CacheManager:
    """
    Cache-aside store for article reads, backed by Redis.

    Only validated listing and detail results are ever stored.  Every method
    tolerates Redis being absent or failing: reads report a miss and writes
    are skipped, so the database stays the source of truth.
    """

    def __init__(self) -> None:
        self._redis: redis.Redis | None = None
        self._hits: int = 0
        self._misses: int = 0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def connect(self) -> None:
        """Open the connection pool.  Called once at application startup."""
        self._redis = redis.from_url(
            settings.REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=2,
            socket_timeout=2,
        )
        try:
            await self._redis.ping()
            logger.info("Redis connected: %s", settings.REDIS_URL)
        except redis.RedisError as exc:
            logger.warning("Redis ping failed, article cache disabled: %s", exc)
            await self._redis.aclose()
            self._redis = None

    async def disconnect(self) -> None:
        """Close the connection pool.  Called once at application shutdown."""
        if self._redis:
            await self._redis.aclose()
            self._redis = None

    # ------------------------------------------------------------------
    # Core cache operations
    # ------------------------------------------------------------------

    async def get(self, key: str) -> dict | list | None:
        if not self._redis:
            self._misses += 1
            return None
        try:
            data = await self._redis.get(key)
        except redis.RedisError as exc:
            logger.debug("Cache GET error for key=%r: %s", key, exc)
            self._misses += 1
            return None
        if data is None:
            self._misses += 1
            return None
        self._hits += 1
        return json.loads(data)

    async def set(self, key: str, value: dict | list, ttl: int | None = None) -> None:
        if not self._redis:
            return
        try:
            await self._redis.set(key, json.dumps(value, default=str), ex=ttl)
        except redis.RedisError as exc:
            logger.debug("Cache SET error for key=%r: %s", key, exc)

    async def delete_pattern(self, pattern: str) -> None:
        """Delete all keys matching *pattern* using SCAN."""
        if not self._redis:
            return
        try:
            keys = [key async for key in self._redis.scan_iter(match=pattern)]
            if keys:
                await self._redis.delete(*keys)
                logger.debug("Cache invalidated %d key(s) matching %r", len(keys), pattern)
        except redis.RedisError as exc:
            logger.debug("Cache DELETE_PATTERN error for pattern=%r: %s", pattern, exc)

    # ------------------------------------------------------------------
    # Article invalidation
    # ------------------------------------------------------------------

    async def invalidate_article(self, article_id: int | None = None) -> None:
        """
        Drop every cached listing page, plus the detail entry for
        *article_id* when given.

        Votes and comment counts both appear in listings, so any write that
        touches either makes every page stale.
        """
        await self.delete_pattern("articles:list:*")
        if article_id is not None:
            await self.delete_pattern(f"articles:detail:{article_id}")

    def invalidate_after_commit(self, db: AsyncSession, article_id: int | None = None) -> None:
        """
        Queue an ``invalidate_article`` call on *db*; it runs only once the
        session has committed (see ``news_api.database.get_db``).
        """
        db.info.setdefault(_PENDING_KEY, set()).add(article_id)

    async def flush_invalidations(self, db: AsyncSession) -> None:
        pending = db.info.pop(_PENDING_KEY, None)
        if not pending:
            return
        await self.invalidate_article()
        for article_id in pending - {None}:
            await self.delete_pattern(f"articles:detail:{article_id}")

    def discard_invalidations(self, db: AsyncSession) -> None:
        # Rolled back: the cached entries still describe the stored rows.
        db.info.pop(_PENDING_KEY, None)

    @property
    def stats(self) -> dict:
        total = self._hits + self._misses
        return {
            "connected": self._redis is not None,
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate": round(self._hits / total * 100, 1) if total > 0 else 0.0,
        }


# Module-level singleton shared across all request handlers.
cache = CacheManager()
