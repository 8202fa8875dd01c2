"""Redis implementation for TinyLink."""

import logging
from datetime import datetime, timezone
from typing import Optional, List

import redis.asyncio as redis
from redis.exceptions import RedisError

from .base import LinkStoreBase
from .models import Link
from ..errors import StorageError


# KEYS[1] link hash, KEYS[2] ordering zset, KEYS[3] sequence counter
# ARGV[1] code, ARGV[2] url, ARGV[3] created_at
CREATE_SCRIPT = """
if redis.call('EXISTS', KEYS[1]) == 1 then
    return 0
end
local seq = redis.call('INCR', KEYS[3])
redis.call('HSET', KEYS[1], 'code', ARGV[1], 'url', ARGV[2], 'clicks', 0,
           'created_at', ARGV[3], 'last_clicked', '')
redis.call('ZADD', KEYS[2], seq, ARGV[1])
return 1
"""

# KEYS[1] link hash; ARGV[1] click timestamp
INCREMENT_SCRIPT = """
if redis.call('EXISTS', KEYS[1]) == 0 then
    return 0
end
redis.call('HINCRBY', KEYS[1], 'clicks', 1)
redis.call('HSET', KEYS[1], 'last_clicked', ARGV[1])
return 1
"""

# KEYS[1] link hash, KEYS[2] ordering zset; ARGV[1] code
DELETE_SCRIPT = """
local removed = redis.call('DEL', KEYS[1])
redis.call('ZREM', KEYS[2], ARGV[1])
return removed
"""


class RedisLinkStore(LinkStoreBase):
    """Redis implementation of the link store.

    Each link is a hash; a sorted set scored by a creation sequence keeps
    listing order. Writes run as Lua scripts so every operation is atomic
    on the server.
    """

    def __init__(
        self,
        db_config: str,
        key_prefix: str = "tinylink",
        logger: Optional[logging.Logger] = None,
    ):
        """Initialize Redis store.

        Args:
            db_config: Redis connection URL (e.g., redis://localhost:6379/0)
            key_prefix: Namespace for all keys
            logger: Optional logger instance
        """
        super().__init__(db_config)
        self.key_prefix = key_prefix
        self.logger = logger or logging.getLogger(__name__)
        self.client: Optional[redis.Redis] = None

    def link_key(self, code: str) -> str:
        return f"{self.key_prefix}:link:{code}"

    @property
    def index_key(self) -> str:
        return f"{self.key_prefix}:links"

    @property
    def sequence_key(self) -> str:
        return f"{self.key_prefix}:seq"

    async def connect(self) -> None:
        """Connect to Redis and register scripts."""
        if self.client is not None:
            return

        self.client = redis.from_url(
            self.db_config,
            encoding="utf-8",
            decode_responses=True,
        )
        self._create = self.client.register_script(CREATE_SCRIPT)
        self._increment = self.client.register_script(INCREMENT_SCRIPT)
        self._delete = self.client.register_script(DELETE_SCRIPT)

        try:
            await self.client.ping()
        except RedisError as e:
            raise StorageError(f"Cannot connect to Redis: {e}") from e
        self.logger.info("Connected to Redis")

    async def _ensure_client(self) -> redis.Redis:
        if self.client is None:
            await self.connect()
        return self.client

    async def create_link(self, code: str, url: str) -> Optional[Link]:
        await self._ensure_client()
        created_at = datetime.now(timezone.utc)

        try:
            created = await self._create(
                keys=[self.link_key(code), self.index_key, self.sequence_key],
                args=[code, url, created_at.isoformat()],
            )
        except RedisError as e:
            self.logger.error(f"Redis create error: {e}")
            raise StorageError(str(e)) from e

        if not created:
            self.logger.debug(f"Code already exists: {code}")
            return None
        return Link(code=code, url=url, created_at=created_at)

    async def get_link(self, code: str) -> Optional[Link]:
        client = await self._ensure_client()
        try:
            data = await client.hgetall(self.link_key(code))
        except RedisError as e:
            self.logger.error(f"Redis get error: {e}")
            raise StorageError(str(e)) from e
        return Link.from_dict(data) if data else None

    async def list_links(self) -> List[Link]:
        client = await self._ensure_client()
        try:
            codes = await client.zrevrange(self.index_key, 0, -1)
            async with client.pipeline(transaction=False) as pipe:
                for code in codes:
                    pipe.hgetall(self.link_key(code))
                rows = await pipe.execute()
        except RedisError as e:
            self.logger.error(f"Redis list error: {e}")
            raise StorageError(str(e)) from e

        # A link deleted between the two round-trips comes back empty.
        return [Link.from_dict(row) for row in rows if row]

    async def delete_link(self, code: str) -> bool:
        await self._ensure_client()
        try:
            removed = await self._delete(
                keys=[self.link_key(code), self.index_key],
                args=[code],
            )
        except RedisError as e:
            self.logger.error(f"Redis delete error: {e}")
            raise StorageError(str(e)) from e
        return removed > 0

    async def increment_clicks(self, code: str) -> bool:
        await self._ensure_client()
        try:
            updated = await self._increment(
                keys=[self.link_key(code)],
                args=[datetime.now(timezone.utc).isoformat()],
            )
        except RedisError as e:
            self.logger.error(f"Redis increment error: {e}")
            raise StorageError(str(e)) from e
        return bool(updated)

    async def close(self) -> None:
        """Close Redis connection."""
        if self.client:
            await self.client.aclose()
            self.client = None
            self.logger.info("Redis connection closed")
