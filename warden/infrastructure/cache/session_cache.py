"""Redis implementation of the session cache.

Maps a subject id to its SessionDescriptor. The presence of an entry is
what keeps that subject's ACCESS tokens valid; deleting it invalidates them
before they expire.

Key Pattern:
    {prefix}:session:user:{user_id} -> JSON serialized SessionDescriptor

Architecture:
    - Implements SessionCacheProtocol (structural typing)
    - Uses RedisAdapter for low-level operations
    - get returns None on cache miss or cache failure (logged)
    - delete returns the cache Result so a failed invalidation is visible
"""

import logging
from uuid import UUID

from warden.core.result import Failure, Result, Success
from warden.domain.entities import SessionDescriptor
from warden.infrastructure.cache.cache_keys import CacheKeys
from warden.infrastructure.cache.redis_adapter import RedisAdapter
from warden.infrastructure.errors import CacheError

logger = logging.getLogger(__name__)


class RedisSessionCache:
    """Redis implementation of SessionCacheProtocol.

    Attributes:
        _redis: RedisAdapter instance for cache operations.
        _keys: Cache key builder.
        _ttl_seconds: Entry TTL, or None to leave eviction to Redis.
    """

    def __init__(
        self,
        redis_adapter: RedisAdapter,
        *,
        keys: CacheKeys | None = None,
        ttl_seconds: int | None = None,
    ) -> None:
        self._redis = redis_adapter
        self._keys = keys or CacheKeys()
        self._ttl_seconds = ttl_seconds

    async def get(self, subject_id: UUID) -> SessionDescriptor | None:
        """Get the cached descriptor.

        Returns:
            SessionDescriptor if cached, None otherwise (miss or error).
        """
        key = self._keys.session_user(subject_id)
        result = await self._redis.get_json(key)

        match result:
            case Success(value=None):
                return None
            case Success(value=data):
                try:
                    return SessionDescriptor.from_dict(data)
                except (KeyError, TypeError, ValueError) as e:
                    logger.warning(
                        "Failed to deserialize session descriptor from cache",
                        extra={"subject_id": str(subject_id), "error": str(e)},
                    )
                    return None
            case Failure(error=error):
                logger.warning(
                    "Cache error getting session descriptor",
                    extra={"subject_id": str(subject_id), "error": str(error)},
                )
                return None

    async def set(self, subject_id: UUID, descriptor: SessionDescriptor) -> bool:
        """Store the descriptor. Returns False if the cache rejected it."""
        key = self._keys.session_user(subject_id)
        result = await self._redis.set_json(
            key, descriptor.to_dict(), ttl=self._ttl_seconds
        )
        match result:
            case Success():
                return True
            case Failure(error=error):
                logger.warning(
                    "Failed to cache session descriptor",
                    extra={"subject_id": str(subject_id), "error": str(error)},
                )
                return False

    async def delete(self, subject_id: UUID) -> Result[bool, CacheError]:
        """Remove the descriptor.

        Returns:
            Success(True) if deleted, Success(False) if there was no entry,
            Failure(CacheError) if the cache could not be reached.
        """
        key = self._keys.session_user(subject_id)
        result = await self._redis.delete(key)

        if isinstance(result, Failure):
            logger.warning(
                "Cache error deleting session descriptor",
                extra={"subject_id": str(subject_id), "error": str(result.error)},
            )
        return result
