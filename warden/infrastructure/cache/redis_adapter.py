"""Redis adapter implementing CacheProtocol.

Wraps an async Redis client, bounds every call with a timeout and maps Redis
exceptions to CacheError.

Architecture:
- Implements CacheProtocol without inheritance (structural typing)
- Maps Redis exceptions and timeouts to CacheError
- Returns Result types for all operations
- Fail-open: callers treat Failure as a miss
"""

import asyncio
import json
from collections.abc import Awaitable
from typing import Any, TypeVar

from redis.asyncio import Redis
from redis.exceptions import RedisError

from warden.core.constants import CACHE_TIMEOUT_SECONDS_DEFAULT
from warden.core.enums import ErrorCode
from warden.core.result import Failure, Result, Success
from warden.infrastructure.enums import InfrastructureErrorCode
from warden.infrastructure.errors import CacheError

T = TypeVar("T")


class RedisAdapter:
    """Redis implementation of CacheProtocol.

    Note: Does NOT inherit from CacheProtocol (uses structural typing).

    Attributes:
        _redis: Async Redis client instance.
        _timeout: Upper bound in seconds for each Redis round-trip.
    """

    def __init__(
        self,
        redis_client: Redis,
        timeout_seconds: float = CACHE_TIMEOUT_SECONDS_DEFAULT,
    ) -> None:
        """Initialize Redis adapter.

        Args:
            redis_client: Async Redis client instance.
            timeout_seconds: Per-call timeout; exceeding it yields CACHE_TIMEOUT.
        """
        self._redis = redis_client
        self._timeout = timeout_seconds

    async def _call(
        self,
        awaitable: Awaitable[T],
        *,
        key: str,
        infrastructure_code: InfrastructureErrorCode,
        message: str,
    ) -> Result[T, CacheError]:
        try:
            value = await asyncio.wait_for(awaitable, timeout=self._timeout)
        except TimeoutError:
            return Failure(
                error=CacheError(
                    code=ErrorCode.SERVICE_UNAVAILABLE,
                    infrastructure_code=InfrastructureErrorCode.CACHE_TIMEOUT,
                    message=f"Cache timed out for key '{key}'",
                    details={"key": key, "timeout_seconds": self._timeout},
                )
            )
        except RedisError as e:
            return Failure(
                error=CacheError(
                    code=ErrorCode.SERVICE_UNAVAILABLE,
                    infrastructure_code=infrastructure_code,
                    message=message,
                    details={"key": key, "error": str(e)},
                )
            )
        return Success(value=value)

    async def get(self, key: str) -> Result[str | None, CacheError]:
        """Get value from Redis.

        Returns:
            Result with value if found, None if not found, or CacheError.
        """
        result = await self._call(
            self._redis.get(key),
            key=key,
            infrastructure_code=InfrastructureErrorCode.CACHE_GET_ERROR,
            message=f"Failed to get key '{key}' from cache",
        )
        match result:
            case Success(value=bytes() as raw):
                return Success(value=raw.decode("utf-8"))
            case _:
                return result

    async def get_json(self, key: str) -> Result[dict[str, Any] | None, CacheError]:
        """Get JSON value from Redis."""
        result = await self.get(key)

        match result:
            case Success(value=None):
                return Success(value=None)
            case Success(value=raw):
                try:
                    return Success(value=json.loads(raw))
                except json.JSONDecodeError as e:
                    return Failure(
                        error=CacheError(
                            code=ErrorCode.VALIDATION_FAILED,
                            infrastructure_code=InfrastructureErrorCode.CACHE_GET_ERROR,
                            message=f"Failed to parse JSON for key '{key}'",
                            details={"key": key, "error": str(e)},
                        )
                    )
            case Failure(error=err):
                return Failure(error=err)

    async def set(
        self,
        key: str,
        value: str,
        ttl: int | None = None,
    ) -> Result[None, CacheError]:
        """Set value in Redis (``ttl`` seconds, None = no expiration)."""
        command = (
            self._redis.setex(key, ttl, value)
            if ttl is not None
            else self._redis.set(key, value)
        )
        result = await self._call(
            command,
            key=key,
            infrastructure_code=InfrastructureErrorCode.CACHE_SET_ERROR,
            message=f"Failed to set key '{key}' in cache",
        )
        match result:
            case Success():
                return Success(value=None)
            case Failure(error=err):
                return Failure(error=err)

    async def set_json(
        self,
        key: str,
        value: dict[str, Any],
        ttl: int | None = None,
    ) -> Result[None, CacheError]:
        """Set JSON value in Redis."""
        try:
            serialized = json.dumps(value)
        except (TypeError, ValueError) as e:
            return Failure(
                error=CacheError(
                    code=ErrorCode.VALIDATION_FAILED,
                    infrastructure_code=InfrastructureErrorCode.CACHE_SET_ERROR,
                    message=f"Failed to serialize value for key '{key}'",
                    details={"key": key, "error": str(e)},
                )
            )
        return await self.set(key, serialized, ttl)

    async def delete(self, key: str) -> Result[bool, CacheError]:
        """Delete key. Success(True) if it existed."""
        result = await self._call(
            self._redis.delete(key),
            key=key,
            infrastructure_code=InfrastructureErrorCode.CACHE_DELETE_ERROR,
            message=f"Failed to delete key '{key}' from cache",
        )
        match result:
            case Success(value=deleted_count):
                return Success(value=deleted_count > 0)
            case Failure(error=err):
                return Failure(error=err)

    async def ping(self) -> Result[bool, CacheError]:
        """Check Redis connectivity."""
        return await self._call(
            self._redis.ping(),
            key="<ping>",
            infrastructure_code=InfrastructureErrorCode.CACHE_CONNECTION_ERROR,
            message="Redis ping failed",
        )
