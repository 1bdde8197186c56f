"""Unit tests for RedisAdapter.

fakeredis for the happy paths; AsyncMock clients for timeouts and Redis
errors.
"""

import asyncio
from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from warden.core.enums import ErrorCode
from warden.core.result import Failure, Success
from warden.infrastructure.cache.redis_adapter import RedisAdapter
from warden.infrastructure.enums import InfrastructureErrorCode


async def _hang(*args, **kwargs):
    await asyncio.sleep(5)


@pytest.fixture
def adapter(fake_redis):
    return RedisAdapter(fake_redis)


@pytest.mark.unit
class TestRedisAdapterOperations:
    async def test_set_and_get(self, adapter):
        assert await adapter.set("k", "v") == Success(value=None)
        assert await adapter.get("k") == Success(value="v")

    async def test_get_missing_key(self, adapter):
        assert await adapter.get("missing") == Success(value=None)

    async def test_set_with_ttl(self, adapter, fake_redis):
        await adapter.set("k", "v", ttl=60)

        ttl = await fake_redis.ttl("k")

        assert 0 < ttl <= 60

    async def test_json_round_trip(self, adapter):
        await adapter.set_json("k", {"a": 1, "b": ["x"]})
        assert await adapter.get_json("k") == Success(value={"a": 1, "b": ["x"]})

    async def test_get_json_missing_key(self, adapter):
        assert await adapter.get_json("missing") == Success(value=None)

    async def test_get_json_invalid_payload(self, adapter):
        await adapter.set("k", "{not json")

        result = await adapter.get_json("k")

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.VALIDATION_FAILED

    async def test_set_json_unserializable(self, adapter):
        result = await adapter.set_json("k", {"value": object()})

        assert isinstance(result, Failure)
        assert result.error.infrastructure_code == InfrastructureErrorCode.CACHE_SET_ERROR

    async def test_delete_reports_existence(self, adapter):
        await adapter.set("k", "v")

        assert await adapter.delete("k") == Success(value=True)
        assert await adapter.delete("k") == Success(value=False)

    async def test_ping(self, adapter):
        assert await adapter.ping() == Success(value=True)


@pytest.mark.unit
class TestRedisAdapterFailures:
    """Timeouts and Redis errors become CacheError, never exceptions."""

    async def test_timeout_returns_cache_timeout(self):
        client = AsyncMock()
        client.get = _hang
        adapter = RedisAdapter(client, timeout_seconds=0.01)

        result = await adapter.get("slow")

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.SERVICE_UNAVAILABLE
        assert result.error.infrastructure_code == InfrastructureErrorCode.CACHE_TIMEOUT
        assert result.error.details["key"] == "slow"

    async def test_redis_error_on_get(self):
        client = AsyncMock()
        client.get = AsyncMock(side_effect=RedisConnectionError("connection refused"))
        adapter = RedisAdapter(client)

        result = await adapter.get("k")

        assert isinstance(result, Failure)
        assert result.error.infrastructure_code == InfrastructureErrorCode.CACHE_GET_ERROR
        assert "connection refused" in result.error.details["error"]

    async def test_redis_error_on_set(self):
        client = AsyncMock()
        client.setex = AsyncMock(side_effect=RedisConnectionError("down"))
        adapter = RedisAdapter(client)

        result = await adapter.set("k", "v", ttl=10)

        assert isinstance(result, Failure)
        assert result.error.infrastructure_code == InfrastructureErrorCode.CACHE_SET_ERROR

    async def test_redis_error_on_delete(self):
        client = AsyncMock()
        client.delete = AsyncMock(side_effect=RedisConnectionError("down"))
        adapter = RedisAdapter(client)

        result = await adapter.delete("k")

        assert isinstance(result, Failure)
        assert (
            result.error.infrastructure_code
            == InfrastructureErrorCode.CACHE_DELETE_ERROR
        )
