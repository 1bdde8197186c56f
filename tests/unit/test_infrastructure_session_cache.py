"""Unit tests for RedisSessionCache on fakeredis."""

import asyncio
import json
from unittest.mock import AsyncMock

import pytest
from uuid_extensions import uuid7

from warden.core.result import Failure, Success
from warden.domain.entities import SessionDescriptor
from warden.infrastructure.cache import CacheKeys, RedisAdapter, RedisSessionCache
from warden.infrastructure.enums import InfrastructureErrorCode


def make_descriptor(**overrides) -> SessionDescriptor:
    values = {
        "id": uuid7(),
        "email": "user@example.com",
        "display_name": "Test User",
        "roles": ("user",),
    }
    values.update(overrides)
    return SessionDescriptor(**values)


@pytest.fixture
def session_cache(fake_redis):
    return RedisSessionCache(RedisAdapter(fake_redis))


@pytest.mark.unit
class TestSessionCache:
    async def test_set_and_get(self, session_cache):
        descriptor = make_descriptor()

        assert await session_cache.set(descriptor.id, descriptor) is True
        assert await session_cache.get(descriptor.id) == descriptor

    async def test_get_missing_returns_none(self, session_cache):
        assert await session_cache.get(uuid7()) is None

    async def test_key_pattern(self, session_cache, fake_redis):
        descriptor = make_descriptor()

        await session_cache.set(descriptor.id, descriptor)

        raw = await fake_redis.get(f"warden:session:user:{descriptor.id}")
        assert json.loads(raw) == descriptor.to_dict()

    async def test_custom_prefix(self, fake_redis):
        cache = RedisSessionCache(RedisAdapter(fake_redis), keys=CacheKeys(prefix="t"))
        descriptor = make_descriptor()

        await cache.set(descriptor.id, descriptor)

        assert await fake_redis.exists(f"t:session:user:{descriptor.id}") == 1

    async def test_no_ttl_by_default(self, session_cache, fake_redis):
        descriptor = make_descriptor()

        await session_cache.set(descriptor.id, descriptor)

        assert await fake_redis.ttl(f"warden:session:user:{descriptor.id}") == -1

    async def test_ttl_applied_when_configured(self, fake_redis):
        cache = RedisSessionCache(RedisAdapter(fake_redis), ttl_seconds=120)
        descriptor = make_descriptor()

        await cache.set(descriptor.id, descriptor)

        ttl = await fake_redis.ttl(f"warden:session:user:{descriptor.id}")
        assert 0 < ttl <= 120

    async def test_delete(self, session_cache):
        descriptor = make_descriptor()
        await session_cache.set(descriptor.id, descriptor)

        assert await session_cache.delete(descriptor.id) == Success(value=True)
        assert await session_cache.get(descriptor.id) is None
        assert await session_cache.delete(descriptor.id) == Success(value=False)

    async def test_corrupt_entry_is_a_miss(self, session_cache, fake_redis):
        subject_id = uuid7()
        await fake_redis.set(f"warden:session:user:{subject_id}", json.dumps({"x": 1}))

        assert await session_cache.get(subject_id) is None


@pytest.mark.unit
class TestSessionCacheFailOpen:
    """A slow or failing cache never raises; reads degrade to a miss."""

    @pytest.fixture
    def slow_cache(self):
        async def hang(*args, **kwargs):
            await asyncio.sleep(5)

        client = AsyncMock()
        client.get = hang
        client.set = hang
        client.delete = hang
        return RedisSessionCache(RedisAdapter(client, timeout_seconds=0.01))

    async def test_get_timeout_is_a_miss(self, slow_cache):
        assert await slow_cache.get(uuid7()) is None

    async def test_set_timeout_returns_false(self, slow_cache):
        descriptor = make_descriptor()
        assert await slow_cache.set(descriptor.id, descriptor) is False

    async def test_delete_timeout_is_a_failure_not_a_miss(self, slow_cache):
        result = await slow_cache.delete(uuid7())

        assert isinstance(result, Failure)
        assert result.error.infrastructure_code == InfrastructureErrorCode.CACHE_TIMEOUT
