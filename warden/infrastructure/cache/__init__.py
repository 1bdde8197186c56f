"""Cache infrastructure (Redis).

Usage:
    from warden.infrastructure.cache import RedisAdapter, RedisSessionCache
"""

from warden.infrastructure.cache.cache_keys import CacheKeys
from warden.infrastructure.cache.redis_adapter import RedisAdapter
from warden.infrastructure.cache.session_cache import RedisSessionCache

__all__ = ["CacheKeys", "RedisAdapter", "RedisSessionCache"]
