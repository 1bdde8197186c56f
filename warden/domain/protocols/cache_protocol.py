"""Cache protocol for domain layer.

Defines the cache interface the domain needs without knowing about any
specific implementation.

Architecture:
- Protocol-based (structural typing)
- All operations return Result types
- Fail-open: callers treat a Failure as a miss, never as a hard error
"""

from typing import Any, Protocol

from warden.core.errors import DomainError
from warden.core.result import Result


class CacheProtocol(Protocol):
    """Key-value cache operations used by the session cache."""

    async def get(self, key: str) -> Result[str | None, DomainError]:
        """Get value from cache.

        Returns:
            Success(value) when found, Success(None) on a miss,
            Failure(CacheError) on a cache error or timeout.
        """
        ...

    async def get_json(self, key: str) -> Result[dict[str, Any] | None, DomainError]:
        """Get and deserialize a JSON object."""
        ...

    async def set(
        self,
        key: str,
        value: str,
        ttl: int | None = None,
    ) -> Result[None, DomainError]:
        """Set value in cache (``ttl`` in seconds, None = no expiration)."""
        ...

    async def set_json(
        self,
        key: str,
        value: dict[str, Any],
        ttl: int | None = None,
    ) -> Result[None, DomainError]:
        """Serialize and set a JSON object."""
        ...

    async def delete(self, key: str) -> Result[bool, DomainError]:
        """Delete key. Success(True) if it existed."""
        ...
