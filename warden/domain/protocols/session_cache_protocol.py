"""Session cache protocol.

The session cache maps a subject id to its SessionDescriptor. A live entry
is required for ACCESS-token authentication; deleting it is how a session is
invalidated before the ACCESS token expires.
"""

from typing import Protocol
from uuid import UUID

from warden.core.errors import DomainError
from warden.core.result import Result
from warden.domain.entities import SessionDescriptor


class SessionCacheProtocol(Protocol):
    """Session cache port.

    Cache failures never raise: reads degrade to None (a miss), writes report
    False, and deletes return a Failure so callers can tell an unreachable
    cache from a missing entry.
    """

    async def get(self, subject_id: UUID) -> SessionDescriptor | None:
        """Return the cached descriptor, or None on a miss or cache failure."""
        ...

    async def set(self, subject_id: UUID, descriptor: SessionDescriptor) -> bool:
        """Store the descriptor. Returns False if the cache rejected it."""
        ...

    async def delete(self, subject_id: UUID) -> Result[bool, DomainError]:
        """Remove the descriptor. Success(True) if an entry was removed."""
        ...
