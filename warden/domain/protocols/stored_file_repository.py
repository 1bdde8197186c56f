"""StoredFileRepository protocol (port).

Stored files are registered soft-delete entities; lookups never return a
soft-deleted file.
"""

from typing import Protocol
from uuid import UUID

from warden.domain.entities import StoredFile


class StoredFileRepository(Protocol):
    """Stored file metadata persistence operations."""

    async def create(
        self,
        owner_id: UUID,
        object_key: str,
        content_type: str = "application/octet-stream",
        size_bytes: int = 0,
    ) -> StoredFile: ...

    async def find_by_id(self, file_id: UUID) -> StoredFile | None: ...

    async def find_for_owner(self, owner_id: UUID) -> list[StoredFile]:
        """Active files of one owner, newest first."""
        ...

    async def soft_delete(self, file_id: UUID) -> StoredFile | None: ...

    async def soft_delete_for_owner(self, owner_id: UUID) -> list[UUID]:
        """Soft-delete every active file of one owner, one audit entry each."""
        ...
