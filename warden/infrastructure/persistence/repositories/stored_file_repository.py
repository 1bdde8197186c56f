"""StoredFileRepository - metadata for objects uploaded to external storage.

Only metadata lives here; the upload itself is handled by the object
storage collaborator. Deleting a file soft-deletes its metadata row.
"""

from uuid import UUID

from warden.core.clock import as_utc
from warden.domain.entities import StoredFile
from warden.infrastructure.persistence.models import StoredFile as StoredFileModel
from warden.infrastructure.persistence.soft_delete import SoftDeleteGateway


def _to_domain(model: StoredFileModel) -> StoredFile:
    return StoredFile(
        id=model.id,
        owner_id=model.owner_id,
        object_key=model.object_key,
        content_type=model.content_type,
        size_bytes=model.size_bytes,
        created_at=as_utc(model.created_at),
        is_active=model.is_active,
        deleted_at=as_utc(model.deleted_at) if model.deleted_at else None,
    )


class StoredFileRepository:
    """Stored file metadata persistence through the soft-delete gateway."""

    def __init__(self, gateway: SoftDeleteGateway) -> None:
        self.gateway = gateway

    async def create(
        self,
        owner_id: UUID,
        object_key: str,
        content_type: str = "application/octet-stream",
        size_bytes: int = 0,
    ) -> StoredFile:
        model = await self.gateway.create(
            StoredFileModel,
            owner_id=owner_id,
            object_key=object_key,
            content_type=content_type,
            size_bytes=size_bytes,
        )
        return _to_domain(model)

    async def find_by_id(self, file_id: UUID) -> StoredFile | None:
        model = await self.gateway.find_one(
            StoredFileModel, StoredFileModel.id == file_id
        )
        return _to_domain(model) if model else None

    async def find_for_owner(self, owner_id: UUID) -> list[StoredFile]:
        """Active files of one owner, newest first."""
        models = await self.gateway.find_many(
            StoredFileModel,
            StoredFileModel.owner_id == owner_id,
            order_by=(StoredFileModel.created_at.desc(),),
        )
        return [_to_domain(model) for model in models]

    async def soft_delete(self, file_id: UUID) -> StoredFile | None:
        model = await self.gateway.soft_delete(
            StoredFileModel, StoredFileModel.id == file_id
        )
        return _to_domain(model) if model else None

    async def soft_delete_for_owner(self, owner_id: UUID) -> list[UUID]:
        """Soft-delete every active file of one owner. Returns their ids."""
        return await self.gateway.soft_delete_many(
            StoredFileModel, StoredFileModel.owner_id == owner_id
        )
