"""Stored file metadata entity (object storage upload record)."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass
class StoredFile:
    """Metadata for an object uploaded to external storage.

    The object itself lives in object storage; only its key is kept here.
    """

    id: UUID
    owner_id: UUID
    object_key: str
    content_type: str
    size_bytes: int
    created_at: datetime
    is_active: bool = True
    deleted_at: datetime | None = None
