"""Soft-delete audit ledger model.

Append-only: one row per soft delete. Duplicates for the same item are
allowed. Rows are removed only by the purge sweep or by a restore.
"""

from uuid import UUID

from sqlalchemy import Index, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from warden.infrastructure.persistence.base import BaseModel


class SoftDeletedItem(BaseModel):
    """Audit entry pointing at a soft-deleted row.

    Fields:
        item_id: Primary key of the soft-deleted row (no FK: the row is
            physically deleted before this entry).
        entity_type: EntityRegistry tag of the row's model.
        created_at: Time of the soft delete (from BaseModel).
    """

    __tablename__ = "soft_deleted_items"

    item_id: Mapped[UUID] = mapped_column(
        Uuid,
        nullable=False,
        index=True,
    )

    entity_type: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
    )

    __table_args__ = (
        Index("idx_soft_deleted_items_created_at", "created_at"),
        Index("idx_soft_deleted_items_entity", "entity_type", "item_id"),
    )
