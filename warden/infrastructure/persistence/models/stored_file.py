"""Stored file metadata model (object storage uploads)."""

from uuid import UUID

from sqlalchemy import BigInteger, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from warden.infrastructure.persistence.base import BaseMutableModel, SoftDeleteMixin


class StoredFile(SoftDeleteMixin, BaseMutableModel):
    """Metadata row for an uploaded object (soft-deletable).

    Foreign Keys:
        - owner_id: References users(id) ON DELETE CASCADE
    """

    __tablename__ = "stored_files"

    owner_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="User who uploaded the object",
    )

    object_key: Mapped[str] = mapped_column(
        String(512),
        nullable=False,
        comment="Key of the object in external storage",
    )

    content_type: Mapped[str] = mapped_column(
        String(127),
        nullable=False,
        default="application/octet-stream",
    )

    size_bytes: Mapped[int] = mapped_column(
        BigInteger,
        nullable=False,
        default=0,
    )
