"""Base model and mixins for all database entities.

This module provides:
- BaseModel: Base class for ALL models (provides id, created_at)
- TimestampMixin: Internal mixin that adds updated_at
- BaseMutableModel: Base for mutable models (combines above)
- SoftDeleteMixin: is_active / deleted_at for entities governed by the
  soft-delete gateway

Domain entities do NOT inherit from these; repositories map between them.

Architecture:
    BaseModel (id, created_at)
        ├── BaseMutableModel (+ updated_at)
        │   ├── User (+ SoftDeleteMixin)
        │   └── StoredFile (+ SoftDeleteMixin)
        ├── Token
        └── SoftDeletedItem (immutable)

Timestamps use Python-side defaults so the value is known on the instance
right after flush (async sessions cannot lazy-load server defaults).
"""

from datetime import datetime
from typing import Any
from uuid import UUID as PythonUUID, uuid4

from sqlalchemy import Boolean, DateTime, Uuid, true
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from warden.core.clock import utc_now


class BaseModel(DeclarativeBase):
    """Base class for all database models.

    Provides:
    - id: UUID primary key (auto-generated)
    - created_at: Timestamp when record was created (UTC)
    """

    __abstract__ = True

    id: Mapped[PythonUUID] = mapped_column(
        Uuid,
        primary_key=True,
        default=uuid4,
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
    )

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}(id={self.id})>"

    def to_dict(self) -> dict[str, Any]:
        """Convert model to dictionary (for debugging/logging)."""
        return {
            "id": str(self.id),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


class TimestampMixin:
    """Mixin for mutable models that track updates."""

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        onupdate=utc_now,
    )

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = super().to_dict()  # type: ignore[misc]
        data["updated_at"] = self.updated_at.isoformat() if self.updated_at else None
        return data


class BaseMutableModel(TimestampMixin, BaseModel):
    """Base class for mutable database models (id, created_at, updated_at)."""

    __abstract__ = True


class SoftDeleteMixin:
    """Soft-delete state for entities registered with the EntityRegistry.

    Invariant: ``deleted_at is not None`` exactly when ``is_active`` is False.
    Only the soft-delete gateway writes these columns.
    """

    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=true(),
        index=True,
    )

    deleted_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )