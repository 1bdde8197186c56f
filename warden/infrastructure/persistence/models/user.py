"""User database model."""

from sqlalchemy import JSON, Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from warden.domain.enums import UserRole
from warden.infrastructure.persistence.base import BaseMutableModel, SoftDeleteMixin


def _default_roles() -> list[str]:
    return [UserRole.USER.value]


class User(SoftDeleteMixin, BaseMutableModel):
    """User model (soft-deletable).

    Fields:
        email: Unique lowercase e-mail address. Uniqueness spans
            soft-deleted rows until they are purged.
        password_hash: Bcrypt hash (NEVER plaintext).
        display_name: Optional display name.
        roles: Role names as a JSON list.
        is_email_verified: Set by the verify-email flow.
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True,
        comment="User email address (lowercase)",
    )

    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password (NEVER plaintext)",
    )

    display_name: Mapped[str | None] = mapped_column(
        String(100),
        nullable=True,
        default=None,
    )

    roles: Mapped[list[str]] = mapped_column(
        JSON,
        nullable=False,
        default=_default_roles,
    )

    is_email_verified: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email}, is_active={self.is_active})>"
