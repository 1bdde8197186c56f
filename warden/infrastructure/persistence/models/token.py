"""Persisted signed token model.

REFRESH, RESET_PASSWORD and VERIFY_EMAIL tokens are stored here. A token is
usable only while its row exists; consuming it deletes the row.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from warden.core.constants import TOKEN_MAX_LENGTH
from warden.infrastructure.persistence.base import BaseModel


class Token(BaseModel):
    """Stored token row (immutable: rows are inserted and deleted, never updated).

    Fields:
        token: Signed token string (unique).
        user_id: Subject the token was issued to.
        kind: TokenType value.
        expires_at: Expiry copied from the ``exp`` claim.

    Foreign Keys:
        - user_id: References users(id) ON DELETE CASCADE
    """

    __tablename__ = "tokens"

    token: Mapped[str] = mapped_column(
        String(TOKEN_MAX_LENGTH),
        nullable=False,
        unique=True,
        index=True,
    )

    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    kind: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
    )

    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        index=True,
    )

    __table_args__ = (Index("idx_tokens_user_kind", "user_id", "kind"),)

    def __repr__(self) -> str:
        return (
            f"<Token(id={self.id}, user_id={self.user_id}, "
            f"kind={self.kind}, expires_at={self.expires_at})>"
        )
