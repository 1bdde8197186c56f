"""User domain entity.

Pure business data, no framework dependencies. Soft-delete state
(``is_active`` / ``deleted_at``) is exposed read-only: the only writer is the
soft-delete gateway.
"""

from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from warden.domain.entities.session_descriptor import SessionDescriptor
from warden.domain.enums import UserRole


@dataclass
class User:
    """User domain entity.

    Attributes:
        id: Unique user identifier.
        email: Lowercased e-mail address (unique among all rows).
        password_hash: Bcrypt hash, never plaintext.
        display_name: Optional display name.
        roles: Role names, defaults to ``["user"]``.
        is_email_verified: Set once a VERIFY_EMAIL token is consumed.
        is_active: False once soft-deleted.
        deleted_at: Soft-delete timestamp (None while active).
        created_at: Creation timestamp.
        updated_at: Last update timestamp.
    """

    id: UUID
    email: str
    password_hash: str
    created_at: datetime
    updated_at: datetime
    display_name: str | None = None
    roles: list[str] = field(default_factory=lambda: [UserRole.USER.value])
    is_email_verified: bool = False
    is_active: bool = True
    deleted_at: datetime | None = None

    def to_session_descriptor(self) -> SessionDescriptor:
        """Project the user onto the cached session descriptor."""
        return SessionDescriptor(
            id=self.id,
            email=self.email,
            display_name=self.display_name,
            roles=tuple(self.roles),
        )
