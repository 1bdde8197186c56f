"""UserRepository protocol (port).

Every read except ``email_taken`` goes through the soft-delete filter: a
soft-deleted user is invisible to lookups.
"""

from typing import Any, Protocol
from uuid import UUID

from warden.domain.entities import User


class UserRepository(Protocol):
    """User persistence operations."""

    async def create(
        self,
        email: str,
        password_hash: str,
        display_name: str | None = None,
        roles: list[str] | None = None,
    ) -> User:
        """Insert a user (e-mail is lowercased)."""
        ...

    async def find_by_id(self, user_id: UUID) -> User | None:
        """Find an active user by id."""
        ...

    async def find_by_email(self, email: str) -> User | None:
        """Find an active user by e-mail (case-insensitive)."""
        ...

    async def email_taken(self, email: str) -> bool:
        """True if any row, active or soft-deleted, holds the e-mail.

        Unfiltered because the unique constraint spans soft-deleted rows
        until they are purged.
        """
        ...

    async def update(self, user_id: UUID, **values: Any) -> User | None:
        """Update an active user. Returns None if no active row matched."""
        ...

    async def soft_delete(self, user_id: UUID) -> User | None:
        """Soft-delete an active user and record it in the audit ledger."""
        ...
