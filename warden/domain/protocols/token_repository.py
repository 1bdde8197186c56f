"""TokenRepository protocol (port) for persisted signed tokens.

REFRESH, RESET_PASSWORD and VERIFY_EMAIL tokens are stored as rows; a row's
presence is what makes the token usable. ACCESS tokens are never stored.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID

from warden.domain.enums import TokenType


@dataclass(frozen=True, slots=True, kw_only=True)
class TokenData:
    """Data transfer object for a stored token row."""

    id: UUID
    token: str
    user_id: UUID
    kind: TokenType
    expires_at: datetime
    created_at: datetime


class TokenRepository(Protocol):
    """Persistence operations for stored tokens.

    Writes flush into the caller's transaction; the session owner commits.
    """

    async def save(
        self,
        token: str,
        user_id: UUID,
        kind: TokenType,
        expires_at: datetime,
    ) -> TokenData:
        """Insert a token row."""
        ...

    async def find(self, token: str, kind: TokenType, user_id: UUID) -> TokenData | None:
        """Find the row matching ``(token, kind, user_id)``."""
        ...

    async def find_by_token(self, token: str, kind: TokenType) -> TokenData | None:
        """Find a row by token string and kind, whoever owns it."""
        ...

    async def delete(self, token_id: UUID) -> int:
        """Delete one row by id. Returns the number of rows deleted (0 or 1)."""
        ...

    async def delete_for_user(self, user_id: UUID, kind: TokenType | None = None) -> int:
        """Delete every row of ``kind`` (or every kind) for a user."""
        ...

    async def delete_expired(self, now: datetime) -> int:
        """Delete rows whose ``expires_at`` is at or before ``now``."""
        ...

    async def count_for_user(self, user_id: UUID, kind: TokenType | None = None) -> int:
        """Count rows for a user, optionally of one kind."""
        ...
