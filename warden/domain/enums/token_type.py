"""Signed token kinds.

Only ACCESS tokens are never persisted; the other kinds are stored rows that
can be consumed exactly once.
"""

from enum import Enum


class TokenType(str, Enum):
    """Kind claim carried in every signed token (the ``type`` claim)."""

    ACCESS = "access"
    REFRESH = "refresh"
    RESET_PASSWORD = "resetPassword"
    VERIFY_EMAIL = "verifyEmail"

    @property
    def is_persisted(self) -> bool:
        """True for kinds stored in the tokens table."""
        return self is not TokenType.ACCESS
