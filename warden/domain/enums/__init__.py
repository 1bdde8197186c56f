"""Domain enums.

Usage:
    from warden.domain.enums import TokenType, UserRole
"""

from warden.domain.enums.token_type import TokenType
from warden.domain.enums.user_role import UserRole

__all__ = ["TokenType", "UserRole"]
