"""User roles carried in the cached session descriptor.

Usage:
    from warden.domain.enums import UserRole

    if UserRole.ADMIN.value in descriptor.roles:
        ...
"""

from enum import Enum


class UserRole(str, Enum):
    """User roles (lowercase values, stored as strings)."""

    ADMIN = "admin"
    USER = "user"