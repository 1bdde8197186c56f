"""Core errors package.

Usage:
    from warden.core.errors import DomainError, NotFoundError, AuthenticationError
"""

from warden.core.errors.common_errors import (
    AuthenticationError,
    ConflictError,
    NotFoundError,
)
from warden.core.errors.domain_error import DomainError

__all__ = [
    "DomainError",
    "NotFoundError",
    "ConflictError",
    "AuthenticationError",
]
