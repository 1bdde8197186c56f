"""Common error classes used across all layers.

Error Types:
- NotFoundError: Resource not found (unknown subject, unknown token row)
- ConflictError: Resource conflicts (duplicate e-mail)
- AuthenticationError: Authentication failures, uniform at the boundary

Usage:
    from warden.core.enums import ErrorCode
    from warden.core.errors import NotFoundError
    from warden.core.result import Failure

    return Failure(error=NotFoundError(
        code=ErrorCode.USER_NOT_FOUND,
        message="No users found with this email",
        resource_type="User",
        resource_id=email,
    ))
"""

from dataclasses import dataclass

from warden.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class NotFoundError(DomainError):
    """Resource not found.

    Attributes:
        resource_type: Type of resource (User, Token, ...).
        resource_id: Identifier that was looked up.
    """

    resource_type: str
    resource_id: str


@dataclass(frozen=True, slots=True, kw_only=True)
class ConflictError(DomainError):
    """Resource conflict (duplicate, state conflict).

    Attributes:
        resource_type: Type of resource in conflict.
        conflicting_field: Field that has the conflict.
    """

    resource_type: str
    conflicting_field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthenticationError(DomainError):
    """Authentication failure (bad credential, bad/expired/unmatched token).

    The message never says which check failed.
    """

    pass

