"""Infrastructure layer error types.

Infrastructure errors represent failures in external systems (database, cache).

Architecture:
- Infrastructure catches library exceptions and maps them to DomainError
- Infrastructure errors inherit from DomainError (not Exception)
- InfrastructureErrorCode is kept for internal tracking
- Used with Result types for error propagation
"""

from dataclasses import dataclass

from warden.core.errors import DomainError
from warden.infrastructure.enums import InfrastructureErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class InfrastructureError(DomainError):
    """Base infrastructure error.

    Attributes:
        code: Domain ErrorCode (maps from InfrastructureErrorCode).
        message: Human-readable message.
        infrastructure_code: Original infrastructure error code.
        details: Additional context.
    """

    infrastructure_code: InfrastructureErrorCode | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class DatabaseError(InfrastructureError):
    """Database-specific errors (wraps SQLAlchemy exceptions)."""

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class CacheError(InfrastructureError):
    """Cache-specific errors (wraps Redis exceptions and timeouts).

    Attributes:
        details: Usually ``{"key": ..., "error": ...}``.
    """

    pass
