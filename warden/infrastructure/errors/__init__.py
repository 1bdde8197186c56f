"""Infrastructure errors package.

Usage:
    from warden.infrastructure.errors import DatabaseError, CacheError
"""

from warden.infrastructure.errors.infrastructure_error import (
    CacheError,
    DatabaseError,
    InfrastructureError,
)

__all__ = [
    "InfrastructureError",
    "DatabaseError",
    "CacheError",
]
