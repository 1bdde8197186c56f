"""Infrastructure-specific error codes.

Internal codes for tracking infrastructure failures. They are mapped to
domain ErrorCode when flowing to the domain layer.

Categories:
- Database errors (DATABASE_*)
- Cache errors (CACHE_*)
"""

from enum import Enum


class InfrastructureErrorCode(Enum):
    """Infrastructure-specific error codes."""

    # Database errors
    DATABASE_ERROR = "database_error"

    # Cache errors
    CACHE_CONNECTION_ERROR = "cache_connection_error"
    CACHE_TIMEOUT = "cache_timeout"
    CACHE_GET_ERROR = "cache_get_error"
    CACHE_SET_ERROR = "cache_set_error"
    CACHE_DELETE_ERROR = "cache_delete_error"
