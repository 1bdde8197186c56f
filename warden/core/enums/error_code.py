"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming convention.
Used with Result types for railway-oriented programming.

Categories:
- Validation errors (VALIDATION_FAILED)
- Resource errors (*_NOT_FOUND)
- Conflict errors (*_ALREADY_EXISTS)
- Authentication errors (INVALID_CREDENTIALS, AUTHENTICATION_FAILED)
- Availability errors (SERVICE_UNAVAILABLE, retryable)
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable)."""

    # Validation errors
    VALIDATION_FAILED = "validation_failed"

    # Resource errors
    USER_NOT_FOUND = "user_not_found"
    TOKEN_NOT_FOUND = "token_not_found"

    # Conflict errors
    EMAIL_ALREADY_EXISTS = "email_already_exists"

    # Authentication errors
    INVALID_CREDENTIALS = "invalid_credentials"
    AUTHENTICATION_FAILED = "authentication_failed"

    # Availability errors
    SERVICE_UNAVAILABLE = "service_unavailable"
