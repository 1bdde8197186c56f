"""Centralized constants for internal implementation details.

These are NOT environment-specific configuration. For environment-specific
settings, use ``warden/core/config.py`` instead.

Example:
    >>> from warden.core.constants import PURGE_DELETE_BATCH_SIZE
"""

# =============================================================================
# Tokens
# =============================================================================

JWT_MIN_SECRET_BYTES: int = 32
"""Minimum HMAC secret length (32 bytes = 256 bits)."""

TOKEN_MAX_LENGTH: int = 512
"""Column width for persisted signed tokens."""

BCRYPT_ROUNDS_DEFAULT: int = 12
"""Default bcrypt work factor (cost parameter)."""


# =============================================================================
# Purge
# =============================================================================

PURGE_RETENTION_DAYS_DEFAULT: int = 7
"""Days a soft-deleted row is kept before it becomes eligible for purge."""

PURGE_DELETE_BATCH_SIZE: int = 500
"""Maximum ids per DELETE ... IN (...) statement (SQLite caps bound params)."""


# =============================================================================
# Cache
# =============================================================================

CACHE_KEY_PREFIX: str = "warden"
"""Namespace prefix for every cache key."""

CACHE_TIMEOUT_SECONDS_DEFAULT: float = 0.5
"""Upper bound for a single cache round-trip before it counts as a miss."""
