"""Domain errors package.

Usage:
    from warden.domain.errors import PurgeError, TokenError
"""

from warden.domain.errors.purge_error import PurgeError
from warden.domain.errors.token_error import TokenError

__all__ = ["PurgeError", "TokenError"]
