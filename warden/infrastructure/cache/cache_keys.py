"""Cache key construction utilities.

All keys follow the pattern ``{prefix}:{domain}:{resource}:{id}``.

Usage:
    keys = CacheKeys(prefix="warden")
    key = keys.session_user(user_id)  # "warden:session:user:{user_id}"
"""

from dataclasses import dataclass
from uuid import UUID

from warden.core.constants import CACHE_KEY_PREFIX


@dataclass(frozen=True)
class CacheKeys:
    """Centralized cache key construction.

    Attributes:
        prefix: Namespace prefix shared by every key.
    """

    prefix: str = CACHE_KEY_PREFIX

    def session_user(self, user_id: UUID) -> str:
        """Session descriptor key. Pattern: {prefix}:session:user:{user_id}"""
        return f"{self.prefix}:session:user:{user_id}"
