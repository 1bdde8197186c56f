"""Database models for persistence layer.

Models Organization:
    - user.py: User model (soft-deletable)
    - stored_file.py: Object storage upload metadata (soft-deletable)
    - token.py: Persisted signed tokens
    - soft_deleted_item.py: Soft-delete audit ledger

Note:
    Domain entities (dataclasses) live in warden/domain/entities/
    and are mapped from these models by the repositories.
"""

from warden.infrastructure.persistence.models.soft_deleted_item import (
    SoftDeletedItem,
)
from warden.infrastructure.persistence.models.stored_file import StoredFile
from warden.infrastructure.persistence.models.token import Token
from warden.infrastructure.persistence.models.user import User

__all__ = [
    "SoftDeletedItem",
    "StoredFile",
    "Token",
    "User",
]
