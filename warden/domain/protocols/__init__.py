"""Domain protocols (ports).

Usage:
    from warden.domain.protocols import TokenRepository, SessionCacheProtocol
"""

from warden.domain.protocols.audit_ledger_protocol import (
    AuditLedgerProtocol,
    AuditRecord,
)
from warden.domain.protocols.cache_protocol import CacheProtocol
from warden.domain.protocols.logger_protocol import LoggerProtocol
from warden.domain.protocols.password_hashing_protocol import (
    PasswordHashingProtocol,
)
from warden.domain.protocols.session_cache_protocol import SessionCacheProtocol
from warden.domain.protocols.stored_file_repository import StoredFileRepository
from warden.domain.protocols.token_generation_protocol import (
    TokenClaims,
    TokenGenerationProtocol,
)
from warden.domain.protocols.token_repository import TokenData, TokenRepository
from warden.domain.protocols.user_repository import UserRepository

__all__ = [
    "AuditLedgerProtocol",
    "AuditRecord",
    "CacheProtocol",
    "LoggerProtocol",
    "PasswordHashingProtocol",
    "SessionCacheProtocol",
    "StoredFileRepository",
    "TokenClaims",
    "TokenData",
    "TokenGenerationProtocol",
    "TokenRepository",
    "UserRepository",
]
