"""Token generation protocol for domain layer.

Signed-token issuance and stateless validation (signature, expiry, kind).
Stored-row and session-cache checks live in TokenAuthority, not here.

Architecture:
    - Domain defines protocol (port)
    - Infrastructure implements adapter (JWTService)
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID

from warden.core.result import Result
from warden.domain.enums import TokenType


@dataclass(frozen=True, slots=True, kw_only=True)
class TokenClaims:
    """Verified claims of a signed token.

    Attributes:
        subject_id: ``sub`` claim.
        kind: ``type`` claim.
        issued_at: ``iat`` claim (UTC).
        expires_at: ``exp`` claim (UTC).
        jti: Unique token id; makes two tokens issued in the same second
            for the same subject distinct.
    """

    subject_id: UUID
    kind: TokenType
    issued_at: datetime
    expires_at: datetime
    jti: str


class TokenGenerationProtocol(Protocol):
    """Signed token interface.

    Usage:
        token = token_service.generate_token(user.id, TokenType.REFRESH, expires_at)

        match token_service.decode_token(token, TokenType.REFRESH):
            case Success(value=claims):
                subject_id = claims.subject_id
            case Failure(error=reason):
                ...  # TokenError constant
    """

    def generate_token(
        self,
        subject_id: UUID,
        kind: TokenType,
        expires_at: datetime,
    ) -> str:
        """Sign a token with ``{sub, type, iat, exp, jti}`` claims."""
        ...

    def decode_token(self, token: str, kind: TokenType) -> Result[TokenClaims, str]:
        """Verify signature and expiry and require ``type == kind``.

        Returns:
            Success(TokenClaims) or Failure(TokenError constant). Never raises.
        """
        ...
