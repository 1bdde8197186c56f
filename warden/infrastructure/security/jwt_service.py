"""JWT token service (adapter).

Implements TokenGenerationProtocol with PyJWT and HMAC-SHA256.

Claims: ``{sub, type, iat, exp, jti}``. The ``type`` claim binds a token to
one TokenType, so a REFRESH token can never be presented as an ACCESS token.

Time checks use the injected clock rather than PyJWT's wall clock, so
issuance and verification always agree on "now".
"""

from datetime import UTC, datetime
from uuid import UUID

import jwt
from jwt.exceptions import InvalidTokenError
from uuid_extensions import uuid7

from warden.core.clock import Clock, utc_now
from warden.core.constants import JWT_MIN_SECRET_BYTES
from warden.core.result import Failure, Result, Success
from warden.domain.enums import TokenType
from warden.domain.errors import TokenError
from warden.domain.protocols.token_generation_protocol import TokenClaims

_REQUIRED_CLAIMS = ["sub", "type", "iat", "exp", "jti"]


class JWTService:
    """JWT token generation and validation service.

    Usage:
        token_service = JWTService(secret_key=settings.secret_key)
        token = token_service.generate_token(user_id, TokenType.ACCESS, expires_at)
        result = token_service.decode_token(token, TokenType.ACCESS)
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        clock: Clock = utc_now,
    ) -> None:
        """Initialize JWT service.

        Args:
            secret_key: HMAC signing secret, at least 32 bytes.
            algorithm: JWT algorithm (HS256 by default).
            clock: Source of "now" for ``iat`` and expiry checks.

        Raises:
            ValueError: If secret_key is too short.
        """
        if len(secret_key) < JWT_MIN_SECRET_BYTES:
            msg = "JWT secret key must be at least 32 bytes (256 bits)"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._algorithm = algorithm
        self._clock = clock

    def generate_token(
        self,
        subject_id: UUID,
        kind: TokenType,
        expires_at: datetime,
    ) -> str:
        """Sign a token for ``subject_id``.

        Example:
            >>> service = JWTService(secret_key="x" * 32)
            >>> token = service.generate_token(uuid7(), TokenType.ACCESS, expires_at)
            >>> len(token.split("."))
            3
        """
        payload = {
            "sub": str(subject_id),
            "type": kind.value,
            "iat": int(self._clock().timestamp()),
            "exp": int(expires_at.timestamp()),
            "jti": str(uuid7()),
        }
        token: str = jwt.encode(payload, self._secret_key, algorithm=self._algorithm)
        return token

    def decode_token(self, token: str, kind: TokenType) -> Result[TokenClaims, str]:
        """Verify signature, expiry and kind.

        Returns:
            Success(TokenClaims), or Failure with one of INVALID_TOKEN,
            EXPIRED_TOKEN, MALFORMED_TOKEN, WRONG_TOKEN_TYPE.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={
                    "require": _REQUIRED_CLAIMS,
                    "verify_exp": False,
                    "verify_iat": False,
                    "verify_nbf": False,
                },
            )
        except InvalidTokenError:
            return Failure(error=TokenError.INVALID_TOKEN)

        try:
            subject_id = UUID(str(payload["sub"]))
            token_kind = TokenType(payload["type"])
            issued_at = datetime.fromtimestamp(int(payload["iat"]), UTC)
            expires_at = datetime.fromtimestamp(int(payload["exp"]), UTC)
        except (TypeError, ValueError):
            return Failure(error=TokenError.MALFORMED_TOKEN)

        if expires_at <= self._clock():
            return Failure(error=TokenError.EXPIRED_TOKEN)
        if token_kind is not kind:
            return Failure(error=TokenError.WRONG_TOKEN_TYPE)

        return Success(
            value=TokenClaims(
                subject_id=subject_id,
                kind=token_kind,
                issued_at=issued_at,
                expires_at=expires_at,
                jti=str(payload["jti"]),
            )
        )
