"""Token authority: issuance, validation and consumption of signed tokens.

State machine for persisted kinds (REFRESH, RESET_PASSWORD, VERIFY_EMAIL):

    ISSUED --consume/rotate--> CONSUMED (row deleted)
    ISSUED --exp passes------> EXPIRED  (signature check fails; row reaped later)
    ISSUED --revoke----------> REVOKED  (row deleted)

A persisted token is valid only while its row exists. ACCESS tokens are never
stored; they are valid while signed, unexpired and the subject has a live
session cache entry.

Writes flush into the session owned by the caller's scope, so refresh
rotation's delete and insert commit together.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any
from uuid import UUID

from warden.core.clock import Clock, utc_now
from warden.core.config import Settings
from warden.core.enums import ErrorCode
from warden.core.errors import NotFoundError
from warden.core.result import Failure, Result, Success
from warden.domain.entities import SessionDescriptor
from warden.domain.enums import TokenType
from warden.domain.errors import TokenError
from warden.domain.protocols import (
    SessionCacheProtocol,
    TokenData,
    TokenGenerationProtocol,
    TokenRepository,
    UserRepository,
)


@dataclass(frozen=True, slots=True, kw_only=True)
class TokenLifetimes:
    """How long each token kind stays valid."""

    access: timedelta = timedelta(minutes=30)
    refresh: timedelta = timedelta(days=30)
    reset_password: timedelta = timedelta(minutes=10)
    verify_email: timedelta = timedelta(minutes=10)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenLifetimes":
        return cls(
            access=timedelta(minutes=settings.access_token_expire_minutes),
            refresh=timedelta(days=settings.refresh_token_expire_days),
            reset_password=timedelta(
                minutes=settings.reset_password_token_expire_minutes
            ),
            verify_email=timedelta(minutes=settings.verify_email_token_expire_minutes),
        )

    def for_kind(self, kind: TokenType) -> timedelta:
        match kind:
            case TokenType.ACCESS:
                return self.access
            case TokenType.REFRESH:
                return self.refresh
            case TokenType.RESET_PASSWORD:
                return self.reset_password
            case TokenType.VERIFY_EMAIL:
                return self.verify_email


@dataclass(frozen=True, slots=True, kw_only=True)
class IssuedToken:
    """A signed token and its expiry."""

    token: str
    expires_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {"token": self.token, "expires": self.expires_at.isoformat()}


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthTokens:
    """ACCESS + REFRESH pair returned by login, register and refresh."""

    subject_id: UUID
    access: IssuedToken
    refresh: IssuedToken
    token_type: str = "bearer"

    def to_dict(self) -> dict[str, Any]:
        return {
            "access": self.access.to_dict(),
            "refresh": self.refresh.to_dict(),
            "token_type": self.token_type,
        }


class TokenAuthority:
    """Issues, verifies and consumes signed tokens.

    Usage:
        authority = TokenAuthority(
            token_service=jwt_service,
            token_repo=TokenRepository(session),
            user_repo=UserRepository(gateway),
            session_cache=session_cache,
        )
        match await authority.rotate_refresh_token(refresh_token):
            case Success(value=tokens):
                ...
            case Failure(error=reason):
                ...  # TokenError constant
    """

    def __init__(
        self,
        token_service: TokenGenerationProtocol,
        token_repo: TokenRepository,
        user_repo: UserRepository,
        session_cache: SessionCacheProtocol,
        lifetimes: TokenLifetimes | None = None,
        clock: Clock = utc_now,
    ) -> None:
        self._token_service = token_service
        self._token_repo = token_repo
        self._user_repo = user_repo
        self._session_cache = session_cache
        self._lifetimes = lifetimes or TokenLifetimes()
        self._clock = clock

    # ------------------------------------------------------------------
    # Primitives
    # ------------------------------------------------------------------

    def generate_token(
        self, subject_id: UUID, expires_at: datetime, kind: TokenType
    ) -> str:
        return self._token_service.generate_token(subject_id, kind, expires_at)

    async def save_token(
        self,
        token: str,
        subject_id: UUID,
        expires_at: datetime,
        kind: TokenType,
    ) -> TokenData:
        return await self._token_repo.save(token, subject_id, kind, expires_at)

    async def verify_token(self, token: str, kind: TokenType) -> Result[TokenData, str]:
        """Check signature, expiry and kind, then require the stored row.

        Returns:
            Success(TokenData) for the stored row, or Failure(TokenError).
        """
        if not kind.is_persisted:
            return Failure(error=TokenError.WRONG_TOKEN_TYPE)

        match self._token_service.decode_token(token, kind):
            case Failure(error=reason):
                return Failure(error=reason)
            case Success(value=claims):
                pass

        row = await self._token_repo.find(token, kind, claims.subject_id)
        if row is None:
            return Failure(error=TokenError.TOKEN_NOT_FOUND)
        return Success(value=row)

    async def authenticate_access_token(
        self, token: str
    ) -> Result[SessionDescriptor, str]:
        """Validate an ACCESS token against the session cache.

        A correctly signed, unexpired ACCESS token is still rejected when the
        subject has no cache entry (logged out, evicted, or never logged in).
        """
        match self._token_service.decode_token(token, TokenType.ACCESS):
            case Failure(error=reason):
                return Failure(error=reason)
            case Success(value=claims):
                descriptor = await self._session_cache.get(claims.subject_id)

        if descriptor is None:
            return Failure(error=TokenError.SESSION_NOT_FOUND)
        return Success(value=descriptor)

    def _issue(self, subject_id: UUID, kind: TokenType) -> IssuedToken:
        expires_at = self._clock() + self._lifetimes.for_kind(kind)
        return IssuedToken(
            token=self.generate_token(subject_id, expires_at, kind),
            expires_at=expires_at,
        )

    async def _issue_pair(self, subject_id: UUID) -> AuthTokens:
        access = self._issue(subject_id, TokenType.ACCESS)
        refresh = self._issue(subject_id, TokenType.REFRESH)
        await self.save_token(
            refresh.token, subject_id, refresh.expires_at, TokenType.REFRESH
        )
        return AuthTokens(subject_id=subject_id, access=access, refresh=refresh)

    # ------------------------------------------------------------------
    # Flows
    # ------------------------------------------------------------------

    async def generate_auth_tokens(
        self, subject_id: UUID
    ) -> Result[AuthTokens, NotFoundError]:
        """Issue an ACCESS token and a persisted REFRESH token."""
        user = await self._user_repo.find_by_id(subject_id)
        if user is None:
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.USER_NOT_FOUND,
                    message="User not found",
                    resource_type="User",
                    resource_id=str(subject_id),
                )
            )
        return Success(value=await self._issue_pair(user.id))

    async def rotate_refresh_token(self, token: str) -> Result[AuthTokens, str]:
        """Consume a REFRESH token and issue a new pair.

        The old row must be deleted by this call (exactly one row). If a
        concurrent rotation already deleted it, this call fails and issues
        nothing.
        """
        match await self.verify_token(token, TokenType.REFRESH):
            case Failure(error=reason):
                return Failure(error=reason)
            case Success(value=row):
                pass

        if await self._token_repo.delete(row.id) != 1:
            return Failure(error=TokenError.TOKEN_ALREADY_CONSUMED)

        user = await self._user_repo.find_by_id(row.user_id)
        if user is None:
            return Failure(error=TokenError.SUBJECT_NOT_FOUND)

        return Success(value=await self._issue_pair(user.id))

    async def generate_reset_password_token(
        self, email: str
    ) -> Result[IssuedToken, NotFoundError]:
        user = await self._user_repo.find_by_email(email)
        if user is None:
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.USER_NOT_FOUND,
                    message="No users found with this email",
                    resource_type="User",
                    resource_id=email,
                )
            )
        issued = self._issue(user.id, TokenType.RESET_PASSWORD)
        await self.save_token(
            issued.token, user.id, issued.expires_at, TokenType.RESET_PASSWORD
        )
        return Success(value=issued)

    async def generate_verify_email_token(
        self, subject_id: UUID
    ) -> Result[IssuedToken, NotFoundError]:
        user = await self._user_repo.find_by_id(subject_id)
        if user is None:
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.USER_NOT_FOUND,
                    message="User not found",
                    resource_type="User",
                    resource_id=str(subject_id),
                )
            )
        issued = self._issue(user.id, TokenType.VERIFY_EMAIL)
        await self.save_token(
            issued.token, user.id, issued.expires_at, TokenType.VERIFY_EMAIL
        )
        return Success(value=issued)

    async def consume_token(self, token: str, kind: TokenType) -> Result[UUID, str]:
        """Verify a single-use token, then delete every row of that kind for
        the subject. Returns the subject id.
        """
        match await self.verify_token(token, kind):
            case Failure(error=reason):
                return Failure(error=reason)
            case Success(value=row):
                pass

        if await self._token_repo.delete_for_user(row.user_id, kind) == 0:
            return Failure(error=TokenError.TOKEN_ALREADY_CONSUMED)
        return Success(value=row.user_id)

    async def revoke_refresh_token(self, token: str) -> Result[UUID, NotFoundError]:
        """Delete one REFRESH row by token string (logout). Returns its subject."""
        row = await self._token_repo.find_by_token(token, TokenType.REFRESH)
        if row is None or await self._token_repo.delete(row.id) != 1:
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.TOKEN_NOT_FOUND,
                    message="Not found",
                    resource_type="Token",
                    resource_id=TokenType.REFRESH.value,
                )
            )
        return Success(value=row.user_id)

    async def revoke_tokens(self, subject_id: UUID, kind: TokenType | None = None) -> int:
        """Delete stored tokens of ``kind`` (or all kinds) for a subject."""
        return await self._token_repo.delete_for_user(subject_id, kind)
