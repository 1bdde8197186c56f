"""Authentication flows at the trust boundary.

Every token-related failure leaves this service as one uniform
``AuthenticationError("Please authenticate")``; the precise TokenError reason
is only logged. Login failures are uniform too: an unknown e-mail and a
wrong password produce the same error.

Flows:
- register: reject taken e-mail, create user, issue tokens, cache session
- login: verify credentials, issue tokens, cache session
- logout: delete the REFRESH row and the session cache entry; a cache
  failure is reported, since the ACCESS token would stay valid
- refresh_auth: rotate the REFRESH token, re-cache the session
- reset_password / verify_email: consume single-use tokens
- delete_account: soft delete the user and its files, revoke tokens, drop
  the session
"""

from dataclasses import dataclass
from typing import Any
from uuid import UUID

from warden.application.services.token_authority import (
    AuthTokens,
    IssuedToken,
    TokenAuthority,
)
from warden.core.enums import ErrorCode
from warden.core.errors import (
    AuthenticationError,
    ConflictError,
    DomainError,
    NotFoundError,
)
from warden.core.result import Failure, Result, Success
from warden.domain.entities import SessionDescriptor, User
from warden.domain.enums import TokenType
from warden.domain.protocols import (
    LoggerProtocol,
    PasswordHashingProtocol,
    SessionCacheProtocol,
    StoredFileRepository,
    UserRepository,
)

PLEASE_AUTHENTICATE = "Please authenticate"
INCORRECT_CREDENTIALS = "Incorrect email or password"


def _authentication_failed() -> AuthenticationError:
    return AuthenticationError(
        code=ErrorCode.AUTHENTICATION_FAILED,
        message=PLEASE_AUTHENTICATE,
    )


@dataclass(frozen=True, slots=True, kw_only=True)
class LoginResult:
    """User projection and tokens returned by register and login."""

    user: SessionDescriptor
    tokens: AuthTokens

    def to_dict(self) -> dict[str, Any]:
        return {"user": self.user.to_dict(), "tokens": self.tokens.to_dict()}


class AuthService:
    """Authentication use cases over TokenAuthority and the session cache.

    Usage:
        async with container.scope() as scope:
            result = await scope.auth_service.login(email, password)
    """

    def __init__(
        self,
        token_authority: TokenAuthority,
        user_repo: UserRepository,
        file_repo: StoredFileRepository,
        password_service: PasswordHashingProtocol,
        session_cache: SessionCacheProtocol,
        logger: LoggerProtocol,
    ) -> None:
        self._tokens = token_authority
        self._user_repo = user_repo
        self._file_repo = file_repo
        self._password_service = password_service
        self._session_cache = session_cache
        self._logger = logger

    async def _open_session(self, user: User) -> Result[LoginResult, NotFoundError]:
        descriptor = user.to_session_descriptor()
        match await self._tokens.generate_auth_tokens(user.id):
            case Failure(error=error):
                self._logger.warning(
                    "Token issuance failed", user_id=str(user.id), code=error.code.value
                )
                return Failure(error=error)
            case Success(value=tokens):
                pass
        await self._session_cache.set(user.id, descriptor)
        return Success(value=LoginResult(user=descriptor, tokens=tokens))

    async def _drop_session(self, subject_id: UUID) -> None:
        if isinstance(await self._session_cache.delete(subject_id), Failure):
            self._logger.error(
                "Session cache entry not removed", user_id=str(subject_id)
            )

    async def register(
        self,
        email: str,
        password: str,
        display_name: str | None = None,
    ) -> Result[LoginResult, ConflictError | NotFoundError]:
        """Create a user and log them in.

        The e-mail check includes soft-deleted rows: their e-mail stays
        reserved until the purge sweep removes them.
        """
        if await self._user_repo.email_taken(email):
            return Failure(
                error=ConflictError(
                    code=ErrorCode.EMAIL_ALREADY_EXISTS,
                    message="Email already taken",
                    resource_type="User",
                    conflicting_field="email",
                )
            )

        user = await self._user_repo.create(
            email=email,
            password_hash=self._password_service.hash_password(password),
            display_name=display_name,
        )
        self._logger.info("User registered", user_id=str(user.id))
        return await self._open_session(user)

    async def login(
        self, email: str, password: str
    ) -> Result[LoginResult, AuthenticationError]:
        user = await self._user_repo.find_by_email(email)
        if user is None or not self._password_service.verify_password(
            password, user.password_hash
        ):
            self._logger.warning("Login rejected", reason="invalid_credentials")
            return Failure(
                error=AuthenticationError(
                    code=ErrorCode.INVALID_CREDENTIALS,
                    message=INCORRECT_CREDENTIALS,
                )
            )

        match await self._open_session(user):
            case Success(value=login):
                self._logger.info("User logged in", user_id=str(user.id))
                return Success(value=login)
            case Failure():
                return Failure(error=_authentication_failed())

    async def logout(self, refresh_token: str) -> Result[None, DomainError]:
        """Delete the REFRESH row and the session cache entry.

        Dropping the cache entry is what invalidates outstanding ACCESS
        tokens for the subject. If the cache cannot be reached the REFRESH
        row is still gone, but the cache error is returned because ACCESS
        tokens keep working until the entry is removed or they expire.
        """
        match await self._tokens.revoke_refresh_token(refresh_token):
            case Failure(error=error):
                return Failure(error=error)
            case Success(value=subject_id):
                pass

        match await self._session_cache.delete(subject_id):
            case Failure(error=error):
                self._logger.error(
                    "Logout could not invalidate session",
                    user_id=str(subject_id),
                    code=error.code.value,
                )
                return Failure(error=error)
            case Success():
                pass

        self._logger.info("User logged out", user_id=str(subject_id))
        return Success(value=None)

    async def refresh_auth(
        self, refresh_token: str
    ) -> Result[AuthTokens, AuthenticationError]:
        match await self._tokens.rotate_refresh_token(refresh_token):
            case Failure(error=reason):
                self._logger.warning("Token refresh rejected", reason=reason)
                return Failure(error=_authentication_failed())
            case Success(value=tokens):
                pass

        user = await self._user_repo.find_by_id(tokens.subject_id)
        if user is not None:
            await self._session_cache.set(user.id, user.to_session_descriptor())
        return Success(value=tokens)

    async def authenticate(
        self, access_token: str
    ) -> Result[SessionDescriptor, AuthenticationError]:
        """Resolve a bearer ACCESS token to the cached session descriptor."""
        match await self._tokens.authenticate_access_token(access_token):
            case Failure(error=reason):
                self._logger.debug("Access token rejected", reason=reason)
                return Failure(error=_authentication_failed())
            case Success(value=descriptor):
                return Success(value=descriptor)

    async def request_password_reset(
        self, email: str
    ) -> Result[IssuedToken, NotFoundError]:
        """Issue a RESET_PASSWORD token. Delivery is the caller's concern."""
        return await self._tokens.generate_reset_password_token(email)

    async def reset_password(
        self, token: str, new_password: str
    ) -> Result[None, AuthenticationError]:
        """Consume a RESET_PASSWORD token and set a new password.

        All outstanding RESET_PASSWORD and REFRESH tokens of the subject are
        removed and the session cache entry is dropped.
        """
        match await self._tokens.consume_token(token, TokenType.RESET_PASSWORD):
            case Failure(error=reason):
                self._logger.warning("Password reset rejected", reason=reason)
                return Failure(error=_authentication_failed())
            case Success(value=subject_id):
                pass

        updated = await self._user_repo.update(
            subject_id,
            password_hash=self._password_service.hash_password(new_password),
        )
        if updated is None:
            self._logger.warning("Password reset rejected", reason="subject_not_found")
            return Failure(error=_authentication_failed())

        await self._tokens.revoke_tokens(subject_id, TokenType.REFRESH)
        await self._drop_session(subject_id)
        self._logger.info("Password reset", user_id=str(subject_id))
        return Success(value=None)

    async def request_email_verification(
        self, subject_id: UUID
    ) -> Result[IssuedToken, NotFoundError]:
        return await self._tokens.generate_verify_email_token(subject_id)

    async def verify_email(self, token: str) -> Result[None, AuthenticationError]:
        match await self._tokens.consume_token(token, TokenType.VERIFY_EMAIL):
            case Failure(error=reason):
                self._logger.warning("Email verification rejected", reason=reason)
                return Failure(error=_authentication_failed())
            case Success(value=subject_id):
                pass

        updated = await self._user_repo.update(subject_id, is_email_verified=True)
        if updated is None:
            return Failure(error=_authentication_failed())

        self._logger.info("Email verified", user_id=str(subject_id))
        return Success(value=None)

    async def delete_account(self, subject_id: UUID) -> Result[None, NotFoundError]:
        """Soft-delete the user and its files, revoke tokens, drop the session.

        Each file gets its own audit entry in the same unit of work, so no
        active file is left behind for the users foreign-key cascade.
        """
        user = await self._user_repo.soft_delete(subject_id)
        if user is None:
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.USER_NOT_FOUND,
                    message="User not found",
                    resource_type="User",
                    resource_id=str(subject_id),
                )
            )

        file_ids = await self._file_repo.soft_delete_for_owner(subject_id)
        await self._tokens.revoke_tokens(subject_id)
        await self._drop_session(subject_id)
        self._logger.info(
            "Account deleted", user_id=str(subject_id), files_deleted=len(file_ids)
        )
        return Success(value=None)
