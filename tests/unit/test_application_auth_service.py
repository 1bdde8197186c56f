"""Unit tests for AuthService boundary behavior (mocked collaborators)."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from uuid_extensions import uuid7

from warden.application.services.auth_service import (
    INCORRECT_CREDENTIALS,
    PLEASE_AUTHENTICATE,
    AuthService,
)
from warden.core.enums import ErrorCode
from warden.core.errors import NotFoundError
from warden.core.result import Failure, Success
from warden.domain.entities import SessionDescriptor
from warden.domain.errors import TokenError
from warden.infrastructure.cache import RedisAdapter, RedisSessionCache
from warden.infrastructure.enums import InfrastructureErrorCode


@pytest.fixture
def token_authority():
    return MagicMock()


@pytest.fixture
def user_repo():
    return MagicMock()


@pytest.fixture
def file_repo():
    repo = MagicMock()
    repo.soft_delete_for_owner = AsyncMock(return_value=[])
    return repo


@pytest.fixture
def password_service():
    return MagicMock()


@pytest.fixture
def session_cache():
    cache = MagicMock()
    cache.set = AsyncMock(return_value=True)
    cache.delete = AsyncMock(return_value=Success(value=True))
    return cache


@pytest.fixture
def auth_service(token_authority, user_repo, file_repo, password_service, session_cache):
    return AuthService(
        token_authority=token_authority,
        user_repo=user_repo,
        file_repo=file_repo,
        password_service=password_service,
        session_cache=session_cache,
        logger=MagicMock(),
    )


@pytest.mark.unit
class TestUniformAuthenticationFailure:
    """Every token failure reason leaves as one "Please authenticate" error."""

    @pytest.mark.parametrize(
        "reason",
        [
            TokenError.INVALID_TOKEN,
            TokenError.EXPIRED_TOKEN,
            TokenError.MALFORMED_TOKEN,
            TokenError.WRONG_TOKEN_TYPE,
            TokenError.SESSION_NOT_FOUND,
        ],
    )
    async def test_authenticate_collapses_reasons(
        self, auth_service, token_authority, reason
    ):
        token_authority.authenticate_access_token = AsyncMock(
            return_value=Failure(error=reason)
        )

        result = await auth_service.authenticate("token")

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.AUTHENTICATION_FAILED
        assert result.error.message == PLEASE_AUTHENTICATE

    @pytest.mark.parametrize(
        "reason",
        [
            TokenError.TOKEN_NOT_FOUND,
            TokenError.TOKEN_ALREADY_CONSUMED,
            TokenError.SUBJECT_NOT_FOUND,
        ],
    )
    async def test_refresh_collapses_reasons(self, auth_service, token_authority, reason):
        token_authority.rotate_refresh_token = AsyncMock(return_value=Failure(error=reason))

        result = await auth_service.refresh_auth("refresh")

        assert isinstance(result, Failure)
        assert result.error.message == PLEASE_AUTHENTICATE

    async def test_authenticate_returns_descriptor(self, auth_service, token_authority):
        descriptor = SessionDescriptor(id=uuid7(), email="a@example.com")
        token_authority.authenticate_access_token = AsyncMock(
            return_value=Success(value=descriptor)
        )

        assert await auth_service.authenticate("token") == Success(value=descriptor)


@pytest.mark.unit
class TestLoginFailures:
    """Unknown e-mail and wrong password are indistinguishable."""

    async def test_unknown_email(self, auth_service, user_repo, password_service):
        user_repo.find_by_email = AsyncMock(return_value=None)

        result = await auth_service.login("nobody@example.com", "pw")

        assert result.error.code == ErrorCode.INVALID_CREDENTIALS
        assert result.error.message == INCORRECT_CREDENTIALS
        password_service.verify_password.assert_not_called()

    async def test_wrong_password(self, auth_service, user_repo, password_service):
        user_repo.find_by_email = AsyncMock(return_value=MagicMock(password_hash="h"))
        password_service.verify_password.return_value = False

        result = await auth_service.login("user@example.com", "wrong")

        assert result.error.code == ErrorCode.INVALID_CREDENTIALS
        assert result.error.message == INCORRECT_CREDENTIALS


@pytest.mark.unit
class TestResetPasswordBoundary:
    async def test_consumed_token_rejected_without_side_effects(
        self, auth_service, token_authority, user_repo, session_cache
    ):
        token_authority.consume_token = AsyncMock(
            return_value=Failure(error=TokenError.TOKEN_NOT_FOUND)
        )
        user_repo.update = AsyncMock()

        result = await auth_service.reset_password("token", "NewPass123!")

        assert result.error.message == PLEASE_AUTHENTICATE
        user_repo.update.assert_not_called()
        session_cache.delete.assert_not_called()


def user_not_found(user_id) -> NotFoundError:
    return NotFoundError(
        code=ErrorCode.USER_NOT_FOUND,
        message="User not found",
        resource_type="User",
        resource_id=str(user_id),
    )


@pytest.mark.unit
class TestTokenIssuanceFailure:
    """A failed token issuance is returned, not raised, and caches nothing."""

    async def test_register_returns_failure(
        self, auth_service, token_authority, user_repo, session_cache
    ):
        user = MagicMock(id=uuid7())
        user_repo.email_taken = AsyncMock(return_value=False)
        user_repo.create = AsyncMock(return_value=user)
        token_authority.generate_auth_tokens = AsyncMock(
            return_value=Failure(error=user_not_found(user.id))
        )

        result = await auth_service.register("new@example.com", "Password1")

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.USER_NOT_FOUND
        session_cache.set.assert_not_called()

    async def test_login_collapses_to_please_authenticate(
        self, auth_service, token_authority, user_repo, password_service, session_cache
    ):
        user = MagicMock(id=uuid7(), password_hash="h")
        user_repo.find_by_email = AsyncMock(return_value=user)
        password_service.verify_password.return_value = True
        token_authority.generate_auth_tokens = AsyncMock(
            return_value=Failure(error=user_not_found(user.id))
        )

        result = await auth_service.login("user@example.com", "Password1")

        assert result.error.code == ErrorCode.AUTHENTICATION_FAILED
        assert result.error.message == PLEASE_AUTHENTICATE
        session_cache.set.assert_not_called()


@pytest.mark.unit
class TestLogoutCacheFailure:
    """A logout that cannot drop the session entry reports the cache error."""

    @pytest.fixture
    def hanging_cache(self):
        async def hang(*args, **kwargs):
            await asyncio.sleep(5)

        client = AsyncMock()
        client.delete = hang
        return RedisSessionCache(RedisAdapter(client, timeout_seconds=0.01))

    async def test_logout_with_hanging_cache(
        self, token_authority, user_repo, file_repo, password_service, hanging_cache
    ):
        subject_id = uuid7()
        token_authority.revoke_refresh_token = AsyncMock(
            return_value=Success(value=subject_id)
        )
        service = AuthService(
            token_authority=token_authority,
            user_repo=user_repo,
            file_repo=file_repo,
            password_service=password_service,
            session_cache=hanging_cache,
            logger=MagicMock(),
        )

        result = await service.logout("refresh")

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.SERVICE_UNAVAILABLE
        assert result.error.infrastructure_code == InfrastructureErrorCode.CACHE_TIMEOUT
        token_authority.revoke_refresh_token.assert_awaited_once_with("refresh")

    async def test_logout_without_cache_entry_succeeds(
        self, auth_service, token_authority, session_cache
    ):
        token_authority.revoke_refresh_token = AsyncMock(
            return_value=Success(value=uuid7())
        )
        session_cache.delete = AsyncMock(return_value=Success(value=False))

        assert await auth_service.logout("refresh") == Success(value=None)
