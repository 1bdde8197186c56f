"""Integration tests for TokenAuthority (JWT + tokens table + session cache)."""

import pytest
from uuid_extensions import uuid7

from warden.core.enums import ErrorCode
from warden.core.errors import NotFoundError
from warden.core.result import Failure, Success
from warden.domain.entities import SessionDescriptor
from warden.domain.enums import TokenType
from warden.domain.errors import TokenError


async def issue_pair(container, user_id):
    async with container.scope() as scope:
        result = await scope.token_authority.generate_auth_tokens(user_id)
    assert isinstance(result, Success)
    return result.value


async def rotate(container, refresh_token):
    async with container.scope() as scope:
        return await scope.token_authority.rotate_refresh_token(refresh_token)


@pytest.mark.integration
class TestIssuance:
    async def test_generate_auth_tokens_persists_refresh_only(self, container, make_user):
        user_id = await make_user()

        tokens = await issue_pair(container, user_id)

        async with container.scope() as scope:
            assert await scope.tokens.count_for_user(user_id, TokenType.REFRESH) == 1
            assert await scope.tokens.count_for_user(user_id, TokenType.ACCESS) == 0
        assert tokens.subject_id == user_id
        assert tokens.access.expires_at == container.clock() + container.lifetimes.access
        assert tokens.refresh.expires_at == container.clock() + container.lifetimes.refresh

    async def test_unknown_subject_is_not_found(self, container):
        async with container.scope() as scope:
            result = await scope.token_authority.generate_auth_tokens(uuid7())

        assert isinstance(result, Failure)
        assert isinstance(result.error, NotFoundError)
        assert result.error.code == ErrorCode.USER_NOT_FOUND

    async def test_reset_token_for_unknown_email(self, container):
        async with container.scope() as scope:
            result = await scope.token_authority.generate_reset_password_token(
                "nobody@example.com"
            )

        assert isinstance(result, Failure)
        assert result.error.message == "No users found with this email"

    async def test_access_tokens_are_never_saved(self, container, make_user):
        user_id = await make_user()

        async with container.scope() as scope:
            authority = scope.token_authority
            token = authority.generate_token(
                user_id, container.clock() + container.lifetimes.access, TokenType.ACCESS
            )
            with pytest.raises(ValueError, match="not persisted"):
                await authority.save_token(
                    token, user_id, container.clock(), TokenType.ACCESS
                )


@pytest.mark.integration
class TestVerify:
    async def test_verify_requires_stored_row(self, container, make_user):
        user_id = await make_user()

        async with container.scope() as scope:
            authority = scope.token_authority
            expires_at = container.clock() + container.lifetimes.refresh
            unsaved = authority.generate_token(user_id, expires_at, TokenType.REFRESH)
            assert await authority.verify_token(unsaved, TokenType.REFRESH) == Failure(
                error=TokenError.TOKEN_NOT_FOUND
            )

            await authority.save_token(unsaved, user_id, expires_at, TokenType.REFRESH)
            result = await authority.verify_token(unsaved, TokenType.REFRESH)

        assert isinstance(result, Success)
        assert result.value.user_id == user_id
        assert result.value.kind is TokenType.REFRESH

    async def test_verify_rejects_access_kind(self, container, make_user):
        tokens = await issue_pair(container, await make_user())

        async with container.scope() as scope:
            result = await scope.token_authority.verify_token(
                tokens.access.token, TokenType.ACCESS
            )

        assert result == Failure(error=TokenError.WRONG_TOKEN_TYPE)

    async def test_refresh_token_cannot_reset_password(self, container, make_user):
        tokens = await issue_pair(container, await make_user())

        async with container.scope() as scope:
            result = await scope.token_authority.consume_token(
                tokens.refresh.token, TokenType.RESET_PASSWORD
            )

        assert result == Failure(error=TokenError.WRONG_TOKEN_TYPE)

    async def test_expired_refresh_token(self, container, clock, make_user):
        tokens = await issue_pair(container, await make_user())
        clock.advance(days=31)

        result = await rotate(container, tokens.refresh.token)

        assert result == Failure(error=TokenError.EXPIRED_TOKEN)


@pytest.mark.integration
class TestRefreshRotation:
    async def test_rotation_is_single_use(self, container, make_user):
        """R1 -> R2; R1 again fails; R2 succeeds exactly once."""
        tokens = await issue_pair(container, await make_user())
        r1 = tokens.refresh.token

        rotated = await rotate(container, r1)
        assert isinstance(rotated, Success)
        r2 = rotated.value.refresh.token
        assert r2 != r1

        assert await rotate(container, r1) == Failure(error=TokenError.TOKEN_NOT_FOUND)

        assert isinstance(await rotate(container, r2), Success)
        assert await rotate(container, r2) == Failure(error=TokenError.TOKEN_NOT_FOUND)

    async def test_rotation_keeps_one_refresh_row(self, container, make_user):
        user_id = await make_user()
        tokens = await issue_pair(container, user_id)

        await rotate(container, tokens.refresh.token)

        async with container.scope() as scope:
            assert await scope.tokens.count_for_user(user_id, TokenType.REFRESH) == 1

    async def test_rotation_for_deleted_subject(self, container, make_user, soft_delete_user):
        user_id = await make_user()
        tokens = await issue_pair(container, user_id)
        await soft_delete_user(user_id)

        result = await rotate(container, tokens.refresh.token)

        assert result == Failure(error=TokenError.SUBJECT_NOT_FOUND)


@pytest.mark.integration
class TestSingleUseTokens:
    @pytest.mark.parametrize("consume_index", [0, 1])
    async def test_consuming_either_reset_token_invalidates_both(
        self, container, make_user, consume_index
    ):
        await make_user(email="reset@example.com")
        issued = []
        for _ in range(2):
            async with container.scope() as scope:
                result = await scope.token_authority.generate_reset_password_token(
                    "reset@example.com"
                )
            issued.append(result.value.token)

        async with container.scope() as scope:
            consumed = await scope.token_authority.consume_token(
                issued[consume_index], TokenType.RESET_PASSWORD
            )
        async with container.scope() as scope:
            other = await scope.token_authority.consume_token(
                issued[1 - consume_index], TokenType.RESET_PASSWORD
            )

        assert isinstance(consumed, Success)
        assert other == Failure(error=TokenError.TOKEN_NOT_FOUND)

    async def test_consume_leaves_other_kinds(self, container, make_user):
        user_id = await make_user()
        await issue_pair(container, user_id)
        async with container.scope() as scope:
            issued = await scope.token_authority.generate_verify_email_token(user_id)

        async with container.scope() as scope:
            result = await scope.token_authority.consume_token(
                issued.value.token, TokenType.VERIFY_EMAIL
            )
            assert result == Success(value=user_id)
            assert await scope.tokens.count_for_user(user_id, TokenType.REFRESH) == 1
            assert await scope.tokens.count_for_user(user_id, TokenType.VERIFY_EMAIL) == 0

    async def test_revoke_tokens(self, container, make_user):
        user_id = await make_user()
        await issue_pair(container, user_id)
        await issue_pair(container, user_id)
        async with container.scope() as scope:
            await scope.token_authority.generate_verify_email_token(user_id)

        async with container.scope() as scope:
            assert await scope.token_authority.revoke_tokens(user_id, TokenType.REFRESH) == 2
            assert await scope.token_authority.revoke_tokens(user_id) == 1
            assert await scope.tokens.count_for_user(user_id) == 0

    async def test_revoke_unknown_refresh_token(self, container):
        async with container.scope() as scope:
            result = await scope.token_authority.revoke_refresh_token("unknown")

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.TOKEN_NOT_FOUND


@pytest.mark.integration
class TestAccessTokens:
    async def test_valid_signature_without_cache_entry_rejected(
        self, container, make_user
    ):
        tokens = await issue_pair(container, await make_user())

        async with container.scope() as scope:
            result = await scope.token_authority.authenticate_access_token(
                tokens.access.token
            )

        assert result == Failure(error=TokenError.SESSION_NOT_FOUND)

    async def test_cache_entry_makes_access_token_valid(self, container, make_user):
        user_id = await make_user(email="cached@example.com")
        tokens = await issue_pair(container, user_id)
        descriptor = SessionDescriptor(id=user_id, email="cached@example.com")
        await container.session_cache.set(user_id, descriptor)

        async with container.scope() as scope:
            result = await scope.token_authority.authenticate_access_token(
                tokens.access.token
            )

        assert result == Success(value=descriptor)

    async def test_refresh_token_is_not_an_access_token(self, container, make_user):
        user_id = await make_user()
        tokens = await issue_pair(container, user_id)
        await container.session_cache.set(
            user_id, SessionDescriptor(id=user_id, email="x@example.com")
        )

        async with container.scope() as scope:
            result = await scope.token_authority.authenticate_access_token(
                tokens.refresh.token
            )

        assert result == Failure(error=TokenError.WRONG_TOKEN_TYPE)
