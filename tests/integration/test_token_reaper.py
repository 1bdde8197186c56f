"""Integration tests for TokenReaper."""

from datetime import timedelta

import pytest

from warden.core.result import Failure, Success
from warden.domain.enums import TokenType


@pytest.mark.integration
class TestTokenReaper:
    async def test_reaps_only_expired_rows(self, container, clock, make_user):
        user_id = await make_user()
        now = clock.now
        rows = [
            ("short", TokenType.RESET_PASSWORD, now + timedelta(minutes=10)),
            ("medium", TokenType.VERIFY_EMAIL, now + timedelta(hours=1)),
            ("long", TokenType.REFRESH, now + timedelta(days=30)),
        ]
        async with container.scope() as scope:
            for token, kind, expires_at in rows:
                await scope.tokens.save(token, user_id, kind, expires_at)

        clock.advance(hours=1)
        result = await container.token_reaper.reap()

        assert result == Success(value=2)
        async with container.scope() as scope:
            assert await scope.tokens.count_for_user(user_id) == 1
            assert await scope.tokens.find_by_token("long", TokenType.REFRESH) is not None

    async def test_nothing_to_reap(self, container):
        assert await container.token_reaper.reap() == Success(value=0)

    async def test_runs_after_scheduled_purge(self, container, clock, make_user):
        user_id = await make_user()
        async with container.scope() as scope:
            await scope.tokens.save(
                "stale", user_id, TokenType.REFRESH, clock.now + timedelta(minutes=1)
            )
        clock.advance(days=1)

        await container.purge_scheduler.run_scheduled()

        async with container.scope() as scope:
            assert await scope.tokens.count_for_user(user_id) == 0

    async def test_database_failure(self, container):
        await container.database.drop_all()

        result = await container.token_reaper.reap()

        assert isinstance(result, Failure)
        assert result.error.message == "Failed to delete expired tokens"
