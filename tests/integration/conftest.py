"""Fixtures for integration tests (in-memory SQLite + fakeredis)."""

from uuid import UUID

import pytest
from uuid_extensions import uuid7

from warden.infrastructure.persistence.models import User
from warden.infrastructure.persistence.soft_delete import SoftDeleteGateway


@pytest.fixture
def make_user(container):
    """Factory inserting an active user row and returning its id."""

    async def _make_user(email: str | None = None, password_hash: str = "hash") -> UUID:
        async with container.database.get_session() as session:
            gateway = SoftDeleteGateway(session, container.registry, clock=container.clock)
            user = await gateway.create(
                User,
                email=email or f"user-{uuid7().hex[:12]}@example.com",
                password_hash=password_hash,
            )
            return user.id

    return _make_user


@pytest.fixture
def soft_delete_user(container):
    """Soft-delete one user through the gateway at the clock's current time."""

    async def _soft_delete_user(user_id: UUID) -> None:
        async with container.database.get_session() as session:
            gateway = SoftDeleteGateway(session, container.registry, clock=container.clock)
            assert await gateway.soft_delete(User, User.id == user_id) is not None

    return _soft_delete_user
