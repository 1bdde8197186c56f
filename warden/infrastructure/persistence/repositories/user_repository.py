"""UserRepository - SQLAlchemy implementation of UserRepository protocol.

Adapter for hexagonal architecture. Maps between domain User entities and
the database User model, reading and updating through the soft-delete
gateway so soft-deleted users are invisible.
"""

from typing import Any
from uuid import UUID

from sqlalchemy import exists, func, select

from warden.core.clock import as_utc
from warden.domain.entities import User
from warden.domain.enums import UserRole
from warden.infrastructure.persistence.models import User as UserModel
from warden.infrastructure.persistence.soft_delete import SoftDeleteGateway


class UserRepository:
    """SQLAlchemy implementation of UserRepository protocol.

    Does NOT inherit from the protocol (structural typing).

    Example:
        >>> async with database.get_session() as session:
        ...     repo = UserRepository(SoftDeleteGateway(session, registry))
        ...     user = await repo.find_by_email("user@example.com")
    """

    def __init__(self, gateway: SoftDeleteGateway) -> None:
        """Initialize repository with the session's soft-delete gateway.

        Args:
            gateway: Gateway bound to the current session.
        """
        self.gateway = gateway

    async def create(
        self,
        email: str,
        password_hash: str,
        display_name: str | None = None,
        roles: list[str] | None = None,
    ) -> User:
        user_model = await self.gateway.create(
            UserModel,
            email=email.strip().lower(),
            password_hash=password_hash,
            display_name=display_name,
            roles=list(roles) if roles else [UserRole.USER.value],
        )
        return self._to_domain(user_model)

    async def find_by_id(self, user_id: UUID) -> User | None:
        user_model = await self.gateway.find_one(UserModel, UserModel.id == user_id)
        return self._to_domain(user_model) if user_model else None

    async def find_by_email(self, email: str) -> User | None:
        """Find an active user by e-mail (case-insensitive)."""
        user_model = await self.gateway.find_first(
            UserModel, func.lower(UserModel.email) == email.strip().lower()
        )
        return self._to_domain(user_model) if user_model else None

    async def email_taken(self, email: str) -> bool:
        """True if any row holds the e-mail, including soft-deleted rows."""
        stmt = select(
            exists().where(func.lower(UserModel.email) == email.strip().lower())
        )
        result = await self.gateway.session.execute(stmt)
        return bool(result.scalar())

    async def update(self, user_id: UUID, **values: Any) -> User | None:
        if "email" in values:
            values["email"] = values["email"].strip().lower()
        user_model = await self.gateway.update_one(
            UserModel, UserModel.id == user_id, values=values
        )
        return self._to_domain(user_model) if user_model else None

    async def soft_delete(self, user_id: UUID) -> User | None:
        user_model = await self.gateway.soft_delete(UserModel, UserModel.id == user_id)
        return self._to_domain(user_model) if user_model else None

    def _to_domain(self, user_model: UserModel) -> User:
        """Convert database model to domain entity."""
        return User(
            id=user_model.id,
            email=user_model.email,
            password_hash=user_model.password_hash,
            display_name=user_model.display_name,
            roles=list(user_model.roles or []),
            is_email_verified=user_model.is_email_verified,
            is_active=user_model.is_active,
            deleted_at=as_utc(user_model.deleted_at) if user_model.deleted_at else None,
            created_at=as_utc(user_model.created_at),
            updated_at=as_utc(user_model.updated_at),
        )
