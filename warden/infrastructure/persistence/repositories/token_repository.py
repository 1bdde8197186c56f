"""TokenRepository - SQLAlchemy implementation for persisted signed tokens.

Writes flush into the caller's session; the session owner commits. Deletes
return the affected row count so callers can detect a lost race (a second
consumer of the same single-use token deletes zero rows).
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from warden.core.clock import as_utc
from warden.domain.enums import TokenType
from warden.domain.protocols.token_repository import TokenData
from warden.infrastructure.persistence.models import Token


def _to_data(model: Token) -> TokenData:
    """Convert database model to domain DTO."""
    return TokenData(
        id=model.id,
        token=model.token,
        user_id=model.user_id,
        kind=TokenType(model.kind),
        expires_at=as_utc(model.expires_at),
        created_at=as_utc(model.created_at),
    )


class TokenRepository:
    """SQLAlchemy implementation of the TokenRepository protocol.

    Attributes:
        session: SQLAlchemy async session for database operations.

    Example:
        >>> async with database.get_session() as session:
        ...     repo = TokenRepository(session)
        ...     row = await repo.find(token, TokenType.REFRESH, user_id)
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def save(
        self,
        token: str,
        user_id: UUID,
        kind: TokenType,
        expires_at: datetime,
    ) -> TokenData:
        """Insert a token row.

        Raises:
            ValueError: For ACCESS tokens, which are never persisted.
        """
        if not kind.is_persisted:
            raise ValueError(f"{kind.value} tokens are not persisted")
        token_model = Token(
            token=token,
            user_id=user_id,
            kind=kind.value,
            expires_at=expires_at,
        )
        self.session.add(token_model)
        await self.session.flush()
        return _to_data(token_model)

    async def find(self, token: str, kind: TokenType, user_id: UUID) -> TokenData | None:
        stmt = (
            select(Token)
            .where(Token.token == token)
            .where(Token.kind == kind.value)
            .where(Token.user_id == user_id)
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return _to_data(model) if model else None

    async def find_by_token(self, token: str, kind: TokenType) -> TokenData | None:
        stmt = select(Token).where(Token.token == token).where(Token.kind == kind.value)
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        return _to_data(model) if model else None

    async def delete(self, token_id: UUID) -> int:
        stmt = (
            delete(Token)
            .where(Token.id == token_id)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount

    async def delete_for_user(self, user_id: UUID, kind: TokenType | None = None) -> int:
        stmt = delete(Token).where(Token.user_id == user_id)
        if kind is not None:
            stmt = stmt.where(Token.kind == kind.value)
        result = await self.session.execute(
            stmt.execution_options(synchronize_session=False)
        )
        return result.rowcount

    async def delete_expired(self, now: datetime) -> int:
        stmt = (
            delete(Token)
            .where(Token.expires_at <= now)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount

    async def count_for_user(self, user_id: UUID, kind: TokenType | None = None) -> int:
        stmt = select(func.count()).select_from(Token).where(Token.user_id == user_id)
        if kind is not None:
            stmt = stmt.where(Token.kind == kind.value)
        result = await self.session.execute(stmt)
        return result.scalar_one()
