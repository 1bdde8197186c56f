"""Deletes stored token rows whose expiry has passed.

An expired token already fails signature validation; reaping only reclaims
its row. Runs on the purge schedule and from the CLI.
"""

from datetime import datetime

from sqlalchemy.exc import SQLAlchemyError

from warden.core.clock import Clock, utc_now
from warden.core.enums import ErrorCode
from warden.core.result import Failure, Result, Success
from warden.domain.protocols import LoggerProtocol
from warden.infrastructure.enums import InfrastructureErrorCode
from warden.infrastructure.errors import DatabaseError
from warden.infrastructure.persistence.database import Database
from warden.infrastructure.persistence.repositories.token_repository import (
    TokenRepository,
)


class TokenReaper:
    def __init__(
        self,
        database: Database,
        logger: LoggerProtocol,
        clock: Clock = utc_now,
    ) -> None:
        self._database = database
        self._logger = logger.bind(job="token_reaper")
        self._clock = clock

    async def reap(self, now: datetime | None = None) -> Result[int, DatabaseError]:
        """Delete every token row with ``expires_at <= now``. Returns rows deleted."""
        now = now or self._clock()
        try:
            async with self._database.transaction() as session:
                deleted = await TokenRepository(session).delete_expired(now)
        except (SQLAlchemyError, OSError) as e:
            self._logger.error("Token reaping failed", error=e)
            return Failure(
                error=DatabaseError(
                    code=ErrorCode.SERVICE_UNAVAILABLE,
                    infrastructure_code=InfrastructureErrorCode.DATABASE_ERROR,
                    message="Failed to delete expired tokens",
                    details={"error": str(e)},
                )
            )

        self._logger.info("Expired tokens reaped", deleted=deleted)
        return Success(value=deleted)
