"""Physical deletion of soft-deleted rows for the purge sweep."""

from collections.abc import Iterable
from itertools import batched
from uuid import UUID

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from warden.core.constants import PURGE_DELETE_BATCH_SIZE
from warden.infrastructure.persistence.registry import EntityRegistration


class PurgeRepository:
    """Deletes rows that are still inactive.

    The ``is_active IS FALSE`` guard keeps a row that was reactivated after
    its soft delete: its stale audit entry is consumed but the row survives.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def delete_inactive(
        self, registration: EntityRegistration, item_ids: Iterable[UUID]
    ) -> int:
        """Delete inactive rows of one entity by id. Returns rows deleted."""
        model = registration.model
        deleted = 0
        for batch in batched(item_ids, PURGE_DELETE_BATCH_SIZE):
            stmt = (
                delete(model)
                .where(registration.id_column.in_(batch))
                .where(model.is_active.is_(False))
                .execution_options(synchronize_session=False)
            )
            result = await self.session.execute(stmt)
            deleted += result.rowcount
        return deleted
