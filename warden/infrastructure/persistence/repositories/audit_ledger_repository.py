"""AuditLedgerRepository - SQLAlchemy implementation of the soft-delete ledger.

Writes flush into the caller's session; the caller's unit of work decides
when (and whether) they commit. This is what keeps a soft delete and its
audit entry in one transaction.
"""

from collections.abc import Iterable
from datetime import datetime
from itertools import batched
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from warden.core.clock import Clock, as_utc, utc_now
from warden.core.constants import PURGE_DELETE_BATCH_SIZE
from warden.domain.protocols.audit_ledger_protocol import AuditRecord
from warden.infrastructure.persistence.models import SoftDeletedItem


def _to_record(model: SoftDeletedItem) -> AuditRecord:
    """Convert database model to domain DTO."""
    return AuditRecord(
        id=model.id,
        item_id=model.item_id,
        entity_type=model.entity_type,
        created_at=as_utc(model.created_at),
    )


class AuditLedgerRepository:
    """Append-only ledger of soft deletes.

    The ledger is never filtered by soft-delete state and never rejects a
    duplicate entry for the same item.

    Example:
        >>> async with database.get_session() as session:
        ...     ledger = AuditLedgerRepository(session)
        ...     due = await ledger.find_created_before(cutoff)
    """

    def __init__(self, session: AsyncSession, clock: Clock = utc_now) -> None:
        self.session = session
        self._clock = clock

    async def append(self, item_id: UUID, entity_type: str) -> AuditRecord:
        """Append one entry stamped with the current time."""
        entry = SoftDeletedItem(
            item_id=item_id,
            entity_type=entity_type,
            created_at=self._clock(),
        )
        self.session.add(entry)
        await self.session.flush()
        return _to_record(entry)

    async def append_many(
        self, item_ids: Iterable[UUID], entity_type: str
    ) -> list[AuditRecord]:
        """Append one entry per item id, all with the same timestamp."""
        now = self._clock()
        entries = [
            SoftDeletedItem(item_id=item_id, entity_type=entity_type, created_at=now)
            for item_id in item_ids
        ]
        if not entries:
            return []
        self.session.add_all(entries)
        await self.session.flush()
        return [_to_record(entry) for entry in entries]

    async def find_created_before(
        self,
        cutoff: datetime,
        not_before: datetime | None = None,
    ) -> list[AuditRecord]:
        """Entries created at or before ``cutoff``.

        Args:
            cutoff: Inclusive upper bound.
            not_before: Optional inclusive lower bound.
        """
        stmt = select(SoftDeletedItem).where(SoftDeletedItem.created_at <= cutoff)
        if not_before is not None:
            stmt = stmt.where(SoftDeletedItem.created_at >= not_before)
        stmt = stmt.order_by(SoftDeletedItem.created_at, SoftDeletedItem.id)
        result = await self.session.execute(stmt)
        return [_to_record(model) for model in result.scalars().all()]

    async def find_created_between(
        self, start: datetime, end: datetime
    ) -> list[AuditRecord]:
        """Entries with ``start <= created_at <= end``."""
        return await self.find_created_before(end, not_before=start)

    async def find_for_item(self, entity_type: str, item_id: UUID) -> list[AuditRecord]:
        stmt = (
            select(SoftDeletedItem)
            .where(SoftDeletedItem.entity_type == entity_type)
            .where(SoftDeletedItem.item_id == item_id)
            .order_by(SoftDeletedItem.created_at)
        )
        result = await self.session.execute(stmt)
        return [_to_record(model) for model in result.scalars().all()]

    async def count(self, entity_type: str | None = None) -> int:
        """Number of entries, optionally for one entity type."""
        stmt = select(func.count()).select_from(SoftDeletedItem)
        if entity_type is not None:
            stmt = stmt.where(SoftDeletedItem.entity_type == entity_type)
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def remove(self, entry_ids: Iterable[UUID]) -> int:
        """Remove entries by id. Returns the number removed."""
        removed = 0
        for batch in batched(entry_ids, PURGE_DELETE_BATCH_SIZE):
            stmt = (
                delete(SoftDeletedItem)
                .where(SoftDeletedItem.id.in_(batch))
                .execution_options(synchronize_session=False)
            )
            result = await self.session.execute(stmt)
            removed += result.rowcount
        return removed

    async def remove_for_item(self, entity_type: str, item_id: UUID) -> int:
        """Remove every entry pointing at one row (used by restore)."""
        stmt = (
            delete(SoftDeletedItem)
            .where(SoftDeletedItem.entity_type == entity_type)
            .where(SoftDeletedItem.item_id == item_id)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        return result.rowcount
