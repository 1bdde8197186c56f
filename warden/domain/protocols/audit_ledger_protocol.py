"""AuditLedger protocol (port).

The audit ledger records one entry per soft delete. It is append-only: an
entry is removed only when the purge sweep physically deletes the row it
points to, or when the row is restored.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol
from uuid import UUID


@dataclass(frozen=True, slots=True, kw_only=True)
class AuditRecord:
    """A soft-delete audit entry.

    Attributes:
        id: Entry id.
        item_id: Id of the soft-deleted row.
        entity_type: Registry tag of the row's entity (e.g. ``users``).
        created_at: When the soft delete happened.
    """

    id: UUID
    item_id: UUID
    entity_type: str
    created_at: datetime


class AuditLedgerProtocol(Protocol):
    """Audit ledger operations. Never filtered by soft-delete state."""

    async def append(self, item_id: UUID, entity_type: str) -> AuditRecord:
        """Append an entry. Duplicates for the same item are accepted."""
        ...

    async def append_many(
        self, item_ids: Iterable[UUID], entity_type: str
    ) -> list[AuditRecord]:
        """Append one entry per item, all stamped with the same time."""
        ...

    async def find_created_before(
        self,
        cutoff: datetime,
        not_before: datetime | None = None,
    ) -> list[AuditRecord]:
        """Entries with ``not_before <= created_at <= cutoff``."""
        ...

    async def find_created_between(
        self, start: datetime, end: datetime
    ) -> list[AuditRecord]:
        """Entries with ``start <= created_at <= end``."""
        ...

    async def find_for_item(self, entity_type: str, item_id: UUID) -> list[AuditRecord]:
        """Entries for one row."""
        ...

    async def count(self, entity_type: str | None = None) -> int:
        ...

    async def remove(self, entry_ids: Iterable[UUID]) -> int:
        """Remove entries by id. Returns the number removed."""
        ...

    async def remove_for_item(self, entity_type: str, item_id: UUID) -> int:
        """Remove every entry for one row."""
        ...
