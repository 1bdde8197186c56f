"""Soft-delete gateway.

Every read and update against a registered entity goes through this
gateway, which conjuncts the caller's criteria with
``is_active IS TRUE AND deleted_at IS NULL``. Deletes become soft deletes:
the row is marked inactive and an audit entry is appended in the same
session, so both commit (or roll back) together.

The audit ledger itself is not a registered entity and is never filtered.

Usage:
    async with database.get_session() as session:
        gateway = SoftDeleteGateway(session, registry)
        user = await gateway.find_one(User, User.email == "a@example.com")
        await gateway.soft_delete(User, User.id == user.id)
        # commit on context exit: row update + audit entry together
"""

from collections.abc import Mapping, Sequence
from itertools import batched
from typing import Any
from uuid import UUID

from sqlalchemy import ColumnElement, exists, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from warden.core.clock import Clock, utc_now
from warden.core.constants import PURGE_DELETE_BATCH_SIZE
from warden.domain.protocols import AuditLedgerProtocol
from warden.infrastructure.persistence.models import SoftDeletedItem
from warden.infrastructure.persistence.registry import (
    EntityRegistration,
    EntityRegistry,
)
from warden.infrastructure.persistence.repositories.audit_ledger_repository import (
    AuditLedgerRepository,
)

_SOFT_DELETE_FIELDS = frozenset({"is_active", "deleted_at"})


class SoftDeleteGateway:
    """Filtered CRUD and soft delete over registered entities.

    Every method raises ``LookupError`` for a model that is not in the
    registry, before any statement is executed.

    Attributes:
        session: Session shared with the audit ledger.
        audit_ledger: Ledger bound to the same session.
    """

    def __init__(
        self,
        session: AsyncSession,
        registry: EntityRegistry,
        clock: Clock = utc_now,
    ) -> None:
        self.session = session
        self._registry = registry
        self._clock = clock
        self.audit_ledger: AuditLedgerProtocol = AuditLedgerRepository(
            session, clock=clock
        )

    def _active(
        self, model: type[Any], criteria: Sequence[ColumnElement[bool]]
    ) -> tuple[EntityRegistration, list[ColumnElement[bool]]]:
        registration = self._registry.for_model(model)
        return registration, [
            *criteria,
            model.is_active.is_(True),
            model.deleted_at.is_(None),
        ]

    @staticmethod
    def _check_values(model: type[Any], values: Mapping[str, Any]) -> None:
        blocked = _SOFT_DELETE_FIELDS.intersection(values)
        if blocked:
            raise ValueError(
                f"{', '.join(sorted(blocked))} can only change through soft_delete/restore"
            )
        unknown = [key for key in values if not hasattr(model, key)]
        if unknown:
            raise ValueError(f"{model.__name__} has no field(s) {', '.join(unknown)}")

    # ------------------------------------------------------------------
    # Writes that need no filter
    # ------------------------------------------------------------------

    async def create(self, model: type[Any], **values: Any) -> Any:
        """Insert a new (active) row and flush it."""
        self._registry.for_model(model)
        self._check_values(model, values)
        row = model(**values)
        self.session.add(row)
        await self.session.flush()
        return row

    # ------------------------------------------------------------------
    # Filtered reads
    # ------------------------------------------------------------------

    async def find_one(self, model: type[Any], *criteria: ColumnElement[bool]) -> Any:
        """Single active row matching unique criteria, or None.

        Raises:
            MultipleResultsFound: If the criteria are not unique.
        """
        _, where = self._active(model, criteria)
        result = await self.session.execute(select(model).where(*where))
        return result.scalar_one_or_none()

    async def find_many(
        self,
        model: type[Any],
        *criteria: ColumnElement[bool],
        order_by: Sequence[Any] = (),
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[Any]:
        _, where = self._active(model, criteria)
        stmt = select(model).where(*where)
        if order_by:
            stmt = stmt.order_by(*order_by)
        if limit is not None:
            stmt = stmt.limit(limit)
        if offset is not None:
            stmt = stmt.offset(offset)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_first(
        self,
        model: type[Any],
        *criteria: ColumnElement[bool],
        order_by: Sequence[Any] = (),
    ) -> Any:
        _, where = self._active(model, criteria)
        stmt = select(model).where(*where)
        if order_by:
            stmt = stmt.order_by(*order_by)
        result = await self.session.execute(stmt.limit(1))
        return result.scalars().first()

    async def find_first_or_fail(
        self,
        model: type[Any],
        *criteria: ColumnElement[bool],
        order_by: Sequence[Any] = (),
    ) -> Any:
        """Like find_first, but raises ``sqlalchemy.exc.NoResultFound`` on no match."""
        _, where = self._active(model, criteria)
        stmt = select(model).where(*where)
        if order_by:
            stmt = stmt.order_by(*order_by)
        result = await self.session.execute(stmt.limit(1))
        return result.scalars().one()

    async def count(self, model: type[Any], *criteria: ColumnElement[bool]) -> int:
        _, where = self._active(model, criteria)
        stmt = select(func.count()).select_from(model).where(*where)
        result = await self.session.execute(stmt)
        return result.scalar_one()

    # ------------------------------------------------------------------
    # Filtered updates
    # ------------------------------------------------------------------

    async def update_one(
        self,
        model: type[Any],
        *criteria: ColumnElement[bool],
        values: Mapping[str, Any],
    ) -> Any:
        """Update the first active match. Returns the row, or None if none matched.

        Raises:
            ValueError: If ``values`` touches soft-delete columns or unknown fields.
        """
        self._check_values(model, values)
        row = await self.find_first(model, *criteria)
        if row is None:
            return None
        for key, value in values.items():
            setattr(row, key, value)
        await self.session.flush()
        return row

    async def update_many(
        self,
        model: type[Any],
        *criteria: ColumnElement[bool],
        values: Mapping[str, Any],
    ) -> int:
        """Bulk update of active matches. Returns the number of rows updated."""
        self._check_values(model, values)
        registration, where = self._active(model, criteria)
        id_column = registration.id_column
        result = await self.session.execute(select(id_column).where(*where))
        item_ids = list(result.scalars().all())
        for batch in batched(item_ids, PURGE_DELETE_BATCH_SIZE):
            stmt = (
                update(model)
                .where(id_column.in_(batch))
                .values(**values)
                .execution_options(synchronize_session="fetch")
            )
            await self.session.execute(stmt)
        return len(item_ids)

    async def upsert(
        self,
        model: type[Any],
        *criteria: ColumnElement[bool],
        create: Mapping[str, Any],
        update: Mapping[str, Any],
    ) -> Any:
        """Update the active match, or insert ``create`` if there is none.

        A soft-deleted row never matches; it stays untouched until purged.
        """
        self._check_values(model, create)
        self._check_values(model, update)
        row = await self.find_first(model, *criteria)
        if row is None:
            return await self.create(model, **create)
        for key, value in update.items():
            setattr(row, key, value)
        await self.session.flush()
        return row

    # ------------------------------------------------------------------
    # Soft delete lifecycle
    # ------------------------------------------------------------------

    async def soft_delete(self, model: type[Any], *criteria: ColumnElement[bool]) -> Any:
        """Soft-delete the first active match and append its audit entry.

        Returns:
            The now-inactive row, or None if nothing active matched.
        """
        registration, where = self._active(model, criteria)
        result = await self.session.execute(select(model).where(*where).limit(1))
        row = result.scalars().first()
        if row is None:
            return None

        row.is_active = False
        row.deleted_at = self._clock()
        await self.session.flush()
        await self.audit_ledger.append(
            getattr(row, registration.id_field), registration.tag
        )
        return row

    async def soft_delete_many(
        self, model: type[Any], *criteria: ColumnElement[bool]
    ) -> list[UUID]:
        """Soft-delete every active match, one audit entry per row.

        Returns:
            Ids of the rows that were soft-deleted.
        """
        registration, where = self._active(model, criteria)
        id_column = registration.id_column
        result = await self.session.execute(select(id_column).where(*where))
        item_ids = list(result.scalars().all())
        if not item_ids:
            return []

        now = self._clock()
        for batch in batched(item_ids, PURGE_DELETE_BATCH_SIZE):
            stmt = (
                update(model)
                .where(id_column.in_(batch))
                .values(is_active=False, deleted_at=now)
                .execution_options(synchronize_session="fetch")
            )
            await self.session.execute(stmt)
        await self.audit_ledger.append_many(item_ids, registration.tag)
        return item_ids

    async def restore(self, model: type[Any], item_id: UUID) -> Any:
        """Reactivate a soft-deleted row and drop its audit entries.

        Returns:
            The reactivated row, or None if no inactive row has that id.
        """
        registration = self._registry.for_model(model)
        stmt = select(model).where(
            registration.id_column == item_id,
            model.is_active.is_(False),
        )
        result = await self.session.execute(stmt)
        row = result.scalar_one_or_none()
        if row is None:
            return None

        row.is_active = True
        row.deleted_at = None
        await self.session.flush()
        await self.audit_ledger.remove_for_item(registration.tag, item_id)
        return row

    async def find_untracked(self, model: type[Any]) -> list[UUID]:
        """Ids of inactive rows that have no audit entry."""
        registration = self._registry.for_model(model)
        id_column = registration.id_column
        tracked = exists().where(
            SoftDeletedItem.item_id == id_column,
            SoftDeletedItem.entity_type == registration.tag,
        )
        stmt = select(id_column).where(model.is_active.is_(False), ~tracked)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
