"""Purge sweep: physically reclaim soft-deleted rows past retention.

One sweep, one transaction:

1. Select audit entries with ``created_at <= now - retention`` (and, under
   the bounded lookback policy, ``created_at >= now - retention - lookback``).
2. Group item ids by entity type and resolve every type in the registry.
   An unknown type aborts the sweep before anything is deleted.
3. Per type, delete rows by id that are still inactive.
4. Remove the consumed audit entries.

Any failure rolls the whole sweep back; the entries stay for the next run.
An unreachable database (connection refused or timed out) is reported the
same way as a failed statement.
Running a sweep with nothing due deletes nothing and succeeds.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from warden.core.clock import Clock, utc_now
from warden.core.constants import PURGE_RETENTION_DAYS_DEFAULT
from warden.core.enums import ErrorCode
from warden.core.result import Failure, Result, Success
from warden.domain.errors import PurgeError
from warden.domain.protocols import LoggerProtocol
from warden.infrastructure.persistence.database import Database
from warden.infrastructure.persistence.registry import EntityRegistry
from warden.infrastructure.persistence.repositories.audit_ledger_repository import (
    AuditLedgerRepository,
)
from warden.infrastructure.persistence.repositories.purge_repository import (
    PurgeRepository,
)
from warden.infrastructure.persistence.soft_delete import SoftDeleteGateway


@dataclass(frozen=True, slots=True, kw_only=True)
class PurgeReport:
    """Outcome of one successful sweep.

    Attributes:
        started_at: The sweep's "now".
        cutoff: Upper bound of the audit window (now - retention).
        lower_bound: Lower bound under the lookback policy, else None.
        deleted: Rows physically deleted, per entity type.
        consumed_entries: Audit entries removed.
    """

    started_at: datetime
    cutoff: datetime
    lower_bound: datetime | None = None
    deleted: dict[str, int] = field(default_factory=dict)
    consumed_entries: int = 0

    @property
    def total_deleted(self) -> int:
        return sum(self.deleted.values())

    def to_dict(self) -> dict[str, Any]:
        return {
            "started_at": self.started_at.isoformat(),
            "cutoff": self.cutoff.isoformat(),
            "lower_bound": self.lower_bound.isoformat() if self.lower_bound else None,
            "deleted": dict(self.deleted),
            "total_deleted": self.total_deleted,
            "consumed_entries": self.consumed_entries,
        }


class PurgeService:
    """Runs purge sweeps and reconciliation passes.

    Args:
        database: Database providing the sweep transaction.
        registry: Entity registry resolving audit entity types.
        logger: Structured logger.
        retention_days: Days an entry must age before its row is purged.
        lookback_days: Bounded lookback window; None keeps the window
            open-ended ("everything older than retention").
        clock: Source of "now".
    """

    def __init__(
        self,
        database: Database,
        registry: EntityRegistry,
        logger: LoggerProtocol,
        retention_days: int = PURGE_RETENTION_DAYS_DEFAULT,
        lookback_days: int | None = None,
        clock: Clock = utc_now,
    ) -> None:
        self._database = database
        self._registry = registry
        self._logger = logger.bind(job="purge")
        self._retention = timedelta(days=retention_days)
        self._lookback = timedelta(days=lookback_days) if lookback_days else None
        self._clock = clock

    def window(self, now: datetime) -> tuple[datetime, datetime | None]:
        """Return ``(cutoff, lower_bound)`` for a sweep at ``now``."""
        cutoff = now - self._retention
        lower_bound = cutoff - self._lookback if self._lookback else None
        return cutoff, lower_bound

    async def purge(self, now: datetime | None = None) -> Result[PurgeReport, PurgeError]:
        """Run one sweep. See module docstring for the steps."""
        started_at = now or self._clock()
        cutoff, lower_bound = self.window(started_at)

        try:
            async with self._database.transaction() as session:
                ledger = AuditLedgerRepository(session, clock=self._clock)
                entries = await ledger.find_created_before(cutoff, not_before=lower_bound)

                groups: dict[str, dict[UUID, None]] = {}
                for entry in entries:
                    groups.setdefault(entry.entity_type, {})[entry.item_id] = None

                registrations = {tag: self._registry.for_tag(tag) for tag in groups}

                purge_repo = PurgeRepository(session)
                deleted: dict[str, int] = {}
                for tag, item_ids in groups.items():
                    deleted[tag] = await purge_repo.delete_inactive(
                        registrations[tag], item_ids
                    )

                consumed = await ledger.remove(entry.id for entry in entries)
        except LookupError as e:
            self._logger.error("Purge aborted", error=e, reason="unknown_entity_type")
            return Failure(
                error=PurgeError(
                    code=ErrorCode.SERVICE_UNAVAILABLE,
                    message="Purge aborted: unknown entity type in audit ledger",
                    reason="unknown_entity_type",
                    details={"error": str(e)},
                )
            )
        except (SQLAlchemyError, OSError) as e:
            self._logger.error("Purge failed", error=e, reason="database_error")
            return Failure(
                error=PurgeError(
                    code=ErrorCode.SERVICE_UNAVAILABLE,
                    message="Purge failed; entries kept for the next run",
                    reason="database_error",
                    details={"error": str(e)},
                )
            )

        report = PurgeReport(
            started_at=started_at,
            cutoff=cutoff,
            lower_bound=lower_bound,
            deleted=deleted,
            consumed_entries=consumed,
        )
        self._logger.info("Purge completed", **report.to_dict())
        return Success(value=report)

    async def reconcile(self) -> Result[dict[str, int], PurgeError]:
        """Append audit entries for inactive rows that have none.

        Covers rows made inactive outside the gateway, so the purge sweep
        eventually sees them.

        Returns:
            Entries appended, per entity type.
        """
        appended: dict[str, int] = {}
        try:
            async with self._database.transaction() as session:
                gateway = SoftDeleteGateway(session, self._registry, clock=self._clock)
                for registration in self._registry:
                    item_ids = await gateway.find_untracked(registration.model)
                    await gateway.audit_ledger.append_many(item_ids, registration.tag)
                    appended[registration.tag] = len(item_ids)
        except (SQLAlchemyError, OSError) as e:
            self._logger.error("Reconcile failed", error=e)
            return Failure(
                error=PurgeError(
                    code=ErrorCode.SERVICE_UNAVAILABLE,
                    message="Reconcile failed",
                    reason="database_error",
                    details={"error": str(e)},
                )
            )

        self._logger.info("Reconcile completed", appended=appended)
        return Success(value=appended)
