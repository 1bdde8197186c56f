"""Daily purge schedule with a single-flight sweep guard.

At most one purge sweep runs per process. A trigger that arrives while a
sweep is in flight does not start a second sweep and is not queued: it
awaits the in-flight sweep and returns that sweep's result.

Architecture:
- asyncio task per sweep, shared by every concurrent trigger
- ``asyncio.shield`` so a cancelled caller never cancels the shared sweep
- Daily loop sleeping until ``run_hour``:00 UTC (default midnight)
"""

from __future__ import annotations

import asyncio
import contextlib
from datetime import datetime, timedelta
from typing import TYPE_CHECKING, Protocol

from warden.core.clock import Clock, utc_now
from warden.core.errors import DomainError
from warden.core.result import Failure, Result, Success
from warden.domain.errors import PurgeError
from warden.domain.protocols import LoggerProtocol

if TYPE_CHECKING:
    from warden.application.services.purge_service import PurgeReport


class PurgeRunner(Protocol):
    async def purge(self, now: datetime | None = None) -> Result[PurgeReport, PurgeError]: ...


class TokenReaperRunner(Protocol):
    async def reap(self, now: datetime | None = None) -> Result[int, DomainError]: ...


class PurgeScheduler:
    """Schedules purge sweeps and guards them with a single-flight lock.

    Usage:
        scheduler = PurgeScheduler(purge_service, logger, token_reaper=reaper)
        result = await scheduler.trigger()   # on demand
        scheduler.start()                    # daily loop in the background
        await scheduler.stop()
    """

    def __init__(
        self,
        purge_service: PurgeRunner,
        logger: LoggerProtocol,
        token_reaper: TokenReaperRunner | None = None,
        run_hour: int = 0,
        clock: Clock = utc_now,
    ) -> None:
        if not 0 <= run_hour <= 23:
            raise ValueError("run_hour must be between 0 and 23")

        self._purge_service = purge_service
        self._token_reaper = token_reaper
        self._logger = logger.bind(job="purge_scheduler")
        self._run_hour = run_hour
        self._clock = clock
        self._inflight: asyncio.Task[Result[PurgeReport, PurgeError]] | None = None
        self._runner: asyncio.Task[None] | None = None

    @property
    def sweep_in_progress(self) -> bool:
        return self._inflight is not None and not self._inflight.done()

    @property
    def is_running(self) -> bool:
        """True while the daily loop is active."""
        return self._runner is not None and not self._runner.done()

    async def trigger(self) -> Result[PurgeReport, PurgeError]:
        """Run a sweep now, or join the one already running."""
        if self._inflight is None:
            self._inflight = asyncio.create_task(self._sweep())
        else:
            self._logger.info("Purge already running, joining in-flight sweep")
        return await asyncio.shield(self._inflight)

    async def _sweep(self) -> Result[PurgeReport, PurgeError]:
        try:
            return await self._purge_service.purge()
        finally:
            self._inflight = None

    def seconds_until_next_run(self, now: datetime | None = None) -> float:
        """Seconds from ``now`` until the next ``run_hour``:00 UTC."""
        now = now or self._clock()
        next_run = now.replace(hour=self._run_hour, minute=0, second=0, microsecond=0)
        if next_run <= now:
            next_run += timedelta(days=1)
        return (next_run - now).total_seconds()

    async def run_scheduled(self) -> Result[PurgeReport, PurgeError]:
        """One scheduled tick: purge sweep, then token reaping."""
        result = await self.trigger()
        match result:
            case Success(value=report):
                self._logger.info(
                    "Scheduled purge finished", total_deleted=report.total_deleted
                )
            case Failure(error=error):
                self._logger.warning(
                    "Scheduled purge failed, entries kept for next run",
                    reason=error.reason,
                )
        if self._token_reaper is not None:
            await self._token_reaper.reap()
        return result

    async def run_forever(self) -> None:
        """Sleep until the next run hour and tick, until cancelled."""
        while True:
            delay = self.seconds_until_next_run()
            self._logger.info("Next purge scheduled", in_seconds=int(delay))
            await asyncio.sleep(delay)
            try:
                await self.run_scheduled()
            except Exception as e:
                # Keep the schedule alive; the next tick retries
                self._logger.error("Scheduled purge crashed", error=e)

    def start(self) -> asyncio.Task[None]:
        """Start the daily loop as a background task.

        Raises:
            RuntimeError: If the loop is already running.
        """
        if self.is_running:
            raise RuntimeError("Purge scheduler already running")
        self._runner = asyncio.create_task(self.run_forever())
        return self._runner

    async def stop(self) -> None:
        """Cancel the daily loop. An in-flight sweep is allowed to finish."""
        if self._runner is None:
            return
        self._runner.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._runner
        self._runner = None
        if self._inflight is not None:
            await asyncio.shield(self._inflight)
