from __future__ import annotations

import asyncio
from typing import Callable, Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from shared_expenses.core.logging import get_logger

JOB_ID = "refresh_rates"

logger = get_logger("scheduler")


class RateRefreshScheduler:
    """Owned handle for the periodic rate refresh.

    start() registers one interval job and starts the scheduler; shutdown()
    removes the schedule. A fetch already in flight is not cancelled, it
    simply finishes and its result is applied.
    """

    def __init__(
        self,
        refresh: Callable[[], bool],
        interval_seconds: int,
        scheduler: Optional[AsyncIOScheduler] = None,
    ):
        if interval_seconds <= 0:
            raise ValueError("refresh interval must be positive seconds")
        self._refresh = refresh
        self._interval_seconds = interval_seconds
        self._scheduler = scheduler or AsyncIOScheduler(timezone="UTC")

    @property
    def running(self) -> bool:
        return self._scheduler.running

    @property
    def interval_seconds(self) -> int:
        return self._interval_seconds

    async def _job(self) -> None:
        # Blocking HTTP runs in a worker thread so requests keep being served
        ok = await asyncio.to_thread(self._refresh)
        logger.info("Scheduler: %s done (ok=%s)", JOB_ID, ok)

    def start(self) -> None:
        if self._scheduler.running:
            return
        self._scheduler.add_job(
            self._job,
            IntervalTrigger(seconds=self._interval_seconds),
            id=JOB_ID,
            replace_existing=True,
            max_instances=1,
            coalesce=True,
        )
        self._scheduler.start()
        logger.info("Scheduler started. refresh_every=%s s", self._interval_seconds)

    def shutdown(self) -> None:
        if not self._scheduler.running:
            return
        self._scheduler.shutdown(wait=False)
        logger.info("Scheduler stopped")
