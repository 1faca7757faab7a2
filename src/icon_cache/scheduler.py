from __future__ import annotations

import asyncio
import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from .context import IconCaches
from .maintenance import perform_cache_cleanup

logger = logging.getLogger(__name__)

JOB_ID = "icon_cache_cleanup"


class CacheCleanupScheduler:
    """Runs cache cleanup on a fixed interval for the life of the process."""

    def __init__(self, caches: IconCaches):
        self._caches = caches
        self._interval = caches.config.cleanup_interval_seconds
        self._enabled = caches.config.cleanup_enabled
        self._scheduler = AsyncIOScheduler()

    @property
    def running(self) -> bool:
        return self._scheduler.running

    def run_once(self) -> dict[str, tuple[int, int]] | None:
        try:
            return perform_cache_cleanup(self._caches)
        except Exception as exc:
            logger.error("Cache cleanup failed: %s", exc, exc_info=True)
            return None

    def start(self) -> None:
        if not self._enabled:
            logger.info("Cache cleanup scheduler disabled")
            return
        if self._scheduler.running:
            return

        self._scheduler.add_job(
            self.run_once,
            IntervalTrigger(seconds=self._interval),
            id=JOB_ID,
            replace_existing=True,
        )
        self._scheduler.start()
        logger.info("Cache cleanup scheduler started, interval %ds", self._interval)

    async def stop(self) -> None:
        if not self._scheduler.running:
            return
        self._scheduler.shutdown(wait=False)
        # Shutdown may be deferred onto the loop; let it run before returning
        await asyncio.sleep(0)
        logger.info("Cache cleanup scheduler stopped")
