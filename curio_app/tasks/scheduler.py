"""Daily scheduler — content of the day, limit reset, premium expiry.

Simple asyncio sleep-loop scheduler. No external dependencies.
Runs alongside the WorkerPool as background tasks in the FastAPI lifespan.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, time, timedelta
from typing import Any
from zoneinfo import ZoneInfo

from curio_app.config import AppConfig
from curio_app.daily.service import DailyContentService

logger = logging.getLogger(__name__)


def parse_daily_time(value: str) -> time:
    """Parse ``HH:MM`` into a time of day."""
    hours, _, minutes = value.partition(":")
    return time(int(hours), int(minutes or 0))


def seconds_until_next_run(daily_time: str, timezone: str, now: datetime | None = None) -> float:
    """Seconds from ``now`` until the next occurrence of ``daily_time`` in ``timezone``."""
    tz = ZoneInfo(timezone)
    now = now.astimezone(tz) if now else datetime.now(tz)
    run_at = datetime.combine(now.date(), parse_daily_time(daily_time), tzinfo=tz)
    if run_at <= now:
        run_at = datetime.combine(now.date() + timedelta(days=1), parse_daily_time(daily_time), tzinfo=tz)
    return run_at.timestamp() - now.timestamp()


class Scheduler:
    """Runs the daily tasks once a day at a fixed local time."""

    def __init__(self, daily_service: DailyContentService, config: AppConfig):
        self.daily_service = daily_service
        self.config = config.scheduler
        self._running = False
        self._tasks: list[asyncio.Task] = []
        self.last_result: dict[str, Any] | None = None

    @property
    def is_running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Launch the daily loop (and the startup content check)."""
        self._running = True
        self._tasks = [asyncio.create_task(self._daily_loop())]
        if self.config.ensure_on_startup:
            self._tasks.append(asyncio.create_task(self._ensure_today()))
        logger.info(
            "Scheduler started (daily tasks at %s %s)", self.config.daily_time, self.config.timezone
        )
        await asyncio.gather(*self._tasks)

    def stop(self) -> None:
        """Signal all loops to stop."""
        self._running = False
        for task in self._tasks:
            task.cancel()
        logger.info("Scheduler stopping")

    async def run_now(self) -> dict[str, Any]:
        """Run the daily tasks immediately (manual trigger)."""
        self.last_result = await asyncio.to_thread(self.daily_service.run_daily_tasks)
        return self.last_result

    async def _daily_loop(self) -> None:
        while self._running:
            delay = seconds_until_next_run(self.config.daily_time, self.config.timezone)
            logger.debug("Next daily run in %.0fs", delay)
            await asyncio.sleep(delay)
            try:
                await self.run_now()
            except Exception:
                logger.exception("Daily tasks failed")

    async def _ensure_today(self) -> None:
        """Make sure today's content exists after a restart."""
        try:
            content = await asyncio.to_thread(self.daily_service.get_daily_content)
            logger.info(
                "Daily content ready for %s (%s)",
                content["date"],
                "existing" if content.get("cached") else "generated",
            )
        except Exception:
            logger.exception("Startup daily content check failed")
