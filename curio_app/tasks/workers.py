"""Async workers — process jobs from the queue.

Runs N concurrent worker coroutines. All blocking I/O (content APIs, LLM,
SQLite) is pushed to threads via asyncio.to_thread so the FastAPI event
loop stays responsive.
"""

from __future__ import annotations

import asyncio
import logging

from curio_app.cache.art import ArtCache
from curio_app.cache.quotes import QuoteCache
from curio_app.config import AppConfig
from curio_app.daily.service import DailyContentService
from curio_app.db.connection import Database
from curio_app.db.models import Job, JobRepository

logger = logging.getLogger(__name__)


class WorkerPool:
    """Manages async workers that process jobs from the queue."""

    def __init__(
        self,
        db: Database,
        art_cache: ArtCache,
        quote_cache: QuoteCache,
        daily_service: DailyContentService,
        config: AppConfig,
    ):
        self.db = db
        self.art_cache = art_cache
        self.quote_cache = quote_cache
        self.daily_service = daily_service
        self.jobs = JobRepository(db)
        self._running = False
        self._concurrency = config.server.worker_concurrency

    async def start(self, poll_interval: float = 1.0) -> None:
        """Start N concurrent worker loops."""
        self._running = True
        logger.info("Worker pool started (%d workers)", self._concurrency)
        tasks = [
            asyncio.create_task(self._worker_loop(i, poll_interval))
            for i in range(self._concurrency)
        ]
        await asyncio.gather(*tasks)

    def stop(self) -> None:
        """Stop all worker loops."""
        self._running = False
        logger.info("Worker pool stopping")

    async def _worker_loop(self, worker_id: int, poll_interval: float) -> None:
        """Single worker loop — claim and process jobs."""
        while self._running:
            job = await asyncio.to_thread(self.jobs.claim_next)
            if job:
                await self.process_job(job, worker_id)
            else:
                await asyncio.sleep(poll_interval)

    async def process_job(self, job: Job, worker_id: int = 0) -> None:
        """Dispatch a job to the appropriate handler."""
        try:
            logger.info("Worker %d processing job %d: %s", worker_id, job.id, job.job_type)

            if job.job_type == "refill_art":
                await asyncio.to_thread(self.art_cache.ensure_filled)
            elif job.job_type == "refill_quotes":
                await asyncio.to_thread(self.quote_cache.ensure_filled)
            elif job.job_type == "describe":
                await asyncio.to_thread(
                    self.daily_service.ensure_descriptions,
                    job.payload["kind"],
                    job.payload["id"],
                )
            else:
                await asyncio.to_thread(self.jobs.fail, job.id, f"Unknown job type: {job.job_type}")
                return

            await asyncio.to_thread(self.jobs.complete, job.id)

        except Exception as e:
            logger.error("Job %d failed: %s", job.id, e, exc_info=True)
            if job.attempts < job.max_attempts:
                await asyncio.to_thread(self.jobs.retry, job.id, str(e))
            else:
                await asyncio.to_thread(self.jobs.fail, job.id, str(e))
