"""Shared top-up logic for the content caches.

A cache is a table of fetched items. When it holds fewer than ``min_size``
rows a batch of ``batch_size`` items is fetched, one provider call at a time
with ``api_delay`` seconds between calls.
"""

from __future__ import annotations

import logging
from typing import Any

from curio_app.db.models import JobRepository

logger = logging.getLogger(__name__)


class ContentCache:
    kind = ""
    refill_job = ""

    def __init__(self, repo, fetcher, jobs: JobRepository, *, min_size: int, batch_size: int, api_delay: float):
        self.repo = repo
        self.fetcher = fetcher
        self.jobs = jobs
        self.min_size = min_size
        self.batch_size = batch_size
        self.api_delay = api_delay

    def count(self) -> int:
        return self.repo.count()

    def needs_refill(self) -> bool:
        return self.count() < self.min_size

    def cache(self, record) -> int:
        """Store one record and return its row id (existing row if already cached)."""
        raise NotImplementedError

    def cache_many(self, records: list) -> int:
        """Store records, returning how many were new."""
        added = 0
        for record in records:
            before = self.count()
            self.cache(record)
            if self.count() > before:
                added += 1
        return added

    def fill(self, count: int | None = None) -> int:
        """Fetch a batch from the providers and store it."""
        count = count or self.batch_size
        records = self.fetcher.fetch_many(count, delay=self.api_delay)
        added = self.cache_many(records)
        logger.info("%s cache: %d new item(s), %d total", self.kind, added, self.count())
        return added

    def ensure_filled(self) -> int:
        """Top up the cache if it is below its threshold."""
        current = self.count()
        if current >= self.min_size:
            logger.debug("%s cache healthy (%d/%d)", self.kind, current, self.min_size)
            return 0
        logger.info("%s cache low (%d/%d), filling", self.kind, current, self.min_size)
        return self.fill()

    def request_refill(self) -> int | None:
        """Queue a background top-up unless one is already queued."""
        job_id = self.jobs.enqueue_unique(self.refill_job)
        if job_id:
            logger.info("Queued %s (job %d)", self.refill_job, job_id)
        return job_id

    def random(self, exclude_ids: list[int] | None = None) -> dict[str, Any] | None:
        return self.repo.random(exclude_ids)

    def get(self, exclude_ids: list[int] | None = None, fresh: bool = False) -> dict[str, Any]:
        """Return a random cached item, fetching live when the cache has nothing to offer.

        ``fresh`` skips the cache and always asks the providers.
        Raises ContentUnavailableError when a live fetch is needed and every provider fails.
        """
        if not fresh:
            row = self.random(exclude_ids)
            if row:
                if self.needs_refill():
                    self.request_refill()
                return row
            logger.info("%s cache miss, fetching live", self.kind)

        record = self.fetcher.fetch()
        item_id = self.cache(record)
        self.request_refill()
        return self.repo.get(item_id)

    def status(self) -> dict[str, Any]:
        return {
            "count": self.count(),
            "minSize": self.min_size,
            "batchSize": self.batch_size,
            "healthy": not self.needs_refill(),
        }
