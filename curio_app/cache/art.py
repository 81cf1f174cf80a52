"""Artwork cache — deduplicated by the provider's external id."""

from __future__ import annotations

import logging

from curio_app.cache.base import ContentCache
from curio_app.config import AppConfig
from curio_app.db.connection import Database
from curio_app.db.models import ArtworkRepository, JobRepository
from curio_app.providers.art import ArtFetcher
from curio_app.providers.models import ArtworkRecord

logger = logging.getLogger(__name__)


class ArtCache(ContentCache):
    kind = "art"
    refill_job = "refill_art"

    def __init__(self, db: Database, fetcher: ArtFetcher, config: AppConfig):
        super().__init__(
            ArtworkRepository(db),
            fetcher,
            JobRepository(db),
            min_size=config.cache.art_min_size,
            batch_size=config.cache.art_batch_size,
            api_delay=config.cache.art_api_delay,
        )

    def cache(self, record: ArtworkRecord) -> int:
        existing = self.repo.get_by_external_id(record.external_id)
        if existing:
            if (not existing["medium"] and record.medium) or (
                not existing["dimensions"] and record.dimensions
            ):
                self.repo.fill_missing_details(existing["id"], record.medium, record.dimensions)
                logger.info("Filled missing details for artwork %s", record.external_id)
            return existing["id"]

        artwork_id = self.repo.insert(record)
        if artwork_id is None:
            # Inserted concurrently by another worker
            return self.repo.get_by_external_id(record.external_id)["id"]
        logger.info("Cached artwork %r (%s)", record.title, record.external_id)
        return artwork_id
