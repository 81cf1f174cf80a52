"""Quote cache — deduplicated by text and author."""

from __future__ import annotations

import logging

from curio_app.cache.base import ContentCache
from curio_app.config import AppConfig
from curio_app.db.connection import Database
from curio_app.db.models import DailyContentRepository, FavoriteRepository, JobRepository, QuoteRepository
from curio_app.providers.models import QuoteRecord
from curio_app.providers.quotes import QuoteFetcher

logger = logging.getLogger(__name__)


class QuoteCache(ContentCache):
    kind = "quotes"
    refill_job = "refill_quotes"

    def __init__(self, db: Database, fetcher: QuoteFetcher, config: AppConfig):
        super().__init__(
            QuoteRepository(db),
            fetcher,
            JobRepository(db),
            min_size=config.cache.quote_min_size,
            batch_size=config.cache.quote_batch_size,
            api_delay=config.cache.quote_api_delay,
        )
        self.daily = DailyContentRepository(db)
        self.favorites = FavoriteRepository(db)

    def cache(self, record: QuoteRecord) -> int:
        existing = self.repo.get_by_text(record.text, record.author)
        if existing:
            return existing["id"]

        quote_id = self.repo.insert(record)
        if quote_id is None:
            return self.repo.get_by_text(record.text, record.author)["id"]
        logger.info("Cached quote by %s", record.author)
        return quote_id

    def clear(self, today: str | None = None) -> int:
        """Empty the cache, keeping quotes that are favorited or picked for ``today``."""
        keep = set(self.favorites.all_item_ids("quotes"))
        if today:
            picked = self.daily.picked_ids(today)["quote_id"]
            if picked:
                keep.add(picked)
        removed = self.repo.clear(sorted(keep))
        logger.info("Cleared %d cached quote(s), kept %d", removed, len(keep))
        return removed
