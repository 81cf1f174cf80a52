"""Daily content — one artwork and one quote per calendar day, plus daily housekeeping."""

from __future__ import annotations

import logging
import time
from datetime import datetime
from typing import Any
from zoneinfo import ZoneInfo

from curio_app.cache.art import ArtCache
from curio_app.cache.quotes import QuoteCache
from curio_app.config import AppConfig
from curio_app.db.connection import Database
from curio_app.db.models import (
    ArtworkRepository,
    DailyContentRepository,
    JobRepository,
    PremiumRepository,
    QuoteRepository,
    SessionRepository,
    UsageRepository,
)
from curio_app.describe.engine import DescriptionEngine
from curio_app.errors import ContentUnavailableError

logger = logging.getLogger(__name__)


def today(timezone: str = "Europe/Berlin", now: datetime | None = None) -> str:
    """Calendar date (ISO) in the content timezone."""
    tz = ZoneInfo(timezone)
    now = now.astimezone(tz) if now else datetime.now(tz)
    return now.date().isoformat()


class DailyContentService:
    """Selects, describes and stores the content of the day."""

    def __init__(
        self,
        db: Database,
        art_cache: ArtCache,
        quote_cache: QuoteCache,
        describer: DescriptionEngine,
        config: AppConfig,
    ):
        self.db = db
        self.art_cache = art_cache
        self.quote_cache = quote_cache
        self.describer = describer
        self.timezone = config.scheduler.timezone
        self.daily = DailyContentRepository(db)
        self.artworks = ArtworkRepository(db)
        self.quotes = QuoteRepository(db)
        self.usage = UsageRepository(db)
        self.premium = PremiumRepository(db)
        self.sessions = SessionRepository(db)
        self.jobs = JobRepository(db)

    def today(self) -> str:
        return today(self.timezone)

    def get_daily_content(self) -> dict[str, Any]:
        """Return today's artwork and quote rows, generating them on first access."""
        date = self.today()
        row = self.daily.get(date)
        if row:
            artwork = self.artworks.get(row["artwork_id"]) if row["artwork_id"] else None
            quote = self.quotes.get(row["quote_id"]) if row["quote_id"] else None
            if artwork and quote:
                return {"date": date, "artwork": artwork, "quote": quote, "cached": True}
            logger.warning("Daily content for %s incomplete, regenerating", date)

        content = self.generate_daily_content(date)
        content["cached"] = False
        return content

    def generate_daily_content(self, date: str | None = None) -> dict[str, Any]:
        """Pick, describe and store the content for ``date`` (default today).

        A pick that already exists for the date is kept.
        """
        date = date or self.today()
        start = time.monotonic()
        existing = self.daily.picked_ids(date)

        artwork = self.artworks.get(existing["artwork_id"]) if existing["artwork_id"] else None
        if artwork is None:
            artwork = self._pick(self.art_cache)
        if artwork is not None:
            artwork = self._ensure_art_descriptions(artwork)

        quote = self.quotes.get(existing["quote_id"]) if existing["quote_id"] else None
        if quote is None:
            quote = self._pick(self.quote_cache)
        if quote is not None:
            quote = self._ensure_quote_descriptions(quote)

        if artwork is None and quote is None:
            raise ContentUnavailableError(f"No content available for {date}")

        stored = self.daily.upsert(
            date,
            artwork["id"] if artwork else None,
            quote["id"] if quote else None,
        )
        # Another request may have stored its pick first
        if artwork and stored.get("artwork_id") != artwork["id"]:
            artwork = self.artworks.get(stored["artwork_id"])
        if quote and stored.get("quote_id") != quote["id"]:
            quote = self.quotes.get(stored["quote_id"])

        logger.info(
            "Daily content for %s: artwork=%s quote=%s (%.1fs)",
            date,
            artwork["id"] if artwork else None,
            quote["id"] if quote else None,
            time.monotonic() - start,
        )
        return {"date": date, "artwork": artwork, "quote": quote}

    def _pick(self, cache) -> dict[str, Any] | None:
        try:
            return cache.get()
        except ContentUnavailableError as e:
            logger.error("No %s for daily content: %s", cache.kind, e)
            return None

    def _ensure_art_descriptions(self, artwork: dict[str, Any]) -> dict[str, Any]:
        if artwork.get("ai_description_de") and artwork.get("ai_description_en"):
            return artwork
        texts = self.describer.describe_artwork(
            artwork["title"], artwork["artist"], artwork.get("year"), artwork_id=artwork["id"]
        )
        self.artworks.set_descriptions(artwork["id"], texts["de"], texts["en"])
        return {**artwork, "ai_description_de": texts["de"], "ai_description_en": texts["en"]}

    def _ensure_quote_descriptions(self, quote: dict[str, Any]) -> dict[str, Any]:
        if quote.get("ai_description_de") and quote.get("ai_description_en"):
            return quote
        texts = self.describer.describe_quote(quote["text"], quote["author"], quote_id=quote["id"])
        self.quotes.set_descriptions(quote["id"], texts["de"], texts["en"])
        return {**quote, "ai_description_de": texts["de"], "ai_description_en": texts["en"]}

    def ensure_descriptions(self, kind: str, item_id: int) -> None:
        """Backfill descriptions for one cached item (used by the worker)."""
        if kind == "art":
            row = self.artworks.get(item_id)
            if row:
                self._ensure_art_descriptions(row)
        else:
            row = self.quotes.get(item_id)
            if row:
                self._ensure_quote_descriptions(row)

    def reset_daily_limits(self) -> int:
        """Delete usage counters from previous days."""
        removed = self.usage.delete_before(self.today())
        logger.info("Reset daily limits (%d old counter row(s) removed)", removed)
        return removed

    def expire_premium_users(self) -> int:
        expired = self.premium.expire_overdue()
        if expired:
            logger.info("Expired %d premium membership(s)", expired)
        return expired

    def run_daily_tasks(self) -> dict[str, Any]:
        """Generate today's content, reset limits, expire memberships."""
        start = time.monotonic()
        date = self.today()
        logger.info("Running daily tasks for %s", date)
        try:
            content = self.generate_daily_content(date)
            limits_reset = self.reset_daily_limits()
            premium_expired = self.expire_premium_users()
            self.sessions.cleanup_expired()
            self.jobs.cleanup_old()
        except Exception as e:
            logger.exception("Daily tasks failed")
            return {
                "success": False,
                "date": date,
                "error": str(e),
                "durationMs": int((time.monotonic() - start) * 1000),
            }

        duration_ms = int((time.monotonic() - start) * 1000)
        logger.info("Daily tasks completed in %dms", duration_ms)
        return {
            "success": True,
            "date": date,
            "artworkId": content["artwork"]["id"] if content["artwork"] else None,
            "quoteId": content["quote"]["id"] if content["quote"] else None,
            "limitsReset": limits_reset,
            "premiumExpired": premium_expired,
            "durationMs": duration_ms,
        }
