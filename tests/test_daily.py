"""Tests for daily content selection and the daily housekeeping tasks."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from conftest import make_artwork, make_quote

from curio_app.cache.art import ArtCache
from curio_app.cache.quotes import QuoteCache
from curio_app.daily.service import DailyContentService, today
from curio_app.db.models import PremiumRepository, UsageRepository, to_sql_timestamp
from curio_app.errors import ContentUnavailableError


@pytest.fixture
def describer():
    describer = MagicMock()
    describer.describe_artwork.return_value = {"de": "Kunst.", "en": "Art."}
    describer.describe_quote.return_value = {"de": "Zitat.", "en": "Quote."}
    return describer


@pytest.fixture
def service(db, art_fetcher, quote_fetcher, describer, config):
    return DailyContentService(
        db,
        ArtCache(db, art_fetcher, config),
        QuoteCache(db, quote_fetcher, config),
        describer,
        config,
    )


def test_today_uses_content_timezone():
    late_evening_utc = datetime(2026, 1, 1, 23, 30, tzinfo=timezone.utc)
    assert today("Europe/Berlin", now=late_evening_utc) == "2026-01-02"
    assert today("UTC", now=late_evening_utc) == "2026-01-01"


class TestDailyContent:
    def test_same_date_same_content(self, service):
        first = service.generate_daily_content("2026-03-01")
        second = service.generate_daily_content("2026-03-01")

        assert first["artwork"]["id"] == second["artwork"]["id"]
        assert first["quote"]["id"] == second["quote"]["id"]

    def test_different_dates_are_independent(self, service):
        service.art_cache.cache(make_artwork(100))
        first = service.generate_daily_content("2026-03-01")
        service.generate_daily_content("2026-03-02")
        assert service.daily.get("2026-03-01")["artwork_id"] == first["artwork"]["id"]
        assert service.daily.get("2026-03-02") is not None

    def test_get_daily_content_generates_once(self, service, art_fetcher):
        first = service.get_daily_content()
        fetches = art_fetcher.fetch_calls
        second = service.get_daily_content()

        assert first["cached"] is False
        assert second["cached"] is True
        assert second["artwork"]["id"] == first["artwork"]["id"]
        assert second["date"] == service.today()
        assert art_fetcher.fetch_calls == fetches

    def test_descriptions_generated_and_stored(self, service, describer):
        content = service.generate_daily_content("2026-03-01")

        assert content["artwork"]["ai_description_de"] == "Kunst."
        stored = service.artworks.get(content["artwork"]["id"])
        assert stored["ai_description_en"] == "Art."
        assert service.quotes.get(content["quote"]["id"])["ai_description_de"] == "Zitat."
        describer.describe_artwork.assert_called_once()

    def test_existing_descriptions_not_regenerated(self, service, describer):
        service.art_cache.cache(make_artwork(1, description_de="Alt.", description_en="Old."))
        service.quote_cache.cache(make_quote(1, description_de="Alt.", description_en="Old."))

        content = service.generate_daily_content("2026-03-01")
        assert content["artwork"]["ai_description_en"] == "Old."
        describer.describe_artwork.assert_not_called()
        describer.describe_quote.assert_not_called()

    def test_quote_only_when_art_unavailable(self, service, art_fetcher):
        art_fetcher.fail = True
        content = service.generate_daily_content("2026-03-01")
        assert content["artwork"] is None
        assert content["quote"] is not None

    def test_nothing_available(self, service, art_fetcher, quote_fetcher):
        art_fetcher.fail = True
        quote_fetcher.fail = True
        with pytest.raises(ContentUnavailableError):
            service.generate_daily_content("2026-03-01")

    def test_ensure_descriptions_for_job(self, service, describer):
        artwork_id = service.art_cache.cache(make_artwork(1))
        service.ensure_descriptions("art", artwork_id)
        assert service.artworks.get(artwork_id)["ai_description_de"] == "Kunst."
        service.ensure_descriptions("quotes", 12345)
        describer.describe_quote.assert_not_called()


class TestDailyTasks:
    def test_reset_daily_limits(self, service, db):
        usage = UsageRepository(db)
        usage.increment("guest:1.2.3.4", "2000-01-01", "art")
        usage.increment("guest:1.2.3.4", service.today(), "art")

        assert service.reset_daily_limits() == 1
        assert usage.get("guest:1.2.3.4", service.today())["art"] == 1

    def test_expire_premium_users(self, service, db):
        premium = PremiumRepository(db)
        past = to_sql_timestamp(datetime.now(timezone.utc) - timedelta(days=1))
        premium.upsert("old@example.com", past)

        assert service.expire_premium_users() == 1
        assert premium.get("old@example.com")["status"] == "expired"

    def test_run_daily_tasks(self, service):
        result = service.run_daily_tasks()

        assert result["success"] is True
        assert result["date"] == service.today()
        assert result["artworkId"] is not None
        assert result["quoteId"] is not None
        assert service.daily.get(service.today())["artwork_id"] == result["artworkId"]

    def test_run_daily_tasks_reports_failure(self, service, art_fetcher, quote_fetcher):
        art_fetcher.fail = True
        quote_fetcher.fail = True

        result = service.run_daily_tasks()
        assert result["success"] is False
        assert "No content available" in result["error"]
