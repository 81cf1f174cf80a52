"""Tests for the artwork and quote caches."""

from __future__ import annotations

import pytest

from conftest import make_artwork, make_quote

from curio_app.cache.art import ArtCache
from curio_app.cache.quotes import QuoteCache
from curio_app.db.models import (
    DailyContentRepository,
    FavoriteRepository,
    JobRepository,
    UserRepository,
)
from curio_app.errors import ContentUnavailableError


@pytest.fixture
def art_cache(db, art_fetcher, config):
    return ArtCache(db, art_fetcher, config)


@pytest.fixture
def quote_cache(db, quote_fetcher, config):
    return QuoteCache(db, quote_fetcher, config)


class TestEnsureFilled:
    def test_fills_empty_cache(self, art_cache, art_fetcher):
        assert art_cache.ensure_filled() == 2
        assert art_cache.count() == 2
        assert art_fetcher.fetch_many_calls == 1

    def test_skips_healthy_cache(self, art_cache, art_fetcher):
        art_cache.cache(make_artwork(100))
        art_cache.cache(make_artwork(101))

        assert art_cache.ensure_filled() == 0
        assert art_fetcher.fetch_many_calls == 0
        assert art_cache.status() == {"count": 2, "minSize": 2, "batchSize": 2, "healthy": True}

    def test_quote_batch_size(self, quote_cache):
        assert quote_cache.ensure_filled() == 20
        assert quote_cache.status()["healthy"]

    def test_provider_failure_adds_nothing(self, quote_cache, quote_fetcher):
        quote_fetcher.fail = True
        assert quote_cache.ensure_filled() == 0
        assert quote_cache.count() == 0


class TestDedup:
    def test_artwork_cached_once(self, art_cache):
        first = art_cache.cache(make_artwork(1))
        second = art_cache.cache(make_artwork(1))
        assert first == second
        assert art_cache.count() == 1

    def test_artwork_missing_details_filled(self, art_cache):
        artwork_id = art_cache.cache(make_artwork(1))
        art_cache.cache(make_artwork(1, medium="Oil on canvas", dimensions="73 x 92 cm"))

        row = art_cache.repo.get(artwork_id)
        assert row["medium"] == "Oil on canvas"
        assert row["dimensions"] == "73 x 92 cm"

    def test_existing_details_kept(self, art_cache):
        artwork_id = art_cache.cache(make_artwork(1, medium="Tempera"))
        art_cache.cache(make_artwork(1, medium="Oil on canvas"))
        assert art_cache.repo.get(artwork_id)["medium"] == "Tempera"

    def test_quote_cached_once(self, quote_cache):
        assert quote_cache.cache(make_quote(1)) == quote_cache.cache(make_quote(1))
        assert quote_cache.cache_many([make_quote(1), make_quote(2)]) == 1
        assert quote_cache.count() == 2


class TestGet:
    def test_cache_hit_does_not_fetch(self, art_cache, art_fetcher):
        art_cache.cache(make_artwork(100))
        art_cache.cache(make_artwork(101))

        row = art_cache.get()
        assert row["external_id"] in ("art-100", "art-101")
        assert art_fetcher.fetch_calls == 0
        assert JobRepository(art_cache.repo.db).counts() == {}

    def test_low_cache_queues_refill(self, art_cache, art_fetcher):
        art_cache.cache(make_artwork(100))

        art_cache.get()
        art_cache.get()
        assert art_fetcher.fetch_calls == 0
        assert JobRepository(art_cache.repo.db).counts() == {"pending": 1}

    def test_miss_fetches_live(self, art_cache, art_fetcher):
        row = art_cache.get()
        assert row["title"] == "Artwork 1"
        assert art_fetcher.fetch_calls == 1
        assert art_cache.count() == 1

        job = JobRepository(art_cache.repo.db).claim_next()
        assert job.job_type == "refill_art"

    def test_all_excluded_fetches_live(self, art_cache, art_fetcher):
        saved = art_cache.cache(make_artwork(100))
        row = art_cache.get(exclude_ids=[saved])
        assert row["id"] != saved
        assert art_fetcher.fetch_calls == 1

    def test_fresh_always_fetches(self, quote_cache, quote_fetcher):
        quote_cache.cache(make_quote(100))
        row = quote_cache.get(fresh=True)
        assert row["text"] == "Quote number 1."
        assert quote_fetcher.fetch_calls == 1

    def test_miss_with_failing_providers(self, art_cache, art_fetcher):
        art_fetcher.fail = True
        with pytest.raises(ContentUnavailableError):
            art_cache.get()


class TestQuoteClear:
    def test_keeps_favorites_and_todays_pick(self, db, quote_cache):
        favorite = quote_cache.cache(make_quote(1))
        picked = quote_cache.cache(make_quote(2))
        quote_cache.cache(make_quote(3))
        quote_cache.cache(make_quote(4))

        user_id = UserRepository(db).create("test@example.com", "hash")
        FavoriteRepository(db).add(user_id, "quotes", favorite)
        DailyContentRepository(db).upsert("2026-03-01", None, picked)

        assert quote_cache.clear(today="2026-03-01") == 2
        assert quote_cache.repo.get(favorite) is not None
        assert quote_cache.repo.get(picked) is not None
        assert quote_cache.count() == 2
