"""Shared fixtures: temporary database, test config, offline content fetchers."""

from __future__ import annotations

import pytest

from curio_app.config import AppConfig, DatabaseBackend, DatabaseConfig
from curio_app.db.connection import Database
from curio_app.errors import ContentUnavailableError
from curio_app.providers.models import ArtworkRecord, QuoteRecord


def make_artwork(n: int, **overrides) -> ArtworkRecord:
    values = {
        "external_id": f"art-{n}",
        "title": f"Artwork {n}",
        "artist": "Claude Monet",
        "year": "1906",
        "image_url": f"https://images.example.com/{n}.jpg",
        "source_api": "artic",
    }
    values.update(overrides)
    return ArtworkRecord(**values)


def make_quote(n: int, **overrides) -> QuoteRecord:
    values = {
        "text": f"Quote number {n}.",
        "author": "Seneca",
        "source_api": "ninjas",
        "category": "wisdom",
    }
    values.update(overrides)
    return QuoteRecord(**values)


class FakeFetcher:
    """Offline stand-in for ArtFetcher / QuoteFetcher producing numbered records."""

    def __init__(self, factory):
        self.factory = factory
        self.counter = 0
        self.fail = False
        self.fetch_calls = 0
        self.fetch_many_calls = 0

    def fetch(self):
        self.fetch_calls += 1
        if self.fail:
            raise ContentUnavailableError("All APIs failed")
        self.counter += 1
        return self.factory(self.counter)

    def fetch_many(self, count: int, delay: float = 0.0) -> list:
        self.fetch_many_calls += 1
        if self.fail:
            return []
        records = []
        for _ in range(count):
            self.counter += 1
            records.append(self.factory(self.counter))
        return records


# ── fixtures ─────────────────────────────────────────────────────────────────


@pytest.fixture
def config(tmp_path) -> AppConfig:
    """App config pointing at a throwaway database, with fast hashing and no delays."""
    config = AppConfig()
    config.database = DatabaseConfig(
        backend=DatabaseBackend.SQLITE,
        sqlite_path=tmp_path / "test.db",
    )
    config.environment = "test"
    config.server.admin_user = ""
    config.server.admin_password = ""
    config.auth.password_iterations = 1000
    config.auth.premium_fallback_emails = []
    config.cache.art_api_delay = 0
    config.cache.quote_api_delay = 0
    config.scheduler.timezone = "Europe/Berlin"
    return config


@pytest.fixture
def db(config) -> Database:
    """Create a temporary database for testing."""
    database = Database(config)
    database.initialize_schema()
    return database


@pytest.fixture
def art_fetcher() -> FakeFetcher:
    return FakeFetcher(make_artwork)


@pytest.fixture
def quote_fetcher() -> FakeFetcher:
    return FakeFetcher(make_quote)
