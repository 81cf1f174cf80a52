"""Quote API clients and the shuffled quote fallback chain.

Both providers need an API key; a provider without one is skipped.
The order is shuffled on every call so load spreads across providers.
"""

from __future__ import annotations

import logging
import random
import time

import httpx

from curio_app.config import AppConfig
from curio_app.errors import ContentUnavailableError
from curio_app.providers.art import USER_AGENT
from curio_app.providers.models import QuoteRecord
from curio_app.providers.retry import get_json

logger = logging.getLogger(__name__)

# FavQs answers an empty tag page with a placeholder quote
_FAVQS_EMPTY = "No quotes found"


class NinjasClient:
    """API Ninjas random quotes (v2)."""

    name = "ninjas"
    url = "https://api.api-ninjas.com/v2/randomquotes"
    categories = [
        "inspirational",
        "wisdom",
        "happiness",
        "success",
        "life",
        "love",
        "motivational",
        "philosophy",
        "knowledge",
        "courage",
        "hope",
        "faith",
    ]

    def __init__(self, client: httpx.Client, api_key: str, max_retries: int = 2):
        self.client = client
        self.api_key = api_key
        self.max_retries = max_retries

    def is_configured(self) -> bool:
        return bool(self.api_key)

    def fetch(self) -> QuoteRecord | None:
        picked = random.sample(self.categories, random.randint(1, 2))
        try:
            data = get_json(
                self.client,
                self.url,
                params={"categories": ",".join(picked)},
                headers={"X-Api-Key": self.api_key},
                max_retries=self.max_retries,
                operation="api-ninjas quote",
            )
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("API Ninjas request failed: %s", e)
            return None

        if not isinstance(data, list) or not data:
            return None
        return QuoteRecord.from_ninjas(data[0], fallback_category=picked[0])


class FavQsClient:
    """FavQs: quote of the day or a random page of a tag."""

    name = "favqs"
    qotd_url = "https://favqs.com/api/qotd"
    quotes_url = "https://favqs.com/api/quotes"
    tags = [
        "wisdom",
        "life",
        "inspirational",
        "philosophy",
        "motivational",
        "success",
        "happiness",
        "love",
    ]

    def __init__(self, client: httpx.Client, api_key: str, max_retries: int = 2):
        self.client = client
        self.api_key = api_key
        self.max_retries = max_retries

    def is_configured(self) -> bool:
        return bool(self.api_key)

    def _headers(self) -> dict[str, str]:
        return {"Authorization": f'Token token="{self.api_key}"'}

    def fetch(self) -> QuoteRecord | None:
        try:
            if random.random() < 0.5:
                return self._fetch_qotd()
            return self._fetch_by_tag(random.choice(self.tags))
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("FavQs request failed: %s", e)
            return None

    def _fetch_qotd(self) -> QuoteRecord | None:
        data = get_json(
            self.client,
            self.qotd_url,
            headers=self._headers(),
            max_retries=self.max_retries,
            operation="favqs qotd",
        )
        return QuoteRecord.from_favqs(data.get("quote") or {})

    def _fetch_by_tag(self, tag: str) -> QuoteRecord | None:
        data = get_json(
            self.client,
            self.quotes_url,
            params={"filter": tag, "type": "tag", "page": random.randint(1, 5)},
            headers=self._headers(),
            max_retries=self.max_retries,
            operation=f"favqs tag {tag!r}",
        )
        candidates = [
            q for q in data.get("quotes") or [] if q.get("body") and q["body"] != _FAVQS_EMPTY
        ]
        if not candidates:
            return None
        record = QuoteRecord.from_favqs(random.choice(candidates))
        if record and not record.category:
            record.category = tag
        return record


class QuoteFetcher:
    """Shuffled fallback chain over the quote providers."""

    def __init__(self, providers: list):
        self.providers = providers

    @classmethod
    def from_config(cls, config: AppConfig, client: httpx.Client | None = None) -> QuoteFetcher:
        if client is None:
            client = httpx.Client(
                timeout=config.providers.quote_timeout,
                headers={"User-Agent": USER_AGENT},
                follow_redirects=True,
            )
        retries = config.providers.max_retries
        return cls(
            [
                NinjasClient(client, config.providers.api_ninjas_key, max_retries=retries),
                FavQsClient(client, config.providers.favqs_api_key, max_retries=retries),
            ]
        )

    def configured(self) -> list:
        return [p for p in self.providers if p.is_configured()]

    def fetch(self) -> QuoteRecord:
        """Return the first quote from the shuffled providers."""
        providers = self.configured()
        if not providers:
            raise ContentUnavailableError("No quote API configured")

        random.shuffle(providers)
        for provider in providers:
            record = provider.fetch()
            if record:
                logger.info("Fetched quote by %s from %s", record.author, provider.name)
                return record
            logger.warning("Quote provider %s returned nothing, trying next", provider.name)
        raise ContentUnavailableError("All quote APIs failed")

    def fetch_many(self, count: int, delay: float = 1.0) -> list[QuoteRecord]:
        """Collect up to ``count`` distinct quotes with a delay between calls."""
        results: list[QuoteRecord] = []
        seen: set[tuple[str, str]] = set()
        for i in range(count):
            if i > 0 and delay:
                time.sleep(delay)
            try:
                record = self.fetch()
            except ContentUnavailableError as e:
                logger.warning("Stopping quote batch at %d/%d: %s", len(results), count, e)
                break
            key = (record.text, record.author)
            if key not in seen:
                seen.add(key)
                results.append(record)
        logger.info("Fetched %d/%d quotes", len(results), count)
        return results
