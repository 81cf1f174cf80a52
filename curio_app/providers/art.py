"""Museum API clients and the artwork fallback chain.

Providers are tried in order: Art Institute of Chicago (no key needed),
then the Rijksmuseum (needs an API key). Each provider tries its curated
list first and falls back to a public-domain search.
"""

from __future__ import annotations

import logging
import random
import time

import httpx

from curio_app.config import AppConfig
from curio_app.errors import ContentUnavailableError
from curio_app.providers.models import ArtworkRecord
from curio_app.providers.retry import get_json

logger = logging.getLogger(__name__)

USER_AGENT = "Curio/2.0 (https://curio.day)"


class ArticClient:
    """Art Institute of Chicago public API."""

    name = "artic"
    base_url = "https://api.artic.edu/api/v1/artworks"
    iiif_url = "https://www.artic.edu/iiif/2"
    fields = (
        "id,title,artist_title,date_display,image_id,description,"
        "medium_display,dimensions,place_of_origin"
    )
    curated_ids = [
        27992,  # A Sunday on La Grande Jatte
        28560,  # The Bedroom
        14598,  # The Old Guitarist
        6565,  # America Windows
        111628,  # Nighthawks
        24306,  # The Bath
        20684,  # Water Lily Pond
        81512,  # American Gothic
        16568,  # Paris Street; Rainy Day
        64818,  # The Child's Bath
        87479,  # Sky Above Clouds IV
        76571,  # Two Sisters (On the Terrace)
        59847,  # Bathers by a River
        16487,  # The Herring Net
        14655,  # Mother and Child
        109439,  # Stacks of Wheat
        83642,  # The Bay
        100472,
        129884,
        102611,
    ]
    search_terms = [
        "painting",
        "impressionism",
        "portrait",
        "landscape",
        "renaissance",
        "baroque",
        "watercolor",
        "still life",
        "expressionism",
        "realism",
    ]

    def __init__(self, client: httpx.Client, max_retries: int = 2):
        self.client = client
        self.max_retries = max_retries

    def is_configured(self) -> bool:
        return True

    def fetch_by_id(self, artwork_id: int | str) -> ArtworkRecord | None:
        try:
            data = get_json(
                self.client,
                f"{self.base_url}/{artwork_id}",
                params={"fields": self.fields},
                max_retries=self.max_retries,
                operation=f"artic artwork {artwork_id}",
            )
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Curated artwork %s unavailable: %s", artwork_id, e)
            return None

        record = ArtworkRecord.from_artic(data.get("data") or {}, self.iiif_url)
        if record is None:
            logger.warning("Artwork %s has no image", artwork_id)
        return record

    def fetch_curated(self) -> ArtworkRecord | None:
        return self.fetch_by_id(random.choice(self.curated_ids))

    def fetch_search(self) -> ArtworkRecord | None:
        term = random.choice(self.search_terms)
        try:
            data = get_json(
                self.client,
                f"{self.base_url}/search",
                params={
                    "q": term,
                    "limit": 20,
                    "fields": self.fields,
                    "query[term][is_public_domain]": "true",
                },
                max_retries=self.max_retries,
                operation=f"artic search {term!r}",
            )
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Artic search failed: %s", e)
            return None

        records = [
            r
            for r in (ArtworkRecord.from_artic(item, self.iiif_url) for item in data.get("data") or [])
            if r is not None
        ]
        if not records:
            logger.warning("Artic search %r returned no artworks with images", term)
            return None
        return random.choice(records)

    def fetch_many(self, count: int, delay: float = 0.5) -> list[ArtworkRecord]:
        """Walk the shuffled curated list until ``count`` artworks are collected."""
        ids = random.sample(self.curated_ids, len(self.curated_ids))
        results: list[ArtworkRecord] = []
        for i, artwork_id in enumerate(ids):
            if len(results) >= count:
                break
            if i > 0 and delay:
                time.sleep(delay)
            record = self.fetch_by_id(artwork_id)
            if record:
                results.append(record)
        return results


class RijksClient:
    """Rijksmuseum collection API (requires a key)."""

    name = "rijks"
    base_url = "https://www.rijksmuseum.nl/api/en/collection"
    curated_ids = [
        "SK-C-5",  # The Night Watch
        "SK-A-1595",  # Self-portrait
        "SK-A-2344",  # The Milkmaid
        "SK-C-216",  # The Jewish Bride
        "SK-A-4",  # Winter Landscape with Ice Skaters
        "SK-A-180",  # Still Life with Flowers
        "SK-A-2860",  # The Threatened Swan
        "SK-A-4691",  # Self-portrait, Van Gogh
        "SK-A-1935",  # The Syndics
    ]
    search_terms = [
        "painting",
        "Rembrandt",
        "Vermeer",
        "landscape",
        "portrait",
        "still life",
        "golden age",
        "Dutch masters",
    ]

    def __init__(self, client: httpx.Client, api_key: str, max_retries: int = 2):
        self.client = client
        self.api_key = api_key
        self.max_retries = max_retries

    def is_configured(self) -> bool:
        return bool(self.api_key)

    def fetch_by_id(self, object_number: str) -> ArtworkRecord | None:
        try:
            data = get_json(
                self.client,
                f"{self.base_url}/{object_number}",
                params={"key": self.api_key, "format": "json"},
                max_retries=self.max_retries,
                operation=f"rijks object {object_number}",
            )
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Rijksmuseum object %s unavailable: %s", object_number, e)
            return None
        return ArtworkRecord.from_rijks(data.get("artObject") or {})

    def fetch_curated(self) -> ArtworkRecord | None:
        return self.fetch_by_id(random.choice(self.curated_ids))

    def fetch_search(self) -> ArtworkRecord | None:
        term = random.choice(self.search_terms)
        try:
            data = get_json(
                self.client,
                self.base_url,
                params={"key": self.api_key, "q": term, "imgonly": "true", "ps": 20},
                max_retries=self.max_retries,
                operation=f"rijks search {term!r}",
            )
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Rijksmuseum search failed: %s", e)
            return None

        records = [
            r for r in (ArtworkRecord.from_rijks(item) for item in data.get("artObjects") or []) if r
        ]
        return random.choice(records) if records else None

    def fetch_many(self, count: int, delay: float = 0.5) -> list[ArtworkRecord]:
        ids = random.sample(self.curated_ids, len(self.curated_ids))
        results: list[ArtworkRecord] = []
        for i, object_number in enumerate(ids):
            if len(results) >= count:
                break
            if i > 0 and delay:
                time.sleep(delay)
            record = self.fetch_by_id(object_number)
            if record:
                results.append(record)
        return results


class ArtFetcher:
    """Ordered fallback chain over the art providers."""

    def __init__(self, providers: list):
        self.providers = providers

    @classmethod
    def from_config(cls, config: AppConfig, client: httpx.Client | None = None) -> ArtFetcher:
        if client is None:
            client = httpx.Client(
                timeout=config.providers.art_timeout,
                headers={"User-Agent": USER_AGENT},
                follow_redirects=True,
            )
        retries = config.providers.max_retries
        return cls(
            [
                ArticClient(client, max_retries=retries),
                RijksClient(client, config.providers.rijksmuseum_api_key, max_retries=retries),
            ]
        )

    def configured(self) -> list:
        return [p for p in self.providers if p.is_configured()]

    def fetch(self) -> ArtworkRecord:
        """Return the first artwork any provider delivers."""
        for provider in self.providers:
            if not provider.is_configured():
                logger.debug("Skipping art provider %s: not configured", provider.name)
                continue
            for strategy in (provider.fetch_curated, provider.fetch_search):
                record = strategy()
                if record:
                    logger.info(
                        "Fetched artwork %r by %s from %s", record.title, record.artist, provider.name
                    )
                    return record
            logger.warning("Art provider %s returned nothing, trying next", provider.name)
        raise ContentUnavailableError("All art APIs failed")

    def fetch_many(self, count: int, delay: float = 0.5) -> list[ArtworkRecord]:
        """Collect up to ``count`` artworks, moving on to the next provider when one runs dry."""
        results: list[ArtworkRecord] = []
        for provider in self.configured():
            if len(results) >= count:
                break
            results.extend(provider.fetch_many(count - len(results), delay))
        logger.info("Fetched %d/%d artworks", len(results), count)
        return results
