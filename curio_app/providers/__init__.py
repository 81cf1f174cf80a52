"""Content providers — museum and quote API clients with fallback chains."""

from curio_app.providers.art import ArtFetcher
from curio_app.providers.models import ArtworkRecord, QuoteRecord
from curio_app.providers.quotes import QuoteFetcher

__all__ = ["ArtFetcher", "ArtworkRecord", "QuoteFetcher", "QuoteRecord"]
