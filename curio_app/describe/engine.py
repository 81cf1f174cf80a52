"""Description engine — bilingual artwork and quote texts via the LLM gateway."""

from __future__ import annotations

import logging

from curio_app.describe.prompts import (
    FALLBACK_ART_DE,
    FALLBACK_ART_EN,
    FALLBACK_QUOTE_DE,
    FALLBACK_QUOTE_EN,
    LANGUAGES,
    build_art_prompt,
    build_quote_prompt,
)
from curio_app.llm.gateway import LLMGateway

logger = logging.getLogger(__name__)


class DescriptionEngine:
    """Generates German and English descriptions, with fixed fallbacks."""

    def __init__(self, llm_gateway: LLMGateway):
        self.llm = llm_gateway

    def describe_artwork(
        self,
        title: str,
        artist: str,
        year: str | None = None,
        artwork_id: int | None = None,
    ) -> dict[str, str]:
        """Return ``{"de": ..., "en": ...}`` for an artwork."""
        logger.info("Generating descriptions for %r", title)
        fallbacks = {"de": FALLBACK_ART_DE, "en": FALLBACK_ART_EN}
        result = {}
        for lang in LANGUAGES:
            text = self.llm.describe(
                build_art_prompt(title, artist, year, lang),
                max_tokens=self.llm.config.max_art_tokens,
                call_type=f"art_{lang}",
                subject_type="artwork",
                subject_id=artwork_id,
            )
            result[lang] = text or fallbacks[lang]
        return result

    def describe_quote(
        self, text: str, author: str, quote_id: int | None = None
    ) -> dict[str, str]:
        """Return ``{"de": ..., "en": ...}`` for a quote."""
        logger.info("Generating descriptions for quote by %s", author)
        fallbacks = {"de": FALLBACK_QUOTE_DE, "en": FALLBACK_QUOTE_EN}
        result = {}
        for lang in LANGUAGES:
            description = self.llm.describe(
                build_quote_prompt(text, author, lang),
                max_tokens=self.llm.config.max_quote_tokens,
                call_type=f"quote_{lang}",
                subject_type="quote",
                subject_id=quote_id,
            )
            result[lang] = description or fallbacks[lang]
        return result
