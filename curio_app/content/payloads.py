"""JSON shapes for artworks and quotes as served to the frontend."""

from __future__ import annotations

import json
from typing import Any

DEFAULT_LANG = "de"

ATTRIBUTIONS = {
    "artic": {
        "text": "Image courtesy of the Art Institute of Chicago",
        "url": "https://www.artic.edu",
        "license": "CC0 Public Domain",
    },
    "rijks": {
        "text": "Image courtesy of the Rijksmuseum",
        "url": "https://www.rijksmuseum.nl",
        "license": "CC0 Public Domain",
    },
}


def normalize_lang(lang: str | None) -> str:
    lang = (lang or DEFAULT_LANG).lower()[:2]
    return lang if lang in ("de", "en") else DEFAULT_LANG


def _localized(row: dict[str, Any], prefix: str, lang: str) -> str | None:
    primary = row.get(f"{prefix}_{lang}")
    other = row.get(f"{prefix}_{'en' if lang == 'de' else 'de'}")
    return primary or other


def artwork_payload(row: dict[str, Any], lang: str = DEFAULT_LANG) -> dict[str, Any]:
    """Artwork row → ``{id, title, artist, year, imageUrl, description, source, ...}``."""
    lang = normalize_lang(lang)
    metadata = row.get("metadata") or {}
    if isinstance(metadata, str):
        metadata = json.loads(metadata or "{}")
    payload = {
        "id": row["id"],
        "title": row["title"],
        "artist": row["artist"],
        "year": row.get("year"),
        "imageUrl": row["image_url"],
        "imageUrlLarge": row.get("image_url_large") or row["image_url"],
        "description": _localized(row, "ai_description", lang),
        "descriptionDe": row.get("ai_description_de"),
        "descriptionEn": row.get("ai_description_en"),
        "medium": row.get("medium"),
        "dimensions": row.get("dimensions"),
        "origin": metadata.get("origin"),
        "source": row["source_api"],
    }
    attribution = ATTRIBUTIONS.get(row["source_api"])
    if attribution:
        payload["attribution"] = attribution
    return payload


def quote_payload(row: dict[str, Any], lang: str = DEFAULT_LANG) -> dict[str, Any]:
    """Quote row → ``{id, text, author, source, backgroundInfo, ...}``."""
    lang = normalize_lang(lang)
    return {
        "id": row["id"],
        "text": row["text"],
        "author": row["author"],
        "source": row.get("source") or row["source_api"],
        "category": row.get("category"),
        "backgroundInfo": _localized(row, "ai_description", lang),
        "backgroundInfoDe": row.get("ai_description_de"),
        "backgroundInfoEn": row.get("ai_description_en"),
    }
