"""Tests for response payloads and the bundled fallback content."""

from __future__ import annotations

from curio_app.content.fallback import FALLBACK_ART, FALLBACK_QUOTES, fallback_artwork, fallback_quote
from curio_app.content.payloads import artwork_payload, normalize_lang, quote_payload

ARTWORK_ROW = {
    "id": 1,
    "external_id": "27992",
    "title": "A Sunday on La Grande Jatte",
    "artist": "Georges Seurat",
    "year": "1884-86",
    "image_url": "https://www.artic.edu/iiif/2/abc/full/843,/0/default.jpg",
    "image_url_large": None,
    "source_api": "artic",
    "medium": "Oil on canvas",
    "dimensions": None,
    "metadata": '{"origin": "France"}',
    "ai_description_de": "Ein Sonntag.",
    "ai_description_en": None,
}

QUOTE_ROW = {
    "id": 2,
    "text": "Carpe diem.",
    "author": "Horace",
    "source": None,
    "category": "life",
    "source_api": "favqs",
    "ai_description_de": None,
    "ai_description_en": "Seize the day.",
}


def test_normalize_lang():
    assert normalize_lang(None) == "de"
    assert normalize_lang("EN-us") == "en"
    assert normalize_lang("fr") == "de"


def test_artwork_payload():
    payload = artwork_payload(ARTWORK_ROW, "de")
    assert payload["title"] == "A Sunday on La Grande Jatte"
    assert payload["artist"] == "Georges Seurat"
    assert payload["imageUrl"] == ARTWORK_ROW["image_url"]
    assert payload["imageUrlLarge"] == ARTWORK_ROW["image_url"]
    assert payload["description"] == "Ein Sonntag."
    assert payload["origin"] == "France"
    assert payload["attribution"]["license"] == "CC0 Public Domain"


def test_artwork_payload_falls_back_to_other_language():
    assert artwork_payload(ARTWORK_ROW, "en")["description"] == "Ein Sonntag."


def test_quote_payload():
    payload = quote_payload(QUOTE_ROW, "de")
    assert payload["text"] == "Carpe diem."
    assert payload["source"] == "favqs"
    assert payload["backgroundInfo"] == "Seize the day."
    assert payload["backgroundInfoEn"] == "Seize the day."


def test_fallback_content_is_localized():
    art = fallback_artwork("en")
    assert art["title"] in [a["title"] for a in FALLBACK_ART]
    assert isinstance(art["description"], str)
    assert art["imageUrl"]

    quote = fallback_quote("de")
    assert quote["text"] in [q["text"] for q in FALLBACK_QUOTES]
    assert isinstance(quote["backgroundInfo"], str)
