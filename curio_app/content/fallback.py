"""Bundled content served when neither the cache nor any provider can deliver."""

from __future__ import annotations

import random
from typing import Any

from curio_app.content.payloads import normalize_lang

FALLBACK_ART = [
    {
        "id": "art_1",
        "title": "Sternennacht",
        "artist": "Vincent van Gogh",
        "year": "1889",
        "imageUrl": "https://images.unsplash.com/photo-1579783902614-a3fb3927b6a5?w=800&q=80",
        "description": {
            "de": "Die Sternennacht ist eines der bekanntesten Werke von Vincent van Gogh. "
            "Es zeigt die Aussicht aus seinem Fenster im Sanatorium von "
            "Saint-Rémy-de-Provence kurz vor Sonnenaufgang.",
            "en": "The Starry Night is one of Vincent van Gogh's best-known works. "
            "It shows the view from his window at the asylum in "
            "Saint-Rémy-de-Provence just before sunrise.",
        },
    },
    {
        "id": "art_2",
        "title": "Die große Welle vor Kanagawa",
        "artist": "Katsushika Hokusai",
        "year": "1831",
        "imageUrl": "https://images.unsplash.com/photo-1578301978162-7aae4d755744?w=800&q=80",
        "description": {
            "de": "Dieses ikonische japanische Holzschnittwerk zeigt eine riesige Welle, "
            "die drei Fischerboote vor der Küste Kanagawas bedroht.",
            "en": "This iconic Japanese woodblock print shows a towering wave "
            "threatening three fishing boats off the coast of Kanagawa.",
        },
    },
    {
        "id": "art_3",
        "title": "Mona Lisa",
        "artist": "Leonardo da Vinci",
        "year": "1503",
        "imageUrl": "https://images.unsplash.com/photo-1561214115-f2f134cc4912?w=800&q=80",
        "description": {
            "de": "Die Mona Lisa ist eines der berühmtesten Gemälde der Welt. "
            "Das Porträt zeigt Lisa Gherardini mit ihrem rätselhaften Lächeln.",
            "en": "The Mona Lisa is one of the most famous paintings in the world. "
            "The portrait shows Lisa Gherardini with her enigmatic smile.",
        },
    },
]

FALLBACK_QUOTES = [
    {
        "id": "quote_1",
        "text": "In der Mitte von Schwierigkeiten liegen die Möglichkeiten.",
        "author": "Albert Einstein",
        "source": "Brief an einen Freund, 1940er",
        "backgroundInfo": {
            "de": "Albert Einstein (1879-1955) war ein theoretischer Physiker, "
            "der die Relativitätstheorie entwickelte.",
            "en": "Albert Einstein (1879-1955) was a theoretical physicist "
            "who developed the theory of relativity.",
        },
    },
    {
        "id": "quote_2",
        "text": "Die einzige Art, großartige Arbeit zu leisten, ist zu lieben, was man tut.",
        "author": "Steve Jobs",
        "source": "Stanford Commencement Speech, 2005",
        "backgroundInfo": {
            "de": "Steve Jobs (1955-2011) war Mitbegründer von Apple Inc. und eine "
            "Schlüsselfigur in der Computerrevolution.",
            "en": "Steve Jobs (1955-2011) co-founded Apple Inc. and was a key figure "
            "in the personal computer revolution.",
        },
    },
    {
        "id": "quote_3",
        "text": "Sei du selbst die Veränderung, die du dir wünschst für diese Welt.",
        "author": "Mahatma Gandhi",
        "source": "Zugeschrieben, genaue Quelle unbekannt",
        "backgroundInfo": {
            "de": "Mahatma Gandhi (1869-1948) war ein indischer Rechtsanwalt, "
            "Politiker und spiritueller Führer.",
            "en": "Mahatma Gandhi (1869-1948) was an Indian lawyer, politician "
            "and spiritual leader.",
        },
    },
]


def _localize(item: dict[str, Any], key: str, lang: str) -> dict[str, Any]:
    texts = item[key]
    return {**item, key: texts[lang], "source": item.get("source", "fallback")}


def fallback_artwork(lang: str | None = None) -> dict[str, Any]:
    return _localize(random.choice(FALLBACK_ART), "description", normalize_lang(lang))


def fallback_quote(lang: str | None = None) -> dict[str, Any]:
    return _localize(random.choice(FALLBACK_QUOTES), "backgroundInfo", normalize_lang(lang))
