"""Description prompt templates — German and English, plain prose only."""

FALLBACK_QUOTE_DE = "Dieses Zitat lädt zum Nachdenken ein und bietet eine zeitlose Weisheit."
FALLBACK_QUOTE_EN = "This quote invites reflection and offers timeless wisdom."
FALLBACK_ART_DE = "Dieses Kunstwerk zeigt die meisterhafte Technik seines Schöpfers."
FALLBACK_ART_EN = "This artwork demonstrates the masterful technique of its creator."

LANGUAGES = ("de", "en")


def build_quote_prompt(text: str, author: str, lang: str) -> str:
    """Background text for a quote: 30-65 words, one or two paragraphs."""
    if lang == "de":
        return f"""Schreibe einen kurzen, prägnanten Hintergrundtext zum Zitat:
"{text}" - {author}

WICHTIG - Struktur:
- 1-2 kurze Absätze, getrennt durch Leerzeile
- Falls relevant: historischer Kontext, Entstehung, kulturelle Bedeutung
- Bezug zum Autor nur wenn es das Zitat bereichert, falls unbekannt nur interpretieren

STIL:
- Kompakt und pointiert (30-65 Wörter)
- Keine Wiederholung des Zitats
- Keine generischen Einleitungen wie "Dieses Zitat zeigt..."
- Ob die Zuschreibung belegt ist, nur ganz knapp als letzter Absatz
- Nur schreiben wenn es etwas Interessantes zu sagen gibt

Falls keine bedeutsame Geschichte bekannt ist, schreibe nur 1-2 Sätze zur Kernaussage.

WICHTIG: Schreibe NUR Fließtext ohne Formatierung wie ** oder #. Trenne Absätze mit einer Leerzeile."""

    return f"""Write a short, concise background text for the quote:
"{text}" - {author}

IMPORTANT - Structure:
- 1-2 short paragraphs, separated by blank line
- If relevant: historical context, origin, cultural significance
- Reference to author only if it enriches the quote, if unknown just interpret

STYLE:
- Compact and to the point (30-65 words)
- No repetition of the quote itself
- No generic introductions like "This quote shows..."
- Whether the attribution is documented, only very briefly as the last paragraph
- Only write if there's something interesting to say

If no significant story is known, write only 1-2 sentences about the core message.

IMPORTANT: Write ONLY prose without formatting like ** or #. Separate paragraphs with a blank line."""


def build_art_prompt(title: str, artist: str, year: str | None, lang: str) -> str:
    """Museum-style text for an artwork: three paragraphs, 80-180 words."""
    if lang == "de":
        return f"""Schreibe einen informativen Text über das Kunstwerk "{title}" von {artist} ({year or 'unbekannt'}).

WICHTIG - Struktur mit Absätzen:
- Absatz 1: Bedeutung und Wirkung - Welchen Einfluss hatte das Werk? Wie wurde es rezipiert?
- Absatz 2: Entstehungsgeschichte des Werks - Was hat den Künstler inspiriert? Welcher Kontext?
- Absatz 3: Kurze Einordnung des Künstlers (Nationalität, Lebensdaten, Stilrichtung)

STIL:
- Sachlich aber lebendig, wie ein Museumstext
- Konkrete Details und Anekdoten wenn bekannt
- Keine generischen Floskeln wie "dieses Meisterwerk zeigt..."
- Länge je nach verfügbarer Geschichte: 80-180 Wörter

WICHTIG: Schreibe NUR Fließtext ohne Formatierung wie ** oder #. Trenne die Absätze mit einer Leerzeile."""

    return f"""Write an informative text about the artwork "{title}" by {artist} ({year or 'unknown'}).

IMPORTANT - Structure with paragraphs:
- Paragraph 1: Significance and impact - What influence did the work have? How was it received?
- Paragraph 2: Creation story - What inspired the artist? What was the context?
- Paragraph 3: Brief context about the artist (nationality, life dates, artistic movement)

STYLE:
- Factual yet engaging, like a museum text
- Specific details and anecdotes when known
- No generic phrases like "this masterpiece shows..."
- Length depending on available history: 80-180 words

IMPORTANT: Write ONLY prose without formatting like ** or #. Separate paragraphs with a blank line."""
