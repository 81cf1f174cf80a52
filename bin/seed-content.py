"""Bulk-load starter artworks and quotes from config/seed.yml.

Items already in the cache (same external id, or same text and author)
are skipped, so the script is safe to re-run.

Usage:
    bin/seed-content.py              # Dry run (count only)
    bin/seed-content.py --apply      # Insert into the database
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(REPO_ROOT))

from curio_app.config import AppConfig, load_seed_content
from curio_app.db.connection import init_db
from curio_app.db.models import ArtworkRepository, QuoteRepository
from curio_app.providers.models import ArtworkRecord, QuoteRecord


def artwork_record(item: dict) -> ArtworkRecord:
    return ArtworkRecord(
        external_id=str(item["external_id"]),
        title=item.get("title") or "Untitled",
        artist=item.get("artist") or "Unknown Artist",
        year=str(item.get("year") or "Unknown"),
        image_url=item["image_url"],
        image_url_large=item.get("image_url_large"),
        source_api=item.get("source_api", "seed"),
        medium=item.get("medium"),
        dimensions=item.get("dimensions"),
        description_de=item.get("ai_description_de"),
        description_en=item.get("ai_description_en"),
    )


def quote_record(item: dict) -> QuoteRecord:
    return QuoteRecord(
        text=item["text"].strip(),
        author=item.get("author") or "Unknown",
        source_api=item.get("source_api", "seed"),
        source=item.get("source"),
        category=item.get("category"),
        description_de=item.get("ai_description_de"),
        description_en=item.get("ai_description_en"),
    )


def main():
    parser = argparse.ArgumentParser(description="Seed the content cache from config/seed.yml")
    parser.add_argument(
        "--apply", action="store_true", help="Actually insert (default is dry run)"
    )
    args = parser.parse_args()

    seed = load_seed_content()
    artworks = [artwork_record(item) for item in seed.get("artworks", [])]
    quotes = [quote_record(item) for item in seed.get("quotes", [])]
    print(f"Seed file has {len(artworks)} artworks and {len(quotes)} quotes")

    if not args.apply:
        print("Dry run — pass --apply to insert them")
        return

    db = init_db(AppConfig.from_yaml())
    art_repo = ArtworkRepository(db)
    quote_repo = QuoteRepository(db)

    added_art = sum(1 for record in artworks if art_repo.insert(record) is not None)
    added_quotes = sum(1 for record in quotes if quote_repo.insert(record) is not None)

    print(f"Inserted {added_art} artworks and {added_quotes} quotes (duplicates skipped)")
    print(f"Cache now holds {art_repo.count()} artworks and {quote_repo.count()} quotes")


if __name__ == "__main__":
    main()
