"""Favorites — saved artworks and quotes per user."""

from __future__ import annotations

import logging
import sqlite3
from typing import Any

from curio_app.content.gradients import gradient_for_id
from curio_app.content.payloads import normalize_lang
from curio_app.db.connection import Database
from curio_app.db.models import ArtworkRepository, FavoriteRepository, QuoteRepository
from curio_app.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)

FAVORITE_TYPES = ("art", "quotes")


def _parse_item_id(item_id: Any) -> int:
    try:
        return int(item_id)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid itemId: {item_id!r}") from e


def _check_type(kind: str | None) -> str:
    if kind not in FAVORITE_TYPES:
        raise ValidationError("Invalid type. Must be 'art' or 'quotes'")
    return kind


class FavoritesService:
    def __init__(self, db: Database):
        self.favorites = FavoriteRepository(db)
        self.artworks = ArtworkRepository(db)
        self.quotes = QuoteRepository(db)

    def list_for_user(self, user_id: int, lang: str | None = None) -> list[dict[str, Any]]:
        """All favorites of a user, newest first."""
        lang = normalize_lang(lang)
        result = []
        for row in self.favorites.list_for_user(user_id):
            if row["artwork_id"] is not None:
                result.append(
                    {
                        "favoriteId": row["favorite_id"],
                        "type": "art",
                        "id": row["artwork_id"],
                        "title": row["title"],
                        "artist": row["artist"],
                        "year": row["year"],
                        "imageUrl": row["image_url"],
                        "description": row[f"art_description_{lang}"],
                        "source": row["art_source"],
                        "savedAt": row["saved_at"],
                    }
                )
            else:
                result.append(
                    {
                        "favoriteId": row["favorite_id"],
                        "type": "quotes",
                        "id": row["quote_id"],
                        "text": row["text"],
                        "author": row["author"],
                        "source": row["quote_source"],
                        "category": row["category"],
                        "backgroundInfo": row[f"quote_description_{lang}"],
                        "savedGradient": row["saved_gradient"] or gradient_for_id(row["quote_id"]),
                        "savedAt": row["saved_at"],
                    }
                )
        return result

    def add(self, user_id: int, kind: str | None, item_id: Any, gradient: str | None = None) -> dict[str, Any]:
        """Save an item. Saving the same item twice returns the existing favorite."""
        kind = _check_type(kind)
        item_id = _parse_item_id(item_id)

        existing = self.favorites.find(user_id, kind, item_id)
        if existing:
            return {"alreadyExists": True, "favoriteId": existing["id"], "type": kind, "itemId": item_id}

        repo = self.artworks if kind == "art" else self.quotes
        if not repo.get(item_id):
            raise NotFoundError(f"{'Artwork' if kind == 'art' else 'Quote'} {item_id} not found")

        try:
            favorite_id = self.favorites.add(
                user_id, kind, item_id, gradient if kind == "quotes" else None
            )
        except sqlite3.IntegrityError:
            existing = self.favorites.find(user_id, kind, item_id)
            return {"alreadyExists": True, "favoriteId": existing["id"], "type": kind, "itemId": item_id}

        logger.info("User %d saved %s %d", user_id, kind, item_id)
        return {"alreadyExists": False, "favoriteId": favorite_id, "type": kind, "itemId": item_id}

    def remove(self, user_id: int, favorite_id: int) -> None:
        """Delete a favorite owned by ``user_id``."""
        if not self.favorites.delete(favorite_id, user_id):
            raise NotFoundError("Favorite not found")

    def check(self, user_id: int, kind: str | None, item_id: Any) -> dict[str, Any]:
        kind = _check_type(kind)
        existing = self.favorites.find(user_id, kind, _parse_item_id(item_id))
        return {"isFavorited": existing is not None, "favoriteId": existing["id"] if existing else None}

    def excluded_ids(self, user_id: int | None, kind: str) -> list[int]:
        """Item ids to skip when navigating, so saved items don't come up again."""
        if user_id is None:
            return []
        return self.favorites.item_ids(user_id, kind)
