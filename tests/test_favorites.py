"""Tests for favorites and quote gradients."""

from __future__ import annotations

import pytest

from conftest import make_artwork, make_quote

from curio_app.content.gradients import GRADIENTS, gradient_for_id, random_gradient
from curio_app.db.models import ArtworkRepository, QuoteRepository, UserRepository
from curio_app.errors import NotFoundError, ValidationError
from curio_app.users.favorites import FavoritesService


@pytest.fixture
def favorites(db):
    return FavoritesService(db)


@pytest.fixture
def user_id(db):
    return UserRepository(db).create("ada@example.com", "hash")


@pytest.fixture
def artwork_id(db):
    return ArtworkRepository(db).insert(
        make_artwork(1, description_de="Ein Bild.", description_en="A picture.")
    )


@pytest.fixture
def quote_id(db):
    return QuoteRepository(db).insert(make_quote(1))


class TestFavoritesService:
    def test_add_is_idempotent(self, favorites, user_id, artwork_id):
        first = favorites.add(user_id, "art", artwork_id)
        second = favorites.add(user_id, "art", str(artwork_id))

        assert first["alreadyExists"] is False
        assert second["alreadyExists"] is True
        assert second["favoriteId"] == first["favoriteId"]
        assert len(favorites.list_for_user(user_id)) == 1

    def test_add_unknown_item(self, favorites, user_id):
        with pytest.raises(NotFoundError):
            favorites.add(user_id, "quotes", 999)

    def test_add_invalid_input(self, favorites, user_id):
        with pytest.raises(ValidationError):
            favorites.add(user_id, "music", 1)
        with pytest.raises(ValidationError):
            favorites.add(user_id, "art", "abc")

    def test_list_shapes(self, favorites, user_id, artwork_id, quote_id):
        favorites.add(user_id, "art", artwork_id)
        favorites.add(user_id, "quotes", quote_id, gradient=GRADIENTS[3])

        quote, art = favorites.list_for_user(user_id, lang="en")
        assert art["type"] == "art"
        assert art["title"] == "Artwork 1"
        assert art["description"] == "A picture."
        assert quote["type"] == "quotes"
        assert quote["text"] == "Quote number 1."
        assert quote["savedGradient"] == GRADIENTS[3]

    def test_list_defaults_gradient(self, favorites, user_id, quote_id):
        favorites.add(user_id, "quotes", quote_id)
        (quote,) = favorites.list_for_user(user_id)
        assert quote["savedGradient"] == gradient_for_id(quote_id)

    def test_remove_only_own(self, db, favorites, user_id, artwork_id):
        fav_id = favorites.add(user_id, "art", artwork_id)["favoriteId"]
        other = UserRepository(db).create("eve@example.com", "hash")

        with pytest.raises(NotFoundError):
            favorites.remove(other, fav_id)
        favorites.remove(user_id, fav_id)
        with pytest.raises(NotFoundError):
            favorites.remove(user_id, fav_id)

    def test_check(self, favorites, user_id, artwork_id):
        assert favorites.check(user_id, "art", artwork_id) == {
            "isFavorited": False,
            "favoriteId": None,
        }
        fav_id = favorites.add(user_id, "art", artwork_id)["favoriteId"]
        assert favorites.check(user_id, "art", str(artwork_id)) == {
            "isFavorited": True,
            "favoriteId": fav_id,
        }

    def test_excluded_ids(self, favorites, user_id, artwork_id):
        assert favorites.excluded_ids(None, "art") == []
        favorites.add(user_id, "art", artwork_id)
        assert favorites.excluded_ids(user_id, "art") == [artwork_id]
        assert favorites.excluded_ids(user_id, "quotes") == []


class TestGradients:
    def test_gradient_for_id_is_stable(self):
        assert gradient_for_id(42) == gradient_for_id("42")
        assert gradient_for_id(42) in GRADIENTS

    def test_gradient_for_missing_id(self):
        assert gradient_for_id(None) == GRADIENTS[0]

    def test_random_gradient_differs_from_previous(self):
        for _ in range(50):
            assert random_gradient(GRADIENTS[0]) != GRADIENTS[0]
