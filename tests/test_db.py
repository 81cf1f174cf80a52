"""Tests for database layer."""

from datetime import datetime, timedelta, timezone

from conftest import make_artwork, make_quote

from curio_app.db.models import (
    ArtworkRepository,
    DailyContentRepository,
    FavoriteRepository,
    JobRepository,
    PremiumRepository,
    QuoteRepository,
    SessionRepository,
    UsageRepository,
    UserRepository,
    to_sql_timestamp,
)


def _ts(delta: timedelta) -> str:
    return to_sql_timestamp(datetime.now(timezone.utc) + delta)


class TestUserRepository:
    def test_create_and_get(self, db):
        repo = UserRepository(db)
        user_id = repo.create("test@example.com", "hash")
        assert user_id > 0

        user = repo.get_by_email("test@example.com")
        assert user is not None
        assert user.id == user_id
        assert repo.get_by_id(user_id).email == "test@example.com"
        assert repo.get_password_hash("test@example.com") == (user_id, "hash")

    def test_get_nonexistent(self, db):
        repo = UserRepository(db)
        assert repo.get_by_email("nobody@example.com") is None
        assert repo.get_password_hash("nobody@example.com") is None


class TestSessionRepository:
    def test_active_and_expired_tokens(self, db):
        user_id = UserRepository(db).create("test@example.com", "hash")
        repo = SessionRepository(db)
        repo.create(user_id, "live", "live-r", _ts(timedelta(hours=1)), _ts(timedelta(days=1)))
        repo.create(user_id, "old", "old-r", _ts(timedelta(hours=-1)), _ts(timedelta(days=-1)))

        assert repo.get_active_by_access("live").user_id == user_id
        assert repo.get_active_by_access("old") is None
        assert repo.get_active_by_refresh("old-r") is None

    def test_revoke_and_cleanup(self, db):
        user_id = UserRepository(db).create("test@example.com", "hash")
        repo = SessionRepository(db)
        session_id = repo.create(user_id, "a", "r", _ts(timedelta(hours=1)), _ts(timedelta(days=1)))
        repo.revoke(session_id)

        assert repo.get_active_by_access("a") is None
        assert repo.cleanup_expired() == 1


class TestPremiumRepository:
    def test_active_membership(self, db):
        repo = PremiumRepository(db)
        repo.upsert("vip@example.com", _ts(timedelta(days=30)))
        repo.upsert("forever@example.com", None)

        assert repo.is_active("vip@example.com")
        assert repo.is_active("forever@example.com")
        assert not repo.is_active("nobody@example.com")

    def test_expire_overdue(self, db):
        repo = PremiumRepository(db)
        repo.upsert("old@example.com", _ts(timedelta(days=-1)))
        repo.upsert("vip@example.com", _ts(timedelta(days=1)))

        assert not repo.is_active("old@example.com")
        assert repo.expire_overdue() == 1
        assert repo.get("old@example.com")["status"] == "expired"
        assert repo.get("vip@example.com")["status"] == "active"


class TestContentRepositories:
    def test_artwork_insert_is_unique_by_external_id(self, db):
        repo = ArtworkRepository(db)
        first = repo.insert(make_artwork(1))
        assert first > 0
        assert repo.insert(make_artwork(1, title="Other title")) is None
        assert repo.count() == 1
        assert repo.get(first)["title"] == "Artwork 1"

    def test_random_respects_exclusions(self, db):
        repo = ArtworkRepository(db)
        a = repo.insert(make_artwork(1))
        b = repo.insert(make_artwork(2))

        for _ in range(10):
            assert repo.random(exclude_ids=[a])["id"] == b
        assert repo.random(exclude_ids=[a, b]) is None

    def test_missing_descriptions(self, db):
        repo = ArtworkRepository(db)
        described = repo.insert(make_artwork(1, description_de="de", description_en="en"))
        bare = repo.insert(make_artwork(2))

        ids = [row["id"] for row in repo.missing_descriptions()]
        assert ids == [bare]

        repo.set_descriptions(bare, "de", "en")
        assert repo.missing_descriptions() == []
        assert repo.get(described)["ai_description_en"] == "en"

    def test_quote_insert_is_unique_by_text_and_author(self, db):
        repo = QuoteRepository(db)
        assert repo.insert(make_quote(1)) > 0
        assert repo.insert(make_quote(1)) is None
        assert repo.insert(make_quote(1, author="Cicero")) > 0
        assert repo.count() == 2

    def test_quote_clear_keeps_ids(self, db):
        repo = QuoteRepository(db)
        keep = repo.insert(make_quote(1))
        repo.insert(make_quote(2))
        repo.insert(make_quote(3))

        assert repo.clear(keep_ids=[keep]) == 2
        assert repo.count() == 1
        assert repo.get(keep) is not None


class TestDailyContentRepository:
    def test_first_pick_wins(self, db):
        a1 = ArtworkRepository(db).insert(make_artwork(1))
        a2 = ArtworkRepository(db).insert(make_artwork(2))
        q1 = QuoteRepository(db).insert(make_quote(1))
        repo = DailyContentRepository(db)

        stored = repo.upsert("2026-03-01", a1, None)
        assert stored["artwork_id"] == a1
        assert stored["quote_id"] is None

        stored = repo.upsert("2026-03-01", a2, q1)
        assert stored["artwork_id"] == a1
        assert stored["quote_id"] == q1
        assert repo.picked_ids("2026-03-01") == {"artwork_id": a1, "quote_id": q1}

    def test_picked_ids_for_unknown_date(self, db):
        assert DailyContentRepository(db).picked_ids("2000-01-01") == {
            "artwork_id": None,
            "quote_id": None,
        }


class TestUsageRepository:
    def test_increment_until_limit(self, db):
        repo = UsageRepository(db)
        assert repo.increment("guest:1.2.3.4", "2026-03-01", "art", limit=2) == 1
        assert repo.increment("guest:1.2.3.4", "2026-03-01", "art", limit=2) == 2
        assert repo.increment("guest:1.2.3.4", "2026-03-01", "art", limit=2) is None
        assert repo.get("guest:1.2.3.4", "2026-03-01") == {"art": 2, "quotes": 0}

    def test_kinds_and_dates_are_independent(self, db):
        repo = UsageRepository(db)
        repo.increment("user:1", "2026-03-01", "art", limit=1)
        assert repo.increment("user:1", "2026-03-01", "quotes", limit=1) == 1
        assert repo.increment("user:1", "2026-03-02", "art", limit=1) == 1

    def test_unlimited_and_zero_limit(self, db):
        repo = UsageRepository(db)
        for i in range(1, 6):
            assert repo.increment("user:1", "2026-03-01", "art") == i
        assert repo.increment("user:2", "2026-03-01", "art", limit=0) is None

    def test_delete_before(self, db):
        repo = UsageRepository(db)
        repo.increment("user:1", "2026-03-01", "art")
        repo.increment("user:1", "2026-03-02", "art")
        assert repo.delete_before("2026-03-02") == 1
        assert repo.get("user:1", "2026-03-01") == {"art": 0, "quotes": 0}
        assert repo.get("user:1", "2026-03-02") == {"art": 1, "quotes": 0}


class TestFavoriteRepository:
    def test_add_list_and_delete(self, db):
        user_id = UserRepository(db).create("test@example.com", "hash")
        artwork_id = ArtworkRepository(db).insert(make_artwork(1))
        quote_id = QuoteRepository(db).insert(make_quote(1))
        repo = FavoriteRepository(db)

        art_fav = repo.add(user_id, "art", artwork_id)
        quote_fav = repo.add(user_id, "quotes", quote_id, "linear-gradient(red, blue)")

        rows = repo.list_for_user(user_id)
        assert [r["favorite_id"] for r in rows] == [quote_fav, art_fav]
        assert rows[0]["text"] == "Quote number 1."
        assert rows[0]["saved_gradient"] == "linear-gradient(red, blue)"
        assert rows[1]["title"] == "Artwork 1"

        assert repo.item_ids(user_id, "art") == [artwork_id]
        assert repo.all_item_ids("quotes") == [quote_id]

        assert repo.delete(art_fav, user_id + 1) == 0
        assert repo.delete(art_fav, user_id) == 1
        assert repo.find(user_id, "art", artwork_id) is None


class TestJobRepository:
    def test_enqueue_and_claim(self, db):
        repo = JobRepository(db)
        job_id = repo.enqueue("describe", {"kind": "art", "id": 1})
        assert job_id > 0

        job = repo.claim_next()
        assert job is not None
        assert job.job_type == "describe"
        assert job.payload == {"kind": "art", "id": 1}
        assert job.attempts == 1

        # No more pending jobs
        assert repo.claim_next() is None

    def test_enqueue_unique(self, db):
        repo = JobRepository(db)
        first = repo.enqueue_unique("refill_art")
        assert first is not None
        assert repo.enqueue_unique("refill_art") is None
        assert repo.enqueue_unique("refill_quotes") is not None

        repo.claim_next(job_type="refill_art")
        assert repo.enqueue_unique("refill_art") is None

        repo.complete(first)
        assert repo.enqueue_unique("refill_art") is not None

    def test_complete_and_fail(self, db):
        repo = JobRepository(db)
        done = repo.enqueue("refill_art")
        broken = repo.enqueue("refill_quotes")
        repo.complete(done)
        repo.fail(broken, "boom")
        assert repo.counts() == {"completed": 1, "failed": 1}
