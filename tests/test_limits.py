"""Tests for tiered daily view limits."""

from __future__ import annotations

import pytest

from curio_app.config import TierLimit
from curio_app.errors import LimitReachedError, ValidationError
from curio_app.users.auth import AuthUser
from curio_app.users.limits import UsageLimiter, subject_for, tier_for


@pytest.fixture
def limiter(db, config):
    return UsageLimiter(db, config)


def test_tier_for():
    assert tier_for(None) == "guest"
    assert tier_for(AuthUser(id=1, email="a@example.com", is_premium=False)) == "registered"
    assert tier_for(AuthUser(id=1, email="a@example.com", is_premium=True)) == "premium"


def test_subject_for():
    user = AuthUser(id=7, email="a@example.com", is_premium=False)
    assert subject_for(user, "1.2.3.4") == "user:7"
    assert subject_for(None, "1.2.3.4") == "guest:1.2.3.4"
    assert subject_for(None, None) == "guest:unknown"


class TestUsageLimiter:
    def test_default_limits(self, limiter):
        assert limiter.max_for("guest", "art") == 3
        assert limiter.max_for("registered", "quotes") == 10
        assert limiter.max_for("premium", "art") == 50

    def test_guest_fourth_view_rejected(self, limiter):
        for used in (1, 2, 3):
            usage = limiter.check_and_increment("guest:1.2.3.4", "guest", "art")
            assert usage == {"used": used, "max": 3, "remaining": 3 - used}

        with pytest.raises(LimitReachedError) as exc_info:
            limiter.check_and_increment("guest:1.2.3.4", "guest", "art")

        err = exc_info.value
        assert err.status_code == 429
        assert err.extra == {
            "type": "art",
            "userType": "guest",
            "limit": 3,
            "upgradeAvailable": True,
        }

    def test_kinds_counted_separately(self, limiter):
        for _ in range(3):
            limiter.check_and_increment("guest:1.2.3.4", "guest", "art")
        assert limiter.check_and_increment("guest:1.2.3.4", "guest", "quotes")["used"] == 1

    def test_subjects_counted_separately(self, limiter):
        for _ in range(3):
            limiter.check_and_increment("guest:1.2.3.4", "guest", "art")
        assert limiter.check_and_increment("guest:5.6.7.8", "guest", "art")["used"] == 1

    def test_premium_no_upgrade(self, db, config):
        config.limits.premium = TierLimit(art=1, quotes=1)
        limiter = UsageLimiter(db, config)
        limiter.check_and_increment("user:1", "premium", "art")
        with pytest.raises(LimitReachedError) as exc_info:
            limiter.check_and_increment("user:1", "premium", "art")
        assert exc_info.value.extra["upgradeAvailable"] is False

    def test_unlimited(self, db, config):
        config.limits.premium = TierLimit(art=None, quotes=None)
        limiter = UsageLimiter(db, config)
        for _ in range(60):
            usage = limiter.check_and_increment("user:1", "premium", "art")
        assert usage == {"used": 60, "max": None, "remaining": None}

    def test_zero_limit(self, db, config):
        config.limits.guest = TierLimit(art=0, quotes=3)
        limiter = UsageLimiter(db, config)
        with pytest.raises(LimitReachedError):
            limiter.check_and_increment("guest:1.2.3.4", "guest", "art")

    def test_unknown_kind_or_tier(self, limiter):
        with pytest.raises(ValidationError):
            limiter.max_for("guest", "music")
        with pytest.raises(ValidationError):
            limiter.max_for("admin", "art")

    def test_summary(self, limiter):
        limiter.check_and_increment("user:1", "registered", "art")
        summary = limiter.summary("user:1", "registered")

        assert summary["userType"] == "registered"
        assert summary["limits"]["art"] == {"used": 1, "max": 10, "remaining": 9}
        assert summary["limits"]["quotes"] == {"used": 0, "max": 10, "remaining": 10}
