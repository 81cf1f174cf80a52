"""Tiered daily view limits.

Every navigation to another artwork or quote counts against the requester's
daily allowance. Accounts are counted per user id, guests per client address.
Counters are keyed by the calendar date in the content timezone, so they
roll over at local midnight even before the daily cleanup runs.
"""

from __future__ import annotations

import logging
from typing import Any

from curio_app.config import AppConfig, TierLimit
from curio_app.daily.service import today
from curio_app.db.connection import Database
from curio_app.db.models import UsageRepository
from curio_app.errors import LimitReachedError, ValidationError
from curio_app.users.auth import AuthUser

logger = logging.getLogger(__name__)

KINDS = ("art", "quotes")
TIERS = ("guest", "registered", "premium")


def tier_for(user: AuthUser | None) -> str:
    if user is None:
        return "guest"
    return user.tier


def subject_for(user: AuthUser | None, client_ip: str | None) -> str:
    if user is not None:
        return f"user:{user.id}"
    return f"guest:{client_ip or 'unknown'}"


class UsageLimiter:
    def __init__(self, db: Database, config: AppConfig):
        self.usage = UsageRepository(db)
        self.limits = config.limits
        self.timezone = config.scheduler.timezone

    def _tier_limit(self, tier: str) -> TierLimit:
        if tier not in TIERS:
            raise ValidationError(f"Unknown tier: {tier}")
        return getattr(self.limits, tier)

    def max_for(self, tier: str, kind: str) -> int | None:
        if kind not in KINDS:
            raise ValidationError(f"Unknown content type: {kind}")
        return getattr(self._tier_limit(tier), kind)

    def check_and_increment(self, subject: str, tier: str, kind: str) -> dict[str, Any]:
        """Count one view, or raise LimitReachedError if the allowance is used up."""
        maximum = self.max_for(tier, kind)
        date = today(self.timezone)
        used = self.usage.increment(subject, date, kind, limit=maximum)
        if used is None:
            logger.info("Daily %s limit reached for %s (%s, max %s)", kind, subject, tier, maximum)
            raise LimitReachedError(
                "Daily limit reached",
                type=kind,
                userType=tier,
                limit=maximum,
                upgradeAvailable=tier != "premium",
            )
        return {
            "used": used,
            "max": maximum,
            "remaining": None if maximum is None else max(maximum - used, 0),
        }

    def summary(self, subject: str, tier: str) -> dict[str, Any]:
        """Used/max/remaining per content type for today."""
        counts = self.usage.get(subject, today(self.timezone))
        limits = {}
        for kind in KINDS:
            maximum = self.max_for(tier, kind)
            used = counts[kind]
            limits[kind] = {
                "used": used,
                "max": maximum,
                "remaining": None if maximum is None else max(maximum - used, 0),
            }
        return {"userType": tier, "limits": limits}
