"""Database model helpers — query builders for the Curio schema."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from curio_app.db.connection import Database

if TYPE_CHECKING:
    from curio_app.providers.models import ArtworkRecord, QuoteRecord

logger = logging.getLogger(__name__)

# Usage counter column per content kind
USAGE_COLUMNS = {"art": "art_count", "quotes": "quote_count"}


def _placeholders(values: list[Any]) -> str:
    return ", ".join("?" for _ in values)


def to_sql_timestamp(value: datetime) -> str:
    """Format a datetime the way SQLite's CURRENT_TIMESTAMP does (UTC)."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%d %H:%M:%S")


@dataclass
class User:
    id: int
    email: str
    is_active: bool = True
    last_sign_in_at: str | None = None
    created_at: str | None = None


@dataclass
class Session:
    id: int
    user_id: int
    access_token: str
    refresh_token: str
    expires_at: str
    refresh_expires_at: str


@dataclass
class Job:
    id: int | None = None
    job_type: str = ""
    payload: dict[str, Any] = field(default_factory=dict)
    status: str = "pending"
    attempts: int = 0
    max_attempts: int = 3
    error_message: str | None = None


_USER_FIELDS = ("id", "email", "is_active", "last_sign_in_at", "created_at")
_SESSION_FIELDS = (
    "id",
    "user_id",
    "access_token",
    "refresh_token",
    "expires_at",
    "refresh_expires_at",
)


class UserRepository:
    """Database operations for user accounts."""

    def __init__(self, db: Database):
        self.db = db

    def create(self, email: str, password_hash: str) -> int:
        return self.db.execute_write(
            "INSERT INTO users (email, password_hash) VALUES (?, ?)",
            (email, password_hash),
        )

    def get_by_email(self, email: str) -> User | None:
        row = self.db.execute_one("SELECT * FROM users WHERE email = ?", (email,))
        return User(**{k: row[k] for k in _USER_FIELDS}) if row else None

    def get_by_id(self, user_id: int) -> User | None:
        row = self.db.execute_one("SELECT * FROM users WHERE id = ?", (user_id,))
        return User(**{k: row[k] for k in _USER_FIELDS}) if row else None

    def get_password_hash(self, email: str) -> tuple[int, str] | None:
        """Return (user_id, password_hash) for an active account."""
        row = self.db.execute_one(
            "SELECT id, password_hash FROM users WHERE email = ? AND is_active = 1",
            (email,),
        )
        return (row["id"], row["password_hash"]) if row else None

    def touch_sign_in(self, user_id: int) -> None:
        self.db.execute_write(
            "UPDATE users SET last_sign_in_at = CURRENT_TIMESTAMP WHERE id = ?",
            (user_id,),
        )


class SessionRepository:
    """Bearer and refresh tokens issued at login."""

    def __init__(self, db: Database):
        self.db = db

    def create(
        self,
        user_id: int,
        access_token: str,
        refresh_token: str,
        expires_at: str,
        refresh_expires_at: str,
    ) -> int:
        return self.db.execute_write(
            """INSERT INTO sessions (user_id, access_token, refresh_token, expires_at, refresh_expires_at)
               VALUES (?, ?, ?, ?, ?)""",
            (user_id, access_token, refresh_token, expires_at, refresh_expires_at),
        )

    def get_active_by_access(self, access_token: str) -> Session | None:
        row = self.db.execute_one(
            """SELECT * FROM sessions
               WHERE access_token = ? AND revoked = 0 AND expires_at > datetime('now')""",
            (access_token,),
        )
        return Session(**{k: row[k] for k in _SESSION_FIELDS}) if row else None

    def get_active_by_refresh(self, refresh_token: str) -> Session | None:
        row = self.db.execute_one(
            """SELECT * FROM sessions
               WHERE refresh_token = ? AND revoked = 0 AND refresh_expires_at > datetime('now')""",
            (refresh_token,),
        )
        return Session(**{k: row[k] for k in _SESSION_FIELDS}) if row else None

    def revoke(self, session_id: int) -> None:
        self.db.execute_write("UPDATE sessions SET revoked = 1 WHERE id = ?", (session_id,))

    def cleanup_expired(self) -> int:
        """Remove sessions whose refresh window has closed."""
        return self.db.execute_count(
            "DELETE FROM sessions WHERE revoked = 1 OR refresh_expires_at < datetime('now')"
        )


class PremiumRepository:
    """Premium memberships keyed by email."""

    def __init__(self, db: Database):
        self.db = db

    def get(self, email: str) -> dict[str, Any] | None:
        return self.db.execute_one("SELECT * FROM premium_users WHERE email = ?", (email,))

    def is_active(self, email: str) -> bool:
        row = self.db.execute_one(
            """SELECT 1 FROM premium_users
               WHERE email = ? AND status = 'active'
                 AND (expires_at IS NULL OR expires_at > datetime('now'))""",
            (email,),
        )
        return row is not None

    def upsert(self, email: str, expires_at: str | None, status: str = "active") -> None:
        self.db.execute_write(
            """INSERT INTO premium_users (email, status, expires_at) VALUES (?, ?, ?)
               ON CONFLICT(email) DO UPDATE SET status = excluded.status, expires_at = excluded.expires_at""",
            (email, status, expires_at),
        )

    def expire_overdue(self) -> int:
        """Mark active memberships past their expiry as expired."""
        return self.db.execute_count(
            """UPDATE premium_users SET status = 'expired'
               WHERE status = 'active' AND expires_at IS NOT NULL AND expires_at < datetime('now')"""
        )


class ArtworkRepository:
    """Cached artworks fetched from museum APIs."""

    def __init__(self, db: Database):
        self.db = db

    def insert(self, record: ArtworkRecord) -> int | None:
        """Insert an artwork; returns None if the external id is already cached."""
        row = self.db.execute_one(
            """INSERT INTO artworks (
                external_id, title, artist, year, image_url, image_url_large,
                source_api, medium, dimensions, metadata,
                ai_description_de, ai_description_en
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT(external_id) DO NOTHING
            RETURNING id""",
            (
                record.external_id,
                record.title,
                record.artist,
                record.year,
                record.image_url,
                record.image_url_large,
                record.source_api,
                record.medium,
                record.dimensions,
                json.dumps(record.metadata),
                record.description_de,
                record.description_en,
            ),
        )
        return row["id"] if row else None

    def get(self, artwork_id: int) -> dict[str, Any] | None:
        return self.db.execute_one("SELECT * FROM artworks WHERE id = ?", (artwork_id,))

    def get_by_external_id(self, external_id: str) -> dict[str, Any] | None:
        return self.db.execute_one(
            "SELECT * FROM artworks WHERE external_id = ?", (external_id,)
        )

    def count(self) -> int:
        row = self.db.execute_one("SELECT COUNT(*) AS n FROM artworks")
        return row["n"] if row else 0

    def random(self, exclude_ids: list[int] | None = None) -> dict[str, Any] | None:
        exclude_ids = list(exclude_ids or [])
        where = f"WHERE id NOT IN ({_placeholders(exclude_ids)})" if exclude_ids else ""
        return self.db.execute_one(
            f"SELECT * FROM artworks {where} ORDER BY RANDOM() LIMIT 1",
            tuple(exclude_ids),
        )

    def fill_missing_details(self, artwork_id: int, medium: str | None, dimensions: str | None) -> int:
        """Fill medium/dimensions only where they are still empty."""
        return self.db.execute_count(
            """UPDATE artworks
               SET medium = COALESCE(NULLIF(medium, ''), ?),
                   dimensions = COALESCE(NULLIF(dimensions, ''), ?)
               WHERE id = ?""",
            (medium, dimensions, artwork_id),
        )

    def set_descriptions(self, artwork_id: int, de: str, en: str) -> None:
        self.db.execute_write(
            "UPDATE artworks SET ai_description_de = ?, ai_description_en = ? WHERE id = ?",
            (de, en, artwork_id),
        )

    def missing_descriptions(self, limit: int = 20) -> list[dict[str, Any]]:
        return self.db.execute(
            """SELECT * FROM artworks
               WHERE ai_description_de IS NULL OR ai_description_en IS NULL
               ORDER BY id LIMIT ?""",
            (limit,),
        )


class QuoteRepository:
    """Cached quotes fetched from quote APIs."""

    def __init__(self, db: Database):
        self.db = db

    def insert(self, record: QuoteRecord) -> int | None:
        """Insert a quote; returns None if the same text/author is already cached."""
        row = self.db.execute_one(
            """INSERT INTO quotes (
                text, author, source, category, source_api,
                ai_description_de, ai_description_en
            ) VALUES (?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT(text, author) DO NOTHING
            RETURNING id""",
            (
                record.text,
                record.author,
                record.source,
                record.category,
                record.source_api,
                record.description_de,
                record.description_en,
            ),
        )
        return row["id"] if row else None

    def get(self, quote_id: int) -> dict[str, Any] | None:
        return self.db.execute_one("SELECT * FROM quotes WHERE id = ?", (quote_id,))

    def get_by_text(self, text: str, author: str) -> dict[str, Any] | None:
        return self.db.execute_one(
            "SELECT * FROM quotes WHERE text = ? AND author = ?", (text, author)
        )

    def count(self) -> int:
        row = self.db.execute_one("SELECT COUNT(*) AS n FROM quotes")
        return row["n"] if row else 0

    def random(self, exclude_ids: list[int] | None = None) -> dict[str, Any] | None:
        exclude_ids = list(exclude_ids or [])
        where = f"WHERE id NOT IN ({_placeholders(exclude_ids)})" if exclude_ids else ""
        return self.db.execute_one(
            f"SELECT * FROM quotes {where} ORDER BY RANDOM() LIMIT 1",
            tuple(exclude_ids),
        )

    def set_descriptions(self, quote_id: int, de: str, en: str) -> None:
        self.db.execute_write(
            "UPDATE quotes SET ai_description_de = ?, ai_description_en = ? WHERE id = ?",
            (de, en, quote_id),
        )

    def missing_descriptions(self, limit: int = 20) -> list[dict[str, Any]]:
        return self.db.execute(
            """SELECT * FROM quotes
               WHERE ai_description_de IS NULL OR ai_description_en IS NULL
               ORDER BY id LIMIT ?""",
            (limit,),
        )

    def clear(self, keep_ids: list[int] | None = None) -> int:
        """Delete cached quotes, keeping the given ids (today's pick, favorites)."""
        keep_ids = list(keep_ids or [])
        where = f"WHERE id NOT IN ({_placeholders(keep_ids)})" if keep_ids else ""
        return self.db.execute_count(f"DELETE FROM quotes {where}", tuple(keep_ids))


class DailyContentRepository:
    """One artwork and one quote per calendar day."""

    def __init__(self, db: Database):
        self.db = db

    def get(self, date: str) -> dict[str, Any] | None:
        return self.db.execute_one("SELECT * FROM daily_content WHERE date = ?", (date,))

    def upsert(self, date: str, artwork_id: int | None, quote_id: int | None) -> dict[str, Any]:
        """Store the pick for a date. Existing, still valid picks are kept."""
        row = self.db.execute_one(
            """INSERT INTO daily_content (date, artwork_id, quote_id) VALUES (?, ?, ?)
               ON CONFLICT(date) DO UPDATE SET
                   artwork_id = COALESCE(daily_content.artwork_id, excluded.artwork_id),
                   quote_id = COALESCE(daily_content.quote_id, excluded.quote_id)
               RETURNING *""",
            (date, artwork_id, quote_id),
        )
        return row or {}

    def picked_ids(self, date: str) -> dict[str, int | None]:
        row = self.get(date)
        if not row:
            return {"artwork_id": None, "quote_id": None}
        return {"artwork_id": row["artwork_id"], "quote_id": row["quote_id"]}


class UsageRepository:
    """Per-subject daily view counters."""

    def __init__(self, db: Database):
        self.db = db

    def get(self, subject: str, date: str) -> dict[str, int]:
        row = self.db.execute_one(
            "SELECT art_count, quote_count FROM daily_usage WHERE subject = ? AND date = ?",
            (subject, date),
        )
        if not row:
            return {"art": 0, "quotes": 0}
        return {"art": row["art_count"], "quotes": row["quote_count"]}

    def increment(self, subject: str, date: str, kind: str, limit: int | None = None) -> int | None:
        """Atomically bump a counter.

        Returns the new count, or None when the counter is already at ``limit``.
        """
        column = USAGE_COLUMNS[kind]
        guard = f"WHERE daily_usage.{column} < ?" if limit is not None else ""
        params: tuple = (subject, date)
        if limit is not None:
            if limit <= 0:
                return None
            params += (limit,)
        row = self.db.execute_one(
            f"""INSERT INTO daily_usage (subject, date, {column}) VALUES (?, ?, 1)
                ON CONFLICT(subject, date) DO UPDATE SET {column} = daily_usage.{column} + 1
                {guard}
                RETURNING {column} AS count""",
            params,
        )
        return row["count"] if row else None

    def delete_before(self, date: str) -> int:
        return self.db.execute_count("DELETE FROM daily_usage WHERE date < ?", (date,))


class FavoriteRepository:
    """Saved artworks and quotes per user."""

    _ITEM_COLUMNS = {"art": "artwork_id", "quotes": "quote_id"}

    def __init__(self, db: Database):
        self.db = db

    def add(self, user_id: int, kind: str, item_id: int, gradient: str | None = None) -> int:
        column = self._ITEM_COLUMNS[kind]
        return self.db.execute_write(
            f"INSERT INTO favorites (user_id, {column}, saved_gradient) VALUES (?, ?, ?)",
            (user_id, item_id, gradient),
        )

    def find(self, user_id: int, kind: str, item_id: int) -> dict[str, Any] | None:
        column = self._ITEM_COLUMNS[kind]
        return self.db.execute_one(
            f"SELECT * FROM favorites WHERE user_id = ? AND {column} = ?",
            (user_id, item_id),
        )

    def delete(self, favorite_id: int, user_id: int) -> int:
        return self.db.execute_count(
            "DELETE FROM favorites WHERE id = ? AND user_id = ?", (favorite_id, user_id)
        )

    def list_for_user(self, user_id: int) -> list[dict[str, Any]]:
        """Favorites joined with their artwork or quote, newest first."""
        return self.db.execute(
            """SELECT f.id AS favorite_id, f.saved_gradient, f.created_at AS saved_at,
                      f.artwork_id, f.quote_id,
                      a.title, a.artist, a.year, a.image_url, a.source_api AS art_source,
                      a.ai_description_de AS art_description_de,
                      a.ai_description_en AS art_description_en,
                      q.text, q.author, q.source AS quote_source, q.category,
                      q.ai_description_de AS quote_description_de,
                      q.ai_description_en AS quote_description_en
               FROM favorites f
               LEFT JOIN artworks a ON a.id = f.artwork_id
               LEFT JOIN quotes q ON q.id = f.quote_id
               WHERE f.user_id = ?
               ORDER BY f.created_at DESC, f.id DESC""",
            (user_id,),
        )

    def item_ids(self, user_id: int, kind: str) -> list[int]:
        column = self._ITEM_COLUMNS[kind]
        rows = self.db.execute(
            f"SELECT {column} AS item_id FROM favorites WHERE user_id = ? AND {column} IS NOT NULL",
            (user_id,),
        )
        return [r["item_id"] for r in rows]

    def all_item_ids(self, kind: str) -> list[int]:
        column = self._ITEM_COLUMNS[kind]
        rows = self.db.execute(
            f"SELECT DISTINCT {column} AS item_id FROM favorites WHERE {column} IS NOT NULL"
        )
        return [r["item_id"] for r in rows]


class LLMCallRepository:
    """Database operations for LLM call logging."""

    def __init__(self, db: Database):
        self.db = db

    def log(
        self,
        call_type: str,
        model: str,
        subject_type: str | None = None,
        subject_id: int | None = None,
        prompt: str | None = None,
        response_text: str | None = None,
        prompt_tokens: int = 0,
        completion_tokens: int = 0,
        total_tokens: int = 0,
        latency_ms: int = 0,
        error: str | None = None,
    ) -> int:
        """Log an LLM API call with all metadata."""
        return self.db.execute_write(
            """INSERT INTO llm_calls (
                call_type, model, subject_type, subject_id, prompt, response_text,
                prompt_tokens, completion_tokens, total_tokens, latency_ms, error
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                call_type,
                model,
                subject_type,
                subject_id,
                prompt,
                response_text,
                prompt_tokens,
                completion_tokens,
                total_tokens,
                latency_ms,
                error,
            ),
        )

    def get_by_subject(self, subject_type: str, subject_id: int) -> list[dict[str, Any]]:
        """Get all LLM calls made for one artwork or quote."""
        return self.db.execute(
            """SELECT * FROM llm_calls
               WHERE subject_type = ? AND subject_id = ?
               ORDER BY created_at, id""",
            (subject_type, subject_id),
        )

    def get_recent(self, limit: int = 100) -> list[dict[str, Any]]:
        """Get recent LLM calls (for debugging/monitoring)."""
        return self.db.execute(
            "SELECT * FROM llm_calls ORDER BY created_at DESC, id DESC LIMIT ?",
            (limit,),
        )

    def get_stats(self, call_type: str | None = None) -> dict[str, Any]:
        """Get token usage statistics."""
        where = "WHERE call_type = ?" if call_type else ""
        params = (call_type,) if call_type else ()
        result = self.db.execute_one(
            f"""SELECT
                COUNT(*) as call_count,
                SUM(prompt_tokens) as total_prompt_tokens,
                SUM(completion_tokens) as total_completion_tokens,
                SUM(total_tokens) as total_tokens,
                AVG(latency_ms) as avg_latency_ms,
                SUM(CASE WHEN error IS NOT NULL THEN 1 ELSE 0 END) as error_count
               FROM llm_calls {where}""",
            params,
        )
        return result or {}


class JobRepository:
    """Database operations for the job queue."""

    def __init__(self, db: Database):
        self.db = db

    def enqueue(self, job_type: str, payload: dict | None = None) -> int:
        return self.db.execute_write(
            "INSERT INTO jobs (job_type, payload) VALUES (?, ?)",
            (job_type, json.dumps(payload or {})),
        )

    def enqueue_unique(self, job_type: str, payload: dict | None = None) -> int | None:
        """Enqueue unless a job of this type is already pending or running."""
        row = self.db.execute_one(
            """INSERT INTO jobs (job_type, payload)
               SELECT ?, ?
               WHERE NOT EXISTS (
                   SELECT 1 FROM jobs WHERE job_type = ? AND status IN ('pending', 'running')
               )
               RETURNING id""",
            (job_type, json.dumps(payload or {}), job_type),
        )
        return row["id"] if row else None

    def claim_next(self, job_type: str | None = None) -> Job | None:
        """Atomically claim the next pending job.

        Uses UPDATE ... RETURNING (SQLite 3.35+) to avoid race conditions
        when multiple workers call claim_next concurrently.
        """
        type_filter = "AND job_type = ?" if job_type else ""
        params: list[Any] = []
        if job_type:
            params.append(job_type)

        sql = f"""
            UPDATE jobs
            SET status = 'running',
                attempts = attempts + 1,
                started_at = CURRENT_TIMESTAMP
            WHERE id = (
                SELECT id FROM jobs
                WHERE status = 'pending' AND attempts < max_attempts
                {type_filter}
                ORDER BY created_at, id
                LIMIT 1
            )
            RETURNING *
        """

        row = self.db.execute_one(sql, tuple(params))
        if not row:
            return None

        return Job(
            id=row["id"],
            job_type=row["job_type"],
            payload=json.loads(row["payload"]),
            status="running",
            attempts=row["attempts"],
            max_attempts=row["max_attempts"],
        )

    def complete(self, job_id: int) -> None:
        self.db.execute_write(
            "UPDATE jobs SET status = 'completed', completed_at = CURRENT_TIMESTAMP WHERE id = ?",
            (job_id,),
        )

    def fail(self, job_id: int, error: str) -> None:
        self.db.execute_write(
            "UPDATE jobs SET status = 'failed', error_message = ?, completed_at = CURRENT_TIMESTAMP WHERE id = ?",
            (error, job_id),
        )

    def retry(self, job_id: int, error: str) -> None:
        """Mark job for retry (back to pending)."""
        self.db.execute_write(
            "UPDATE jobs SET status = 'pending', error_message = ? WHERE id = ?",
            (error, job_id),
        )

    def counts(self) -> dict[str, int]:
        rows = self.db.execute("SELECT status, COUNT(*) AS n FROM jobs GROUP BY status")
        return {r["status"]: r["n"] for r in rows}

    def cleanup_old(self, days: int = 7) -> int:
        """Remove completed/failed jobs older than N days."""
        return self.db.execute_count(
            "DELETE FROM jobs WHERE status IN ('completed', 'failed') AND completed_at < datetime('now', ?)",
            (f"-{days} days",),
        )
