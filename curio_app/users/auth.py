"""Accounts and bearer sessions.

Passwords are stored as salted PBKDF2-SHA256 hashes. A login issues an
opaque access token and a longer-lived refresh token, both stored in the
``sessions`` table.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
import logging
import re
import secrets
import sqlite3
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from curio_app.config import AppConfig
from curio_app.db.connection import Database
from curio_app.db.models import (
    PremiumRepository,
    SessionRepository,
    UserRepository,
    to_sql_timestamp,
)
from curio_app.errors import ConflictError, UnauthorizedError, ValidationError

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
MIN_PASSWORD_LENGTH = 6

_HASH_ALGORITHM = "pbkdf2_sha256"


def hash_password(password: str, iterations: int = 260_000) -> str:
    salt = secrets.token_bytes(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    return "$".join(
        [
            _HASH_ALGORITHM,
            str(iterations),
            base64.b64encode(salt).decode("ascii"),
            base64.b64encode(digest).decode("ascii"),
        ]
    )


def verify_password(password: str, encoded: str) -> bool:
    try:
        algorithm, iterations, salt, expected = encoded.split("$")
    except ValueError:
        return False
    if algorithm != _HASH_ALGORITHM:
        return False
    try:
        digest = hashlib.pbkdf2_hmac(
            "sha256", password.encode("utf-8"), base64.b64decode(salt, validate=True), int(iterations)
        )
    except (ValueError, binascii.Error):
        logger.warning("Stored password hash is corrupted")
        return False
    return secrets.compare_digest(base64.b64encode(digest).decode("ascii"), expected)


def normalize_email(email: str | None) -> str:
    return (email or "").strip().lower()


def validate_credentials(email: str | None, password: str | None) -> str:
    """Check signup/login input and return the normalised email."""
    if not email or not password:
        raise ValidationError("Email and password are required")
    email = normalize_email(email)
    if not EMAIL_RE.match(email):
        raise ValidationError("Invalid email format")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    return email


@dataclass
class AuthUser:
    """The account behind a valid access token."""

    id: int
    email: str
    is_premium: bool
    session_id: int | None = None
    created_at: str | None = None
    last_sign_in_at: str | None = None

    @property
    def tier(self) -> str:
        return "premium" if self.is_premium else "registered"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "email": self.email,
            "created_at": self.created_at,
            "last_sign_in_at": self.last_sign_in_at,
        }


class AuthService:
    """Signup, login, logout, token refresh and premium lookup."""

    def __init__(self, db: Database, config: AppConfig):
        self.users = UserRepository(db)
        self.sessions = SessionRepository(db)
        self.premium = PremiumRepository(db)
        self.access_ttl = timedelta(seconds=config.auth.access_token_ttl_seconds)
        self.refresh_ttl = timedelta(days=config.auth.refresh_token_ttl_days)
        self.iterations = config.auth.password_iterations
        self.premium_fallback = {normalize_email(e) for e in config.auth.premium_fallback_emails}

    def is_premium(self, email: str) -> bool:
        email = normalize_email(email)
        if email in self.premium_fallback:
            return True
        return self.premium.is_active(email)

    def signup(self, email: str | None, password: str | None) -> dict[str, Any]:
        email = validate_credentials(email, password)
        if self.users.get_by_email(email):
            raise ConflictError("User already registered")
        try:
            user_id = self.users.create(email, hash_password(password, self.iterations))
        except sqlite3.IntegrityError as e:
            raise ConflictError("User already registered") from e
        logger.info("New user signed up: %s", email)
        return self._start_session(user_id)

    def login(self, email: str | None, password: str | None) -> dict[str, Any]:
        if not email or not password:
            raise ValidationError("Email and password are required")
        found = self.users.get_password_hash(normalize_email(email))
        if not found or not verify_password(password, found[1]):
            raise UnauthorizedError("Invalid email or password")
        return self._start_session(found[0])

    def logout(self, user: AuthUser) -> None:
        if user.session_id:
            self.sessions.revoke(user.session_id)

    def refresh(self, refresh_token: str | None) -> dict[str, Any]:
        if not refresh_token:
            raise ValidationError("Refresh token required")
        session = self.sessions.get_active_by_refresh(refresh_token)
        if not session:
            raise UnauthorizedError("Invalid or expired refresh token")
        self.sessions.revoke(session.id)
        return self._start_session(session.user_id, touch=False)

    def resolve(self, access_token: str | None) -> AuthUser | None:
        """Return the user for a valid, unexpired access token."""
        if not access_token:
            return None
        session = self.sessions.get_active_by_access(access_token)
        if not session:
            return None
        user = self.users.get_by_id(session.user_id)
        if not user or not user.is_active:
            return None
        return AuthUser(
            id=user.id,
            email=user.email,
            is_premium=self.is_premium(user.email),
            session_id=session.id,
            created_at=user.created_at,
            last_sign_in_at=user.last_sign_in_at,
        )

    def _start_session(self, user_id: int, touch: bool = True) -> dict[str, Any]:
        if touch:
            self.users.touch_sign_in(user_id)
        now = datetime.now(timezone.utc)
        expires_at = now + self.access_ttl
        access_token = secrets.token_urlsafe(32)
        refresh_token = secrets.token_urlsafe(32)
        self.sessions.create(
            user_id,
            access_token,
            refresh_token,
            to_sql_timestamp(expires_at),
            to_sql_timestamp(now + self.refresh_ttl),
        )
        user = self.resolve(access_token)
        return {
            "user": user.to_dict(),
            "session": {
                "access_token": access_token,
                "refresh_token": refresh_token,
                "token_type": "bearer",
                "expires_in": int(self.access_ttl.total_seconds()),
                "expires_at": int(expires_at.timestamp()),
            },
            "isPremium": user.is_premium,
        }
