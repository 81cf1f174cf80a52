"""Application errors carrying the HTTP status they map to."""

from __future__ import annotations

from typing import Any


class CurioError(Exception):
    """Base error. Rendered by the app's exception handler."""

    status_code = 500

    def __init__(self, message: str, **extra: Any):
        super().__init__(message)
        self.message = message
        self.extra = extra


class ValidationError(CurioError):
    status_code = 400


class UnauthorizedError(CurioError):
    status_code = 401


class ForbiddenError(CurioError):
    status_code = 403


class NotFoundError(CurioError):
    status_code = 404


class ConflictError(CurioError):
    status_code = 409


class LimitReachedError(CurioError):
    """Daily view limit for the requester's tier is used up."""

    status_code = 429


class ContentUnavailableError(CurioError):
    """Every provider in a fallback chain failed."""

    status_code = 503
