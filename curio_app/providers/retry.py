"""Network retry with exponential backoff for content API calls."""

from __future__ import annotations

import logging
import socket
import time
from typing import Callable, TypeVar

import httpx

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Transient error types that should trigger a retry
_TRANSIENT_EXCEPTIONS: tuple[type[BaseException], ...] = (
    socket.gaierror,
    ConnectionError,
    TimeoutError,
    httpx.TransportError,
)

# HTTP status codes worth retrying
_RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}

# Defaults
DEFAULT_MAX_RETRIES = 2
DEFAULT_BASE_DELAY = 1.0  # seconds


def _is_retryable(exc: BaseException) -> bool:
    """Check whether an exception is transient and worth retrying."""
    if isinstance(exc, _TRANSIENT_EXCEPTIONS):
        return True
    if (
        isinstance(exc, httpx.HTTPStatusError)
        and exc.response.status_code in _RETRYABLE_STATUS_CODES
    ):
        return True
    cause = exc.__cause__ or exc.__context__
    if cause and isinstance(cause, _TRANSIENT_EXCEPTIONS):
        return True
    return False


def call_with_retry(
    call: Callable[[], T],
    *,
    max_retries: int = DEFAULT_MAX_RETRIES,
    base_delay: float = DEFAULT_BASE_DELAY,
    operation: str = "API call",
) -> T:
    """Run ``call`` with retry on transient network errors.

    Only retries on network-level failures (DNS, connection, timeout) and
    server errors (429, 5xx). Client errors (4xx) are raised immediately.

    Args:
        call: Zero-argument callable performing the request.
        max_retries: Maximum number of retry attempts after the first failure.
        base_delay: Base delay in seconds (doubled each retry).
        operation: Human-readable label for log messages.
    """
    last_exc: BaseException | None = None
    for attempt in range(1 + max_retries):
        try:
            return call()
        except Exception as exc:
            last_exc = exc
            if not _is_retryable(exc):
                raise
            if attempt < max_retries:
                delay = base_delay * (2**attempt)
                logger.warning(
                    "%s failed (attempt %d/%d), retrying in %.1fs: %s",
                    operation,
                    attempt + 1,
                    1 + max_retries,
                    delay,
                    exc,
                )
                time.sleep(delay)
            else:
                logger.error(
                    "%s failed after %d attempts: %s",
                    operation,
                    1 + max_retries,
                    exc,
                )
    raise last_exc  # type: ignore[misc]


def get_json(
    client: httpx.Client,
    url: str,
    *,
    params: dict | None = None,
    headers: dict | None = None,
    max_retries: int = DEFAULT_MAX_RETRIES,
    operation: str = "GET",
):
    """GET a URL and decode the JSON body, retrying transient failures."""

    def _request():
        response = client.get(url, params=params, headers=headers)
        response.raise_for_status()
        return response.json()

    return call_with_retry(_request, max_retries=max_retries, operation=operation)
