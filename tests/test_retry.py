"""Tests for content API retry logic."""

from __future__ import annotations

import socket
from unittest.mock import MagicMock, patch

import httpx
import pytest

from curio_app.providers.retry import _is_retryable, call_with_retry, get_json


def _status_error(status: int) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "https://api.example.com/quote")
    response = httpx.Response(status, request=request)
    return httpx.HTTPStatusError(f"HTTP {status}", request=request, response=response)


class TestIsRetryable:
    def test_socket_gaierror(self):
        assert _is_retryable(socket.gaierror("DNS resolution failed"))

    def test_connection_error(self):
        assert _is_retryable(ConnectionError("Connection refused"))

    def test_timeout_error(self):
        assert _is_retryable(TimeoutError("timed out"))

    def test_httpx_transport_error(self):
        assert _is_retryable(httpx.ConnectTimeout("connect timed out"))

    def test_http_429(self):
        assert _is_retryable(_status_error(429))

    def test_http_503(self):
        assert _is_retryable(_status_error(503))

    def test_http_404_not_retryable(self):
        assert not _is_retryable(_status_error(404))

    def test_http_401_not_retryable(self):
        assert not _is_retryable(_status_error(401))

    def test_value_error_not_retryable(self):
        assert not _is_retryable(ValueError("bad json"))

    def test_wrapped_transient_cause(self):
        try:
            try:
                raise ConnectionResetError("reset")
            except ConnectionResetError as inner:
                raise RuntimeError("wrapped") from inner
        except RuntimeError as exc:
            assert _is_retryable(exc)


class TestCallWithRetry:
    @patch("curio_app.providers.retry.time.sleep")
    def test_success_first_try(self, mock_sleep):
        call = MagicMock(return_value={"ok": True})
        assert call_with_retry(call) == {"ok": True}
        assert call.call_count == 1
        mock_sleep.assert_not_called()

    @patch("curio_app.providers.retry.time.sleep")
    def test_retries_then_succeeds(self, mock_sleep):
        call = MagicMock(side_effect=[ConnectionError("down"), _status_error(503), "ok"])
        assert call_with_retry(call, max_retries=2, base_delay=1.0) == "ok"
        assert call.call_count == 3
        assert [c.args[0] for c in mock_sleep.call_args_list] == [1.0, 2.0]

    @patch("curio_app.providers.retry.time.sleep")
    def test_gives_up_after_max_retries(self, mock_sleep):
        call = MagicMock(side_effect=TimeoutError("slow"))
        with pytest.raises(TimeoutError):
            call_with_retry(call, max_retries=2)
        assert call.call_count == 3

    @patch("curio_app.providers.retry.time.sleep")
    def test_client_error_raised_immediately(self, mock_sleep):
        call = MagicMock(side_effect=_status_error(404))
        with pytest.raises(httpx.HTTPStatusError):
            call_with_retry(call, max_retries=2)
        assert call.call_count == 1
        mock_sleep.assert_not_called()


class TestGetJson:
    @patch("curio_app.providers.retry.time.sleep")
    def test_retries_server_errors(self, mock_sleep):
        responses = iter([httpx.Response(502), httpx.Response(200, json={"data": 1})])
        client = httpx.Client(transport=httpx.MockTransport(lambda request: next(responses)))

        assert get_json(client, "https://api.example.com/x", max_retries=1) == {"data": 1}
        assert mock_sleep.call_count == 1
