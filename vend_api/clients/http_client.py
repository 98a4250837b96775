"""
clients/http_client.py
----------------------

HTTP client wrapper with connection pooling, timeouts and a bounded
retry loop with exponential backoff.  One instance should be created
per process and shared by every :class:`~vend_api.clients.vend_client.VendClient`;
it uses the ``httpx`` library under the hood and falls back to the
settings defined in :mod:`vend_api.core.config` for anything not passed
explicitly.

Every request goes through the same loop:

* transport errors (connection refused, timeouts, broken reads) and
  retryable or unknown status codes are retried after
  :func:`~vend_api.core.backoff.backoff_duration` seconds;
* fatal status codes (401, 404, 502) raise immediately;
* success codes return the raw response body.

The loop gives up with :class:`~vend_api.core.errors.VendRetryExhaustedError`
once ``max_attempts`` or ``max_retry_duration`` is reached, and aborts
with :class:`~vend_api.core.errors.VendCancelledError` as soon as the
caller's cancellation event is set.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Dict, Optional

import httpx

from vend_api.core.auth import build_auth_headers
from vend_api.core.backoff import backoff_duration
from vend_api.core.config import FROM_SETTINGS, get_settings
from vend_api.core.errors import VendCancelledError, VendRetryExhaustedError
from vend_api.core.status import raise_for_fatal, response_check
from vend_api.logging_config import log_event, log_http_request

class VendHTTPClient:
    """Synchronous HTTP client with bounded retries.

    :param timeout: per-request timeout in seconds
    :param user_agent: value of the ``User-Agent`` header
    :param max_attempts: attempts per request including the first one,
        ``None`` for no limit
    :param max_retry_duration: seconds a request may spend retrying,
        ``None`` for no limit
    :param cancel_event: caller-owned event; once set, pending requests
        stop before their next attempt or during their backoff wait
    :param sleep: replacement for the backoff wait, mainly for tests
    :param transport: optional httpx transport (e.g. ``httpx.MockTransport``)
    """

    def __init__(
        self,
        *,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
        max_attempts: Optional[int] = FROM_SETTINGS,
        max_retry_duration: Optional[float] = FROM_SETTINGS,
        cancel_event: Optional[threading.Event] = None,
        sleep: Optional[Callable[[float], None]] = None,
        transport: Optional[httpx.BaseTransport] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        settings = get_settings()
        self.timeout = timeout if timeout is not None else settings.http_timeout
        self.user_agent = user_agent or settings.user_agent
        self.max_attempts = settings.http_max_attempts if max_attempts is FROM_SETTINGS else max_attempts
        self.max_retry_duration = (
            settings.http_max_retry_duration if max_retry_duration is FROM_SETTINGS else max_retry_duration
        )
        if self.max_attempts is not None and self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.cancel_event = cancel_event
        self._sleep = sleep
        self._clock = clock
        # HTTPX Client uses connection pooling
        self._client = httpx.Client(timeout=self.timeout, transport=transport)

    def close(self) -> None:
        """Close the underlying HTTPX client and release resources."""
        self._client.close()

    def __enter__(self) -> "VendHTTPClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def get(self, url: str, token: str) -> bytes:
        """Perform an authenticated GET and return the response body."""
        return self._send("GET", url, token)

    def post_multipart(self, url: str, token: str, files: Dict[str, Any]) -> bytes:
        """Perform an authenticated multipart POST and return the response body.

        ``files`` follows the httpx format, e.g.
        ``{"image": ("photo.jpg", b"...", "image/jpeg")}``.  File contents
        must be bytes so that retries can send them again.
        """
        return self._send("POST", url, token, files=files)

    def _send(self, method: str, url: str, token: str, **kwargs: Any) -> bytes:
        headers = build_auth_headers(token, self.user_agent)
        started = self._clock()
        attempt = 0
        while True:
            self._check_cancelled(url)
            attempt += 1
            last_status: Optional[int] = None
            last_error: Optional[BaseException] = None
            request_start = self._clock()
            log_http_request(method, url, headers=headers, attempt=attempt)
            try:
                response = self._client.request(method, url, headers=headers, **kwargs)
            except httpx.TransportError as exc:
                last_error = exc
                log_event(logging.WARNING, "http_error", method=method, url=url, attempt=attempt, detail=str(exc))
            else:
                duration_ms = (self._clock() - request_start) * 1000
                log_http_request(method, url, status=response.status_code, duration_ms=duration_ms, attempt=attempt)
                if response_check(response.status_code):
                    return response.content
                raise_for_fatal(response.status_code, url)
                last_status = response.status_code

            # Delays between attempts are exponentially longer each time.
            delay = backoff_duration(attempt)
            if self._exhausted(attempt, started, delay):
                log_event(logging.ERROR, "http_retry_exhausted", method=method, url=url, attempts=attempt)
                raise VendRetryExhaustedError(url, attempt, last_status=last_status, last_error=last_error)
            log_event(logging.INFO, "http_retry", method=method, url=url, attempt=attempt, delay_s=delay)
            self._wait(delay, url)

    def _exhausted(self, attempt: int, started: float, next_delay: float) -> bool:
        if self.max_attempts is not None and attempt >= self.max_attempts:
            return True
        if self.max_retry_duration is not None:
            return (self._clock() - started) + next_delay > self.max_retry_duration
        return False

    def _wait(self, delay: float, url: str) -> None:
        if self._sleep is not None:
            self._sleep(delay)
        elif self.cancel_event is not None:
            # Event.wait returns True as soon as the event is set.
            if self.cancel_event.wait(delay):
                raise VendCancelledError(f"Cancelled while waiting to retry {url}")
        else:
            time.sleep(delay)

    def _check_cancelled(self, url: str) -> None:
        if self.cancel_event is not None and self.cancel_event.is_set():
            raise VendCancelledError(f"Cancelled before requesting {url}")
