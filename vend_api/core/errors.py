"""
core/errors.py
---------------

Exception hierarchy raised by the Vend client.

Transport failures and retryable status codes are handled inside the
HTTP retry loop and only surface as :class:`VendRetryExhaustedError`
once the configured bounds are reached.  Everything else is raised to
the caller as one of the types below; the library never terminates the
process itself.
"""

from __future__ import annotations

from typing import Optional


class VendError(Exception):
    """Base class for every error raised by this package."""


class VendFatalStatusError(VendError):
    """The API answered with a status code that retrying cannot fix."""

    hint = "fatal response"

    def __init__(self, status_code: int, url: str) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(f"{self.hint} (status {status_code}) for {url}")


class VendAuthError(VendFatalStatusError):
    hint = "Access denied - check personal API token"


class VendNotFoundError(VendFatalStatusError):
    hint = "URL not found - check domain prefix"


class VendGatewayError(VendFatalStatusError):
    hint = "Server received an invalid response"


class VendRetryExhaustedError(VendError):
    """The retry loop hit its attempt or duration bound."""

    def __init__(
        self,
        url: str,
        attempts: int,
        last_status: Optional[int] = None,
        last_error: Optional[BaseException] = None,
    ) -> None:
        self.url = url
        self.attempts = attempts
        self.last_status = last_status
        self.last_error = last_error
        if last_error is not None:
            reason = f"last error: {last_error}"
        else:
            reason = f"last status: {last_status}"
        super().__init__(f"Gave up on {url} after {attempts} attempts ({reason})")


class VendCancelledError(VendError):
    """The caller's cancellation signal was set while a request was pending."""


class VendDecodeError(VendError):
    """A response body is not valid JSON or does not match the record schema."""

    def __init__(self, resource: str, detail: str) -> None:
        self.resource = resource
        self.detail = detail
        super().__init__(f"Could not decode {resource} payload: {detail}")


class VendCursorError(VendError):
    """A page does not carry a usable pagination cursor."""
