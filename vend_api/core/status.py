"""
core/status.py
---------------

Classification of Vend API status codes.

The classifier only labels a status code and logs a diagnostic.  The
decision to retry is taken by the HTTP client's loop, and fatal codes
are turned into exceptions by :func:`raise_for_fatal`.
"""

from __future__ import annotations

import enum
import logging
from typing import Dict, Type

from vend_api.core.errors import VendAuthError, VendFatalStatusError, VendGatewayError, VendNotFoundError
from vend_api.logging_config import log_event


class ResponseClass(str, enum.Enum):
    SUCCESS = "success"
    FATAL_AUTH = "fatal_auth"
    FATAL_NOT_FOUND = "fatal_not_found"
    FATAL_GATEWAY = "fatal_gateway"
    RETRYABLE = "retryable"
    UNKNOWN = "unknown"

    @property
    def is_fatal(self) -> bool:
        return self in _FATAL_ERRORS


_STATUS_CLASSES: Dict[int, ResponseClass] = {
    200: ResponseClass.SUCCESS,
    201: ResponseClass.SUCCESS,
    401: ResponseClass.FATAL_AUTH,
    404: ResponseClass.FATAL_NOT_FOUND,
    429: ResponseClass.RETRYABLE,
    500: ResponseClass.RETRYABLE,
    502: ResponseClass.FATAL_GATEWAY,
}

_FATAL_ERRORS: Dict[ResponseClass, Type[VendFatalStatusError]] = {
    ResponseClass.FATAL_AUTH: VendAuthError,
    ResponseClass.FATAL_NOT_FOUND: VendNotFoundError,
    ResponseClass.FATAL_GATEWAY: VendGatewayError,
}

_MESSAGES: Dict[ResponseClass, str] = {
    ResponseClass.FATAL_AUTH: "Access denied - check personal API token",
    ResponseClass.FATAL_NOT_FOUND: "URL not found - check domain prefix",
    ResponseClass.FATAL_GATEWAY: "Server received an invalid response",
    ResponseClass.UNKNOWN: "Got an unknown status code",
}


def classify_status(status_code: int) -> ResponseClass:
    """Map an HTTP status code onto a :class:`ResponseClass`."""
    return _STATUS_CLASSES.get(status_code, ResponseClass.UNKNOWN)


def response_check(status_code: int) -> bool:
    """Return ``True`` for success codes, logging a diagnostic otherwise."""
    kind = classify_status(status_code)
    if kind is ResponseClass.SUCCESS:
        return True
    if kind is ResponseClass.RETRYABLE:
        message = "Rate limited by the Vend API" if status_code == 429 else "Server error"
        log_event(logging.WARNING, "vend_status", status=status_code, kind=kind.value, message=message)
    else:
        log_event(logging.ERROR, "vend_status", status=status_code, kind=kind.value, message=_MESSAGES[kind])
    return False


def raise_for_fatal(status_code: int, url: str) -> None:
    """Raise the fatal error matching ``status_code``, if it is a fatal one."""
    error_type = _FATAL_ERRORS.get(classify_status(status_code))
    if error_type is not None:
        raise error_type(status_code, url)
