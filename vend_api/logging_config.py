"""
logging_config.py
------------------

Shared logging configuration and helpers for structured logging
throughout the Vend API client.  Python's built-in ``logging`` module
is used rather than ``print`` so that library users can route the
output through their own handlers.  Messages are serialised as JSON
objects carrying an ``event`` key to make them easy to parse
downstream.

Import ``logger`` and call its methods instead of ``logging.info``
directly.  The ``log_call`` decorator records entry and exit of a
function at DEBUG level without leaking API tokens, and
``log_http_request`` records outbound requests with the
``Authorization`` header stripped.
"""

from __future__ import annotations

import json
import logging
import sys
from functools import wraps
from typing import Any, Callable, Dict, TextIO

# Header names that must never reach the logs.
SENSITIVE_HEADERS = {"authorization", "x-vend-token"}

# Module level logger.  Nothing is printed until an entry point calls
# ``configure_logging``; the root logger is left alone.
logger = logging.getLogger("vend")
logger.addHandler(logging.NullHandler())


def configure_logging(level: str | int = logging.INFO, stream: TextIO | None = None) -> None:
    """Send the ``vend`` logger's output to ``stream`` (stdout by default).

    Called by the FastAPI application and by the CLI, which logs to
    stderr to keep stdout for its JSON output.  A handler installed by
    an earlier call is replaced.
    """
    logger.setLevel(level)
    reset_logging()
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    handler._vend_stream = True  # type: ignore[attr-defined]
    logger.addHandler(handler)


def reset_logging() -> None:
    """Remove the handler installed by :func:`configure_logging`."""
    for handler in [h for h in logger.handlers if getattr(h, "_vend_stream", False)]:
        logger.removeHandler(handler)


def log_event(level: int, event: str, **fields: Any) -> None:
    """Log a JSON message ``{"event": event, **fields}`` at ``level``."""
    if not logger.isEnabledFor(level):
        return
    payload: Dict[str, Any] = {"event": event}
    payload.update(_sanitize(fields))
    logger.log(level, json.dumps(payload, default=str))


def _sanitize(obj: Any) -> Any:
    """Recursively sanitise objects for logging.

    Dictionaries have keys containing 'token', 'password', 'secret' or
    'authorization' removed.  Lists and tuples are processed
    element-wise.  Byte strings are replaced by a size marker so image
    payloads never end up in the logs.

    Parameters
    ----------
    obj : Any
        Arbitrary Python object to sanitise.

    Returns
    -------
    Any
        A sanitised representation of the input suitable for JSON serialisation.
    """
    if isinstance(obj, (bytes, bytearray)):
        return f"<binary {len(obj)} bytes>"
    if isinstance(obj, dict):
        clean: Dict[str, Any] = {}
        for k, v in obj.items():
            if any(keyword in str(k).lower() for keyword in ("token", "password", "secret", "authorization")):
                continue
            clean[k] = _sanitize(v)
        return clean
    if isinstance(obj, (list, tuple)):
        return [_sanitize(i) for i in obj]
    # Pydantic models are logged through their dict representation.
    if hasattr(obj, "model_dump"):
        try:
            return _sanitize(obj.model_dump())
        except (TypeError, ValueError):
            return str(obj)
    try:
        return json.loads(json.dumps(obj))
    except (TypeError, ValueError):
        return str(obj)


def log_call(func: Callable[..., Any]) -> Callable[..., Any]:
    """Decorator to log entry and exit of functions.

    Emits a DEBUG ``call_start`` event before the wrapped function runs
    and a ``call_end`` event afterwards, with the arguments and the
    return value passed through ``_sanitize``.

    Examples
    --------

    >>> @log_call
    ... def add(a, b):
    ...     return a + b
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        log_event(logging.DEBUG, "call_start", function=func.__name__, args=args, kwargs=kwargs)
        result = func(*args, **kwargs)
        log_event(logging.DEBUG, "call_end", function=func.__name__, result=result)
        return result

    return wrapper


def log_http_request(method: str, url: str, *, headers: Dict[str, Any] | None = None,
                     status: int | None = None, duration_ms: float | None = None,
                     attempt: int | None = None) -> None:
    """Log an outbound HTTP request at DEBUG level.

    Only high-level information (method, URL, status, duration and the
    attempt number) is recorded.  Sensitive headers are removed.

    Parameters
    ----------
    method : str
        The HTTP method (GET, POST).
    url : str
        The URL being requested.
    headers : dict, optional
        Request headers.  Sensitive keys are removed.
    status : int, optional
        Response status code (log end only).
    duration_ms : float, optional
        Time taken in milliseconds (log end only).
    attempt : int, optional
        1-based attempt number within the retry loop.
    """
    data: Dict[str, Any] = {
        "event": "http_request",
        "method": method,
        "url": url,
    }
    if headers is not None:
        data["headers"] = {k: v for k, v in headers.items() if k.lower() not in SENSITIVE_HEADERS}
    if attempt is not None:
        data["attempt"] = attempt
    if status is not None:
        data["status"] = status
    if duration_ms is not None:
        data["duration_ms"] = round(duration_ms, 2)
    logger.debug(json.dumps(data))
