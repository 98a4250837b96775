"""Delay between attempts of the HTTP retry loop."""

from __future__ import annotations

BACKOFF_EXPONENT = 3.5
BACKOFF_BASE_SECONDS = 5.0


def backoff_duration(attempt: int) -> float:
    """Return the number of seconds to wait before retry number ``attempt``.

    Delays grow as ``attempt ** 3.5 + 5`` with no cap and no jitter, so
    the third retry already waits about 52 seconds.  Attempts below one
    are treated as the first.
    """
    if attempt <= 0:
        attempt = 1
    return float(attempt) ** BACKOFF_EXPONENT + BACKOFF_BASE_SECONDS
