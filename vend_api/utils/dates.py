"""
utils/dates.py
---------------

Conversion of Vend timestamps into the store's timezone.
"""

from __future__ import annotations

from datetime import datetime, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

LOCAL_TIMEZONE = "Local"


def load_timezone(tz: str):
    """Return a tzinfo for a zoneinfo name; ``"Local"`` (or empty) means the machine's zone.

    :raises ValueError: if the zone is unknown
    """
    if not tz or tz == LOCAL_TIMEZONE:
        return datetime.now().astimezone().tzinfo
    try:
        return ZoneInfo(tz)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Unknown timezone {tz!r}") from exc


def parse_vend_datetime(value: str, tz: str = LOCAL_TIMEZONE) -> datetime:
    """Parse a Vend timestamp and express it in the store timezone.

    Vend sends RFC 3339 timestamps such as ``2018-05-01T09:30:00+00:00``
    or with a ``Z`` suffix.  Timestamps without an offset are taken as
    UTC.

    :param value: timestamp string returned by the API
    :param tz: store timezone in zoneinfo format
    :raises ValueError: if the timestamp or the timezone is invalid
    :return: an aware datetime in ``tz``
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(load_timezone(tz))
