"""
utils/pagination.py
--------------------

Collects every record of a paginated Vend API 2.0 resource.

Vend pages its collections in one of two ways:

* **version cursor**: ``?after=<int>`` returns records with a version
  above the cursor, and the envelope's ``version.max`` is the cursor of
  the next request.  The stream ends with an empty page.
* **flake cursor**: ``?before=<id>`` pages backwards from the record
  with that ID.  The record used as cursor comes back again in the next
  page, and a page holding at most that single record ends the stream.

``paginate`` drives either protocol through a :class:`CursorStrategy`
and accumulates the decoded records in arrival order.  It never runs
two requests at once and owns its accumulator, so one call per
resource can safely run alongside others.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, TypeVar, Union

from pydantic import BaseModel, ValidationError, field_validator

from vend_api.core.config import FROM_SETTINGS, get_settings
from vend_api.core.errors import VendCursorError, VendDecodeError
from vend_api.logging_config import log_event

T = TypeVar("T")
Cursor = Union[int, str]
RawRecord = Dict[str, Any]


class PaginationStyle(str, enum.Enum):
    VERSION = "version"
    FLAKE = "flake"


class VersionEnvelope(BaseModel):
    """``{"data": [...], "version": {"min": 1, "max": 9}}``"""

    data: Any = None
    version: Dict[str, Optional[int]] = {}

    @field_validator("version", mode="before")
    @classmethod
    def null_version(cls, v: Any) -> Any:
        return {} if v is None else v


class FlakeEnvelope(BaseModel):
    """``{"data": [{"id": "...", ...}, ...]}``"""

    data: List[RawRecord] = []

    @field_validator("data", mode="before")
    @classmethod
    def null_data(cls, v: Any) -> Any:
        return [] if v is None else v


@dataclass
class PageStep:
    """What one fetched page contributes to the result."""

    records: List[RawRecord]
    next_cursor: Optional[Cursor]
    done: bool


class CursorStrategy:
    """Cursor extraction and termination rule of one pagination protocol."""

    style: PaginationStyle
    initial_cursor: Cursor

    def step(self, body: bytes, cursor: Cursor, first: bool, resource: str) -> PageStep:
        raise NotImplementedError


class VersionCursor(CursorStrategy):
    style = PaginationStyle.VERSION
    initial_cursor = 0

    def step(self, body: bytes, cursor: Cursor, first: bool, resource: str) -> PageStep:
        envelope = _load(VersionEnvelope, body, resource)
        data = envelope.data
        if data is None:
            data = []
        if not isinstance(data, list):
            raise VendDecodeError(resource, f"expected a list under 'data', got {type(data).__name__}")
        if not data:
            return PageStep([], None, True)
        next_cursor = envelope.version.get("max")
        if next_cursor is None:
            raise VendCursorError(f"{resource} page after version {cursor} has records but no version.max")
        if next_cursor <= int(cursor):
            raise VendCursorError(f"{resource} version cursor did not advance past {cursor} (max={next_cursor})")
        return PageStep(data, next_cursor, False)


class FlakeCursor(CursorStrategy):
    style = PaginationStyle.FLAKE
    initial_cursor = ""

    def step(self, body: bytes, cursor: Cursor, first: bool, resource: str) -> PageStep:
        items = _load(FlakeEnvelope, body, resource).data
        if first:
            if len(items) <= 1:
                return PageStep(items, None, True)
            return PageStep(items, _last_id(items, resource), False)
        # The only record left is the previous page's boundary record.
        if len(items) <= 1:
            return PageStep([], None, True)
        next_cursor = _last_id(items, resource)
        if next_cursor == cursor:
            raise VendCursorError(f"{resource} flake cursor did not move past {cursor!r}")
        fresh = [item for item in items if item.get("id") != cursor]
        return PageStep(fresh, next_cursor, False)


STRATEGIES: Dict[PaginationStyle, Callable[[], CursorStrategy]] = {
    PaginationStyle.VERSION: VersionCursor,
    PaginationStyle.FLAKE: FlakeCursor,
}


def paginate(
    fetch_page: Callable[[Cursor], bytes],
    strategy: CursorStrategy,
    decode: Callable[[List[RawRecord]], List[T]],
    *,
    resource: str = "resource",
    max_pages: Optional[int] = FROM_SETTINGS,
) -> List[T]:
    """Fetch pages until ``strategy`` reports the end of the stream.

    :param fetch_page: function taking a cursor and returning the raw
        response body of that page
    :param strategy: the pagination protocol of the resource
    :param decode: turns the raw records kept from one page into typed
        records; its errors propagate unchanged
    :param resource: resource name used in errors and logs
    :param max_pages: optional guard; exceeding it raises
        :class:`~vend_api.core.errors.VendCursorError`.  Defaults to the
        ``max_pages`` setting; ``None`` means no limit
    :return: every record, in page-arrival then within-page order
    """
    if max_pages is FROM_SETTINGS:
        max_pages = get_settings().max_pages
    records: List[T] = []
    cursor: Cursor = strategy.initial_cursor
    page_count = 0

    while True:
        page_count += 1
        if max_pages is not None and page_count > max_pages:
            raise VendCursorError(f"{resource} needs more than {max_pages} pages")
        body = fetch_page(cursor)
        page = strategy.step(body, cursor, page_count == 1, resource)
        if page.records:
            records.extend(decode(page.records))
        log_event(
            logging.DEBUG,
            "page_fetched",
            resource=resource,
            style=strategy.style.value,
            cursor=cursor,
            kept=len(page.records),
            total=len(records),
        )
        if page.done:
            break
        cursor = page.next_cursor  # type: ignore[assignment]
    return records


def paginate_version(
    fetch_page: Callable[[int], bytes],
    decode: Callable[[List[RawRecord]], List[T]],
    **kwargs: Any,
) -> List[T]:
    """Collect a resource paged with ``?after=<version>``."""
    return paginate(fetch_page, VersionCursor(), decode, **kwargs)  # type: ignore[arg-type]


def paginate_flake(
    fetch_page: Callable[[str], bytes],
    decode: Callable[[List[RawRecord]], List[T]],
    **kwargs: Any,
) -> List[T]:
    """Collect a resource paged backwards with ``?before=<id>``."""
    return paginate(fetch_page, FlakeCursor(), decode, **kwargs)  # type: ignore[arg-type]


def _load(envelope_type: type, body: bytes, resource: str) -> Any:
    try:
        return envelope_type.model_validate_json(body)
    except ValidationError as exc:
        raise VendDecodeError(resource, str(exc)) from exc


def _last_id(items: List[RawRecord], resource: str) -> str:
    last_id = items[-1].get("id")
    if not isinstance(last_id, str) or not last_id:
        raise VendCursorError(f"{resource} record without a string id cannot be used as cursor")
    return last_id
