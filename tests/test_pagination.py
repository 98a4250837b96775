"""Tests for the version-cursor and flake-cursor paginators."""
import json
from typing import Any, Dict, List, Tuple, Union

import pytest

from vend_api.core.config import get_settings
from vend_api.core.errors import VendCursorError, VendDecodeError
from vend_api.utils.pagination import FlakeCursor, VersionCursor, paginate, paginate_flake, paginate_version


def identity(records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return list(records)


def ids(records: List[Dict[str, Any]]) -> List[str]:
    return [r["id"] for r in records]


class ScriptedPages:
    """fetch_page replacement returning scripted bodies and recording cursors."""

    def __init__(self, bodies: List[Union[bytes, Dict[str, Any]]]) -> None:
        self.bodies = list(bodies)
        self.cursors: List[Any] = []

    def __call__(self, cursor: Any) -> bytes:
        self.cursors.append(cursor)
        body = self.bodies.pop(0)
        return body if isinstance(body, bytes) else json.dumps(body).encode()


def version_page(record_ids: List[str], version_max: int) -> Dict[str, Any]:
    return {"data": [{"id": i} for i in record_ids], "version": {"min": 0, "max": version_max}}


def flake_page(record_ids: List[str]) -> Dict[str, Any]:
    return {"data": [{"id": i, "balance": 1.0} for i in record_ids]}


# --------------------------
# Version cursor
# --------------------------
def test_version_pages_are_concatenated_in_order() -> None:
    """N non-empty pages take N+1 requests, cursors follow version.max."""
    pages = ScriptedPages([
        version_page(["a", "b"], 10),
        version_page(["c"], 15),
        version_page(["d", "e"], 22),
        {"data": [], "version": None},
    ])

    records = paginate_version(pages, identity)

    assert ids(records) == ["a", "b", "c", "d", "e"]
    assert pages.cursors == [0, 10, 15, 22]


def test_version_first_request_always_happens() -> None:
    pages = ScriptedPages([{"data": []}])

    assert paginate_version(pages, identity) == []
    assert pages.cursors == [0]


def test_version_null_data_ends_stream() -> None:
    pages = ScriptedPages([{"data": None, "version": {"max": 3}}])
    assert paginate_version(pages, identity) == []


def test_version_page_without_max_is_a_cursor_error() -> None:
    pages = ScriptedPages([{"data": [{"id": "a"}], "version": {"min": 1}}])
    with pytest.raises(VendCursorError):
        paginate_version(pages, identity)


def test_version_cursor_must_advance() -> None:
    pages = ScriptedPages([version_page(["a"], 5), version_page(["b"], 5)])
    with pytest.raises(VendCursorError):
        paginate_version(pages, identity)


@pytest.mark.parametrize("body", [b"not json", b"", b'{"data": {"id": "a"}}', b"[1, 2]"])
def test_version_malformed_payload_is_a_decode_error(body: bytes) -> None:
    with pytest.raises(VendDecodeError):
        paginate_version(ScriptedPages([body]), identity)


def test_decoder_errors_propagate() -> None:
    def decode(records: List[Dict[str, Any]]) -> List[Any]:
        raise VendDecodeError("products", "bad price")

    with pytest.raises(VendDecodeError, match="bad price"):
        paginate_version(ScriptedPages([version_page(["a"], 1)]), decode)


def test_max_pages_guard() -> None:
    pages = ScriptedPages([version_page(["a"], 1), version_page(["b"], 2), version_page(["c"], 3)])
    with pytest.raises(VendCursorError, match="more than 2 pages"):
        paginate(pages, VersionCursor(), identity, resource="users", max_pages=2)
    assert len(pages.cursors) == 2


def test_max_pages_defaults_to_setting(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VEND_MAX_PAGES", "1")
    get_settings.cache_clear()

    with pytest.raises(VendCursorError, match="more than 1 pages"):
        paginate_version(ScriptedPages([version_page(["a"], 1), version_page([], 1)]), identity)


def test_max_pages_none_lifts_the_configured_limit(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VEND_MAX_PAGES", "1")
    get_settings.cache_clear()
    pages = ScriptedPages([version_page(["a"], 1), version_page(["b"], 2), version_page([], 2)])

    assert ids(paginate_version(pages, identity, max_pages=None)) == ["a", "b"]
    assert pages.cursors == [0, 1, 2]


# --------------------------
# Flake cursor
# --------------------------
def test_flake_drops_boundary_duplicates() -> None:
    """5 records, then 3 with the boundary repeated, then the lone boundary: 7 unique records."""
    pages = ScriptedPages([
        flake_page(["a", "b", "c", "d", "e"]),
        flake_page(["e", "f", "g"]),
        flake_page(["g"]),
    ])

    records = paginate_flake(pages, identity)

    assert ids(records) == ["a", "b", "c", "d", "e", "f", "g"]
    assert len(set(ids(records))) == 7
    assert pages.cursors == ["", "e", "g"]


def test_flake_empty_last_page_ends_stream() -> None:
    pages = ScriptedPages([flake_page(["a", "b"]), flake_page([])])
    assert ids(paginate_flake(pages, identity)) == ["a", "b"]


def test_flake_single_record_first_page_is_kept() -> None:
    pages = ScriptedPages([flake_page(["only"])])

    assert ids(paginate_flake(pages, identity)) == ["only"]
    assert pages.cursors == [""]


def test_flake_empty_first_page() -> None:
    pages = ScriptedPages([{"data": []}])
    assert paginate_flake(pages, identity) == []


def test_flake_record_without_id_is_a_cursor_error() -> None:
    pages = ScriptedPages([{"data": [{"id": "a"}, {"balance": 3}]}])
    with pytest.raises(VendCursorError):
        paginate_flake(pages, identity)


def test_flake_cursor_must_move() -> None:
    pages = ScriptedPages([flake_page(["a", "b"]), flake_page(["a", "b"])])
    with pytest.raises(VendCursorError):
        paginate(pages, FlakeCursor(), identity, resource="store_credits")


def test_flake_malformed_records_are_a_decode_error() -> None:
    with pytest.raises(VendDecodeError):
        paginate_flake(ScriptedPages([{"data": ["a", "b"]}]), identity)


def test_accumulators_are_independent() -> None:
    results: Tuple[List[Any], ...] = (
        paginate_flake(ScriptedPages([flake_page(["a", "b"]), flake_page(["b"])]), identity),
        paginate_flake(ScriptedPages([flake_page(["x", "y"]), flake_page(["y"])]), identity),
    )
    assert [ids(r) for r in results] == [["a", "b"], ["x", "y"]]
