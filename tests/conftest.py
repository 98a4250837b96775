"""Shared fixtures: a scripted fake of the Vend API behind httpx.MockTransport."""
from __future__ import annotations

import json
import os
from typing import Any, Callable, Dict, List, Optional, Tuple

import httpx
import pytest

from vend_api.clients.http_client import VendHTTPClient
from vend_api.core.config import get_settings
from vend_api.logging_config import reset_logging
from vend_api.schemas.auth import VendCredentials


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch: pytest.MonkeyPatch):
    for key in list(os.environ):
        if key.startswith("VEND_"):
            monkeypatch.delenv(key)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
    reset_logging()


def json_response(payload: Any, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, content=json.dumps(payload).encode())


class FakeVend:
    """Answers requests from per-resource page scripts.

    ``version_pages[resource]`` maps an ``after`` value to ``(records, max)``;
    unknown cursors get an empty page.  ``flake_pages[resource]`` maps a
    ``before`` value ("" for the first page) to a list of records.
    ``status_overrides[path]`` forces a status code for every call.
    """

    def __init__(self) -> None:
        self.version_pages: Dict[str, Dict[int, Tuple[List[Dict[str, Any]], int]]] = {}
        self.flake_pages: Dict[str, Dict[str, List[Dict[str, Any]]]] = {}
        self.status_overrides: Dict[str, int] = {}
        self.upload_response: Dict[str, Any] = {
            "data": {"id": "img-1", "product_id": "p1", "position": 2, "status": "processing", "version": 7}
        }
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        assert path.startswith("/api/2.0/")
        resource = path[len("/api/2.0/"):]
        if resource in self.status_overrides:
            return json_response({"error": "forced"}, self.status_overrides[resource])
        if request.method == "POST" and resource.endswith("/actions/image_upload"):
            return json_response(self.upload_response, 201)
        if resource in self.flake_pages:
            before = request.url.params.get("before", "")
            return json_response({"data": self.flake_pages[resource].get(before, [])})
        pages = self.version_pages.get(resource, {})
        after = int(request.url.params.get("after", "0"))
        records, version_max = pages.get(after, ([], after))
        return json_response({"data": records, "version": {"min": after, "max": version_max}})

    def paths(self) -> List[str]:
        return [str(r.url.raw_path, "ascii") for r in self.requests]


@pytest.fixture
def fake_vend() -> FakeVend:
    return FakeVend()


@pytest.fixture
def sleeps() -> List[float]:
    return []


@pytest.fixture
def make_http_client(sleeps: List[float]) -> Callable[..., VendHTTPClient]:
    """Build a VendHTTPClient over a MockTransport that records backoff waits."""
    created: List[VendHTTPClient] = []

    def factory(handler: Callable[[httpx.Request], httpx.Response], **kwargs: Any) -> VendHTTPClient:
        kwargs.setdefault("sleep", sleeps.append)
        kwargs.setdefault("max_attempts", 5)
        client = VendHTTPClient(transport=httpx.MockTransport(handler), **kwargs)
        created.append(client)
        return client

    yield factory
    for client in created:
        client.close()


@pytest.fixture
def credentials() -> VendCredentials:
    return VendCredentials(token="secret-token", domain_prefix="mystore")


def sequence_handler(
    responses: List[Any],
    calls: Optional[List[httpx.Request]] = None,
) -> Callable[[httpx.Request], httpx.Response]:
    """Handler replaying ``responses`` in order; exceptions are raised."""
    remaining = list(responses)

    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        item = remaining.pop(0)
        if isinstance(item, Exception):
            raise item
        return item

    return handler
