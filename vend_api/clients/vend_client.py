"""
clients/vend_client.py
-----------------------

Resource accessors for one Vend store.

:class:`VendClient` pairs immutable :class:`~vend_api.schemas.auth.VendCredentials`
with a shared :class:`~vend_api.clients.http_client.VendHTTPClient` and
exposes one fetch-all method per resource plus the product image
upload.  The only resource-specific knowledge is the table
:data:`RESOURCES`: which endpoint, which record model and which
pagination protocol.  Decode problems are raised as
:class:`~vend_api.core.errors.VendDecodeError`; what to tolerate is the
caller's decision.
"""

from __future__ import annotations

import logging
import mimetypes
import posixpath
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple, Type, TypeVar, Union
from urllib.parse import urlparse

from pydantic import TypeAdapter, ValidationError

from vend_api.clients.http_client import VendHTTPClient
from vend_api.core.config import FROM_SETTINGS
from vend_api.core.errors import VendDecodeError
from vend_api.core.urls import build_flake_url, build_image_upload_url, build_version_url
from vend_api.logging_config import log_event
from vend_api.schemas.auth import VendCredentials
from vend_api.schemas.base import VendRecord
from vend_api.schemas.consignments import Consignment, ConsignmentProduct
from vend_api.schemas.products import ImageUploadData, ImageUploadResponse, Product, ProductUpload
from vend_api.schemas.store_credits import StoreCredit
from vend_api.schemas.stores import Outlet, Register, User
from vend_api.schemas.suppliers import Supplier
from vend_api.utils.pagination import PaginationStyle, RawRecord, STRATEGIES, paginate

R = TypeVar("R", bound=VendRecord)


@dataclass(frozen=True)
class ResourceSpec:
    path: str
    model: Type[VendRecord]
    style: PaginationStyle


RESOURCES: Dict[str, ResourceSpec] = {
    "consignments": ResourceSpec("consignments", Consignment, PaginationStyle.VERSION),
    "outlets": ResourceSpec("outlets", Outlet, PaginationStyle.VERSION),
    "products": ResourceSpec("products", Product, PaginationStyle.VERSION),
    "registers": ResourceSpec("registers", Register, PaginationStyle.VERSION),
    "store_credits": ResourceSpec("store_credits", StoreCredit, PaginationStyle.FLAKE),
    "suppliers": ResourceSpec("suppliers", Supplier, PaginationStyle.VERSION),
    "users": ResourceSpec("users", User, PaginationStyle.VERSION),
}


def build_id_map(records: List[R]) -> Dict[str, R]:
    """Index records by ID; records without an ID are left out."""
    return {record.id: record for record in records if record.id is not None}


def group_by_id(records: List[R]) -> Dict[str, List[R]]:
    """Index records by ID keeping every record that shares an ID."""
    grouped: Dict[str, List[R]] = {}
    for record in records:
        if record.id is not None:
            grouped.setdefault(record.id, []).append(record)
    return grouped


def record_decoder(model: Type[R], resource: str) -> Callable[[List[RawRecord]], List[R]]:
    """Return a function decoding one page of raw records into ``model``."""
    adapter = TypeAdapter(List[model])  # type: ignore[valid-type]

    def decode(raw: List[RawRecord]) -> List[R]:
        try:
            return adapter.validate_python(raw)
        except ValidationError as exc:
            raise VendDecodeError(resource, str(exc)) from exc

    return decode


class VendClient:
    """Fetches whole resources from one store.

    :param credentials: token, domain prefix and timezone of the store
    :param http_client: shared transport; a private one using the
        settings is created (and closed by :meth:`close`) when omitted
    :param max_pages: per-resource page guard, ``None`` for no limit;
        defaults to the ``max_pages`` setting
    """

    def __init__(
        self,
        credentials: VendCredentials,
        http_client: Optional[VendHTTPClient] = None,
        *,
        max_pages: Optional[int] = FROM_SETTINGS,
    ) -> None:
        self.credentials = credentials
        self._owns_http_client = http_client is None
        self.http_client = http_client or VendHTTPClient()
        self.max_pages = max_pages

    def close(self) -> None:
        if self._owns_http_client:
            self.http_client.close()

    def __enter__(self) -> "VendClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # --------------------------
    # Generic accessors
    # --------------------------
    def fetch_all(self, resource: str) -> List[VendRecord]:
        """Fetch every record of a resource listed in :data:`RESOURCES`."""
        try:
            spec = RESOURCES[resource]
        except KeyError:
            raise ValueError(f"Unknown resource {resource!r}; expected one of {sorted(RESOURCES)}") from None
        return self._collect(spec.path, spec.model, spec.style)

    def _collect(
        self,
        path: str,
        model: Type[R],
        style: PaginationStyle,
        object_id: str = "",
    ) -> List[R]:
        prefix = self.credentials.domain_prefix
        token = self.credentials.token

        def fetch_page(cursor: Union[int, str]) -> bytes:
            if style is PaginationStyle.VERSION:
                url = build_version_url(prefix, path, int(cursor), object_id)
            else:
                url = build_flake_url(prefix, path, str(cursor))
            return self.http_client.get(url, token)

        resource = f"{path}/{object_id}/products" if object_id else path
        records = paginate(
            fetch_page,
            STRATEGIES[style](),
            record_decoder(model, resource),
            resource=resource,
            max_pages=self.max_pages,
        )
        log_event(logging.INFO, "resource_fetched", resource=resource, count=len(records))
        return records

    # --------------------------
    # Resources
    # --------------------------
    def products(self) -> Tuple[List[Product], Dict[str, Product]]:
        """All products, and the same products keyed by ID."""
        products = self._collect("products", Product, PaginationStyle.VERSION)
        return products, build_id_map(products)

    def outlets(self) -> Tuple[List[Outlet], Dict[str, List[Outlet]]]:
        """All outlets, and the outlets grouped by ID."""
        outlets = self._collect("outlets", Outlet, PaginationStyle.VERSION)
        return outlets, group_by_id(outlets)

    def registers(self) -> List[Register]:
        return self._collect("registers", Register, PaginationStyle.VERSION)

    def users(self) -> List[User]:
        return self._collect("users", User, PaginationStyle.VERSION)

    def consignments(self) -> List[Consignment]:
        """All stock orders, returns and transfers."""
        return self._collect("consignments", Consignment, PaginationStyle.VERSION)

    def consignment_products(self, consignment_id: str) -> List[ConsignmentProduct]:
        """Product lines of one consignment."""
        if not consignment_id:
            raise ValueError("consignment_id cannot be empty")
        return self._collect("consignments", ConsignmentProduct, PaginationStyle.VERSION, object_id=consignment_id)

    def suppliers(self) -> List[Supplier]:
        return self._collect("suppliers", Supplier, PaginationStyle.VERSION)

    def store_credits(self) -> List[StoreCredit]:
        """All store credits; this endpoint pages backwards by flake ID."""
        return self._collect("store_credits", StoreCredit, PaginationStyle.FLAKE)

    # --------------------------
    # Image upload
    # --------------------------
    def upload_image(
        self,
        image_path: Union[str, Path],
        product: ProductUpload,
        *,
        remove_after_upload: bool = False,
    ) -> Optional[ImageUploadData]:
        """
        POST /products/{product_id}/actions/image_upload

        Sends the file at ``image_path`` as the ``image`` form field.
        Nothing is sent, and ``None`` returned, when the product has no
        ``image_url``.  With ``remove_after_upload`` the local file is
        deleted once Vend accepted it.
        """
        if not product.image_url:
            log_event(logging.INFO, "image_upload_skipped", product_id=product.id, reason="no image_url")
            return None

        path = Path(image_path)
        content = path.read_bytes()
        filename = posixpath.basename(urlparse(product.image_url).path) or path.name
        content_type = mimetypes.guess_type(filename)[0] or mimetypes.guess_type(path.name)[0]
        files = {"image": (filename, content, content_type or "application/octet-stream")}

        url = build_image_upload_url(self.credentials.domain_prefix, product.id)
        log_event(logging.INFO, "image_upload", product_id=product.id, url=url, size=len(content))
        body = self.http_client.post_multipart(url, self.credentials.token, files)

        if remove_after_upload:
            path.unlink(missing_ok=True)

        try:
            response = ImageUploadResponse.model_validate_json(body)
        except ValidationError as exc:
            raise VendDecodeError("image_upload", str(exc)) from exc
        data = response.data
        log_event(
            logging.INFO,
            "image_uploaded",
            product_id=product.id,
            position=data.position if data else None,
            status=data.status if data else None,
        )
        return data
