"""
core/urls.py
-------------

Builders for the Vend API 2.0 request URLs.

Pure string construction from explicit inputs: no network access and
no retry logic lives here.
"""

from __future__ import annotations

from urllib.parse import quote, urlencode

from vend_api.core.auth import get_base_url


def build_version_url(domain_prefix: str, resource: str, version: int = 0, object_id: str = "") -> str:
    """URL of one page of a version-paginated resource.

    ``after`` asks for records with a version greater than ``version``.
    With ``object_id`` the nested product list of that object is
    requested instead, e.g. the products of one consignment.

    >>> build_version_url("mystore", "products", 0)
    'https://mystore.vendhq.com/api/2.0/products?after=0'
    """
    address = f"{get_base_url(domain_prefix)}/{resource}"
    if object_id:
        address += f"/{quote(object_id, safe='')}/products"
    return f"{address}?{urlencode({'after': int(version)})}"


def build_flake_url(domain_prefix: str, resource: str, before: str = "") -> str:
    """URL of one page of a resource paged backwards by flake ID.

    The first page carries no ``before`` parameter.
    """
    address = f"{get_base_url(domain_prefix)}/{resource}"
    if before:
        address += f"?{urlencode({'before': before})}"
    return address


def build_image_upload_url(domain_prefix: str, product_id: str) -> str:
    """URL that accepts a multipart image upload for one product."""
    return f"{get_base_url(domain_prefix)}/products/{quote(product_id, safe='')}/actions/image_upload"
