"""
Helpers shared by the Vend client: pagination of API 2.0 resources and
conversion of Vend timestamps into the store timezone.
"""

from __future__ import annotations

from .dates import parse_vend_datetime
from .pagination import PaginationStyle, paginate, paginate_flake, paginate_version

__all__ = [
    "PaginationStyle",
    "paginate",
    "paginate_flake",
    "paginate_version",
    "parse_vend_datetime",
]
