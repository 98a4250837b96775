"""
Route package for the Vend API facade.

Each module defines an ``APIRouter`` grouping related endpoints; the
application in :mod:`vend_api.main` includes them.
"""

__all__ = ["resources"]

from . import resources  # noqa: E402,F401
