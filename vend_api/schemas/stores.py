"""
schemas/stores.py
------------------

Records describing the store itself: outlets, registers and users.

A non-empty ``deleted_at`` marks a record removed from the store.
"""

from __future__ import annotations

from typing import Optional

from vend_api.schemas.base import VendRecord


class Outlet(VendRecord):
    """Usually a physical store location."""

    name: Optional[str] = None
    deleted_at: Optional[str] = None


class Register(VendRecord):
    name: Optional[str] = None
    outlet_id: Optional[str] = None
    deleted_at: Optional[str] = None


class User(VendRecord):
    username: Optional[str] = None
    display_name: Optional[str] = None
    email: Optional[str] = None
    deleted_at: Optional[str] = None
