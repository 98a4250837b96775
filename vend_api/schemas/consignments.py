"""
schemas/consignments.py
------------------------

Stock orders, returns and transfers between outlets, and the product
lines of one consignment.

Timestamps are kept as sent; convert them with
:meth:`vend_api.schemas.auth.VendCredentials.localize`.
"""

from __future__ import annotations

from typing import Optional

from vend_api.schemas.base import Quantity, VendRecord


class Consignment(VendRecord):
    outlet_id: Optional[str] = None
    source_outlet_id: Optional[str] = None
    supplier_id: Optional[str] = None
    name: Optional[str] = None
    type: Optional[str] = None
    status: Optional[str] = None
    reference: Optional[str] = None
    consignment_date: Optional[str] = None
    received_at: Optional[str] = None
    deleted_at: Optional[str] = None


class ConsignmentProduct(VendRecord):
    product_id: Optional[str] = None
    product_sku: Optional[str] = None
    count: Quantity = None
    received: Quantity = None
    cost: Optional[float] = None
    status: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    deleted_at: Optional[str] = None
