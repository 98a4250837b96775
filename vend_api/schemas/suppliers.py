"""
schemas/suppliers.py
---------------------

Supplier records and their contact details.
"""

from __future__ import annotations

from typing import Optional

from vend_api.schemas.base import VendModel, VendRecord


class Contact(VendModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    company_name: Optional[str] = None
    phone: Optional[str] = None
    mobile: Optional[str] = None
    fax: Optional[str] = None
    email: Optional[str] = None
    twitter: Optional[str] = None
    website: Optional[str] = None
    physical_address1: Optional[str] = None
    physical_address2: Optional[str] = None
    physical_suburb: Optional[str] = None
    physical_city: Optional[str] = None
    physical_postcode: Optional[str] = None
    physical_state: Optional[str] = None
    physical_country_id: Optional[str] = None
    postal_address1: Optional[str] = None
    postal_address2: Optional[str] = None
    postal_suburb: Optional[str] = None
    postal_city: Optional[str] = None
    postal_postcode: Optional[str] = None
    postal_state: Optional[str] = None
    postal_country_id: Optional[str] = None


class Supplier(VendRecord):
    name: Optional[str] = None
    description: Optional[str] = None
    source: Optional[str] = None
    contact: Optional[Contact] = None
