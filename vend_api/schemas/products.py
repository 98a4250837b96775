"""
schemas/products.py
--------------------

Product records and the models used by the product image upload.

Timestamps stay strings, as in every record model, so they can be
converted into the store timezone with
:func:`vend_api.utils.dates.parse_vend_datetime`.
"""

from __future__ import annotations

from typing import List, Optional

from vend_api.schemas.base import Quantity, VendModel, VendRecord


class Inventory(VendModel):
    outlet_id: Optional[str] = None
    outlet_name: Optional[str] = None
    count: Quantity = None
    reorder_point: Quantity = None
    restock_level: Quantity = None


class PriceBookEntry(VendModel):
    id: Optional[str] = None
    product_id: Optional[str] = None
    price_book_id: Optional[str] = None
    price_book_name: Optional[str] = None
    type: Optional[str] = None
    outlet_name: Optional[str] = None
    outlet_id: Optional[str] = None
    customer_group_name: Optional[str] = None
    customer_group_id: Optional[str] = None
    price: Optional[float] = None
    loyalty_value: Optional[float] = None
    tax: Optional[float] = None
    tax_id: Optional[str] = None
    tax_rate: Optional[float] = None
    tax_name: Optional[str] = None
    display_retail_price_tax_inclusive: Optional[int] = None
    min_units: Quantity = None
    max_units: Quantity = None
    valid_from: Optional[str] = None
    valid_to: Optional[str] = None


class Tax(VendModel):
    outlet_id: Optional[str] = None
    tax_id: Optional[str] = None


class Image(VendModel):
    id: Optional[str] = None
    url: Optional[str] = None
    version: Optional[int] = None


class Product(VendRecord):
    source_id: Optional[str] = None
    variant_source_id: Optional[str] = None
    handle: Optional[str] = None
    has_variants: Optional[bool] = None
    variant_parent_id: Optional[str] = None
    variant_option_one_name: Optional[str] = None
    variant_option_one_value: Optional[str] = None
    variant_option_two_name: Optional[str] = None
    variant_option_two_value: Optional[str] = None
    variant_option_three_name: Optional[str] = None
    variant_option_three_value: Optional[str] = None
    variant_name: Optional[str] = None
    active: Optional[bool] = None
    name: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    image_url: Optional[str] = None
    image_large: Optional[str] = None
    images: Optional[List[Image]] = None
    sku: Optional[str] = None
    tags: Optional[str] = None
    brand_id: Optional[str] = None
    brand_name: Optional[str] = None
    supplier_name: Optional[str] = None
    supplier_code: Optional[str] = None
    supply_price: Optional[float] = None
    account_code_purchase: Optional[str] = None
    account_code_sales: Optional[str] = None
    track_inventory: Optional[bool] = None
    inventory: Optional[List[Inventory]] = None
    price_book_entries: Optional[List[PriceBookEntry]] = None
    price: Optional[float] = None
    tax: Optional[float] = None
    tax_id: Optional[str] = None
    tax_rate: Optional[float] = None
    tax_name: Optional[str] = None
    taxes: Optional[List[Tax]] = None
    updated_at: Optional[str] = None
    deleted_at: Optional[str] = None


class ProductUpload(VendModel):
    """Product an image is uploaded to.

    ``image_url`` names the image; uploads are skipped when it is empty.
    """

    id: str
    handle: str = ""
    sku: str = ""
    image_url: str = ""


class ImageUploadData(VendModel):
    id: Optional[str] = None
    product_id: Optional[str] = None
    position: Optional[int] = None
    status: Optional[str] = None
    version: Optional[int] = None


class ImageUploadResponse(VendModel):
    data: Optional[ImageUploadData] = None
