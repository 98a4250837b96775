"""
routes/resources.py
--------------------

HTTP endpoints exposing the fetch-all operations of
:class:`~vend_api.clients.vend_client.VendClient` and the product image
upload.  Store credentials come from the ``X-Vend-Token``,
``X-Vend-Domain-Prefix`` and ``X-Vend-Timezone`` headers.  Requests
without a token header use the ``VEND_*`` token and domain prefix as a
pair.  Vend errors are translated into responses
by the handlers registered in :mod:`vend_api.main`.
"""

# No postponed annotations: FastAPI evaluates them in the globals of the
# log_call wrapper.

from typing import List, Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Request
from pydantic import BaseModel, ValidationError

from vend_api.clients.http_client import VendHTTPClient
from vend_api.clients.vend_client import VendClient
from vend_api.core.config import get_settings
from vend_api.logging_config import log_call
from vend_api.schemas.auth import VendCredentials
from vend_api.schemas.consignments import Consignment, ConsignmentProduct
from vend_api.schemas.products import ImageUploadData, Product, ProductUpload
from vend_api.schemas.store_credits import StoreCredit
from vend_api.schemas.stores import Outlet, Register, User
from vend_api.schemas.suppliers import Supplier

router = APIRouter()


class ImageUploadRequest(BaseModel):
    image_path: str
    image_url: str = ""
    handle: str = ""
    sku: str = ""
    remove_after_upload: bool = False


class ImageUploadResult(BaseModel):
    status: str
    image: Optional[ImageUploadData] = None


def get_http_client(request: Request) -> VendHTTPClient:
    return request.app.state.http_client


def get_vend_client(
    http_client: VendHTTPClient = Depends(get_http_client),
    x_vend_token: Optional[str] = Header(None),
    x_vend_domain_prefix: Optional[str] = Header(None),
    x_vend_timezone: Optional[str] = Header(None),
) -> VendClient:
    """Build a client for the store named by the request headers.

    A caller sending ``X-Vend-Token`` names its own store with
    ``X-Vend-Domain-Prefix``.  Without a token header the configured
    token and domain prefix are used together and the prefix header is
    ignored, so the configured token only ever goes to the configured
    store.
    """
    settings = get_settings()
    if x_vend_token:
        token, domain_prefix = x_vend_token, x_vend_domain_prefix
    else:
        token, domain_prefix = settings.token, settings.domain_prefix
    if not token or not domain_prefix:
        raise HTTPException(status_code=401, detail="Missing Vend token or domain prefix")
    try:
        credentials = VendCredentials(
            token=token,
            domain_prefix=domain_prefix,
            timezone=x_vend_timezone or settings.timezone,
        )
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=[error["msg"] for error in exc.errors()]) from exc
    return VendClient(credentials, http_client, max_pages=settings.max_pages)


@router.get("/products", response_model=List[Product])
@log_call
def get_products(client: VendClient = Depends(get_vend_client)):
    products, _ = client.products()
    return products


@router.get("/outlets", response_model=List[Outlet])
@log_call
def get_outlets(client: VendClient = Depends(get_vend_client)):
    outlets, _ = client.outlets()
    return outlets


@router.get("/registers", response_model=List[Register])
@log_call
def get_registers(client: VendClient = Depends(get_vend_client)):
    return client.registers()


@router.get("/users", response_model=List[User])
@log_call
def get_users(client: VendClient = Depends(get_vend_client)):
    return client.users()


@router.get("/consignments", response_model=List[Consignment])
@log_call
def get_consignments(client: VendClient = Depends(get_vend_client)):
    return client.consignments()


@router.get("/consignments/{consignment_id}/products", response_model=List[ConsignmentProduct])
@log_call
def get_consignment_products(consignment_id: str, client: VendClient = Depends(get_vend_client)):
    return client.consignment_products(consignment_id)


@router.get("/suppliers", response_model=List[Supplier])
@log_call
def get_suppliers(client: VendClient = Depends(get_vend_client)):
    return client.suppliers()


@router.get("/store-credits", response_model=List[StoreCredit])
@log_call
def get_store_credits(client: VendClient = Depends(get_vend_client)):
    return client.store_credits()


@router.post("/products/{product_id}/image", response_model=ImageUploadResult)
@log_call
def post_product_image(
    product_id: str,
    payload: ImageUploadRequest,
    client: VendClient = Depends(get_vend_client),
):
    """
    Upload a local image file to a product.
    Returns ``status="skipped"`` when no ``image_url`` is given.
    """
    product = ProductUpload(id=product_id, handle=payload.handle, sku=payload.sku, image_url=payload.image_url)
    try:
        image = client.upload_image(
            payload.image_path,
            product,
            remove_after_upload=payload.remove_after_upload,
        )
    except FileNotFoundError as exc:
        raise HTTPException(status_code=422, detail=f"Image file not found: {payload.image_path}") from exc
    if image is None:
        return ImageUploadResult(status="skipped")
    return ImageUploadResult(status="uploaded", image=image)
