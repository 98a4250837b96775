"""End-to-end tests of the resource accessors against a fake Vend API."""
from pathlib import Path

import pytest
from pydantic import ValidationError

from vend_api.clients.vend_client import RESOURCES, VendClient, build_id_map, group_by_id
from vend_api.core.errors import VendAuthError, VendDecodeError, VendNotFoundError
from vend_api.schemas.consignments import ConsignmentProduct
from vend_api.schemas.products import Product, ProductUpload
from vend_api.schemas.store_credits import StoreCredit
from vend_api.schemas.stores import Outlet


@pytest.fixture
def client(fake_vend, make_http_client, credentials):
    return VendClient(credentials, make_http_client(fake_vend))


def test_products_collects_pages_and_builds_map(client, fake_vend) -> None:
    fake_vend.version_pages["products"] = {
        0: ([{"id": "p1", "name": "Shirt", "price": 20.0, "inventory": [{"outlet_id": "o1", "count": "4.00000"}]},
             {"id": "p2", "name": "Hat", "supply_price": 3.5}], 100),
        100: ([{"id": "p3", "name": "Socks", "active": True, "unknown_field": "x"}], 140),
    }

    products, product_map = client.products()

    assert [p.name for p in products] == ["Shirt", "Hat", "Socks"]
    assert all(isinstance(p, Product) for p in products)
    assert set(product_map) == {"p1", "p2", "p3"}
    assert product_map["p1"].inventory[0].count == 4.0
    assert products[1].price is None
    assert fake_vend.paths() == [
        "/api/2.0/products?after=0",
        "/api/2.0/products?after=100",
        "/api/2.0/products?after=140",
    ]


def test_outlets_are_grouped_by_id(client, fake_vend, credentials) -> None:
    fake_vend.version_pages["outlets"] = {
        0: ([{"id": "o1", "name": "Main"}, {"id": "o2", "name": "Mall", "deleted_at": "2019-03-01T10:00:00+00:00"}], 3),
        3: ([{"id": "o1", "name": "Main (renamed)"}], 4),
    }

    outlets, outlet_map = client.outlets()

    assert len(outlets) == 3
    assert [o.name for o in outlet_map["o1"]] == ["Main", "Main (renamed)"]
    deleted_at = outlet_map["o2"][0].deleted_at
    assert deleted_at == "2019-03-01T10:00:00+00:00"
    assert credentials.localize(deleted_at).year == 2019


def test_simple_version_resources(client, fake_vend) -> None:
    fake_vend.version_pages["registers"] = {0: ([{"id": "r1", "name": "Till 1"}], 1)}
    fake_vend.version_pages["users"] = {0: ([{"id": "u1", "username": "jo", "display_name": "Jo"}], 9)}
    fake_vend.version_pages["consignments"] = {0: ([{"id": "c1", "type": "SUPPLIER", "status": "OPEN"}], 2)}
    fake_vend.version_pages["suppliers"] = {
        0: ([{"id": "s1", "name": "Acme", "contact": {"email": "sales@acme.test"}}], 5)
    }

    assert [r.name for r in client.registers()] == ["Till 1"]
    assert [u.username for u in client.users()] == ["jo"]
    assert [c.status for c in client.consignments()] == ["OPEN"]
    suppliers = client.suppliers()
    assert suppliers[0].contact.email == "sales@acme.test"


def test_consignment_products_use_nested_url(client, fake_vend) -> None:
    fake_vend.version_pages["consignments/c1/products"] = {
        0: ([{"id": "cp1", "product_id": "p1", "count": "3", "received": 2}], 12),
    }

    lines = client.consignment_products("c1")

    assert lines == [ConsignmentProduct(id="cp1", product_id="p1", count=3.0, received=2.0)]
    assert fake_vend.paths()[0] == "/api/2.0/consignments/c1/products?after=0"
    with pytest.raises(ValueError):
        client.consignment_products("")


def test_store_credits_page_backwards_without_duplicates(client, fake_vend) -> None:
    fake_vend.flake_pages["store_credits"] = {
        "": [{"id": f"sc{i}", "balance": float(i)} for i in range(5)],
        "sc4": [{"id": "sc4", "balance": 4.0}, {"id": "sc5"}, {"id": "sc6"}],
        "sc6": [{"id": "sc6"}],
    }

    credits = client.store_credits()

    assert [c.id for c in credits] == [f"sc{i}" for i in range(7)]
    assert all(isinstance(c, StoreCredit) for c in credits)
    assert fake_vend.paths() == [
        "/api/2.0/store_credits",
        "/api/2.0/store_credits?before=sc4",
        "/api/2.0/store_credits?before=sc6",
    ]


def test_fetch_all_dispatches_by_resource_name(client, fake_vend) -> None:
    fake_vend.version_pages["users"] = {0: ([{"id": "u1"}], 1)}

    assert [u.id for u in client.fetch_all("users")] == ["u1"]
    with pytest.raises(ValueError, match="Unknown resource"):
        client.fetch_all("sales")
    assert set(RESOURCES) == {
        "consignments", "outlets", "products", "registers", "store_credits", "suppliers", "users",
    }


def test_refetch_is_identical(client, fake_vend) -> None:
    fake_vend.version_pages["products"] = {
        0: ([{"id": "p1", "name": "Shirt"}, {"id": "p2", "name": "Hat"}], 7),
        7: ([{"id": "p3", "tags": "summer"}], 8),
    }

    first, _ = client.products()
    second, _ = client.products()

    assert [p.model_dump_json() for p in first] == [p.model_dump_json() for p in second]


def test_decode_errors_are_raised(client, fake_vend) -> None:
    fake_vend.version_pages["products"] = {0: ([{"id": "p1", "price": "not a number"}], 1)}

    with pytest.raises(VendDecodeError) as info:
        client.products()
    assert info.value.resource == "products"


def test_fatal_status_reaches_the_caller(client, fake_vend) -> None:
    fake_vend.status_overrides["users"] = 401
    with pytest.raises(VendAuthError):
        client.users()

    fake_vend.status_overrides["store_credits"] = 404
    with pytest.raises(VendNotFoundError):
        client.store_credits()


def test_records_are_immutable(client, fake_vend) -> None:
    fake_vend.version_pages["outlets"] = {0: ([{"id": "o1", "name": "Main"}], 1)}
    outlets, _ = client.outlets()
    with pytest.raises(ValidationError):
        outlets[0].name = "Other"  # type: ignore[misc]


def test_id_helpers_skip_records_without_id() -> None:
    outlets = [Outlet(id="o1"), Outlet(name="nameless"), Outlet(id="o1", name="again")]
    assert list(build_id_map(outlets)) == ["o1"]
    assert build_id_map(outlets)["o1"].name == "again"
    assert [len(v) for v in group_by_id(outlets).values()] == [2]


# --------------------------
# Image upload
# --------------------------
def test_upload_image_posts_multipart(client, fake_vend, tmp_path: Path) -> None:
    image = tmp_path / "shirt.jpg"
    image.write_bytes(b"\xff\xd8fake-jpeg")
    product = ProductUpload(id="p1", sku="SH-1", image_url="https://cdn.test/images/shirt.jpg")

    data = client.upload_image(image, product)

    assert data.position == 2
    assert data.status == "processing"
    request = fake_vend.requests[-1]
    assert request.url.path == "/api/2.0/products/p1/actions/image_upload"
    assert request.headers["Authorization"] == "Bearer secret-token"
    body = request.read()
    assert b'filename="shirt.jpg"' in body
    assert b"fake-jpeg" in body
    assert image.exists()


def test_upload_image_can_remove_file(client, fake_vend, tmp_path: Path) -> None:
    image = tmp_path / "hat.png"
    image.write_bytes(b"png")

    client.upload_image(str(image), ProductUpload(id="p2", image_url="hat.png"), remove_after_upload=True)

    assert not image.exists()


def test_upload_image_without_url_is_skipped(client, fake_vend, tmp_path: Path) -> None:
    assert client.upload_image(tmp_path / "missing.jpg", ProductUpload(id="p1")) is None
    assert fake_vend.requests == []


def test_upload_image_missing_file(client, fake_vend, tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        client.upload_image(tmp_path / "missing.jpg", ProductUpload(id="p1", image_url="x.jpg"))
    assert fake_vend.requests == []


def test_upload_image_rejected_credentials(client, fake_vend, tmp_path: Path) -> None:
    image = tmp_path / "shirt.jpg"
    image.write_bytes(b"jpeg")
    fake_vend.status_overrides["products/p1/actions/image_upload"] = 401

    with pytest.raises(VendAuthError):
        client.upload_image(image, ProductUpload(id="p1", image_url="shirt.jpg"))
    assert image.exists()
