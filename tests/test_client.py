# tests/test_client.py
import asyncio

import httpx
import pytest
from fastapi.testclient import TestClient

from catalog.main import create_app
from sdk.catalog_client import CatalogAPIError, CatalogClient


@pytest.fixture
def app(settings, store):
    return create_app(settings, store)


@pytest.fixture
def sdk(app, api_key):
    return CatalogClient(base_url="http://testserver", api_key=api_key, session=TestClient(app))


def test_list_and_filter(sdk):
    page = sdk.list_products(q="pen", min_price=2)
    assert page["total"] == 1
    assert page["products"][0]["name"] == "Blue Pen"


def test_crud_round_trip(sdk, store):
    created = sdk.create_product("Stapler", "Heavy duty stapler", 12.0, "Office", 4)
    assert sdk.get_product(created["id"]) == created

    updated = sdk.update_product(created["id"], "Stapler XL", "Heavier", 15.0, "Office", 2)
    assert updated["name"] == "Stapler XL"

    assert sdk.delete_product(created["id"]) is None
    with pytest.raises(CatalogAPIError) as exc:
        sdk.get_product(created["id"])
    assert exc.value.status_code == 404
    assert exc.value.message == "Product not found"


def test_errors_carry_server_message(app, payload, api_key):
    anonymous = CatalogClient(base_url="http://testserver", session=TestClient(app))
    with pytest.raises(CatalogAPIError) as exc:
        anonymous.create_product(**payload())
    assert exc.value.status_code == 401

    sdk = CatalogClient(base_url="http://testserver", api_key=api_key, session=TestClient(app))
    with pytest.raises(CatalogAPIError) as exc:
        sdk.create_product(**payload(stock=-1))
    assert exc.value.status_code == 400
    assert "stock" in exc.value.message


def test_health(sdk):
    assert sdk.health()["status"] == "ok"


def test_list_products_async(app):
    client = CatalogClient(base_url="http://testserver", transport=httpx.ASGITransport(app=app))
    page = asyncio.run(client.list_products_async(category="office", limit=1))
    assert page["total"] == 2
    assert len(page["products"]) == 1
