# tests/test_client.py
from decimal import Decimal

import httpx
import pytest
from fastapi.testclient import TestClient

from catalog_api.main import app
from catalog_sdk.client import AsyncProductClient, ProductClient, parse_products
from catalog_sdk.errors import ServerError, TransportError
from catalog_sdk.models import Category, Draft, validate_draft
from catalog_sdk.store import CatalogStore

PEN = validate_draft(Draft("Pen", "1.50", "Blue pen", "General"))


def sync_client():
    return ProductClient(base_url="http://testserver", session=TestClient(app))


def test_sync_crud_round_trip():
    c = sync_client()
    created = c.create_product(PEN)
    assert created.price == Decimal("1.50")
    assert [p.id for p in c.list_products()] == [created.id]

    updated = c.update_product(created.id, validate_draft(Draft("Pen", "2", "Red pen", "General")))
    assert updated.description == "Red pen"
    assert updated.created_at == created.created_at
    assert c.get_product(created.id).price == Decimal("2")

    c.delete_product(created.id)
    assert c.list_products() == []


def test_sync_non_2xx_raises_server_error():
    with pytest.raises(ServerError) as exc:
        sync_client().get_product("missing")
    assert exc.value.status_code == 404


def test_sync_unreachable_raises_transport_error():
    c = ProductClient(base_url="http://127.0.0.1:9", timeout=1)
    with pytest.raises(TransportError):
        c.list_products()


def test_duplicate_ids_are_rejected():
    item = {"id": "a", "name": "Pen", "price": 1, "description": "", "category": "General",
            "createdAt": "2024-01-05T12:00:00+00:00"}
    with pytest.raises(ServerError):
        parse_products([item, dict(item)])


@pytest.mark.asyncio
async def test_async_accepts_mongo_style_ids():
    def handler(request):
        return httpx.Response(200, json=[{
            "_id": "65a1", "name": "Book", "price": 12.5, "description": "Novel",
            "category": "Books", "createdAt": "2024-01-05T12:00:00.000Z",
        }])

    async with AsyncProductClient("http://test", transport=httpx.MockTransport(handler)) as c:
        products = await c.list_products()
    assert products[0].id == "65a1"
    assert products[0].category is Category.BOOKS


@pytest.mark.asyncio
async def test_async_failures_are_wrapped():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with AsyncProductClient("http://test", transport=httpx.MockTransport(refuse)) as c:
        with pytest.raises(TransportError):
            await c.list_products()

    async with AsyncProductClient("http://test", transport=httpx.MockTransport(lambda r: httpx.Response(500))) as c:
        with pytest.raises(ServerError) as exc:
            await c.delete_product("x")
    assert exc.value.status_code == 500

    async with AsyncProductClient("http://test", transport=httpx.MockTransport(lambda r: httpx.Response(200, text="<html>"))) as c:
        with pytest.raises(ServerError):
            await c.list_products()


PEN_JSON = {"id": "a/b?c", "name": "Pen", "price": 1.5, "description": "Blue pen", "category": "General",
            "createdAt": "2024-01-05T12:00:00+00:00"}


@pytest.mark.asyncio
async def test_async_get_product_quotes_id():
    seen = []

    def handler(request):
        seen.append(request.url.raw_path)
        return httpx.Response(200, json=PEN_JSON)

    async with AsyncProductClient("http://test", transport=httpx.MockTransport(handler)) as c:
        product = await c.get_product("a/b?c")
    assert product.id == "a/b?c"
    assert seen == [b"/api/products/a%2Fb%3Fc"]


def test_sync_quotes_id():
    assert ProductClient(base_url="http://x")._url("a/b?c") == "http://x/api/products/a%2Fb%3Fc"


def test_sync_delete_with_no_content():
    class NoContentSession:
        def request(self, method, url, **kwargs):
            return httpx.Response(204)

    assert ProductClient(base_url="http://x", session=NoContentSession()).delete_product("abc") is None


@pytest.mark.asyncio
async def test_async_get_product_against_backend(api):
    created = await api.create_product(PEN)
    fetched = await api.get_product(created.id)
    assert fetched == created


@pytest.mark.asyncio
async def test_delete_with_no_content_counts_as_success():
    calls = []

    def handler(request):
        calls.append(request.method)
        if request.method == "DELETE":
            return httpx.Response(204)
        return httpx.Response(200, json=[])

    async with AsyncProductClient("http://test", transport=httpx.MockTransport(handler)) as c:
        store = CatalogStore(c)
        assert await store.delete("abc") is True
    assert store.error is None
    # the refresh still runs after the delete
    assert calls == ["DELETE", "GET"]
