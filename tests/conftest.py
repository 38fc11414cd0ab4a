# tests/conftest.py
from datetime import datetime, timezone
from decimal import Decimal

import httpx
import pytest
import pytest_asyncio

from catalog_api import database
from catalog_api.main import app
from catalog_sdk.client import AsyncProductClient
from catalog_sdk.errors import ServerError
from catalog_sdk.models import Product
from catalog_sdk.store import CatalogStore


class FakeAPI:
    """In-process stand-in for the products API that records every call."""

    def __init__(self):
        self.products = {}
        self.calls = []
        self.failing = set()
        self._next_id = 1

    def _record(self, op):
        self.calls.append(op)
        if op in self.failing:
            raise ServerError(f"{op} failed", status_code=500)

    async def list_products(self):
        self._record("list")
        return list(self.products.values())

    async def create_product(self, payload):
        self._record("create")
        pid = f"p{self._next_id}"
        self._next_id += 1
        self.products[pid] = Product(id=pid, created_at=datetime.now(timezone.utc), **payload.model_dump())
        return self.products[pid]

    async def update_product(self, product_id, payload):
        self._record("update")
        if product_id not in self.products:
            raise ServerError("not found", status_code=404)
        self.products[product_id] = self.products[product_id].model_copy(update=payload.model_dump())
        return self.products[product_id]

    async def delete_product(self, product_id):
        self._record("delete")
        if self.products.pop(product_id, None) is None:
            raise ServerError("not found", status_code=404)


def make_product(pid, name, price="1.00", category="General", description=""):
    return Product(
        id=pid,
        name=name,
        price=Decimal(price),
        description=description,
        category=category,
        created_at=datetime(2024, 1, 5, 12, 0, tzinfo=timezone.utc),
    )


@pytest.fixture(autouse=True)
def empty_catalog():
    database.clear()
    yield
    database.clear()


@pytest.fixture()
def fake_api():
    return FakeAPI()


@pytest_asyncio.fixture()
async def api():
    async with AsyncProductClient("http://test", transport=httpx.ASGITransport(app=app)) as client:
        yield client


@pytest.fixture()
def store(api):
    return CatalogStore(api)
