# catalog_sdk/client.py
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx
import requests
from pydantic import ValidationError as PydanticValidationError
from rich import print

from catalog_sdk.errors import ServerError, TransportError
from catalog_sdk.models import Product, ProductInput

logger = logging.getLogger(__name__)

PRODUCTS_PATH = "/api/products"


def parse_product(data: Any) -> Product:
    try:
        return Product.model_validate(data)
    except PydanticValidationError as e:
        raise ServerError(f"Malformed product in response: {e}") from e


def parse_products(data: Any) -> List[Product]:
    if not isinstance(data, list):
        raise ServerError("Expected a list of products")
    products = [parse_product(item) for item in data]
    ids = [p.id for p in products]
    if len(set(ids)) != len(ids):
        raise ServerError("Duplicate product ids in response")
    return products


def _item_path(product_id: str) -> str:
    return f"{PRODUCTS_PATH}/{quote(product_id, safe='')}"


def _body(r, what: str) -> Any:
    # mutations may answer 204 with no body
    if not r.content:
        return None
    try:
        return r.json()
    except ValueError as e:
        raise ServerError(f"{what} returned invalid JSON", status_code=r.status_code) from e


def _check(status_code: int, what: str):
    if not 200 <= status_code < 300:
        raise ServerError(f"{what} returned HTTP {status_code}", status_code=status_code)


class AsyncProductClient:
    """Async client for the products REST API, used by CatalogStore."""

    def __init__(self, base_url: str = "http://localhost:5000", timeout: float = 10,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(base_url=self.base_url, timeout=timeout, transport=transport)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc):
        await self.aclose()

    async def aclose(self):
        await self._client.aclose()

    async def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None) -> Any:
        try:
            r = await self._client.request(method, path, json=json)
        except httpx.HTTPError as e:
            raise TransportError(f"{method} {path} failed: {e}") from e
        logger.debug("%s %s -> %s", method, path, r.status_code)
        _check(r.status_code, f"{method} {path}")
        return _body(r, f"{method} {path}")

    async def list_products(self) -> List[Product]:
        return parse_products(await self._request("GET", PRODUCTS_PATH))

    async def get_product(self, product_id: str) -> Product:
        return parse_product(await self._request("GET", _item_path(product_id)))

    async def create_product(self, payload: ProductInput) -> Product:
        return parse_product(await self._request("POST", PRODUCTS_PATH, json=payload.to_payload()))

    async def update_product(self, product_id: str, payload: ProductInput) -> Product:
        return parse_product(await self._request("PUT", _item_path(product_id), json=payload.to_payload()))

    async def delete_product(self, product_id: str) -> None:
        await self._request("DELETE", _item_path(product_id))


class ProductClient:
    """Blocking client for scripts. `session` may be anything with the requests.Session call shape."""

    def __init__(self, base_url: str = "http://localhost:5000", timeout: float = 10, session=None):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    def _url(self, product_id: Optional[str] = None) -> str:
        return f"{self.base_url}{_item_path(product_id) if product_id else PRODUCTS_PATH}"

    def _send(self, method: str, url: str, **kwargs):
        try:
            r = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise TransportError(f"{method} {url} failed: {e}") from e
        _check(r.status_code, f"{method} {url}")
        return _body(r, f"{method} {url}")

    def reset(self):
        return self._send("POST", f"{self.base_url}/api/reset")

    def list_products(self) -> List[Product]:
        return parse_products(self._send("GET", self._url()))

    def get_product(self, product_id: str) -> Product:
        return parse_product(self._send("GET", self._url(product_id)))

    def create_product(self, payload: ProductInput) -> Product:
        return parse_product(self._send("POST", self._url(), json=payload.to_payload()))

    def update_product(self, product_id: str, payload: ProductInput) -> Product:
        return parse_product(self._send("PUT", self._url(product_id), json=payload.to_payload()))

    def delete_product(self, product_id: str):
        return self._send("DELETE", self._url(product_id))


if __name__ == "__main__":
    import argparse

    from catalog_sdk.config import get_settings
    from catalog_sdk.models import Draft, validate_draft

    parser = argparse.ArgumentParser(description="Product catalog CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list-products", help="List all products")

    gp = subparsers.add_parser("get-product", help="Get a product by its ID")
    gp.add_argument("--product-id", required=True, help="ID of the product")

    for cmd, help_text in (("create-product", "Create a new product"), ("update-product", "Update a product")):
        p = subparsers.add_parser(cmd, help=help_text)
        if cmd == "update-product":
            p.add_argument("--product-id", required=True, help="ID of the product")
        p.add_argument("--name", required=True, help="Product name")
        p.add_argument("--price", required=True, help="Price, e.g. 1.50")
        p.add_argument("--description", required=True, help="Product description")
        p.add_argument("--category", default="General", help="Product category")

    dp = subparsers.add_parser("delete-product", help="Delete a product")
    dp.add_argument("--product-id", required=True, help="ID of the product")

    args = parser.parse_args()
    settings = get_settings()
    c = ProductClient(base_url=settings.api_url, timeout=settings.timeout)

    if args.command == "list-products":
        for product in c.list_products():
            print(product.model_dump())

    elif args.command == "get-product":
        print(c.get_product(args.product_id).model_dump())

    elif args.command in ("create-product", "update-product"):
        payload = validate_draft(Draft(args.name, args.price, args.description, args.category))
        if args.command == "create-product":
            print(c.create_product(payload).model_dump())
        else:
            print(c.update_product(args.product_id, payload).model_dump())

    elif args.command == "delete-product":
        print(c.delete_product(args.product_id))
