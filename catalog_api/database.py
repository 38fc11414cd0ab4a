# catalog_api/database.py
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from catalog_api.models import ProductIn

# In-memory product collection, keyed by id, in insertion order.
PRODUCTS: Dict[str, Dict[str, Any]] = {}


def _fields(p: ProductIn) -> Dict[str, Any]:
    return {
        "name": p.name,
        "price": p.price,
        "description": p.description,
        "category": p.category.value,
    }


def all_products() -> List[Dict[str, Any]]:
    return list(PRODUCTS.values())


def get_product(product_id: str) -> Optional[Dict[str, Any]]:
    return PRODUCTS.get(product_id)


def insert_product(p: ProductIn) -> Dict[str, Any]:
    pid = uuid.uuid4().hex
    PRODUCTS[pid] = {
        "id": pid,
        **_fields(p),
        "createdAt": datetime.now(timezone.utc).isoformat(),
    }
    return PRODUCTS[pid]


def replace_product(product_id: str, p: ProductIn) -> Optional[Dict[str, Any]]:
    current = PRODUCTS.get(product_id)
    if current is None:
        return None
    # id and createdAt are immutable
    current.update(_fields(p))
    return current


def remove_product(product_id: str) -> bool:
    return PRODUCTS.pop(product_id, None) is not None


def clear():
    PRODUCTS.clear()
