# catalog_sdk/store.py
import itertools
import logging
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import List, Optional, Protocol, Tuple

from catalog_sdk.errors import RemoteError, ValidationError
from catalog_sdk.models import Draft, Product, ProductInput, validate_draft

logger = logging.getLogger(__name__)

FETCH_FAILED = "Failed to fetch products"
SAVE_FAILED = "Failed to save product"
DELETE_FAILED = "Failed to delete product"


class ProductsAPI(Protocol):
    async def list_products(self) -> List[Product]: ...

    async def create_product(self, payload: ProductInput) -> Product: ...

    async def update_product(self, product_id: str, payload: ProductInput) -> Product: ...

    async def delete_product(self, product_id: str) -> None: ...


class SyncStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"


@dataclass(frozen=True)
class SyncState:
    status: SyncStatus = SyncStatus.IDLE
    message: Optional[str] = None

    @classmethod
    def idle(cls) -> "SyncState":
        return cls(SyncStatus.IDLE)

    @classmethod
    def loading(cls) -> "SyncState":
        return cls(SyncStatus.LOADING)

    @classmethod
    def error(cls, message: str) -> "SyncState":
        return cls(SyncStatus.ERROR, message)


class CatalogStore:
    """
    Local snapshot of the remote product collection plus the outcome of the
    last remote operation.

    Remote failures never escape: they land in `state` as an error and the
    previous snapshot stays readable. Every successful mutation is followed
    by a full refresh before the call returns.

    Fetches are numbered in the order they start. A fetch that finishes after
    a newer one has already finished is dropped, so the latest fetch wins no
    matter what order the responses arrive in.
    """

    def __init__(self, api: ProductsAPI):
        self._api = api
        self._products: Tuple[Product, ...] = ()
        self._state = SyncState.idle()
        self._seq = itertools.count(1)
        self._settled_seq = 0
        self._in_flight = 0

    # ---------------------------
    # Read side
    # ---------------------------
    @property
    def products(self) -> Tuple[Product, ...]:
        return self._products

    @property
    def state(self) -> SyncState:
        return self._state

    @property
    def loading(self) -> bool:
        return self._in_flight > 0

    @property
    def error(self) -> Optional[str]:
        return self._state.message if self._state.status is SyncStatus.ERROR else None

    def get(self, product_id: str) -> Optional[Product]:
        return next((p for p in self._products if p.id == product_id), None)

    @property
    def total_value(self) -> Decimal:
        return sum((p.price for p in self._products), Decimal("0"))

    @property
    def category_count(self) -> int:
        return len({p.category for p in self._products})

    # ---------------------------
    # State transitions
    # ---------------------------
    def _begin(self):
        self._in_flight += 1
        if self._state.status is not SyncStatus.ERROR:
            self._state = SyncState.loading()

    def _end(self):
        self._in_flight -= 1
        if self._in_flight == 0 and self._state.status is SyncStatus.LOADING:
            self._state = SyncState.idle()

    def _fail(self, message: str):
        self._state = SyncState.error(message)

    # ---------------------------
    # Remote operations
    # ---------------------------
    async def refresh(self) -> bool:
        seq = next(self._seq)
        self._begin()
        try:
            products = await self._api.list_products()
        except RemoteError as e:
            if seq < self._settled_seq:
                logger.debug("Dropping failed fetch #%d, #%d already settled", seq, self._settled_seq)
                return False
            self._settled_seq = seq
            logger.warning("%s: %s", FETCH_FAILED, e)
            self._fail(FETCH_FAILED)
            return False
        else:
            if seq < self._settled_seq:
                logger.debug("Dropping stale fetch #%d, #%d already settled", seq, self._settled_seq)
                return False
            self._settled_seq = seq
            self._products = tuple(products)
            self._state = SyncState.loading() if self._in_flight > 1 else SyncState.idle()
            return True
        finally:
            self._end()

    async def create(self, draft: Draft) -> bool:
        payload = self._validate(draft)
        if payload is None:
            return False
        return await self._mutate(SAVE_FAILED, self._api.create_product, payload)

    async def update(self, product_id: str, draft: Draft) -> bool:
        payload = self._validate(draft)
        if payload is None:
            return False
        return await self._mutate(SAVE_FAILED, self._api.update_product, product_id, payload)

    async def delete(self, product_id: str) -> bool:
        return await self._mutate(DELETE_FAILED, self._api.delete_product, product_id)

    def _validate(self, draft: Draft) -> Optional[ProductInput]:
        try:
            return validate_draft(draft)
        except ValidationError as e:
            logger.info("Draft rejected (%s): %s", e.field, e.message)
            self._fail(e.message)
            return None

    async def _mutate(self, failure_message: str, call, *args) -> bool:
        self._begin()
        try:
            await call(*args)
        except RemoteError as e:
            logger.warning("%s: %s", failure_message, e)
            self._fail(failure_message)
            return False
        finally:
            self._end()
        # a failed re-fetch reports through state; the write itself went through
        await self.refresh()
        return True
