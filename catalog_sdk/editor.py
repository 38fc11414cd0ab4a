# catalog_sdk/editor.py
import logging
from enum import Enum
from typing import Optional

from catalog_sdk.errors import EditorError
from catalog_sdk.models import Draft, Product
from catalog_sdk.store import CatalogStore

logger = logging.getLogger(__name__)


class EditorMode(str, Enum):
    CLOSED = "closed"
    CREATING = "creating"
    EDITING = "editing"


class EditorSession:
    """
    Create/edit form state. Holds the draft and the id of the product being
    edited; all writes go through the CatalogStore.
    """

    def __init__(self, store: CatalogStore):
        self._store = store
        self._draft: Optional[Draft] = None
        self._editing_id: Optional[str] = None

    @property
    def mode(self) -> EditorMode:
        if self._draft is None:
            return EditorMode.CLOSED
        return EditorMode.EDITING if self._editing_id is not None else EditorMode.CREATING

    @property
    def visible(self) -> bool:
        return self._draft is not None

    @property
    def draft(self) -> Optional[Draft]:
        return self._draft

    @property
    def editing_id(self) -> Optional[str]:
        return self._editing_id

    @property
    def title(self) -> str:
        return "Edit Product" if self.mode is EditorMode.EDITING else "Add New Product"

    @property
    def submit_label(self) -> str:
        return "Update Product" if self.mode is EditorMode.EDITING else "Add Product"

    def open_for_create(self):
        self._draft = Draft()
        self._editing_id = None

    def open_for_edit(self, product: Product):
        self._draft = Draft.from_product(product)
        self._editing_id = product.id

    def toggle(self):
        if self.visible:
            self.cancel()
        else:
            self.open_for_create()

    def update_field(self, field_name: str, value: str):
        if self._draft is None:
            raise EditorError("form is not open")
        if field_name not in Draft.field_names():
            raise EditorError(f"unknown field: {field_name}")
        setattr(self._draft, field_name, value)

    async def submit(self) -> bool:
        if self._draft is None:
            raise EditorError("form is not open")
        if self._editing_id is not None:
            ok = await self._store.update(self._editing_id, self._draft)
        else:
            ok = await self._store.create(self._draft)
        if ok:
            self.cancel()
        else:
            logger.debug("Submit failed, keeping draft open")
        return ok

    def cancel(self):
        self._draft = None
        self._editing_id = None
