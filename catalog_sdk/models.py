# catalog_sdk/models.py
import math
from dataclasses import dataclass, fields
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Dict

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from catalog_sdk.errors import ValidationError


class Category(str, Enum):
    GENERAL = "General"
    ELECTRONICS = "Electronics"
    CLOTHING = "Clothing"
    FOOD = "Food"
    BOOKS = "Books"


CATEGORIES = [c.value for c in Category]
DEFAULT_CATEGORY = Category.GENERAL.value


class Product(BaseModel):
    """Client-side copy of a server-owned product."""

    model_config = ConfigDict(frozen=True)

    # Mongo-backed servers send `_id`
    id: str = Field(validation_alias=AliasChoices("id", "_id"))
    name: str
    price: Decimal
    description: str = ""
    category: Category
    created_at: datetime = Field(validation_alias=AliasChoices("createdAt", "created_at"))


class ProductInput(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(min_length=1)
    price: Decimal = Field(ge=0, allow_inf_nan=False)
    description: str = Field(min_length=1)
    category: Category

    @field_validator("price")
    @classmethod
    def price_fits_json(cls, v: Decimal) -> Decimal:
        # sent as a JSON number, so it must survive float()
        if not math.isfinite(float(v)):
            raise ValueError("price out of range")
        return v

    def to_payload(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "price": float(self.price),
            "description": self.description,
            "category": self.category.value,
        }


@dataclass
class Draft:
    """Raw form values; everything stays text until submit."""

    name: str = ""
    price: str = ""
    description: str = ""
    category: str = DEFAULT_CATEGORY

    @classmethod
    def from_product(cls, product: Product) -> "Draft":
        return cls(
            name=product.name,
            price=format(product.price, "f"),
            description=product.description,
            category=product.category.value,
        )

    @classmethod
    def field_names(cls):
        return [f.name for f in fields(cls)]


_FIELD_MESSAGES = {
    "name": "Product name is required",
    "price": "Price must be a non-negative number",
    "description": "Description is required",
    "category": "Category must be one of " + ", ".join(CATEGORIES),
}


def validate_draft(draft: Draft) -> ProductInput:
    """Turn a draft into a request payload or raise ValidationError for the first bad field."""
    try:
        return ProductInput.model_validate({
            "name": draft.name,
            "price": draft.price.strip(),
            "description": draft.description,
            "category": draft.category,
        })
    except PydanticValidationError as e:
        # report fields in form order, not pydantic's
        bad = {err["loc"][0] for err in e.errors() if err["loc"]}
        field = next((name for name in _FIELD_MESSAGES if name in bad), "name")
        raise ValidationError(field, _FIELD_MESSAGES[field]) from e
