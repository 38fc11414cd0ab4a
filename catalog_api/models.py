# catalog_api/models.py
from enum import Enum

from pydantic import BaseModel, Field


class Category(str, Enum):
    GENERAL = "General"
    ELECTRONICS = "Electronics"
    CLOTHING = "Clothing"
    FOOD = "Food"
    BOOKS = "Books"


class ProductIn(BaseModel):
    name: str = Field(min_length=1)
    price: float = Field(ge=0)
    description: str = ""
    category: Category = Category.GENERAL


class Product(ProductIn):
    id: str
    createdAt: str
