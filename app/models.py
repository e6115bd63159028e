# app/models.py
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel


class Category(str, Enum):
    ELECTRONICS = "Electronics"
    CLOTHING = "Clothing"
    BOOKS = "Books"
    HOME = "Home"
    SPORTS = "Sports"
    TOYS = "Toys"
    HEALTH = "Health"
    BEAUTY = "Beauty"
    FOOD = "Food"
    OTHER = "Other"


CATEGORIES = [c.value for c in Category]


class Product(BaseModel):
    id: str
    name: str
    description: str
    price: float
    category: str
    inStock: bool
    createdAt: datetime
    updatedAt: datetime


class ProductFields(BaseModel):
    """Mutable part of a product, produced by the validation stage."""
    name: str
    description: str
    price: float
    category: str
    inStock: bool


class ProductQuery(BaseModel):
    page: int = 1
    limit: int = 10
    category: Optional[str] = None
    search: Optional[str] = None


class Principal(BaseModel):
    id: str
    name: str
    role: str
    apiKey: str
