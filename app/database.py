import asyncio
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from .models import Product, ProductFields
from .sample_data import SAMPLE_PRODUCTS

# This file holds the product store and the locks guarding its write paths.


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ProductStore(ABC):
    """Storage contract the route logic depends on.

    Lookups are by exact id; ``find_by_name`` compares case-insensitively.
    """

    @abstractmethod
    def list(self) -> List[Product]: ...

    @abstractmethod
    def get(self, product_id: str) -> Optional[Product]: ...

    @abstractmethod
    def find_by_name(self, name: str, exclude_id: Optional[str] = None) -> Optional[Product]: ...

    @abstractmethod
    def create(self, fields: ProductFields) -> Product: ...

    @abstractmethod
    def update(self, product_id: str, fields: ProductFields) -> Optional[Product]: ...

    @abstractmethod
    def delete(self, product_id: str) -> Optional[Product]: ...

    @abstractmethod
    def reset(self, records: Optional[Iterable[Dict[str, Any]]] = None) -> None: ...


class InMemoryProductStore(ProductStore):
    """Ordered list of products living in process memory."""

    def __init__(self, records: Optional[Iterable[Dict[str, Any]]] = None):
        self._products: List[Product] = []
        self.reset(records or [])

    def _index_of(self, product_id: str) -> int:
        for i, p in enumerate(self._products):
            if p.id == product_id:
                return i
        return -1

    def list(self) -> List[Product]:
        return list(self._products)

    def get(self, product_id: str) -> Optional[Product]:
        idx = self._index_of(product_id)
        return self._products[idx] if idx >= 0 else None

    def find_by_name(self, name: str, exclude_id: Optional[str] = None) -> Optional[Product]:
        wanted = name.lower()
        for p in self._products:
            if p.name.lower() == wanted and p.id != exclude_id:
                return p
        return None

    def create(self, fields: ProductFields) -> Product:
        ts = _now()
        product = Product(id=str(uuid.uuid4()), createdAt=ts, updatedAt=ts, **fields.model_dump())
        self._products.append(product)
        return product

    def update(self, product_id: str, fields: ProductFields) -> Optional[Product]:
        idx = self._index_of(product_id)
        if idx < 0:
            return None
        current = self._products[idx]
        updated = current.model_copy(update={**fields.model_dump(), "updatedAt": _now()})
        self._products[idx] = updated
        return updated

    def delete(self, product_id: str) -> Optional[Product]:
        idx = self._index_of(product_id)
        if idx < 0:
            return None
        return self._products.pop(idx)

    def reset(self, records: Optional[Iterable[Dict[str, Any]]] = None) -> None:
        self._products = []
        for rec in records or []:
            created = rec.get("createdAt", _now())
            self._products.append(Product(
                id=rec.get("id") or str(uuid.uuid4()),
                createdAt=created,
                updatedAt=rec.get("updatedAt", created),
                **{k: rec[k] for k in ("name", "description", "price", "category", "inStock")},
            ))

    def __len__(self) -> int:
        return len(self._products)


STORE = InMemoryProductStore()
_LOCKS: Dict[str, asyncio.Lock] = {}


def seed_store(store: ProductStore, enabled: bool = True) -> None:
    store.reset(SAMPLE_PRODUCTS if enabled else [])


def get_store() -> ProductStore:
    return STORE


def _get_lock(key: str) -> asyncio.Lock:
    if key not in _LOCKS:
        _LOCKS[key] = asyncio.Lock()
    return _LOCKS[key]
