import math
from typing import Any, Dict, List

from .database import ProductStore, _get_lock
from .errors import ApiError
from .models import Product, ProductFields, ProductQuery

# This file contains the core logic behind the product endpoints.

WRITE_LOCK = "catalog:writes"


def _serialize(product: Product) -> Dict[str, Any]:
    return product.model_dump(mode="json")


# Read endpoints
def filter_products(products: List[Product], query: ProductQuery) -> List[Product]:
    out = products
    if query.category:
        wanted = query.category.lower()
        out = [p for p in out if p.category.lower() == wanted]
    if query.search:
        term = query.search.lower()
        out = [p for p in out if term in p.name.lower() or term in p.description.lower()]
    return out


async def list_products_logic(store: ProductStore, query: ProductQuery) -> Dict[str, Any]:
    filtered = filter_products(store.list(), query)
    start = (query.page - 1) * query.limit
    end = start + query.limit

    response: Dict[str, Any] = {
        "products": [_serialize(p) for p in filtered[start:end]],
        "pagination": {
            "currentPage": query.page,
            "totalProducts": len(filtered),
            "totalPages": math.ceil(len(filtered) / query.limit),
            "hasNextPage": end < len(filtered),
            "hasPreviousPage": query.page > 1,
        },
    }
    if query.category or query.search:
        response["filters"] = {"category": query.category, "search": query.search}
    return response


async def product_stats_logic(store: ProductStore) -> Dict[str, Any]:
    products = store.list()
    prices = [p.price for p in products]

    category_counts: Dict[str, int] = {}
    for p in products:
        category_counts[p.category] = category_counts.get(p.category, 0) + 1

    in_stock = sum(1 for p in products if p.inStock)
    return {
        "totalProducts": len(products),
        "inStockProducts": in_stock,
        "outOfStockProducts": len(products) - in_stock,
        "categoryCounts": category_counts,
        "averagePrice": sum(prices) / len(prices) if prices else 0,
        "priceRange": {
            "min": min(prices) if prices else None,
            "max": max(prices) if prices else None,
        },
    }


async def get_product_logic(store: ProductStore, product_id: str) -> Dict[str, Any]:
    p = store.get(product_id)
    if p is None:
        raise ApiError.not_found(f"Product with ID {product_id} not found")
    return _serialize(p)


# Write endpoints
async def create_product_logic(store: ProductStore, fields: ProductFields) -> Dict[str, Any]:
    lock = _get_lock(WRITE_LOCK)
    await lock.acquire()
    try:
        if store.find_by_name(fields.name) is not None:
            raise ApiError.conflict("Product with this name already exists")
        product = store.create(fields)
        return {"message": "Product created successfully", "product": _serialize(product)}
    finally:
        lock.release()


async def update_product_logic(store: ProductStore, product_id: str, fields: ProductFields) -> Dict[str, Any]:
    lock = _get_lock(WRITE_LOCK)
    await lock.acquire()
    try:
        if store.get(product_id) is None:
            raise ApiError.not_found(f"Product with ID {product_id} not found")
        if store.find_by_name(fields.name, exclude_id=product_id) is not None:
            raise ApiError.conflict("Another product with this name already exists")
        product = store.update(product_id, fields)
        return {"message": "Product updated successfully", "product": _serialize(product)}
    finally:
        lock.release()


async def delete_product_logic(store: ProductStore, product_id: str) -> Dict[str, Any]:
    lock = _get_lock(WRITE_LOCK)
    await lock.acquire()
    try:
        product = store.delete(product_id)
        if product is None:
            raise ApiError.not_found(f"Product with ID {product_id} not found")
        return {"message": "Product deleted successfully", "product": _serialize(product)}
    finally:
        lock.release()
