import json
import math
from typing import Any, Dict, List, Mapping, Optional

from fastapi import Depends, Request

from .config import Settings, get_settings
from .errors import ApiError
from .models import CATEGORIES, ProductFields, ProductQuery

MAX_NAME_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500
MAX_PRICE = 999999.99
MAX_SEARCH_LENGTH = 100


def _is_blank_string(value: Any) -> bool:
    return not isinstance(value, str) or value.strip() == ""


def _parse_price(value: Any) -> Optional[float]:
    # bool is an int subclass; true/false are not prices
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            num = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        try:
            num = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(num):
        return None
    return num


def validate_product_payload(payload: Mapping[str, Any]) -> ProductFields:
    """Check a create/update body and return it normalized.

    Every field is checked before failing, so the resulting error lists all
    violations in field order rather than only the first one.
    """
    errors: List[str] = []

    name = payload.get("name")
    if _is_blank_string(name):
        errors.append("Name is required and must be a non-empty string")
    elif len(name) > MAX_NAME_LENGTH:
        errors.append(f"Name must be {MAX_NAME_LENGTH} characters or less")

    description = payload.get("description")
    if _is_blank_string(description):
        errors.append("Description is required and must be a non-empty string")
    elif len(description) > MAX_DESCRIPTION_LENGTH:
        errors.append(f"Description must be {MAX_DESCRIPTION_LENGTH} characters or less")

    raw_price = payload.get("price")
    price = None
    if raw_price is None or raw_price == "":
        errors.append("Price is required")
    else:
        price = _parse_price(raw_price)
        if price is None or price < 0:
            errors.append("Price must be a non-negative number")
        elif price > MAX_PRICE:
            errors.append("Price must be less than 1,000,000")

    category = payload.get("category")
    if _is_blank_string(category):
        errors.append("Category is required and must be a non-empty string")
    elif category not in CATEGORIES:
        errors.append(f"Category must be one of: {', '.join(CATEGORIES)}")

    in_stock = payload.get("inStock")
    if not (isinstance(in_stock, bool) or in_stock in ("true", "false")):
        errors.append("InStock must be a boolean value (true or false)")

    if errors:
        raise ApiError.validation("Validation failed", errors)

    return ProductFields(
        name=name.strip(),
        description=description.strip(),
        price=price,
        category=category.strip(),
        inStock=in_stock is True or in_stock == "true",
    )


def _parse_int(value: str) -> Optional[int]:
    # plain ASCII digits only; int() would also take "1_0" or non-Latin numerals
    digits = value.strip()
    unsigned = digits[1:] if digits[:1] in ("+", "-") else digits
    if not (unsigned.isascii() and unsigned.isdigit()):
        return None
    return int(digits)


def validate_query(params: Mapping[str, str], default_limit: int = 10, max_limit: int = 100) -> ProductQuery:
    """Check list-endpoint query parameters; empty values count as absent."""
    errors: List[str] = []
    query: Dict[str, Any] = {"limit": default_limit}

    raw_page = params.get("page")
    if raw_page:
        page = _parse_int(raw_page)
        if page is None or page < 1:
            errors.append("Page must be a positive integer")
        else:
            query["page"] = page

    raw_limit = params.get("limit")
    if raw_limit:
        limit = _parse_int(raw_limit)
        if limit is None or limit < 1 or limit > max_limit:
            errors.append(f"Limit must be a positive integer between 1 and {max_limit}")
        else:
            query["limit"] = limit

    search = params.get("search")
    if search:
        if len(search) > MAX_SEARCH_LENGTH:
            errors.append(f"Search term must be {MAX_SEARCH_LENGTH} characters or less")
        else:
            query["search"] = search

    category = params.get("category")
    if category:
        query["category"] = category

    if errors:
        raise ApiError.validation("Query parameter validation failed", errors)
    return ProductQuery(**query)


# ---------------------------
# FastAPI dependencies
# ---------------------------
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


async def product_payload(request: Request) -> ProductFields:
    content_type = request.headers.get("Content-Type", "").split(";")[0].strip().lower()
    if content_type == FORM_CONTENT_TYPE:
        form = await request.form()
        return validate_product_payload(dict(form))

    body = await request.body()
    try:
        payload = json.loads(body) if body else {}
    except ValueError:
        raise ApiError.validation("Invalid JSON format in request body")
    if not isinstance(payload, dict):
        raise ApiError.validation("Request body must be a JSON object")
    return validate_product_payload(payload)


async def list_query(request: Request, settings: Settings = Depends(get_settings)) -> ProductQuery:
    return validate_query(
        request.query_params,
        default_limit=settings.default_page_size,
        max_limit=settings.max_page_size,
    )
