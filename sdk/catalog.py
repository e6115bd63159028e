# sdk/catalog.py
from typing import Any, Dict, List, Optional

import httpx
import requests


class CatalogAPIError(Exception):
    """Raised for any non-2xx answer; carries the decoded error envelope."""

    def __init__(self, status_code: int, message: str, details: Optional[List[str]] = None):
        self.status_code = status_code
        self.message = message
        self.details = details or []
        super().__init__(f"HTTP {status_code}: {message}")


def _raise_for_envelope(status_code: int, body: Any, text: str) -> None:
    if 200 <= status_code < 300:
        return
    if isinstance(body, dict):
        raise CatalogAPIError(status_code, body.get("error") or text, body.get("details"))
    raise CatalogAPIError(status_code, text)


def _product_payload(name: str, description: str, price: float, category: str, in_stock: bool) -> Dict[str, Any]:
    return {
        "name": name,
        "description": description,
        "price": price,
        "category": category,
        "inStock": in_stock,
    }


class CatalogClient:
    def __init__(
        self,
        base_url: str = "http://localhost:8085",
        api_key: Optional[str] = None,
        timeout: int = 10,
        session: Optional[requests.Session] = None,
        async_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout
        self.async_transport = async_transport
        self.api_key = None
        if api_key:
            self.set_api_key(api_key)

    def set_api_key(self, api_key: str) -> None:
        self.api_key = api_key
        self.session.headers.update({"X-API-Key": api_key})

    def _request(self, method: str, path: str, **kwargs):
        r = self.session.request(method, f"{self.base_url}{path}", timeout=self.timeout, **kwargs)
        try:
            body = r.json()
        except ValueError:
            body = None
        _raise_for_envelope(r.status_code, body, r.text)
        return body

    # Service
    def health(self):
        return self._request("GET", "/health")

    # Products
    def list_products(
        self,
        category: Optional[str] = None,
        search: Optional[str] = None,
        page: Optional[int] = None,
        limit: Optional[int] = None,
    ):
        params: Dict[str, Any] = {}
        if category:
            params["category"] = category
        if search:
            params["search"] = search
        if page is not None:
            params["page"] = page
        if limit is not None:
            params["limit"] = limit
        return self._request("GET", "/api/products", params=params)

    def get_stats(self):
        return self._request("GET", "/api/products/stats")

    def get_product(self, product_id: str):
        return self._request("GET", f"/api/products/{product_id}")

    def create_product(self, name: str, description: str, price: float, category: str, in_stock: bool = True):
        body = self._request("POST", "/api/products", json=_product_payload(name, description, price, category, in_stock))
        return body["product"]

    def update_product(
        self, product_id: str, name: str, description: str, price: float, category: str, in_stock: bool = True,
    ):
        body = self._request(
            "PUT", f"/api/products/{product_id}",
            json=_product_payload(name, description, price, category, in_stock),
        )
        return body["product"]

    def delete_product(self, product_id: str):
        return self._request("DELETE", f"/api/products/{product_id}")["product"]

    # Async create (used for concurrent writers)
    async def create_product_async(
        self, name: str, description: str, price: float, category: str, in_stock: bool = True,
    ) -> httpx.Response:
        headers = {"X-API-Key": self.api_key} if self.api_key else {}
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.async_transport) as client:
            return await client.post(
                f"{self.base_url}/api/products",
                json=_product_payload(name, description, price, category, in_stock),
                headers=headers,
            )
