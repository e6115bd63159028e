# tests/test_products_api.py
from fastapi.testclient import TestClient

from app.database import STORE, seed_store
from app.main import app

client = TestClient(app)

AUTH = {"X-API-Key": "test-api-key-123"}


def reset():
    seed_store(STORE)


def new_product(**overrides):
    payload = {
        "name": "Trail Running Socks",
        "description": "Moisture-wicking socks for long runs",
        "price": 14.5,
        "category": "Sports",
        "inStock": True,
    }
    payload.update(overrides)
    return payload


def _id_of(name):
    return next(p.id for p in STORE.list() if p.name == name)


def test_list_defaults_to_first_page_of_ten():
    reset()
    r = client.get("/api/products")
    assert r.status_code == 200
    body = r.json()
    assert len(body["products"]) == 10
    assert body["pagination"] == {
        "currentPage": 1,
        "totalProducts": 10,
        "totalPages": 1,
        "hasNextPage": False,
        "hasPreviousPage": False,
    }
    assert "filters" not in body


def test_list_filters_by_category_case_insensitively():
    reset()
    r = client.get("/api/products", params={"category": "electronics"})
    body = r.json()
    names = {p["name"] for p in body["products"]}
    assert names == {"iPhone 14 Pro", "Wireless Bluetooth Headphones", "Gaming Mechanical Keyboard"}
    assert all(p["category"] == "Electronics" for p in body["products"])
    assert body["filters"] == {"category": "electronics", "search": None}


def test_list_search_matches_name_or_description():
    reset()
    r = client.get("/api/products", params={"search": "iPhone"})
    products = r.json()["products"]
    assert [p["name"] for p in products] == ["iPhone 14 Pro"]

    # "classic" only appears in descriptions
    r = client.get("/api/products", params={"search": "CLASSIC"})
    names = [p["name"] for p in r.json()["products"]]
    assert names == ["Nike Air Max 90", "The Great Gatsby"]


def test_list_pagination_middle_page():
    reset()
    r = client.get("/api/products", params={"limit": 3, "page": 2})
    body = r.json()
    assert [p["name"] for p in body["products"]] == [
        "Coffee Maker Deluxe", "Wireless Bluetooth Headphones", "Yoga Mat Premium",
    ]
    assert body["pagination"]["totalPages"] == 4
    assert body["pagination"]["hasPreviousPage"] is True
    assert body["pagination"]["hasNextPage"] is True


def test_list_page_beyond_range_is_empty():
    reset()
    r = client.get("/api/products", params={"limit": 3, "page": 9})
    assert r.status_code == 200
    body = r.json()
    assert body["products"] == []
    assert body["pagination"]["hasNextPage"] is False
    assert body["pagination"]["hasPreviousPage"] is True


def test_list_rejects_bad_query_with_all_violations():
    reset()
    r = client.get("/api/products", params={"page": "0", "limit": "500", "search": "x" * 101})
    assert r.status_code == 400
    body = r.json()
    assert body["success"] is False
    assert body["error"] == "Query parameter validation failed"
    assert len(body["details"]) == 3


def test_stats_over_seeded_store():
    reset()
    r = client.get("/api/products/stats")
    assert r.status_code == 200
    stats = r.json()
    prices = [p.price for p in STORE.list()]
    assert stats["totalProducts"] == 10
    assert stats["inStockProducts"] == 8
    assert stats["outOfStockProducts"] == 2
    assert stats["categoryCounts"]["Electronics"] == 3
    assert stats["categoryCounts"]["Home"] == 2
    assert abs(stats["averagePrice"] - sum(prices) / len(prices)) < 1e-9
    assert stats["priceRange"] == {"min": 12.99, "max": 999.99}


def test_stats_on_empty_store():
    STORE.reset([])
    r = client.get("/api/products/stats")
    assert r.status_code == 200
    stats = r.json()
    assert stats["totalProducts"] == 0
    assert stats["averagePrice"] == 0
    assert stats["priceRange"] == {"min": None, "max": None}
    assert stats["categoryCounts"] == {}
    reset()


def test_get_missing_product_is_404():
    reset()
    r = client.get("/api/products/does-not-exist")
    assert r.status_code == 404
    assert r.json()["error"] == "Product with ID does-not-exist not found"


def test_create_then_get_round_trip():
    reset()
    existing_ids = {p.id for p in STORE.list()}
    r = client.post("/api/products", json=new_product(), headers=AUTH)
    assert r.status_code == 201
    body = r.json()
    assert body["message"] == "Product created successfully"
    created = body["product"]
    assert created["id"] not in existing_ids
    assert created["createdAt"] == created["updatedAt"]

    r2 = client.get(f"/api/products/{created['id']}")
    assert r2.status_code == 200
    fetched = r2.json()
    for field in ("name", "description", "price", "category", "inStock"):
        assert fetched[field] == new_product()[field]


def test_create_normalizes_payload():
    reset()
    r = client.post(
        "/api/products",
        json=new_product(name="  Padded Socks  ", price="9.99", inStock="false"),
        headers=AUTH,
    )
    assert r.status_code == 201
    product = r.json()["product"]
    assert product["name"] == "Padded Socks"
    assert product["price"] == 9.99
    assert product["inStock"] is False


def test_create_duplicate_name_conflicts():
    reset()
    r = client.post("/api/products", json=new_product(name="IPHONE 14 pro"), headers=AUTH)
    assert r.status_code == 409
    assert r.json()["error"] == "Product with this name already exists"
    assert len(STORE) == 10


def test_create_collects_every_violation():
    reset()
    r = client.post("/api/products", json={"price": -1, "category": "Weapons", "inStock": "maybe"}, headers=AUTH)
    assert r.status_code == 400
    details = r.json()["details"]
    assert len(details) == 5
    assert details[0].startswith("Name")
    assert details[-1].startswith("InStock")


def test_create_with_malformed_json_is_400():
    reset()
    r = client.post(
        "/api/products",
        content=b"{not json",
        headers={**AUTH, "Content-Type": "application/json"},
    )
    assert r.status_code == 400
    assert r.json()["error"] == "Invalid JSON format in request body"


def test_update_replaces_fields_and_keeps_identity():
    reset()
    pid = _id_of("Yoga Mat Premium")
    before = client.get(f"/api/products/{pid}").json()
    r = client.put(
        f"/api/products/{pid}",
        json=new_product(name="Yoga Mat Premium", price=59.99, category="Health", inStock=False),
        headers=AUTH,
    )
    assert r.status_code == 200
    product = r.json()["product"]
    assert product["id"] == pid
    assert product["createdAt"] == before["createdAt"]
    assert product["updatedAt"] != before["updatedAt"]
    assert product["price"] == 59.99
    assert product["category"] == "Health"
    assert product["inStock"] is False


def test_update_to_another_products_name_conflicts():
    reset()
    pid = _id_of("Yoga Mat Premium")
    r = client.put(f"/api/products/{pid}", json=new_product(name="led smart bulb"), headers=AUTH)
    assert r.status_code == 409
    assert r.json()["error"] == "Another product with this name already exists"


def test_update_missing_product_is_404():
    reset()
    r = client.put("/api/products/nope", json=new_product(), headers=AUTH)
    assert r.status_code == 404


def test_delete_returns_removed_product():
    reset()
    pid = _id_of("Organic Green Tea")
    r = client.delete(f"/api/products/{pid}", headers=AUTH)
    assert r.status_code == 200
    assert r.json()["product"]["name"] == "Organic Green Tea"
    assert client.get(f"/api/products/{pid}").status_code == 404
    assert len(STORE) == 9


def test_delete_missing_product_leaves_store_untouched():
    reset()
    before = [p.id for p in STORE.list()]
    r = client.delete("/api/products/ghost", headers=AUTH)
    assert r.status_code == 404
    assert [p.id for p in STORE.list()] == before


def test_stats_route_wins_over_id_route():
    reset()
    r = client.get("/api/products/stats")
    assert "totalProducts" in r.json()


def test_root_and_health():
    r = client.get("/")
    assert r.status_code == 200
    assert r.json()["endpoints"]["products"] == "/api/products"
    h = client.get("/health").json()
    assert h["status"] == "OK"
    assert "uptime" in h


def test_create_with_enormous_integer_price_is_400():
    reset()
    r = client.post("/api/products", json=new_product(price=10 ** 400), headers=AUTH)
    assert r.status_code == 400
    assert r.json()["details"] == ["Price must be a non-negative number"]
    assert len(STORE) == 10


def test_create_from_form_encoded_body():
    reset()
    r = client.post(
        "/api/products",
        data={
            "name": "Form Mug",
            "description": "Stoneware mug, 350ml",
            "price": "12.50",
            "category": "Home",
            "inStock": "true",
        },
        headers=AUTH,
    )
    assert r.status_code == 201
    product = r.json()["product"]
    assert product["price"] == 12.5
    assert product["inStock"] is True


def test_update_from_form_encoded_body():
    reset()
    pid = _id_of("LED Smart Bulb")
    r = client.put(
        f"/api/products/{pid}",
        data={
            "name": "LED Smart Bulb",
            "description": "Dimmable WiFi bulb",
            "price": "29",
            "category": "Home",
            "inStock": "false",
        },
        headers=AUTH,
    )
    assert r.status_code == 200
    assert r.json()["product"]["description"] == "Dimmable WiFi bulb"


def test_responses_carry_security_headers():
    reset()
    for r in (client.get("/api/products"), client.get("/api/products/missing")):
        assert r.headers["X-Content-Type-Options"] == "nosniff"
        assert r.headers["X-Frame-Options"] == "SAMEORIGIN"
        assert r.headers["Referrer-Policy"] == "no-referrer"
        assert "Strict-Transport-Security" in r.headers
