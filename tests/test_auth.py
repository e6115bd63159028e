# tests/test_auth.py
from fastapi.testclient import TestClient

from app.database import STORE, seed_store
from app.main import app

client = TestClient(app)

VALID = {
    "name": "Desk Lamp",
    "description": "Adjustable LED desk lamp",
    "price": 35,
    "category": "Home",
    "inStock": True,
}


def reset():
    seed_store(STORE)


def test_missing_key_is_rejected_before_validation():
    reset()
    # the body is invalid too; auth must answer first
    r = client.post("/api/products", json={"price": "free"})
    assert r.status_code == 401
    assert r.json()["error"] == "Access denied. No API key provided."

    pid = STORE.list()[0].id
    assert client.put(f"/api/products/{pid}", content=b"garbage").status_code == 401
    assert client.delete(f"/api/products/{pid}").status_code == 401
    assert len(STORE) == 10


def test_unknown_key_is_rejected():
    reset()
    r = client.post("/api/products", json=VALID, headers={"X-API-Key": "letmein"})
    assert r.status_code == 401
    assert r.json()["error"] == "Access denied. Invalid API key."


def test_bearer_token_is_accepted():
    reset()
    r = client.post("/api/products", json=VALID, headers={"Authorization": "Bearer week2-express-api"})
    assert r.status_code == 201


def test_x_api_key_takes_precedence_over_bearer():
    reset()
    r = client.post(
        "/api/products",
        json=VALID,
        headers={"X-API-Key": "plp-student-2025", "Authorization": "Bearer wrong"},
    )
    assert r.status_code == 201


def test_non_bearer_authorization_is_ignored():
    reset()
    r = client.post("/api/products", json=VALID, headers={"Authorization": "Basic plp-student-2025"})
    assert r.status_code == 401


def test_reads_do_not_need_a_key():
    reset()
    assert client.get("/api/products").status_code == 200
    assert client.get("/api/products/stats").status_code == 200
