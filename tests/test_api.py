# tests/test_api.py
from fastapi.testclient import TestClient

from catalog_api.main import app

client = TestClient(app)

PEN = {"name": "Pen", "price": 1.5, "description": "Blue pen", "category": "General"}


def test_create_assigns_id_and_timestamp():
    r = client.post("/api/products", json=PEN)
    assert r.status_code == 201
    body = r.json()
    assert body["id"]
    assert body["createdAt"]
    assert body["price"] == 1.5
    # listed afterwards
    listed = client.get("/api/products").json()
    assert [p["id"] for p in listed] == [body["id"]]


def test_update_keeps_id_and_created_at():
    created = client.post("/api/products", json=PEN).json()
    r = client.put(f"/api/products/{created['id']}", json={**PEN, "price": 2.0, "category": "Books"})
    assert r.status_code == 200
    body = r.json()
    assert body["id"] == created["id"]
    assert body["createdAt"] == created["createdAt"]
    assert body["price"] == 2.0
    assert body["category"] == "Books"


def test_delete_then_missing():
    created = client.post("/api/products", json=PEN).json()
    r = client.delete(f"/api/products/{created['id']}")
    assert r.status_code == 200
    assert client.get(f"/api/products/{created['id']}").status_code == 404
    assert client.delete(f"/api/products/{created['id']}").status_code == 404
    assert client.get("/api/products").json() == []


def test_unknown_ids_are_404():
    assert client.get("/api/products/nope").status_code == 404
    assert client.put("/api/products/nope", json=PEN).status_code == 404


def test_rejects_bad_bodies():
    assert client.post("/api/products", json={**PEN, "price": -5}).status_code == 422
    assert client.post("/api/products", json={**PEN, "name": ""}).status_code == 422
    assert client.post("/api/products", json={**PEN, "category": "Toys"}).status_code == 422


def test_reset_clears_everything():
    client.post("/api/products", json=PEN)
    assert client.post("/api/reset").json() == {"status": "reset"}
    assert client.get("/api/products").json() == []
