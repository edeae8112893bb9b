# tests/test_products_api.py
import logging

from fastapi.testclient import TestClient

from catalog_api.database import ProductStore
from catalog_api.main import create_app
from conftest import AUTH

LAMP = {"name": "Desk Lamp", "description": "LED", "price": 35, "category": "home"}


def _names(body):
    return [p["name"] for p in body["products"]]


def test_root(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.json() == {"message": "Product API is running!"}


# ---------------------------
# List / search / paginate
# ---------------------------
def test_list_defaults(client):
    body = client.get("/api/products").json()
    assert _names(body) == ["Laptop", "Smartphone", "Coffee Maker"]
    assert body["total"] == 3
    assert body["page"] == 1
    assert body["limit"] == 10
    assert "next" not in body
    assert "previous" not in body


def test_list_middle_page_has_both_links(client):
    body = client.get("/api/products", params={"limit": 1, "page": 2}).json()
    assert _names(body) == ["Smartphone"]
    assert body["next"] == {"page": 3, "limit": 1}
    assert body["previous"] == {"page": 1, "limit": 1}


def test_list_first_and_last_page_links(client):
    first = client.get("/api/products", params={"limit": 1, "page": 1}).json()
    assert "previous" not in first
    assert first["next"] == {"page": 2, "limit": 1}

    last = client.get("/api/products", params={"limit": 1, "page": 3}).json()
    assert _names(last) == ["Coffee Maker"]
    assert "next" not in last
    assert last["previous"] == {"page": 2, "limit": 1}


def test_list_category_and_stock(client):
    body = client.get("/api/products", params={"category": "kitchen", "inStock": "false"}).json()
    assert _names(body) == ["Coffee Maker"]
    assert body["total"] == 1


def test_list_category_is_case_insensitive(client):
    body = client.get("/api/products", params={"category": "ELECTRONICS"}).json()
    assert _names(body) == ["Laptop", "Smartphone"]


def test_list_in_stock_other_values_mean_false(client):
    body = client.get("/api/products", params={"inStock": "yes"}).json()
    assert _names(body) == ["Coffee Maker"]


def test_list_search_matches_name_or_description(client):
    assert _names(client.get("/api/products", params={"search": "LAP"}).json()) == ["Laptop"]
    assert _names(client.get("/api/products", params={"search": "storage"}).json()) == ["Smartphone"]


def test_list_filters_combine(client):
    body = client.get("/api/products", params={"search": "e", "category": "electronics", "inStock": "true"}).json()
    assert _names(body) == ["Laptop", "Smartphone"]


def test_list_total_counts_before_pagination(client):
    body = client.get("/api/products", params={"category": "electronics", "limit": 1}).json()
    assert body["total"] == 2
    assert len(body["products"]) == 1


def test_list_bad_numbers_fall_back_to_defaults(client):
    body = client.get("/api/products", params={"page": "abc", "limit": "0"}).json()
    assert body["page"] == 1
    assert body["limit"] == 10
    assert body["total"] == 3


def test_list_numeric_prefix_is_used(client):
    body = client.get("/api/products", params={"page": "2abc", "limit": "1.9"}).json()
    assert body["page"] == 2
    assert body["limit"] == 1
    assert _names(body) == ["Smartphone"]


def test_list_page_past_end_is_empty(client):
    body = client.get("/api/products", params={"page": 5}).json()
    assert body["products"] == []
    assert body["previous"] == {"page": 4, "limit": 10}


# ---------------------------
# Get
# ---------------------------
def test_get_product(client):
    r = client.get("/api/products/3")
    assert r.status_code == 200
    assert r.json() == {
        "id": "3",
        "name": "Coffee Maker",
        "description": "Programmable coffee maker with timer",
        "price": 50,
        "category": "kitchen",
        "inStock": False,
    }


def test_get_product_not_found(client):
    r = client.get("/api/products/nope")
    assert r.status_code == 404
    assert r.json() == {"error": "Product not found"}


# ---------------------------
# Create
# ---------------------------
def test_create_then_get(client):
    r = client.post("/api/products", json=LAMP, headers=AUTH)
    assert r.status_code == 201
    created = r.json()
    assert created["id"] not in ("1", "2", "3")
    assert created == {**LAMP, "id": created["id"], "inStock": True}

    fetched = client.get(f"/api/products/{created['id']}").json()
    assert fetched == created
    assert client.get("/api/products").json()["total"] == 4


def test_create_defaults(client):
    created = client.post("/api/products", json={"name": "Kettle", "price": 0, "category": "kitchen"},
                          headers=AUTH).json()
    assert created["description"] == ""
    assert created["inStock"] is True


def test_create_keeps_explicit_in_stock(client):
    created = client.post("/api/products", json={**LAMP, "inStock": False}, headers=AUTH).json()
    assert created["inStock"] is False


def test_create_duplicate_name_differs_only_by_case(client):
    assert client.post("/api/products", json=LAMP, headers=AUTH).status_code == 201
    r = client.post("/api/products", json={**LAMP, "name": "DESK LAMP"}, headers=AUTH)
    assert r.status_code == 409
    assert r.json() == {"error": "Product with this name already exists"}
    assert client.get("/api/products").json()["total"] == 4


def test_create_duplicate_of_seed(client):
    r = client.post("/api/products", json={**LAMP, "name": "laptop"}, headers=AUTH)
    assert r.status_code == 409


def test_create_without_token(client):
    r = client.post("/api/products", json=LAMP)
    assert r.status_code == 401
    assert r.json() == {"error": "Unauthorized: Invalid or missing token"}
    assert client.get("/api/products").json()["total"] == 3


def test_create_with_wrong_token(client):
    for header in ("Bearer nope", "secret-token", "Basic secret-token", "Bearer"):
        r = client.post("/api/products", json=LAMP, headers={"Authorization": header})
        assert r.status_code == 401, header
    assert client.get("/api/products").json()["total"] == 3


def test_auth_runs_before_validation(client):
    r = client.post("/api/products", json={"price": -5})
    assert r.status_code == 401


def test_create_negative_price(client):
    r = client.post("/api/products", json={**LAMP, "price": -5}, headers=AUTH)
    assert r.status_code == 400
    assert r.json() == {"error": "Price is required and must be a non-negative number"}
    assert client.get("/api/products").json()["total"] == 3


def test_create_validation_messages_in_order(client):
    cases = [
        ({}, "Name is required and must be a non-empty string"),
        ({"name": "   ", "price": 1, "category": "x"}, "Name is required and must be a non-empty string"),
        ({"name": 5, "price": 1, "category": "x"}, "Name is required and must be a non-empty string"),
        ({"name": "A"}, "Price is required and must be a non-negative number"),
        ({"name": "A", "price": "10", "category": "x"}, "Price is required and must be a non-negative number"),
        ({"name": "A", "price": True, "category": "x"}, "Price is required and must be a non-negative number"),
        ({"name": "A", "price": 1}, "Category is required and must be a non-empty string"),
        ({"name": "A", "price": 1, "category": ""}, "Category is required and must be a non-empty string"),
        ({"name": "A", "price": 1, "category": "x", "description": 3}, "Description must be a string"),
        ({"name": "A", "price": 1, "category": "x", "inStock": "yes"}, "inStock must be a boolean"),
    ]
    for body, message in cases:
        r = client.post("/api/products", json=body, headers=AUTH)
        assert r.status_code == 400, body
        assert r.json() == {"error": message}
    assert client.get("/api/products").json()["total"] == 3


def test_create_non_json_body(client):
    r = client.post("/api/products", content=b"not json", headers={**AUTH, "Content-Type": "application/json"})
    assert r.status_code == 400
    assert r.json() == {"error": "Name is required and must be a non-empty string"}


def test_create_float_price(client):
    created = client.post("/api/products", json={**LAMP, "price": 19.99}, headers=AUTH).json()
    assert created["price"] == 19.99


# ---------------------------
# Update
# ---------------------------
def test_update_replaces_record(client):
    r = client.put("/api/products/1", json={"name": "Laptop Pro", "price": 1500, "category": "electronics"},
                   headers=AUTH)
    assert r.status_code == 200
    assert r.json() == {
        "id": "1",
        "name": "Laptop Pro",
        "description": "",
        "price": 1500,
        "category": "electronics",
        "inStock": True,
    }
    assert client.get("/api/products/1").json()["name"] == "Laptop Pro"


def test_update_without_in_stock_keeps_prior_value(client):
    r = client.put("/api/products/3", json={"name": "Coffee Maker", "price": 45, "category": "kitchen"},
                   headers=AUTH)
    assert r.json()["inStock"] is False


def test_update_with_in_stock(client):
    r = client.put("/api/products/3", json={"name": "Coffee Maker", "price": 45, "category": "kitchen",
                                            "inStock": True}, headers=AUTH)
    assert r.json()["inStock"] is True


def test_update_can_keep_own_name_with_new_case(client):
    r = client.put("/api/products/2", json={"name": "SMARTPHONE", "price": 700, "category": "electronics"},
                   headers=AUTH)
    assert r.status_code == 200
    assert r.json()["name"] == "SMARTPHONE"


def test_update_conflicts_with_other_product(client):
    r = client.put("/api/products/2", json={"name": "laptop", "price": 700, "category": "electronics"},
                   headers=AUTH)
    assert r.status_code == 409
    assert client.get("/api/products/2").json()["name"] == "Smartphone"


def test_update_not_found(client):
    r = client.put("/api/products/99", json=LAMP, headers=AUTH)
    assert r.status_code == 404
    assert r.json() == {"error": "Product not found"}


def test_update_requires_token_and_valid_body(client):
    assert client.put("/api/products/1", json=LAMP).status_code == 401
    r = client.put("/api/products/1", json={**LAMP, "category": " "}, headers=AUTH)
    assert r.status_code == 400
    assert client.get("/api/products/1").json()["name"] == "Laptop"


# ---------------------------
# Delete
# ---------------------------
def test_delete_then_get(client):
    r = client.delete("/api/products/2", headers=AUTH)
    assert r.status_code == 200
    body = r.json()
    assert body["message"] == "Product deleted successfully"
    assert body["product"]["name"] == "Smartphone"

    assert client.get("/api/products/2").status_code == 404
    assert _names(client.get("/api/products").json()) == ["Laptop", "Coffee Maker"]


def test_delete_twice(client):
    assert client.delete("/api/products/1", headers=AUTH).status_code == 200
    r = client.delete("/api/products/1", headers=AUTH)
    assert r.status_code == 404


def test_delete_without_token(client):
    assert client.delete("/api/products/1").status_code == 401
    assert client.get("/api/products/1").status_code == 200


# ---------------------------
# Fallbacks & errors
# ---------------------------
def test_unknown_route(client):
    r = client.get("/api/nothing")
    assert r.status_code == 404
    assert r.json() == {"error": "Route not found"}


def test_unsupported_method_is_route_not_found(client):
    r = client.patch("/api/products/1", json={})
    assert r.status_code == 404
    assert r.json() == {"error": "Route not found"}


class BrokenStore(ProductStore):
    def list(self):
        raise RuntimeError("disk on fire")

    def find_by_id(self, product_id):
        raise RuntimeError("disk on fire")


def test_unexpected_failure_becomes_500(settings, caplog):
    client = TestClient(create_app(store=BrokenStore(), settings=settings))
    with caplog.at_level(logging.ERROR):
        r = client.get("/api/products")
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to retrieve products"}
    assert "disk on fire" not in r.text
    assert "disk on fire" in caplog.text

    r = client.delete("/api/products/1", headers=AUTH)
    assert r.status_code == 500
    assert r.json() == {"error": "Failed to delete product"}


def test_each_app_has_its_own_store(settings):
    a = TestClient(create_app(settings=settings))
    b = TestClient(create_app(settings=settings))
    a.delete("/api/products/1", headers=AUTH)
    assert a.get("/api/products").json()["total"] == 2
    assert b.get("/api/products").json()["total"] == 3


def test_requests_are_logged(client, caplog):
    with caplog.at_level(logging.INFO, logger="catalog_api.requests"):
        client.get("/api/products", params={"page": 2})
        client.get("/missing")
    messages = [r.getMessage() for r in caplog.records if r.name == "catalog_api.requests"]
    assert any(m.endswith("GET /api/products") for m in messages)
    assert any(m.endswith("GET /missing") for m in messages)
    assert all(m.startswith("[") and "Z]" in m for m in messages)


def test_trailing_slash_is_route_not_found(client):
    r = client.get("/api/products/", follow_redirects=False)
    assert r.status_code == 404
    assert r.json() == {"error": "Route not found"}


def test_snake_case_in_stock_is_ignored(client):
    created = client.post("/api/products", json={**LAMP, "in_stock": False}, headers=AUTH).json()
    assert created["inStock"] is True

    r = client.put("/api/products/3", json={"name": "Coffee Maker", "price": 45, "category": "kitchen",
                                            "in_stock": True}, headers=AUTH)
    assert r.json()["inStock"] is False


def test_create_huge_integer_price(client):
    huge = 10 ** 400
    r = client.post("/api/products", json={**LAMP, "price": huge}, headers=AUTH)
    assert r.status_code == 201
    assert r.json()["price"] == huge

    r = client.post("/api/products", json={**LAMP, "name": "Other", "price": -huge}, headers=AUTH)
    assert r.status_code == 400
    assert r.json() == {"error": "Price is required and must be a non-negative number"}
