"""
test_routers.py — HTTP API tests (catalog, branding calculator, sync, cart, quotes)

Uses the shared TestClient fixture: seeded in-memory catalog, in-memory
sync log, a scheduler over the fake vendor, and the test DB for carts and
quote requests. The cart session lives in the TestClient's cookie jar.

Called by: pytest
Depends on: storefront/main.py, storefront/routers/*
"""

from fastapi.testclient import TestClient

from storefront.rate_limit import limiter


# ── Health ───────────────────────────────────────────────────────────


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    body = resp.json()
    assert body["status"] == "ok"
    assert body["products"] == 2
    assert body["scheduler"] == "idle"
    assert body["next_sync"] is None


# ── Catalog ──────────────────────────────────────────────────────────


def test_list_products_paginates(client):
    resp = client.get("/api/products", params={"limit": 1})
    assert resp.status_code == 200
    body = resp.json()
    assert body["total"] == 2
    assert body["page"] == 1
    assert body["limit"] == 1
    assert body["has_more"] is True
    assert [p["id"] for p in body["products"]] == ["MUG-01"]

    body = client.get("/api/products", params={"limit": 1, "page": 2}).json()
    assert [p["id"] for p in body["products"]] == ["BTL-02"]
    assert body["has_more"] is False


def test_list_products_filters(client):
    body = client.get("/api/products", params={"brand": "Hydra"}).json()
    assert [p["id"] for p in body["products"]] == ["BTL-02"]
    body = client.get("/api/products", params={"search": "ceramic"}).json()
    assert [p["id"] for p in body["products"]] == ["MUG-01"]
    body = client.get("/api/products", params={"category": "Bags"}).json()
    assert body == {"products": [], "total": 0, "page": 1, "limit": 20, "has_more": False}


def test_list_products_rejects_bad_paging(client):
    assert client.get("/api/products", params={"page": 0}).status_code == 422


def test_get_product(client):
    resp = client.get("/api/products/MUG-01")
    assert resp.status_code == 200
    assert resp.json()["base_price"] == "89.50"
    assert client.get("/api/products/NOPE").status_code == 404


def test_categories_and_branding_methods(client):
    assert [c["id"] for c in client.get("/api/categories").json()] == ["DRINK", "BAGS"]
    methods = client.get("/api/branding-methods").json()
    assert methods[0]["id"] == "SCREEN"
    assert methods[0]["setup_fee"] == "65.00"


def test_branding_calculate(client):
    resp = client.post("/api/branding/calculate", json={
        "product_id": "MUG-01", "branding_method_id": "SCREEN", "quantity": 50, "colors": 2,
    })
    assert resp.status_code == 200
    assert resp.json() == {
        "product_cost": 4475.0,
        "branding_cost": 800.0,
        "setup_fee": 65.0,
        "subtotal": 5340.0,
        "tax": 801.0,
        "total": 6141.0,
        "per_unit": 122.82,
    }


def test_branding_calculate_errors(client):
    resp = client.post("/api/branding/calculate", json={
        "product_id": "MUG-01", "branding_method_id": "LASER", "quantity": 5,
    })
    assert resp.status_code == 404
    resp = client.post("/api/branding/calculate", json={
        "product_id": "MUG-01", "branding_method_id": "SCREEN", "quantity": 0,
    })
    assert resp.status_code == 422


# ── Sync ─────────────────────────────────────────────────────────────


def test_trigger_sync(client):
    resp = client.post("/api/sync")
    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["counts"] == {"categories": 1, "branding_methods": 1, "products": 3}

    # products replaced, categories and methods added to
    assert client.get("/api/products").json()["total"] == 3
    assert {c["id"] for c in client.get("/api/categories").json()} == {"DRINK", "BAGS", "PENS"}

    logs = client.get("/api/sync/logs").json()
    assert logs["total"] == 3
    assert {e["status"] for e in logs["logs"]} == {"completed"}


def test_trigger_sync_failure_returns_502(client, fake_vendor):
    fake_vendor.fail_on = "products"
    resp = client.post("/api/sync")
    assert resp.status_code == 502
    assert "HTTP 500" in resp.json()["detail"]

    # last-good products still served
    assert client.get("/api/products").json()["total"] == 2
    failed = client.get("/api/sync/logs", params={"sync_type": "products"}).json()["logs"]
    assert failed[0]["status"] == "failed"


def test_sync_endpoint_rate_limited(client):
    limiter.reset()
    limiter.enabled = True
    try:
        statuses = [client.post("/api/sync").status_code for _ in range(6)]
    finally:
        limiter.enabled = False
        limiter.reset()
    assert statuses[:5] == [200] * 5
    assert statuses[5] == 429


# ── Cart ─────────────────────────────────────────────────────────────


def test_cart_flow(client):
    assert client.get("/api/cart").json() == {"items": [], "total": "0.00"}

    resp = client.post("/api/cart", json={
        "product_id": "MUG-01", "quantity": 50, "branding_method_id": "SCREEN", "branding_colors": 2,
    })
    assert resp.status_code == 201
    item = resp.json()
    assert item["branding_cost"] == "17.30"

    cart = client.get("/api/cart").json()
    assert cart["total"] == "5340.00"

    resp = client.put(f"/api/cart/{item['id']}", json={"quantity": 100})
    assert resp.status_code == 200
    assert resp.json()["branding_cost"] == "16.65"

    assert client.delete(f"/api/cart/{item['id']}").status_code == 200
    assert client.get("/api/cart").json()["items"] == []


def test_cart_is_per_session(client):
    client.post("/api/cart", json={"product_id": "MUG-01", "quantity": 1})
    other = TestClient(client.app)
    assert other.get("/api/cart").json()["items"] == []
    assert len(client.get("/api/cart").json()["items"]) == 1


def test_cart_errors(client):
    assert client.post("/api/cart", json={"product_id": "NOPE", "quantity": 1}).status_code == 404
    assert client.post("/api/cart", json={"product_id": "MUG-01", "quantity": 0}).status_code == 422
    assert client.put("/api/cart/missing", json={"quantity": 2}).status_code == 404
    assert client.delete("/api/cart/missing").status_code == 404


def test_clear_cart(client):
    client.post("/api/cart", json={"product_id": "MUG-01", "quantity": 1})
    client.post("/api/cart", json={"product_id": "BTL-02", "quantity": 1})
    assert client.delete("/api/cart").json() == {"ok": True, "removed": 2}
    assert client.get("/api/cart").json()["total"] == "0.00"


# ── Quotes ───────────────────────────────────────────────────────────


def test_create_and_fetch_quote(client):
    resp = client.post("/api/quotes", json={
        "customer_name": "Lee",
        "customer_email": "Lee@Example.com",
        "company_name": "Lee Events",
        "items": [{"product_id": "BTL-02", "quantity": 20}],
        "total_amount": "1035.00",
    })
    assert resp.status_code == 201
    quote = resp.json()
    assert quote["status"] == "pending"
    assert quote["customer_email"] == "lee@example.com"

    assert client.get(f"/api/quotes/{quote['id']}").json()["total_amount"] == "1035.00"
    listing = client.get("/api/quotes").json()
    assert listing["total"] == 1
    assert client.get("/api/quotes/missing").status_code == 404


def test_quote_validation(client):
    base = {"customer_name": "Lee", "customer_email": "lee@example.com", "items": [{}], "total_amount": 1}
    assert client.post("/api/quotes", json={**base, "customer_email": "not-an-email"}).status_code == 422
    assert client.post("/api/quotes", json={**base, "customer_name": "   "}).status_code == 422
    assert client.post("/api/quotes", json={**base, "items": []}).status_code == 422
    assert client.post("/api/quotes", json={**base, "total_amount": "1e30"}).status_code == 422
    assert client.post("/api/quotes", json={**base, "total_amount": "-1"}).status_code == 422


def test_quote_from_cart(client):
    empty = client.post("/api/quotes/from-cart", json={"customer_name": "Sam", "customer_email": "sam@x.io"})
    assert empty.status_code == 400

    client.post("/api/cart", json={
        "product_id": "MUG-01", "quantity": 50, "branding_method_id": "SCREEN", "branding_colors": 2,
    })
    resp = client.post("/api/quotes/from-cart", json={"customer_name": "Sam", "customer_email": "sam@x.io"})
    assert resp.status_code == 201
    assert resp.json()["total_amount"] == "6141.00"
    assert client.get("/api/cart").json()["items"] == []


def test_quote_listing_total_counts_all_quotes(client):
    for n in range(3):
        client.post("/api/quotes", json={
            "customer_name": f"C{n}", "customer_email": f"c{n}@example.com",
            "items": [{"n": n}], "total_amount": n,
        })
    page = client.get("/api/quotes", params={"limit": 2}).json()
    assert len(page["quotes"]) == 2
    assert page["total"] == 3


def test_oversized_quantities_rejected(client):
    calc = {"product_id": "MUG-01", "branding_method_id": "SCREEN", "quantity": 10**9}
    assert client.post("/api/branding/calculate", json=calc).status_code == 422
    assert client.post("/api/cart", json={"product_id": "MUG-01", "quantity": 10**9}).status_code == 422
