"""
Tests for order workflow endpoints.
"""

from tests.factories import make_product


def _create(client, headers, product_id, quantity=2, **extra):
    payload = {
        "userId": "customer-1",
        "products": [{"productId": product_id, "quantity": quantity}],
        **extra,
    }
    return client.post("/api/orders/create", json=payload, headers=headers)


class TestOrderEndpoints:
    """Test /api/orders routes."""

    def test_create_order(self, client, user_auth_headers, seed_product):
        response = _create(client, user_auth_headers, seed_product.id)
        assert response.status_code == 201
        data = response.json()
        assert data["message"] == "Order created successfully"
        order = data["order"]
        assert order["userId"] == "customer-1"
        assert order["subtotal"] == 20.0
        assert order["total"] == 23.2
        assert order["status"] == "pending"
        assert "createDate" in order and "updateDate" in order

        line = order["products"][0]
        assert line["productId"] == seed_product.id
        assert line["quantity"] == 2
        assert line["price"] == 10.0
        assert line["product"]["name"] == "Widget"

    def test_create_requires_auth(self, client, seed_product):
        response = _create(client, {}, seed_product.id)
        assert response.status_code == 401

    def test_create_zero_quantity(self, client, auth_headers, seed_product):
        response = _create(client, auth_headers, seed_product.id, quantity=0)
        assert response.status_code == 400
        assert response.json()["detail"] == "Quantity must be greater than 0"

    def test_create_unknown_product(self, client, auth_headers):
        response = _create(client, auth_headers, "no-such-product")
        assert response.status_code == 404
        assert "no-such-product" in response.json()["detail"]

    def test_create_empty_products(self, client, auth_headers):
        response = client.post(
            "/api/orders/create",
            json={"userId": "customer-1", "products": []},
            headers=auth_headers,
        )
        assert response.status_code == 400

    def test_create_missing_products(self, client, auth_headers):
        response = client.post(
            "/api/orders/create", json={"userId": "customer-1"}, headers=auth_headers
        )
        assert response.status_code == 400
        assert "products" in response.json()["detail"]

    def test_create_invalid_status(self, client, auth_headers, seed_product):
        response = _create(client, auth_headers, seed_product.id, status="shipped")
        assert response.status_code == 400

    def test_list_and_get(self, client, auth_headers, seed_product):
        created = _create(client, auth_headers, seed_product.id).json()["order"]

        response = client.get("/api/orders/getall", headers=auth_headers)
        assert response.status_code == 200
        assert [o["id"] for o in response.json()["orders"]] == [created["id"]]

        response = client.get(f"/api/orders/get/{created['id']}", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["order"]["total"] == 23.2

    def test_list_filtered_by_status(self, client, auth_headers, seed_product):
        _create(client, auth_headers, seed_product.id)
        _create(client, auth_headers, seed_product.id, status="paid")

        response = client.get(
            "/api/orders/getall", params={"status": "paid"}, headers=auth_headers
        )
        orders = response.json()["orders"]
        assert len(orders) == 1
        assert orders[0]["status"] == "paid"

    def test_get_unknown(self, client, auth_headers):
        response = client.get("/api/orders/get/missing", headers=auth_headers)
        assert response.status_code == 404

    def test_update_lines_and_status(self, client, auth_headers, db_session, seed_product):
        other = make_product(db_session, "Gadget", price_cents=250)
        order_id = _create(client, auth_headers, seed_product.id).json()["order"]["id"]

        response = client.patch(
            f"/api/orders/update/{order_id}",
            json={"products": [{"productId": other.id, "quantity": 4}], "status": "paid"},
            headers=auth_headers,
        )
        assert response.status_code == 200
        order = response.json()["order"]
        assert order["status"] == "paid"
        assert order["subtotal"] == 10.0
        assert order["total"] == 11.6
        assert [l["productId"] for l in order["products"]] == [other.id]

    def test_update_unknown(self, client, auth_headers):
        response = client.patch(
            "/api/orders/update/missing", json={"status": "paid"}, headers=auth_headers
        )
        assert response.status_code == 404

    def test_delete_cancels(self, client, auth_headers, seed_product):
        order_id = _create(client, auth_headers, seed_product.id).json()["order"]["id"]

        for _ in range(2):
            response = client.delete(f"/api/orders/delete/{order_id}", headers=auth_headers)
            assert response.status_code == 200
            assert response.json()["order"]["status"] == "cancelled"

        response = client.get(f"/api/orders/get/{order_id}", headers=auth_headers)
        assert response.json()["order"]["status"] == "cancelled"
