from clubhub.modules.shop.service import generate_order_number, order_totals

ORDER = {
    "customer_name": "Ona",
    "customer_email": "ona@example.com",
    "delivery_address": {"street": "Klaipėdos g. 1", "city": "Gargždai"},
    "cart_items": [
        {"product_id": "p-1", "name": "Marškinėliai", "price": 25.0, "quantity": 2},
        {"product_id": "p-2", "name": "Šalikas", "price": 15.0, "quantity": 1},
    ],
    "coupon_discount": 5,
}


def seed_orders(supabase, count):
    supabase.tables["shop_orders"] = [
        {"id": f"order-{i}", "order_number": f"ORD-{i}", "status": "paid" if i % 2 else "pending",
         "created_at": f"2026-03-{i + 1:02d}T10:00:00+00:00"}
        for i in range(count)
    ]
    supabase.tables["shop_order_items"] = [
        {"id": f"item-{i}", "order_id": f"order-{i}", "product_name": "Šalikas", "quantity": 1}
        for i in range(count)
    ]


def test_order_totals():
    totals = order_totals([{"price": 25, "quantity": 2}, {"price": 15, "quantity": 1}], 5)

    assert totals == {"subtotal": 65.0, "discount_amount": 5.0, "total_amount": 60.0}


def test_order_number_format():
    number = generate_order_number()

    assert number.startswith("ORD-")
    assert len(number.split("-")[-1]) == 6


def test_create_order(client, supabase):
    response = client.post("/api/shop/orders", json=ORDER)

    assert response.status_code == 201
    order = response.json()
    assert order["total_amount"] == 60.0
    assert order["status"] == "pending"
    assert order["created_by"] == "admin-1"
    assert len(order["items"]) == 2
    items = supabase.rows("shop_order_items")
    assert {item["order_id"] for item in items} == {order["id"]}
    assert items[0]["total_price"] == 50.0


def test_create_order_requires_cart(client):
    response = client.post("/api/shop/orders", json={**ORDER, "cart_items": []})

    assert response.status_code == 400
    assert response.json()["detail"] == "Missing required fields"


def test_list_orders_paginates_newest_first(client, supabase):
    seed_orders(supabase, 5)

    response = client.get("/api/shop/orders", params={"page": 2, "limit": 2})

    body = response.json()
    assert [o["id"] for o in body["orders"]] == ["order-2", "order-1"]
    assert body["orders"][0]["items"][0]["product_name"] == "Šalikas"
    assert body["pagination"] == {"page": 2, "limit": 2, "total": 5, "total_pages": 3}


def test_list_orders_by_status(client, supabase):
    seed_orders(supabase, 4)

    body = client.get("/api/shop/orders", params={"status": "paid"}).json()

    assert {o["status"] for o in body["orders"]} == {"paid"}
    assert body["pagination"]["total"] == 2


def test_list_orders_requires_admin(client, supabase, as_fan):
    assert client.get("/api/shop/orders").status_code == 403


def test_get_missing_order(client):
    response = client.get("/api/shop/orders/nope")

    assert response.status_code == 404
    assert response.json()["detail"] == "Order not found"


def test_update_and_delete_order(client, supabase):
    seed_orders(supabase, 1)

    updated = client.put("/api/shop/orders/order-0", json={"status": "delivered", "notes": "Paliktas kaimynui"})
    deleted = client.delete("/api/shop/orders/order-0")

    assert updated.json()["status"] == "delivered"
    assert deleted.status_code == 204
    assert supabase.rows("shop_orders") == []
    assert supabase.rows("shop_order_items") == []


def test_ship_order_requires_tracking_number(client, supabase):
    seed_orders(supabase, 1)

    response = client.post("/api/shop/orders/order-0/ship", json={})

    assert response.status_code == 400
    assert response.json()["detail"] == "Tracking number is required"


def test_ship_order_emails_customer(client, supabase, notifications):
    seed_orders(supabase, 1)

    response = client.post("/api/shop/orders/order-0/ship", json={"tracking_number": "LP123"})

    assert response.json() == {"success": True, "message": "Order marked as shipped"}
    order = supabase.rows("shop_orders")[0]
    assert order["status"] == "shipped"
    assert order["tracking_number"] == "LP123"
    assert order["shipped_at"]
    assert notifications.sent == [("shop_order_shipped", "order-0", "LP123")]


def test_ship_order_survives_email_failure(client, supabase, notifications):
    seed_orders(supabase, 1)
    notifications.fail = True

    response = client.post("/api/shop/orders/order-0/ship", json={"tracking_number": "LP123"})

    assert response.status_code == 200
    assert supabase.rows("shop_orders")[0]["status"] == "shipped"


def test_ship_missing_order(client):
    response = client.post("/api/shop/orders/nope/ship", json={"tracking_number": "LP123"})

    assert response.status_code == 404
