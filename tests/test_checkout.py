import json

TICKET_CHECKOUT = {
    "event_id": "event-1",
    "tier_id": "tier-1",
    "quantity": 2,
    "purchaser_name": "Jonas",
    "purchaser_email": "jonas@example.com",
}


def test_ticket_checkout_session(client, gateway, event_with_tier):
    response = client.post("/api/checkout/tickets", json=TICKET_CHECKOUT)

    assert response.status_code == 200
    assert response.json()["session_id"] == "cs_test_1"
    session = gateway.sessions[0]
    assert session["mode"] == "payment"
    assert session["line_items"][0]["unit_amount"] == 1000
    assert session["line_items"][0]["quantity"] == 2
    assert session["metadata"]["eventId"] == "event-1"
    assert session["metadata"]["quantity"] == "2"
    assert session["success_url"].endswith("/checkout/success?session_id={CHECKOUT_SESSION_ID}")


def test_ticket_checkout_missing_fields(client, gateway):
    response = client.post("/api/checkout/tickets", json={"event_id": "event-1"})

    assert response.status_code == 400
    assert gateway.sessions == []


def test_ticket_checkout_beyond_capacity(client, supabase, event_with_tier):
    supabase.tables["pricing_tiers"][0]["sold_quantity"] = 99

    response = client.post("/api/checkout/tickets", json=TICKET_CHECKOUT)

    assert response.status_code == 400
    assert response.json()["detail"] == "Tier sold out or not available"


def test_stripe_failure_is_500(client, gateway, event_with_tier):
    gateway.fail_with = RuntimeError("stripe down")

    response = client.post("/api/checkout/tickets", json=TICKET_CHECKOUT)

    assert response.status_code == 500
    assert response.json()["detail"] == "Failed to create Stripe session"


def test_session_tickets(client, supabase, gateway):
    gateway.retrievable["cs_1"] = {
        "id": "cs_1",
        "metadata": {"eventId": "event-1", "tierId": "tier-1", "quantity": "2", "purchaserEmail": "jonas@example.com"},
    }
    supabase.tables["tickets"] = [
        {"id": "t-1", "stripe_session_id": "cs_1", "qr_code_url": "data:1", "created_at": "2026-04-01T10:00:00"},
        {"id": "t-2", "stripe_session_id": "cs_1", "qr_code_url": "data:2", "created_at": "2026-04-01T10:00:01"},
    ]

    response = client.get("/api/checkout/tickets", params={"session_id": "cs_1"})

    assert response.status_code == 200
    assert [t["id"] for t in response.json()["tickets"]] == ["t-1", "t-2"]


def test_session_tickets_missing_metadata(client, gateway):
    gateway.retrievable["cs_1"] = {"id": "cs_1", "metadata": {}}

    response = client.get("/api/checkout/tickets", params={"session_id": "cs_1"})

    assert response.status_code == 400
    assert response.json()["detail"] == "Session missing required metadata"


def test_shop_checkout_applies_coupon(client, supabase, gateway):
    supabase.tables["coupon_codes"] = [{
        "id": "coupon-1", "code": "SAVE5", "discount_type": "fixed", "discount_value": 5,
        "is_active": True, "current_uses": 0, "min_order_amount": 0,
    }]

    response = client.post("/api/checkout/shop", json={
        "cart_items": [
            {"id": "p-1", "name": "Marškinėliai", "price": 25, "quantity": 2, "color": "mėlyna"},
        ],
        "purchaser_email": "jonas@example.com",
        "purchaser_name": "Jonas",
        "delivery_address": {"street": "Liepų g. 1", "city": "Gargždai"},
        "coupon_id": "coupon-1",
    })

    assert response.status_code == 200
    session = gateway.sessions[0]
    assert session["discount_amount"] == 5
    assert session["metadata"]["purchaseType"] == "shop"
    cart = json.loads(session["metadata"]["cart"])
    assert cart[0]["id"] == "p-1" and cart[0]["quantity"] == 2


def test_shop_checkout_with_expired_coupon(client, supabase, gateway):
    supabase.tables["coupon_codes"] = [{
        "id": "coupon-1", "code": "OLD", "discount_type": "fixed", "discount_value": 5,
        "is_active": True, "valid_until": "2020-01-01T00:00:00Z",
    }]

    response = client.post("/api/checkout/shop", json={
        "cart_items": [{"id": "p-1", "name": "Šalikas", "price": 15, "quantity": 1}],
        "purchaser_email": "jonas@example.com",
        "purchaser_name": "Jonas",
        "coupon_id": "coupon-1",
    })

    assert response.status_code == 400
    assert response.json()["detail"] == "Coupon has expired"
    assert gateway.sessions == []


def test_subscription_checkout_is_recurring(client, supabase, gateway):
    supabase.tables["subscription_types"] = [{"id": "plan-1", "title": "Sezonas", "price": 50, "duration_days": 180}]

    response = client.post("/api/checkout/subscription", json={
        "subscription_type_id": "plan-1", "customer_email": "ona@example.com",
    })

    assert response.status_code == 200
    session = gateway.sessions[0]
    assert session["mode"] == "subscription"
    assert session["line_items"][0]["recurring"] == {"interval": "day", "interval_count": 180}
    assert session["metadata"] == {"subscriptionTypeId": "plan-1"}


def test_subscription_checkout_unknown_plan(client):
    response = client.post("/api/checkout/subscription", json={"subscription_type_id": "nope"})

    assert response.status_code == 404
    assert response.json()["detail"] == "Subscription plan not found"


def test_payment_intent(client, gateway):
    response = client.post("/api/checkout/payment-intent", json={"amount": 12.5, "email": "a@b.lt"})

    assert response.json() == {"client_secret": "pi_secret_test"}
    assert gateway.payment_intents == [(12.5, "a@b.lt")]


def test_payment_intent_requires_amount(client):
    response = client.post("/api/checkout/payment-intent", json={"email": "a@b.lt"})

    assert response.status_code == 400
