import json

import pytest

from clubhub.modules.webhooks.service import WebhookService, cart_from_metadata, subscription_period

HEADERS = {"stripe-signature": "valid"}


def checkout_event(session):
    return {"id": "evt_1", "type": "checkout.session.completed", "data": {"object": session}}


def test_missing_signature(client):
    response = client.post("/api/webhook/stripe", content=b"{}")

    assert response.status_code == 400
    assert response.json()["detail"] == "No signature"


def test_invalid_signature(client):
    response = client.post("/api/webhook/stripe", content=b"{}", headers={"stripe-signature": "forged"})

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid signature"


def test_ticket_purchase_issues_each_ticket_once(client, supabase, gateway, notifications, event_with_tier):
    gateway.event = checkout_event({
        "id": "cs_1",
        "mode": "payment",
        "metadata": {
            "eventId": "event-1", "tierId": "tier-1", "quantity": "2",
            "purchaserName": "Jonas", "purchaserEmail": "jonas@example.com",
        },
    })

    first = client.post("/api/webhook/stripe", content=b"{}", headers=HEADERS)
    second = client.post("/api/webhook/stripe", content=b"{}", headers=HEADERS)

    assert first.json() == {"received": True}
    assert second.json() == {"received": True}
    tickets = supabase.rows("tickets")
    assert len(tickets) == 2
    assert all(t["stripe_session_id"] == "cs_1" for t in tickets)
    assert supabase.rows("pricing_tiers")[0]["sold_quantity"] == 2
    assert [kind for kind, *_ in notifications.sent] == ["ticket", "ticket"]


def test_shop_purchase_creates_paid_order_and_redeems_coupon(client, supabase, gateway, notifications):
    supabase.tables["coupon_codes"] = [{
        "id": "coupon-1", "code": "SAVE10", "discount_type": "percentage", "discount_value": 10,
        "is_active": True, "current_uses": 0,
    }]
    gateway.event = checkout_event({
        "id": "cs_shop",
        "mode": "payment",
        "customer_details": {"email": "jonas@example.com", "name": "Jonas"},
        "metadata": {
            "purchaseType": "shop",
            "purchaserName": "Jonas",
            "purchaserEmail": "jonas@example.com",
            "deliveryAddress": json.dumps({"city": "Gargždai"}),
            "couponId": "coupon-1",
            "cart": json.dumps([{"id": "p-1", "name": "Šalikas", "price": 20, "quantity": 2}]),
        },
    })

    client.post("/api/webhook/stripe", content=b"{}", headers=HEADERS)
    client.post("/api/webhook/stripe", content=b"{}", headers=HEADERS)

    orders = supabase.rows("shop_orders")
    assert len(orders) == 1
    order = orders[0]
    assert order["status"] == "paid"
    assert order["created_by"] == "stripe"
    assert order["subtotal"] == 40
    assert order["coupon_discount"] == 4
    assert order["total_amount"] == 36
    assert supabase.rows("shop_order_items")[0]["total_price"] == 40
    assert supabase.rows("coupon_codes")[0]["current_uses"] == 1
    assert [kind for kind, *_ in notifications.sent] == ["shop_order", "shop_order_admin"]


def test_subscription_checkout_records_pass(client, supabase, gateway, notifications):
    gateway.subscriptions["sub_stripe_1"] = {
        "id": "sub_stripe_1",
        "status": "active",
        "items": {"data": [{"current_period_start": 1767225600, "current_period_end": 1782864000}]},
    }
    gateway.event = checkout_event({
        "id": "cs_sub",
        "mode": "subscription",
        "subscription": "sub_stripe_1",
        "customer_details": {"email": "ona@example.com", "name": "Ona"},
        "metadata": {"subscriptionTypeId": "plan-1"},
    })

    client.post("/api/webhook/stripe", content=b"{}", headers=HEADERS)
    client.post("/api/webhook/stripe", content=b"{}", headers=HEADERS)

    subscriptions = supabase.rows("subscriptions")
    assert len(subscriptions) == 1
    subscription = subscriptions[0]
    assert subscription["valid_from"].startswith("2026-01-01")
    assert subscription["owner_id"] == "ona@example.com"
    assert subscription["qr_code_url"].startswith("data:image/png")
    assert notifications.sent == [("subscription", subscription["id"])]


def test_subscription_deleted_cancels_pass(client, supabase, gateway):
    supabase.tables["subscriptions"] = [{"id": "sub-1", "stripe_subscription_id": "sub_stripe_1",
                                         "subscription_status": "active", "valid_to": "2099-01-01"}]
    gateway.event = {"type": "customer.subscription.deleted", "data": {"object": {"id": "sub_stripe_1"}}}

    client.post("/api/webhook/stripe", content=b"{}", headers=HEADERS)

    row = supabase.rows("subscriptions")[0]
    assert row["subscription_status"] == "cancelled"
    assert not row["valid_to"].startswith("2099")


def test_subscription_updated_moves_end_date(client, supabase, gateway):
    supabase.tables["subscriptions"] = [{"id": "sub-1", "stripe_subscription_id": "sub_stripe_1"}]
    gateway.event = {
        "type": "customer.subscription.updated",
        "data": {"object": {"id": "sub_stripe_1", "status": "past_due", "current_period_end": 1782864000}},
    }

    client.post("/api/webhook/stripe", content=b"{}", headers=HEADERS)

    row = supabase.rows("subscriptions")[0]
    assert row["subscription_status"] == "past_due"
    assert row["valid_to"].startswith("2026-07-01")


def test_processing_errors_are_acknowledged(client, supabase, gateway):
    supabase.fail_on("tickets", "select")
    gateway.event = checkout_event({
        "id": "cs_1", "mode": "payment",
        "metadata": {"eventId": "event-1", "tierId": "tier-1", "quantity": "1"},
    })

    response = client.post("/api/webhook/stripe", content=b"{}", headers=HEADERS)

    assert response.status_code == 200
    assert response.json() == {"received": True}


def test_unhandled_event_type_is_ignored(supabase, gateway, notifications):
    scheduled = []
    service = WebhookService(supabase, gateway, notifications, lambda *args: scheduled.append(args))

    service.handle_event({"type": "invoice.paid", "data": {"object": {}}})

    assert scheduled == []
    assert supabase.calls == []


def test_subscription_period_prefers_top_level():
    assert subscription_period({"current_period_end": 5, "items": {"data": [{"current_period_end": 9}]}},
                               "current_period_end") == 5
    assert subscription_period({"items": {"data": [{"current_period_end": 9}]}}, "current_period_end") == 9
    assert subscription_period({}, "current_period_end") is None


@pytest.mark.parametrize("raw", [None, "", "not json"])
def test_cart_from_unreadable_metadata(raw):
    assert cart_from_metadata(raw) == []
