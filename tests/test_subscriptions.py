from clubhub.core.browser import PDFGenerationError
from clubhub.modules.subscriptions import routes as subscription_routes

SEASON_PASS = {
    "id": "sub-1",
    "subscription_type_id": "plan-1",
    "purchaser_name": "Ona",
    "purchaser_surname": "Onaitė",
    "purchaser_email": "ona@example.com",
    "valid_from": "2020-01-01T00:00:00+00:00",
    "valid_to": "2099-12-31T00:00:00+00:00",
    "stripe_subscription_id": "sub_stripe_1",
    "subscription_status": "active",
}


def test_admin_issues_pass_with_qr_and_email(client, supabase, notifications):
    response = client.post("/api/subscriptions", json={
        "purchaser_name": "Ona",
        "purchaser_email": "ona@example.com",
        "valid_from": "2026-01-01T00:00:00Z",
        "valid_to": "2026-12-31T00:00:00Z",
    })

    assert response.status_code == 201
    body = response.json()
    assert body["qr_code_url"].startswith("data:image/png;base64,")
    assert body["owner_id"] == "admin-1"
    assert supabase.rows("subscriptions")[0]["purchaser_surname"] == ""
    assert notifications.sent == [("subscription", body["id"])]


def test_public_purchase_requires_fields(client):
    response = client.post("/api/subscriptions/purchase", json={"purchaser_name": "Ona"})

    assert response.status_code == 400
    assert response.json()["detail"] == "Missing required fields"


def test_public_purchase(client, supabase):
    response = client.post("/api/subscriptions/purchase", json={
        "subscription_type_id": "plan-1",
        "purchaser_name": "Ona",
        "purchaser_email": "ona@example.com",
        "valid_from": "2026-01-01T00:00:00Z",
        "valid_to": "2026-12-31T00:00:00Z",
    })

    assert response.status_code == 200
    assert response.json()["success"] is True
    assert supabase.rows("subscriptions")[0]["owner_id"] == "system"


def test_validity_endpoint(client, supabase):
    supabase.tables["subscriptions"] = [dict(SEASON_PASS)]

    response = client.get("/api/subscriptions/sub-1/validate")

    assert response.status_code == 200
    assert response.json()["status"] == "active"


def test_validity_endpoint_expired_is_410(client, supabase):
    supabase.tables["subscriptions"] = [{**SEASON_PASS, "valid_to": "2021-01-01T00:00:00+00:00"}]

    response = client.get("/api/subscriptions/sub-1/validate")

    assert response.status_code == 410
    assert response.json()["status"] == "expired"


def test_verify_session(client, supabase, gateway):
    supabase.tables["subscriptions"] = [dict(SEASON_PASS)]
    gateway.retrievable["cs_1"] = {"id": "cs_1", "mode": "subscription", "subscription": "sub_stripe_1"}

    response = client.get("/api/subscriptions/verify/cs_1")

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == "sub-1"
    assert body["customer_email"] == "ona@example.com"
    assert body["status"] == "active"


def test_verify_rejects_payment_session(client, gateway):
    gateway.retrievable["cs_2"] = {"id": "cs_2", "mode": "payment"}

    response = client.get("/api/subscriptions/verify/cs_2")

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid subscription session"


def test_verify_before_webhook_arrives(client, gateway):
    gateway.retrievable["cs_3"] = {"id": "cs_3", "mode": "subscription", "subscription": "sub_unknown"}

    response = client.get("/api/subscriptions/verify/cs_3")

    assert response.status_code == 404
    assert response.json()["detail"] == "Subscription not found in database"


def test_delete_all(client, supabase):
    supabase.tables["subscriptions"] = [dict(SEASON_PASS), {**SEASON_PASS, "id": "sub-2"}]

    response = client.delete("/api/subscriptions")

    assert response.json()["deleted"] == 2
    assert supabase.rows("subscriptions") == []


def test_subscription_pdf(client, supabase, monkeypatch):
    supabase.tables["subscriptions"] = [dict(SEASON_PASS)]
    supabase.tables["subscription_types"] = [{"id": "plan-1", "title": "Sezono abonementas"}]
    rendered = []

    async def fake_render_pdf(html, *args, **kwargs):
        rendered.append(html)
        return b"%PDF"

    monkeypatch.setattr(subscription_routes, "render_pdf", fake_render_pdf)

    response = client.get("/api/subscriptions/sub-1/pdf")

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert "Sezono abonementas" in rendered[0]


def test_subscription_pdf_failure(client, supabase, monkeypatch):
    supabase.tables["subscriptions"] = [dict(SEASON_PASS)]

    async def failing_render_pdf(html, *args, **kwargs):
        raise PDFGenerationError("no browser")

    monkeypatch.setattr(subscription_routes, "render_pdf", failing_render_pdf)

    assert client.get("/api/subscriptions/sub-1/pdf").status_code == 500


def test_plans_public_lists_active_only(client, supabase):
    supabase.tables["subscription_types"] = [
        {"id": "plan-1", "title": "Sezonas", "price": 50, "duration_days": 365, "is_active": True,
         "features": [], "created_at": "2026-01-01T00:00:00+00:00"},
        {"id": "plan-2", "title": "Senas", "price": 40, "duration_days": 365, "is_active": False,
         "features": [], "created_at": "2025-01-01T00:00:00+00:00"},
    ]

    response = client.get("/api/subscription-types/public")

    assert [p["id"] for p in response.json()] == ["plan-1"]


def test_plan_update_without_fields(client, supabase):
    supabase.tables["subscription_types"] = [{"id": "plan-1", "title": "Sezonas", "price": 50, "duration_days": 365}]

    response = client.put("/api/subscription-types/plan-1", json={})

    assert response.status_code == 400
