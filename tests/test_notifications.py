import asyncio

import pytest

from clubhub.core import notifications as notifications_module
from clubhub.core.notifications import (
    NotificationError, NotificationService, fill_placeholders, format_delivery_address, notify_quietly,
    render_order_items
)
from tests.fakes import FakeSupabase

TEMPLATES = [
    {"id": "tpl-1", "name": "ticket_confirmation", "subject": "Jūsų bilietas: {{event_title}}",
     "body_html": "<p>Sveiki, {{purchaser_name}}! {{event_date}} {{event_time}}, {{event_location}}</p>"},
    {"id": "tpl-2", "name": "shop_order_confirmation", "subject": "Užsakymas {{order_number}}",
     "body_html": "<table>{{order_items}}</table><p>{{total_amount}}</p><p>{{delivery_address}}</p>"},
    {"id": "tpl-3", "name": "shop_order_shipped", "subject": "Išsiųsta: {{order_number}}",
     "body_html": "<p>Siuntos numeris {{tracking_number}}</p>"},
]


@pytest.fixture
def sent(monkeypatch):
    messages = []
    monkeypatch.setattr(notifications_module.resend.Emails, "send", lambda params: messages.append(params) or {})
    return messages


@pytest.fixture
def db():
    return FakeSupabase({
        "email_templates": TEMPLATES,
        "shop_orders": [{
            "id": "order-1", "order_number": "ORD-20260401-ABC123", "customer_name": "Ona",
            "customer_email": "ona@example.com", "total_amount": 36.0,
            "delivery_address": {"street": "Klaipėdos g. 1", "city": "Gargždai", "country": "LT"},
        }],
        "shop_order_items": [{"id": "i-1", "order_id": "order-1", "product_name": "Šalikas <vilnonis>",
                              "quantity": 2, "unit_price": 20.0, "total_price": 40.0}],
        "events": [{"id": "event-1", "title": "Banga - Žalgiris", "date": "2099-05-01", "time": "18:00",
                    "location": "Gargždų stadionas"}],
        "pricing_tiers": [{"id": "tier-1", "event_id": "event-1", "name": "Standard", "price": 10.0}],
        "tickets": [{"id": "ticket-1", "event_id": "event-1", "tier_id": "tier-1", "purchaser_name": "Jonas",
                     "purchaser_email": "jonas@example.com", "status": "valid"}],
    })


def test_fill_placeholders():
    text = fill_placeholders("Sveiki, {{name}}! {{missing}} {{empty}}", {"name": "Ona", "empty": None})

    assert text == "Sveiki, Ona! {{missing}} "


def test_format_delivery_address():
    assert format_delivery_address({"street": "Klaipėdos g. 1", "city": "Gargždai"}) == "Klaipėdos g. 1, Gargždai"
    assert format_delivery_address(None) == "N/A"
    assert format_delivery_address({"note": "prie durų"}) == "N/A"


def test_order_items_are_escaped():
    html = render_order_items([{"product_name": "<b>Šalikas</b>", "quantity": 1,
                                "unit_price": 5, "total_price": 5}])

    assert "&lt;b&gt;Šalikas&lt;/b&gt;" in html


def test_shop_order_confirmation(db, sent):
    NotificationService(db).send_shop_order_confirmation("order-1")

    message = sent[0]
    assert message["to"] == "ona@example.com"
    assert message["subject"] == "Užsakymas ORD-20260401-ABC123"
    assert "€36.0" in message["html"]
    assert "Klaipėdos g. 1, Gargždai, LT" in message["html"]
    assert "Šalikas &lt;vilnonis&gt;" in message["html"]


def test_shipping_confirmation_includes_tracking_number(db, sent):
    NotificationService(db).send_shop_order_shipping_confirmation("order-1", "LP123")

    assert sent[0]["subject"] == "Išsiųsta: ORD-20260401-ABC123"
    assert "LP123" in sent[0]["html"]


def test_missing_template_is_an_error(db, sent):
    db.tables["email_templates"] = []

    with pytest.raises(NotificationError):
        NotificationService(db).send_shop_order_confirmation("order-1")
    assert sent == []


def test_ticket_confirmation_attaches_pdf(db, sent, monkeypatch):
    async def fake_pdf(html):
        return b"%PDF-1.4"
    monkeypatch.setattr(notifications_module, "render_pdf", fake_pdf)

    asyncio.run(NotificationService(db).send_ticket_confirmation("ticket-1"))

    message = sent[0]
    assert message["to"] == "jonas@example.com"
    assert message["subject"] == "Jūsų bilietas: Banga - Žalgiris"
    assert "2099-05-01 18:00, Gargždų stadionas" in message["html"]
    assert message["attachments"][0]["filename"] == "ticket-ticket-1.pdf"
    assert bytes(message["attachments"][0]["content"]) == b"%PDF-1.4"
    assert db.rows("tickets")[0]["pdf_url"] == "https://storage.test/tickets/tickets/ticket-ticket-1.pdf"


def test_bulk_email_uses_bcc(db, sent):
    NotificationService(db).send_bulk_email(["a@example.com", "b@example.com"], "Naujienos", text_body="Labas")

    message = sent[0]
    assert message["bcc"] == ["a@example.com", "b@example.com"]
    assert message["text"] == "Labas"
    assert "html" not in message


def test_bulk_email_without_recipients_sends_nothing(db, sent):
    NotificationService(db).send_bulk_email([], "Naujienos", html_body="<p>Labas</p>")

    assert sent == []


def test_notify_quietly_swallows_failures():
    calls = []

    def broken(order_id):
        calls.append(order_id)
        raise NotificationError("Order not found")

    async def fine(order_id):
        calls.append(order_id)

    asyncio.run(notify_quietly(broken, "order-1"))
    asyncio.run(notify_quietly(fine, "order-2"))

    assert calls == ["order-1", "order-2"]
