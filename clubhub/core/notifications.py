"""
Transactional and bulk email through Resend.

Bodies come from the email_templates table (admin-editable); each message type
looks its template up by name and fills ``{{placeholder}}`` fields. Ticket and
season-pass emails carry the printable PDF as an attachment.
"""

import inspect
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

import resend
from jinja2 import Environment
from supabase import Client

from clubhub.config import settings
from clubhub.core.browser import render_pdf
from clubhub.core.storage import StorageService
from clubhub.core.ticket_html import format_date_lt, render_subscription_html, render_ticket_html
from clubhub.database.supabase_client import get_service_supabase, row_or_none, rows

logger = logging.getLogger(__name__)

TICKET_CONFIRMATION = "ticket_confirmation"
SUBSCRIPTION_CONFIRMATION = "subscription_confirmation"
SHOP_ORDER_CONFIRMATION = "shop_order_confirmation"
SHOP_ORDER_ADMIN_NOTIFICATION = "shop_order_admin_notification"
SHOP_ORDER_SHIPPED = "shop_order_shipped"

_items_env = Environment(autoescape=True)
ORDER_ITEMS_TEMPLATE = _items_env.from_string(
    "{% for item in items %}"
    "<tr>"
    '<td style="padding: 10px; border-bottom: 1px solid #eee;">{{ item.product_name }}</td>'
    '<td style="padding: 10px; border-bottom: 1px solid #eee;">{{ item.quantity }}</td>'
    '<td style="padding: 10px; border-bottom: 1px solid #eee;">€{{ item.unit_price }}</td>'
    '<td style="padding: 10px; border-bottom: 1px solid #eee;">€{{ item.total_price }}</td>'
    "</tr>"
    "{% endfor %}"
)


class NotificationError(RuntimeError):
    pass


def fill_placeholders(text: str, values: Dict[str, Any]) -> str:
    for key, value in values.items():
        text = text.replace("{{" + key + "}}", "" if value is None else str(value))
    return text


def format_delivery_address(address: Optional[Dict[str, Any]]) -> str:
    if not address:
        return "N/A"
    parts = [address.get(key) for key in ("street", "city", "postalCode", "country")]
    return ", ".join(str(p) for p in parts if p) or "N/A"


def render_order_items(items: Iterable[Dict[str, Any]]) -> str:
    return ORDER_ITEMS_TEMPLATE.render(items=list(items))


class NotificationService:
    def __init__(self, supabase: Client):
        self.supabase = supabase
        resend.api_key = settings.resend_api_key

    # Lookups

    def get_template(self, name: str) -> Dict[str, Any]:
        result = self.supabase.table("email_templates")\
            .select("*")\
            .eq("name", name)\
            .maybe_single()\
            .execute()
        template = row_or_none(result)
        if not template:
            raise NotificationError(f"Email template '{name}' not found")
        return template

    def _get_order(self, order_id: str) -> Dict[str, Any]:
        order = row_or_none(
            self.supabase.table("shop_orders").select("*").eq("id", order_id).maybe_single().execute()
        )
        if not order:
            raise NotificationError("Order not found")
        return order

    def _get_order_items(self, order_id: str) -> List[Dict[str, Any]]:
        return rows(self.supabase.table("shop_order_items").select("*").eq("order_id", order_id).execute())

    def _send(self, to, subject: str, html: Optional[str] = None, text: Optional[str] = None,
              attachments: Optional[List[Dict[str, Any]]] = None, bcc: Optional[List[str]] = None) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            "from": settings.email_from,
            "to": to,
            "subject": subject,
        }
        if html:
            params["html"] = html
        elif text:
            params["text"] = text
        if bcc:
            params["bcc"] = bcc
        if attachments:
            params["attachments"] = attachments
        return resend.Emails.send(params)

    def _store_pdf(self, path: str, pdf_bytes: bytes) -> Optional[str]:
        try:
            return StorageService(self.supabase).upload(pdf_bytes, path, "application/pdf")
        except Exception as e:
            logger.error(f"Failed to store {path}: {e}")
            return None

    # Documents

    async def ticket_pdf(self, details: Dict[str, Any]) -> bytes:
        html = render_ticket_html(details, details.get("event") or {}, details.get("pricing_tier"))
        return await render_pdf(html)

    async def subscription_pdf(self, subscription: Dict[str, Any], title: Optional[str] = None) -> bytes:
        return await render_pdf(render_subscription_html(subscription, title))

    # Messages

    async def send_ticket_confirmation(self, ticket_id: str) -> None:
        from clubhub.modules.tickets.service import TicketService

        details = TicketService(self.supabase).fetch_ticket_details(ticket_id)
        if not details or not details.get("purchaser_email"):
            raise NotificationError("Ticket not found or is missing an email address")
        template = self.get_template(TICKET_CONFIRMATION)
        event = details.get("event") or {}

        pdf_bytes = await self.ticket_pdf(details)
        file_name = f"ticket-{ticket_id}.pdf"
        pdf_url = self._store_pdf(f"tickets/{file_name}", pdf_bytes)
        if pdf_url:
            self.supabase.table("tickets").update({"pdf_url": pdf_url}).eq("id", ticket_id).execute()

        values = {
            "purchaser_name": details.get("purchaser_name"),
            "event_title": event.get("title"),
            "event_date": format_date_lt(event.get("date")),
            "event_time": event.get("time"),
            "event_location": event.get("location"),
        }
        self._send(
            details["purchaser_email"],
            fill_placeholders(template["subject"], values),
            html=fill_placeholders(template["body_html"], values),
            attachments=[{"filename": file_name, "content": list(pdf_bytes)}],
        )
        logger.info(f"Ticket confirmation sent for {ticket_id}")

    async def send_subscription_confirmation(self, subscription_id: str) -> None:
        subscription = row_or_none(
            self.supabase.table("subscriptions").select("*").eq("id", subscription_id).maybe_single().execute()
        )
        if not subscription:
            raise NotificationError("Subscription not found")
        if not subscription.get("purchaser_email"):
            raise NotificationError("Subscription is missing purchaser email address")
        template = self.get_template(SUBSCRIPTION_CONFIRMATION)

        title = None
        if subscription.get("subscription_type_id"):
            plan = row_or_none(
                self.supabase.table("subscription_types").select("title")
                .eq("id", subscription["subscription_type_id"]).maybe_single().execute()
            )
            title = plan.get("title") if plan else None

        pdf_bytes = await self.subscription_pdf(subscription, title)
        file_name = f"subscription-{subscription_id}.pdf"
        validity_period = (
            f"{format_date_lt(subscription.get('valid_from'))} - {format_date_lt(subscription.get('valid_to'))}"
        )
        values = {
            "purchaser_name": subscription.get("purchaser_name"),
            "validity_period": validity_period,
        }
        self._send(
            subscription["purchaser_email"],
            fill_placeholders(template["subject"], values),
            html=fill_placeholders(template["body_html"], values),
            attachments=[{"filename": file_name, "content": list(pdf_bytes)}],
        )
        logger.info(f"Subscription confirmation sent for {subscription_id}")

    def _order_values(self, order: Dict[str, Any]) -> Dict[str, Any]:
        return {
            "customer_name": order.get("customer_name"),
            "customer_email": order.get("customer_email"),
            "customer_phone": order.get("customer_phone") or "N/A",
            "order_number": order.get("order_number"),
            "total_amount": f"€{order.get('total_amount')}",
            "order_items": render_order_items(self._get_order_items(order["id"])),
            "delivery_address": format_delivery_address(order.get("delivery_address")),
        }

    def send_shop_order_confirmation(self, order_id: str) -> None:
        order = self._get_order(order_id)
        if not order.get("customer_email"):
            raise NotificationError("Order is missing customer email address")
        template = self.get_template(SHOP_ORDER_CONFIRMATION)
        values = self._order_values(order)
        self._send(
            order["customer_email"],
            fill_placeholders(template["subject"], values),
            html=fill_placeholders(template["body_html"], values),
        )

    def send_shop_order_admin_notification(self, order_id: str) -> None:
        order = self._get_order(order_id)
        template = self.get_template(SHOP_ORDER_ADMIN_NOTIFICATION)
        values = self._order_values(order)
        self._send(
            settings.admin_email,
            fill_placeholders(template["subject"], values),
            html=fill_placeholders(template["body_html"], values),
        )

    def send_shop_order_shipping_confirmation(self, order_id: str, tracking_number: str) -> None:
        order = self._get_order(order_id)
        if not order.get("customer_email"):
            raise NotificationError("Order is missing customer email address")
        template = self.get_template(SHOP_ORDER_SHIPPED)
        values = {**self._order_values(order), "tracking_number": tracking_number}
        self._send(
            order["customer_email"],
            fill_placeholders(template["subject"], values),
            html=fill_placeholders(template["body_html"], values),
        )

    def send_bulk_email(self, to: List[str], subject: str,
                        html_body: Optional[str] = None, text_body: Optional[str] = None) -> None:
        """One message, recipients in BCC"""
        if not to:
            return
        self._send(settings.bulk_email_to, subject, html=html_body, text=text_body, bcc=to)
        logger.info(f"Bulk email sent to {len(to)} recipients")


def get_notification_service() -> NotificationService:
    return NotificationService(get_service_supabase())


async def notify_quietly(send: Callable[..., Any], *args: Any) -> None:
    """Run a notification from a background task; failures are only logged"""
    try:
        result = send(*args)
        if inspect.isawaitable(result):
            await result
    except Exception as e:
        logger.error(f"Notification {getattr(send, '__name__', send)} failed: {e}")
