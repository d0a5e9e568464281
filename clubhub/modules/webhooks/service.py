from supabase import Client
from clubhub.modules.coupons.service import CouponService, discount_amount
from clubhub.modules.shop.service import ShopService
from clubhub.modules.subscriptions.service import SubscriptionService
from clubhub.modules.tickets.service import TicketService
from clubhub.core.dates import utcnow
from clubhub.core.notifications import NotificationService
from clubhub.core.payments import PaymentGateway
from clubhub.database.supabase_client import row_or_none, rows
from typing import Any, Callable, Dict, List, Optional
from datetime import datetime, timezone
import json
import logging

logger = logging.getLogger(__name__)

WEBHOOK_ORDER_CREATOR = "stripe"


def timestamp_to_iso(seconds: Optional[int]) -> Optional[str]:
    if seconds is None:
        return None
    return datetime.fromtimestamp(int(seconds), tz=timezone.utc).isoformat()


def subscription_period(subscription: Dict[str, Any], key: str) -> Optional[int]:
    """current_period_start/end; newer API versions only carry it on the subscription item"""
    value = subscription.get(key)
    if value is None:
        items = (subscription.get("items") or {}).get("data") or []
        if items:
            value = items[0].get(key)
    return value


def cart_from_metadata(raw: Optional[str]) -> List[Dict[str, Any]]:
    try:
        cart = json.loads(raw or "[]")
    except ValueError:
        logger.error("Shop checkout carried an unreadable cart")
        return []
    return [
        {
            "product_id": item.get("id"),
            "variant_id": item.get("variantId"),
            "name": item.get("name"),
            "price": float(item.get("price") or 0),
            "quantity": int(item.get("quantity") or 1),
            "variant_attributes": {"color": item["color"]} if item.get("color") else None,
        }
        for item in cart
    ]


class WebhookService:
    """Turns verified Stripe events into tickets, shop orders and season passes"""

    def __init__(self, supabase: Client, gateway: PaymentGateway,
                 notifications: NotificationService, schedule: Callable[..., Any]):
        self.supabase = supabase
        self.gateway = gateway
        self.notifications = notifications
        self.schedule = schedule
        self.tickets = TicketService(supabase)
        self.subscriptions = SubscriptionService(supabase)
        self.shop = ShopService(supabase)
        self.coupons = CouponService(supabase)

    def handle_event(self, event: Dict[str, Any]) -> None:
        event_type = event.get("type")
        obj = (event.get("data") or {}).get("object") or {}
        logger.info(f"Stripe webhook received: {event_type}")

        if event_type == "checkout.session.completed":
            self.handle_checkout_completed(obj)
        elif event_type == "customer.subscription.updated":
            self.handle_subscription_updated(obj)
        elif event_type == "customer.subscription.deleted":
            self.handle_subscription_deleted(obj)
        else:
            logger.info(f"Unhandled Stripe event type: {event_type}")

    def handle_checkout_completed(self, session: Dict[str, Any]) -> None:
        metadata = session.get("metadata") or {}
        mode = session.get("mode")
        if mode == "payment" and metadata.get("purchaseType") == "shop":
            self.create_shop_order(session, metadata)
        elif mode == "payment" and metadata.get("eventId") and metadata.get("tierId") and metadata.get("quantity"):
            self.issue_tickets(session, metadata)
        elif mode == "subscription" and session.get("subscription"):
            self.create_subscription(session, metadata)
        else:
            logger.warning(f"Checkout session {session.get('id')} has no recognised purchase metadata")

    def issue_tickets(self, session: Dict[str, Any], metadata: Dict[str, Any]) -> List[str]:
        session_id = session["id"]
        if self.tickets.tickets_for_session(session_id):
            logger.info(f"Tickets for session {session_id} already issued")
            return []

        quantity = int(metadata["quantity"])
        ticket_ids = []
        for index in range(quantity):
            try:
                ticket = self.tickets.issue_ticket(
                    metadata["eventId"],
                    metadata["tierId"],
                    metadata.get("purchaserName"),
                    metadata.get("purchaserEmail"),
                    purchaser_surname=metadata.get("purchaserSurname"),
                    stripe_session_id=session_id,
                )
                ticket_ids.append(ticket["id"])
            except Exception as e:
                logger.error(f"Failed to create ticket #{index + 1} for event {metadata['eventId']}: {e}")

        for ticket_id in ticket_ids:
            self.schedule(self.notifications.send_ticket_confirmation, ticket_id)
        logger.info(f"Issued {len(ticket_ids)}/{quantity} tickets for session {session_id}")
        return ticket_ids

    def create_shop_order(self, session: Dict[str, Any], metadata: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        session_id = session["id"]
        existing = rows(
            self.supabase.table("shop_orders").select("id").eq("stripe_session_id", session_id).execute()
        )
        if existing:
            logger.info(f"Shop order for session {session_id} already exists")
            return None

        cart_items = cart_from_metadata(metadata.get("cart"))
        if not cart_items:
            logger.error(f"Shop checkout {session_id} has an empty cart")
            return None

        coupon = None
        coupon_discount = 0.0
        if metadata.get("couponId"):
            coupon = row_or_none(
                self.supabase.table("coupon_codes").select("*").eq("id", metadata["couponId"]).maybe_single().execute()
            )
            if coupon:
                subtotal = sum(item["price"] * item["quantity"] for item in cart_items)
                coupon_discount = discount_amount(coupon, subtotal)

        try:
            delivery_address = json.loads(metadata.get("deliveryAddress") or "{}")
        except ValueError:
            delivery_address = {}
        customer = session.get("customer_details") or {}
        order = self.shop.insert_order(
            {
                "customer_name": metadata.get("purchaserName") or customer.get("name"),
                "customer_email": metadata.get("purchaserEmail") or customer.get("email"),
                "customer_phone": metadata.get("purchaserPhone") or customer.get("phone"),
                "delivery_address": delivery_address,
                "coupon_code": coupon.get("code") if coupon else None,
                "coupon_discount": coupon_discount,
                "stripe_session_id": session_id,
            },
            cart_items,
            created_by=WEBHOOK_ORDER_CREATOR,
            status="paid",
        )
        if coupon:
            try:
                self.coupons.redeem(coupon_id=coupon["id"])
            except Exception as e:
                logger.error(f"Failed to redeem coupon {coupon['id']}: {e}")

        self.schedule(self.notifications.send_shop_order_confirmation, order["id"])
        self.schedule(self.notifications.send_shop_order_admin_notification, order["id"])
        return order

    def create_subscription(self, session: Dict[str, Any], metadata: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        stripe_subscription_id = str(session["subscription"])
        existing = row_or_none(
            self.supabase.table("subscriptions")
            .select("id")
            .eq("stripe_subscription_id", stripe_subscription_id)
            .maybe_single()
            .execute()
        )
        if existing:
            logger.info(f"Subscription {stripe_subscription_id} already recorded")
            return None

        stripe_subscription = self.gateway.retrieve_subscription(stripe_subscription_id)
        customer = session.get("customer_details") or {}
        subscription = self.subscriptions.issue_subscription({
            "subscription_type_id": metadata.get("subscriptionTypeId") or None,
            "purchaser_name": customer.get("name"),
            "purchaser_surname": None,
            "purchaser_email": customer.get("email"),
            "valid_from": timestamp_to_iso(subscription_period(stripe_subscription, "current_period_start")),
            "valid_to": timestamp_to_iso(subscription_period(stripe_subscription, "current_period_end")),
            "owner_id": customer.get("email"),
            "stripe_subscription_id": stripe_subscription_id,
            "subscription_status": stripe_subscription.get("status"),
        })
        self.schedule(self.notifications.send_subscription_confirmation, subscription["id"])
        logger.info(f"Subscription {subscription['id']} created for {customer.get('email')}")
        return subscription

    def handle_subscription_updated(self, stripe_subscription: Dict[str, Any]) -> None:
        update_data = {"subscription_status": stripe_subscription.get("status")}
        period_end = subscription_period(stripe_subscription, "current_period_end")
        if period_end is not None:
            update_data["valid_to"] = timestamp_to_iso(period_end)
        self.supabase.table("subscriptions")\
            .update(update_data)\
            .eq("stripe_subscription_id", stripe_subscription["id"])\
            .execute()
        logger.info(f"Subscription {stripe_subscription['id']} updated to {update_data['subscription_status']}")

    def handle_subscription_deleted(self, stripe_subscription: Dict[str, Any]) -> None:
        self.supabase.table("subscriptions")\
            .update({"subscription_status": "cancelled", "valid_to": utcnow().isoformat()})\
            .eq("stripe_subscription_id", stripe_subscription["id"])\
            .execute()
        logger.info(f"Subscription {stripe_subscription['id']} cancelled")
