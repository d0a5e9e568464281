from supabase import Client
from clubhub.modules.checkout.schemas import (
    TicketCheckoutRequest, ShopCheckoutRequest, SubscriptionCheckoutRequest
)
from clubhub.modules.coupons.service import check_redeemable, discount_amount
from clubhub.modules.tickets.service import TicketService
from clubhub.config import settings
from clubhub.core.payments import PaymentGateway
from clubhub.database.supabase_client import row_or_none
from typing import Any, Dict, List
from fastapi import HTTPException
import json
import logging

logger = logging.getLogger(__name__)

SESSION_PLACEHOLDER = "{CHECKOUT_SESSION_ID}"


class CheckoutService:
    def __init__(self, supabase: Client, gateway: PaymentGateway):
        self.supabase = supabase
        self.gateway = gateway
        self.tickets = TicketService(supabase)

    def _create_session(self, **kwargs) -> Dict[str, Any]:
        try:
            session = self.gateway.create_checkout_session(**kwargs)
        except Exception as e:
            logger.error(f"Stripe checkout session error: {e}")
            raise HTTPException(status_code=500, detail="Failed to create Stripe session")
        return {"url": session["url"], "session_id": session["id"]}

    def ticket_checkout(self, request: TicketCheckoutRequest) -> Dict[str, Any]:
        """Checkout session for one or more tickets of a single tier"""
        if not (request.event_id and request.tier_id and request.purchaser_name and request.purchaser_email):
            raise HTTPException(status_code=400, detail="Missing required fields")
        tier = self.tickets.check_tier_available(request.tier_id, request.quantity)
        event = row_or_none(
            self.supabase.table("events").select("*").eq("id", request.event_id).maybe_single().execute()
        )
        if not event:
            raise HTTPException(status_code=404, detail="Event not found")

        line_item = self.gateway.line_item(
            name=f"{event.get('title')} - {tier.get('name')}",
            unit_price=float(tier.get("price") or 0),
            quantity=request.quantity,
            description=event.get("location"),
        )
        return self._create_session(
            line_items=[line_item],
            mode="payment",
            success_url=f"{settings.app_url}/checkout/success?session_id={SESSION_PLACEHOLDER}",
            cancel_url=f"{settings.app_url}/events/{request.event_id}",
            customer_email=request.purchaser_email,
            metadata={
                "eventId": request.event_id,
                "tierId": request.tier_id,
                "quantity": str(request.quantity),
                "purchaserName": request.purchaser_name,
                "purchaserSurname": request.purchaser_surname or "",
                "purchaserEmail": request.purchaser_email,
            },
        )

    def session_tickets(self, session_id: str) -> List[Dict[str, Any]]:
        """Tickets issued by the webhook for a completed ticket checkout"""
        try:
            session = self.gateway.retrieve_checkout_session(session_id)
        except Exception as e:
            logger.error(f"Failed to retrieve checkout session {session_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to fetch tickets")

        metadata = session.get("metadata") or {}
        purchaser_email = metadata.get("purchaserEmail") or session.get("customer_email")
        event_id = metadata.get("eventId")
        tier_id = metadata.get("tierId")
        quantity = int(metadata.get("quantity") or 1)
        if not (purchaser_email and event_id and tier_id):
            raise HTTPException(status_code=400, detail="Session missing required metadata")

        try:
            tickets = self.tickets.tickets_for_session(session_id)
            if len(tickets) < quantity:
                known = {t["id"] for t in tickets}
                recent = self.tickets.find_recent_purchase(event_id, tier_id, purchaser_email, quantity)
                tickets += [t for t in recent if t["id"] not in known and not t.get("is_validated")]
            return [{"id": t["id"], "qr_code_url": t.get("qr_code_url")} for t in tickets[:quantity]]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def _coupon_discount(self, coupon_id: str, order_amount: float) -> float:
        coupon = row_or_none(
            self.supabase.table("coupon_codes").select("*").eq("id", coupon_id).maybe_single().execute()
        )
        if not coupon:
            raise HTTPException(status_code=404, detail="Invalid coupon code")
        check_redeemable(coupon, order_amount)
        return discount_amount(coupon, order_amount)

    def shop_checkout(self, request: ShopCheckoutRequest) -> Dict[str, Any]:
        """Checkout session for a shop cart, optionally with a coupon"""
        if not request.cart_items or not request.purchaser_email or not request.purchaser_name:
            raise HTTPException(status_code=400, detail="Missing required fields")

        line_items = [
            self.gateway.line_item(
                name=item.name,
                unit_price=item.price,
                quantity=item.quantity,
                description=item.category,
                images=[item.image] if item.image else None,
            )
            for item in request.cart_items
        ]
        subtotal = sum(item.price * item.quantity for item in request.cart_items)
        discount = self._coupon_discount(request.coupon_id, subtotal) if request.coupon_id else 0

        logger.info(
            f"Creating shop checkout session for {request.purchaser_email} with {len(line_items)} items"
        )
        cart = [
            {
                "id": item.id,
                "variantId": item.variant_id,
                "name": item.name,
                "price": item.price,
                "quantity": item.quantity,
                "color": item.color,
            }
            for item in request.cart_items
        ]
        return self._create_session(
            line_items=line_items,
            mode="payment",
            success_url=f"{settings.app_url}/checkout/shop-success?session_id={SESSION_PLACEHOLDER}",
            cancel_url=f"{settings.app_url}/shop",
            customer_email=request.purchaser_email,
            discount_amount=discount,
            metadata={
                "purchaseType": "shop",
                "purchaserName": request.purchaser_name,
                "purchaserEmail": request.purchaser_email,
                "purchaserPhone": request.purchaser_phone or "",
                "deliveryAddress": json.dumps(request.delivery_address or {}),
                "couponId": request.coupon_id or "",
                "cart": json.dumps(cart),
            },
        )

    def subscription_checkout(self, request: SubscriptionCheckoutRequest) -> Dict[str, Any]:
        """Recurring checkout billed every duration_days"""
        if not request.subscription_type_id:
            raise HTTPException(status_code=400, detail="Missing subscription_type_id")
        plan = row_or_none(
            self.supabase.table("subscription_types")
            .select("*")
            .eq("id", request.subscription_type_id)
            .maybe_single()
            .execute()
        )
        if not plan:
            raise HTTPException(status_code=404, detail="Subscription plan not found")

        line_item = self.gateway.line_item(
            name=plan["title"],
            unit_price=float(plan.get("price") or 0),
            quantity=1,
            description=plan.get("description"),
            recurring={"interval": "day", "interval_count": int(plan["duration_days"])},
        )
        return self._create_session(
            line_items=[line_item],
            mode="subscription",
            success_url=f"{settings.app_url}/checkout/subscription/success?session_id={SESSION_PLACEHOLDER}",
            cancel_url=f"{settings.app_url}/checkout/subscription?canceled=1",
            customer_email=request.customer_email,
            metadata={"subscriptionTypeId": request.subscription_type_id},
        )

    def payment_intent(self, amount, email) -> str:
        if not amount or not email:
            raise HTTPException(status_code=400, detail="Missing amount or email")
        try:
            return self.gateway.create_payment_intent(amount, email)
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
