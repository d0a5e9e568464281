"""Thin wrapper over the Stripe SDK: checkout sessions, subscriptions, payment intents, webhooks."""

import json
import logging
from typing import Any, Dict, List, Optional

import stripe

from clubhub.config import settings

logger = logging.getLogger(__name__)


class WebhookVerificationError(ValueError):
    pass


def to_cents(amount: float) -> int:
    return int(round(float(amount) * 100))


class PaymentGateway:
    def __init__(self, api_key: Optional[str] = None, webhook_secret: Optional[str] = None):
        self.api_key = api_key or settings.stripe_secret_key
        self.webhook_secret = webhook_secret or settings.stripe_webhook_secret
        self.currency = settings.currency

    def line_item(self, name: str, unit_price: float, quantity: int,
                  description: Optional[str] = None, images: Optional[List[str]] = None,
                  recurring: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        product_data: Dict[str, Any] = {"name": name}
        if description:
            product_data["description"] = description
        if images:
            product_data["images"] = images
        price_data: Dict[str, Any] = {
            "currency": self.currency,
            "product_data": product_data,
            "unit_amount": to_cents(unit_price),
        }
        if recurring:
            price_data["recurring"] = recurring
        return {"price_data": price_data, "quantity": quantity}

    def create_checkout_session(self, line_items: List[Dict[str, Any]], mode: str,
                                success_url: str, cancel_url: str,
                                metadata: Dict[str, str],
                                customer_email: Optional[str] = None,
                                discount_amount: Optional[float] = None) -> Dict[str, Any]:
        params: Dict[str, Any] = {
            "api_key": self.api_key,
            "payment_method_types": ["card"],
            "line_items": line_items,
            "mode": mode,
            "success_url": success_url,
            "cancel_url": cancel_url,
            "metadata": metadata,
        }
        if customer_email:
            params["customer_email"] = customer_email
        if discount_amount:
            coupon = stripe.Coupon.create(
                api_key=self.api_key,
                amount_off=to_cents(discount_amount),
                currency=self.currency,
                duration="once",
            )
            params["discounts"] = [{"coupon": coupon["id"]}]
        session = stripe.checkout.Session.create(**params)
        logger.info("Created Stripe checkout session %s (mode=%s)", session["id"], mode)
        return {"id": session["id"], "url": session["url"]}

    def retrieve_checkout_session(self, session_id: str) -> Dict[str, Any]:
        return stripe.checkout.Session.retrieve(session_id, api_key=self.api_key)

    def retrieve_subscription(self, subscription_id: str) -> Dict[str, Any]:
        return stripe.Subscription.retrieve(subscription_id, api_key=self.api_key)

    def create_payment_intent(self, amount: float, email: Optional[str] = None) -> str:
        intent = stripe.PaymentIntent.create(
            api_key=self.api_key,
            amount=to_cents(amount),
            currency=self.currency,
            receipt_email=email,
            automatic_payment_methods={"enabled": True},
        )
        return intent["client_secret"]

    def verify_webhook(self, payload: bytes, signature: str) -> Dict[str, Any]:
        """Check the stripe-signature header and return the event as plain dicts"""
        if not self.webhook_secret:
            raise WebhookVerificationError("Webhook secret is not configured")
        text = payload.decode("utf-8")
        try:
            stripe.WebhookSignature.verify_header(text, signature, self.webhook_secret)
        except stripe.SignatureVerificationError as e:
            raise WebhookVerificationError(str(e)) from e
        try:
            return json.loads(text)
        except ValueError as e:
            raise WebhookVerificationError("Invalid payload") from e


def get_payment_gateway() -> PaymentGateway:
    return PaymentGateway()
