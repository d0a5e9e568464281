from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional


class TicketCheckoutRequest(BaseModel):
    event_id: Optional[str] = None
    tier_id: Optional[str] = None
    quantity: int = Field(default=1, ge=1)
    purchaser_name: Optional[str] = None
    purchaser_surname: Optional[str] = None
    purchaser_email: Optional[str] = None


class ShopCartItem(BaseModel):
    id: str
    variant_id: Optional[str] = None
    name: str
    price: float = Field(ge=0)
    quantity: int = Field(gt=0)
    category: Optional[str] = None
    image: Optional[str] = None
    color: Optional[str] = None


class ShopCheckoutRequest(BaseModel):
    cart_items: List[ShopCartItem] = []
    purchaser_email: Optional[str] = None
    purchaser_name: Optional[str] = None
    purchaser_phone: Optional[str] = None
    delivery_address: Optional[Dict[str, Any]] = None
    coupon_id: Optional[str] = None


class SubscriptionCheckoutRequest(BaseModel):
    subscription_type_id: Optional[str] = None
    customer_email: Optional[str] = None


class PaymentIntentRequest(BaseModel):
    amount: Optional[float] = None
    email: Optional[str] = None


class CheckoutSessionResponse(BaseModel):
    url: Optional[str] = None
    session_id: str


class IssuedTicket(BaseModel):
    id: str
    qr_code_url: Optional[str] = None


class SessionTicketsResponse(BaseModel):
    tickets: List[IssuedTicket]


class PaymentIntentResponse(BaseModel):
    client_secret: str
