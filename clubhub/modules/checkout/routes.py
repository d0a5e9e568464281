from fastapi import APIRouter, Depends
from clubhub.database.supabase_client import get_supabase
from clubhub.modules.checkout.schemas import (
    TicketCheckoutRequest, ShopCheckoutRequest, SubscriptionCheckoutRequest, PaymentIntentRequest,
    CheckoutSessionResponse, SessionTicketsResponse, PaymentIntentResponse
)
from clubhub.modules.checkout.service import CheckoutService
from clubhub.core.payments import PaymentGateway, get_payment_gateway
from supabase import Client

router = APIRouter(prefix="/checkout", tags=["checkout"])


def get_checkout_service(
    supabase: Client = Depends(get_supabase),
    gateway: PaymentGateway = Depends(get_payment_gateway)
) -> CheckoutService:
    return CheckoutService(supabase, gateway)


@router.post("/tickets", response_model=CheckoutSessionResponse)
async def ticket_checkout(
    request: TicketCheckoutRequest,
    service: CheckoutService = Depends(get_checkout_service)
):
    return service.ticket_checkout(request)


@router.get("/tickets", response_model=SessionTicketsResponse)
async def session_tickets(session_id: str, service: CheckoutService = Depends(get_checkout_service)):
    """Tickets bought in a checkout session, for the success page"""
    return {"tickets": service.session_tickets(session_id)}


@router.post("/shop", response_model=CheckoutSessionResponse)
async def shop_checkout(
    request: ShopCheckoutRequest,
    service: CheckoutService = Depends(get_checkout_service)
):
    return service.shop_checkout(request)


@router.post("/subscription", response_model=CheckoutSessionResponse)
async def subscription_checkout(
    request: SubscriptionCheckoutRequest,
    service: CheckoutService = Depends(get_checkout_service)
):
    return service.subscription_checkout(request)


@router.post("/payment-intent", response_model=PaymentIntentResponse)
async def create_payment_intent(
    request: PaymentIntentRequest,
    service: CheckoutService = Depends(get_checkout_service)
):
    return {"client_secret": service.payment_intent(request.amount, request.email)}
