from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException, Request
from clubhub.database.supabase_client import get_service_supabase
from clubhub.modules.webhooks.schemas import WebhookAck
from clubhub.modules.webhooks.service import WebhookService
from clubhub.core.notifications import NotificationService, get_notification_service, notify_quietly
from clubhub.core.payments import PaymentGateway, WebhookVerificationError, get_payment_gateway
from supabase import Client
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/webhook", tags=["webhooks"])


@router.post("/stripe", response_model=WebhookAck)
async def stripe_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    supabase: Client = Depends(get_service_supabase),
    gateway: PaymentGateway = Depends(get_payment_gateway),
    notifications: NotificationService = Depends(get_notification_service)
):
    """Stripe events; processing errors are logged and still acknowledged"""
    signature = request.headers.get("stripe-signature")
    if not signature:
        logger.error("No Stripe signature found")
        raise HTTPException(status_code=400, detail="No signature")

    payload = await request.body()
    try:
        event = gateway.verify_webhook(payload, signature)
    except WebhookVerificationError as e:
        logger.error(f"Webhook signature verification failed: {e}")
        raise HTTPException(status_code=400, detail="Invalid signature")

    def schedule(send, *args):
        background_tasks.add_task(notify_quietly, send, *args)

    try:
        WebhookService(supabase, gateway, notifications, schedule).handle_event(event)
    except Exception as e:
        # A non-2xx answer makes Stripe retry the whole event
        logger.exception(f"Error processing webhook event {event.get('id')}: {e}")
    return {"received": True}
