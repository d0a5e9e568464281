from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from fastapi.responses import JSONResponse, Response
from fastapi.encoders import jsonable_encoder
from clubhub.database.supabase_client import get_supabase
from clubhub.modules.subscriptions.schemas import (
    SubscriptionCreate, SubscriptionPurchaseRequest, SubscriptionResponse,
    SubscriptionPurchaseResponse, SubscriptionVerifyResponse
)
from clubhub.modules.subscriptions.service import SubscriptionService
from clubhub.core.browser import PDFGenerationError, render_pdf
from clubhub.core.dependencies import require_admin
from clubhub.core.notifications import NotificationService, get_notification_service, notify_quietly
from clubhub.core.payments import PaymentGateway, get_payment_gateway
from clubhub.core.ticket_html import render_subscription_html
from supabase import Client
from typing import List, Dict
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/subscriptions", tags=["subscriptions"])


def get_subscription_service(supabase: Client = Depends(get_supabase)) -> SubscriptionService:
    return SubscriptionService(supabase)


@router.get("", response_model=List[SubscriptionResponse])
async def list_subscriptions(
    user_data: Dict = Depends(require_admin),
    service: SubscriptionService = Depends(get_subscription_service)
):
    return service.list_subscriptions()


@router.post("", response_model=SubscriptionResponse, status_code=201)
async def create_subscription(
    sub_data: SubscriptionCreate,
    background_tasks: BackgroundTasks,
    user_data: Dict = Depends(require_admin),
    service: SubscriptionService = Depends(get_subscription_service),
    notifications: NotificationService = Depends(get_notification_service)
):
    """Issue a season pass from the dashboard and email it"""
    subscription = service.create_subscription(sub_data, user_data["id"])
    background_tasks.add_task(notify_quietly, notifications.send_subscription_confirmation, subscription.id)
    return subscription


@router.delete("")
async def delete_all_subscriptions(
    user_data: Dict = Depends(require_admin),
    service: SubscriptionService = Depends(get_subscription_service)
):
    deleted = service.delete_all()
    return {"success": True, "deleted": deleted, "message": "All subscriptions deleted successfully."}


@router.post("/purchase", response_model=SubscriptionPurchaseResponse)
async def purchase_subscription(
    request: SubscriptionPurchaseRequest,
    service: SubscriptionService = Depends(get_subscription_service)
):
    subscription = service.purchase(request)
    return {"success": True, "subscription": subscription, "message": "Subscription purchased successfully"}


@router.get("/verify/{session_id}", response_model=SubscriptionVerifyResponse)
async def verify_subscription_session(
    session_id: str,
    service: SubscriptionService = Depends(get_subscription_service),
    gateway: PaymentGateway = Depends(get_payment_gateway)
):
    """Look up the pass created for a completed Stripe subscription checkout"""
    try:
        session = gateway.retrieve_checkout_session(session_id)
    except Exception as e:
        logger.error(f"Failed to retrieve checkout session {session_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to verify subscription session")
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")
    if session.get("mode") != "subscription" or not session.get("subscription"):
        raise HTTPException(status_code=400, detail="Invalid subscription session")

    subscription = service.find_by_stripe_subscription(session["subscription"])
    return SubscriptionVerifyResponse(
        id=subscription["id"],
        status=subscription.get("subscription_status"),
        customer_email=subscription.get("purchaser_email"),
        start_date=subscription.get("valid_from"),
        end_date=subscription.get("valid_to"),
        purchaser_name=subscription.get("purchaser_name"),
    )


@router.get("/{subscription_id}/validate")
async def validate_subscription(
    subscription_id: str,
    service: SubscriptionService = Depends(get_subscription_service)
):
    """Validity check; 410 Gone outside the validity window"""
    payload, active = service.check_validity(subscription_id)
    return JSONResponse(status_code=200 if active else 410, content=jsonable_encoder(payload))


@router.get("/{subscription_id}/pdf")
async def subscription_pdf(
    subscription_id: str,
    service: SubscriptionService = Depends(get_subscription_service)
):
    subscription = service.get_row(subscription_id)
    if not subscription:
        raise HTTPException(status_code=404, detail="Subscription not found")
    html = render_subscription_html(subscription, service.plan_title(subscription))
    try:
        pdf_bytes = await render_pdf(html)
    except PDFGenerationError as e:
        logger.error(f"PDF generation failed for subscription {subscription_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to generate subscription PDF")
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="subscription-{subscription_id}.pdf"'},
    )


@router.post("/{subscription_id}/resend")
async def resend_subscription(
    subscription_id: str,
    background_tasks: BackgroundTasks,
    user_data: Dict = Depends(require_admin),
    service: SubscriptionService = Depends(get_subscription_service),
    notifications: NotificationService = Depends(get_notification_service)
):
    service.require_resendable(subscription_id)
    background_tasks.add_task(notify_quietly, notifications.send_subscription_confirmation, subscription_id)
    return {"success": True, "message": "Email resent successfully."}


@router.delete("/{subscription_id}")
async def delete_subscription(
    subscription_id: str,
    user_data: Dict = Depends(require_admin),
    service: SubscriptionService = Depends(get_subscription_service)
):
    service.delete_subscription(subscription_id)
    return {"message": "Subscription deleted successfully"}
