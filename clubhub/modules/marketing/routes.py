from fastapi import APIRouter, Depends
from clubhub.database.supabase_client import get_supabase
from clubhub.modules.marketing.schemas import MarketingSendRequest, MarketingSendResponse, CampaignResponse
from clubhub.modules.marketing.service import MarketingService
from clubhub.core.dependencies import require_admin
from clubhub.core.notifications import NotificationService, get_notification_service
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/marketing", tags=["marketing"])


def get_marketing_service(
    supabase: Client = Depends(get_supabase),
    notifications: NotificationService = Depends(get_notification_service)
) -> MarketingService:
    return MarketingService(supabase, notifications)


@router.post("/send", response_model=MarketingSendResponse)
async def send_campaign(
    request: MarketingSendRequest,
    user_data: Dict = Depends(require_admin),
    service: MarketingService = Depends(get_marketing_service)
):
    """One bulk email to every recipient (BCC)"""
    service.send_campaign(request, user_data["id"])
    return {"success": True, "message": "Emails are being sent."}


@router.get("/campaigns", response_model=List[CampaignResponse])
async def list_campaigns(
    user_data: Dict = Depends(require_admin),
    service: MarketingService = Depends(get_marketing_service)
):
    return service.list_campaigns(user_data["id"])
