from supabase import Client
from clubhub.modules.marketing.schemas import MarketingSendRequest, CampaignResponse
from clubhub.core.notifications import NotificationService
from clubhub.database.supabase_client import rows
from typing import List
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class MarketingService:
    def __init__(self, supabase: Client, notifications: NotificationService):
        self.supabase = supabase
        self.notifications = notifications

    def send_campaign(self, request: MarketingSendRequest, owner_id: str) -> None:
        """Send first, then record; a failed record does not fail the send"""
        if not request.recipients or not request.subject or not (request.html_body or request.text_body):
            raise HTTPException(status_code=400, detail="Missing required fields")

        recipients = [str(r) for r in request.recipients]
        try:
            self.notifications.send_bulk_email(recipients, request.subject, request.html_body, request.text_body)
        except Exception as e:
            logger.error(f"Failed to send marketing email: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to send emails: {e}")

        try:
            self.supabase.table("marketing_campaigns").insert({
                "subject": request.subject,
                "body_html": request.html_body,
                "body_text": request.text_body,
                "recipient_count": len(recipients),
                "owner_id": owner_id,
            }).execute()
        except Exception as e:
            logger.error(f"Failed to save marketing campaign: {e}")

    def list_campaigns(self, owner_id: str) -> List[CampaignResponse]:
        try:
            result = self.supabase.table("marketing_campaigns")\
                .select("*")\
                .eq("owner_id", owner_id)\
                .order("created_at", desc=True)\
                .execute()
            return [CampaignResponse(**row) for row in rows(result)]
        except Exception as e:
            raise HTTPException(status_code=500, detail=f"Failed to fetch campaigns: {e}")
