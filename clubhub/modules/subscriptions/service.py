from supabase import Client
from clubhub.modules.subscriptions.schemas import (
    SubscriptionCreate, SubscriptionPurchaseRequest, SubscriptionResponse
)
from clubhub.core.dates import parse_timestamp, utcnow
from clubhub.core.qr_codes import qr_code_service
from clubhub.database.supabase_client import row_or_none, rows
from typing import Any, Dict, List, Optional, Tuple
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)

# Matches no real row; PostgREST refuses an unfiltered delete
NIL_UUID = "00000000-0000-0000-0000-000000000000"


class SubscriptionService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_row(self, subscription_id: str) -> Optional[Dict[str, Any]]:
        return row_or_none(
            self.supabase.table("subscriptions").select("*").eq("id", subscription_id).maybe_single().execute()
        )

    def list_subscriptions(self) -> List[SubscriptionResponse]:
        try:
            result = self.supabase.table("subscriptions").select("*").order("created_at", desc=True).execute()
            return [SubscriptionResponse(**row) for row in rows(result)]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def issue_subscription(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a subscription row and attach its signed QR code"""
        subscription = row_or_none(self.supabase.table("subscriptions").insert(data).execute())
        if not subscription:
            raise HTTPException(status_code=500, detail="Failed to create subscription")
        try:
            qr_code_url = qr_code_service.subscription_qr_code(subscription)
            self.supabase.table("subscriptions")\
                .update({"qr_code_url": qr_code_url})\
                .eq("id", subscription["id"])\
                .execute()
            subscription["qr_code_url"] = qr_code_url
        except Exception as e:
            logger.error(f"Failed to generate QR code for subscription {subscription['id']}: {e}")
        return subscription

    def create_subscription(self, sub_data: SubscriptionCreate, owner_id: str) -> SubscriptionResponse:
        try:
            data = sub_data.model_dump(mode="json")
            data["purchaser_surname"] = data.get("purchaser_surname") or ""
            data["owner_id"] = owner_id
            return SubscriptionResponse(**self.issue_subscription(data))
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def purchase(self, request: SubscriptionPurchaseRequest) -> SubscriptionResponse:
        """Public purchase of a pass with explicit validity dates"""
        if not (request.subscription_type_id and request.purchaser_name and request.purchaser_email
                and request.valid_from and request.valid_to):
            raise HTTPException(status_code=400, detail="Missing required fields")
        try:
            data = request.model_dump(mode="json")
            data["purchaser_surname"] = data.get("purchaser_surname") or ""
            data["owner_id"] = "system"
            return SubscriptionResponse(**self.issue_subscription(data))
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_subscription(self, subscription_id: str) -> None:
        try:
            result = self.supabase.table("subscriptions").delete().eq("id", subscription_id).execute()
            if not rows(result):
                raise HTTPException(status_code=404, detail="Subscription not found or could not be deleted")
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_all(self) -> int:
        try:
            result = self.supabase.table("subscriptions").delete().neq("id", NIL_UUID).execute()
            deleted = len(rows(result))
            logger.warning(f"Deleted all subscriptions ({deleted} rows)")
            return deleted
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def require_resendable(self, subscription_id: str) -> Dict[str, Any]:
        subscription = self.get_row(subscription_id)
        if not subscription or not subscription.get("purchaser_email"):
            raise HTTPException(status_code=404, detail="Subscription not found or missing email")
        return subscription

    def find_by_stripe_subscription(self, stripe_subscription_id: str) -> Dict[str, Any]:
        subscription = row_or_none(
            self.supabase.table("subscriptions")
            .select("*")
            .eq("stripe_subscription_id", stripe_subscription_id)
            .maybe_single()
            .execute()
        )
        if not subscription:
            raise HTTPException(status_code=404, detail="Subscription not found in database")
        return subscription

    def check_validity(self, subscription_id: str) -> Tuple[Dict[str, Any], bool]:
        """The row with status/message filled in, and whether it is active right now"""
        try:
            subscription = self.get_row(subscription_id)
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        if not subscription:
            raise HTTPException(status_code=404, detail="Subscription not found")

        now = utcnow()
        valid_from = parse_timestamp(subscription.get("valid_from"))
        valid_to = parse_timestamp(subscription.get("valid_to"))
        active = bool(valid_from and valid_to and valid_from <= now <= valid_to)
        if active:
            return {**subscription, "status": "active", "message": "This subscription is valid."}, True
        return {**subscription, "status": "expired", "message": "This subscription is not currently active."}, False

    def plan_title(self, subscription: Dict[str, Any]) -> Optional[str]:
        type_id = subscription.get("subscription_type_id")
        if not type_id:
            return None
        plan = row_or_none(
            self.supabase.table("subscription_types").select("title").eq("id", type_id).maybe_single().execute()
        )
        return plan.get("title") if plan else None
