from supabase import Client
from clubhub.core.dates import parse_date, parse_timestamp, utcnow
from clubhub.core.qr_codes import QRCodeService, qr_code_service
from clubhub.database.supabase_client import row_or_none
from typing import Any, Dict, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


class QRValidationService:
    """Gate scanning of ticket and season-pass QR codes"""

    def __init__(self, supabase: Client, qr_codes: Optional[QRCodeService] = None):
        self.supabase = supabase
        self.qr_codes = qr_codes or qr_code_service

    def validate(self, qr_data: Optional[str]) -> Dict[str, Any]:
        if not qr_data or not qr_data.strip():
            raise HTTPException(status_code=400, detail="QR data is required")
        qr_data = qr_data.strip()

        if not qr_data.startswith("{"):
            # Tickets issued before signed payloads carry the bare ticket id
            return self.validate_ticket(qr_data)

        payload = self.qr_codes.parse(qr_data)
        if payload is None:
            raise HTTPException(status_code=400, detail="Invalid or tampered QR code")
        if self.qr_codes.is_ticket(payload):
            return self.validate_ticket(payload["tid"])
        if self.qr_codes.is_subscription(payload):
            return self.validate_subscription(payload["sid"])
        raise HTTPException(status_code=400, detail="Unknown QR code type")

    def validate_ticket(self, ticket_id: str) -> Dict[str, Any]:
        try:
            ticket = row_or_none(
                self.supabase.table("tickets").select("*").eq("id", ticket_id).maybe_single().execute()
            )
            if not ticket:
                raise HTTPException(status_code=404, detail="Ticket not found")
            if ticket.get("is_validated"):
                raise HTTPException(status_code=400, detail="Ticket already used")

            event = row_or_none(
                self.supabase.table("events").select("*").eq("id", ticket["event_id"]).maybe_single().execute()
            ) or {}
            tier = row_or_none(
                self.supabase.table("pricing_tiers").select("*").eq("id", ticket["tier_id"]).maybe_single().execute()
            ) or {}

            event_date = parse_date(event.get("date"))
            if event_date and event_date < utcnow().date():
                raise HTTPException(status_code=400, detail="Event has passed")

            validated_at = utcnow().isoformat()
            self.supabase.table("tickets").update({
                "is_validated": True,
                "validated_at": validated_at,
                "status": "validated",
            }).eq("id", ticket_id).execute()
            logger.info(f"Ticket {ticket_id} validated at the gate")

            return {
                "success": True,
                "message": "Ticket validated successfully",
                "type": "ticket",
                "data": {
                    "ticket_id": ticket["id"],
                    "event_title": event.get("title"),
                    "event_date": event.get("date"),
                    "event_time": event.get("time"),
                    "purchaser_name": ticket.get("purchaser_name"),
                    "tier_name": tier.get("name"),
                    "validated_at": validated_at,
                },
            }
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def validate_subscription(self, subscription_id: str) -> Dict[str, Any]:
        try:
            subscription = row_or_none(
                self.supabase.table("subscriptions").select("*").eq("id", subscription_id).maybe_single().execute()
            )
            if not subscription:
                raise HTTPException(status_code=404, detail="Subscription not found")

            now = utcnow()
            valid_from = parse_timestamp(subscription.get("valid_from"))
            valid_to = parse_timestamp(subscription.get("valid_to"))
            if valid_from and now < valid_from:
                raise HTTPException(
                    status_code=400,
                    detail=f"Subscription not yet active, becomes active on {valid_from.date().isoformat()}"
                )
            if valid_to and now > valid_to:
                raise HTTPException(
                    status_code=400,
                    detail=f"Subscription expired on {valid_to.date().isoformat()}"
                )

            return {
                "success": True,
                "message": "Subscription is valid",
                "type": "subscription",
                "data": {
                    "subscription_id": subscription["id"],
                    "purchaser_name": subscription.get("purchaser_name"),
                    "purchaser_surname": subscription.get("purchaser_surname"),
                    "valid_from": subscription.get("valid_from"),
                    "valid_to": subscription.get("valid_to"),
                    "validated_at": now.isoformat(),
                },
            }
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
