from supabase import Client
from clubhub.modules.tickets.schemas import TicketCreate, TicketResponse, TicketWithDetailsResponse
from clubhub.core.qr_codes import qr_code_service
from clubhub.database.supabase_client import row_or_none, rows
from typing import Any, Dict, List, Optional
from datetime import datetime, timezone
from fastapi import HTTPException
import csv
import io
import logging

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = [
    "ticket_id", "event_id", "tier_id", "qr_code_url",
    "purchaser_name", "purchaser_email", "is_validated", "created_at",
]


def tickets_to_csv(tickets: List[Dict[str, Any]]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(EXPORT_COLUMNS)
    for ticket in tickets:
        writer.writerow([
            ticket.get("id") or "",
            ticket.get("event_id") or "",
            ticket.get("tier_id") or "",
            ticket.get("qr_code_url") or "",
            ticket.get("purchaser_name") or "",
            ticket.get("purchaser_email") or "",
            "true" if ticket.get("is_validated") else "false",
            ticket.get("created_at") or "",
        ])
    return buffer.getvalue()


class TicketService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _get_ticket(self, ticket_id: str) -> Optional[Dict[str, Any]]:
        return row_or_none(
            self.supabase.table("tickets").select("*").eq("id", ticket_id).maybe_single().execute()
        )

    def _get_event(self, event_id: Optional[str]) -> Optional[Dict[str, Any]]:
        if not event_id:
            return None
        return row_or_none(
            self.supabase.table("events").select("*").eq("id", event_id).maybe_single().execute()
        )

    def _get_tier(self, tier_id: Optional[str]) -> Optional[Dict[str, Any]]:
        if not tier_id:
            return None
        return row_or_none(
            self.supabase.table("pricing_tiers").select("*").eq("id", tier_id).maybe_single().execute()
        )

    def fetch_ticket_details(self, ticket_id: str) -> Optional[Dict[str, Any]]:
        """Ticket row with its event and pricing tier, or None"""
        ticket = self._get_ticket(ticket_id)
        if not ticket:
            return None
        return {
            **ticket,
            "event": self._get_event(ticket.get("event_id")),
            "pricing_tier": self._get_tier(ticket.get("tier_id")),
        }

    def get_ticket(self, ticket_id: str) -> TicketWithDetailsResponse:
        try:
            details = self.fetch_ticket_details(ticket_id)
            if not details:
                raise HTTPException(status_code=404, detail="Ticket not found")
            return TicketWithDetailsResponse(**details)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_tickets(self) -> List[TicketWithDetailsResponse]:
        """All tickets, newest first, with event and tier resolved"""
        try:
            tickets = rows(self.supabase.table("tickets").select("*").order("created_at", desc=True).execute())
            event_ids = list({t["event_id"] for t in tickets if t.get("event_id")})
            tier_ids = list({t["tier_id"] for t in tickets if t.get("tier_id")})
            events = {}
            tiers = {}
            if event_ids:
                events = {e["id"]: e for e in rows(
                    self.supabase.table("events").select("*").in_("id", event_ids).execute()
                )}
            if tier_ids:
                tiers = {t["id"]: t for t in rows(
                    self.supabase.table("pricing_tiers").select("*").in_("id", tier_ids).execute()
                )}
            return [
                TicketWithDetailsResponse(
                    **t, event=events.get(t.get("event_id")), pricing_tier=tiers.get(t.get("tier_id"))
                )
                for t in tickets
            ]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def check_tier_available(self, tier_id: str, quantity: int = 1) -> Dict[str, Any]:
        """Pricing tier row; 400 when it does not exist or cannot cover the quantity"""
        tier = self._get_tier(tier_id)
        if not tier or (tier.get("quantity") or 0) - (tier.get("sold_quantity") or 0) < quantity:
            raise HTTPException(status_code=400, detail="Tier sold out or not available")
        return tier

    def issue_ticket(self, event_id: str, tier_id: str, purchaser_name: Optional[str],
                     purchaser_email: Optional[str], purchaser_surname: Optional[str] = None,
                     stripe_session_id: Optional[str] = None, owner_id: Optional[str] = None) -> Dict[str, Any]:
        """Insert a valid ticket, count it against the tier and attach its signed QR code"""
        ticket_data = {
            "event_id": event_id,
            "tier_id": tier_id,
            "purchaser_name": purchaser_name,
            "purchaser_surname": purchaser_surname,
            "purchaser_email": purchaser_email,
            "status": "valid",
            "is_validated": False,
        }
        if stripe_session_id:
            ticket_data["stripe_session_id"] = stripe_session_id
        if owner_id:
            ticket_data["owner_id"] = owner_id

        ticket = row_or_none(self.supabase.table("tickets").insert(ticket_data).execute())
        if not ticket:
            raise HTTPException(status_code=500, detail="Failed to create ticket")

        tier = self._get_tier(tier_id) or {}
        if tier:
            self.supabase.table("pricing_tiers")\
                .update({"sold_quantity": (tier.get("sold_quantity") or 0) + 1})\
                .eq("id", tier_id)\
                .execute()

        try:
            event = self._get_event(event_id) or {}
            qr_code_url = qr_code_service.ticket_qr_code(ticket, event, tier)
            self.supabase.table("tickets").update({"qr_code_url": qr_code_url}).eq("id", ticket["id"]).execute()
            ticket["qr_code_url"] = qr_code_url
        except Exception as e:
            logger.error(f"Failed to generate QR code for ticket {ticket['id']}: {e}")
        return ticket

    def create_ticket(self, ticket_data: TicketCreate, user_id: Optional[str] = None) -> TicketResponse:
        try:
            self.check_tier_available(ticket_data.tier_id)
            ticket = self.issue_ticket(
                ticket_data.event_id,
                ticket_data.tier_id,
                ticket_data.purchaser_name,
                ticket_data.purchaser_email,
                purchaser_surname=ticket_data.purchaser_surname,
                owner_id=user_id,
            )
            return TicketResponse(**ticket)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_ticket(self, ticket_id: str) -> None:
        try:
            result = self.supabase.table("tickets").delete().eq("id", ticket_id).execute()
            if not rows(result):
                raise HTTPException(status_code=404, detail="Ticket not found")
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def require_resendable(self, ticket_id: str) -> Dict[str, Any]:
        ticket = self._get_ticket(ticket_id)
        if not ticket or not ticket.get("purchaser_email"):
            raise HTTPException(status_code=404, detail="Ticket not found or missing email")
        return ticket

    def validate_ticket(self, ticket_id: Optional[str]) -> TicketResponse:
        """Mark a ticket as used at the gate"""
        if not ticket_id:
            raise HTTPException(status_code=400, detail="Ticket ID is required")
        try:
            ticket = self._get_ticket(ticket_id)
            if not ticket:
                raise HTTPException(status_code=404, detail="Ticket not found")
            if ticket.get("is_validated"):
                raise HTTPException(status_code=400, detail="Ticket already validated")
            result = self.supabase.table("tickets").update({
                "is_validated": True,
                "validated_at": datetime.now(timezone.utc).isoformat(),
                "status": "validated",
            }).eq("id", ticket_id).execute()
            updated = row_or_none(result) or ticket
            logger.info(f"Ticket {ticket_id} validated")
            return TicketResponse(**updated)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def tickets_for_session(self, session_id: str) -> List[Dict[str, Any]]:
        return rows(
            self.supabase.table("tickets")
            .select("*")
            .eq("stripe_session_id", session_id)
            .order("created_at")
            .execute()
        )

    def find_recent_purchase(self, event_id: str, tier_id: str, purchaser_email: str,
                             limit: int) -> List[Dict[str, Any]]:
        """Latest tickets for a purchaser, used when the session id was not stored"""
        return rows(
            self.supabase.table("tickets")
            .select("*")
            .eq("event_id", event_id)
            .eq("tier_id", tier_id)
            .eq("purchaser_email", purchaser_email)
            .order("created_at", desc=True)
            .limit(limit)
            .execute()
        )

    def export_csv(self) -> str:
        try:
            tickets = rows(self.supabase.table("tickets").select("*").order("created_at").execute())
            return tickets_to_csv(tickets)
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def refresh_qr_codes(self) -> Dict[str, int]:
        """Regenerate the signed QR code of every ticket"""
        try:
            tickets = rows(self.supabase.table("tickets").select("*").execute())
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        events: Dict[str, Dict[str, Any]] = {}
        tiers: Dict[str, Dict[str, Any]] = {}
        updated = 0
        failed = 0
        for ticket in tickets:
            try:
                event_id = ticket.get("event_id")
                tier_id = ticket.get("tier_id")
                if event_id not in events:
                    events[event_id] = self._get_event(event_id) or {}
                if tier_id not in tiers:
                    tiers[tier_id] = self._get_tier(tier_id) or {}
                qr_code_url = qr_code_service.ticket_qr_code(ticket, events[event_id], tiers[tier_id])
                self.supabase.table("tickets").update({"qr_code_url": qr_code_url}).eq("id", ticket["id"]).execute()
                updated += 1
            except Exception as e:
                logger.error(f"Failed to refresh QR code for ticket {ticket.get('id')}: {e}")
                failed += 1
        logger.info(f"QR codes refreshed: {updated} updated, {failed} failed")
        return {"updated": updated, "failed": failed}
