from supabase import Client
from clubhub.modules.stats.schemas import StatsResponse
from clubhub.database.supabase_client import rows
from typing import Any, Dict, List
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


def ticket_stats(event_count: int, tickets: List[Dict[str, Any]], tier_prices: Dict[str, float]) -> Dict[str, Any]:
    validated = sum(1 for t in tickets if t.get("status") == "validated" or t.get("is_validated"))
    revenue = sum(float(tier_prices.get(t.get("tier_id"), 0) or 0) for t in tickets)
    return {
        "total_events": event_count,
        "total_tickets": len(tickets),
        "validated_tickets": validated,
        "total_revenue": revenue,
        "tickets_scanned": validated,
        "revenue": revenue,
    }


class StatsService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def get_stats(self) -> StatsResponse:
        try:
            events = rows(self.supabase.table("events").select("id").execute())
            if not events:
                return StatsResponse()
            event_ids = [e["id"] for e in events]
            tickets = rows(
                self.supabase.table("tickets")
                .select("id, status, is_validated, tier_id")
                .in_("event_id", event_ids)
                .execute()
            )
            tier_prices = {}
            tier_ids = list({t["tier_id"] for t in tickets if t.get("tier_id")})
            if tier_ids:
                tiers = rows(self.supabase.table("pricing_tiers").select("id, price").in_("id", tier_ids).execute())
                tier_prices = {tier["id"]: tier.get("price") or 0 for tier in tiers}
            return StatsResponse(**ticket_stats(len(events), tickets, tier_prices))
        except Exception as e:
            logger.error(f"Error fetching stats: {e}")
            raise HTTPException(status_code=500, detail="Failed to fetch stats")
