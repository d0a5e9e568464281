from supabase import Client
from clubhub.modules.fans.schemas import FanResponse
from clubhub.core.dates import parse_timestamp, utcnow
from clubhub.database.supabase_client import rows
from typing import Any, Dict, List, Optional
from datetime import datetime
from fastapi import HTTPException

PLACEHOLDER_NAME = "Subscriber"


def _full_name(row: Dict[str, Any]) -> str:
    return f"{row.get('purchaser_name') or ''} {row.get('purchaser_surname') or ''}".strip()


def aggregate_fans(tickets: List[Dict[str, Any]], subscriptions: List[Dict[str, Any]],
                   tier_prices: Dict[str, float], now: Optional[datetime] = None) -> List[Dict[str, Any]]:
    """One entry per purchaser email, in first-seen order"""
    now = now or utcnow()
    fans: Dict[str, Dict[str, Any]] = {}

    for ticket in tickets:
        email = ticket.get("purchaser_email")
        if not email:
            continue
        fan = fans.setdefault(email, {
            "name": _full_name(ticket),
            "email": email,
            "total_tickets": 0,
            "money_spent": 0.0,
            "has_valid_subscription": False,
        })
        fan["total_tickets"] += 1
        fan["money_spent"] += float(tier_prices.get(ticket.get("tier_id"), 0) or 0)

    for sub in subscriptions:
        email = sub.get("purchaser_email")
        if not email:
            continue
        fan = fans.setdefault(email, {
            "name": _full_name(sub) or PLACEHOLDER_NAME,
            "email": email,
            "total_tickets": 0,
            "money_spent": 0.0,
            "has_valid_subscription": False,
        })
        valid_to = parse_timestamp(sub.get("valid_to"))
        if valid_to and valid_to > now:
            fan["has_valid_subscription"] = True

    return list(fans.values())


class FanService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_fans(self) -> List[FanResponse]:
        try:
            tickets = rows(
                self.supabase.table("tickets")
                .select("purchaser_name, purchaser_surname, purchaser_email, tier_id")
                .execute()
            )
            subscriptions = rows(
                self.supabase.table("subscriptions")
                .select("purchaser_name, purchaser_surname, purchaser_email, valid_to")
                .execute()
            )
            tier_ids = list({t["tier_id"] for t in tickets if t.get("tier_id")})
            tier_prices = {}
            if tier_ids:
                tiers = rows(self.supabase.table("pricing_tiers").select("id, price").in_("id", tier_ids).execute())
                tier_prices = {tier["id"]: tier.get("price") or 0 for tier in tiers}
            return [FanResponse(**fan) for fan in aggregate_fans(tickets, subscriptions, tier_prices)]
        except Exception as e:
            raise HTTPException(status_code=500, detail=f"Failed to fetch fan data: {e}")
