from supabase import Client
from clubhub.modules.events.schemas import (
    EventCreateRequest, EventUpdate, EventResponse, EventDetailResponse, PricingTierResponse
)
from clubhub.database.supabase_client import row_or_none, rows
from typing import Any, Dict, List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


def _tier(row: Dict[str, Any]) -> PricingTierResponse:
    return PricingTierResponse(**{**row, "sold_quantity": row.get("sold_quantity") or 0})


def fixture_to_draft(fixture: Dict[str, Any]) -> Dict[str, Any]:
    """Shape a scraped fixture like an event draft"""
    return {
        "id": fixture["id"],
        "title": f"{fixture.get('team1')} vs {fixture.get('team2')}",
        "date": fixture.get("match_date"),
        "time": fixture.get("match_time"),
        "team1_name": fixture.get("team1"),
        "team2_name": fixture.get("team2"),
        "location": fixture.get("venue"),
        "league": fixture.get("league_key"),
        "status": fixture.get("status"),
        "round": fixture.get("round"),
        "used_at": fixture.get("used_at"),
        "created_at": fixture.get("created_at"),
        "updated_at": fixture.get("updated_at"),
        "is_fixture": True,
    }


class EventService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _tiers_by_event(self, event_ids: List[str]) -> Dict[str, List[PricingTierResponse]]:
        if not event_ids:
            return {}
        result = self.supabase.table("pricing_tiers")\
            .select("*")\
            .in_("event_id", event_ids)\
            .order("price")\
            .execute()
        grouped: Dict[str, List[PricingTierResponse]] = {}
        for row in rows(result):
            grouped.setdefault(row["event_id"], []).append(_tier(row))
        return grouped

    def _get_team(self, team_id: Optional[str]) -> Optional[Dict[str, Any]]:
        if not team_id:
            return None
        return row_or_none(self.supabase.table("teams").select("*").eq("id", team_id).maybe_single().execute())

    def list_events(self) -> List[EventResponse]:
        """All events with their pricing tiers"""
        try:
            result = self.supabase.table("events").select("*").order("date").execute()
            events = rows(result)
            tiers = self._tiers_by_event([e["id"] for e in events])
            return [EventResponse(**e, pricing_tiers=tiers.get(e["id"], [])) for e in events]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_event(self, request: EventCreateRequest, user_id: str) -> EventResponse:
        """Insert the event, then its tiers; the event is removed again if the tiers fail"""
        try:
            event_data = request.event.model_dump(mode="json")
            event_data["owner_id"] = user_id
            result = self.supabase.table("events").insert(event_data).execute()
            event = row_or_none(result)
            if not event:
                raise HTTPException(status_code=500, detail="Failed to create event")
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        tiers: List[PricingTierResponse] = []
        if request.pricing_tiers:
            try:
                tier_result = self.supabase.table("pricing_tiers").insert([
                    {
                        "event_id": event["id"],
                        "name": tier.name,
                        "price": tier.price,
                        "quantity": tier.max_quantity,
                        "sold_quantity": 0,
                    }
                    for tier in request.pricing_tiers
                ]).execute()
                tiers = [_tier(row) for row in rows(tier_result)]
            except Exception as e:
                logger.error(f"Pricing tier insert failed for event {event['id']}, rolling back: {e}")
                self.supabase.table("events").delete().eq("id", event["id"]).execute()
                raise HTTPException(status_code=500, detail=f"Failed to create pricing tiers: {e}")

        return EventResponse(**event, pricing_tiers=tiers)

    def get_event(self, event_id: str) -> EventDetailResponse:
        """Event with tiers and both teams"""
        try:
            event = row_or_none(
                self.supabase.table("events").select("*").eq("id", event_id).maybe_single().execute()
            )
            if not event:
                raise HTTPException(status_code=404, detail="Event not found")
            tiers = self._tiers_by_event([event_id]).get(event_id, [])
            return EventDetailResponse(
                **event,
                pricing_tiers=tiers,
                team1=self._get_team(event.get("team1_id")),
                team2=self._get_team(event.get("team2_id")),
            )
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_event(self, event_id: str, event_data: EventUpdate) -> EventResponse:
        update_data = event_data.model_dump(mode="json", exclude_unset=True)
        if not update_data:
            raise HTTPException(status_code=400, detail="No fields to update")
        try:
            result = self.supabase.table("events").update(update_data).eq("id", event_id).execute()
            event = row_or_none(result)
            if not event:
                raise HTTPException(status_code=404, detail="Event not found")
            tiers = self._tiers_by_event([event_id]).get(event_id, [])
            return EventResponse(**event, pricing_tiers=tiers)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_event(self, event_id: str) -> None:
        """Delete event and its pricing tiers"""
        try:
            self.supabase.table("pricing_tiers").delete().eq("event_id", event_id).execute()
            result = self.supabase.table("events").delete().eq("id", event_id).execute()
            if not rows(result):
                raise HTTPException(status_code=404, detail="Event not found")
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_pricing_tiers(self, event_id: str) -> List[PricingTierResponse]:
        try:
            return self._tiers_by_event([event_id]).get(event_id, [])
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def list_drafts(self) -> List[Dict[str, Any]]:
        """Manual event drafts merged with scraped fixtures still marked as drafts"""
        drafts: List[Dict[str, Any]] = []
        try:
            drafts.extend(rows(self.supabase.table("event_drafts").select("*").order("date").execute()))
        except Exception as e:
            logger.error(f"Error fetching event drafts: {e}")
        try:
            fixtures = self.supabase.table("fixtures_all_new")\
                .select("*")\
                .eq("is_draft", True)\
                .order("match_date")\
                .execute()
            drafts.extend(fixture_to_draft(f) for f in rows(fixtures))
        except Exception as e:
            logger.error(f"Error fetching fixture drafts: {e}")
        return sorted(drafts, key=lambda d: str(d.get("date") or d.get("match_date") or ""))
