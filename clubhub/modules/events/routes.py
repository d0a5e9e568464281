from fastapi import APIRouter, Depends
from clubhub.database.supabase_client import get_supabase
from clubhub.modules.events.schemas import (
    EventCreateRequest, EventUpdate, EventResponse, EventDetailResponse, PricingTierResponse
)
from clubhub.modules.events.service import EventService
from clubhub.core.dependencies import get_current_user_id, require_admin
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/events", tags=["events"])


def get_event_service(supabase: Client = Depends(get_supabase)) -> EventService:
    return EventService(supabase)


@router.get("", response_model=List[EventResponse])
async def list_events(service: EventService = Depends(get_event_service)):
    """List events with nested pricing tiers"""
    return service.list_events()


@router.post("", response_model=EventResponse, status_code=201)
async def create_event(
    request: EventCreateRequest,
    user_data: Dict = Depends(get_current_user_id),
    service: EventService = Depends(get_event_service)
):
    """Create an event together with its pricing tiers"""
    return service.create_event(request, user_data["id"])


@router.get("/drafts")
async def list_drafts(
    user_data: Dict = Depends(require_admin),
    service: EventService = Depends(get_event_service)
):
    """Event drafts and scraped fixture drafts, by date"""
    return service.list_drafts()


@router.get("/{event_id}", response_model=EventDetailResponse)
async def get_event(event_id: str, service: EventService = Depends(get_event_service)):
    return service.get_event(event_id)


@router.put("/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: str,
    event_data: EventUpdate,
    user_data: Dict = Depends(require_admin),
    service: EventService = Depends(get_event_service)
):
    return service.update_event(event_id, event_data)


@router.delete("/{event_id}", status_code=204)
async def delete_event(
    event_id: str,
    user_data: Dict = Depends(require_admin),
    service: EventService = Depends(get_event_service)
):
    service.delete_event(event_id)
    return None


@router.get("/{event_id}/pricing-tiers", response_model=List[PricingTierResponse])
async def get_pricing_tiers(event_id: str, service: EventService = Depends(get_event_service)):
    return service.get_pricing_tiers(event_id)
