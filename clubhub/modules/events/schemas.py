from pydantic import BaseModel, Field
from typing import Optional, List
import datetime as dt


class PricingTierCreate(BaseModel):
    name: str
    price: float = Field(ge=0)
    max_quantity: int = Field(gt=0)


class PricingTierResponse(BaseModel):
    id: str
    event_id: str
    name: str
    price: float
    quantity: int
    sold_quantity: int = 0

    class Config:
        from_attributes = True


class EventBase(BaseModel):
    title: str
    description: Optional[str] = None
    date: Optional[dt.date] = None
    time: Optional[str] = None
    location: Optional[str] = None
    team1_id: Optional[str] = None
    team2_id: Optional[str] = None
    cover_image_url: Optional[str] = None


class EventCreateRequest(BaseModel):
    event: EventBase
    pricing_tiers: List[PricingTierCreate] = []


class EventUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    date: Optional[dt.date] = None
    time: Optional[str] = None
    location: Optional[str] = None
    team1_id: Optional[str] = None
    team2_id: Optional[str] = None
    cover_image_url: Optional[str] = None


class EventResponse(EventBase):
    id: str
    created_at: Optional[dt.datetime] = None
    pricing_tiers: List[PricingTierResponse] = []

    class Config:
        from_attributes = True


class EventDetailResponse(EventResponse):
    team1: Optional[dict] = None
    team2: Optional[dict] = None
