from pydantic import BaseModel
from typing import Any, Dict, List, Optional
import datetime as dt


class PlayerBase(BaseModel):
    name: str
    surname: Optional[str] = None
    number: Optional[str] = None
    position: Optional[str] = None
    matches: Optional[int] = None
    minutes: Optional[int] = None
    goals: Optional[int] = None
    assists: Optional[int] = None
    yellow_cards: Optional[int] = None
    red_cards: Optional[int] = None
    team_key: Optional[str] = None
    profile_url: Optional[str] = None
    image_url: Optional[str] = None


class PlayerCreate(PlayerBase):
    pass


class PlayerUpdate(BaseModel):
    name: Optional[str] = None
    surname: Optional[str] = None
    number: Optional[str] = None
    position: Optional[str] = None
    matches: Optional[int] = None
    minutes: Optional[int] = None
    goals: Optional[int] = None
    assists: Optional[int] = None
    yellow_cards: Optional[int] = None
    red_cards: Optional[int] = None
    team_key: Optional[str] = None
    profile_url: Optional[str] = None
    image_url: Optional[str] = None


class PlayerResponse(PlayerBase):
    id: str
    inserted_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True


class PlayerScrapeResponse(BaseModel):
    success: bool
    scrapedCount: int
    insertedCount: int
    players: List[Dict[str, Any]]


class CleanDuplicatesResponse(BaseModel):
    success: bool
    message: str
    before_count: int
    after_count: int
    removed_count: int
