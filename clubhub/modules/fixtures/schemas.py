from pydantic import BaseModel
from typing import Any, Optional, List
import datetime as dt


class FixtureBase(BaseModel):
    match_date: Optional[dt.date] = None
    match_time: Optional[str] = None
    team1: Optional[str] = None
    team2: Optional[str] = None
    team1_score: Optional[int] = None
    team2_score: Optional[int] = None
    team1_logo: Optional[str] = None
    team2_logo: Optional[str] = None
    venue: Optional[str] = None
    league_key: Optional[str] = None
    status: Optional[str] = None
    round: Optional[str] = None


class MatchCreate(FixtureBase):
    team1: str
    team2: str
    match_date: dt.date


class FixtureUpdate(FixtureBase):
    is_draft: Optional[bool] = None
    used_at: Optional[dt.datetime] = None


class FixtureResponse(FixtureBase):
    id: Optional[str] = None
    fingerprint: str
    lff_url_slug: Optional[str] = None
    statistics: Optional[Any] = None
    events: Optional[Any] = None
    is_draft: Optional[bool] = None
    used_at: Optional[dt.datetime] = None
    owner_id: Optional[str] = None
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True


class LeagueScrapeResult(BaseModel):
    league: str
    league_key: str
    fixtures: int


class FixtureScrapeResponse(BaseModel):
    success: bool
    total: int
    leagues: List[LeagueScrapeResult]
    message: str
