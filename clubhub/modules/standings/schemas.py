from pydantic import BaseModel
from typing import Any, Dict, List, Optional
import datetime as dt


class StandingsResponse(BaseModel):
    id: Optional[str] = None
    league_key: str
    league_name: Optional[str] = None
    standings_data: List[Dict[str, Any]] = []
    last_updated: Optional[dt.datetime] = None

    class Config:
        from_attributes = True


class LeagueStandingsResult(BaseModel):
    league: str
    league_key: str
    teams: int


class StandingsScrapeResponse(BaseModel):
    success: bool
    leagues: List[LeagueStandingsResult]
    message: str
