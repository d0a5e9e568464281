from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class TeamCreate(BaseModel):
    team_name: str
    logo: Optional[str] = None


class TeamUpdate(BaseModel):
    team_name: Optional[str] = None
    logo: Optional[str] = None


class TeamResponse(BaseModel):
    id: str
    team_name: str
    logo: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
