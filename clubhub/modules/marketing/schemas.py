from pydantic import BaseModel, EmailStr
from typing import List, Optional
import datetime as dt


class MarketingSendRequest(BaseModel):
    recipients: List[EmailStr] = []
    subject: Optional[str] = None
    html_body: Optional[str] = None
    text_body: Optional[str] = None


class MarketingSendResponse(BaseModel):
    success: bool
    message: str


class CampaignResponse(BaseModel):
    id: str
    subject: str
    body_html: Optional[str] = None
    body_text: Optional[str] = None
    recipient_count: int = 0
    owner_id: Optional[str] = None
    created_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True
