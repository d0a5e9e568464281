from pydantic import BaseModel, EmailStr
from typing import Optional
import datetime as dt


class TicketCreate(BaseModel):
    event_id: str
    tier_id: str
    purchaser_name: str
    purchaser_surname: Optional[str] = None
    purchaser_email: EmailStr


class TicketValidateRequest(BaseModel):
    ticket_id: Optional[str] = None


class TicketResponse(BaseModel):
    id: str
    event_id: str
    tier_id: str
    purchaser_name: Optional[str] = None
    purchaser_surname: Optional[str] = None
    purchaser_email: Optional[str] = None
    status: Optional[str] = None
    is_validated: bool = False
    validated_at: Optional[dt.datetime] = None
    qr_code_url: Optional[str] = None
    pdf_url: Optional[str] = None
    stripe_session_id: Optional[str] = None
    created_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True


class TicketWithDetailsResponse(TicketResponse):
    event: Optional[dict] = None
    pricing_tier: Optional[dict] = None


class TicketValidationResponse(BaseModel):
    success: bool
    message: str
    ticket: TicketResponse


class QRRefreshResponse(BaseModel):
    updated: int
    failed: int
