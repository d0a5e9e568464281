from pydantic import BaseModel, EmailStr
from typing import Optional
import datetime as dt


class SubscriptionCreate(BaseModel):
    subscription_type_id: Optional[str] = None
    purchaser_name: str
    purchaser_surname: Optional[str] = None
    purchaser_email: EmailStr
    valid_from: dt.datetime
    valid_to: dt.datetime


class SubscriptionPurchaseRequest(BaseModel):
    subscription_type_id: Optional[str] = None
    purchaser_name: Optional[str] = None
    purchaser_surname: Optional[str] = None
    purchaser_email: Optional[EmailStr] = None
    valid_from: Optional[dt.datetime] = None
    valid_to: Optional[dt.datetime] = None


class SubscriptionResponse(BaseModel):
    id: str
    subscription_type_id: Optional[str] = None
    purchaser_name: Optional[str] = None
    purchaser_surname: Optional[str] = None
    purchaser_email: Optional[str] = None
    valid_from: Optional[dt.datetime] = None
    valid_to: Optional[dt.datetime] = None
    qr_code_url: Optional[str] = None
    owner_id: Optional[str] = None
    stripe_subscription_id: Optional[str] = None
    subscription_status: Optional[str] = None
    created_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True


class SubscriptionPurchaseResponse(BaseModel):
    success: bool
    subscription: SubscriptionResponse
    message: str


class SubscriptionVerifyResponse(BaseModel):
    id: str
    status: Optional[str] = None
    customer_email: Optional[str] = None
    start_date: Optional[dt.datetime] = None
    end_date: Optional[dt.datetime] = None
    purchaser_name: Optional[str] = None
