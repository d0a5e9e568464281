from pydantic import BaseModel, Field
from typing import Optional, List
import datetime as dt


class SubscriptionTypeCreate(BaseModel):
    title: str
    description: Optional[str] = None
    price: float = Field(ge=0)
    duration_days: int = Field(gt=0)
    features: List[str] = []
    is_active: bool = True


class SubscriptionTypeUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0)
    duration_days: Optional[int] = Field(default=None, gt=0)
    features: Optional[List[str]] = None
    is_active: Optional[bool] = None


class SubscriptionTypeResponse(BaseModel):
    id: str
    title: str
    description: Optional[str] = None
    price: float
    duration_days: int
    features: List[str] = []
    is_active: bool = True
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True
