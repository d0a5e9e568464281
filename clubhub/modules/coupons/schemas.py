from pydantic import BaseModel
from typing import Optional
import datetime as dt


class CouponCreate(BaseModel):
    code: Optional[str] = None
    description: Optional[str] = None
    discount_type: Optional[str] = None
    discount_value: Optional[float] = None
    max_uses: Optional[int] = None
    min_order_amount: Optional[float] = None
    valid_from: Optional[dt.datetime] = None
    valid_until: Optional[dt.datetime] = None


class CouponUpdate(CouponCreate):
    is_active: Optional[bool] = None


class CouponResponse(BaseModel):
    id: str
    code: str
    description: Optional[str] = None
    discount_type: str
    discount_value: float
    max_uses: Optional[int] = None
    current_uses: int = 0
    min_order_amount: Optional[float] = 0
    valid_from: Optional[dt.datetime] = None
    valid_until: Optional[dt.datetime] = None
    is_active: bool = True
    created_by: Optional[str] = None
    created_at: Optional[dt.datetime] = None

    class Config:
        from_attributes = True


class CouponValidateRequest(BaseModel):
    code: Optional[str] = None
    order_amount: float = 0


class AppliedCoupon(BaseModel):
    id: str
    code: str
    description: Optional[str] = None
    discount_type: str
    discount_value: float
    discount_amount: float


class CouponValidateResponse(BaseModel):
    valid: bool
    coupon: AppliedCoupon
