from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional
import datetime as dt


class OrderCartItem(BaseModel):
    product_id: Optional[str] = None
    variant_id: Optional[str] = None
    name: str
    sku: Optional[str] = None
    variant_attributes: Optional[Dict[str, Any]] = None
    quantity: int = Field(gt=0)
    price: float = Field(ge=0)


class ShopOrderCreate(BaseModel):
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    delivery_address: Optional[Dict[str, Any]] = None
    cart_items: List[OrderCartItem] = []
    stripe_session_id: Optional[str] = None
    coupon_code: Optional[str] = None
    coupon_discount: Optional[float] = None


class ShopOrderUpdate(BaseModel):
    status: Optional[str] = None
    tracking_number: Optional[str] = None
    notes: Optional[str] = None
    shipped_at: Optional[dt.datetime] = None
    delivered_at: Optional[dt.datetime] = None


class ShipOrderRequest(BaseModel):
    tracking_number: Optional[str] = None


class ShopOrderResponse(BaseModel):
    id: str
    order_number: Optional[str] = None
    customer_name: Optional[str] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[str] = None
    delivery_address: Optional[Dict[str, Any]] = None
    subtotal: Optional[float] = None
    discount_amount: Optional[float] = 0
    total_amount: Optional[float] = None
    coupon_code: Optional[str] = None
    status: Optional[str] = None
    tracking_number: Optional[str] = None
    notes: Optional[str] = None
    stripe_session_id: Optional[str] = None
    created_by: Optional[str] = None
    shipped_at: Optional[dt.datetime] = None
    delivered_at: Optional[dt.datetime] = None
    created_at: Optional[dt.datetime] = None
    updated_at: Optional[dt.datetime] = None
    items: List[Dict[str, Any]] = []

    class Config:
        from_attributes = True


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int


class ShopOrderListResponse(BaseModel):
    orders: List[ShopOrderResponse]
    pagination: Pagination
