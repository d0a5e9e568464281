from fastapi import APIRouter, Depends
from clubhub.database.supabase_client import get_supabase
from clubhub.modules.coupons.schemas import (
    CouponCreate, CouponUpdate, CouponResponse, CouponValidateRequest, CouponValidateResponse
)
from clubhub.modules.coupons.service import CouponService
from clubhub.core.dependencies import require_admin
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/coupons", tags=["coupons"])


def get_coupon_service(supabase: Client = Depends(get_supabase)) -> CouponService:
    return CouponService(supabase)


@router.get("", response_model=List[CouponResponse])
async def list_coupons(
    user_data: Dict = Depends(require_admin),
    service: CouponService = Depends(get_coupon_service)
):
    return service.list_coupons()


@router.post("", response_model=CouponResponse, status_code=201)
async def create_coupon(
    coupon_data: CouponCreate,
    user_data: Dict = Depends(require_admin),
    service: CouponService = Depends(get_coupon_service)
):
    return service.create_coupon(coupon_data, user_data["id"])


@router.post("/validate", response_model=CouponValidateResponse)
async def validate_coupon(
    request: CouponValidateRequest,
    service: CouponService = Depends(get_coupon_service)
):
    """Check a code at checkout and return the discount"""
    return service.validate_coupon(request.code, request.order_amount)


@router.get("/{coupon_id}", response_model=CouponResponse)
async def get_coupon(
    coupon_id: str,
    user_data: Dict = Depends(require_admin),
    service: CouponService = Depends(get_coupon_service)
):
    return service.get_coupon(coupon_id)


@router.put("/{coupon_id}", response_model=CouponResponse)
async def update_coupon(
    coupon_id: str,
    coupon_data: CouponUpdate,
    user_data: Dict = Depends(require_admin),
    service: CouponService = Depends(get_coupon_service)
):
    return service.update_coupon(coupon_id, coupon_data)


@router.delete("/{coupon_id}")
async def delete_coupon(
    coupon_id: str,
    user_data: Dict = Depends(require_admin),
    service: CouponService = Depends(get_coupon_service)
):
    service.delete_coupon(coupon_id)
    return {"message": "Coupon deleted successfully"}
