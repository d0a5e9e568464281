from supabase import Client
from clubhub.modules.coupons.schemas import CouponCreate, CouponUpdate, CouponResponse
from clubhub.core.dates import parse_timestamp, utcnow
from clubhub.database.supabase_client import row_or_none, rows
from typing import Any, Dict, List, Optional
from datetime import datetime
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)

DISCOUNT_TYPES = ("percentage", "fixed")


def check_discount(discount_type: Optional[str], discount_value: Optional[float]) -> None:
    """400 unless the type is known and the value fits it"""
    if discount_type not in DISCOUNT_TYPES:
        raise HTTPException(status_code=400, detail="Invalid discount type")
    if discount_value is None:
        return
    if discount_type == "percentage" and (discount_value <= 0 or discount_value > 100):
        raise HTTPException(status_code=400, detail="Percentage must be between 0 and 100")
    if discount_type == "fixed" and discount_value <= 0:
        raise HTTPException(status_code=400, detail="Fixed discount must be greater than 0")


def check_redeemable(coupon: Dict[str, Any], order_amount: float, now: Optional[datetime] = None) -> None:
    """Apply the redemption rules in order; the first failing rule raises a 400"""
    now = now or utcnow()
    if not coupon.get("is_active"):
        raise HTTPException(status_code=400, detail="Coupon is inactive")
    valid_from = parse_timestamp(coupon.get("valid_from"))
    if valid_from and valid_from > now:
        raise HTTPException(status_code=400, detail="Coupon is not yet valid")
    valid_until = parse_timestamp(coupon.get("valid_until"))
    if valid_until and valid_until < now:
        raise HTTPException(status_code=400, detail="Coupon has expired")
    max_uses = coupon.get("max_uses")
    if max_uses and (coupon.get("current_uses") or 0) >= max_uses:
        raise HTTPException(status_code=400, detail="Coupon usage limit reached")
    min_order = float(coupon.get("min_order_amount") or 0)
    if order_amount and min_order and order_amount < min_order:
        raise HTTPException(status_code=400, detail=f"Minimum order amount is €{min_order:.2f}")


def discount_amount(coupon: Dict[str, Any], order_amount: float) -> float:
    """Discount for an order, never more than the order itself"""
    value = float(coupon.get("discount_value") or 0)
    if coupon.get("discount_type") == "percentage":
        amount = order_amount * value / 100
    else:
        amount = value
    return min(amount, order_amount)


class CouponService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _find_by_code(self, code: str, exclude_id: Optional[str] = None) -> Optional[Dict[str, Any]]:
        query = self.supabase.table("coupon_codes").select("*").eq("code", code.upper())
        if exclude_id:
            query = query.neq("id", exclude_id)
        return row_or_none(query.limit(1).execute())

    def list_coupons(self) -> List[CouponResponse]:
        try:
            result = self.supabase.table("coupon_codes").select("*").order("created_at", desc=True).execute()
            return [CouponResponse(**row) for row in rows(result)]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_coupon(self, coupon_id: str) -> CouponResponse:
        try:
            coupon = row_or_none(
                self.supabase.table("coupon_codes").select("*").eq("id", coupon_id).maybe_single().execute()
            )
            if not coupon:
                raise HTTPException(status_code=404, detail="Coupon not found")
            return CouponResponse(**coupon)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_coupon(self, coupon_data: CouponCreate, user_id: str) -> CouponResponse:
        if not coupon_data.code or not coupon_data.discount_type or not coupon_data.discount_value:
            raise HTTPException(status_code=400, detail="Missing required fields")
        check_discount(coupon_data.discount_type, coupon_data.discount_value)
        try:
            if self._find_by_code(coupon_data.code):
                raise HTTPException(status_code=400, detail="Coupon code already exists")
            data = coupon_data.model_dump(mode="json")
            data["code"] = coupon_data.code.upper()
            data["min_order_amount"] = coupon_data.min_order_amount or 0
            data["valid_from"] = data.get("valid_from") or utcnow().isoformat()
            data["created_by"] = user_id
            coupon = row_or_none(self.supabase.table("coupon_codes").insert(data).execute())
            if not coupon:
                raise HTTPException(status_code=500, detail="Failed to create coupon")
            return CouponResponse(**coupon)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_coupon(self, coupon_id: str, coupon_data: CouponUpdate) -> CouponResponse:
        """Partial update; type and value are checked together against the stored coupon"""
        update_data = coupon_data.model_dump(mode="json", exclude_unset=True)
        if not update_data:
            raise HTTPException(status_code=400, detail="No fields to update")
        try:
            current = row_or_none(
                self.supabase.table("coupon_codes").select("*").eq("id", coupon_id).maybe_single().execute()
            )
            if not current:
                raise HTTPException(status_code=404, detail="Coupon not found")
            if "discount_type" in update_data or "discount_value" in update_data:
                check_discount(
                    update_data.get("discount_type", current.get("discount_type")),
                    update_data.get("discount_value", current.get("discount_value")),
                )
            if coupon_data.code:
                if self._find_by_code(coupon_data.code, exclude_id=coupon_id):
                    raise HTTPException(status_code=400, detail="Coupon code already exists")
                update_data["code"] = coupon_data.code.upper()
            result = self.supabase.table("coupon_codes").update(update_data).eq("id", coupon_id).execute()
            coupon = row_or_none(result)
            if not coupon:
                raise HTTPException(status_code=404, detail="Coupon not found")
            return CouponResponse(**coupon)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_coupon(self, coupon_id: str) -> None:
        try:
            result = self.supabase.table("coupon_codes").delete().eq("id", coupon_id).execute()
            if not rows(result):
                raise HTTPException(status_code=404, detail="Coupon not found")
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def validate_coupon(self, code: Optional[str], order_amount: float) -> Dict[str, Any]:
        """Check a code against an order total and price the discount"""
        if not code:
            raise HTTPException(status_code=400, detail="Coupon code is required")
        try:
            coupon = self._find_by_code(code)
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        if not coupon:
            raise HTTPException(status_code=404, detail="Invalid coupon code")
        check_redeemable(coupon, order_amount)
        return {
            "valid": True,
            "coupon": {
                "id": coupon["id"],
                "code": coupon["code"],
                "description": coupon.get("description"),
                "discount_type": coupon["discount_type"],
                "discount_value": coupon["discount_value"],
                "discount_amount": discount_amount(coupon, order_amount),
            },
        }

    def redeem(self, coupon_id: Optional[str] = None, code: Optional[str] = None) -> None:
        """Count one use of a coupon after a paid order"""
        if coupon_id:
            coupon = row_or_none(
                self.supabase.table("coupon_codes").select("*").eq("id", coupon_id).maybe_single().execute()
            )
        elif code:
            coupon = self._find_by_code(code)
        else:
            return
        if not coupon:
            logger.warning(f"Coupon {coupon_id or code} not found for redemption")
            return
        self.supabase.table("coupon_codes")\
            .update({"current_uses": (coupon.get("current_uses") or 0) + 1})\
            .eq("id", coupon["id"])\
            .execute()
        logger.info(f"Coupon {coupon['code']} redeemed")
