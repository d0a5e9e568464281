from supabase import Client
from clubhub.modules.shop.schemas import ShopOrderCreate, ShopOrderUpdate, ShopOrderResponse
from clubhub.core.dates import utcnow
from clubhub.database.supabase_client import row_or_none, rows
from typing import Any, Dict, List, Optional
from fastapi import HTTPException
import math
import logging
import uuid

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 20


def generate_order_number() -> str:
    return f"ORD-{utcnow().strftime('%Y%m%d')}-{uuid.uuid4().hex[:6].upper()}"


def order_totals(cart_items: List[Dict[str, Any]], discount: Optional[float]) -> Dict[str, float]:
    subtotal = sum(float(item["price"]) * int(item["quantity"]) for item in cart_items)
    discount_amount = float(discount or 0)
    return {
        "subtotal": subtotal,
        "discount_amount": discount_amount,
        "total_amount": subtotal - discount_amount,
    }


def order_item_rows(order_id: str, cart_items: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    return [
        {
            "order_id": order_id,
            "product_id": item.get("product_id"),
            "variant_id": item.get("variant_id"),
            "product_name": item.get("name"),
            "product_sku": item.get("sku"),
            "variant_attributes": item.get("variant_attributes"),
            "quantity": int(item["quantity"]),
            "unit_price": float(item["price"]),
            "total_price": float(item["price"]) * int(item["quantity"]),
        }
        for item in cart_items
    ]


class ShopService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def _items_by_order(self, order_ids: List[str]) -> Dict[str, List[Dict[str, Any]]]:
        if not order_ids:
            return {}
        grouped: Dict[str, List[Dict[str, Any]]] = {}
        result = self.supabase.table("shop_order_items").select("*").in_("order_id", order_ids).execute()
        for item in rows(result):
            grouped.setdefault(item["order_id"], []).append(item)
        return grouped

    def list_orders(self, status: Optional[str] = None, session_id: Optional[str] = None,
                    page: int = 1, limit: int = DEFAULT_PAGE_SIZE) -> Dict[str, Any]:
        """Newest orders first; a session id lookup is not paginated"""
        page = max(page, 1)
        limit = max(limit, 1)
        try:
            query = self.supabase.table("shop_orders").select("*", count="exact")
            if status and status != "all":
                query = query.eq("status", status)
            if session_id:
                query = query.eq("stripe_session_id", session_id)
            query = query.order("created_at", desc=True)
            if not session_id:
                start = (page - 1) * limit
                query = query.range(start, start + limit - 1)
            result = query.execute()

            orders = rows(result)
            items = self._items_by_order([o["id"] for o in orders])
            total = result.count if result.count is not None else len(orders)
            return {
                "orders": [ShopOrderResponse(**o, items=items.get(o["id"], [])) for o in orders],
                "pagination": {
                    "page": page,
                    "limit": limit,
                    "total": total,
                    "total_pages": math.ceil(total / limit),
                },
            }
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_order(self, order_id: str) -> ShopOrderResponse:
        try:
            order = row_or_none(
                self.supabase.table("shop_orders").select("*").eq("id", order_id).maybe_single().execute()
            )
            if not order:
                raise HTTPException(status_code=404, detail="Order not found")
            return ShopOrderResponse(**order, items=self._items_by_order([order_id]).get(order_id, []))
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def insert_order(self, order_data: Dict[str, Any], cart_items: List[Dict[str, Any]],
                     created_by: Optional[str], status: str = "pending") -> Dict[str, Any]:
        """Insert the order row and its items; totals come from the cart"""
        order_row = {
            "order_number": generate_order_number(),
            "customer_name": order_data.get("customer_name"),
            "customer_email": order_data.get("customer_email"),
            "customer_phone": order_data.get("customer_phone"),
            "delivery_address": order_data.get("delivery_address"),
            "coupon_code": order_data.get("coupon_code"),
            "coupon_discount": order_data.get("coupon_discount"),
            "stripe_session_id": order_data.get("stripe_session_id"),
            "status": status,
            "created_by": created_by,
            **order_totals(cart_items, order_data.get("coupon_discount")),
        }
        order = row_or_none(self.supabase.table("shop_orders").insert(order_row).execute())
        if not order:
            raise HTTPException(status_code=500, detail="Failed to create order")
        items = order_item_rows(order["id"], cart_items)
        self.supabase.table("shop_order_items").insert(items).execute()
        logger.info(f"Shop order {order['order_number']} created with {len(items)} items")
        return {**order, "items": items}

    def create_order(self, order_data: ShopOrderCreate, user_id: str) -> ShopOrderResponse:
        if not (order_data.customer_name and order_data.customer_email
                and order_data.delivery_address and order_data.cart_items):
            raise HTTPException(status_code=400, detail="Missing required fields")
        try:
            data = order_data.model_dump()
            order = self.insert_order(data, data["cart_items"], created_by=user_id)
            return ShopOrderResponse(**order)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_order(self, order_id: str, order_data: ShopOrderUpdate) -> ShopOrderResponse:
        update_data = order_data.model_dump(mode="json", exclude_unset=True)
        update_data["updated_at"] = utcnow().isoformat()
        try:
            result = self.supabase.table("shop_orders").update(update_data).eq("id", order_id).execute()
            order = row_or_none(result)
            if not order:
                raise HTTPException(status_code=404, detail="Order not found")
            return ShopOrderResponse(**order)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_order(self, order_id: str) -> None:
        try:
            self.supabase.table("shop_order_items").delete().eq("order_id", order_id).execute()
            result = self.supabase.table("shop_orders").delete().eq("id", order_id).execute()
            if not rows(result):
                raise HTTPException(status_code=404, detail="Order not found")
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def ship_order(self, order_id: str, tracking_number: Optional[str], notifications) -> Dict[str, Any]:
        """Mark shipped and email the customer; a failed email does not undo the shipment"""
        if not tracking_number:
            raise HTTPException(status_code=400, detail="Tracking number is required")
        try:
            now = utcnow().isoformat()
            result = self.supabase.table("shop_orders").update({
                "status": "shipped",
                "tracking_number": tracking_number,
                "shipped_at": now,
                "updated_at": now,
            }).eq("id", order_id).execute()
            if not row_or_none(result):
                raise HTTPException(status_code=404, detail="Order not found")
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        try:
            notifications.send_shop_order_shipping_confirmation(order_id, tracking_number)
        except Exception as e:
            logger.error(f"Failed to send shipping confirmation for order {order_id}: {e}")
        return {"success": True, "message": "Order marked as shipped"}
