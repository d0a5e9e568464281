from fastapi import APIRouter, Depends, Query
from clubhub.database.supabase_client import get_supabase
from clubhub.modules.shop.schemas import (
    ShopOrderCreate, ShopOrderUpdate, ShopOrderResponse, ShopOrderListResponse, ShipOrderRequest
)
from clubhub.modules.shop.service import ShopService, DEFAULT_PAGE_SIZE
from clubhub.core.dependencies import get_current_user_id, require_admin
from clubhub.core.notifications import NotificationService, get_notification_service
from supabase import Client
from typing import Dict, Optional

router = APIRouter(prefix="/shop", tags=["shop"])


def get_shop_service(supabase: Client = Depends(get_supabase)) -> ShopService:
    return ShopService(supabase)


@router.get("/orders", response_model=ShopOrderListResponse)
async def list_orders(
    status: Optional[str] = None,
    session_id: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=100),
    user_data: Dict = Depends(require_admin),
    service: ShopService = Depends(get_shop_service)
):
    return service.list_orders(status=status, session_id=session_id, page=page, limit=limit)


@router.post("/orders", response_model=ShopOrderResponse, status_code=201)
async def create_order(
    order_data: ShopOrderCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: ShopService = Depends(get_shop_service)
):
    return service.create_order(order_data, user_data["id"])


@router.get("/orders/{order_id}", response_model=ShopOrderResponse)
async def get_order(
    order_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: ShopService = Depends(get_shop_service)
):
    return service.get_order(order_id)


@router.put("/orders/{order_id}", response_model=ShopOrderResponse)
async def update_order(
    order_id: str,
    order_data: ShopOrderUpdate,
    user_data: Dict = Depends(require_admin),
    service: ShopService = Depends(get_shop_service)
):
    return service.update_order(order_id, order_data)


@router.delete("/orders/{order_id}", status_code=204)
async def delete_order(
    order_id: str,
    user_data: Dict = Depends(require_admin),
    service: ShopService = Depends(get_shop_service)
):
    service.delete_order(order_id)
    return None


@router.post("/orders/{order_id}/ship")
async def ship_order(
    order_id: str,
    request: ShipOrderRequest,
    user_data: Dict = Depends(require_admin),
    service: ShopService = Depends(get_shop_service),
    notifications: NotificationService = Depends(get_notification_service)
):
    """Mark an order shipped and email the tracking number"""
    return service.ship_order(order_id, request.tracking_number, notifications)
