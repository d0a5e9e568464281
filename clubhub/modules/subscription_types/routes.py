from fastapi import APIRouter, Depends
from clubhub.database.supabase_client import get_supabase
from clubhub.modules.subscription_types.schemas import (
    SubscriptionTypeCreate, SubscriptionTypeUpdate, SubscriptionTypeResponse
)
from clubhub.modules.subscription_types.service import SubscriptionTypeService
from clubhub.core.dependencies import require_admin
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/subscription-types", tags=["subscription-types"])


def get_subscription_type_service(supabase: Client = Depends(get_supabase)) -> SubscriptionTypeService:
    return SubscriptionTypeService(supabase)


@router.get("", response_model=List[SubscriptionTypeResponse])
async def list_subscription_types(
    user_data: Dict = Depends(require_admin),
    service: SubscriptionTypeService = Depends(get_subscription_type_service)
):
    return service.list_types()


@router.get("/public", response_model=List[SubscriptionTypeResponse])
async def list_public_subscription_types(
    service: SubscriptionTypeService = Depends(get_subscription_type_service)
):
    """Active season-pass plans for the public site"""
    return service.list_types(active_only=True)


@router.post("", response_model=SubscriptionTypeResponse, status_code=201)
async def create_subscription_type(
    type_data: SubscriptionTypeCreate,
    user_data: Dict = Depends(require_admin),
    service: SubscriptionTypeService = Depends(get_subscription_type_service)
):
    return service.create_type(type_data)


@router.get("/{type_id}", response_model=SubscriptionTypeResponse)
async def get_subscription_type(
    type_id: str,
    service: SubscriptionTypeService = Depends(get_subscription_type_service)
):
    return service.get_type(type_id)


@router.put("/{type_id}", response_model=SubscriptionTypeResponse)
async def update_subscription_type(
    type_id: str,
    type_data: SubscriptionTypeUpdate,
    user_data: Dict = Depends(require_admin),
    service: SubscriptionTypeService = Depends(get_subscription_type_service)
):
    return service.update_type(type_id, type_data)


@router.delete("/{type_id}")
async def delete_subscription_type(
    type_id: str,
    user_data: Dict = Depends(require_admin),
    service: SubscriptionTypeService = Depends(get_subscription_type_service)
):
    service.delete_type(type_id)
    return {"message": "Subscription type deleted successfully"}
