from fastapi import APIRouter, Depends
from clubhub.database.supabase_client import get_supabase
from clubhub.modules.fans.schemas import FanResponse
from clubhub.modules.fans.service import FanService
from clubhub.core.dependencies import require_admin
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/fans", tags=["fans"])


def get_fan_service(supabase: Client = Depends(get_supabase)) -> FanService:
    return FanService(supabase)


@router.get("", response_model=List[FanResponse])
async def list_fans(
    user_data: Dict = Depends(require_admin),
    service: FanService = Depends(get_fan_service)
):
    """Ticket buyers and season-pass holders, one entry per email"""
    return service.list_fans()
