from fastapi import APIRouter, Depends
from clubhub.database.supabase_client import get_supabase
from clubhub.modules.stats.schemas import StatsResponse
from clubhub.modules.stats.service import StatsService
from clubhub.core.dependencies import require_admin
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/stats", tags=["stats"])


def get_stats_service(supabase: Client = Depends(get_supabase)) -> StatsService:
    return StatsService(supabase)


@router.get("", response_model=StatsResponse)
async def get_stats(
    user_data: Dict = Depends(require_admin),
    service: StatsService = Depends(get_stats_service)
):
    return service.get_stats()
