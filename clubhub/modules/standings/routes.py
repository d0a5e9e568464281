from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool
from clubhub.database.supabase_client import get_supabase
from clubhub.modules.standings.schemas import StandingsResponse, StandingsScrapeResponse
from clubhub.modules.standings.service import StandingsService
from clubhub.core.dependencies import require_admin
from supabase import Client
from typing import List, Dict, Optional

router = APIRouter(prefix="/standings", tags=["standings"])


def get_standings_service(supabase: Client = Depends(get_supabase)) -> StandingsService:
    return StandingsService(supabase)


@router.post("/scrape", response_model=StandingsScrapeResponse)
async def scrape_standings(
    user_data: Dict = Depends(require_admin),
    service: StandingsService = Depends(get_standings_service)
):
    return await run_in_threadpool(service.scrape_standings)


@router.get("", response_model=List[StandingsResponse])
async def list_standings(
    league: Optional[str] = None,
    service: StandingsService = Depends(get_standings_service)
):
    return service.list_standings(league)


@router.get("/{league_key}", response_model=StandingsResponse)
async def get_standings(league_key: str, service: StandingsService = Depends(get_standings_service)):
    return service.get_standings(league_key)
