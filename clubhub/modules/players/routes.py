from fastapi import APIRouter, Depends
from clubhub.database.supabase_client import get_service_supabase, get_supabase
from clubhub.modules.players.schemas import (
    PlayerCreate, PlayerUpdate, PlayerResponse, PlayerScrapeResponse, CleanDuplicatesResponse
)
from clubhub.modules.players.service import PlayerService
from clubhub.core.dependencies import require_admin
from supabase import Client
from typing import List, Dict, Optional

router = APIRouter(prefix="/players", tags=["players"])


def get_player_service(supabase: Client = Depends(get_supabase)) -> PlayerService:
    return PlayerService(supabase)


def get_player_writer(supabase: Client = Depends(get_service_supabase)) -> PlayerService:
    return PlayerService(supabase)


@router.get("", response_model=List[PlayerResponse])
async def list_players(
    team_key: Optional[str] = None,
    service: PlayerService = Depends(get_player_service)
):
    return service.list_players(team_key)


@router.post("", response_model=PlayerResponse, status_code=201)
async def create_player(
    player_data: PlayerCreate,
    user_data: Dict = Depends(require_admin),
    service: PlayerService = Depends(get_player_service)
):
    return service.create_player(player_data)


@router.post("/scrape", response_model=PlayerScrapeResponse)
async def scrape_players(
    user_data: Dict = Depends(require_admin),
    service: PlayerService = Depends(get_player_writer)
):
    """Scrape every team roster and upsert on (name, team_key)"""
    return await service.scrape_players()


@router.post("/clean-duplicates", response_model=CleanDuplicatesResponse)
async def clean_duplicates(
    user_data: Dict = Depends(require_admin),
    service: PlayerService = Depends(get_player_writer)
):
    return service.clean_duplicates()


@router.post("/clean")
async def clean_players(
    user_data: Dict = Depends(require_admin),
    service: PlayerService = Depends(get_player_writer)
):
    service.clean_all()
    return {"success": True, "message": "Database cleaned successfully"}


@router.put("/{player_id}", response_model=PlayerResponse)
async def update_player(
    player_id: str,
    player_data: PlayerUpdate,
    user_data: Dict = Depends(require_admin),
    service: PlayerService = Depends(get_player_service)
):
    return service.update_player(player_id, player_data)


@router.delete("/{player_id}")
async def delete_player(
    player_id: str,
    user_data: Dict = Depends(require_admin),
    service: PlayerService = Depends(get_player_service)
):
    service.delete_player(player_id)
    return {"success": True}
