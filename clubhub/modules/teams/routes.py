from fastapi import APIRouter, Depends
from clubhub.database.supabase_client import get_supabase
from clubhub.modules.teams.schemas import TeamCreate, TeamUpdate, TeamResponse
from clubhub.modules.teams.service import TeamService
from clubhub.core.dependencies import require_admin
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/teams", tags=["teams"])


def get_team_service(supabase: Client = Depends(get_supabase)) -> TeamService:
    return TeamService(supabase)


@router.get("", response_model=List[TeamResponse])
async def list_teams(service: TeamService = Depends(get_team_service)):
    """List teams"""
    return service.list_teams()


@router.post("", response_model=TeamResponse, status_code=201)
async def create_team(
    team_data: TeamCreate,
    user_data: Dict = Depends(require_admin),
    service: TeamService = Depends(get_team_service)
):
    return service.create_team(team_data)


@router.put("/{team_id}", response_model=TeamResponse)
async def update_team(
    team_id: str,
    team_data: TeamUpdate,
    user_data: Dict = Depends(require_admin),
    service: TeamService = Depends(get_team_service)
):
    return service.update_team(team_id, team_data)


@router.delete("/{team_id}", status_code=204)
async def delete_team(
    team_id: str,
    user_data: Dict = Depends(require_admin),
    service: TeamService = Depends(get_team_service)
):
    service.delete_team(team_id)
    return None
