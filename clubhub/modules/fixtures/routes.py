from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool
from clubhub.database.supabase_client import get_supabase
from clubhub.modules.fixtures.schemas import (
    FixtureResponse, FixtureUpdate, MatchCreate, FixtureScrapeResponse
)
from clubhub.modules.fixtures.service import FixtureService
from clubhub.core.dependencies import get_current_user_id, require_admin
from supabase import Client
from typing import List, Dict, Optional

router = APIRouter(prefix="/fixtures", tags=["fixtures"])
matches_router = APIRouter(prefix="/matches", tags=["matches"])


def get_fixture_service(supabase: Client = Depends(get_supabase)) -> FixtureService:
    return FixtureService(supabase)


@router.post("/scrape", response_model=FixtureScrapeResponse)
async def scrape_fixtures(
    user_data: Dict = Depends(require_admin),
    service: FixtureService = Depends(get_fixture_service)
):
    """Scrape fixtures (with match statistics) for every configured league"""
    return await run_in_threadpool(service.scrape_fixtures, user_data["id"])


@router.get("", response_model=List[FixtureResponse])
async def list_fixtures(
    league: Optional[str] = None,
    user_data: Dict = Depends(require_admin),
    service: FixtureService = Depends(get_fixture_service)
):
    return service.list_fixtures(league)


@router.get("/public", response_model=List[FixtureResponse])
async def list_public_fixtures(
    league: Optional[str] = None,
    service: FixtureService = Depends(get_fixture_service)
):
    return service.list_fixtures(league)


@router.get("/{fingerprint}", response_model=FixtureResponse)
async def get_fixture(fingerprint: str, service: FixtureService = Depends(get_fixture_service)):
    return service.get_fixture(fingerprint)


@router.put("/{fingerprint}", response_model=FixtureResponse)
async def update_fixture(
    fingerprint: str,
    fixture_data: FixtureUpdate,
    user_data: Dict = Depends(require_admin),
    service: FixtureService = Depends(get_fixture_service)
):
    return service.update_fixture(fingerprint, fixture_data)


@router.delete("/{fingerprint}")
async def delete_fixture(
    fingerprint: str,
    user_data: Dict = Depends(require_admin),
    service: FixtureService = Depends(get_fixture_service)
):
    service.delete_fixture(fingerprint)
    return {"success": True}


@matches_router.get("", response_model=List[FixtureResponse])
async def list_matches(
    user_data: Dict = Depends(get_current_user_id),
    service: FixtureService = Depends(get_fixture_service)
):
    return service.list_fixtures(newest_first=True)


@matches_router.post("", response_model=FixtureResponse, status_code=201)
async def create_match(
    match_data: MatchCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: FixtureService = Depends(get_fixture_service)
):
    return service.create_match(match_data, user_data["id"])


@matches_router.get("/upcoming", response_model=Optional[FixtureResponse])
async def upcoming_match(service: FixtureService = Depends(get_fixture_service)):
    """Next club match, or null"""
    return service.upcoming_match()


@matches_router.put("/{fingerprint}", response_model=FixtureResponse)
async def update_match(
    fingerprint: str,
    match_data: FixtureUpdate,
    user_data: Dict = Depends(get_current_user_id),
    service: FixtureService = Depends(get_fixture_service)
):
    """Only the match owner can edit it"""
    return service.update_fixture(fingerprint, match_data, owner_id=user_data["id"])


@matches_router.delete("/{fingerprint}")
async def delete_match(
    fingerprint: str,
    user_data: Dict = Depends(get_current_user_id),
    service: FixtureService = Depends(get_fixture_service)
):
    service.delete_fixture(fingerprint, owner_id=user_data["id"])
    return {"success": True, "message": f"Match {fingerprint} deleted"}
