from fastapi import APIRouter, Depends, Query, Response
from clubhub.database.supabase_client import get_supabase
from clubhub.modules.posts.schemas import PostCreate, PostUpdate, PostResponse, PostListResponse
from clubhub.modules.posts.service import PostService
from clubhub.core.dependencies import require_admin
from supabase import Client
from typing import Dict, Optional

router = APIRouter(prefix="/posts", tags=["posts"])

NO_CACHE_HEADERS = {
    "Cache-Control": "no-cache, no-store, must-revalidate",
    "Pragma": "no-cache",
    "Expires": "0",
}


def get_post_service(supabase: Client = Depends(get_supabase)) -> PostService:
    return PostService(supabase)


@router.get("", response_model=PostListResponse)
async def list_posts(
    response: Response,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    source: Optional[str] = None,
    category: Optional[str] = None,
    service: PostService = Depends(get_post_service)
):
    """News feed, newest first; never cached"""
    response.headers.update(NO_CACHE_HEADERS)
    return service.list_posts(page=page, limit=limit, source=source, category=category)


@router.get("/{post_id}", response_model=PostResponse)
async def get_post(post_id: str, service: PostService = Depends(get_post_service)):
    return service.get_post(post_id)


@router.post("", response_model=PostResponse, status_code=201)
async def create_post(
    post_data: PostCreate,
    user_data: Dict = Depends(require_admin),
    service: PostService = Depends(get_post_service)
):
    return service.create_post(post_data)


@router.put("/{post_id}", response_model=PostResponse)
async def update_post(
    post_id: str,
    post_data: PostUpdate,
    user_data: Dict = Depends(require_admin),
    service: PostService = Depends(get_post_service)
):
    return service.update_post(post_id, post_data)


@router.delete("/{post_id}")
async def delete_post(
    post_id: str,
    user_data: Dict = Depends(require_admin),
    service: PostService = Depends(get_post_service)
):
    service.delete_post(post_id)
    return {"success": True}
