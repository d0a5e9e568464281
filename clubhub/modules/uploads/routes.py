from fastapi import APIRouter, Depends, UploadFile, File
from clubhub.database.supabase_client import get_service_supabase
from clubhub.modules.uploads.schemas import UploadResponse
from clubhub.modules.uploads.service import UploadService
from clubhub.core.dependencies import require_admin
from supabase import Client
from typing import Dict

router = APIRouter(tags=["uploads"])


def get_upload_service(supabase: Client = Depends(get_service_supabase)) -> UploadService:
    return UploadService(supabase)


@router.post("/upload-logo", response_model=UploadResponse)
async def upload_logo(
    file: UploadFile = File(...),
    user_data: Dict = Depends(require_admin),
    service: UploadService = Depends(get_upload_service)
):
    """Upload a team logo"""
    return await service.upload_image(file, "team-logo")


@router.post("/upload-product-image", response_model=UploadResponse)
async def upload_product_image(
    file: UploadFile = File(...),
    user_data: Dict = Depends(require_admin),
    service: UploadService = Depends(get_upload_service)
):
    return await service.upload_image(file, "product")
