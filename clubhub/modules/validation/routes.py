from fastapi import APIRouter, Depends
from clubhub.database.supabase_client import get_supabase
from clubhub.modules.validation.schemas import QRValidateRequest, QRValidationResponse
from clubhub.modules.validation.service import QRValidationService
from clubhub.core.dependencies import get_current_user_id
from supabase import Client
from typing import Dict

router = APIRouter(tags=["validation"])


def get_validation_service(supabase: Client = Depends(get_supabase)) -> QRValidationService:
    return QRValidationService(supabase)


@router.post("/validate-qr", response_model=QRValidationResponse)
async def validate_qr(
    request: QRValidateRequest,
    user_data: Dict = Depends(get_current_user_id),
    service: QRValidationService = Depends(get_validation_service)
):
    """Scan a ticket or season pass QR code"""
    return service.validate(request.qr_data)
