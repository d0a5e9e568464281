from fastapi import APIRouter, Depends
from clubhub.database.supabase_client import get_supabase
from clubhub.modules.email_templates.schemas import (
    EmailTemplateCreate, EmailTemplateUpdate, EmailTemplateResponse
)
from clubhub.modules.email_templates.service import EmailTemplateService
from clubhub.core.dependencies import require_admin
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/templates", tags=["email templates"])


def get_template_service(supabase: Client = Depends(get_supabase)) -> EmailTemplateService:
    return EmailTemplateService(supabase)


@router.get("", response_model=List[EmailTemplateResponse])
async def list_templates(
    user_data: Dict = Depends(require_admin),
    service: EmailTemplateService = Depends(get_template_service)
):
    return service.list_templates()


@router.post("", response_model=EmailTemplateResponse, status_code=201)
async def create_template(
    template_data: EmailTemplateCreate,
    user_data: Dict = Depends(require_admin),
    service: EmailTemplateService = Depends(get_template_service)
):
    return service.create_template(template_data)


@router.get("/{name}", response_model=EmailTemplateResponse)
async def get_template(
    name: str,
    user_data: Dict = Depends(require_admin),
    service: EmailTemplateService = Depends(get_template_service)
):
    """Look a template up by its name, e.g. ticket_confirmation"""
    return service.get_by_name(name)


@router.put("/{template_id}", response_model=EmailTemplateResponse)
async def update_template(
    template_id: str,
    template_data: EmailTemplateUpdate,
    user_data: Dict = Depends(require_admin),
    service: EmailTemplateService = Depends(get_template_service)
):
    return service.update_template(template_id, template_data)


@router.delete("/{template_id}")
async def delete_template(
    template_id: str,
    user_data: Dict = Depends(require_admin),
    service: EmailTemplateService = Depends(get_template_service)
):
    service.delete_template(template_id)
    return {"success": True}
