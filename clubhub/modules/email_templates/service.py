from supabase import Client
from clubhub.modules.email_templates.schemas import (
    EmailTemplateCreate, EmailTemplateUpdate, EmailTemplateResponse
)
from clubhub.core.dates import utcnow
from clubhub.database.supabase_client import row_or_none, rows
from typing import List
from fastapi import HTTPException


class EmailTemplateService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_templates(self) -> List[EmailTemplateResponse]:
        try:
            result = self.supabase.table("email_templates").select("*").order("name").execute()
            return [EmailTemplateResponse(**row) for row in rows(result)]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_by_name(self, name: str) -> EmailTemplateResponse:
        try:
            template = row_or_none(
                self.supabase.table("email_templates").select("*").eq("name", name).maybe_single().execute()
            )
            if not template:
                raise HTTPException(status_code=404, detail="Template not found")
            return EmailTemplateResponse(**template)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_template(self, template_data: EmailTemplateCreate) -> EmailTemplateResponse:
        """Create a template; names are unique"""
        try:
            existing = row_or_none(
                self.supabase.table("email_templates")
                .select("id")
                .eq("name", template_data.name)
                .maybe_single()
                .execute()
            )
            if existing:
                raise HTTPException(status_code=400, detail="Template with this name already exists")
            template = row_or_none(
                self.supabase.table("email_templates").insert(template_data.model_dump()).execute()
            )
            if not template:
                raise HTTPException(status_code=500, detail="Failed to create template")
            return EmailTemplateResponse(**template)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_template(self, template_id: str, template_data: EmailTemplateUpdate) -> EmailTemplateResponse:
        update_data = template_data.model_dump(exclude_unset=True)
        if not update_data:
            raise HTTPException(status_code=400, detail="No fields to update")
        update_data["updated_at"] = utcnow().isoformat()
        try:
            template = row_or_none(
                self.supabase.table("email_templates").update(update_data).eq("id", template_id).execute()
            )
            if not template:
                raise HTTPException(status_code=404, detail="Template not found")
            return EmailTemplateResponse(**template)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_template(self, template_id: str) -> None:
        try:
            result = self.supabase.table("email_templates").delete().eq("id", template_id).execute()
            if not rows(result):
                raise HTTPException(status_code=404, detail="Template not found")
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
