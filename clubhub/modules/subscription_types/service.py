from supabase import Client
from clubhub.modules.subscription_types.schemas import (
    SubscriptionTypeCreate, SubscriptionTypeUpdate, SubscriptionTypeResponse
)
from clubhub.core.dates import utcnow
from clubhub.database.supabase_client import row_or_none, rows
from typing import List
from fastapi import HTTPException


def _response(row: dict) -> SubscriptionTypeResponse:
    return SubscriptionTypeResponse(**{**row, "features": row.get("features") or []})


class SubscriptionTypeService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_types(self, active_only: bool = False) -> List[SubscriptionTypeResponse]:
        try:
            query = self.supabase.table("subscription_types").select("*")
            if active_only:
                query = query.eq("is_active", True)
            result = query.order("created_at", desc=True).execute()
            return [_response(row) for row in rows(result)]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_type(self, type_id: str) -> SubscriptionTypeResponse:
        try:
            result = self.supabase.table("subscription_types")\
                .select("*")\
                .eq("id", type_id)\
                .maybe_single()\
                .execute()
            row = row_or_none(result)
            if not row:
                raise HTTPException(status_code=404, detail="Subscription type not found")
            return _response(row)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_type(self, type_data: SubscriptionTypeCreate) -> SubscriptionTypeResponse:
        try:
            now = utcnow().isoformat()
            result = self.supabase.table("subscription_types").insert({
                **type_data.model_dump(),
                "created_at": now,
                "updated_at": now,
            }).execute()
            row = row_or_none(result)
            if not row:
                raise HTTPException(status_code=500, detail="Failed to create subscription type")
            return _response(row)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_type(self, type_id: str, type_data: SubscriptionTypeUpdate) -> SubscriptionTypeResponse:
        update_data = type_data.model_dump(exclude_unset=True)
        if not update_data:
            raise HTTPException(status_code=400, detail="No fields to update")
        update_data["updated_at"] = utcnow().isoformat()
        try:
            result = self.supabase.table("subscription_types").update(update_data).eq("id", type_id).execute()
            row = row_or_none(result)
            if not row:
                raise HTTPException(status_code=404, detail="Subscription type not found")
            return _response(row)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_type(self, type_id: str) -> None:
        try:
            result = self.supabase.table("subscription_types").delete().eq("id", type_id).execute()
            if not rows(result):
                raise HTTPException(status_code=404, detail="Subscription type not found or could not be deleted")
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
