from supabase import Client
from clubhub.modules.posts.schemas import PostCreate, PostUpdate, PostResponse
from clubhub.core.dates import utcnow
from clubhub.database.supabase_client import row_or_none, rows
from typing import Any, Dict, Optional
from fastapi import HTTPException
import math
import uuid


class PostService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_posts(self, page: int = 1, limit: int = 10,
                   source: Optional[str] = None, category: Optional[str] = None) -> Dict[str, Any]:
        """Newest posts first, one page at a time"""
        try:
            query = self.supabase.table("banga_posts")\
                .select("*", count="exact")\
                .order("published_date", desc=True)
            if source:
                query = query.eq("source", source)
            if category:
                query = query.eq("category", category)
            start = (page - 1) * limit
            result = query.range(start, start + limit - 1).execute()
            total = result.count or 0
            return {
                "posts": [PostResponse(**row) for row in rows(result)],
                "pagination": {
                    "page": page,
                    "limit": limit,
                    "total": total,
                    "total_pages": math.ceil(total / limit),
                },
            }
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_post(self, post_id: str) -> PostResponse:
        try:
            post = row_or_none(
                self.supabase.table("banga_posts").select("*").eq("id", post_id).maybe_single().execute()
            )
            if not post:
                raise HTTPException(status_code=404, detail="Post not found")
            return PostResponse(**post)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_post(self, post_data: PostCreate) -> PostResponse:
        try:
            data = post_data.model_dump(mode="json")
            data["id"] = data.get("id") or str(uuid.uuid4())
            post = row_or_none(self.supabase.table("banga_posts").insert(data).execute())
            if not post:
                raise HTTPException(status_code=500, detail="Failed to create post")
            return PostResponse(**post)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_post(self, post_id: str, post_data: PostUpdate) -> PostResponse:
        update_data = post_data.model_dump(mode="json", exclude_unset=True)
        if not update_data:
            raise HTTPException(status_code=400, detail="No fields to update")
        update_data["updated_at"] = utcnow().isoformat()
        try:
            post = row_or_none(self.supabase.table("banga_posts").update(update_data).eq("id", post_id).execute())
            if not post:
                raise HTTPException(status_code=404, detail="Post not found")
            return PostResponse(**post)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_post(self, post_id: str) -> None:
        try:
            result = self.supabase.table("banga_posts").delete().eq("id", post_id).execute()
            if not rows(result):
                raise HTTPException(status_code=404, detail="Post not found")
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
