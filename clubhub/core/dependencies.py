"""
Core dependencies for route protection and admin checks
"""

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from clubhub.database.supabase_client import get_supabase, row_or_none
from clubhub.modules.auth.service import AuthService
from supabase import Client
from typing import Dict, Any
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer()


def get_auth_service(supabase: Client = Depends(get_supabase)) -> AuthService:
    return AuthService(supabase)


def get_current_user_id(
    credentials: HTTPAuthorizationCredentials = Security(security),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Extract current user info from JWT token"""
    token = credentials.credentials
    user_data = auth_service.get_current_user(token)
    return user_data


def is_super_user(user_data: dict) -> bool:
    """Check if user is a super user from app_metadata"""
    # app_metadata is set server-side and cannot be modified by users
    app_metadata = user_data.get("app_metadata") or {}
    return app_metadata.get("type") == "super_user"


def is_admin(user_data: Dict[str, Any], supabase: Client) -> bool:
    """Super users, or users whose users row carries role 'admin'"""
    if is_super_user(user_data):
        return True
    try:
        result = supabase.table("users")\
            .select("role")\
            .eq("id", user_data["id"])\
            .maybe_single()\
            .execute()
        user_row = row_or_none(result)
        return bool(user_row and user_row.get("role") == "admin")
    except Exception as e:
        logger.error(f"Error checking admin role: {e}")
        return False


def require_admin(
    user_data: dict = Depends(get_current_user_id),
    supabase: Client = Depends(get_supabase)
) -> dict:
    """Dependency for dashboard-only endpoints"""
    if not is_admin(user_data, supabase):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required"
        )
    return user_data
