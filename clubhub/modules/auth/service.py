import hashlib
import time
from supabase import Client
from clubhub.modules.auth.schemas import (
    LoginRequest, RegisterRequest, TokenResponse, RegisterResponse, OrganizationResponse
)
from clubhub.database.supabase_client import row_or_none
from fastapi import HTTPException
from typing import Dict, Any, Optional
import logging

logger = logging.getLogger(__name__)

# token hash -> (user dict, monotonic expiry); the dashboard fires many requests per page with one token
_AUTH_USER_CACHE: Dict[str, tuple] = {}
_AUTH_CACHE_TTL_SEC = 60
_AUTH_CACHE_MAX_SIZE = 500

DUPLICATE_USER_HINTS = ("already registered", "already exists")
BAD_CREDENTIAL_HINTS = ("invalid", "credentials")
BAD_TOKEN_HINTS = ("jwt", "expired", "invalid")


def _token_key(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


def _mentions(error: Exception, hints) -> bool:
    message = str(error).lower()
    return any(hint in message for hint in hints)


def _cached_user(key: str) -> Optional[Dict[str, Any]]:
    entry = _AUTH_USER_CACHE.get(key)
    if not entry:
        return None
    user_data, expiry = entry
    if time.monotonic() >= expiry:
        _AUTH_USER_CACHE.pop(key, None)
        return None
    return user_data


def _prune_expired(now: float) -> None:
    for key in [k for k, (_, expiry) in _AUTH_USER_CACHE.items() if now >= expiry]:
        del _AUTH_USER_CACHE[key]


def _remember_user(key: str, user_data: Dict[str, Any]) -> None:
    now = time.monotonic()
    if len(_AUTH_USER_CACHE) >= _AUTH_CACHE_MAX_SIZE:
        _prune_expired(now)
    if len(_AUTH_USER_CACHE) < _AUTH_CACHE_MAX_SIZE:
        _AUTH_USER_CACHE[key] = (user_data, now + _AUTH_CACHE_TTL_SEC)


class AuthService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def register(self, register_data: RegisterRequest) -> RegisterResponse:
        """Sign up a fan account with Supabase Auth"""
        metadata = {"full_name": register_data.full_name} if register_data.full_name else {}
        try:
            response = self.supabase.auth.sign_up({
                "email": register_data.email,
                "password": register_data.password,
                "options": {"data": metadata}
            })
        except Exception as e:
            if _mentions(e, DUPLICATE_USER_HINTS):
                raise HTTPException(status_code=400, detail="User already exists")
            logger.error(f"Registration failed for {register_data.email}: {e}")
            raise HTTPException(status_code=500, detail=f"Registration failed: {e}")

        user = response.user
        if not user:
            raise HTTPException(status_code=400, detail="Failed to register user")
        return RegisterResponse(
            user_id=user.id,
            email=user.email or register_data.email,
            message="User registered successfully"
        )

    def login(self, login_data: LoginRequest) -> TokenResponse:
        try:
            response = self.supabase.auth.sign_in_with_password({
                "email": login_data.email,
                "password": login_data.password
            })
        except Exception as e:
            if _mentions(e, BAD_CREDENTIAL_HINTS):
                raise HTTPException(status_code=401, detail="Invalid email or password")
            raise HTTPException(status_code=500, detail=f"Login failed: {e}")

        if not response.user or not response.session:
            raise HTTPException(status_code=401, detail="Invalid credentials")
        return TokenResponse(
            access_token=response.session.access_token,
            token_type="bearer",
            user_id=response.user.id,
            email=response.user.email or login_data.email
        )

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Resolve a bearer token to the Supabase user, cached for a minute"""
        key = _token_key(token)
        cached = _cached_user(key)
        if cached is not None:
            return cached

        try:
            response = self.supabase.auth.get_user(jwt=token)
        except Exception as e:
            detail = "Invalid or expired token" if _mentions(e, BAD_TOKEN_HINTS) else "Authentication failed"
            raise HTTPException(status_code=401, detail=detail)

        user = response.user if response else None
        if not user:
            raise HTTPException(status_code=401, detail="Invalid or expired token")
        user_data = {
            "id": user.id,
            "email": user.email,
            "user_metadata": user.user_metadata or {},
            "app_metadata": user.app_metadata or {},
            "created_at": user.created_at,
        }
        _remember_user(key, user_data)
        return user_data

    def logout(self, token: str) -> bool:
        # JWTs stay valid until expiry; forgetting the cached lookup is the server-side part
        _AUTH_USER_CACHE.pop(_token_key(token), None)
        try:
            self.supabase.auth.sign_out()
        except Exception as e:
            logger.warning(f"Sign out failed: {e}")
            return False
        return True

    def register_organization(self, user_data: Dict[str, Any], organization_name: str) -> OrganizationResponse:
        """Create an organisation owned by the caller and make them its admin"""
        name = organization_name.strip()
        if not name:
            raise HTTPException(status_code=400, detail="Organization name is required")
        try:
            corporation = row_or_none(
                self.supabase.table("corporations").insert({"name": name, "owner_id": user_data["id"]}).execute()
            )
            if not corporation:
                raise HTTPException(status_code=500, detail="Failed to create organization")

            self.supabase.table("users").upsert({
                "id": user_data["id"],
                "email": user_data.get("email"),
                "role": "admin",
                "corporation_id": corporation["id"]
            }).execute()
            logger.info(f"Organization {corporation['id']} registered by {user_data['id']}")
            return OrganizationResponse(**corporation)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
