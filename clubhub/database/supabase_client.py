from supabase import create_client, Client
from clubhub.config import settings
from typing import Any, Dict, List, Optional


class SupabaseClient:
    _client: Client = None
    _service_client: Client = None

    @classmethod
    def get_client(cls) -> Client:
        if cls._client is None:
            cls._client = create_client(settings.supabase_url, settings.supabase_key)
        return cls._client

    @classmethod
    def get_service_client(cls) -> Client:
        """Client with service_role key; bypasses RLS. Used by webhooks, scrapers and emails."""
        if cls._service_client is None and settings.supabase_service_role_key:
            cls._service_client = create_client(
                settings.supabase_url, settings.supabase_service_role_key
            )
        return cls._service_client or cls.get_client()


def get_supabase() -> Client:
    return SupabaseClient.get_client()


def get_service_supabase() -> Client:
    return SupabaseClient.get_service_client()


def row_or_none(result) -> Optional[Dict[str, Any]]:
    """First row of a query result. maybe_single() may hand back None instead of a response."""
    if not result or not result.data:
        return None
    if isinstance(result.data, list):
        return result.data[0]
    return result.data


def rows(result) -> List[Dict[str, Any]]:
    if not result or not result.data:
        return []
    return result.data
