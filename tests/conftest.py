import pytest
from fastapi.testclient import TestClient

from clubhub.main import app
from clubhub.core.dependencies import get_current_user_id
from clubhub.core.notifications import get_notification_service
from clubhub.core.payments import get_payment_gateway
from clubhub.database.supabase_client import get_service_supabase, get_supabase
from tests.fakes import FakeGateway, FakeNotifications, FakeSupabase

ADMIN_USER = {
    "id": "admin-1",
    "email": "admin@banga.lt",
    "user_metadata": {},
    "app_metadata": {"type": "super_user"},
}
FAN_USER = {
    "id": "user-1",
    "email": "fan@example.com",
    "user_metadata": {},
    "app_metadata": {},
}


@pytest.fixture
def supabase():
    return FakeSupabase()


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def notifications():
    return FakeNotifications()


@pytest.fixture
def current_user():
    """Mutable holder so a test can switch who is calling"""
    return {"user": ADMIN_USER}


@pytest.fixture
def client(supabase, gateway, notifications, current_user):
    app.dependency_overrides[get_supabase] = lambda: supabase
    app.dependency_overrides[get_service_supabase] = lambda: supabase
    app.dependency_overrides[get_payment_gateway] = lambda: gateway
    app.dependency_overrides[get_notification_service] = lambda: notifications
    app.dependency_overrides[get_current_user_id] = lambda: current_user["user"]
    with TestClient(app) as test_client:
        test_client.headers.update({"Authorization": "Bearer test-token"})
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def as_fan(current_user):
    current_user["user"] = FAN_USER
    return FAN_USER


@pytest.fixture
def event_with_tier(supabase):
    """An upcoming event with one pricing tier that has seats left"""
    supabase.tables["events"] = [{
        "id": "event-1",
        "title": "Banga - Žalgiris",
        "description": "A lygos rungtynės",
        "date": "2099-05-01",
        "time": "18:00",
        "location": "Gargždų stadionas",
        "team1_id": None,
        "team2_id": None,
        "created_at": "2026-01-01T00:00:00+00:00",
    }]
    supabase.tables["pricing_tiers"] = [{
        "id": "tier-1",
        "event_id": "event-1",
        "name": "Standard",
        "price": 10.0,
        "quantity": 100,
        "sold_quantity": 0,
    }]
    return supabase.tables["events"][0], supabase.tables["pricing_tiers"][0]
