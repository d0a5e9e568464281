from types import SimpleNamespace

import pytest

from clubhub.modules.auth import service as auth_service_module
from clubhub.modules.auth.service import AuthService, _AUTH_USER_CACHE


class StubAuth:
    def __init__(self, fail_with=None):
        self.fail_with = fail_with
        self.user = SimpleNamespace(id="user-9", email="ona@example.com", user_metadata={"full_name": "Ona"},
                                    app_metadata={}, created_at="2026-01-01T00:00:00+00:00")
        self.get_user_calls = 0

    def sign_up(self, credentials):
        if self.fail_with:
            raise self.fail_with
        return SimpleNamespace(user=self.user)

    def sign_in_with_password(self, credentials):
        if self.fail_with:
            raise self.fail_with
        return SimpleNamespace(user=self.user, session=SimpleNamespace(access_token="jwt-token"))

    def get_user(self, jwt):
        self.get_user_calls += 1
        return SimpleNamespace(user=self.user)

    def sign_out(self):
        return None


@pytest.fixture
def auth(supabase):
    supabase.auth = StubAuth()
    return supabase.auth


def test_register(client, auth):
    response = client.post("/api/auth/register", json={"email": "ona@example.com", "password": "slaptas123"})

    assert response.status_code == 201
    assert response.json() == {"user_id": "user-9", "email": "ona@example.com",
                               "message": "User registered successfully"}


def test_register_existing_user(client, auth):
    auth.fail_with = RuntimeError("User already registered")

    response = client.post("/api/auth/register", json={"email": "ona@example.com", "password": "slaptas123"})

    assert response.status_code == 400
    assert response.json()["detail"] == "User already exists"


def test_login(client, auth):
    response = client.post("/api/auth/login", json={"email": "ona@example.com", "password": "slaptas123"})

    assert response.json()["access_token"] == "jwt-token"


def test_login_with_bad_password(client, auth):
    auth.fail_with = RuntimeError("Invalid login credentials")

    response = client.post("/api/auth/login", json={"email": "ona@example.com", "password": "blogas"})

    assert response.status_code == 401


def test_current_user_lookup_is_cached(supabase, auth):
    _AUTH_USER_CACHE.clear()
    service = AuthService(supabase)

    first = service.get_current_user("jwt-token")
    second = service.get_current_user("jwt-token")

    assert first == second
    assert first["id"] == "user-9"
    assert auth.get_user_calls == 1
    _AUTH_USER_CACHE.clear()


def test_full_cache_drops_expired_lookups(supabase, auth, monkeypatch):
    _AUTH_USER_CACHE.clear()
    monkeypatch.setattr(auth_service_module, "_AUTH_CACHE_MAX_SIZE", 2)
    _AUTH_USER_CACHE["stale-1"] = ({"id": "old"}, 0.0)
    _AUTH_USER_CACHE["stale-2"] = ({"id": "old"}, 0.0)

    AuthService(supabase).get_current_user("jwt-token")

    assert "stale-1" not in _AUTH_USER_CACHE
    assert len(_AUTH_USER_CACHE) == 1
    AuthService(supabase).get_current_user("jwt-token")
    assert auth.get_user_calls == 1
    _AUTH_USER_CACHE.clear()


def test_me_reports_admin_flag(client, as_fan):
    body = client.get("/api/auth/me").json()

    assert body["id"] == "user-1"
    assert body["is_admin"] is False


def test_users_row_role_grants_admin(client, supabase, as_fan):
    supabase.tables["users"] = [{"id": "user-1", "role": "admin"}]

    assert client.get("/api/auth/me").json()["is_admin"] is True


def test_register_organization_makes_caller_admin(client, supabase, as_fan):
    response = client.post("/api/auth/register-org", json={"organization_name": "  FK Banga  "})

    assert response.status_code == 201
    assert response.json()["name"] == "FK Banga"
    assert supabase.rows("users")[0]["role"] == "admin"
    assert supabase.rows("users")[0]["corporation_id"] == response.json()["id"]


def test_register_organization_needs_name(client, as_fan):
    response = client.post("/api/auth/register-org", json={"organization_name": "   "})

    assert response.status_code == 400


def test_upload_logo(client, supabase):
    response = client.post("/api/upload-logo", files={"file": ("banga.PNG", b"\x89PNG...", "image/png")})

    body = response.json()
    assert body["success"] is True
    assert body["filename"].startswith("team-logo-")
    assert body["filename"].endswith(".png")
    assert body["url"] == f"https://storage.test/team-logo/{body['filename']}"
    assert supabase.storage.files[("team-logo", body["filename"])] == b"\x89PNG..."


def test_upload_rejects_non_images(client):
    response = client.post("/api/upload-product-image", files={"file": ("notes.txt", b"hello", "text/plain")})

    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid file type. Only images are allowed."


def test_upload_rejects_large_files(client, monkeypatch):
    from clubhub.config import settings

    monkeypatch.setattr(settings, "max_upload_size", 4)

    response = client.post("/api/upload-product-image", files={"file": ("big.jpg", b"123456", "image/jpeg")})

    assert response.status_code == 400
    assert response.json()["detail"].startswith("File too large")
