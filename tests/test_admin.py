"""
Comptes admin, session par cookie et tableau de bord.
"""

from datetime import timedelta
from unittest import mock

from jose import jwt

from conftest import ADMIN_EMAIL, ADMIN_PASSWORD, make_artwork
from storefront import auth, config
from storefront.auth import create_access_token, get_password_hash, verify_password, verify_token
from storefront.repositories.admin_repo import InMemoryAdminRepository


class TestTokens:

    def test_round_trip(self):
        token = create_access_token("admin@example.com")
        assert verify_token(token) == "admin@example.com"

    def test_expired_token(self):
        token = create_access_token("admin@example.com", expires_delta=timedelta(seconds=-10))
        assert verify_token(token) is None

    def test_garbage_token(self):
        assert verify_token("not-a-token") is None
        assert verify_token("") is None

    def test_password_hash(self):
        hashed = get_password_hash("secret123")
        assert hashed != "secret123"
        assert verify_password("secret123", hashed)
        assert not verify_password("wrong", hashed)


def test_repository_rejects_duplicate_email():
    repository = InMemoryAdminRepository()
    repository.create("Admin@Example.com", "hash")

    assert repository.get_by_email("admin@example.com")["email"] == "admin@example.com"
    try:
        repository.create("admin@example.com", "hash")
    except ValueError as e:
        assert "already exists" in str(e)
    else:
        raise AssertionError("duplicate account accepted")


class TestSignup:

    def test_short_password(self, client):
        r = client.post("/api/admin/signup", json={
            "email": "a@example.com", "password": "12345", "confirmPassword": "12345",
        })
        assert r.status_code == 422

    def test_password_mismatch(self, client):
        r = client.post("/api/admin/signup", json={
            "email": "a@example.com", "password": "secret123", "confirmPassword": "secret124",
        })
        assert r.status_code == 422

    def test_duplicate_account(self, admin_client):
        r = admin_client.post("/api/admin/signup", json={
            "email": ADMIN_EMAIL, "password": ADMIN_PASSWORD, "confirmPassword": ADMIN_PASSWORD,
        })
        assert r.status_code == 400


class TestSession:

    def test_login_sets_cookie_and_verify(self, admin_client):
        assert admin_client.cookies.get("auth_token")
        r = admin_client.get("/api/admin/verify")
        assert r.status_code == 200
        assert r.json() == {"valid": True, "email": ADMIN_EMAIL}

    def test_wrong_password(self, admin_client):
        r = admin_client.post("/api/admin/login", json={"email": ADMIN_EMAIL, "password": "nope"})
        assert r.status_code == 401

    def test_verify_without_cookie(self, client):
        assert client.get("/api/admin/verify").status_code == 401

    def test_logout_clears_session(self, admin_client):
        admin_client.post("/api/admin/logout")
        assert admin_client.get("/api/admin/verify").status_code == 401


def test_dashboard_stats(admin_client, catalog):
    make_artwork(catalog, category="shop", isForSale=True)

    r = admin_client.get("/api/admin/dashboard/stats")
    assert r.status_code == 200
    data = r.json()
    assert data["total_artworks"] == 1
    assert data["upload_limit"] == 15
    assert data["slots_remaining"] == 14
    assert data["shop_count"] == 1


def test_dashboard_requires_auth(client):
    assert client.get("/api/admin/dashboard/stats").status_code == 401


def test_health(client):
    r = client.get("/")
    assert r.status_code == 200
    assert r.json()["status"] == "healthy"
    assert client.get("/api").json()["endpoints"]["cart"] == "/api/cart"


def test_serverless_handler_wraps_app():
    from storefront.main import app
    from storefront.serverless import handler

    assert handler.app is app


class TestSigningKey:

    def test_unset_key_uses_random_process_key(self):
        with mock.patch.object(config, "SECRET_KEY", None), mock.patch.object(auth, "_process_key", None):
            forged = jwt.encode({"sub": "attacker@example.com"}, "change-this-secret-in-production", algorithm="HS256")
            assert verify_token(forged) is None

            token = create_access_token("admin@example.com")
            assert verify_token(token) == "admin@example.com"
            assert auth.get_signing_key() == auth.get_signing_key()

    def test_forged_cookie_is_rejected(self, client):
        forged = jwt.encode({"sub": "attacker@example.com"}, "change-this-secret-in-production", algorithm="HS256")
        client.cookies.set("auth_token", forged)

        assert client.get("/api/admin/dashboard/stats").status_code == 401
