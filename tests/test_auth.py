"""
Tests for sign up, sign in, sign out and the page guards
"""

import pytest

from conftest import PASSWORD
from config import SESSION_COOKIE_NAME
from create_admin import create_profile
from utils.auth import verify_password


def _sign_up(client, **overrides):
    payload = {
        "email": "new.user@hotel.com",
        "password": "secret123",
        "password_confirmation": "secret123",
        "first_name": "New",
        "last_name": "User",
    }
    payload.update(overrides)
    return client.post("/auth/sign-up", json=payload)


class TestSignUp:
    def test_sign_up_creates_receptionist_profile(self, client):
        response = _sign_up(client)

        assert response.status_code == 201
        data = response.json()
        assert data["redirect_to"] == "/auth/sign-up-success"
        assert data["email_redirect_to"].endswith("/dashboard")

        login = client.post("/auth/login", data={"username": "new.user@hotel.com", "password": "secret123"})
        assert login.status_code == 200
        me = client.get("/auth/me", headers={"Authorization": f"Bearer {login.json()['access_token']}"})
        assert me.json()["profile"]["role"] == "receptionist"

    def test_passwords_must_match(self, client):
        response = _sign_up(client, password_confirmation="different1")
        assert response.status_code == 400
        assert response.json()["detail"] == "Passwords do not match"

    def test_password_min_length(self, client):
        response = _sign_up(client, password="abc", password_confirmation="abc")
        assert response.status_code == 400
        assert response.json()["detail"] == "Password must be at least 6 characters long"

    def test_admin_role_cannot_be_self_assigned(self, client):
        response = _sign_up(client, role="admin")
        assert response.status_code == 422

    def test_duplicate_email(self, client):
        assert _sign_up(client).status_code == 201
        assert _sign_up(client).status_code == 409


class TestLogin:
    def test_wrong_password(self, client, login):
        login("manager")
        response = client.post("/auth/login", data={"username": "manager@hotel.com", "password": "wrong-pass"})
        assert response.status_code == 401

    def test_login_sets_session_cookie(self, client, login):
        login("manager")
        response = client.post("/auth/login", data={"username": "manager@hotel.com", "password": PASSWORD})
        assert response.status_code == 200
        assert SESSION_COOKIE_NAME in response.cookies

    def test_me_requires_session(self, client):
        assert client.get("/auth/me").status_code == 401

    def test_logout_redirects_to_login(self, login):
        c = login("admin")
        response = c.post("/auth/logout", follow_redirects=False)
        assert response.status_code == 303
        assert response.headers["location"] == "/auth/login"


class TestPageGuards:
    def test_no_session_redirects_to_login(self, client):
        response = client.get("/dashboard/guests", follow_redirects=False)
        assert response.status_code == 303
        assert response.headers["location"] == "/auth/login"

    def test_dashboard_requires_session(self, client):
        response = client.get("/dashboard", follow_redirects=False)
        assert response.headers["location"] == "/auth/login"

    @pytest.mark.parametrize("page", ["/dashboard/staff", "/dashboard/admin", "/dashboard/guests", "/dashboard/bookings"])
    def test_housekeeping_redirected_to_dashboard(self, login, page):
        c = login("housekeeping")
        response = c.get(page, follow_redirects=False)
        assert response.status_code == 303
        assert response.headers["location"] == "/dashboard"

    def test_housekeeping_sees_rooms(self, login):
        c = login("housekeeping")
        response = c.get("/dashboard/rooms")
        assert response.status_code == 200
        assert response.json()["capabilities"]["manage_rooms"] is False

    def test_mutation_without_permission_is_forbidden(self, login):
        c = login("housekeeping")
        response = c.post("/dashboard/bookings", json={"guest_id": 1, "room_id": 1})
        assert response.status_code == 403

    def test_auth_pages(self, client):
        assert client.get("/auth/sign-up").json()["default_role"] == "receptionist"
        assert client.get("/auth/sign-up-success").status_code == 200
        error_page = client.get("/auth/error", params={"error": "access_denied"}).json()
        assert error_page["error"] == "access_denied"


class TestCreateProfile:
    def test_duplicate_email_returns_none(self, db):
        first = create_profile(db, "owner@hotel.com", "owner123", "Olga", "Owner")
        assert first.role == "admin"
        assert verify_password("owner123", first.hashed_password)
        assert create_profile(db, "owner@hotel.com", "other123", "X", "Y") is None
