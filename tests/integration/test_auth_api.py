# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Integration tests for authentication endpoints."""

from datetime import timedelta

from src.models import UserRole
from src.security import create_access_token

REGISTRATION = {
    "name": "Farai Ncube",
    "email": "Farai@ZimBuild.co.zw",
    "password": "Secret123!",
    "department": "management",
}


class TestRegister:
    def test_first_user_becomes_admin(self, client):
        response = client.post("/api/auth/register", json=REGISTRATION)
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["token"]
        assert data["user"]["role"] == "admin"
        assert data["user"]["email"] == "farai@zimbuild.co.zw"
        assert "hashedPassword" not in data["user"]

        response = client.post(
            "/api/auth/register",
            json={**REGISTRATION, "email": "tatenda@zimbuild.co.zw"},
        )
        assert response.json()["data"]["user"]["role"] == "viewer"

    def test_duplicate_email(self, client):
        client.post("/api/auth/register", json=REGISTRATION)
        response = client.post("/api/auth/register", json=REGISTRATION)
        assert response.status_code == 400
        assert response.json()["message"] == "A user with this email already exists"

    def test_short_password(self, client):
        response = client.post(
            "/api/auth/register", json={**REGISTRATION, "password": "12345"}
        )
        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "password"


class TestLogin:
    def test_login_returns_usable_token(self, client, admin_user):
        response = client.post(
            "/api/auth/login",
            json={"email": admin_user.email, "password": "testpassword123"},
        )
        assert response.status_code == 200
        data = response.json()["data"]
        assert data["user"]["lastLogin"] is not None

        profile = client.get(
            "/api/auth/profile",
            headers={"Authorization": f"Bearer {data['token']}"},
        )
        assert profile.status_code == 200
        assert profile.json()["data"]["user"]["id"] == str(admin_user.id)

    def test_wrong_password(self, client, admin_user):
        response = client.post(
            "/api/auth/login",
            json={"email": admin_user.email, "password": "nope"},
        )
        assert response.status_code == 401
        assert response.json()["message"] == "Invalid email or password"

    def test_inactive_user(self, client, make_user):
        user = make_user(UserRole.EDITOR, email="old@zimbuild.co.zw", is_active=False)
        response = client.post(
            "/api/auth/login",
            json={"email": user.email, "password": "testpassword123"},
        )
        assert response.status_code == 401


class TestProfile:
    def test_requires_token(self, client):
        response = client.get("/api/auth/profile")
        assert response.status_code == 401
        assert response.json()["message"] == "Authentication required"

    def test_expired_token(self, client, admin_user):
        token = create_access_token(
            admin_user.id, admin_user.role.value, timedelta(minutes=-1)
        )
        response = client.get(
            "/api/auth/profile", headers={"Authorization": f"Bearer {token}"}
        )
        assert response.status_code == 401
        assert response.json()["message"] == "Token expired"

    def test_token_for_deactivated_user(self, client, storage, admin_user, admin_headers):
        admin_user.is_active = False
        storage.users.save(admin_user)
        response = client.get("/api/auth/profile", headers=admin_headers)
        assert response.status_code == 401

    def test_update_profile(self, client, viewer_headers):
        response = client.patch(
            "/api/auth/profile",
            json={"name": "Viewer Renamed", "position": "Estimator"},
            headers=viewer_headers,
        )
        assert response.status_code == 200
        user = response.json()["data"]["user"]
        assert user["name"] == "Viewer Renamed"
        assert user["profile"]["position"] == "Estimator"

    def test_profile_requires_token_even_in_bypass(self, client, bypass_auth):
        assert client.get("/api/auth/profile").status_code == 401
