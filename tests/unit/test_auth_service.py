# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Tests for auth_service."""

import pytest

from src.errors import AuthenticationError, ConflictError
from src.models import UserRole
from src.schemas.user import ProfileUpdate, RegisterRequest
from src.security import decode_access_token
from src.services import auth_service


def register(storage, email: str = "farai@zimbuild.co.zw"):
    return auth_service.register_user(
        storage,
        RegisterRequest(name="Farai Ncube", email=email, password="Secret123!"),
    )


def test_is_first_run(storage):
    assert auth_service.is_first_run(storage) is True
    register(storage)
    assert auth_service.is_first_run(storage) is False


def test_first_user_is_admin_then_viewer(storage):
    first = register(storage)
    second = register(storage, "tatenda@zimbuild.co.zw")
    assert first.role == UserRole.ADMIN
    assert second.role == UserRole.VIEWER
    assert first.hashed_password != "Secret123!"


def test_duplicate_email(storage):
    register(storage)
    with pytest.raises(ConflictError) as exc_info:
        register(storage, "FARAI@zimbuild.co.zw")
    assert exc_info.value.message == "A user with this email already exists"


def test_authenticate_records_login(storage):
    register(storage)
    user = auth_service.authenticate(storage, "Farai@Zimbuild.co.zw", "Secret123!")
    assert user.last_login is not None


@pytest.mark.parametrize(
    ("email", "password"),
    [("farai@zimbuild.co.zw", "wrong"), ("ghost@zimbuild.co.zw", "Secret123!")],
)
def test_authenticate_rejects_bad_credentials(storage, email, password):
    register(storage)
    with pytest.raises(AuthenticationError) as exc_info:
        auth_service.authenticate(storage, email, password)
    assert exc_info.value.message == "Invalid email or password"


def test_inactive_user_cannot_login(storage):
    user = register(storage)
    user.is_active = False
    storage.users.save(user)
    with pytest.raises(AuthenticationError):
        auth_service.authenticate(storage, "farai@zimbuild.co.zw", "Secret123!")


def test_issue_token(storage):
    user = register(storage)
    payload = decode_access_token(auth_service.issue_token(user))
    assert payload["sub"] == str(user.id)
    assert payload["role"] == "admin"


def test_update_profile_merges(storage):
    user = register(storage)
    auth_service.update_profile(
        storage, user, ProfileUpdate.model_validate({"position": "Site Manager"})
    )
    updated = auth_service.update_profile(
        storage,
        user,
        ProfileUpdate.model_validate({"name": "Farai N.", "phone": "+263771234567"}),
    )
    assert updated.name == "Farai N."
    assert updated.profile == {"position": "Site Manager", "phone": "+263771234567"}
