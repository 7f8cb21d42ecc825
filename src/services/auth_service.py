# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Authentication service."""

import logging
import uuid

from src.errors import AuthenticationError, ConflictError, DuplicateKeyError
from src.models import User, UserRole
from src.models.base import utcnow
from src.schemas.user import ProfileUpdate, RegisterRequest
from src.security import create_access_token, get_password_hash, verify_password
from src.storage import Storage

logger = logging.getLogger(__name__)


def is_first_run(store: Storage) -> bool:
    """Check if this is the first run (no users exist)."""
    return store.users.count() == 0


def register_user(store: Storage, data: RegisterRequest) -> User:
    """Register a new user. First user becomes admin, everyone else viewer."""
    user = User(
        name=data.name,
        email=data.email.lower(),
        hashed_password=get_password_hash(data.password),
        role=UserRole.ADMIN if is_first_run(store) else UserRole.VIEWER,
        department=data.department,
        is_active=True,
        profile={},
    )
    try:
        user = store.users.add(user)
    except DuplicateKeyError as exc:
        raise ConflictError("A user with this email already exists") from exc
    logger.info("User %s registered with role %s", user.id, user.role.value)
    return user


def authenticate(store: Storage, email: str, password: str) -> User:
    """Check credentials and record the login.

    Raises:
        AuthenticationError: unknown email, wrong password or inactive user,
            all with the same message.
    """
    user = store.users.find_one({"email": email.lower()})
    if (
        user is None
        or not verify_password(password, user.hashed_password)
        or not user.is_active
    ):
        raise AuthenticationError("Invalid email or password")
    user.last_login = utcnow()
    return store.users.save(user)


def issue_token(user: User) -> str:
    return create_access_token(user.id, user.role.value)


def get_user_by_id(store: Storage, user_id: uuid.UUID) -> User | None:
    return store.users.get(user_id)


def update_profile(store: Storage, user: User, data: ProfileUpdate) -> User:
    """Update name and profile details. Only provided fields change."""
    if data.name is not None:
        user.name = data.name
    changes = data.model_dump(
        exclude_unset=True, exclude_none=True, include={"phone", "position", "avatar"}
    )
    if changes:
        user.profile = {**(user.profile or {}), **changes}
    return store.users.save(user)
