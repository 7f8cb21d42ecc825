# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""API dependencies for dependency injection."""

import uuid
from collections.abc import Callable
from functools import lru_cache

from fastapi import Depends, Query, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.config import settings
from src.errors import AuthenticationError, AuthorizationError
from src.integrations import EmailProvider, create_email_provider
from src.models import SYSTEM_ACTOR, User, UserRole
from src.security import decode_access_token
from src.services import auth_service
from src.services.contact_service import RequestMeta
from src.services.upload_service import LocalBlobStore, UploadService
from src.storage import Storage, get_storage

PROJECT_EDITORS = (UserRole.ADMIN, UserRole.MANAGER, UserRole.EDITOR)
INQUIRY_MANAGERS = (UserRole.ADMIN, UserRole.MANAGER)

bearer_scheme = HTTPBearer(auto_error=False)


def get_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    token: str | None = Query(None, include_in_schema=False),
) -> str | None:
    """Bearer token from the Authorization header, else the ``token`` query."""
    if credentials and credentials.scheme.lower() == "bearer":
        return credentials.credentials
    return token or None


def _resolve_user(store: Storage, token: str) -> User:
    payload = decode_access_token(token)
    try:
        user_id = uuid.UUID(str(payload.get("sub")))
    except ValueError as exc:
        raise AuthenticationError() from exc
    user = auth_service.get_user_by_id(store, user_id)
    if user is None or not user.is_active:
        raise AuthenticationError()
    return user


def get_current_user(
    store: Storage = Depends(get_storage),
    token: str | None = Depends(get_token),
) -> User:
    """Get current authenticated user from the bearer token."""
    if not token:
        raise AuthenticationError()
    return _resolve_user(store, token)


def get_optional_user(
    store: Storage = Depends(get_storage),
    token: str | None = Depends(get_token),
) -> User | None:
    """Get current user if authenticated, otherwise return None."""
    if not token:
        return None
    try:
        return _resolve_user(store, token)
    except AuthenticationError:
        return None


def require_roles(*roles: UserRole) -> Callable[..., User | None]:
    """Dependency factory for role-gated operations.

    With AUTH_BYPASS enabled every gate passes and no identity is attached.
    Without it, an empty ``roles`` means any authenticated user.
    """

    def dependency(
        store: Storage = Depends(get_storage),
        token: str | None = Depends(get_token),
    ) -> User | None:
        if settings.auth_bypass:
            return None
        user = get_current_user(store, token)
        if roles and user.role not in roles:
            raise AuthorizationError()
        return user

    return dependency


def acting_identity(user: User | None) -> str:
    """Identity recorded on changes: the user id or the system sentinel."""
    return str(user.id) if user is not None else SYSTEM_ACTOR


def get_upload_service() -> UploadService:
    return UploadService(
        LocalBlobStore(settings.upload_dir),
        max_bytes=settings.max_upload_bytes,
        max_files=settings.max_upload_files,
    )


@lru_cache
def get_email_provider() -> EmailProvider:
    return create_email_provider(settings)


def get_request_meta(request: Request) -> RequestMeta:
    return RequestMeta(
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )
