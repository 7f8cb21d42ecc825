# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Authentication API endpoints."""

from fastapi import APIRouter, Depends, status

from src.api.deps import get_current_user
from src.models import User
from src.schemas.common import ApiResponse
from src.schemas.user import (
    AuthResponse,
    LoginRequest,
    ProfileUpdate,
    RegisterRequest,
    UserEnvelope,
    UserResponse,
)
from src.services import auth_service
from src.storage import Storage, get_storage

router = APIRouter()


def build_auth_response(user: User) -> AuthResponse:
    return AuthResponse(
        user=UserResponse.model_validate(user),
        token=auth_service.issue_token(user),
    )


@router.post(
    "/register",
    response_model=ApiResponse[AuthResponse],
    status_code=status.HTTP_201_CREATED,
)
def register(
    data: RegisterRequest,
    store: Storage = Depends(get_storage),
) -> ApiResponse[AuthResponse]:
    """Register a new user.

    The first registered user becomes admin, everyone after that a viewer.
    """
    user = auth_service.register_user(store, data)
    return ApiResponse(
        message="User registered successfully", data=build_auth_response(user)
    )


@router.post("/login", response_model=ApiResponse[AuthResponse])
def login(
    data: LoginRequest,
    store: Storage = Depends(get_storage),
) -> ApiResponse[AuthResponse]:
    """Login with email and password."""
    user = auth_service.authenticate(store, data.email, data.password)
    return ApiResponse(message="Login successful", data=build_auth_response(user))


@router.get("/profile", response_model=ApiResponse[UserEnvelope])
def get_profile(
    current_user: User = Depends(get_current_user),
) -> ApiResponse[UserEnvelope]:
    """Get current authenticated user."""
    return ApiResponse(
        data=UserEnvelope(user=UserResponse.model_validate(current_user))
    )


@router.patch("/profile", response_model=ApiResponse[UserEnvelope])
def update_profile(
    data: ProfileUpdate,
    store: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
) -> ApiResponse[UserEnvelope]:
    """Update current user's profile."""
    user = auth_service.update_profile(store, current_user, data)
    return ApiResponse(
        message="Profile updated successfully",
        data=UserEnvelope(user=UserResponse.model_validate(user)),
    )
