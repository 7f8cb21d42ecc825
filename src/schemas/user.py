# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""User and authentication schemas."""

import datetime
import uuid

from pydantic import Field

from src.models.enums import Department, UserRole
from src.schemas.common import CamelModel, SanitizedModel
from src.schemas.contact import Email, Phone


class RegisterRequest(SanitizedModel):
    name: str = Field(..., min_length=2, max_length=100)
    email: Email
    password: str = Field(..., min_length=6, max_length=128)
    department: Department | None = None


class LoginRequest(SanitizedModel):
    email: Email
    password: str = Field(..., min_length=1)


class ProfileUpdate(SanitizedModel):
    """Only provided fields change."""

    name: str | None = Field(None, min_length=2, max_length=100)
    phone: Phone | None = None
    position: str | None = Field(None, max_length=100)
    avatar: str | None = Field(None, max_length=500)


class UserProfile(CamelModel):
    avatar: str | None = None
    phone: str | None = None
    position: str | None = None


class UserResponse(CamelModel):
    """Public view of a user. Never includes the password hash."""

    id: uuid.UUID
    name: str
    email: str
    role: UserRole
    department: Department | None
    is_active: bool
    last_login: datetime.datetime | None
    profile: UserProfile
    created_at: datetime.datetime


class AuthResponse(CamelModel):
    user: UserResponse
    token: str


class UserEnvelope(CamelModel):
    user: UserResponse
