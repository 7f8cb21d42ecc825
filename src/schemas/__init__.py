# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Pydantic schemas package."""

from src.schemas.common import (
    ApiResponse,
    CamelModel,
    ErrorItem,
    ErrorResponse,
    HealthResponse,
    PaginationMeta,
    SanitizedModel,
)
from src.schemas.contact import (
    CareerApplicationCreate,
    ContactResponse,
    InquiryCreate,
    NewsletterSubscribe,
    SubscriberResponse,
)
from src.schemas.project import (
    ProjectCreate,
    ProjectResponse,
    ProjectUpdate,
)
from src.schemas.upload import UploadedFileResponse
from src.schemas.user import (
    AuthResponse,
    LoginRequest,
    RegisterRequest,
    UserResponse,
)

__all__ = [
    "ApiResponse",
    "AuthResponse",
    "CamelModel",
    "CareerApplicationCreate",
    "ContactResponse",
    "ErrorItem",
    "ErrorResponse",
    "HealthResponse",
    "InquiryCreate",
    "LoginRequest",
    "NewsletterSubscribe",
    "PaginationMeta",
    "ProjectCreate",
    "ProjectResponse",
    "ProjectUpdate",
    "RegisterRequest",
    "SanitizedModel",
    "SubscriberResponse",
    "UploadedFileResponse",
    "UserResponse",
]
