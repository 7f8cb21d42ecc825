# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Main API router."""

from fastapi import APIRouter

from src.api.v1 import auth, contact, projects, uploads
from src.schemas.common import ErrorResponse

# Error bodies share one shape, see src.errors
ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid input"},
    401: {"model": ErrorResponse, "description": "Authentication required"},
    403: {"model": ErrorResponse, "description": "Insufficient permission"},
    404: {"model": ErrorResponse, "description": "Not found"},
    429: {"model": ErrorResponse, "description": "Too many requests"},
}

api_router = APIRouter(responses=ERROR_RESPONSES)

# Auth routes
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])

# Contact, careers and newsletter routes
api_router.include_router(contact.router, prefix="/contact", tags=["contact"])

# Project portfolio routes
api_router.include_router(projects.router, prefix="/projects", tags=["projects"])

# Generic upload routes
api_router.include_router(uploads.router, prefix="/uploads", tags=["uploads"])
