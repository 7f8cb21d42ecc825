# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""FastAPI application entry point."""

import logging
import os
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from src.api.deps import get_email_provider
from src.config import settings
from src.errors import register_exception_handlers
from src.logging_config import setup_logging
from src.middleware import RateLimitMiddleware, RequestLoggingMiddleware
from src.schemas.common import HealthResponse

setup_logging()
logger = logging.getLogger(__name__)

# Ensure directories exist
os.makedirs(settings.upload_dir, exist_ok=True)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup and shutdown events."""
    logger.info(
        "Starting %s (%s, storage=%s)",
        settings.app_name,
        settings.environment,
        settings.storage_backend,
    )
    if settings.auth_bypass:
        logger.warning("AUTH_BYPASS is enabled; all role checks are skipped")
    if settings.storage_backend == "database":
        from src.database import init_db

        init_db()

    yield

    logger.info("Shutting down...")
    await get_email_provider().close()


app = FastAPI(
    title=settings.app_name,
    description="Lead capture and project portfolio backend for ZimBuild Construction",
    version=settings.version,
    lifespan=lifespan,
)

app.add_middleware(RateLimitMiddleware)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials="*" not in settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


@app.get("/api/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(
        status="OK",
        message="ZimBuild Construction API is running",
        timestamp=datetime.now(UTC).isoformat(),
        environment=settings.environment,
        storage=settings.storage_backend,
    )


# Import and include API router after it's created
from src.api.v1.router import api_router  # noqa: E402

app.include_router(api_router, prefix="/api")

# Uploaded files
app.mount("/uploads", StaticFiles(directory=settings.upload_dir), name="uploads")
