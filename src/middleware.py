# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""HTTP middleware: request ids, access logging and rate limiting."""

import logging
import math
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from src.config import settings
from src.errors import error_response
from src.rate_limit import rate_limiter

logger = logging.getLogger("zimbuild.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tag each request with an X-Request-ID and log its outcome.

    A client supplied X-Request-ID is kept.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        request.state.request_id = request_id
        start_time = time.perf_counter()

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        response.headers["X-Request-ID"] = request_id
        logger.info(
            "id=%s method=%s path=%s status=%s duration=%.1fms",
            request_id,
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
        )
        return response


def client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Per-IP sliding window over /api routes."""

    async def dispatch(self, request: Request, call_next):
        if not settings.rate_limit_enabled or not request.url.path.startswith("/api"):
            return await call_next(request)

        allowed, retry_after = rate_limiter.hit(
            client_ip(request),
            limit=settings.rate_limit_max_requests,
            window_seconds=settings.rate_limit_window_seconds,
        )
        if not allowed:
            logger.warning("Rate limit exceeded for %s", client_ip(request))
            return error_response(
                429,
                "Too many requests from this IP, please try again later.",
                headers={"Retry-After": str(math.ceil(retry_after))},
            )
        return await call_next(request)
