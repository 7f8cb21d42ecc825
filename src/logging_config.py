# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Logging setup with redaction of personal data."""

import logging
import re
import sys

from src.config import settings

_EMAIL = re.compile(r"([\w.+-])[\w.+-]*@([\w-]+(?:\.[\w-]+)+)")
_JWT = re.compile(r"eyJ[A-Za-z0-9_-]+\.eyJ[A-Za-z0-9_-]+\.[A-Za-z0-9_-]+")
_BEARER = re.compile(r"(Bearer\s+)\S+", re.IGNORECASE)
_SECRET = re.compile(
    r"(password|passwd|pwd|secret|token)([\"']?\s*[:=]\s*[\"']?)[^\"'&\s,]+",
    re.IGNORECASE,
)


def redact_pii(message: str) -> str:
    """Mask email local parts, tokens and password values."""
    message = _EMAIL.sub(r"\1***@\2", message)
    message = _JWT.sub("[JWT_REDACTED]", message)
    message = _BEARER.sub(r"\1[REDACTED]", message)
    return _SECRET.sub(r"\1\2[REDACTED]", message)


class PIIRedactingFormatter(logging.Formatter):
    """Formatter that redacts personal data from the final message."""

    def format(self, record: logging.LogRecord) -> str:
        return redact_pii(super().format(record))


def setup_logging() -> None:
    """Configure the root logger once, from LOG_LEVEL."""
    formatter = PIIRedactingFormatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(getattr(logging, settings.log_level.upper(), logging.INFO))

    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("multipart").setLevel(logging.WARNING)
