# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Outbound notification providers."""

import logging

from src.config import Settings
from src.integrations.base import EmailMessageData, EmailProvider
from src.integrations.console import ConsoleEmailProvider
from src.integrations.smtp import SmtpProvider

logger = logging.getLogger(__name__)


def create_email_provider(settings: Settings) -> EmailProvider:
    """Build the provider selected by ``EMAIL_BACKEND``."""
    if settings.email_backend == "smtp" and settings.smtp_host:
        return SmtpProvider(
            host=settings.smtp_host,
            port=settings.smtp_port,
            username=settings.smtp_user,
            password=(
                settings.smtp_password.get_secret_value()
                if settings.smtp_password
                else None
            ),
            use_tls=settings.smtp_use_tls,
            from_address=settings.email_from,
            timeout=settings.smtp_timeout,
        )
    if settings.email_backend == "smtp":
        logger.warning("EMAIL_BACKEND=smtp without SMTP_HOST, logging emails instead")
    return ConsoleEmailProvider()


__all__ = [
    "ConsoleEmailProvider",
    "EmailMessageData",
    "EmailProvider",
    "SmtpProvider",
    "create_email_provider",
]
