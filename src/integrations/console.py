# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Email provider that only logs messages, for development."""

import logging
import uuid

from src.integrations.base import EmailMessageData, EmailProvider

logger = logging.getLogger(__name__)


class ConsoleEmailProvider(EmailProvider):
    """Logs each message instead of delivering it."""

    @classmethod
    def get_type(cls) -> str:
        return "console"

    async def send_email(self, message: EmailMessageData) -> str:
        message_id = f"console-{uuid.uuid4().hex}"
        logger.info(
            "Email (not sent) to=%s subject=%r id=%s",
            ", ".join(message.to),
            message.subject,
            message_id,
        )
        return message_id
