# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""SMTP email provider."""

import asyncio
import logging
import smtplib
from email.message import EmailMessage
from email.utils import make_msgid

from src.integrations.base import EmailMessageData, EmailProvider

logger = logging.getLogger(__name__)


class SmtpProvider(EmailProvider):
    """Sends mail through an SMTP relay from a worker thread."""

    def __init__(
        self,
        host: str,
        port: int = 587,
        username: str | None = None,
        password: str | None = None,
        use_tls: bool = True,
        from_address: str = "noreply@localhost",
        timeout: float = 10.0,
        retries: int = 2,
        retry_delay: float = 1.0,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.from_address = from_address
        self.timeout = timeout
        self.retries = retries
        self.retry_delay = retry_delay

    @classmethod
    def get_type(cls) -> str:
        return "smtp"

    def build_message(self, data: EmailMessageData) -> EmailMessage:
        msg = EmailMessage()
        msg["From"] = self.from_address
        msg["To"] = ", ".join(data.to)
        msg["Subject"] = data.subject
        msg["Message-ID"] = make_msgid()
        msg.set_content(data.text or "This message requires an HTML capable client.")
        msg.add_alternative(data.html, subtype="html")
        return msg

    def _send_sync(self, msg: EmailMessage) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as server:
            if self.use_tls:
                server.starttls()
            if self.username and self.password:
                server.login(self.username, self.password)
            server.send_message(msg)

    async def send_email(self, message: EmailMessageData) -> str:
        msg = self.build_message(message)
        last_error: Exception | None = None
        for attempt in range(self.retries + 1):
            try:
                await asyncio.to_thread(self._send_sync, msg)
                return str(msg["Message-ID"])
            except (smtplib.SMTPException, OSError) as exc:
                last_error = exc
                logger.warning("Email send attempt %s failed: %s", attempt + 1, exc)
                if attempt < self.retries:
                    await asyncio.sleep(self.retry_delay)
        raise last_error
