# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Tests for the email providers and their factory."""

import smtplib

import pytest
from pydantic import SecretStr

from src.config import Settings
from src.integrations import (
    ConsoleEmailProvider,
    EmailMessageData,
    SmtpProvider,
    create_email_provider,
)


def message() -> EmailMessageData:
    return EmailMessageData(
        to=["tendai@example.com"],
        subject="Thank You for Contacting ZimBuild Construction",
        html="<p>Thanks</p>",
        text="Thanks",
    )


class FakeSMTP:
    instances: list["FakeSMTP"] = []

    def __init__(self, host: str, port: int, timeout: float | None = None):
        self.host = host
        self.port = port
        self.started_tls = False
        self.logged_in: tuple[str, str] | None = None
        self.sent = []
        FakeSMTP.instances.append(self)

    def __enter__(self):
        return self

    def __exit__(self, *exc_info) -> None:
        return None

    def starttls(self) -> None:
        self.started_tls = True

    def login(self, username: str, password: str) -> None:
        self.logged_in = (username, password)

    def send_message(self, msg) -> None:
        self.sent.append(msg)


class RefusingSMTP(FakeSMTP):
    def send_message(self, msg) -> None:
        raise smtplib.SMTPRecipientsRefused({"tendai@example.com": (550, b"no")})


@pytest.mark.asyncio
async def test_console_provider_keeps_nothing():
    provider = ConsoleEmailProvider()
    ids = {await provider.send_email(message()) for _ in range(500)}
    assert len(ids) == 500
    assert all(i.startswith("console-") for i in ids)
    assert vars(provider) == {}


@pytest.mark.asyncio
async def test_smtp_send(monkeypatch):
    FakeSMTP.instances.clear()
    monkeypatch.setattr("smtplib.SMTP", FakeSMTP)
    provider = SmtpProvider(
        host="smtp.example.com",
        username="user",
        password="secret",
        from_address="ZimBuild Construction <noreply@zimbuild.co.zw>",
    )

    message_id = await provider.send_email(message())

    smtp = FakeSMTP.instances[-1]
    assert smtp.started_tls is True
    assert smtp.logged_in == ("user", "secret")
    sent = smtp.sent[0]
    assert sent["Message-ID"] == message_id
    assert sent["To"] == "tendai@example.com"
    assert sent["From"] == "ZimBuild Construction <noreply@zimbuild.co.zw>"
    assert sent.get_content_type() == "multipart/alternative"


@pytest.mark.asyncio
async def test_smtp_retries_then_raises(monkeypatch):
    RefusingSMTP.instances.clear()
    monkeypatch.setattr("smtplib.SMTP", RefusingSMTP)
    provider = SmtpProvider(host="smtp.example.com", retries=1, retry_delay=0)

    with pytest.raises(smtplib.SMTPRecipientsRefused):
        await provider.send_email(message())
    assert len(RefusingSMTP.instances) == 2


class TestProviderFactory:
    def test_console_by_default(self):
        provider = create_email_provider(Settings(email_backend="console"))
        assert isinstance(provider, ConsoleEmailProvider)

    def test_smtp_when_configured(self):
        provider = create_email_provider(
            Settings(
                email_backend="smtp",
                smtp_host="smtp.example.com",
                smtp_user="user",
                smtp_password=SecretStr("secret"),
            )
        )
        assert isinstance(provider, SmtpProvider)
        assert provider.password == "secret"

    def test_smtp_without_host_falls_back_to_console(self):
        provider = create_email_provider(Settings(email_backend="smtp"))
        assert isinstance(provider, ConsoleEmailProvider)
