# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Base classes for outbound notification providers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class EmailMessageData:
    """Provider-independent email."""

    to: list[str]
    subject: str
    html: str
    text: str | None = None


class EmailProvider(ABC):
    """Interface for email sending (SMTP, console, ...)."""

    @classmethod
    @abstractmethod
    def get_type(cls) -> str:
        """Unique identifier for this provider, as used in EMAIL_BACKEND."""
        ...

    @abstractmethod
    async def send_email(self, message: EmailMessageData) -> str:
        """Send one email. Returns a provider message id.

        Raises on delivery failure; callers decide whether that matters.
        """
        ...

    async def close(self) -> None:
        """Clean up resources."""
        pass
