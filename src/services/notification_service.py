# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Confirmation emails for website submissions."""

import asyncio
import logging
from datetime import UTC, datetime
from html import escape

from src.integrations import EmailMessageData, EmailProvider

logger = logging.getLogger(__name__)

COMPANY_NAME = "ZimBuild Construction"

_LAYOUT = """<!DOCTYPE html>
<html>
<head>
  <style>
    body {{ font-family: Arial, sans-serif; line-height: 1.6; color: #333; }}
    .container {{ max-width: 600px; margin: 0 auto; padding: 20px; }}
    .header {{ background: #1a365d; color: white; padding: 20px; text-align: center; }}
    .content {{ background: #f7fafc; padding: 20px; }}
    .footer {{ background: #2d3748; color: white; padding: 15px; text-align: center; }}
  </style>
</head>
<body>
  <div class="container">
    <div class="header"><h1>{company}</h1></div>
    <div class="content">
{content}
    </div>
    <div class="footer"><p>{company} &copy; {year}</p></div>
  </div>
</body>
</html>
"""


def _render(content: str) -> str:
    return _LAYOUT.format(
        company=COMPANY_NAME, content=content, year=datetime.now(UTC).year
    )


def contact_confirmation(name: str, email: str, message: str) -> EmailMessageData:
    """Thank-you email for a general or partnership inquiry."""
    content = (
        f"      <h2>Thank You for Your Inquiry, {escape(name)}!</h2>\n"
        "      <p>We have received your message and will get back to you "
        "within 24 hours.</p>\n"
        "      <p><strong>Your Message:</strong></p>\n"
        f"      <p>{escape(message)}</p>"
    )
    return EmailMessageData(
        to=[email],
        subject=f"Thank You for Contacting {COMPANY_NAME}",
        html=_render(content),
        text=(
            f"Thank you for your inquiry, {name}!\n\n"
            "We have received your message and will get back to you within "
            f"24 hours.\n\nYour message:\n{message}\n"
        ),
    )


def career_confirmation(name: str, email: str, position: str) -> EmailMessageData:
    """Acknowledgement for a career application."""
    content = (
        f"      <h2>Application Received, {escape(name)}!</h2>\n"
        f"      <p>Thank you for your interest in joining the {COMPANY_NAME} "
        "team.</p>\n"
        f"      <p><strong>Position Applied:</strong> {escape(position)}</p>"
    )
    return EmailMessageData(
        to=[email],
        subject=f"Career Application Received - {COMPANY_NAME}",
        html=_render(content),
        text=(
            f"Application received, {name}!\n\n"
            f"Thank you for your interest in joining the {COMPANY_NAME} team.\n"
            f"Position applied: {position}\n"
        ),
    )


async def notify(
    provider: EmailProvider, message: EmailMessageData, timeout: float
) -> bool:
    """Send a notification without ever failing the caller.

    Returns:
        True if the provider accepted the message within ``timeout`` seconds
    """
    try:
        message_id = await asyncio.wait_for(provider.send_email(message), timeout)
    except TimeoutError:
        logger.error(
            "Notification %r timed out after %ss", message.subject, timeout
        )
        return False
    except Exception:
        logger.exception("Notification %r could not be sent", message.subject)
        return False
    logger.info("Notification %r sent (%s)", message.subject, message_id)
    return True
