# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Derived values computed from stored record fields.

Slug and short description are computed at write time by the project
service; everything else is computed at read time by the response schemas.
"""

import math
from datetime import date
from typing import Any

from slugify import slugify

from src.models.enums import ContactType, Priority, ProjectStatus
from src.validation import is_sa_phone, normalize_phone

SLUG_MAX_LENGTH = 100
SHORT_DESCRIPTION_LENGTH = 300
DEFAULT_CURRENCY = "ZAR"
DEFAULT_SIZE_UNIT = "sqm"

_PRIORITY_BY_TYPE = {
    ContactType.CAREER: Priority.HIGH,
    ContactType.PARTNERSHIP: Priority.MEDIUM,
    ContactType.GENERAL: Priority.LOW,
}

_STATUS_TEXT = {
    ProjectStatus.PLANNING: "In Planning",
    ProjectStatus.IN_PROGRESS: "In Progress",
    ProjectStatus.COMPLETED: "Completed",
    ProjectStatus.ON_HOLD: "On Hold",
}

_CURRENCY_SYMBOLS = {"ZAR": "R", "USD": "$", "EUR": "€", "GBP": "£"}


def priority_for_type(contact_type: ContactType) -> Priority:
    return _PRIORITY_BY_TYPE.get(ContactType(contact_type), Priority.LOW)


def project_slug(title: str) -> str:
    """Derive the URL slug of a project title.

    Apostrophes are dropped rather than turned into separators, so
    ``"O'Brien's Mall"`` becomes ``"obriens-mall"``.
    """
    return slugify(
        title,
        max_length=SLUG_MAX_LENGTH,
        word_boundary=False,
        replacements=[["'", ""], ["’", ""]],
    )


def short_description(description: str) -> str:
    if len(description) <= SHORT_DESCRIPTION_LENGTH:
        return description
    return description[: SHORT_DESCRIPTION_LENGTH - 3] + "..."


def status_text(status: ProjectStatus | str) -> str:
    try:
        return _STATUS_TEXT[ProjectStatus(status)]
    except ValueError:
        return str(status)


def format_budget(budget: dict[str, Any] | None) -> str:
    if not budget or not budget.get("amount"):
        return "Not disclosed"
    currency = budget.get("currency") or DEFAULT_CURRENCY
    symbol = _CURRENCY_SYMBOLS.get(currency, currency)
    return f"{symbol} {round(budget['amount']):,}"


def format_size(size: dict[str, Any] | None) -> str:
    if not size or not size.get("value"):
        return ""
    return f"{round(size['value']):,} {size.get('unit') or DEFAULT_SIZE_UNIT}"


def project_duration(start: date | None, end: date | None) -> str | None:
    """Human duration between two dates, counted in 30-day months.

    >>> project_duration(date(2023, 1, 1), date(2024, 4, 1))
    '1y 4m'
    """
    if start is None or end is None:
        return None
    months = math.ceil((end - start).days / 30)
    if months >= 12:
        years, rest = divmod(months, 12)
        return f"{years}y {rest}m" if rest else f"{years}y"
    return f"{months}m"


def format_phone(phone: str | None) -> str:
    """Group a South African number as ``+27 82 123 4567``.

    Local ``0``-prefixed numbers get the country code; any other number is
    returned unchanged.
    """
    if not phone:
        return ""
    if not is_sa_phone(phone):
        return phone
    national = normalize_phone(phone)[-9:]
    return f"+27 {national[:2]} {national[2:5]} {national[5:]}"


def primary_image(images: list[dict[str, Any]] | None) -> dict[str, Any] | None:
    """The image flagged primary, else the first image."""
    if not images:
        return None
    for image in images:
        if image.get("is_primary"):
            return image
    return images[0]
