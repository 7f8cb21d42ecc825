# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Newsletter subscriber model."""

import uuid as uuid_lib
from datetime import datetime
from typing import Any

from sqlalchemy import JSON, Boolean, DateTime, Enum, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from src.models.base import Base, TimestampMixin
from src.models.enums import LeadSource

DEFAULT_PREFERENCES = {
    "newsletter": True,
    "project_updates": True,
    "company_news": True,
}


class Subscriber(Base, TimestampMixin):
    """Newsletter subscriber. ``email`` is unique across all subscribers."""

    __tablename__ = "subscribers"

    id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid_lib.uuid4,
    )
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    name: Mapped[str | None] = mapped_column(String(100), nullable=True)
    source: Mapped[LeadSource] = mapped_column(
        Enum(LeadSource), default=LeadSource.WEBSITE, nullable=False
    )
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    preferences: Mapped[dict[str, bool]] = mapped_column(
        JSON, default=lambda: dict(DEFAULT_PREFERENCES), nullable=False
    )
    signup_metadata: Mapped[dict[str, Any] | None] = mapped_column(
        JSON, nullable=True
    )
    last_engagement: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    engagement_count: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
