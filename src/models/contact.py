# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Contact model."""

import uuid as uuid_lib
from typing import Any

from sqlalchemy import JSON, Enum, Index, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from src.models.base import Base, TimestampMixin
from src.models.enums import (
    ContactStatus,
    ContactType,
    ExperienceRange,
    LeadSource,
    Priority,
)


class Contact(Base, TimestampMixin):
    """Website lead: general inquiry, career application or partnership request.

    ``resume`` holds an upload reference (filename, original name, path, size,
    mimetype), never the file bytes. ``notes`` is an append-only list of
    ``{content, author, created_at}`` entries.
    """

    __tablename__ = "contacts"

    id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid_lib.uuid4,
    )
    type: Mapped[ContactType] = mapped_column(
        Enum(ContactType), default=ContactType.GENERAL, nullable=False
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    company: Mapped[str | None] = mapped_column(String(100), nullable=True)
    subject: Mapped[str | None] = mapped_column(String(200), nullable=True)
    message: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Career applications
    position: Mapped[str | None] = mapped_column(String(100), nullable=True)
    experience: Mapped[ExperienceRange | None] = mapped_column(
        Enum(ExperienceRange), nullable=True
    )
    cover_letter: Mapped[str | None] = mapped_column(Text, nullable=True)
    resume: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)

    status: Mapped[ContactStatus] = mapped_column(
        Enum(ContactStatus), default=ContactStatus.NEW, nullable=False
    )
    priority: Mapped[Priority] = mapped_column(
        Enum(Priority), default=Priority.LOW, nullable=False
    )
    notes: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON, default=list, nullable=False
    )
    source: Mapped[LeadSource] = mapped_column(
        Enum(LeadSource), default=LeadSource.WEBSITE, nullable=False
    )
    ip_address: Mapped[str | None] = mapped_column(String(64), nullable=True)
    user_agent: Mapped[str | None] = mapped_column(String(500), nullable=True)

    __table_args__ = (
        Index("ix_contacts_type_status", "type", "status"),
        Index("ix_contacts_created_at", "created_at"),
    )
