# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Portfolio project model."""

import uuid as uuid_lib
from datetime import date
from typing import Any

from sqlalchemy import JSON, Boolean, Date, Enum, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from src.models.base import Base, TimestampMixin
from src.models.enums import ProjectCategory, ProjectStatus

SYSTEM_ACTOR = "system"


class Project(Base, TimestampMixin):
    """Construction project shown in the website portfolio.

    ``slug`` and ``short_description`` are derived from ``title`` and
    ``description`` by the project service. ``images`` is an ordered list of
    upload references; at most one of them carries ``is_primary``.
    """

    __tablename__ = "projects"

    id: Mapped[uuid_lib.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid_lib.uuid4,
    )
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    slug: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    short_description: Mapped[str | None] = mapped_column(String(300), nullable=True)
    category: Mapped[ProjectCategory] = mapped_column(
        Enum(ProjectCategory), nullable=False
    )
    location: Mapped[str] = mapped_column(String(100), nullable=False)
    status: Mapped[ProjectStatus] = mapped_column(
        Enum(ProjectStatus), default=ProjectStatus.PLANNING, nullable=False
    )
    featured: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    images: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON, default=list, nullable=False
    )
    start_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    completion_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    budget: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    size: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    client: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    tags: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    specifications: Mapped[dict[str, str] | None] = mapped_column(JSON, nullable=True)
    meta: Mapped[dict[str, Any] | None] = mapped_column(JSON, nullable=True)
    views: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    created_by: Mapped[str] = mapped_column(
        String(64), default=SYSTEM_ACTOR, nullable=False
    )
    updated_by: Mapped[str | None] = mapped_column(String(64), nullable=True)

    __table_args__ = (
        Index("ix_projects_category_status", "category", "status"),
        Index("ix_projects_featured_status", "featured", "status"),
        Index("ix_projects_status_completion", "status", "completion_date"),
    )
