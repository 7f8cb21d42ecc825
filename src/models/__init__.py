# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Database models package."""

from src.models.base import Base, TimestampMixin
from src.models.contact import Contact
from src.models.enums import (
    ContactStatus,
    ContactType,
    Department,
    ExperienceRange,
    LeadSource,
    Priority,
    ProjectCategory,
    ProjectStatus,
    UserRole,
)
from src.models.project import SYSTEM_ACTOR, Project
from src.models.subscriber import DEFAULT_PREFERENCES, Subscriber
from src.models.user import User

__all__ = [
    "DEFAULT_PREFERENCES",
    "SYSTEM_ACTOR",
    "Base",
    "Contact",
    "ContactStatus",
    "ContactType",
    "Department",
    "ExperienceRange",
    "LeadSource",
    "Priority",
    "Project",
    "ProjectCategory",
    "ProjectStatus",
    "Subscriber",
    "TimestampMixin",
    "User",
    "UserRole",
]
