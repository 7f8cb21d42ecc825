# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Enumeration types for database models."""

from enum import Enum


class ContactType(str, Enum):
    """Kind of contact record."""

    GENERAL = "general"
    CAREER = "career"
    PARTNERSHIP = "partnership"


class ContactStatus(str, Enum):
    """Handling status of a contact record.

    Any status can be reached from any other; there is no enforced flow.
    """

    NEW = "new"
    CONTACTED = "contacted"
    IN_PROGRESS = "in-progress"
    RESOLVED = "resolved"
    SPAM = "spam"


class Priority(str, Enum):
    """Contact priority, derived from the contact type."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ExperienceRange(str, Enum):
    """Years of experience bracket on career applications."""

    JUNIOR = "0-2"
    MID = "3-5"
    SENIOR = "6-10"
    EXPERT = "10+"


class LeadSource(str, Enum):
    """Where a contact or subscriber came from."""

    WEBSITE = "website"
    EVENT = "event"
    REFERRAL = "referral"
    SOCIAL_MEDIA = "social-media"
    OTHER = "other"


class ProjectCategory(str, Enum):
    """Portfolio project category."""

    COMMERCIAL = "commercial"
    RESIDENTIAL = "residential"
    INFRASTRUCTURE = "infrastructure"
    HEALTHCARE = "healthcare"
    EDUCATION = "education"
    OTHER = "other"


class ProjectStatus(str, Enum):
    """Portfolio project status."""

    PLANNING = "planning"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    ON_HOLD = "on-hold"


class UserRole(str, Enum):
    """Back-office user role."""

    ADMIN = "admin"
    MANAGER = "manager"
    EDITOR = "editor"
    VIEWER = "viewer"


class Department(str, Enum):
    """Back-office user department."""

    MANAGEMENT = "management"
    CONSTRUCTION = "construction"
    DESIGN = "design"
    HR = "hr"
    MARKETING = "marketing"
