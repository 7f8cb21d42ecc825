# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Contact, career application and newsletter schemas."""

import datetime
import uuid
from typing import Annotated, Literal

from pydantic import AfterValidator, EmailStr, Field, computed_field

from src.models.enums import (
    ContactStatus,
    ContactType,
    ExperienceRange,
    LeadSource,
    Priority,
)
from src.schemas.common import CamelModel, PaginationMeta, SanitizedModel
from src.services.derived import format_phone
from src.validation import is_valid_phone


def _check_phone(value: str) -> str:
    if not is_valid_phone(value):
        raise ValueError("Please provide a valid phone number")
    return value


Email = Annotated[EmailStr, AfterValidator(str.lower)]
Phone = Annotated[str, AfterValidator(_check_phone)]


class InquiryCreate(SanitizedModel):
    """General or partnership inquiry from the contact form."""

    name: str = Field(..., min_length=2, max_length=100)
    email: Email
    phone: Phone | None = None
    company: str | None = Field(None, max_length=100)
    subject: str = Field(..., min_length=5, max_length=200)
    message: str = Field(..., min_length=10, max_length=2000)
    type: Literal["general", "partnership"] = "general"


class CareerApplicationCreate(SanitizedModel):
    """Career application form fields. The resume arrives as a file part."""

    full_name: str = Field(..., min_length=2, max_length=100)
    email: Email
    phone: Phone
    position: str = Field(..., min_length=2, max_length=100)
    experience: ExperienceRange
    cover_letter: str | None = Field(None, max_length=5000)


class NewsletterSubscribe(SanitizedModel):
    email: Email
    name: str | None = Field(None, max_length=100)
    source: LeadSource = LeadSource.WEBSITE


class NewsletterEmail(SanitizedModel):
    email: Email


class NewsletterPreferences(CamelModel):
    newsletter: bool = True
    project_updates: bool = True
    company_news: bool = True


class NewsletterPreferencesUpdate(SanitizedModel):
    """Partial preference change; unset toggles keep their value."""

    email: Email
    newsletter: bool | None = None
    project_updates: bool | None = None
    company_news: bool | None = None


class InquiryStatusUpdate(SanitizedModel):
    status: ContactStatus


class InquiryNoteCreate(SanitizedModel):
    content: str = Field(..., min_length=1, max_length=2000)


class AttachmentResponse(CamelModel):
    """Reference to an uploaded file."""

    filename: str
    original_name: str | None = None
    path: str
    size: int
    mimetype: str | None = None


class NoteResponse(CamelModel):
    content: str
    author: str
    created_at: datetime.datetime


class ContactResponse(CamelModel):
    """Schema for contact response."""

    id: uuid.UUID
    type: ContactType
    name: str
    email: str
    phone: str | None
    company: str | None
    subject: str | None
    message: str | None
    position: str | None
    experience: ExperienceRange | None
    cover_letter: str | None
    resume: AttachmentResponse | None
    status: ContactStatus
    priority: Priority
    notes: list[NoteResponse]
    source: LeadSource
    created_at: datetime.datetime
    updated_at: datetime.datetime

    @computed_field(alias="formattedPhone")
    @property
    def formatted_phone(self) -> str:
        return format_phone(self.phone)


class SubscriberResponse(CamelModel):
    id: uuid.UUID
    email: str
    name: str | None
    source: LeadSource
    is_active: bool
    preferences: NewsletterPreferences
    last_engagement: datetime.datetime | None
    engagement_count: int
    created_at: datetime.datetime
    updated_at: datetime.datetime


class InquirySubmitted(CamelModel):
    inquiry_id: uuid.UUID
    submitted_at: datetime.datetime


class ApplicationSubmitted(CamelModel):
    application_id: uuid.UUID
    position: str
    submitted_at: datetime.datetime


class NewsletterSubscribed(CamelModel):
    email: str
    subscribed_at: datetime.datetime


class InquiryListResponse(CamelModel):
    inquiries: list[ContactResponse]
    pagination: PaginationMeta


class InquiryEnvelope(CamelModel):
    inquiry: ContactResponse


class SubscriberEnvelope(CamelModel):
    subscriber: SubscriberResponse


class InquiryTypeStats(CamelModel):
    type: ContactType
    total: int
    new: int
    contacted: int
    resolved: int


class InquiryStatsResponse(CamelModel):
    stats: list[InquiryTypeStats]
