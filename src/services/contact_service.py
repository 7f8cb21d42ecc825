# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Contact service: inquiries, career applications and their handling."""

import logging
import uuid
from dataclasses import dataclass
from typing import Any

from src.errors import NotFoundError
from src.integrations import EmailProvider
from src.models import SYSTEM_ACTOR, Contact, ContactStatus, ContactType
from src.models.base import utcnow
from src.schemas.contact import CareerApplicationCreate, InquiryCreate
from src.services import notification_service
from src.services.derived import priority_for_type
from src.services.upload_service import StoredFile, UploadService
from src.storage import Page, Storage
from src.storage.base import SortSpec

logger = logging.getLogger(__name__)

NEWEST_FIRST = [("created_at", True)]


@dataclass
class RequestMeta:
    """Client details recorded with a submission."""

    ip_address: str | None = None
    user_agent: str | None = None


def _new_contact(
    contact_type: ContactType, meta: RequestMeta | None, **fields: Any
) -> Contact:
    contact = Contact(
        type=contact_type,
        priority=priority_for_type(contact_type),
        status=ContactStatus.NEW,
        notes=[],
        **fields,
    )
    if meta:
        contact.ip_address = meta.ip_address
        contact.user_agent = (meta.user_agent or "")[:500] or None
    return contact


async def submit_inquiry(
    store: Storage,
    data: InquiryCreate,
    mailer: EmailProvider,
    notify_timeout: float,
    meta: RequestMeta | None = None,
) -> Contact:
    """Create a general or partnership inquiry and confirm it by email.

    A failed confirmation email is logged; the inquiry stays created.

    Args:
        store: Storage backend
        data: Validated inquiry fields
        mailer: Email provider for the confirmation
        notify_timeout: Seconds to wait for the provider
        meta: Client details of the request

    Returns:
        The stored Contact
    """
    contact = store.contacts.add(
        _new_contact(
            ContactType(data.type),
            meta,
            name=data.name,
            email=data.email,
            phone=data.phone,
            company=data.company,
            subject=data.subject,
            message=data.message,
        )
    )
    logger.info("Inquiry %s received (type=%s)", contact.id, contact.type.value)

    await notification_service.notify(
        mailer,
        notification_service.contact_confirmation(data.name, data.email, data.message),
        notify_timeout,
    )
    return contact


async def submit_career_application(
    store: Storage,
    data: CareerApplicationCreate,
    resume: StoredFile | None,
    uploads: UploadService,
    mailer: EmailProvider,
    notify_timeout: float,
    meta: RequestMeta | None = None,
) -> Contact:
    """Create a career application with an optional stored resume.

    If the record cannot be stored, the already uploaded resume is removed
    before the error propagates.
    """
    with uploads.discard_on_error([resume] if resume else []):
        contact = store.contacts.add(
            _new_contact(
                ContactType.CAREER,
                meta,
                name=data.full_name,
                email=data.email,
                phone=data.phone,
                position=data.position,
                experience=data.experience,
                cover_letter=data.cover_letter,
                resume=resume.as_reference() if resume else None,
            )
        )
    logger.info("Career application %s received for %s", contact.id, data.position)

    await notification_service.notify(
        mailer,
        notification_service.career_confirmation(
            data.full_name, data.email, data.position
        ),
        notify_timeout,
    )
    return contact


def list_inquiries(
    store: Storage,
    page: int,
    limit: int,
    contact_type: ContactType | None = None,
    status: ContactStatus | None = None,
    sort: SortSpec | None = None,
) -> Page[Contact]:
    """Page through contacts filtered on the given fields only.

    Without ``sort`` the newest contacts come first.
    """
    filters: dict[str, Any] = {}
    if contact_type is not None:
        filters["type"] = contact_type
    if status is not None:
        filters["status"] = status
    return store.contacts.page(filters, sort or NEWEST_FIRST, page, limit)


def get_inquiry(store: Storage, inquiry_id: uuid.UUID) -> Contact:
    contact = store.contacts.get(inquiry_id)
    if contact is None:
        raise NotFoundError("Inquiry not found")
    return contact


def update_inquiry_status(
    store: Storage, inquiry_id: uuid.UUID, status: ContactStatus
) -> Contact:
    """Set the status. Any status may follow any other."""
    contact = get_inquiry(store, inquiry_id)
    contact.status = status
    return store.contacts.save(contact)


def _note(content: str, author: str) -> dict[str, str]:
    return {"content": content, "author": author, "created_at": utcnow().isoformat()}


def add_note(
    store: Storage, inquiry_id: uuid.UUID, content: str, author: str
) -> Contact:
    """Append a note; existing notes are never changed."""
    contact = get_inquiry(store, inquiry_id)
    contact.notes = [*(contact.notes or []), _note(content, author)]
    return store.contacts.save(contact)


def mark_as_contacted(
    store: Storage,
    inquiry_id: uuid.UUID,
    note: str | None = None,
    author: str = SYSTEM_ACTOR,
) -> Contact:
    """Set status to contacted and record the optional note."""
    contact = get_inquiry(store, inquiry_id)
    contact.status = ContactStatus.CONTACTED
    if note:
        contact.notes = [*(contact.notes or []), _note(note, author)]
    return store.contacts.save(contact)


def get_stats(store: Storage) -> list[dict[str, Any]]:
    """Per contact type: total plus new, contacted and resolved counts."""
    stats = []
    for contact_type in store.contacts.distinct("type"):
        stats.append(
            {
                "type": contact_type,
                "total": store.contacts.count({"type": contact_type}),
                "new": store.contacts.count(
                    {"type": contact_type, "status": ContactStatus.NEW}
                ),
                "contacted": store.contacts.count(
                    {"type": contact_type, "status": ContactStatus.CONTACTED}
                ),
                "resolved": store.contacts.count(
                    {"type": contact_type, "status": ContactStatus.RESOLVED}
                ),
            }
        )
    return stats
