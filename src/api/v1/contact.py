# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Contact, careers and newsletter endpoints."""

import uuid

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from src.api.deps import (
    INQUIRY_MANAGERS,
    acting_identity,
    get_email_provider,
    get_request_meta,
    get_upload_service,
    require_roles,
)
from src.config import settings
from src.integrations import EmailProvider
from src.models import ContactStatus, ContactType, User
from src.schemas.common import ApiResponse, PaginationMeta
from src.schemas.contact import (
    ApplicationSubmitted,
    CareerApplicationCreate,
    ContactResponse,
    InquiryCreate,
    InquiryEnvelope,
    InquiryListResponse,
    InquiryNoteCreate,
    InquiryStatsResponse,
    InquiryStatusUpdate,
    InquirySubmitted,
    NewsletterEmail,
    NewsletterPreferencesUpdate,
    NewsletterSubscribe,
    NewsletterSubscribed,
    SubscriberEnvelope,
    SubscriberResponse,
)
from src.services import contact_service, newsletter_service
from src.services.contact_service import RequestMeta
from src.services.upload_service import UploadService
from src.storage import Storage, get_storage
from src.validation import ListQuery, choice, list_query, validate_model

router = APIRouter()

INQUIRY_FILTERS = {"type": choice(ContactType), "status": choice(ContactStatus)}
INQUIRY_SORT_FIELDS = {"createdAt": "created_at", "updatedAt": "updated_at"}


@router.post(
    "/inquiry",
    response_model=ApiResponse[InquirySubmitted],
    status_code=status.HTTP_201_CREATED,
)
async def submit_inquiry(
    data: InquiryCreate,
    store: Storage = Depends(get_storage),
    mailer: EmailProvider = Depends(get_email_provider),
    meta: RequestMeta = Depends(get_request_meta),
) -> ApiResponse[InquirySubmitted]:
    """Submit a general or partnership inquiry from the contact form."""
    contact = await contact_service.submit_inquiry(
        store, data, mailer, settings.notification_timeout, meta
    )
    return ApiResponse(
        message="Thank you for your inquiry. We will contact you soon.",
        data=InquirySubmitted(inquiry_id=contact.id, submitted_at=contact.created_at),
    )


@router.post(
    "/career",
    response_model=ApiResponse[ApplicationSubmitted],
    status_code=status.HTTP_201_CREATED,
)
async def submit_career_application(
    full_name: str | None = Form(None, alias="fullName"),
    email: str | None = Form(None),
    phone: str | None = Form(None),
    position: str | None = Form(None),
    experience: str | None = Form(None),
    cover_letter: str | None = Form(None, alias="coverLetter"),
    resume: UploadFile | None = File(None),
    store: Storage = Depends(get_storage),
    uploads: UploadService = Depends(get_upload_service),
    mailer: EmailProvider = Depends(get_email_provider),
    meta: RequestMeta = Depends(get_request_meta),
) -> ApiResponse[ApplicationSubmitted]:
    """Submit a career application with an optional resume document."""
    fields = {
        "fullName": full_name,
        "email": email,
        "phone": phone,
        "position": position,
        "experience": experience,
        "coverLetter": cover_letter,
    }
    data = validate_model(
        CareerApplicationCreate,
        {name: value for name, value in fields.items() if value is not None},
    )
    stored_resume = await uploads.save_one("resume", resume)
    contact = await contact_service.submit_career_application(
        store,
        data,
        stored_resume,
        uploads,
        mailer,
        settings.notification_timeout,
        meta,
    )
    return ApiResponse(
        message="Application submitted successfully. We will review your application.",
        data=ApplicationSubmitted(
            application_id=contact.id,
            position=data.position,
            submitted_at=contact.created_at,
        ),
    )


@router.post(
    "/newsletter",
    response_model=ApiResponse[NewsletterSubscribed],
    status_code=status.HTTP_201_CREATED,
)
def subscribe_to_newsletter(
    data: NewsletterSubscribe,
    store: Storage = Depends(get_storage),
    meta: RequestMeta = Depends(get_request_meta),
) -> ApiResponse[NewsletterSubscribed]:
    """Subscribe an email address. A known address is rejected with 400."""
    subscriber = newsletter_service.subscribe(
        store,
        data,
        signup_metadata={"ip_address": meta.ip_address, "user_agent": meta.user_agent},
    )
    return ApiResponse(
        message="Successfully subscribed to our newsletter!",
        data=NewsletterSubscribed(
            email=subscriber.email, subscribed_at=subscriber.created_at
        ),
    )


@router.post(
    "/newsletter/unsubscribe", response_model=ApiResponse[SubscriberEnvelope]
)
def unsubscribe_from_newsletter(
    data: NewsletterEmail,
    store: Storage = Depends(get_storage),
) -> ApiResponse[SubscriberEnvelope]:
    subscriber = newsletter_service.unsubscribe(store, data.email)
    return ApiResponse(
        message="You have been unsubscribed.",
        data=SubscriberEnvelope(
            subscriber=SubscriberResponse.model_validate(subscriber)
        ),
    )


@router.post(
    "/newsletter/reactivate", response_model=ApiResponse[SubscriberEnvelope]
)
def reactivate_newsletter(
    data: NewsletterEmail,
    store: Storage = Depends(get_storage),
) -> ApiResponse[SubscriberEnvelope]:
    subscriber = newsletter_service.reactivate(store, data.email)
    return ApiResponse(
        message="Subscription reactivated.",
        data=SubscriberEnvelope(
            subscriber=SubscriberResponse.model_validate(subscriber)
        ),
    )


@router.patch(
    "/newsletter/preferences", response_model=ApiResponse[SubscriberEnvelope]
)
def update_newsletter_preferences(
    data: NewsletterPreferencesUpdate,
    store: Storage = Depends(get_storage),
) -> ApiResponse[SubscriberEnvelope]:
    subscriber = newsletter_service.update_preferences(store, data)
    return ApiResponse(
        message="Preferences updated.",
        data=SubscriberEnvelope(
            subscriber=SubscriberResponse.model_validate(subscriber)
        ),
    )


@router.get("/inquiries", response_model=ApiResponse[InquiryListResponse])
def list_inquiries(
    _: User | None = Depends(require_roles(*INQUIRY_MANAGERS)),
    query: ListQuery = Depends(
        list_query(
            default_limit=10,
            filters=INQUIRY_FILTERS,
            sort_fields=INQUIRY_SORT_FIELDS,
        )
    ),
    store: Storage = Depends(get_storage),
) -> ApiResponse[InquiryListResponse]:
    """List contact records, newest first unless sorted otherwise."""
    page = contact_service.list_inquiries(
        store,
        query.page,
        query.limit,
        contact_type=query.filters.get("type"),
        status=query.filters.get("status"),
        sort=query.sort,
    )
    return ApiResponse(
        data=InquiryListResponse(
            inquiries=[ContactResponse.model_validate(c) for c in page.items],
            pagination=PaginationMeta(
                page=page.page,
                limit=page.limit,
                total=page.total,
                total_pages=page.total_pages,
            ),
        )
    )


@router.get("/stats", response_model=ApiResponse[InquiryStatsResponse])
def get_inquiry_stats(
    store: Storage = Depends(get_storage),
    _: User | None = Depends(require_roles(*INQUIRY_MANAGERS)),
) -> ApiResponse[InquiryStatsResponse]:
    return ApiResponse(
        data=InquiryStatsResponse.model_validate(
            {"stats": contact_service.get_stats(store)}
        )
    )


@router.get("/inquiries/{inquiry_id}", response_model=ApiResponse[InquiryEnvelope])
def get_inquiry(
    inquiry_id: uuid.UUID,
    store: Storage = Depends(get_storage),
    _: User | None = Depends(require_roles(*INQUIRY_MANAGERS)),
) -> ApiResponse[InquiryEnvelope]:
    contact = contact_service.get_inquiry(store, inquiry_id)
    return ApiResponse(
        data=InquiryEnvelope(inquiry=ContactResponse.model_validate(contact))
    )


@router.patch(
    "/inquiries/{inquiry_id}/status", response_model=ApiResponse[InquiryEnvelope]
)
def update_inquiry_status(
    inquiry_id: uuid.UUID,
    data: InquiryStatusUpdate,
    store: Storage = Depends(get_storage),
    _: User | None = Depends(require_roles(*INQUIRY_MANAGERS)),
) -> ApiResponse[InquiryEnvelope]:
    contact = contact_service.update_inquiry_status(store, inquiry_id, data.status)
    return ApiResponse(
        message="Inquiry status updated successfully.",
        data=InquiryEnvelope(inquiry=ContactResponse.model_validate(contact)),
    )


@router.patch(
    "/inquiries/{inquiry_id}/contacted", response_model=ApiResponse[InquiryEnvelope]
)
def mark_inquiry_contacted(
    inquiry_id: uuid.UUID,
    data: InquiryNoteCreate | None = None,
    store: Storage = Depends(get_storage),
    user: User | None = Depends(require_roles(*INQUIRY_MANAGERS)),
) -> ApiResponse[InquiryEnvelope]:
    """Set status to contacted, optionally with a note."""
    contact = contact_service.mark_as_contacted(
        store,
        inquiry_id,
        data.content if data else None,
        author=acting_identity(user),
    )
    return ApiResponse(
        message="Inquiry marked as contacted.",
        data=InquiryEnvelope(inquiry=ContactResponse.model_validate(contact)),
    )


@router.post(
    "/inquiries/{inquiry_id}/notes",
    response_model=ApiResponse[InquiryEnvelope],
    status_code=status.HTTP_201_CREATED,
)
def add_inquiry_note(
    inquiry_id: uuid.UUID,
    data: InquiryNoteCreate,
    store: Storage = Depends(get_storage),
    user: User | None = Depends(require_roles(*INQUIRY_MANAGERS)),
) -> ApiResponse[InquiryEnvelope]:
    contact = contact_service.add_note(
        store, inquiry_id, data.content, acting_identity(user)
    )
    return ApiResponse(
        message="Note added.",
        data=InquiryEnvelope(inquiry=ContactResponse.model_validate(contact)),
    )
