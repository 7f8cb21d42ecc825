# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Newsletter subscriptions."""

import logging
from typing import Any

from src.errors import AlreadySubscribedError, DuplicateKeyError, NotFoundError
from src.models import DEFAULT_PREFERENCES, Subscriber
from src.models.base import utcnow
from src.schemas.contact import NewsletterPreferencesUpdate, NewsletterSubscribe
from src.storage import Storage

logger = logging.getLogger(__name__)


def _apply_activity_rule(subscriber: Subscriber) -> None:
    """A subscriber who opted out of everything cannot stay active."""
    if not any((subscriber.preferences or {}).values()):
        subscriber.is_active = False


def get_subscriber(store: Storage, email: str) -> Subscriber:
    subscriber = store.subscribers.find_one({"email": email.lower()})
    if subscriber is None:
        raise NotFoundError("Subscriber not found")
    return subscriber


def subscribe(
    store: Storage,
    data: NewsletterSubscribe,
    signup_metadata: dict[str, Any] | None = None,
) -> Subscriber:
    """Create a subscriber.

    Raises:
        AlreadySubscribedError: if the email is already on the list, active
            or not. The existing record is left untouched.
    """
    subscriber = Subscriber(
        email=data.email.lower(),
        name=data.name,
        source=data.source,
        is_active=True,
        preferences=dict(DEFAULT_PREFERENCES),
        signup_metadata=signup_metadata,
        last_engagement=utcnow(),
        engagement_count=0,
    )
    try:
        subscriber = store.subscribers.add(subscriber)
    except DuplicateKeyError as exc:
        raise AlreadySubscribedError() from exc
    logger.info("Newsletter subscriber %s added", subscriber.id)
    return subscriber


def unsubscribe(store: Storage, email: str) -> Subscriber:
    subscriber = get_subscriber(store, email)
    subscriber.is_active = False
    return store.subscribers.save(subscriber)


def update_preferences(
    store: Storage, data: NewsletterPreferencesUpdate
) -> Subscriber:
    """Merge the provided toggles into the stored preferences."""
    subscriber = get_subscriber(store, data.email)
    changes = data.model_dump(
        exclude_unset=True, exclude_none=True, exclude={"email"}
    )
    subscriber.preferences = {**(subscriber.preferences or {}), **changes}
    _apply_activity_rule(subscriber)
    return store.subscribers.save(subscriber)


def reactivate(store: Storage, email: str) -> Subscriber:
    """Turn a subscription back on and count it as an engagement.

    A subscriber whose preferences are all off stays inactive.
    """
    subscriber = get_subscriber(store, email)
    subscriber.is_active = True
    subscriber.last_engagement = utcnow()
    subscriber.engagement_count = (subscriber.engagement_count or 0) + 1
    _apply_activity_rule(subscriber)
    return store.subscribers.save(subscriber)
