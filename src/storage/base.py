# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Storage interface shared by the in-memory and SQL backends.

Services only talk to :class:`Storage`. Records are the SQLAlchemy model
instances from :mod:`src.models` in both backends.
"""

import math
import uuid
from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from src.models import Contact, Project, Subscriber, User

T = TypeVar("T")

Filters = dict[str, Any]
# (attribute, descending)
SortSpec = Sequence[tuple[str, bool]]

UNIQUE_FIELDS: dict[type, tuple[str, ...]] = {
    Subscriber: ("email",),
    User: ("email",),
}


@dataclass
class Page(Generic[T]):
    """One page of a filtered listing."""

    items: list[T]
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


class Repository(ABC, Generic[T]):
    """Collection of one record type.

    Filters are conjunctive equality matches on attribute names. Sort specs
    are applied left to right; ``None`` values always sort last.
    """

    def __init__(self, model: type[T]):
        self.model = model
        self.unique_fields = UNIQUE_FIELDS.get(model, ())

    @abstractmethod
    def add(self, record: T) -> T:
        """Persist a new record and return it with id and timestamps set."""

    @abstractmethod
    def get(self, record_id: uuid.UUID) -> T | None:
        """Return the record with this id, or None."""

    @abstractmethod
    def find(
        self,
        filters: Filters | None = None,
        sort: SortSpec | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[T]:
        """Return matching records in sort order."""

    @abstractmethod
    def count(self, filters: Filters | None = None) -> int:
        """Return the number of matching records."""

    @abstractmethod
    def distinct(self, field: str, filters: Filters | None = None) -> list[Any]:
        """Return the distinct values of ``field`` among matching records."""

    @abstractmethod
    def save(self, record: T) -> T:
        """Persist changes to an existing record and bump ``updated_at``."""

    @abstractmethod
    def increment(self, record: T, field: str, amount: int = 1) -> T:
        """Atomically add ``amount`` to an integer field."""

    @abstractmethod
    def delete(self, record: T) -> None:
        """Remove a record."""

    def find_one(self, filters: Filters) -> T | None:
        found = self.find(filters, limit=1)
        return found[0] if found else None

    def page(
        self,
        filters: Filters | None,
        sort: SortSpec | None,
        page: int,
        limit: int,
    ) -> Page[T]:
        """Return one page of matching records plus the total match count."""
        total = self.count(filters)
        items = self.find(filters, sort, offset=(page - 1) * limit, limit=limit)
        return Page(items=items, page=page, limit=limit, total=total)


class Storage(ABC):
    """All repositories of one backend."""

    contacts: Repository[Contact]
    subscribers: Repository[Subscriber]
    projects: Repository[Project]
    users: Repository[User]

    def close(self) -> None:  # noqa: B027
        """Release per-request resources."""
