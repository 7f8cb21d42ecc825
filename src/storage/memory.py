# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Process-local storage backend.

Meant for development and tests. All access to the record lists goes through
one re-entrant lock, so concurrent requests see serialized single-record
read-modify-write operations. Records handed out are the stored objects
themselves; callers mutate them and then call ``save``.
"""

import threading
import uuid
from typing import Any, TypeVar

from sqlalchemy import inspect as sa_inspect

from src.errors import DuplicateKeyError
from src.models import Contact, Project, Subscriber, User
from src.models.base import utcnow
from src.storage.base import Filters, Repository, SortSpec, Storage

T = TypeVar("T")


class IdAllocator:
    """Hands out record ids that are unique for the lifetime of the store."""

    def __init__(self) -> None:
        self._issued: set[uuid.UUID] = set()
        self._lock = threading.Lock()

    def next_id(self) -> uuid.UUID:
        with self._lock:
            new_id = uuid.uuid4()
            while new_id in self._issued:
                new_id = uuid.uuid4()
            self._issued.add(new_id)
            return new_id


def apply_column_defaults(record: Any) -> None:
    """Fill unset attributes from the model's Python-side column defaults.

    The SQL backend gets these from the INSERT; memory records never see one.
    """
    for column in sa_inspect(type(record)).columns:
        if getattr(record, column.key) is not None or column.default is None:
            continue
        default = column.default
        if default.is_callable:
            setattr(record, column.key, default.arg(None))
        elif default.is_scalar:
            setattr(record, column.key, default.arg)


def _matches(record: Any, filters: Filters | None) -> bool:
    if not filters:
        return True
    return all(getattr(record, key) == value for key, value in filters.items())


def _sorted(records: list[T], sort: SortSpec | None) -> list[T]:
    ordered = list(records)
    # Stable sorts applied from the least significant key upwards
    for field, descending in reversed(list(sort or ())):
        present = [r for r in ordered if getattr(r, field) is not None]
        missing = [r for r in ordered if getattr(r, field) is None]
        present.sort(key=lambda r, f=field: getattr(r, f), reverse=descending)
        ordered = present + missing
    return ordered


class MemoryRepository(Repository[T]):
    """List-backed repository sharing its store's lock and id allocator."""

    def __init__(
        self, model: type[T], lock: threading.RLock, ids: IdAllocator
    ) -> None:
        super().__init__(model)
        self._records: list[T] = []
        self._lock = lock
        self._ids = ids

    def _check_unique(self, record: T) -> None:
        for field in self.unique_fields:
            value = getattr(record, field)
            for other in self._records:
                if other is not record and getattr(other, field) == value:
                    raise DuplicateKeyError(field, value)

    def add(self, record: T) -> T:
        with self._lock:
            apply_column_defaults(record)
            self._check_unique(record)
            record.id = self._ids.next_id()
            now = utcnow()
            record.created_at = now
            record.updated_at = now
            self._records.append(record)
            return record

    def get(self, record_id: uuid.UUID) -> T | None:
        with self._lock:
            for record in self._records:
                if record.id == record_id:
                    return record
            return None

    def find(
        self,
        filters: Filters | None = None,
        sort: SortSpec | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[T]:
        with self._lock:
            matched = [r for r in self._records if _matches(r, filters)]
        matched = _sorted(matched, sort)
        end = None if limit is None else offset + limit
        return matched[offset:end]

    def count(self, filters: Filters | None = None) -> int:
        with self._lock:
            return sum(1 for r in self._records if _matches(r, filters))

    def distinct(self, field: str, filters: Filters | None = None) -> list[Any]:
        values: list[Any] = []
        with self._lock:
            for record in self._records:
                if _matches(record, filters):
                    value = getattr(record, field)
                    if value not in values:
                        values.append(value)
        return values

    def save(self, record: T) -> T:
        with self._lock:
            self._check_unique(record)
            record.updated_at = utcnow()
            return record

    def increment(self, record: T, field: str, amount: int = 1) -> T:
        with self._lock:
            setattr(record, field, (getattr(record, field) or 0) + amount)
            return record

    def delete(self, record: T) -> None:
        with self._lock:
            self._records = [r for r in self._records if r is not record]


class MemoryStorage(Storage):
    """All collections held in process memory."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self.ids = IdAllocator()
        self.contacts = MemoryRepository(Contact, self._lock, self.ids)
        self.subscribers = MemoryRepository(Subscriber, self._lock, self.ids)
        self.projects = MemoryRepository(Project, self._lock, self.ids)
        self.users = MemoryRepository(User, self._lock, self.ids)
