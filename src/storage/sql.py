# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""SQLAlchemy storage backend, one session per request."""

import logging
import uuid
from typing import Any, TypeVar

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from src.errors import DuplicateKeyError
from src.models import Contact, Project, Subscriber, User
from src.models.base import utcnow
from src.storage.base import Filters, Repository, SortSpec, Storage

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SqlRepository(Repository[T]):
    """Repository over one mapped table."""

    def __init__(self, model: type[T], db: Session) -> None:
        super().__init__(model)
        self.db = db

    def _where(self, stmt, filters: Filters | None):
        for key, value in (filters or {}).items():
            stmt = stmt.where(getattr(self.model, key) == value)
        return stmt

    def _commit(self, record: T) -> None:
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            field = self.unique_fields[0] if self.unique_fields else "id"
            logger.debug("Integrity error on %s: %s", self.model.__name__, exc.orig)
            raise DuplicateKeyError(field, getattr(record, field, None)) from exc
        self.db.refresh(record)

    def add(self, record: T) -> T:
        self.db.add(record)
        self._commit(record)
        return record

    def get(self, record_id: uuid.UUID) -> T | None:
        return self.db.get(self.model, record_id)

    def find(
        self,
        filters: Filters | None = None,
        sort: SortSpec | None = None,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[T]:
        stmt = self._where(select(self.model), filters)
        for field, descending in sort or ():
            column = getattr(self.model, field)
            order = column.desc() if descending else column.asc()
            stmt = stmt.order_by(order.nulls_last())
        if offset:
            stmt = stmt.offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self.db.scalars(stmt).all())

    def count(self, filters: Filters | None = None) -> int:
        stmt = self._where(select(func.count()).select_from(self.model), filters)
        return self.db.scalar(stmt) or 0

    def distinct(self, field: str, filters: Filters | None = None) -> list[Any]:
        stmt = self._where(select(getattr(self.model, field)).distinct(), filters)
        return list(self.db.scalars(stmt).all())

    def save(self, record: T) -> T:
        record.updated_at = utcnow()
        self.db.add(record)
        self._commit(record)
        return record

    def increment(self, record: T, field: str, amount: int = 1) -> T:
        column = getattr(self.model, field)
        self.db.execute(
            update(self.model)
            .where(self.model.id == record.id)
            .values({field: column + amount})
        )
        self._commit(record)
        return record

    def delete(self, record: T) -> None:
        self.db.delete(record)
        self.db.commit()


class SqlStorage(Storage):
    """Repositories bound to one database session."""

    def __init__(self, db: Session) -> None:
        self.db = db
        self.contacts = SqlRepository(Contact, db)
        self.subscribers = SqlRepository(Subscriber, db)
        self.projects = SqlRepository(Project, db)
        self.users = SqlRepository(User, db)

    def close(self) -> None:
        self.db.close()
