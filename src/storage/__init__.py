# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Storage backends and the request-scoped storage dependency."""

from collections.abc import Generator

from src.config import settings
from src.storage.base import Page, Repository, Storage
from src.storage.memory import MemoryStorage
from src.storage.sql import SqlStorage

_memory_storage: MemoryStorage | None = None


def get_memory_storage() -> MemoryStorage:
    """Return the process-wide in-memory store, creating it on first use."""
    global _memory_storage
    if _memory_storage is None:
        _memory_storage = MemoryStorage()
    return _memory_storage


def get_storage() -> Generator[Storage]:
    """Yield the storage backend selected by ``STORAGE_BACKEND``."""
    if settings.storage_backend == "memory":
        yield get_memory_storage()
        return

    from src.database import SessionLocal

    storage = SqlStorage(SessionLocal())
    try:
        yield storage
    finally:
        storage.close()


__all__ = [
    "MemoryStorage",
    "Page",
    "Repository",
    "SqlStorage",
    "Storage",
    "get_memory_storage",
    "get_storage",
]
