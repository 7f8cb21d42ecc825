# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Upload handling: type/size/count checks and the blob store behind them."""

import logging
import secrets
import time
import uuid
from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from fastapi import UploadFile

from src.errors import UploadError, error_item

logger = logging.getLogger(__name__)

IMAGE_TYPES = frozenset(
    {"image/jpeg", "image/jpg", "image/png", "image/gif", "image/webp"}
)
DOCUMENT_TYPES = frozenset(
    {
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    }
)
DOCUMENT_FIELDS = frozenset({"resume", "cv"})


def allowed_types_for(field: str) -> frozenset[str]:
    """Content types accepted for a form field.

    Resume-like fields take documents, image-like fields take images, and any
    other field takes both.
    """
    if field in DOCUMENT_FIELDS:
        return DOCUMENT_TYPES
    if "image" in field or field == "avatar":
        return IMAGE_TYPES
    return IMAGE_TYPES | DOCUMENT_TYPES


def is_safe_filename(filename: str) -> bool:
    return bool(filename) and filename not in {".", ".."} and not any(
        sep in filename for sep in ("/", "\\", "\x00")
    )


@dataclass
class BlobInfo:
    size: int
    created: datetime
    modified: datetime


@dataclass
class StoredFile:
    """Reference to a blob written by the upload handler."""

    field: str
    filename: str
    original_name: str | None
    path: str
    size: int
    mimetype: str

    @property
    def url(self) -> str:
        return f"/uploads/{self.filename}"

    def as_reference(self) -> dict[str, Any]:
        return {
            "filename": self.filename,
            "original_name": self.original_name,
            "path": self.path,
            "size": self.size,
            "mimetype": self.mimetype,
        }

    def as_image(self, caption: str | None = None) -> dict[str, Any]:
        """Image entry for a project's image collection."""
        return {
            **self.as_reference(),
            "id": uuid.uuid4().hex,
            "url": self.url,
            "caption": caption,
            "is_primary": False,
            "uploaded_at": datetime.now(UTC).replace(tzinfo=None).isoformat(),
        }


class BlobStore(ABC):
    """Flat namespace of named byte blobs."""

    @abstractmethod
    def put(self, name: str, data: bytes) -> str:
        """Store a blob and return its storage path."""

    @abstractmethod
    def delete(self, name: str) -> bool:
        """Delete a blob. Returns False if it did not exist."""

    @abstractmethod
    def exists(self, name: str) -> bool:
        """Check whether a blob exists."""

    @abstractmethod
    def stat(self, name: str) -> BlobInfo | None:
        """Return blob metadata, or None if absent."""


class LocalBlobStore(BlobStore):
    """Blobs stored as files in one directory."""

    def __init__(self, root: str | Path):
        self.root = Path(root)

    def _path(self, name: str) -> Path:
        if not is_safe_filename(name):
            raise UploadError(
                "Invalid filename", [error_item("filename", "Invalid filename", name)]
            )
        return self.root / name

    def put(self, name: str, data: bytes) -> str:
        path = self._path(name)
        self.root.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        return str(path)

    def delete(self, name: str) -> bool:
        try:
            self._path(name).unlink()
        except FileNotFoundError:
            return False
        return True

    def exists(self, name: str) -> bool:
        return self._path(name).is_file()

    def stat(self, name: str) -> BlobInfo | None:
        try:
            st = self._path(name).stat()
        except FileNotFoundError:
            return None
        return BlobInfo(
            size=st.st_size,
            created=datetime.fromtimestamp(st.st_ctime, UTC).replace(tzinfo=None),
            modified=datetime.fromtimestamp(st.st_mtime, UTC).replace(tzinfo=None),
        )


def unique_filename(field: str, original_name: str | None) -> str:
    """``<field>-<epoch ms>-<random>.<ext>``, extension from the original name."""
    ext = Path(original_name or "").suffix.lower()
    return f"{field}-{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{ext}"


class UploadService:
    """Validates multipart files and writes them to a blob store.

    All files of a request are checked before the first one is written, so a
    rejected request leaves nothing behind.
    """

    def __init__(self, store: BlobStore, max_bytes: int, max_files: int):
        self.store = store
        self.max_bytes = max_bytes
        self.max_files = max_files

    async def _read_checked(self, field: str, upload: UploadFile) -> bytes:
        allowed = allowed_types_for(field)
        content_type = upload.content_type or ""
        if content_type not in allowed:
            message = (
                f"Invalid file type for {field}. "
                f"Allowed types: {', '.join(sorted(allowed))}"
            )
            raise UploadError(message, [error_item(field, message, content_type)])

        data = await upload.read(self.max_bytes + 1)
        if len(data) > self.max_bytes:
            limit_mb = self.max_bytes // (1024 * 1024)
            message = f"File too large. Maximum size is {limit_mb}MB"
            raise UploadError(message, [error_item(field, message, upload.filename)])
        return data

    async def save(
        self, field: str, uploads: Iterable[UploadFile | None]
    ) -> list[StoredFile]:
        """Validate and store every file part of one form field.

        Parts without a filename (empty file inputs) are ignored.

        Raises:
            UploadError: if any file violates the count, type or size limits.
        """
        parts = [u for u in uploads if u is not None and u.filename]
        if len(parts) > self.max_files:
            message = f"Too many files. Maximum is {self.max_files} files"
            raise UploadError(message, [error_item(field, message, len(parts))])

        checked = [
            (upload, await self._read_checked(field, upload)) for upload in parts
        ]

        stored: list[StoredFile] = []
        try:
            for upload, data in checked:
                name = unique_filename(field, upload.filename)
                while self.store.exists(name):
                    name = unique_filename(field, upload.filename)
                path = self.store.put(name, data)
                stored.append(
                    StoredFile(
                        field=field,
                        filename=name,
                        original_name=upload.filename,
                        path=path,
                        size=len(data),
                        mimetype=upload.content_type or "",
                    )
                )
        except OSError:
            self.cleanup(stored)
            raise
        for item in stored:
            logger.info("Stored upload %s (%s bytes)", item.filename, item.size)
        return stored

    async def save_one(
        self, field: str, upload: UploadFile | None
    ) -> StoredFile | None:
        stored = await self.save(field, [upload])
        return stored[0] if stored else None

    def delete(self, filename: str) -> bool:
        """Delete one blob. A blob that is already gone counts as deleted."""
        removed = self.store.delete(filename)
        if not removed:
            logger.debug("Upload %s already gone", filename)
        return removed

    @contextmanager
    def discard_on_error(self, files: list[StoredFile]) -> Iterator[None]:
        """Remove ``files`` if the wrapped block raises, then re-raise."""
        try:
            yield
        except Exception:
            self.cleanup(files)
            raise

    def cleanup(self, files: Iterable[StoredFile | str]) -> None:
        """Best-effort removal of blobs written for a request that failed."""
        for item in files:
            filename = item.filename if isinstance(item, StoredFile) else item
            try:
                self.store.delete(filename)
            except (OSError, UploadError) as exc:
                logger.warning("Failed to clean up upload %s: %s", filename, exc)
