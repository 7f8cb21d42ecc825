# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set test environment before importing app
os.environ["ENVIRONMENT"] = "test"
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-key-for-testing-only-32chars!"  # nosec - test-only secret  # noqa: S105
os.environ["AUTH_BYPASS"] = "false"
os.environ["EMAIL_BACKEND"] = "console"
os.environ["RATE_LIMIT_ENABLED"] = "false"

from src.api.deps import get_email_provider, get_upload_service
from src.config import settings
from src.integrations import ConsoleEmailProvider, EmailMessageData
from src.main import app
from src.models import User, UserRole
from src.models.base import Base
from src.rate_limit import rate_limiter
from src.security import create_access_token, get_password_hash
from src.services.upload_service import LocalBlobStore, UploadService
from src.storage import MemoryStorage, SqlStorage, get_storage

TEST_PASSWORD = "testpassword123"  # noqa: S105


@pytest.fixture(params=["memory", "sql"])
def storage(request):
    """Fresh storage backend for each test, once per implementation."""
    if request.param == "memory":
        yield MemoryStorage()
        return

    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(autocommit=False, autoflush=False, bind=engine)()
    try:
        yield SqlStorage(session)
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def upload_dir(tmp_path, monkeypatch):
    """Temporary upload directory."""
    path = tmp_path / "uploads"
    monkeypatch.setattr(settings, "upload_dir", str(path))
    return path


@pytest.fixture
def uploads(upload_dir) -> UploadService:
    return UploadService(
        LocalBlobStore(upload_dir),
        max_bytes=settings.max_upload_bytes,
        max_files=settings.max_upload_files,
    )


class RecordingEmailProvider(ConsoleEmailProvider):
    """Console provider that also keeps every message for assertions."""

    def __init__(self) -> None:
        self.sent: list[EmailMessageData] = []

    async def send_email(self, message: EmailMessageData) -> str:
        self.sent.append(message)
        return await super().send_email(message)


@pytest.fixture
def mailer() -> RecordingEmailProvider:
    return RecordingEmailProvider()


@pytest.fixture
def client(storage, uploads, mailer):
    """Create a test client with storage, upload and email overrides."""

    def override_get_storage():
        yield storage

    app.dependency_overrides[get_storage] = override_get_storage
    app.dependency_overrides[get_upload_service] = lambda: uploads
    app.dependency_overrides[get_email_provider] = lambda: mailer
    rate_limiter.reset()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
    rate_limiter.reset()


@pytest.fixture
def bypass_auth(monkeypatch):
    monkeypatch.setattr(settings, "auth_bypass", True)


def create_user(
    storage,
    role: UserRole = UserRole.VIEWER,
    email: str | None = None,
    is_active: bool = True,
) -> User:
    """Helper to create a persisted user."""
    return storage.users.add(
        User(
            name=f"Test {role.value.title()}",
            email=email or f"{role.value}@zimbuild.co.zw",
            hashed_password=get_password_hash(TEST_PASSWORD),
            role=role,
            is_active=is_active,
            profile={},
        )
    )


def auth_headers(user: User) -> dict[str, str]:
    token = create_access_token(user.id, user.role.value)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_user(storage) -> User:
    return create_user(storage, UserRole.ADMIN)


@pytest.fixture
def editor_user(storage) -> User:
    return create_user(storage, UserRole.EDITOR)


@pytest.fixture
def viewer_user(storage) -> User:
    return create_user(storage, UserRole.VIEWER)


@pytest.fixture
def admin_headers(admin_user) -> dict[str, str]:
    return auth_headers(admin_user)


@pytest.fixture
def editor_headers(editor_user) -> dict[str, str]:
    return auth_headers(editor_user)


@pytest.fixture
def viewer_headers(viewer_user) -> dict[str, str]:
    return auth_headers(viewer_user)


@pytest.fixture
def make_user(storage):
    """Factory for extra users: ``make_user(role, email=..., is_active=...)``."""

    def factory(role: UserRole = UserRole.VIEWER, **kwargs) -> User:
        return create_user(storage, role, **kwargs)

    return factory


@pytest.fixture
def headers_for():
    return auth_headers
