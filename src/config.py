# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Application settings loaded from the environment."""

from typing import Literal

from pydantic import Field, SecretStr, ValidationInfo, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_JWT_SECRET = "change-me-in-production"  # noqa: S105


class Settings(BaseSettings):
    """Runtime configuration.

    Every field can be overridden with an environment variable of the same
    name (case-insensitive) or through a local ``.env`` file.
    """

    app_name: str = "ZimBuild Construction API"
    version: str = "0.1.0"

    # --- Environment & Debug ---
    environment: Literal["development", "production", "test"] = "development"
    debug: bool = False
    log_level: str = "INFO"

    # --- Server ---
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 5000
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    # --- Persistence ---
    storage_backend: Literal["memory", "database"] = "memory"
    database_url: str = "sqlite:///./zimbuild.db"

    # --- Auth ---
    jwt_secret: SecretStr = SecretStr(DEFAULT_JWT_SECRET)
    jwt_algorithm: str = "HS256"
    jwt_expires_minutes: int = 60 * 24 * 7
    auth_bypass: bool = False

    # --- Email ---
    email_backend: Literal["console", "smtp"] = "console"
    email_from: str = "ZimBuild Construction <noreply@zimbuild.co.zw>"
    smtp_host: str | None = None
    smtp_port: int = 587
    smtp_user: str | None = None
    smtp_password: SecretStr | None = None
    smtp_use_tls: bool = True
    smtp_timeout: float = 10.0
    notification_timeout: float = 15.0

    # --- Uploads ---
    upload_dir: str = "uploads"
    max_upload_bytes: int = 10 * 1024 * 1024
    max_upload_files: int = 10

    # --- Rate limiting ---
    rate_limit_enabled: bool = True
    rate_limit_window_seconds: int = 15 * 60
    rate_limit_max_requests: int = 100

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore"
    )

    @field_validator("cors_origins", mode="before")
    @classmethod
    def split_cors_origins(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip().startswith("["):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("jwt_secret", mode="after")
    @classmethod
    def require_real_secret_in_production(
        cls, v: SecretStr, info: ValidationInfo
    ) -> SecretStr:
        if (
            info.data.get("environment") == "production"
            and v.get_secret_value() == DEFAULT_JWT_SECRET
        ):
            raise ValueError("JWT_SECRET must be set for production deployments")
        return v

    @field_validator("auth_bypass", mode="after")
    @classmethod
    def forbid_bypass_in_production(cls, v: bool, info: ValidationInfo) -> bool:
        if v and info.data.get("environment") == "production":
            raise ValueError("AUTH_BYPASS is only allowed outside production")
        return v

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


settings = Settings()
