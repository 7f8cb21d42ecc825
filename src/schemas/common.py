# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Common schema types."""

from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

from src.validation import sanitize

T = TypeVar("T")


class CamelModel(BaseModel):
    """Schema with camelCase names on the wire and snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class SanitizedModel(CamelModel):
    """Input schema that trims strings and treats empty strings as absent."""

    @model_validator(mode="before")
    @classmethod
    def sanitize_input(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return sanitize(data)
        return data


class ErrorItem(BaseModel):
    """One failing field."""

    field: str
    message: str
    value: Any = None


class ApiResponse(BaseModel, Generic[T]):
    """Response envelope shared by every endpoint."""

    status: Literal["success", "error"] = "success"
    message: str | None = None
    data: T | None = None


class ErrorResponse(BaseModel):
    status: Literal["error"] = "error"
    message: str
    errors: list[ErrorItem] | None = None


class PaginationMeta(CamelModel):
    """Pagination metadata."""

    page: int
    limit: int
    total: int
    total_pages: int


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    message: str
    timestamp: str
    environment: str
    storage: str
