# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Project schemas."""

import datetime
import uuid
from typing import Any

from pydantic import Field, computed_field, field_validator, model_validator

from src.models.enums import ProjectCategory, ProjectStatus
from src.schemas.common import CamelModel, PaginationMeta, SanitizedModel
from src.services import derived
from src.validation import is_valid_url


class Budget(CamelModel):
    amount: float = Field(..., ge=0)
    currency: str = Field(derived.DEFAULT_CURRENCY, min_length=3, max_length=3)


class Size(CamelModel):
    value: float = Field(..., ge=0)
    unit: str = Field(derived.DEFAULT_SIZE_UNIT, max_length=20)


class Client(CamelModel):
    name: str | None = Field(None, max_length=100)
    website: str | None = None
    logo: str | None = None

    @field_validator("website")
    @classmethod
    def check_website(cls, v: str | None) -> str | None:
        if v is not None and not is_valid_url(v):
            raise ValueError("Please provide a valid website URL")
        return v


class ProjectMeta(CamelModel):
    title: str | None = Field(None, max_length=60)
    description: str | None = Field(None, max_length=160)
    keywords: list[str] = Field(default_factory=list)


class _ProjectFields(SanitizedModel):
    """Fields shared by create and update. Dates are ISO-8601."""

    featured: bool | None = None
    start_date: datetime.date | None = None
    completion_date: datetime.date | None = None
    budget: Budget | None = None
    size: Size | None = None
    client: Client | None = None
    tags: list[str] | None = None
    specifications: dict[str, str] | None = None
    meta: ProjectMeta | None = None

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = v.split(",")
        if isinstance(v, list):
            return [t.strip() for t in v if isinstance(t, str) and t.strip()]
        return v

    @model_validator(mode="after")
    def check_date_order(self):
        if (
            self.start_date
            and self.completion_date
            and self.completion_date < self.start_date
        ):
            raise ValueError("Completion date cannot be before start date")
        return self


class ProjectCreate(_ProjectFields):
    """Schema for creating a project."""

    title: str = Field(..., min_length=5, max_length=200)
    description: str = Field(..., min_length=10, max_length=2000)
    category: ProjectCategory
    location: str = Field(..., min_length=2, max_length=100)
    status: ProjectStatus


class ProjectUpdate(_ProjectFields):
    """Schema for updating a project. Only provided fields change."""

    title: str | None = Field(None, min_length=5, max_length=200)
    description: str | None = Field(None, min_length=10, max_length=2000)
    category: ProjectCategory | None = None
    location: str | None = Field(None, min_length=2, max_length=100)
    status: ProjectStatus | None = None


class ProjectStatusUpdate(SanitizedModel):
    status: ProjectStatus


class ProjectImageResponse(CamelModel):
    id: str
    filename: str
    original_name: str | None = None
    path: str
    url: str | None = None
    size: int
    mimetype: str | None = None
    caption: str | None = None
    is_primary: bool = False
    uploaded_at: datetime.datetime | None = None


class ProjectResponse(CamelModel):
    """Schema for project response, including read-time derived fields."""

    id: uuid.UUID
    title: str
    slug: str
    description: str
    short_description: str | None
    category: ProjectCategory
    location: str
    status: ProjectStatus
    featured: bool
    images: list[ProjectImageResponse]
    start_date: datetime.date | None
    completion_date: datetime.date | None
    budget: Budget | None
    size: Size | None
    client: Client | None
    tags: list[str]
    specifications: dict[str, str] | None
    meta: ProjectMeta | None
    views: int
    created_by: str
    updated_by: str | None
    created_at: datetime.datetime
    updated_at: datetime.datetime

    @computed_field(alias="statusText")
    @property
    def status_text(self) -> str:
        return derived.status_text(self.status)

    @computed_field(alias="formattedBudget")
    @property
    def formatted_budget(self) -> str:
        return derived.format_budget(self.budget.model_dump() if self.budget else None)

    @computed_field(alias="formattedSize")
    @property
    def formatted_size(self) -> str:
        return derived.format_size(self.size.model_dump() if self.size else None)

    @computed_field
    @property
    def duration(self) -> str | None:
        return derived.project_duration(self.start_date, self.completion_date)

    @computed_field(alias="primaryImage")
    @property
    def primary_image(self) -> ProjectImageResponse | None:
        for image in self.images:
            if image.is_primary:
                return image
        return self.images[0] if self.images else None


class ProjectSummary(CamelModel):
    """Trimmed project used by the featured listing."""

    id: uuid.UUID
    title: str
    slug: str
    short_description: str | None
    category: ProjectCategory
    location: str
    featured: bool
    images: list[ProjectImageResponse]
    completion_date: datetime.date | None


class ProjectEnvelope(CamelModel):
    project: ProjectResponse


class ProjectListResponse(CamelModel):
    projects: list[ProjectResponse]
    pagination: PaginationMeta


class FeaturedProjectsResponse(CamelModel):
    projects: list[ProjectSummary]


class CategoryCount(CamelModel):
    category: ProjectCategory
    count: int


class CategoriesResponse(CamelModel):
    categories: list[CategoryCount]


class ProjectImagesResponse(CamelModel):
    images: list[ProjectImageResponse]
    total_images: int


class CategoryStats(CamelModel):
    category: ProjectCategory
    total: int
    completed: int
    in_progress: int
    total_budget: float
    total_size: float


class OverallProjectStats(CamelModel):
    total_projects: int
    total_views: int
    featured_projects: int
    avg_budget: float | None


class ProjectStatsResponse(CamelModel):
    categories: list[CategoryStats]
    overall: OverallProjectStats
