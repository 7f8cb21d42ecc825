# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Project portfolio API endpoints."""

import json
import uuid
from typing import Any

from fastapi import APIRouter, Depends, Query, Request, status
from starlette.datastructures import FormData, UploadFile

from src.api.deps import (
    PROJECT_EDITORS,
    acting_identity,
    get_upload_service,
    require_roles,
)
from src.errors import UploadError, ValidationError, error_item
from src.models import ProjectCategory, ProjectStatus, User
from src.schemas.common import ApiResponse, PaginationMeta
from src.schemas.project import (
    CategoriesResponse,
    FeaturedProjectsResponse,
    ProjectCreate,
    ProjectEnvelope,
    ProjectImagesResponse,
    ProjectImageResponse,
    ProjectListResponse,
    ProjectResponse,
    ProjectStatsResponse,
    ProjectStatusUpdate,
    ProjectSummary,
    ProjectUpdate,
)
from src.services import project_service
from src.services.upload_service import UploadService
from src.storage import Storage, get_storage
from src.validation import (
    ListQuery,
    choice,
    list_query,
    to_bool,
    validate_model,
)

router = APIRouter()

IMAGE_FIELDS = ("images", "images[]")
_PLAIN_FIELDS = (
    "title",
    "description",
    "category",
    "location",
    "status",
    "featured",
    "startDate",
    "completionDate",
    "tags",
)
_JSON_FIELDS = ("specifications", "meta")

PROJECT_FILTERS = {
    "category": choice(ProjectCategory),
    "status": choice(ProjectStatus),
    "featured": to_bool,
}


def _json_field(name: str, raw: Any) -> Any:
    if not isinstance(raw, str):
        return raw
    try:
        return json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValidationError(
            errors=[error_item(name, "Must be valid JSON", raw)]
        ) from exc


def project_fields_from_form(form: FormData) -> dict[str, Any]:
    """Map flat multipart fields onto the nested project shape.

    ``budget``/``currency`` and ``size``/``sizeUnit`` become the budget and
    size parts, ``client*`` fields the client part. ``specifications`` and
    ``meta`` arrive as JSON text.
    """
    raw: dict[str, Any] = {
        name: form[name]
        for name in _PLAIN_FIELDS
        if isinstance(form.get(name), str)
    }
    if form.get("budget"):
        raw["budget"] = {"amount": form["budget"]}
        if form.get("currency"):
            raw["budget"]["currency"] = form["currency"]
    if form.get("size"):
        raw["size"] = {"value": form["size"]}
        if form.get("sizeUnit"):
            raw["size"]["unit"] = form["sizeUnit"]
    client = {
        key: form[name]
        for key, name in (
            ("name", "clientName"),
            ("website", "clientWebsite"),
            ("logo", "clientLogo"),
        )
        if form.get(name)
    }
    if client:
        raw["client"] = client
    for name in _JSON_FIELDS:
        if form.get(name):
            raw[name] = _json_field(name, form[name])
    return raw


async def read_project_request(
    request: Request,
) -> tuple[dict[str, Any], list[UploadFile]]:
    """Project fields and image parts from a multipart or JSON request."""
    content_type = request.headers.get("content-type", "")
    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except json.JSONDecodeError as exc:
            raise ValidationError("Invalid JSON body") from exc
        if not isinstance(body, dict):
            raise ValidationError("Request body must be an object")
        return body, []
    form = await request.form()
    images = [
        part
        for field in IMAGE_FIELDS
        for part in form.getlist(field)
        if isinstance(part, UploadFile)
    ]
    return project_fields_from_form(form), images


def _project_list(page) -> ProjectListResponse:
    return ProjectListResponse(
        projects=[ProjectResponse.model_validate(p) for p in page.items],
        pagination=PaginationMeta(
            page=page.page,
            limit=page.limit,
            total=page.total,
            total_pages=page.total_pages,
        ),
    )


@router.get("", response_model=ApiResponse[ProjectListResponse])
def list_projects(
    query: ListQuery = Depends(
        list_query(
            default_limit=9,
            filters=PROJECT_FILTERS,
            sort_fields=project_service.SORT_FIELDS,
        )
    ),
    store: Storage = Depends(get_storage),
) -> ApiResponse[ProjectListResponse]:
    """List projects with filtering, sorting and pagination."""
    page = project_service.list_projects(
        store, query.page, query.limit, query.sort, **query.filters
    )
    return ApiResponse(data=_project_list(page))


@router.get("/categories", response_model=ApiResponse[CategoriesResponse])
def get_categories(
    store: Storage = Depends(get_storage),
) -> ApiResponse[CategoriesResponse]:
    """Categories in use with their completed project counts."""
    return ApiResponse(
        data=CategoriesResponse.model_validate(
            {"categories": project_service.get_categories(store)}
        )
    )


@router.get("/featured", response_model=ApiResponse[FeaturedProjectsResponse])
def get_featured_projects(
    limit: int = Query(project_service.DEFAULT_FEATURED_LIMIT, ge=1, le=100),
    store: Storage = Depends(get_storage),
) -> ApiResponse[FeaturedProjectsResponse]:
    projects = project_service.get_featured(store, limit)
    return ApiResponse(
        data=FeaturedProjectsResponse(
            projects=[ProjectSummary.model_validate(p) for p in projects]
        )
    )


@router.get("/stats", response_model=ApiResponse[ProjectStatsResponse])
def get_project_stats(
    store: Storage = Depends(get_storage),
    _: User | None = Depends(require_roles(*PROJECT_EDITORS)),
) -> ApiResponse[ProjectStatsResponse]:
    return ApiResponse(
        data=ProjectStatsResponse.model_validate(project_service.get_stats(store))
    )


@router.get("/{project_id}", response_model=ApiResponse[ProjectEnvelope])
def get_project(
    project_id: uuid.UUID,
    store: Storage = Depends(get_storage),
) -> ApiResponse[ProjectEnvelope]:
    """Get one project. Every successful read counts as a view."""
    project = project_service.get_project(store, project_id)
    return ApiResponse(
        data=ProjectEnvelope(project=ProjectResponse.model_validate(project))
    )


@router.post(
    "",
    response_model=ApiResponse[ProjectEnvelope],
    status_code=status.HTTP_201_CREATED,
)
async def create_project(
    request: Request,
    store: Storage = Depends(get_storage),
    uploads: UploadService = Depends(get_upload_service),
    user: User | None = Depends(require_roles(*PROJECT_EDITORS)),
) -> ApiResponse[ProjectEnvelope]:
    """Create a project from multipart fields and ``images`` file parts."""
    raw, parts = await read_project_request(request)
    data = validate_model(ProjectCreate, raw)
    images = await uploads.save("images", parts)
    with uploads.discard_on_error(images):
        project = project_service.create_project(
            store, data, images, acting_identity(user)
        )
    return ApiResponse(
        message="Project created successfully",
        data=ProjectEnvelope(project=ProjectResponse.model_validate(project)),
    )


@router.put("/{project_id}", response_model=ApiResponse[ProjectEnvelope])
async def update_project(
    project_id: uuid.UUID,
    request: Request,
    store: Storage = Depends(get_storage),
    uploads: UploadService = Depends(get_upload_service),
    user: User | None = Depends(require_roles(*PROJECT_EDITORS)),
) -> ApiResponse[ProjectEnvelope]:
    """Update provided fields and append any uploaded images."""
    project_service.find_project(store, project_id)
    raw, parts = await read_project_request(request)
    data = validate_model(ProjectUpdate, raw)
    images = await uploads.save("images", parts)
    with uploads.discard_on_error(images):
        project = project_service.update_project(
            store, project_id, data, images, acting_identity(user)
        )
    return ApiResponse(
        message="Project updated successfully",
        data=ProjectEnvelope(project=ProjectResponse.model_validate(project)),
    )


@router.patch("/{project_id}/status", response_model=ApiResponse[ProjectEnvelope])
def update_project_status(
    project_id: uuid.UUID,
    data: ProjectStatusUpdate,
    store: Storage = Depends(get_storage),
    user: User | None = Depends(require_roles(*PROJECT_EDITORS)),
) -> ApiResponse[ProjectEnvelope]:
    project = project_service.update_project_status(
        store, project_id, data.status, acting_identity(user)
    )
    return ApiResponse(
        message="Project status updated successfully",
        data=ProjectEnvelope(project=ProjectResponse.model_validate(project)),
    )


@router.patch("/{project_id}/featured", response_model=ApiResponse[ProjectEnvelope])
def toggle_featured(
    project_id: uuid.UUID,
    store: Storage = Depends(get_storage),
    user: User | None = Depends(require_roles(*PROJECT_EDITORS)),
) -> ApiResponse[ProjectEnvelope]:
    project = project_service.toggle_featured(
        store, project_id, acting_identity(user)
    )
    state = "featured" if project.featured else "unfeatured"
    return ApiResponse(
        message=f"Project {state} successfully",
        data=ProjectEnvelope(project=ProjectResponse.model_validate(project)),
    )


@router.delete("/{project_id}", response_model=ApiResponse[None])
def delete_project(
    project_id: uuid.UUID,
    store: Storage = Depends(get_storage),
    uploads: UploadService = Depends(get_upload_service),
    _: User | None = Depends(require_roles(*PROJECT_EDITORS)),
) -> ApiResponse[None]:
    project_service.delete_project(store, project_id, uploads)
    return ApiResponse(message="Project deleted successfully")


def _images_response(project) -> ProjectImagesResponse:
    images = [ProjectImageResponse.model_validate(i) for i in project.images or []]
    return ProjectImagesResponse(images=images, total_images=len(images))


@router.post(
    "/{project_id}/images", response_model=ApiResponse[ProjectImagesResponse]
)
async def add_project_images(
    project_id: uuid.UUID,
    request: Request,
    store: Storage = Depends(get_storage),
    uploads: UploadService = Depends(get_upload_service),
    user: User | None = Depends(require_roles(*PROJECT_EDITORS)),
) -> ApiResponse[ProjectImagesResponse]:
    """Append uploaded images to a project."""
    project_service.find_project(store, project_id)
    _, parts = await read_project_request(request)
    images = await uploads.save("images", parts)
    if not images:
        message = "No images uploaded"
        raise UploadError(message, [error_item("images", message)])
    with uploads.discard_on_error(images):
        project = project_service.add_images(
            store, project_id, images, acting_identity(user)
        )
    return ApiResponse(
        message="Images added successfully", data=_images_response(project)
    )


@router.delete(
    "/{project_id}/images/{image_id}",
    response_model=ApiResponse[ProjectImagesResponse],
)
def delete_project_image(
    project_id: uuid.UUID,
    image_id: str,
    store: Storage = Depends(get_storage),
    uploads: UploadService = Depends(get_upload_service),
    user: User | None = Depends(require_roles(*PROJECT_EDITORS)),
) -> ApiResponse[ProjectImagesResponse]:
    project = project_service.delete_image(
        store, project_id, image_id, uploads, acting_identity(user)
    )
    return ApiResponse(
        message="Image deleted successfully", data=_images_response(project)
    )


@router.patch(
    "/{project_id}/images/{image_id}/primary",
    response_model=ApiResponse[ProjectImagesResponse],
)
def set_primary_image(
    project_id: uuid.UUID,
    image_id: str,
    store: Storage = Depends(get_storage),
    user: User | None = Depends(require_roles(*PROJECT_EDITORS)),
) -> ApiResponse[ProjectImagesResponse]:
    project = project_service.set_primary_image(
        store, project_id, image_id, acting_identity(user)
    )
    return ApiResponse(
        message="Primary image updated successfully", data=_images_response(project)
    )
