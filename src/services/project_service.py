# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Project service: portfolio CRUD, images and statistics."""

import logging
import uuid
from typing import Any

from src.errors import NotFoundError, ValidationError, error_item
from src.models import Project, ProjectCategory, ProjectStatus
from src.schemas.project import ProjectCreate, ProjectUpdate
from src.services.derived import project_slug, short_description
from src.services.upload_service import StoredFile, UploadService
from src.storage import Page, Storage

logger = logging.getLogger(__name__)

DEFAULT_FEATURED_LIMIT = 6

# Public sort name -> record attribute
SORT_FIELDS = {
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "title": "title",
    "views": "views",
    "completionDate": "completion_date",
    "startDate": "start_date",
    "category": "category",
    "status": "status",
}

# Nested parts stored as JSON documents
_DOCUMENT_FIELDS = ("budget", "size", "client", "meta")


def _documents(data: ProjectCreate | ProjectUpdate) -> dict[str, Any]:
    values = {}
    for name in _DOCUMENT_FIELDS:
        if name in data.model_fields_set:
            part = getattr(data, name)
            values[name] = part.model_dump() if part is not None else None
    return values


def list_projects(
    store: Storage,
    page: int,
    limit: int,
    sort: list[tuple[str, bool]],
    category: ProjectCategory | None = None,
    status: ProjectStatus | None = None,
    featured: bool | None = None,
) -> Page[Project]:
    """Page through projects, filtered on the given fields only.

    Ties on the sort field keep newest-created first.
    """
    filters: dict[str, Any] = {}
    if category is not None:
        filters["category"] = category
    if status is not None:
        filters["status"] = status
    if featured is not None:
        filters["featured"] = featured
    order = list(sort)
    if order[0][0] != "created_at":
        order.append(("created_at", True))
    return store.projects.page(filters, order, page, limit)


def get_featured(store: Storage, limit: int = DEFAULT_FEATURED_LIMIT) -> list[Project]:
    """Featured and completed projects, latest completion first."""
    return store.projects.find(
        {"featured": True, "status": ProjectStatus.COMPLETED},
        sort=[("completion_date", True)],
        limit=limit,
    )


def get_categories(store: Storage) -> list[dict[str, Any]]:
    """Every category in use, with its number of completed projects."""
    return [
        {
            "category": category,
            "count": store.projects.count(
                {"category": category, "status": ProjectStatus.COMPLETED}
            ),
        }
        for category in store.projects.distinct("category")
    ]


def find_project(store: Storage, project_id: uuid.UUID) -> Project:
    project = store.projects.get(project_id)
    if project is None:
        raise NotFoundError("Project not found")
    return project


def get_project(store: Storage, project_id: uuid.UUID) -> Project:
    """Fetch one project and count the read as a view."""
    project = find_project(store, project_id)
    return store.projects.increment(project, "views", 1)


def create_project(
    store: Storage,
    data: ProjectCreate,
    images: list[StoredFile],
    actor: str,
) -> Project:
    """Create a project from validated fields and already stored images.

    Args:
        store: Storage backend
        data: Validated project fields
        images: Uploaded images, in upload order
        actor: Acting user id, or the system sentinel

    Returns:
        The stored Project
    """
    project = Project(
        title=data.title,
        slug=project_slug(data.title),
        description=data.description,
        short_description=short_description(data.description),
        category=data.category,
        location=data.location,
        status=data.status,
        featured=bool(data.featured),
        images=[image.as_image() for image in images],
        start_date=data.start_date,
        completion_date=data.completion_date,
        tags=data.tags or [],
        specifications=data.specifications,
        views=0,
        created_by=actor,
        **_documents(data),
    )
    project = store.projects.add(project)
    logger.info("Project %s created by %s", project.id, actor)
    return project


def update_project(
    store: Storage,
    project_id: uuid.UUID,
    data: ProjectUpdate,
    new_images: list[StoredFile],
    actor: str,
) -> Project:
    """Apply the provided fields and append any new images.

    The slug follows the title only when the title actually changes.
    Existing images are always kept.
    """
    project = find_project(store, project_id)

    start = (
        data.start_date
        if "start_date" in data.model_fields_set
        else project.start_date
    )
    end = (
        data.completion_date
        if "completion_date" in data.model_fields_set
        else project.completion_date
    )
    if start and end and end < start:
        raise ValidationError(
            errors=[
                error_item(
                    "completionDate",
                    "Completion date cannot be before start date",
                    end.isoformat(),
                )
            ]
        )

    if data.title is not None and data.title != project.title:
        project.title = data.title
        project.slug = project_slug(data.title)
    if data.description is not None:
        project.description = data.description
        if not project.short_description:
            project.short_description = short_description(data.description)
    for name in ("category", "location", "status", "featured", "specifications"):
        value = getattr(data, name)
        if value is not None:
            setattr(project, name, value)
    if "start_date" in data.model_fields_set:
        project.start_date = data.start_date
    if "completion_date" in data.model_fields_set:
        project.completion_date = data.completion_date
    if data.tags is not None:
        project.tags = data.tags
    for name, value in _documents(data).items():
        setattr(project, name, value)
    if new_images:
        project.images = [
            *(project.images or []),
            *(image.as_image() for image in new_images),
        ]
    project.updated_by = actor
    return store.projects.save(project)


def update_project_status(
    store: Storage, project_id: uuid.UUID, status: ProjectStatus, actor: str
) -> Project:
    project = find_project(store, project_id)
    project.status = status
    project.updated_by = actor
    return store.projects.save(project)


def toggle_featured(store: Storage, project_id: uuid.UUID, actor: str) -> Project:
    project = find_project(store, project_id)
    project.featured = not project.featured
    project.updated_by = actor
    return store.projects.save(project)


def delete_project(
    store: Storage, project_id: uuid.UUID, uploads: UploadService
) -> None:
    """Delete a project, then its image blobs.

    Blob removal runs after the record is gone and never fails the request.
    """
    project = find_project(store, project_id)
    filenames = [image["filename"] for image in project.images or []]
    store.projects.delete(project)
    logger.info("Project %s deleted", project_id)
    uploads.cleanup(filenames)


def add_images(
    store: Storage,
    project_id: uuid.UUID,
    images: list[StoredFile],
    actor: str,
) -> Project:
    project = find_project(store, project_id)
    project.images = [
        *(project.images or []),
        *(image.as_image() for image in images),
    ]
    project.updated_by = actor
    return store.projects.save(project)


def _find_image(project: Project, image_id: str) -> dict[str, Any]:
    for image in project.images or []:
        if image.get("id") == image_id:
            return image
    raise NotFoundError("Image not found")


def delete_image(
    store: Storage,
    project_id: uuid.UUID,
    image_id: str,
    uploads: UploadService,
    actor: str,
) -> Project:
    """Remove one image from a project and delete its blob.

    Raises:
        NotFoundError: "Image not found" when the project exists but has no
            image with this id.
    """
    project = find_project(store, project_id)
    image = _find_image(project, image_id)
    project.images = [i for i in project.images if i.get("id") != image_id]
    project.updated_by = actor
    project = store.projects.save(project)
    uploads.cleanup([image["filename"]])
    return project


def set_primary_image(
    store: Storage, project_id: uuid.UUID, image_id: str, actor: str
) -> Project:
    """Flag one image as primary and clear the flag on all others."""
    project = find_project(store, project_id)
    _find_image(project, image_id)
    project.images = [
        {**image, "is_primary": image.get("id") == image_id}
        for image in project.images
    ]
    project.updated_by = actor
    return store.projects.save(project)


def get_stats(store: Storage) -> dict[str, Any]:
    """Per-category and overall portfolio figures."""
    projects = store.projects.find()

    by_category: dict[ProjectCategory, dict[str, Any]] = {}
    for project in projects:
        entry = by_category.setdefault(
            project.category,
            {
                "category": project.category,
                "total": 0,
                "completed": 0,
                "in_progress": 0,
                "total_budget": 0.0,
                "total_size": 0.0,
            },
        )
        entry["total"] += 1
        if project.status == ProjectStatus.COMPLETED:
            entry["completed"] += 1
        elif project.status == ProjectStatus.IN_PROGRESS:
            entry["in_progress"] += 1
        entry["total_budget"] += (project.budget or {}).get("amount") or 0
        entry["total_size"] += (project.size or {}).get("value") or 0

    budgets = [
        p.budget["amount"]
        for p in projects
        if p.budget and p.budget.get("amount") is not None
    ]
    overall = {
        "total_projects": len(projects),
        "total_views": sum(p.views or 0 for p in projects),
        "featured_projects": sum(1 for p in projects if p.featured),
        "avg_budget": sum(budgets) / len(budgets) if budgets else None,
    }
    return {"categories": list(by_category.values()), "overall": overall}
