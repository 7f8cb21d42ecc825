# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Tests for project_service."""

import uuid
from datetime import date

import pytest

from src.errors import NotFoundError, ValidationError
from src.models import ProjectCategory, ProjectStatus
from src.schemas.project import ProjectCreate, ProjectUpdate
from src.services import project_service
from src.services.upload_service import StoredFile


def project_data(**overrides) -> ProjectCreate:
    data = {
        "title": "New Office Park & Retail Centre!!",
        "description": "Mixed-use office park with ground floor retail units.",
        "category": "commercial",
        "location": "Harare",
        "status": "completed",
    }
    data.update(overrides)
    return ProjectCreate.model_validate(data)


def stored_image(upload_dir, name: str) -> StoredFile:
    upload_dir.mkdir(exist_ok=True)
    path = upload_dir / name
    path.write_bytes(b"png")
    return StoredFile(
        field="images",
        filename=name,
        original_name=name,
        path=str(path),
        size=3,
        mimetype="image/png",
    )


def create(storage, **overrides):
    return project_service.create_project(
        storage, project_data(**overrides), [], "system"
    )


class TestCreateProject:
    def test_derives_slug_and_short_description(self, storage):
        project = create(storage, description="z" * 400)
        assert project.slug == "new-office-park-retail-centre"
        assert project.short_description == "z" * 297 + "..."
        assert project.views == 0
        assert project.created_by == "system"

    def test_nested_parts_stored(self, storage):
        project = create(
            storage,
            budget={"amount": 1500000},
            size={"value": 2500},
            client={"name": "CBZ Holdings"},
            tags=["retail", "office"],
        )
        assert project.budget == {"amount": 1500000, "currency": "ZAR"}
        assert project.size == {"value": 2500, "unit": "sqm"}
        assert project.client["name"] == "CBZ Holdings"
        assert project.tags == ["retail", "office"]

    def test_images_in_upload_order(self, storage, upload_dir):
        images = [stored_image(upload_dir, n) for n in ("a.png", "b.png")]
        project = project_service.create_project(
            storage, project_data(), images, "user-1"
        )
        assert [i["filename"] for i in project.images] == ["a.png", "b.png"]
        assert project.created_by == "user-1"


def test_get_project_counts_views(storage):
    project = create(storage)
    for _ in range(4):
        project_service.get_project(storage, project.id)
    assert project_service.find_project(storage, project.id).views == 4


def test_get_missing_project(storage):
    with pytest.raises(NotFoundError) as exc_info:
        project_service.get_project(storage, uuid.uuid4())
    assert exc_info.value.message == "Project not found"


class TestListProjects:
    def test_filters_and_pagination(self, storage):
        for i in range(5):
            create(storage, title=f"Residential Block {i}", category="residential")
        create(storage, title="Residential Plan", category="residential", status="planning")
        create(storage, title="Commercial Done")
        create(storage, title="Clinic Done", category="healthcare")

        page = project_service.list_projects(
            storage,
            1,
            2,
            [("created_at", True)],
            category=ProjectCategory.RESIDENTIAL,
            status=ProjectStatus.COMPLETED,
        )
        assert len(page.items) == 2
        assert page.total == 5
        assert page.total_pages == 3
        assert all(p.category == ProjectCategory.RESIDENTIAL for p in page.items)

    def test_sort_by_title(self, storage):
        for title in ("Charlie Works", "Alpha Works", "Bravo Works"):
            create(storage, title=title)
        page = project_service.list_projects(storage, 1, 10, [("title", False)])
        assert [p.title for p in page.items] == [
            "Alpha Works",
            "Bravo Works",
            "Charlie Works",
        ]

    def test_featured_filter(self, storage):
        create(storage, title="Featured One", featured=True)
        create(storage, title="Plain One")
        page = project_service.list_projects(
            storage, 1, 10, [("created_at", True)], featured=True
        )
        assert [p.title for p in page.items] == ["Featured One"]


def test_featured_requires_completed_and_orders_by_completion(storage):
    create(storage, title="Old Featured", featured=True, completionDate="2021-05-01")
    create(storage, title="New Featured", featured=True, completionDate="2024-05-01")
    create(storage, title="Planned Featured", featured=True, status="planning")
    create(storage, title="Not Featured")
    featured = project_service.get_featured(storage)
    assert [p.title for p in featured] == ["New Featured", "Old Featured"]
    assert len(project_service.get_featured(storage, limit=1)) == 1


def test_categories_count_completed_only(storage):
    create(storage, title="Done Commercial")
    create(storage, title="Planned Commercial", status="planning")
    create(storage, title="Planned School", category="education", status="planning")
    counts = {
        c["category"]: c["count"] for c in project_service.get_categories(storage)
    }
    assert counts == {ProjectCategory.COMMERCIAL: 1, ProjectCategory.EDUCATION: 0}


class TestUpdateProject:
    def test_slug_follows_title_change_only(self, storage):
        project = create(storage)
        updated = project_service.update_project(
            storage,
            project.id,
            ProjectUpdate.model_validate({"location": "Bulawayo"}),
            [],
            "user-2",
        )
        assert updated.slug == "new-office-park-retail-centre"
        assert updated.updated_by == "user-2"
        updated = project_service.update_project(
            storage,
            project.id,
            ProjectUpdate.model_validate({"title": "Bulawayo Retail Centre"}),
            [],
            "user-2",
        )
        assert updated.slug == "bulawayo-retail-centre"

    def test_images_are_appended(self, storage, upload_dir):
        project = project_service.create_project(
            storage, project_data(), [stored_image(upload_dir, "a.png")], "system"
        )
        updated = project_service.update_project(
            storage,
            project.id,
            ProjectUpdate(),
            [stored_image(upload_dir, "b.png")],
            "system",
        )
        assert [i["filename"] for i in updated.images] == ["a.png", "b.png"]

    def test_short_description_kept_when_present(self, storage):
        project = create(storage)
        original = project.short_description
        updated = project_service.update_project(
            storage,
            project.id,
            ProjectUpdate.model_validate({"description": "An entirely new description."}),
            [],
            "system",
        )
        assert updated.description == "An entirely new description."
        assert updated.short_description == original

    def test_merged_dates_checked(self, storage):
        project = create(storage, startDate="2024-01-01")
        with pytest.raises(ValidationError) as exc_info:
            project_service.update_project(
                storage,
                project.id,
                ProjectUpdate.model_validate({"completionDate": "2023-06-01"}),
                [],
                "system",
            )
        assert exc_info.value.errors[0]["field"] == "completionDate"

    def test_missing_project(self, storage):
        with pytest.raises(NotFoundError):
            project_service.update_project(
                storage, uuid.uuid4(), ProjectUpdate(), [], "system"
            )


def test_status_and_featured_toggle(storage):
    project = create(storage)
    updated = project_service.update_project_status(
        storage, project.id, ProjectStatus.ON_HOLD, "user-3"
    )
    assert updated.status == ProjectStatus.ON_HOLD
    assert project_service.toggle_featured(storage, project.id, "user-3").featured
    assert not project_service.toggle_featured(storage, project.id, "user-3").featured


class TestImages:
    def test_delete_image_removes_blob(self, storage, uploads, upload_dir):
        project = project_service.create_project(
            storage,
            project_data(),
            [stored_image(upload_dir, "a.png"), stored_image(upload_dir, "b.png")],
            "system",
        )
        image_id = project.images[0]["id"]
        updated = project_service.delete_image(
            storage, project.id, image_id, uploads, "system"
        )
        assert [i["filename"] for i in updated.images] == ["b.png"]
        assert not (upload_dir / "a.png").exists()
        assert (upload_dir / "b.png").exists()

    def test_delete_unknown_image(self, storage, uploads):
        project = create(storage)
        with pytest.raises(NotFoundError) as exc_info:
            project_service.delete_image(
                storage, project.id, "does-not-exist", uploads, "system"
            )
        assert exc_info.value.message == "Image not found"

    def test_set_primary_clears_others(self, storage, upload_dir):
        project = project_service.create_project(
            storage,
            project_data(),
            [stored_image(upload_dir, n) for n in ("a.png", "b.png", "c.png")],
            "system",
        )
        first, second = project.images[0]["id"], project.images[1]["id"]
        project_service.set_primary_image(storage, project.id, first, "system")
        updated = project_service.set_primary_image(
            storage, project.id, second, "system"
        )
        assert [i["is_primary"] for i in updated.images] == [False, True, False]

    def test_add_images(self, storage, upload_dir):
        project = create(storage)
        updated = project_service.add_images(
            storage, project.id, [stored_image(upload_dir, "x.png")], "system"
        )
        assert len(updated.images) == 1


def test_delete_project_removes_blobs(storage, uploads, upload_dir):
    project = project_service.create_project(
        storage, project_data(), [stored_image(upload_dir, "a.png")], "system"
    )
    project_service.delete_project(storage, project.id, uploads)
    assert storage.projects.get(project.id) is None
    assert not (upload_dir / "a.png").exists()


def test_stats(storage):
    create(storage, title="Mall One", budget={"amount": 1000}, size={"value": 50})
    create(
        storage,
        title="Mall Two",
        status="in-progress",
        budget={"amount": 3000},
        featured=True,
    )
    create(storage, title="School One", category="education", status="planning")
    project = create(storage, title="School Two", category="education")
    project_service.get_project(storage, project.id)

    stats = project_service.get_stats(storage)
    by_category = {c["category"]: c for c in stats["categories"]}
    commercial = by_category[ProjectCategory.COMMERCIAL]
    assert commercial["total"] == 2
    assert commercial["completed"] == 1
    assert commercial["in_progress"] == 1
    assert commercial["total_budget"] == 4000
    assert commercial["total_size"] == 50
    assert stats["overall"] == {
        "total_projects": 4,
        "total_views": 1,
        "featured_projects": 1,
        "avg_budget": 2000,
    }


def test_duration_source_dates_stored(storage):
    project = create(storage, startDate="2023-01-01", completionDate="2024-04-01")
    assert project.start_date == date(2023, 1, 1)
    assert project.completion_date == date(2024, 4, 1)
