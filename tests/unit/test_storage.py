# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Tests for both storage backends through the shared interface."""

import uuid
from datetime import date

import pytest

from src.errors import DuplicateKeyError
from src.models import (
    Contact,
    ContactType,
    Priority,
    Project,
    ProjectCategory,
    ProjectStatus,
    Subscriber,
)
from src.storage.memory import IdAllocator, apply_column_defaults


def make_project(title: str, **fields) -> Project:
    values = {
        "slug": title.lower().replace(" ", "-"),
        "description": "A construction project description.",
        "category": ProjectCategory.COMMERCIAL,
        "location": "Harare",
        "status": ProjectStatus.COMPLETED,
    }
    values.update(fields)
    return Project(title=title, **values)


def test_add_assigns_id_timestamps_and_defaults(storage):
    project = storage.projects.add(make_project("Eastgate Annex"))
    assert isinstance(project.id, uuid.UUID)
    assert project.created_at is not None
    assert project.updated_at is not None
    assert project.views == 0
    assert project.featured is False
    assert project.images == []
    assert project.created_by == "system"


def test_get_unknown_id(storage):
    assert storage.projects.get(uuid.uuid4()) is None


def test_unique_email_enforced(storage):
    storage.subscribers.add(Subscriber(email="a@example.com"))
    with pytest.raises(DuplicateKeyError) as exc_info:
        storage.subscribers.add(Subscriber(email="a@example.com"))
    assert exc_info.value.field == "email"
    assert storage.subscribers.count() == 1


def test_find_filters_are_conjunctive(storage):
    storage.projects.add(make_project("One", category=ProjectCategory.RESIDENTIAL))
    storage.projects.add(
        make_project(
            "Two",
            category=ProjectCategory.RESIDENTIAL,
            status=ProjectStatus.PLANNING,
        )
    )
    storage.projects.add(make_project("Three"))
    found = storage.projects.find(
        {"category": ProjectCategory.RESIDENTIAL, "status": ProjectStatus.COMPLETED}
    )
    assert [p.title for p in found] == ["One"]
    assert storage.projects.count({"category": ProjectCategory.RESIDENTIAL}) == 2


def test_sort_puts_missing_values_last(storage):
    storage.projects.add(make_project("Undated"))
    storage.projects.add(make_project("Old", completion_date=date(2020, 1, 1)))
    storage.projects.add(make_project("New", completion_date=date(2024, 1, 1)))
    newest = storage.projects.find(sort=[("completion_date", True)])
    assert [p.title for p in newest] == ["New", "Old", "Undated"]
    oldest = storage.projects.find(sort=[("completion_date", False)])
    assert [p.title for p in oldest] == ["Old", "New", "Undated"]


def test_page_reports_total(storage):
    for i in range(5):
        storage.projects.add(make_project(f"Project {i}", views=i))
    page = storage.projects.page({}, [("views", False)], page=2, limit=2)
    assert [p.views for p in page.items] == [2, 3]
    assert page.total == 5
    assert page.total_pages == 3


def test_distinct(storage):
    storage.projects.add(make_project("A", category=ProjectCategory.HEALTHCARE))
    storage.projects.add(make_project("B", category=ProjectCategory.HEALTHCARE))
    storage.projects.add(make_project("C", category=ProjectCategory.EDUCATION))
    assert set(storage.projects.distinct("category")) == {
        ProjectCategory.HEALTHCARE,
        ProjectCategory.EDUCATION,
    }


def test_save_bumps_updated_at(storage):
    project = storage.projects.add(make_project("Kariba Lodge"))
    before = project.updated_at
    project.location = "Kariba"
    saved = storage.projects.save(project)
    assert saved.location == "Kariba"
    assert saved.updated_at >= before
    assert storage.projects.get(project.id).location == "Kariba"


def test_json_fields_persist_on_reassignment(storage):
    contact = storage.contacts.add(
        Contact(
            type=ContactType.GENERAL,
            name="Tendai",
            email="t@example.com",
            priority=Priority.LOW,
        )
    )
    contact.notes = [*contact.notes, {"content": "Called back", "author": "system"}]
    storage.contacts.save(contact)
    assert storage.contacts.get(contact.id).notes[0]["content"] == "Called back"


def test_increment(storage):
    project = storage.projects.add(make_project("Mutare Clinic"))
    for _ in range(3):
        project = storage.projects.increment(project, "views")
    assert storage.projects.get(project.id).views == 3


def test_delete(storage):
    project = storage.projects.add(make_project("Temporary"))
    storage.projects.delete(project)
    assert storage.projects.get(project.id) is None
    assert storage.projects.count() == 0


def test_find_one(storage):
    storage.subscribers.add(Subscriber(email="b@example.com"))
    assert storage.subscribers.find_one({"email": "b@example.com"}) is not None
    assert storage.subscribers.find_one({"email": "c@example.com"}) is None


def test_id_allocator_never_repeats():
    ids = IdAllocator()
    issued = {ids.next_id() for _ in range(1000)}
    assert len(issued) == 1000


def test_apply_column_defaults_keeps_explicit_values():
    subscriber = Subscriber(email="d@example.com", is_active=False)
    apply_column_defaults(subscriber)
    assert subscriber.is_active is False
    assert subscriber.engagement_count == 0
    assert subscriber.preferences == {
        "newsletter": True,
        "project_updates": True,
        "company_news": True,
    }
