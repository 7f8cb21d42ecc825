# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Tests for derived project and contact values."""

from datetime import date

import pytest

from src.models import ContactType, Priority, ProjectStatus
from src.services import derived


@pytest.mark.parametrize(
    ("contact_type", "expected"),
    [
        (ContactType.CAREER, Priority.HIGH),
        (ContactType.PARTNERSHIP, Priority.MEDIUM),
        (ContactType.GENERAL, Priority.LOW),
        ("partnership", Priority.MEDIUM),
    ],
)
def test_priority_for_type(contact_type, expected):
    assert derived.priority_for_type(contact_type) == expected


class TestProjectSlug:
    def test_strips_punctuation_and_collapses_spaces(self):
        assert (
            derived.project_slug("New Office Park & Retail Centre!!")
            == "new-office-park-retail-centre"
        )

    def test_collapses_repeated_separators(self):
        assert derived.project_slug("  Harare   --  Mall  ") == "harare-mall"

    def test_apostrophes_are_dropped(self):
        assert derived.project_slug("O'Brien's Mall") == "obriens-mall"

    def test_truncated_to_100_chars(self):
        slug = derived.project_slug("a" * 150)
        assert len(slug) == 100


class TestShortDescription:
    def test_short_text_kept_as_is(self):
        assert derived.short_description("Short text") == "Short text"

    def test_exactly_300_chars_kept(self):
        text = "x" * 300
        assert derived.short_description(text) == text

    def test_long_text_truncated_with_ellipsis(self):
        result = derived.short_description("y" * 500)
        assert len(result) == 300
        assert result.endswith("...")
        assert result[:297] == "y" * 297


def test_status_text():
    assert derived.status_text(ProjectStatus.IN_PROGRESS) == "In Progress"
    assert derived.status_text("on-hold") == "On Hold"


class TestFormatBudget:
    def test_zar_uses_rand_symbol(self):
        assert (
            derived.format_budget({"amount": 1500000, "currency": "ZAR"})
            == "R 1,500,000"
        )

    def test_unknown_currency_uses_code(self):
        assert derived.format_budget({"amount": 2500, "currency": "ZWL"}) == "ZWL 2,500"

    def test_missing_budget(self):
        assert derived.format_budget(None) == "Not disclosed"
        assert derived.format_budget({"amount": 0}) == "Not disclosed"


def test_format_size():
    assert derived.format_size({"value": 2500, "unit": "sqm"}) == "2,500 sqm"
    assert derived.format_size({"value": 40}) == "40 sqm"
    assert derived.format_size(None) == ""


class TestProjectDuration:
    def test_months_only(self):
        assert derived.project_duration(date(2024, 1, 1), date(2024, 8, 28)) == "8m"

    def test_years_and_months(self):
        assert derived.project_duration(date(2023, 1, 1), date(2024, 4, 1)) == "1y 4m"

    def test_whole_years(self):
        assert derived.project_duration(date(2022, 1, 1), date(2022, 12, 27)) == "1y"

    def test_missing_date(self):
        assert derived.project_duration(date(2024, 1, 1), None) is None


class TestFormatPhone:
    def test_south_african_number_grouped(self):
        assert derived.format_phone("+27821234567") == "+27 82 123 4567"
        assert derived.format_phone("27 82 123 4567") == "+27 82 123 4567"

    def test_local_number_gets_country_code(self):
        assert derived.format_phone("082 123 4567") == "+27 82 123 4567"

    def test_other_numbers_pass_through(self):
        assert derived.format_phone("+263 77 123 4567") == "+263 77 123 4567"
        assert derived.format_phone("+27 12") == "+27 12"

    def test_empty(self):
        assert derived.format_phone(None) == ""


def test_primary_image_prefers_flag_then_first():
    images = [{"id": "a", "is_primary": False}, {"id": "b", "is_primary": True}]
    assert derived.primary_image(images)["id"] == "b"
    assert derived.primary_image([{"id": "a"}, {"id": "c"}])["id"] == "a"
    assert derived.primary_image([]) is None
