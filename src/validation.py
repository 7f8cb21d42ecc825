# SPDX-FileCopyrightText: 2025 Roland Knall <rknall@gmail.com>
# SPDX-License-Identifier: GPL-2.0-only
"""Request validation helpers.

Body schemas live in :mod:`src.schemas`; this module holds the pieces shared
across routes: sanitizing raw input, turning pydantic failures into itemized
field errors, and the listing query dependency.
"""

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, TypeVar

import pydantic
from fastapi import Query, Request

from src.errors import ValidationError, error_item

SchemaT = TypeVar("SchemaT", bound=pydantic.BaseModel)

MAX_PAGE_LIMIT = 100

# Query keys that are never treated as filters
RESERVED_QUERY_KEYS = frozenset({"page", "limit", "sort", "token"})

PHONE_PATTERN = re.compile(r"^\+?[0-9]{7,15}$")
SA_PHONE_PATTERN = re.compile(r"^(\+27|27|0)[1-8][0-9]{8}$")
_PHONE_SEPARATORS = re.compile(r"[\s().-]")
URL_PATTERN = re.compile(r"^https?://[^\s/$.?#][^\s]*$", re.IGNORECASE)


def sanitize(value: Any) -> Any:
    """Trim strings and drop empty ones, recursively.

    Keys whose value is an empty string are removed from mappings so that the
    field counts as absent.
    """
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, Mapping):
        cleaned = {}
        for key, item in value.items():
            item = sanitize(item)
            if item == "":
                continue
            cleaned[key] = item
        return cleaned
    if isinstance(value, list):
        return [sanitize(item) for item in value]
    return value


def normalize_phone(phone: str) -> str:
    return _PHONE_SEPARATORS.sub("", phone)


def is_valid_phone(phone: str) -> bool:
    """Accept international numbers of 7 to 15 digits, separators ignored."""
    return bool(PHONE_PATTERN.match(normalize_phone(phone)))


def is_sa_phone(phone: str) -> bool:
    """Check for a South African number (+27, 27 or 0 prefix)."""
    return bool(SA_PHONE_PATTERN.match(normalize_phone(phone)))


def is_valid_url(url: str) -> bool:
    return bool(URL_PATTERN.match(url))


def field_errors(exc: pydantic.ValidationError) -> list[dict[str, Any]]:
    """Convert a pydantic error into ``{field, message, value}`` items."""
    items = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"]) or "request"
        message = err["msg"]
        # "Value error, <msg>" for errors raised inside validators
        if err["type"] == "value_error":
            message = str(err.get("ctx", {}).get("error", message))
        items.append(error_item(field, message, err.get("input")))
    return items


def validate_model(schema: type[SchemaT], raw: Mapping[str, Any]) -> SchemaT:
    """Sanitize ``raw`` and validate it against ``schema``.

    Raises:
        ValidationError: with every failing field, never just the first one.
    """
    try:
        return schema.model_validate(sanitize(raw))
    except pydantic.ValidationError as exc:
        raise ValidationError(errors=field_errors(exc)) from exc


FilterParser = Callable[[str], Any]


def choice(enum_cls: type[Enum]) -> FilterParser:
    """Filter parser accepting the values of ``enum_cls``."""

    def parse(raw: str) -> Enum:
        try:
            return enum_cls(raw)
        except ValueError:
            allowed = ", ".join(str(member.value) for member in enum_cls)
            raise ValueError(f"Must be one of: {allowed}") from None

    return parse


def to_bool(raw: str) -> bool:
    """Parse ``true``/``false`` (also ``1``/``0`` and ``yes``/``no``)."""
    lowered = raw.strip().lower()
    if lowered in {"true", "1", "yes"}:
        return True
    if lowered in {"false", "0", "no"}:
        return False
    raise ValueError("Must be true or false")


@dataclass(frozen=True)
class ListQuery:
    """Checked paging, ordering and filter values of a listing request."""

    page: int
    limit: int
    sort: list[tuple[str, bool]]
    filters: dict[str, Any]

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def _parse_int(raw: str | None, default: int) -> int | None:
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return None


def list_query(
    default_limit: int,
    filters: Mapping[str, FilterParser],
    sort_fields: Mapping[str, str],
    default_sort: str = "-createdAt",
) -> Callable[..., ListQuery]:
    """Build the query dependency of a listing endpoint.

    Every query parameter is checked before anything is reported, so a
    request with a bad page, an unknown sort field and a stray filter gets
    one error per problem in a single response.

    Args:
        default_limit: Page size used when ``limit`` is absent
        filters: Allowed filter names mapped to value parsers; a parser
            raises ValueError with the message to report
        sort_fields: Public sort names mapped to record attribute names
        default_sort: Sort used when ``sort`` is absent, ``-`` for descending

    Returns:
        Dependency yielding a :class:`ListQuery`
    """

    def dependency(
        request: Request,
        page: str | None = Query(None),
        limit: str | None = Query(None),
        sort: str | None = Query(None),
    ) -> ListQuery:
        errors = []

        page_value = _parse_int(page, 1)
        if page_value is None or page_value < 1:
            errors.append(error_item("page", "Page must be a positive integer", page))
        limit_value = _parse_int(limit, default_limit)
        if limit_value is None or not 1 <= limit_value <= MAX_PAGE_LIMIT:
            errors.append(
                error_item(
                    "limit", f"Limit must be between 1 and {MAX_PAGE_LIMIT}", limit
                )
            )

        sort_value = (sort or default_sort).strip()
        sort_name = sort_value.lstrip("-")
        if sort_name not in sort_fields:
            errors.append(
                error_item(
                    "sort",
                    "Invalid sort field. Allowed fields: " + ", ".join(sort_fields),
                    sort,
                )
            )

        unknown = [
            key
            for key in request.query_params
            if key not in filters and key not in RESERVED_QUERY_KEYS
        ]
        if unknown:
            errors.append(
                error_item(
                    "filters",
                    f"Invalid filter parameters: {', '.join(unknown)}. "
                    f"Allowed filters: {', '.join(sorted(filters))}",
                    unknown,
                )
            )

        values: dict[str, Any] = {}
        for name, parse in filters.items():
            raw = request.query_params.get(name)
            if raw is None or raw == "":
                continue
            try:
                values[name] = parse(raw)
            except ValueError as exc:
                errors.append(error_item(name, str(exc), raw))

        if errors:
            raise ValidationError(errors=errors)
        return ListQuery(
            page=page_value,
            limit=limit_value,
            sort=[(sort_fields[sort_name], sort_value.startswith("-"))],
            filters=values,
        )

    return dependency
