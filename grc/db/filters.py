"""
Collection filters for resource listings.

Query parameters are translated into SQLAlchemy criteria against the
model's own columns:

* ``?reference=zb-01`` exact match on string, uuid, integer and boolean columns
* ``?order[capacity]=desc`` ordering, several keys applied in the order given
* ``?date_created[after]=2024-01-01`` date ranges with ``before``, ``after``,
  ``strictly_before`` and ``strictly_after``; NULL dates are excluded
* ``?page=2&items_per_page=10`` pagination (1-based pages)
"""
from __future__ import annotations

import math
import re
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Iterable, List, Optional, Tuple

from sqlalchemy import inspect
from sqlalchemy.sql import sqltypes

from grc.utils.settings import get_settings

PAGE_PARAM = "page"
ITEMS_PER_PAGE_PARAM = "items_per_page"

_BRACKETED = re.compile(r"^(?P<name>\w+)\[(?P<key>\w+)\]$")
_DATE_OPERATORS = {
    "before": lambda col, value: col <= value,
    "strictly_before": lambda col, value: col < value,
    "after": lambda col, value: col >= value,
    "strictly_after": lambda col, value: col > value,
}
_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


class FilterError(ValueError):
    """Raised when a collection query parameter cannot be applied."""


@dataclass
class Page:
    items: List[Any]
    total_items: int
    total_pages: int
    page: int

    def as_dict(self) -> dict:
        # Items stay ORM rows; the response model reads them by attribute.
        return {
            "items": self.items,
            "total_items": self.total_items,
            "total_pages": self.total_pages,
            "page": self.page,
        }


def _columns(model):
    return inspect(model).columns


def _parse_datetime(raw: str) -> datetime:
    try:
        value = datetime.fromisoformat(raw)
    except ValueError:
        raise FilterError(f"Invalid date value: {raw}")
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _coerce(column, raw: str):
    col_type = column.type
    if isinstance(col_type, sqltypes.Uuid):
        try:
            return uuid.UUID(raw)
        except ValueError:
            raise FilterError(f"Invalid UUID for {column.key}: {raw}")
    if isinstance(col_type, sqltypes.Boolean):
        normalized = raw.strip().lower()
        if normalized in _TRUE:
            return True
        if normalized in _FALSE:
            return False
        raise FilterError(f"Invalid boolean for {column.key}: {raw}")
    if isinstance(col_type, sqltypes.Integer):
        try:
            return int(raw)
        except ValueError:
            raise FilterError(f"Invalid integer for {column.key}: {raw}")
    if isinstance(col_type, sqltypes.String):
        return raw
    raise FilterError(f"Field {column.key} does not support exact filtering")


def apply_filters(query, model, params: Iterable[Tuple[str, str]]):
    """Apply search, date and order parameters to ``query``.

    Pagination parameters are skipped here; see :func:`paginate`.
    """
    columns = _columns(model)
    orderings = []
    for name, raw in params:
        if name in (PAGE_PARAM, ITEMS_PER_PAGE_PARAM):
            continue
        match = _BRACKETED.match(name)
        if match is None:
            if name not in columns:
                raise FilterError(f"Unknown filter: {name}")
            column = columns[name]
            query = query.filter(column == _coerce(column, raw))
            continue

        field, key = match.group("name"), match.group("key")
        if field == "order":
            if key not in columns:
                raise FilterError(f"Unknown order field: {key}")
            direction = raw.strip().lower()
            if direction not in ("asc", "desc"):
                raise FilterError(f"Invalid order direction for {key}: {raw}")
            column = columns[key]
            orderings.append(column.desc() if direction == "desc" else column.asc())
            continue

        if field not in columns or not isinstance(columns[field].type, sqltypes.DateTime):
            raise FilterError(f"Unknown date filter: {name}")
        if key not in _DATE_OPERATORS:
            raise FilterError(f"Unknown date operator: {key}")
        column = columns[field]
        query = query.filter(column.isnot(None), _DATE_OPERATORS[key](column, _parse_datetime(raw)))

    if orderings:
        return query.order_by(*orderings)
    return query.order_by(model.date_created.desc(), model.id.asc())


def resolve_pagination(page: Optional[int], items_per_page: Optional[int]) -> Tuple[int, int]:
    settings = get_settings()
    page = page or 1
    if page < 1:
        raise FilterError("page must be >= 1")
    size = items_per_page or settings.items_per_page
    if size < 1:
        raise FilterError("items_per_page must be >= 1")
    return page, min(size, settings.max_items_per_page)


def paginate(query, page: Optional[int] = None, items_per_page: Optional[int] = None) -> Page:
    page, size = resolve_pagination(page, items_per_page)
    total_items = query.order_by(None).count()
    items = query.offset((page - 1) * size).limit(size).all()
    total_pages = math.ceil(total_items / size) if total_items else 0
    return Page(items=items, total_items=total_items, total_pages=total_pages, page=page)


__all__ = ["FilterError", "Page", "apply_filters", "paginate", "resolve_pagination"]
