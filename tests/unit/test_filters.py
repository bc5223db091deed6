from datetime import datetime, timedelta, timezone

import pytest

from grc.db import filters, models
from grc.db.filters import FilterError
from grc.utils.settings import refresh_settings_cache
from payloads import ACCOMMODATION_URL, OWNER_URL


def _add_graves(db, *specs):
    graves = []
    for fields in specs:
        grave = models.Grave(accommodation=ACCOMMODATION_URL, owner=OWNER_URL, **fields)
        db.add(grave)
        graves.append(grave)
    db.commit()
    return graves


def _query(db, params):
    return filters.apply_filters(db.query(models.Grave), models.Grave, params).all()


def test_exact_match_on_string_and_integer(db):
    _add_graves(db, {"reference": "A", "capacity": 1}, {"reference": "B", "capacity": 2})

    assert [g.reference for g in _query(db, [("reference", "B")])] == ["B"]
    assert [g.reference for g in _query(db, [("capacity", "1")])] == ["A"]


def test_exact_match_on_uuid(db):
    cemetery = models.Cemetery(name="West")
    db.add(cemetery)
    db.commit()
    _add_graves(db, {"reference": "in", "capacity": 1, "cemetery_id": cemetery.id}, {"reference": "out", "capacity": 1})

    found = _query(db, [("cemetery_id", str(cemetery.id))])
    assert [g.reference for g in found] == ["in"]


def test_order_parameters(db):
    _add_graves(db, {"reference": "a", "capacity": 3}, {"reference": "b", "capacity": 1}, {"reference": "c", "capacity": 2})

    ascending = _query(db, [("order[capacity]", "asc")])
    assert [g.capacity for g in ascending] == [1, 2, 3]
    descending = _query(db, [("order[capacity]", "DESC")])
    assert [g.capacity for g in descending] == [3, 2, 1]


def test_date_filters_exclude_nulls(db):
    now = datetime.now(timezone.utc)
    _add_graves(
        db,
        {"reference": "old", "capacity": 1, "date_rights": now - timedelta(days=10)},
        {"reference": "new", "capacity": 1, "date_rights": now + timedelta(days=10)},
        {"reference": "none", "capacity": 1},
    )
    pivot = now.isoformat()

    assert [g.reference for g in _query(db, [("date_rights[before]", pivot)])] == ["old"]
    assert [g.reference for g in _query(db, [("date_rights[strictly_after]", pivot)])] == ["new"]


def test_naive_dates_are_read_as_utc(db):
    now = datetime.now(timezone.utc)
    _add_graves(db, {"reference": "soon", "capacity": 1, "date_rights": now + timedelta(days=2)})

    naive = (now + timedelta(days=1)).replace(tzinfo=None).isoformat()
    assert [g.reference for g in _query(db, [("date_rights[after]", naive)])] == ["soon"]


@pytest.mark.parametrize("params", [
    [("unknown", "x")],
    [("capacity", "many")],
    [("cemetery_id", "not-a-uuid")],
    [("order[unknown]", "asc")],
    [("order[capacity]", "sideways")],
    [("reference[after]", "2024-01-01")],
    [("date_rights[around]", "2024-01-01")],
    [("date_rights[after]", "yesterday")],
    [("rulings", "x")],
])
def test_invalid_parameters_raise(db, params):
    with pytest.raises(FilterError):
        _query(db, params)


def test_pagination_params_are_ignored_by_apply_filters(db):
    _add_graves(db, {"capacity": 1})
    assert len(_query(db, [("page", "1"), ("items_per_page", "5")])) == 1


def test_paginate(db):
    _add_graves(db, *({"capacity": n} for n in range(1, 6)))
    query = filters.apply_filters(db.query(models.Grave), models.Grave, [("order[capacity]", "asc")])

    page = filters.paginate(query, page=2, items_per_page=2)
    assert page.total_items == 5
    assert page.total_pages == 3
    assert page.page == 2
    assert [g.capacity for g in page.items] == [3, 4]

    empty = filters.paginate(query, page=9, items_per_page=2)
    assert empty.items == []
    assert empty.total_pages == 3


def test_paginate_empty_collection(db):
    page = filters.paginate(db.query(models.Grave))
    assert page.as_dict() == {"items": [], "total_items": 0, "total_pages": 0, "page": 1}


def test_page_size_capped(monkeypatch):
    monkeypatch.setenv("PAGINATION_MAX_ITEMS_PER_PAGE", "10")
    refresh_settings_cache()
    assert filters.resolve_pagination(1, 50) == (1, 10)
    assert filters.resolve_pagination(None, None) == (1, 10)


def test_invalid_page_raises():
    with pytest.raises(FilterError):
        filters.resolve_pagination(-1, 10)
