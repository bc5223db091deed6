"""
Change log repository functions.

Entries are only ever appended and listed; there is no update or delete.
"""
from __future__ import annotations

import uuid
from typing import Iterable, List
from sqlalchemy import func
from sqlalchemy.orm import Session

from grc.db import models


def next_version(db: Session, object_class: str, object_id: uuid.UUID) -> int:
    current = (
        db.query(func.max(models.ChangeLog.version))
        .filter(
            models.ChangeLog.object_class == object_class,
            models.ChangeLog.object_id == object_id,
        )
        .scalar()
    )
    return (current or 0) + 1


def append_change_logs(db: Session, entries: Iterable[models.ChangeLog]) -> List[models.ChangeLog]:
    """Stage entries in the caller's transaction; the caller commits."""
    rows = list(entries)
    db.add_all(rows)
    db.flush()
    return rows


def get_change_logs(
    db: Session,
    object_class: str,
    object_id: uuid.UUID,
    skip: int = 0,
    limit: int = 100,
):
    return (
        db.query(models.ChangeLog)
        .filter(
            models.ChangeLog.object_class == object_class,
            models.ChangeLog.object_id == object_id,
        )
        .order_by(models.ChangeLog.version.desc(), models.ChangeLog.field.asc())
        .offset(skip)
        .limit(limit)
        .all()
    )
