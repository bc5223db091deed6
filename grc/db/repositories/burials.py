"""
Burial repository functions.

Burial is the owning side of the grave relation; placement always goes
through ``Burial.assign_to`` so the grave's collection follows.
"""
from __future__ import annotations

import logging
import uuid
from typing import Iterable, Optional, Tuple

from sqlalchemy.orm import Session

from grc import changelog
from grc.db import filters, models, schemas
from grc.db.repositories.base import get_by_id, record_created, record_removed, require, tracked

logger = logging.getLogger(__name__)


def get_burial(db: Session, burial_id: uuid.UUID):
    return get_by_id(db, models.Burial, burial_id)


def get_burials(
    db: Session,
    params: Iterable[Tuple[str, str]] = (),
    page: Optional[int] = None,
    items_per_page: Optional[int] = None,
) -> filters.Page:
    query = filters.apply_filters(db.query(models.Burial), models.Burial, params)
    return filters.paginate(query, page, items_per_page)


def create_burial(db: Session, burial: schemas.BurialCreate, actor: str):
    db_burial = models.Burial(**burial.model_dump(exclude={'grave_id'}))
    db.add(db_burial)
    if burial.grave_id is not None:
        db_burial.assign_to(require(db, models.Grave, burial.grave_id))
    record_created(db, db_burial, actor)
    db.commit()
    db.refresh(db_burial)
    return db_burial


def update_burial(db: Session, burial_id: uuid.UUID, burial: schemas.BurialUpdate, actor: str):
    db_burial = get_burial(db, burial_id)
    if db_burial is None:
        return None
    update_data = burial.model_dump(exclude_unset=True)
    has_grave = 'grave_id' in update_data
    grave_id = update_data.pop('grave_id', None)
    with tracked(db, db_burial, actor):
        if has_grave:
            db_burial.assign_to(require(db, models.Grave, grave_id) if grave_id else None)
        for key, value in update_data.items():
            setattr(db_burial, key, value)
    db.commit()
    db.refresh(db_burial)
    return db_burial


def delete_burial(db: Session, burial_id: uuid.UUID, actor: str):
    if burial_id is None:
        return None
    try:
        db_burial = get_burial(db, burial_id)
        if db_burial is None:
            return None
        before = changelog.snapshot(db_burial)
        db_burial.assign_to(None)
        record_removed(db, db_burial, actor, before)
        db.delete(db_burial)
        db.commit()
        logger.info("burial_deleted: id=%s actor=%s", burial_id, actor)
        return db_burial
    except Exception as e:
        db.rollback()
        raise RuntimeError(f"Failed to delete burial {burial_id}: {str(e)}")
