"""
Cemetery repository functions.
"""
from __future__ import annotations

import logging
import uuid
from typing import Iterable, Optional, Tuple

from sqlalchemy.orm import Session

from grc import changelog
from grc.db import filters, models, schemas
from grc.db.repositories.base import get_by_id, record_created, record_removed, tracked

logger = logging.getLogger(__name__)


def get_cemetery(db: Session, cemetery_id: uuid.UUID):
    return get_by_id(db, models.Cemetery, cemetery_id)


def get_cemeteries(
    db: Session,
    params: Iterable[Tuple[str, str]] = (),
    page: Optional[int] = None,
    items_per_page: Optional[int] = None,
) -> filters.Page:
    query = filters.apply_filters(db.query(models.Cemetery), models.Cemetery, params)
    return filters.paginate(query, page, items_per_page)


def create_cemetery(db: Session, cemetery: schemas.CemeteryCreate, actor: str):
    db_cemetery = models.Cemetery(**cemetery.model_dump())
    db.add(db_cemetery)
    record_created(db, db_cemetery, actor)
    db.commit()
    db.refresh(db_cemetery)
    return db_cemetery


def update_cemetery(db: Session, cemetery_id: uuid.UUID, cemetery: schemas.CemeteryUpdate, actor: str):
    db_cemetery = get_cemetery(db, cemetery_id)
    if db_cemetery is None:
        return None
    with tracked(db, db_cemetery, actor):
        for key, value in cemetery.model_dump(exclude_unset=True).items():
            setattr(db_cemetery, key, value)
    db.commit()
    db.refresh(db_cemetery)
    return db_cemetery


def delete_cemetery(db: Session, cemetery_id: uuid.UUID, actor: str):
    """Delete a cemetery; its graves stay, without a cemetery."""
    if cemetery_id is None:
        return None
    try:
        db_cemetery = get_cemetery(db, cemetery_id)
        if db_cemetery is None:
            return None
        before = changelog.snapshot(db_cemetery)
        for grave in list(db_cemetery.graves):
            with tracked(db, grave, actor):
                db_cemetery.remove_grave(grave)
        record_removed(db, db_cemetery, actor, before)
        db.delete(db_cemetery)
        db.commit()
        logger.info("cemetery_deleted: id=%s actor=%s", cemetery_id, actor)
        return db_cemetery
    except Exception as e:
        db.rollback()
        raise RuntimeError(f"Failed to delete cemetery {cemetery_id}: {str(e)}")
