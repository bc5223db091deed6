"""
Cover repository functions.

Cover owns the grave/cover association; ``grave_ids`` in a payload replaces
the full set of covered graves.
"""
from __future__ import annotations

import logging
import uuid
from typing import Iterable, Optional, Tuple

from sqlalchemy.orm import Session

from grc import changelog
from grc.db import filters, models, schemas
from grc.db.repositories.base import (
    get_by_id,
    record_created,
    record_removed,
    replace_peers,
    require_all,
    tracked,
)

logger = logging.getLogger(__name__)


def get_cover(db: Session, cover_id: uuid.UUID):
    return get_by_id(db, models.Cover, cover_id)


def get_covers(
    db: Session,
    params: Iterable[Tuple[str, str]] = (),
    page: Optional[int] = None,
    items_per_page: Optional[int] = None,
) -> filters.Page:
    query = filters.apply_filters(db.query(models.Cover), models.Cover, params)
    return filters.paginate(query, page, items_per_page)


def create_cover(db: Session, cover: schemas.CoverCreate, actor: str):
    db_cover = models.Cover(**cover.model_dump(exclude={'grave_ids'}))
    db.add(db_cover)
    for grave in require_all(db, models.Grave, cover.grave_ids):
        db_cover.add_grave(grave)
    record_created(db, db_cover, actor)
    db.commit()
    db.refresh(db_cover)
    return db_cover


def update_cover(db: Session, cover_id: uuid.UUID, cover: schemas.CoverUpdate, actor: str):
    db_cover = get_cover(db, cover_id)
    if db_cover is None:
        return None
    update_data = cover.model_dump(exclude_unset=True)
    grave_ids = update_data.pop('grave_ids', None)
    targets = require_all(db, models.Grave, grave_ids) if grave_ids is not None else None
    with tracked(db, db_cover, actor):
        if targets is not None:
            replace_peers(db_cover.graves, targets, db_cover.add_grave, db_cover.remove_grave)
        for key, value in update_data.items():
            setattr(db_cover, key, value)
    db.commit()
    db.refresh(db_cover)
    return db_cover


def delete_cover(db: Session, cover_id: uuid.UUID, actor: str):
    if cover_id is None:
        return None
    try:
        db_cover = get_cover(db, cover_id)
        if db_cover is None:
            return None
        before = changelog.snapshot(db_cover)
        for grave in list(db_cover.graves):
            db_cover.remove_grave(grave)
        record_removed(db, db_cover, actor, before)
        db.delete(db_cover)
        db.commit()
        logger.info("cover_deleted: id=%s actor=%s", cover_id, actor)
        return db_cover
    except Exception as e:
        db.rollback()
        raise RuntimeError(f"Failed to delete cover {cover_id}: {str(e)}")
