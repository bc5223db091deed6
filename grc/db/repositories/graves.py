"""
Grave repository functions.

Implements grave CRUD, filtered listings, and the grave-side relation
operations (burials and covers). Every mutation stages change-log rows in
the same transaction.
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
    require,
    require_all,
    tracked,
)

logger = logging.getLogger(__name__)


def get_grave(db: Session, grave_id: uuid.UUID):
    return get_by_id(db, models.Grave, grave_id)


def get_graves(
    db: Session,
    params: Iterable[Tuple[str, str]] = (),
    page: Optional[int] = None,
    items_per_page: Optional[int] = None,
) -> filters.Page:
    query = filters.apply_filters(db.query(models.Grave), models.Grave, params)
    return filters.paginate(query, page, items_per_page)


def create_grave(db: Session, grave: schemas.GraveCreate, actor: str):
    db_grave = models.Grave(**grave.model_dump(exclude={'cemetery_id', 'cover_ids'}))
    db.add(db_grave)
    if grave.cemetery_id is not None:
        db_grave.assign_to(require(db, models.Cemetery, grave.cemetery_id))
    for cover in require_all(db, models.Cover, grave.cover_ids):
        with tracked(db, cover, actor):
            db_grave.add_cover(cover)
    record_created(db, db_grave, actor)
    db.commit()
    db.refresh(db_grave)
    return db_grave


def update_grave(db: Session, grave_id: uuid.UUID, grave: schemas.GraveUpdate, actor: str):
    db_grave = get_grave(db, grave_id)
    if db_grave is None:
        return None
    update_data = grave.model_dump(exclude_unset=True)
    cover_ids = update_data.pop('cover_ids', None)
    has_cemetery = 'cemetery_id' in update_data
    cemetery_id = update_data.pop('cemetery_id', None)

    if cover_ids is not None:
        targets = require_all(db, models.Cover, cover_ids)

        def _add(cover):
            with tracked(db, cover, actor):
                db_grave.add_cover(cover)

        def _remove(cover):
            with tracked(db, cover, actor):
                db_grave.remove_cover(cover)

        replace_peers(db_grave.covers, targets, _add, _remove)

    with tracked(db, db_grave, actor):
        if has_cemetery:
            db_grave.assign_to(require(db, models.Cemetery, cemetery_id) if cemetery_id else None)
        for key, value in update_data.items():
            setattr(db_grave, key, value)
    db.commit()
    db.refresh(db_grave)
    return db_grave


def delete_grave(db: Session, grave_id: uuid.UUID, actor: str):
    """Delete a grave after clearing every reference to it.

    Burials keep existing without a grave, covers drop the grave from their
    list, and the owning cemetery no longer lists it.
    """
    if grave_id is None:
        return None
    try:
        db_grave = get_grave(db, grave_id)
        if db_grave is None:
            return None
        before = changelog.snapshot(db_grave)
        for burial in list(db_grave.burials):
            with tracked(db, burial, actor):
                db_grave.remove_burial(burial)
        for cover in list(db_grave.covers):
            with tracked(db, cover, actor):
                db_grave.remove_cover(cover)
        db_grave.assign_to(None)
        record_removed(db, db_grave, actor, before)
        db.delete(db_grave)
        db.commit()
        logger.info("grave_deleted: id=%s actor=%s", grave_id, actor)
        return db_grave
    except Exception as e:
        db.rollback()
        raise RuntimeError(f"Failed to delete grave {grave_id}: {str(e)}")


def attach_burial(db: Session, db_grave: models.Grave, db_burial: models.Burial, actor: str):
    """Place ``db_burial`` in ``db_grave``, moving it out of any previous grave."""
    previous = db_burial.grave_id
    with tracked(db, db_burial, actor):
        db_grave.add_burial(db_burial)
    db.commit()
    db.refresh(db_grave)
    logger.info("burial_attached: burial=%s grave=%s previous=%s", db_burial.id, db_grave.id, previous)
    return db_grave


def detach_burial(db: Session, db_grave: models.Grave, db_burial: models.Burial, actor: str):
    with tracked(db, db_burial, actor):
        db_grave.remove_burial(db_burial)
    db.commit()
    db.refresh(db_grave)
    logger.info("burial_detached: burial=%s grave=%s", db_burial.id, db_grave.id)
    return db_grave


def attach_cover(db: Session, db_grave: models.Grave, db_cover: models.Cover, actor: str):
    with tracked(db, db_cover, actor):
        db_grave.add_cover(db_cover)
    db.commit()
    db.refresh(db_grave)
    logger.info("cover_attached: cover=%s grave=%s", db_cover.id, db_grave.id)
    return db_grave


def detach_cover(db: Session, db_grave: models.Grave, db_cover: models.Cover, actor: str):
    with tracked(db, db_cover, actor):
        db_grave.remove_cover(db_cover)
    db.commit()
    db.refresh(db_grave)
    logger.info("cover_detached: cover=%s grave=%s", db_cover.id, db_grave.id)
    return db_grave
