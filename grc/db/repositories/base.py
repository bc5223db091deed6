"""
Helpers shared by the resource repositories.
"""
from __future__ import annotations

import uuid
from contextlib import contextmanager
from typing import Callable, Iterable, List

from sqlalchemy.orm import Session

from grc import changelog
from grc.changelog import ChangeAction


class EntityNotFound(LookupError):
    """A referenced entity does not exist."""

    def __init__(self, object_class: str, object_id: uuid.UUID):
        super().__init__(f"{object_class} {object_id} not found")
        self.object_class = object_class
        self.object_id = object_id


def get_by_id(db: Session, model, object_id: uuid.UUID):
    return db.query(model).filter(model.id == object_id).first()


def require(db: Session, model, object_id: uuid.UUID):
    entity = get_by_id(db, model, object_id)
    if entity is None:
        raise EntityNotFound(model.__name__, object_id)
    return entity


def require_all(db: Session, model, object_ids: Iterable[uuid.UUID]) -> List:
    """Resolve every id, keeping order and dropping repeats."""
    resolved = []
    for object_id in dict.fromkeys(object_ids):
        resolved.append(require(db, model, object_id))
    return resolved


def replace_peers(current: Iterable, targets: List, add: Callable, remove: Callable) -> None:
    """Make a many-to-many collection hold exactly ``targets``."""
    for peer in list(current):
        if peer not in targets:
            remove(peer)
    for peer in targets:
        add(peer)


@contextmanager
def tracked(db: Session, entity, actor: str):
    """Record an UPDATE change log for whatever the block changes on ``entity``."""
    before = changelog.snapshot(entity)
    yield entity
    db.flush()
    changelog.record(db, entity, action=ChangeAction.UPDATE, before=before, actor=actor)


def record_created(db: Session, entity, actor: str) -> None:
    db.flush()
    changelog.record(db, entity, action=ChangeAction.CREATE, actor=actor)


def record_removed(db: Session, entity, actor: str, before: dict) -> None:
    changelog.record(db, entity, action=ChangeAction.REMOVE, before=before, actor=actor)
