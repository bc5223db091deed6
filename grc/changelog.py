"""
Field-level change logging.

Every mutating repository operation calls :func:`record` with a snapshot of
the entity's versioned fields taken before the change. One immutable
``ChangeLog`` row is staged per changed field, all sharing the object's next
version number, inside the caller's transaction so the history commits (or
rolls back) together with the change itself.
"""
from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, List, Optional

from fastapi.encoders import jsonable_encoder
from sqlalchemy.orm import Session

from grc.db import models
from grc.db.repositories import change_logs as repo_change_logs
from grc.utils.settings import get_settings

logger = logging.getLogger(__name__)


class ChangeAction(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    REMOVE = "remove"


def object_class_of(entity: Any) -> str:
    return type(entity).__name__.lower()


def snapshot(entity: Any) -> Dict[str, Any]:
    """Return the JSON-safe values of the entity's versioned fields."""
    return {name: jsonable_encoder(getattr(entity, name)) for name in type(entity).__versioned__}


def record(
    db: Session,
    entity: Any,
    *,
    action: ChangeAction,
    actor: str,
    before: Optional[Dict[str, Any]] = None,
) -> List[models.ChangeLog]:
    """Stage change-log rows describing how ``entity`` moved away from ``before``.

    ``before`` is ignored for creates. A removal writes a single row whose
    ``old_value`` holds the last known state. Returns the staged rows; an
    update that changed nothing stages none.
    """
    if not get_settings().change_log_enabled:
        return []

    object_class = object_class_of(entity)
    pending = []
    if action == ChangeAction.REMOVE:
        pending.append((None, before if before is not None else snapshot(entity), None))
    else:
        after = snapshot(entity)
        previous = {} if action == ChangeAction.CREATE else (before or {})
        for name, new_value in after.items():
            old_value = previous.get(name)
            if action == ChangeAction.CREATE and new_value in (None, []):
                continue
            if action == ChangeAction.UPDATE and old_value == new_value:
                continue
            pending.append((name, old_value, new_value))

    if not pending:
        return []

    version = repo_change_logs.next_version(db, object_class, entity.id)
    rows = [
        models.ChangeLog(
            object_class=object_class,
            object_id=entity.id,
            action=action.value,
            version=version,
            field=name,
            old_value=old_value,
            new_value=new_value,
            actor=actor,
        )
        for name, old_value, new_value in pending
    ]
    logger.debug(
        "change_log: %s %s/%s v%d fields=%s",
        action.value, object_class, entity.id, version, [row.field for row in rows],
    )
    return repo_change_logs.append_change_logs(db, rows)


__all__ = ["ChangeAction", "object_class_of", "snapshot", "record"]
