"""
Change-log and audit-trail listings shared by the resource routers.

History is served for any identifier, including entities that have since
been deleted.
"""
import uuid
from typing import List

from sqlalchemy.orm import Session

from grc.db import schemas
from grc.db.repositories import audits as repo_audits
from grc.db.repositories import change_logs as repo_change_logs


def change_log_for(db: Session, object_class: str, object_id: uuid.UUID, skip: int, limit: int) -> List[schemas.ChangeLog]:
    return repo_change_logs.get_change_logs(db, object_class, object_id, skip=skip, limit=limit)


def audit_trail_for(db: Session, target_type: str, target_id: uuid.UUID, skip: int, limit: int) -> List[schemas.AuditLog]:
    return repo_audits.get_audit_logs(db, target_type=target_type, target_id=target_id, skip=skip, limit=limit)
