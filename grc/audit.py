"""
Audit trail helpers and enums.

Centralized helpers to persist normalized audit records with consistent
schema; includes convenience wrappers per target type.
"""
from __future__ import annotations
import uuid
from enum import Enum
from typing import Any, Optional, Dict
from sqlalchemy.orm import Session

from grc.db import schemas
from grc.db.repositories import audits as repo_audits


class AuditAction(str, Enum):
    # Cemetery
    CEMETERY_CREATE = "cemetery_create"
    CEMETERY_UPDATE = "cemetery_update"
    CEMETERY_DELETE = "cemetery_delete"
    # Grave
    GRAVE_CREATE = "grave_create"
    GRAVE_UPDATE = "grave_update"
    GRAVE_DELETE = "grave_delete"
    GRAVE_BURIAL_ADD = "grave_burial_add"
    GRAVE_BURIAL_REMOVE = "grave_burial_remove"
    GRAVE_COVER_ADD = "grave_cover_add"
    GRAVE_COVER_REMOVE = "grave_cover_remove"
    # Burial
    BURIAL_CREATE = "burial_create"
    BURIAL_UPDATE = "burial_update"
    BURIAL_DELETE = "burial_delete"
    # Cover
    COVER_CREATE = "cover_create"
    COVER_UPDATE = "cover_update"
    COVER_DELETE = "cover_delete"


class AuditStatus(str, Enum):
    SUCCESS = "success"
    FAILURE = "failure"


def log(
    db: Session,
    *,
    action: AuditAction | str,
    status: AuditStatus | str = AuditStatus.SUCCESS,
    target_type: str,
    target_id: Optional[uuid.UUID] = None,
    actor: str,
    method: Optional[str] = None,
    path: Optional[str] = None,
    reason: Optional[str] = None,
    metadata: Optional[Dict[str, Any]] = None,
):
    """Central audit logging helper.

    Ensures consistent schema and a single place for enrichment.
    """
    # Persist pure string values, not Enum reprs (avoid 'AuditAction.XYZ')
    action_value = action.value if isinstance(action, AuditAction) else str(action)
    status_value = status.value if isinstance(status, AuditStatus) else str(status)
    audit_log = schemas.AuditLogCreate(
        action_type=action_value,
        status=status_value,
        target_type=target_type,
        target_id=target_id,
        method=method,
        path=path,
        reason=reason,
        metadata=metadata or {},
    )
    return repo_audits.create_audit_log(db, audit_log=audit_log, actor=actor)

__all__ = ["AuditAction", "AuditStatus", "log"]

# Convenience wrappers per target type.
def log_cemetery(db: Session, *, actor: str, cemetery_id: Optional[uuid.UUID], action: AuditAction, status: AuditStatus | str = AuditStatus.SUCCESS, **request):
    return log(db, action=action, status=status, target_type="cemetery", target_id=cemetery_id, actor=actor, **request)

def log_grave(db: Session, *, actor: str, grave_id: Optional[uuid.UUID], action: AuditAction, status: AuditStatus | str = AuditStatus.SUCCESS, **request):
    return log(db, action=action, status=status, target_type="grave", target_id=grave_id, actor=actor, **request)

def log_burial(db: Session, *, actor: str, burial_id: Optional[uuid.UUID], action: AuditAction, status: AuditStatus | str = AuditStatus.SUCCESS, **request):
    return log(db, action=action, status=status, target_type="burial", target_id=burial_id, actor=actor, **request)

def log_cover(db: Session, *, actor: str, cover_id: Optional[uuid.UUID], action: AuditAction, status: AuditStatus | str = AuditStatus.SUCCESS, **request):
    return log(db, action=action, status=status, target_type="cover", target_id=cover_id, actor=actor, **request)

__all__.extend(["log_cemetery", "log_grave", "log_burial", "log_cover"])
