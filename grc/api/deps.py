"""
Shared FastAPI dependencies.

Resolves the acting user from proxy headers and provides a request-bound
audit recorder. Authentication itself happens upstream (oauth2-proxy style
headers); this service only records who acted.
"""
import logging
import uuid
from typing import Any, Dict, List, Optional, Tuple

from fastapi import Depends, Header, HTTPException, Query
from sqlalchemy.orm import Session
from starlette.requests import Request

from grc import audit
from grc.db.database import get_db
from grc.utils.settings import get_settings

logger = logging.getLogger(__name__)

ANONYMOUS = "anonymous"


def get_actor(
    x_auth_request_user: Optional[str] = Header(default=None),
    x_forwarded_user: Optional[str] = Header(default=None),
) -> str:
    candidate = (x_auth_request_user or x_forwarded_user or "").strip()
    return candidate or ANONYMOUS


def get_collection_params(request: Request) -> List[Tuple[str, str]]:
    return request.query_params.multi_items()


def get_pagination(
    page: int = Query(default=1, ge=1),
    items_per_page: Optional[int] = Query(default=None, ge=1),
) -> Tuple[int, Optional[int]]:
    return page, items_per_page


class RequestAudit:
    """Writes audit-trail rows stamped with the current request and actor.

    A failing audit write is logged and never fails the request.
    """

    def __init__(self, db: Session, request: Request, actor: str):
        self.db = db
        self.request = request
        self.actor = actor

    def __call__(
        self,
        action: audit.AuditAction,
        *,
        target_type: str,
        target_id: Optional[uuid.UUID],
        status: audit.AuditStatus = audit.AuditStatus.SUCCESS,
        reason: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        if not get_settings().audit_trail_enabled:
            return None
        try:
            return audit.log(
                self.db,
                action=action,
                status=status,
                target_type=target_type,
                target_id=target_id,
                actor=self.actor,
                method=self.request.method,
                path=self.request.url.path,
                reason=reason,
                metadata=metadata,
            )
        except Exception:
            self.db.rollback()
            logger.exception("audit_log_failed: action=%s target=%s/%s", action, target_type, target_id)
            return None

    def failure(self, action: audit.AuditAction, *, target_type: str, target_id: Optional[uuid.UUID], reason: str):
        return self(action, target_type=target_type, target_id=target_id, status=audit.AuditStatus.FAILURE, reason=reason)


def get_request_audit(
    request: Request,
    db: Session = Depends(get_db),
    actor: str = Depends(get_actor),
) -> RequestAudit:
    return RequestAudit(db, request, actor)


def not_found(detail: str) -> HTTPException:
    return HTTPException(status_code=404, detail=detail)
