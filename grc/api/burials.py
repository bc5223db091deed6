"""
Burials API endpoints.
"""
from typing import List
import uuid

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from grc.audit import AuditAction
from grc.db import schemas
from grc.db.database import get_db
from grc.db.repositories import burials as repo_burials
from grc.db.repositories.base import EntityNotFound
from grc.api import history
from grc.api.deps import (
    RequestAudit,
    get_actor,
    get_collection_params,
    get_pagination,
    get_request_audit,
    not_found,
)

router = APIRouter(prefix="/burials", tags=["burials"])

TARGET = "burial"


@router.get("/", response_model=schemas.PaginatedBurials)
def list_burials(
    params=Depends(get_collection_params),
    pagination=Depends(get_pagination),
    db: Session = Depends(get_db),
):
    page, items_per_page = pagination
    return repo_burials.get_burials(db, params=params, page=page, items_per_page=items_per_page).as_dict()


@router.post("/", response_model=schemas.Burial, status_code=status.HTTP_201_CREATED)
def create_burial_endpoint(
    burial: schemas.BurialCreate,
    db: Session = Depends(get_db),
    actor: str = Depends(get_actor),
    record: RequestAudit = Depends(get_request_audit),
):
    try:
        created = repo_burials.create_burial(db, burial, actor=actor)
    except EntityNotFound as e:
        db.rollback()
        record.failure(AuditAction.BURIAL_CREATE, target_type=TARGET, target_id=None, reason=str(e))
        raise not_found(str(e))
    record(AuditAction.BURIAL_CREATE, target_type=TARGET, target_id=created.id, metadata={"grave_id": str(created.grave_id) if created.grave_id else None})
    return created


@router.get("/{burial_id}", response_model=schemas.Burial)
def get_burial_endpoint(burial_id: uuid.UUID, db: Session = Depends(get_db)):
    db_burial = repo_burials.get_burial(db, burial_id)
    if db_burial is None:
        raise not_found("Burial not found")
    return db_burial


@router.put("/{burial_id}", response_model=schemas.Burial)
def update_burial_endpoint(
    burial_id: uuid.UUID,
    burial: schemas.BurialUpdate,
    db: Session = Depends(get_db),
    actor: str = Depends(get_actor),
    record: RequestAudit = Depends(get_request_audit),
):
    try:
        updated = repo_burials.update_burial(db, burial_id, burial, actor=actor)
    except EntityNotFound as e:
        db.rollback()
        record.failure(AuditAction.BURIAL_UPDATE, target_type=TARGET, target_id=burial_id, reason=str(e))
        raise not_found(str(e))
    if updated is None:
        raise not_found("Burial not found")
    record(
        AuditAction.BURIAL_UPDATE,
        target_type=TARGET,
        target_id=burial_id,
        metadata={"fields": sorted(burial.model_dump(exclude_unset=True))},
    )
    return updated


@router.delete("/{burial_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_burial_endpoint(
    burial_id: uuid.UUID,
    db: Session = Depends(get_db),
    actor: str = Depends(get_actor),
    record: RequestAudit = Depends(get_request_audit),
):
    if repo_burials.delete_burial(db, burial_id, actor=actor) is None:
        raise not_found("Burial not found")
    record(AuditAction.BURIAL_DELETE, target_type=TARGET, target_id=burial_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{burial_id}/change_log", response_model=List[schemas.ChangeLog])
def get_burial_change_log(
    burial_id: uuid.UUID,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=500),
    db: Session = Depends(get_db),
):
    return history.change_log_for(db, TARGET, burial_id, skip, limit)


@router.get("/{burial_id}/audit_trail", response_model=List[schemas.AuditLog])
def get_burial_audit_trail(
    burial_id: uuid.UUID,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=500),
    db: Session = Depends(get_db),
):
    return history.audit_trail_for(db, TARGET, burial_id, skip, limit)
