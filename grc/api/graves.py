"""
Graves API endpoints.

CRUD, filtered listing, history, and the burial/cover relation endpoints
for graves.
"""
from typing import List
import uuid

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from grc.audit import AuditAction
from grc.db import schemas, models
from grc.db.database import get_db
from grc.db.repositories import graves as repo_graves
from grc.db.repositories import burials as repo_burials
from grc.db.repositories import covers as repo_covers
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

router = APIRouter(prefix="/graves", tags=["graves"])

TARGET = "grave"


def _grave_or_404(db: Session, grave_id: uuid.UUID) -> models.Grave:
    db_grave = repo_graves.get_grave(db, grave_id)
    if db_grave is None:
        raise not_found("Grave not found")
    return db_grave


@router.get("/", response_model=schemas.PaginatedGraves)
def list_graves(
    params=Depends(get_collection_params),
    pagination=Depends(get_pagination),
    db: Session = Depends(get_db),
):
    page, items_per_page = pagination
    return repo_graves.get_graves(db, params=params, page=page, items_per_page=items_per_page).as_dict()


@router.post("/", response_model=schemas.Grave, status_code=status.HTTP_201_CREATED)
def create_grave_endpoint(
    grave: schemas.GraveCreate,
    db: Session = Depends(get_db),
    actor: str = Depends(get_actor),
    record: RequestAudit = Depends(get_request_audit),
):
    try:
        created = repo_graves.create_grave(db, grave, actor=actor)
    except EntityNotFound as e:
        db.rollback()
        record.failure(AuditAction.GRAVE_CREATE, target_type=TARGET, target_id=None, reason=str(e))
        raise not_found(str(e))
    record(AuditAction.GRAVE_CREATE, target_type=TARGET, target_id=created.id, metadata={"reference": created.reference})
    return created


@router.get("/{grave_id}", response_model=schemas.Grave)
def get_grave_endpoint(grave_id: uuid.UUID, db: Session = Depends(get_db)):
    return _grave_or_404(db, grave_id)


@router.put("/{grave_id}", response_model=schemas.Grave)
def update_grave_endpoint(
    grave_id: uuid.UUID,
    grave: schemas.GraveUpdate,
    db: Session = Depends(get_db),
    actor: str = Depends(get_actor),
    record: RequestAudit = Depends(get_request_audit),
):
    try:
        updated = repo_graves.update_grave(db, grave_id, grave, actor=actor)
    except EntityNotFound as e:
        db.rollback()
        record.failure(AuditAction.GRAVE_UPDATE, target_type=TARGET, target_id=grave_id, reason=str(e))
        raise not_found(str(e))
    if updated is None:
        raise not_found("Grave not found")
    record(
        AuditAction.GRAVE_UPDATE,
        target_type=TARGET,
        target_id=grave_id,
        metadata={"fields": sorted(grave.model_dump(exclude_unset=True))},
    )
    return updated


@router.delete("/{grave_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_grave_endpoint(
    grave_id: uuid.UUID,
    db: Session = Depends(get_db),
    actor: str = Depends(get_actor),
    record: RequestAudit = Depends(get_request_audit),
):
    if repo_graves.delete_grave(db, grave_id, actor=actor) is None:
        raise not_found("Grave not found")
    record(AuditAction.GRAVE_DELETE, target_type=TARGET, target_id=grave_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{grave_id}/change_log", response_model=List[schemas.ChangeLog])
def get_grave_change_log(
    grave_id: uuid.UUID,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=500),
    db: Session = Depends(get_db),
):
    """Gets all the change logs for this resource."""
    return history.change_log_for(db, TARGET, grave_id, skip, limit)


@router.get("/{grave_id}/audit_trail", response_model=List[schemas.AuditLog])
def get_grave_audit_trail(
    grave_id: uuid.UUID,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=500),
    db: Session = Depends(get_db),
):
    """Gets the audit trail for this resource."""
    return history.audit_trail_for(db, TARGET, grave_id, skip, limit)


@router.put("/{grave_id}/burials/{burial_id}", response_model=schemas.Grave)
def add_burial_endpoint(
    grave_id: uuid.UUID,
    burial_id: uuid.UUID,
    db: Session = Depends(get_db),
    actor: str = Depends(get_actor),
    record: RequestAudit = Depends(get_request_audit),
):
    db_grave = _grave_or_404(db, grave_id)
    db_burial = repo_burials.get_burial(db, burial_id)
    if db_burial is None:
        record.failure(AuditAction.GRAVE_BURIAL_ADD, target_type=TARGET, target_id=grave_id, reason="burial not found")
        raise not_found("Burial not found")
    updated = repo_graves.attach_burial(db, db_grave, db_burial, actor=actor)
    record(AuditAction.GRAVE_BURIAL_ADD, target_type=TARGET, target_id=grave_id, metadata={"burial_id": str(burial_id)})
    return updated


@router.delete("/{grave_id}/burials/{burial_id}", response_model=schemas.Grave)
def remove_burial_endpoint(
    grave_id: uuid.UUID,
    burial_id: uuid.UUID,
    db: Session = Depends(get_db),
    actor: str = Depends(get_actor),
    record: RequestAudit = Depends(get_request_audit),
):
    db_grave = _grave_or_404(db, grave_id)
    db_burial = repo_burials.get_burial(db, burial_id)
    if db_burial is None:
        record.failure(AuditAction.GRAVE_BURIAL_REMOVE, target_type=TARGET, target_id=grave_id, reason="burial not found")
        raise not_found("Burial not found")
    updated = repo_graves.detach_burial(db, db_grave, db_burial, actor=actor)
    record(AuditAction.GRAVE_BURIAL_REMOVE, target_type=TARGET, target_id=grave_id, metadata={"burial_id": str(burial_id)})
    return updated


@router.put("/{grave_id}/covers/{cover_id}", response_model=schemas.Grave)
def add_cover_endpoint(
    grave_id: uuid.UUID,
    cover_id: uuid.UUID,
    db: Session = Depends(get_db),
    actor: str = Depends(get_actor),
    record: RequestAudit = Depends(get_request_audit),
):
    db_grave = _grave_or_404(db, grave_id)
    db_cover = repo_covers.get_cover(db, cover_id)
    if db_cover is None:
        record.failure(AuditAction.GRAVE_COVER_ADD, target_type=TARGET, target_id=grave_id, reason="cover not found")
        raise not_found("Cover not found")
    updated = repo_graves.attach_cover(db, db_grave, db_cover, actor=actor)
    record(AuditAction.GRAVE_COVER_ADD, target_type=TARGET, target_id=grave_id, metadata={"cover_id": str(cover_id)})
    return updated


@router.delete("/{grave_id}/covers/{cover_id}", response_model=schemas.Grave)
def remove_cover_endpoint(
    grave_id: uuid.UUID,
    cover_id: uuid.UUID,
    db: Session = Depends(get_db),
    actor: str = Depends(get_actor),
    record: RequestAudit = Depends(get_request_audit),
):
    db_grave = _grave_or_404(db, grave_id)
    db_cover = repo_covers.get_cover(db, cover_id)
    if db_cover is None:
        record.failure(AuditAction.GRAVE_COVER_REMOVE, target_type=TARGET, target_id=grave_id, reason="cover not found")
        raise not_found("Cover not found")
    updated = repo_graves.detach_cover(db, db_grave, db_cover, actor=actor)
    record(AuditAction.GRAVE_COVER_REMOVE, target_type=TARGET, target_id=grave_id, metadata={"cover_id": str(cover_id)})
    return updated
