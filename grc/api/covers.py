"""
Covers API endpoints.

A cover lists the graves it marks; `grave_ids` in a PUT replaces that set.
"""
from typing import List
import uuid

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from grc.audit import AuditAction
from grc.db import schemas
from grc.db.database import get_db
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

router = APIRouter(prefix="/covers", tags=["covers"])

TARGET = "cover"


@router.get("/", response_model=schemas.PaginatedCovers)
def list_covers(
    params=Depends(get_collection_params),
    pagination=Depends(get_pagination),
    db: Session = Depends(get_db),
):
    page, items_per_page = pagination
    return repo_covers.get_covers(db, params=params, page=page, items_per_page=items_per_page).as_dict()


@router.post("/", response_model=schemas.Cover, status_code=status.HTTP_201_CREATED)
def create_cover_endpoint(
    cover: schemas.CoverCreate,
    db: Session = Depends(get_db),
    actor: str = Depends(get_actor),
    record: RequestAudit = Depends(get_request_audit),
):
    try:
        created = repo_covers.create_cover(db, cover, actor=actor)
    except EntityNotFound as e:
        db.rollback()
        record.failure(AuditAction.COVER_CREATE, target_type=TARGET, target_id=None, reason=str(e))
        raise not_found(str(e))
    record(AuditAction.COVER_CREATE, target_type=TARGET, target_id=created.id, metadata={"graves": len(cover.grave_ids)})
    return created


@router.get("/{cover_id}", response_model=schemas.Cover)
def get_cover_endpoint(cover_id: uuid.UUID, db: Session = Depends(get_db)):
    db_cover = repo_covers.get_cover(db, cover_id)
    if db_cover is None:
        raise not_found("Cover not found")
    return db_cover


@router.put("/{cover_id}", response_model=schemas.Cover)
def update_cover_endpoint(
    cover_id: uuid.UUID,
    cover: schemas.CoverUpdate,
    db: Session = Depends(get_db),
    actor: str = Depends(get_actor),
    record: RequestAudit = Depends(get_request_audit),
):
    try:
        updated = repo_covers.update_cover(db, cover_id, cover, actor=actor)
    except EntityNotFound as e:
        db.rollback()
        record.failure(AuditAction.COVER_UPDATE, target_type=TARGET, target_id=cover_id, reason=str(e))
        raise not_found(str(e))
    if updated is None:
        raise not_found("Cover not found")
    record(
        AuditAction.COVER_UPDATE,
        target_type=TARGET,
        target_id=cover_id,
        metadata={"fields": sorted(cover.model_dump(exclude_unset=True))},
    )
    return updated


@router.delete("/{cover_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_cover_endpoint(
    cover_id: uuid.UUID,
    db: Session = Depends(get_db),
    actor: str = Depends(get_actor),
    record: RequestAudit = Depends(get_request_audit),
):
    if repo_covers.delete_cover(db, cover_id, actor=actor) is None:
        raise not_found("Cover not found")
    record(AuditAction.COVER_DELETE, target_type=TARGET, target_id=cover_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{cover_id}/change_log", response_model=List[schemas.ChangeLog])
def get_cover_change_log(
    cover_id: uuid.UUID,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=500),
    db: Session = Depends(get_db),
):
    return history.change_log_for(db, TARGET, cover_id, skip, limit)


@router.get("/{cover_id}/audit_trail", response_model=List[schemas.AuditLog])
def get_cover_audit_trail(
    cover_id: uuid.UUID,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=500),
    db: Session = Depends(get_db),
):
    return history.audit_trail_for(db, TARGET, cover_id, skip, limit)
