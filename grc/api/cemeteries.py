"""
Cemeteries API endpoints.
"""
from typing import List
import uuid

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from grc.audit import AuditAction
from grc.db import schemas
from grc.db.database import get_db
from grc.db.repositories import cemeteries as repo_cemeteries
from grc.api import history
from grc.api.deps import (
    RequestAudit,
    get_actor,
    get_collection_params,
    get_pagination,
    get_request_audit,
    not_found,
)

router = APIRouter(prefix="/cemeteries", tags=["cemeteries"])

TARGET = "cemetery"


@router.get("/", response_model=schemas.PaginatedCemeteries)
def list_cemeteries(
    params=Depends(get_collection_params),
    pagination=Depends(get_pagination),
    db: Session = Depends(get_db),
):
    page, items_per_page = pagination
    return repo_cemeteries.get_cemeteries(db, params=params, page=page, items_per_page=items_per_page).as_dict()


@router.post("/", response_model=schemas.Cemetery, status_code=status.HTTP_201_CREATED)
def create_cemetery_endpoint(
    cemetery: schemas.CemeteryCreate,
    db: Session = Depends(get_db),
    actor: str = Depends(get_actor),
    record: RequestAudit = Depends(get_request_audit),
):
    created = repo_cemeteries.create_cemetery(db, cemetery, actor=actor)
    record(AuditAction.CEMETERY_CREATE, target_type=TARGET, target_id=created.id, metadata={"name": created.name})
    return created


@router.get("/{cemetery_id}", response_model=schemas.Cemetery)
def get_cemetery_endpoint(cemetery_id: uuid.UUID, db: Session = Depends(get_db)):
    db_cemetery = repo_cemeteries.get_cemetery(db, cemetery_id)
    if db_cemetery is None:
        raise not_found("Cemetery not found")
    return db_cemetery


@router.put("/{cemetery_id}", response_model=schemas.Cemetery)
def update_cemetery_endpoint(
    cemetery_id: uuid.UUID,
    cemetery: schemas.CemeteryUpdate,
    db: Session = Depends(get_db),
    actor: str = Depends(get_actor),
    record: RequestAudit = Depends(get_request_audit),
):
    updated = repo_cemeteries.update_cemetery(db, cemetery_id, cemetery, actor=actor)
    if updated is None:
        raise not_found("Cemetery not found")
    record(
        AuditAction.CEMETERY_UPDATE,
        target_type=TARGET,
        target_id=cemetery_id,
        metadata={"fields": sorted(cemetery.model_dump(exclude_unset=True))},
    )
    return updated


@router.delete("/{cemetery_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_cemetery_endpoint(
    cemetery_id: uuid.UUID,
    db: Session = Depends(get_db),
    actor: str = Depends(get_actor),
    record: RequestAudit = Depends(get_request_audit),
):
    if repo_cemeteries.delete_cemetery(db, cemetery_id, actor=actor) is None:
        raise not_found("Cemetery not found")
    record(AuditAction.CEMETERY_DELETE, target_type=TARGET, target_id=cemetery_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{cemetery_id}/change_log", response_model=List[schemas.ChangeLog])
def get_cemetery_change_log(
    cemetery_id: uuid.UUID,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=500),
    db: Session = Depends(get_db),
):
    return history.change_log_for(db, TARGET, cemetery_id, skip, limit)


@router.get("/{cemetery_id}/audit_trail", response_model=List[schemas.AuditLog])
def get_cemetery_audit_trail(
    cemetery_id: uuid.UUID,
    skip: int = Query(default=0, ge=0),
    limit: int = Query(default=100, ge=1, le=500),
    db: Session = Depends(get_db),
):
    return history.audit_trail_for(db, TARGET, cemetery_id, skip, limit)
