import uuid
from datetime import datetime
from typing import Optional, Dict, Any
from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class AuditLogBase(BaseModel):
    action_type: str
    status: str
    target_type: Optional[str] = None
    target_id: Optional[uuid.UUID] = None
    method: Optional[str] = None
    path: Optional[str] = None
    reason: Optional[str] = None


class AuditLogCreate(AuditLogBase):
    metadata: Optional[Dict[str, Any]] = None


class AuditLog(AuditLogBase):
    id: uuid.UUID
    actor: str
    # ORM rows keep the payload on `metadata_json`; `metadata` is the declarative MetaData
    metadata: Optional[Dict[str, Any]] = Field(
        default=None,
        validation_alias=AliasChoices('metadata_json', 'metadata'),
    )
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)
