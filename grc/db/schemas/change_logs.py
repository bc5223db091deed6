import uuid
from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict


class ChangeLog(BaseModel):
    id: uuid.UUID
    object_class: str
    object_id: uuid.UUID
    action: str
    version: int
    field: Optional[str] = None
    old_value: Optional[Any] = None
    new_value: Optional[Any] = None
    actor: str
    logged_at: datetime
    model_config = ConfigDict(from_attributes=True)
