import uuid
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, field_validator

from .common import ShortStr, LongStr, reject_null


class CoverBase(BaseModel):
    reference: Optional[ShortStr] = None
    description: Optional[LongStr] = None
    cover_type: Optional[ShortStr] = None


class CoverCreate(CoverBase):
    grave_ids: List[uuid.UUID] = []


class CoverUpdate(CoverBase):
    grave_ids: Optional[List[uuid.UUID]] = None

    @field_validator('grave_ids', mode='before')
    @classmethod
    def grave_ids_not_null(cls, value):
        return reject_null(value)


class Cover(CoverBase):
    id: uuid.UUID
    grave_ids: List[uuid.UUID] = []
    date_created: Optional[datetime] = None
    date_modified: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class PaginatedCovers(BaseModel):
    items: List[Cover]
    total_items: int
    total_pages: int
    page: int
