import uuid
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, field_validator

from .common import UrlStr, ShortStr, LongStr, reject_null


class CemeteryBase(BaseModel):
    reference: Optional[ShortStr] = None
    name: ShortStr
    description: Optional[LongStr] = None
    organization: Optional[UrlStr] = None


class CemeteryCreate(CemeteryBase):
    pass


class CemeteryUpdate(BaseModel):
    reference: Optional[ShortStr] = None
    name: Optional[ShortStr] = None
    description: Optional[LongStr] = None
    organization: Optional[UrlStr] = None

    @field_validator('name', mode='before')
    @classmethod
    def name_not_null(cls, value):
        return reject_null(value)


class Cemetery(CemeteryBase):
    id: uuid.UUID
    grave_ids: List[uuid.UUID] = []
    date_created: Optional[datetime] = None
    date_modified: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class PaginatedCemeteries(BaseModel):
    items: List[Cemetery]
    total_items: int
    total_pages: int
    page: int
