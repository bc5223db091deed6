import uuid
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, field_validator

from .common import UrlStr, ShortStr, reject_null


class BurialBase(BaseModel):
    grave_id: Optional[uuid.UUID] = None
    reference: Optional[ShortStr] = None
    deceased: UrlStr
    burial_type: Optional[ShortStr] = None
    date_of_burial: Optional[datetime] = None


class BurialCreate(BurialBase):
    pass


class BurialUpdate(BaseModel):
    grave_id: Optional[uuid.UUID] = None
    reference: Optional[ShortStr] = None
    deceased: Optional[UrlStr] = None
    burial_type: Optional[ShortStr] = None
    date_of_burial: Optional[datetime] = None

    @field_validator('deceased', mode='before')
    @classmethod
    def deceased_not_null(cls, value):
        return reject_null(value)


class Burial(BurialBase):
    id: uuid.UUID
    date_created: Optional[datetime] = None
    date_modified: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class PaginatedBurials(BaseModel):
    items: List[Burial]
    total_items: int
    total_pages: int
    page: int
