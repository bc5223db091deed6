import uuid
from datetime import datetime
from typing import Optional, List
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .common import UrlStr, ShortStr, reject_null


class GraveBase(BaseModel):
    cemetery_id: Optional[uuid.UUID] = None
    reference: Optional[ShortStr] = None
    accommodation: UrlStr
    owner: UrlStr
    interested_parties: List[str] = []
    rulings: List[str] = []
    capacity: int = Field(ge=1, le=999)
    grave_type: Optional[ShortStr] = None
    date_rights: Optional[datetime] = None


class GraveCreate(GraveBase):
    cover_ids: List[uuid.UUID] = []


class GraveUpdate(BaseModel):
    cemetery_id: Optional[uuid.UUID] = None
    reference: Optional[ShortStr] = None
    accommodation: Optional[UrlStr] = None
    owner: Optional[UrlStr] = None
    interested_parties: Optional[List[str]] = None
    rulings: Optional[List[str]] = None
    capacity: Optional[int] = Field(default=None, ge=1, le=999)
    grave_type: Optional[ShortStr] = None
    date_rights: Optional[datetime] = None
    cover_ids: Optional[List[uuid.UUID]] = None

    @field_validator(
        'accommodation', 'owner', 'capacity', 'interested_parties', 'rulings', 'cover_ids',
        mode='before',
    )
    @classmethod
    def required_fields_not_null(cls, value):
        return reject_null(value)


class Grave(GraveBase):
    id: uuid.UUID
    burial_ids: List[uuid.UUID] = []
    cover_ids: List[uuid.UUID] = []
    date_created: Optional[datetime] = None
    date_modified: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)


class PaginatedGraves(BaseModel):
    items: List[Grave]
    total_items: int
    total_pages: int
    page: int
