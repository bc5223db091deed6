import uuid
from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from .base import Base, now_utc
from .graves import grave_covers
from grc.db import relations


class Cover(Base):
    __tablename__ = 'covers'
    __versioned__ = ('reference', 'description', 'cover_type', 'grave_ids')

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    reference = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    cover_type = Column(String(255), nullable=True)
    date_created = Column(DateTime(timezone=True), default=now_utc)
    date_modified = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    graves = relationship("Grave", secondary=grave_covers, back_populates="covers")

    @property
    def grave_ids(self):
        return sorted((g.id for g in self.graves), key=str)

    def add_grave(self, grave):
        return relations.add_peer(self, grave, 'graves', 'covers')

    def remove_grave(self, grave):
        return relations.remove_peer(self, grave, 'graves', 'covers')
