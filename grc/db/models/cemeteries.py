import uuid
from sqlalchemy import Column, String, Text, DateTime, Index
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from .base import Base, now_utc
from grc.db import relations


class Cemetery(Base):
    __tablename__ = 'cemeteries'
    __versioned__ = ('reference', 'name', 'description', 'organization')

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    reference = Column(String(255), nullable=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    organization = Column(String(255), nullable=True)
    date_created = Column(DateTime(timezone=True), default=now_utc)
    date_modified = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    graves = relationship("Grave", back_populates="cemetery")

    __table_args__ = (
        Index('idx_cemeteries_name', 'name'),
    )

    @property
    def grave_ids(self):
        return sorted((g.id for g in self.graves), key=str)

    def add_grave(self, grave):
        return relations.add_child(self, grave, 'graves', 'cemetery')

    def remove_grave(self, grave):
        return relations.remove_child(self, grave, 'graves', 'cemetery')
