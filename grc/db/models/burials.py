import uuid
from sqlalchemy import Column, String, DateTime, ForeignKey, Index
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship
from .base import Base, now_utc


class Burial(Base):
    __tablename__ = 'burials'
    __versioned__ = ('grave_id', 'reference', 'deceased', 'burial_type', 'date_of_burial')

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    grave_id = Column(UUID(as_uuid=True), ForeignKey('graves.id'), nullable=True)
    reference = Column(String(255), nullable=True)
    deceased = Column(String(255), nullable=False)
    burial_type = Column(String(255), nullable=True)
    date_of_burial = Column(DateTime(timezone=True), nullable=True)
    date_created = Column(DateTime(timezone=True), default=now_utc)
    date_modified = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    grave = relationship("Grave", back_populates="burials")

    __table_args__ = (
        Index('idx_burials_grave_id', 'grave_id'),
    )

    def assign_to(self, grave):
        """Place this burial in ``grave``, or detach it when None."""
        if grave is None:
            if self.grave is not None:
                self.grave.remove_burial(self)
            return self
        grave.add_burial(self)
        return self
