import uuid
from sqlalchemy import Column, String, DateTime, Integer, ForeignKey, Index, Table, CheckConstraint
from sqlalchemy.dialects.postgresql import UUID, JSONB
from sqlalchemy.orm import relationship
from .base import Base, now_utc
from grc.db import relations


# Owned by Cover; Grave.covers is the inverse view.
grave_covers = Table(
    'grave_covers',
    Base.metadata,
    Column('cover_id', UUID(as_uuid=True), ForeignKey('covers.id', ondelete='CASCADE'), primary_key=True),
    Column('grave_id', UUID(as_uuid=True), ForeignKey('graves.id', ondelete='CASCADE'), primary_key=True),
)


class Grave(Base):
    __tablename__ = 'graves'
    __versioned__ = (
        'cemetery_id',
        'reference',
        'accommodation',
        'owner',
        'interested_parties',
        'rulings',
        'capacity',
        'grave_type',
        'date_rights',
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    cemetery_id = Column(UUID(as_uuid=True), ForeignKey('cemeteries.id'), nullable=True)
    reference = Column(String(255), nullable=True)
    accommodation = Column(String(255), nullable=False)
    owner = Column(String(255), nullable=False)
    interested_parties = Column(JSONB, nullable=False, default=list)
    rulings = Column(JSONB, nullable=False, default=list)
    capacity = Column(Integer, nullable=False)
    grave_type = Column(String(255), nullable=True)
    # Moment the rights on this grave expire
    date_rights = Column(DateTime(timezone=True), nullable=True)
    date_created = Column(DateTime(timezone=True), default=now_utc)
    date_modified = Column(DateTime(timezone=True), default=now_utc, onupdate=now_utc)

    cemetery = relationship("Cemetery", back_populates="graves")
    burials = relationship("Burial", back_populates="grave")
    covers = relationship("Cover", secondary=grave_covers, back_populates="graves")

    __table_args__ = (
        Index('idx_graves_cemetery_id', 'cemetery_id'),
        Index('idx_graves_reference', 'reference'),
        CheckConstraint('capacity > 0', name='ck_graves_capacity_positive'),
    )

    def __init__(self, **kwargs):
        kwargs.setdefault('interested_parties', [])
        kwargs.setdefault('rulings', [])
        super().__init__(**kwargs)

    @property
    def burial_ids(self):
        return sorted((b.id for b in self.burials), key=str)

    @property
    def cover_ids(self):
        return sorted((c.id for c in self.covers), key=str)

    def add_burial(self, burial):
        return relations.add_child(self, burial, 'burials', 'grave')

    def remove_burial(self, burial):
        return relations.remove_child(self, burial, 'burials', 'grave')

    def add_cover(self, cover):
        return relations.add_peer(self, cover, 'covers', 'graves')

    def remove_cover(self, cover):
        return relations.remove_peer(self, cover, 'covers', 'graves')

    def assign_to(self, cemetery):
        """Move this grave to ``cemetery``, or out of any cemetery when None."""
        if cemetery is None:
            if self.cemetery is not None:
                self.cemetery.remove_grave(self)
            return self
        cemetery.add_grave(self)
        return self
