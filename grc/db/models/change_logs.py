import uuid
from sqlalchemy import Column, String, Text, DateTime, Integer, Index
from sqlalchemy.dialects.postgresql import UUID, JSONB
from .base import Base, now_utc


class ChangeLog(Base):
    """Append-only, field-level history of an entity.

    No foreign key on ``object_id`` so history outlives the entity.
    """
    __tablename__ = 'change_logs'
    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    object_class = Column(String(64), nullable=False)
    object_id = Column(UUID(as_uuid=True), nullable=False)
    action = Column(String(16), nullable=False)
    version = Column(Integer, nullable=False)
    field = Column(String(64), nullable=True)
    old_value = Column(JSONB(none_as_null=True), nullable=True)
    new_value = Column(JSONB(none_as_null=True), nullable=True)
    actor = Column(Text, nullable=False)
    logged_at = Column(DateTime(timezone=True), default=now_utc, nullable=False)

    __table_args__ = (
        Index('ix_change_logs_object', 'object_class', 'object_id', 'version'),
        Index('ix_change_logs_logged_at', 'logged_at'),
    )
