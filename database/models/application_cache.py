import uuid

from sqlalchemy import Column, Text, TIMESTAMP, JSON, Uuid, UniqueConstraint, Index
from sqlalchemy.dialects.postgresql import JSONB

from .base import Base


class ApplicationCache(Base):
    """
    Persisted application cache entries.

    One row per canonical cache key. Writes overwrite the row on key
    conflict; expiry is evaluated by readers against ``expires_at``.
    """
    __tablename__ = 'application_cache'

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    key = Column(Text, nullable=False)
    value = Column(JSON().with_variant(JSONB(), 'postgresql'), nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False)
    expires_at = Column(TIMESTAMP(timezone=True), nullable=True)  # NULL = never expires

    __table_args__ = (
        UniqueConstraint('key', name='uq_application_cache_key'),
        Index('idx_application_cache_expires_at', 'expires_at'),
    )
