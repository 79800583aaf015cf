"""Sync models — audit log of catalog sync phases."""

from sqlalchemy import Column, Index, Integer, String, Text

from ..database import UTCDateTime
from .base import Base


class SyncLog(Base):
    """One row per sync phase. Never deleted."""

    __tablename__ = "api_sync_logs"
    id = Column(String(36), primary_key=True)
    sync_type = Column(String(50), nullable=False)
    status = Column(String(20), nullable=False)
    records_processed = Column(Integer, default=0)
    error_message = Column(Text)
    started_at = Column(UTCDateTime, nullable=False)
    completed_at = Column(UTCDateTime)

    __table_args__ = (Index("ix_sync_type_time", "sync_type", "started_at"),)
