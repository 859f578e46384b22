"""Model for key/value documents persisted by the portal."""

from datetime import datetime, timezone
from sqlalchemy import Column, String, Text, DateTime

from .base import Base

def _utcnow() -> datetime:
    return datetime.now(timezone.utc)

class StorageEntry(Base):
    """
    One serialized document stored under a fixed key.
    
    The portal keeps its whole state as two documents (events and
    registrations), each overwritten wholesale on every change.
    
    Fields:
        key: Document key (e.g. 'housing_events_v2')
        value: Serialized JSON document
        updated_at: When the document was last written
    """
    __tablename__ = 'storage_entries'
    
    key = Column(String(128), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow)
