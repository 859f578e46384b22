"""Key/value persistence port used by the event store.

The store keeps its whole state as a handful of serialized documents,
each read once on startup and overwritten wholesale on every change.
"""

from abc import ABC, abstractmethod
import logging
from typing import Dict, Optional

from ..models.storage_entry import StorageEntry
from .db_core import Database

logger = logging.getLogger(__name__)

class StorageBackend(ABC):
    """
    Base interface for document storage.
    
    Required Methods:
        read(key) -> Optional[str]: Return the stored document or None
        write(key, value): Replace the stored document
    """
    
    @abstractmethod
    def read(self, key: str) -> Optional[str]:
        """
        Return the document stored under key.
        
        Returns:
            Optional[str]: The serialized document, or None if nothing is stored
        """
        pass
    
    @abstractmethod
    def write(self, key: str, value: str) -> None:
        """Overwrite the document stored under key."""
        pass

class InMemoryStorage(StorageBackend):
    """Storage kept in a plain dict, for tests and throwaway sessions."""
    
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.entries: Dict[str, str] = dict(initial or {})
    
    def read(self, key: str) -> Optional[str]:
        return self.entries.get(key)
    
    def write(self, key: str, value: str) -> None:
        self.entries[key] = value

class SqlStorage(StorageBackend):
    """Storage backed by the storage_entries table."""
    
    def __init__(self, database: Database):
        self.database = database
    
    def read(self, key: str) -> Optional[str]:
        with self.database.session() as session:
            entry = session.get(StorageEntry, key)
            return entry.value if entry else None
    
    def write(self, key: str, value: str) -> None:
        with self.database.session() as session:
            entry = session.get(StorageEntry, key)
            if entry is None:
                session.add(StorageEntry(key=key, value=value))
            else:
                entry.value = value
        logger.debug(f"Wrote {len(value)} characters to '{key}'")
