"""Database package initialization.

This module exposes the public interface of the database package.
"""

from .db_core import (
    Database,
    DatabaseConfig,
    DatabaseError,
    ConnectionError,
    SessionError,
    get_database
)
from .storage import StorageBackend, InMemoryStorage, SqlStorage

__all__ = [
    # Core database classes
    'Database',
    'DatabaseConfig',
    
    # Exceptions
    'DatabaseError',
    'ConnectionError',
    'SessionError',
    
    # Default instance
    'get_database',
    
    # Storage port
    'StorageBackend',
    'InMemoryStorage',
    'SqlStorage',
]
