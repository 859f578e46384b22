"""Core database functionality and configuration.

This module provides the SQLAlchemy engine and session handling behind
the portal's key/value storage, with SQLite in development and a
pooled PostgreSQL connection in production.
"""

from contextlib import contextmanager
import logging
from pathlib import Path
from typing import Optional, Dict, Any, Generator
import os

from sqlalchemy import create_engine, Engine, inspect
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from ..models import Base
from ..models.storage_entry import StorageEntry  # noqa
from ..config.environment import DATA_DIR, IS_PRODUCTION_ENVIRONMENT

logger = logging.getLogger(__name__)

class DatabaseConfig:
    """Database configuration settings."""
    
    def __init__(
        self,
        sqlite_path: Optional[Path] = None,
        postgres_url: Optional[str] = None,
        echo: bool = False,
        pool_size: int = 3,
        max_overflow: int = 4,
        pool_timeout: int = 30,
        pool_recycle: int = 3600,
        pool_pre_ping: bool = True
    ):
        """
        Initialize database configuration.

        In production environment, DATABASE_URL must be set in environment variables
        or provided explicitly via postgres_url parameter.

        Args:
            sqlite_path: Path to SQLite database file (for development)
            postgres_url: PostgreSQL connection URL (for production)
                        If not provided, will use DATABASE_URL env variable
            echo: Whether to echo SQL statements
            pool_size: Size of the connection pool (permanent connections)
            max_overflow: Maximum number of extra connections to allow temporarily
            pool_timeout: Seconds to wait for an available connection
            pool_recycle: Seconds before connections are recycled
            pool_pre_ping: Whether to ping connections before using them

        Raises:
            ValueError: If in production environment and no database URL is provided
                      either via postgres_url parameter or DATABASE_URL env variable
        """
        if IS_PRODUCTION_ENVIRONMENT and not sqlite_path:
            self.postgres_url = postgres_url or os.environ.get('DATABASE_URL')
            if not self.postgres_url:
                raise ValueError(
                    "Database URL must be provided either via postgres_url parameter "
                    "or DATABASE_URL environment variable when in production environment"
                )
            self.sqlite_path = None
        else:
            self.postgres_url = None
            self.sqlite_path = sqlite_path or DATA_DIR / 'portal.db'
        
        self.echo = echo
        self.pool_size = pool_size
        self.max_overflow = max_overflow
        self.pool_timeout = pool_timeout
        self.pool_recycle = pool_recycle
        self.pool_pre_ping = pool_pre_ping
    
    @property
    def is_sqlite(self) -> bool:
        return self.sqlite_path is not None
    
    @property
    def connection_url(self) -> str:
        """Get the database connection URL based on environment."""
        if self.is_sqlite:
            return f"sqlite:///{self.sqlite_path}"
        if not self.postgres_url:
            raise ValueError("PostgreSQL URL not configured")
        # Hosting platforms still hand out the deprecated postgres:// scheme
        if self.postgres_url.startswith('postgres://'):
            return 'postgresql://' + self.postgres_url[len('postgres://'):]
        return self.postgres_url
    
    def get_engine_args(self) -> Dict[str, Any]:
        """Get SQLAlchemy engine arguments based on configuration."""
        args = {"echo": self.echo}
        
        if self.is_sqlite:
            args["connect_args"] = {"check_same_thread": False}
            args["poolclass"] = StaticPool
        else:
            args.update({
                "pool_size": self.pool_size,
                "max_overflow": self.max_overflow,
                "pool_timeout": self.pool_timeout,
                "pool_recycle": self.pool_recycle,
                "pool_pre_ping": self.pool_pre_ping
            })
        
        return args

class DatabaseError(Exception):
    """Base exception for database-related errors."""
    pass

class ConnectionError(DatabaseError):
    """Raised when there are issues connecting to the database."""
    pass

class SessionError(DatabaseError):
    """Raised when there are issues with database sessions."""
    pass

class Database:
    """Engine and session management for one configured database."""
    
    def __init__(self, config: Optional[DatabaseConfig] = None):
        self.config = config or DatabaseConfig()
        self.engine: Optional[Engine] = None
        self._session_factory = sessionmaker()
        self._tables_checked = False
        
        self._setup_engine()
    
    def _setup_engine(self) -> None:
        """Set up the SQLAlchemy engine."""
        try:
            if self.config.is_sqlite:
                Path(self.config.sqlite_path).parent.mkdir(parents=True, exist_ok=True)
            self.engine = create_engine(
                self.config.connection_url,
                **self.config.get_engine_args()
            )
            self._session_factory.configure(bind=self.engine)
        except Exception as e:
            raise ConnectionError(f"Failed to create database engine: {e}") from e
    
    def ensure_tables_exist(self) -> None:
        """Ensure all required database tables exist."""
        if self._tables_checked:
            return
        if not self.engine:
            raise ConnectionError("Database engine not initialized")
        
        try:
            inspector = inspect(self.engine)
            existing_tables = inspector.get_table_names()
            required_tables = set(Base.metadata.tables)
            
            if not required_tables.issubset(existing_tables):
                logger.info("Some tables missing, initializing database schema")
                Base.metadata.create_all(self.engine)
                logger.info("Database schema initialized successfully")
            
            self._tables_checked = True
            
        except Exception as e:
            raise DatabaseError(f"Failed to verify/create database schema: {e}") from e
    
    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """
        Provide a transactional scope around a series of operations.
        
        Example:
            with db.session() as session:
                entry = session.get(StorageEntry, 'housing_events_v2')
                entry.value = '[]'
                # No need to call commit - it's handled automatically
        
        Raises:
            SessionError: If there are issues with the session
            DatabaseError: If database schema verification fails
        """
        self.ensure_tables_exist()
        
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception as e:
            session.rollback()
            raise SessionError(f"Database session error: {e}") from e
        finally:
            session.close()
    
    def dispose(self) -> None:
        """Release pooled connections."""
        if self.engine is not None:
            self.engine.dispose()

# Lazily created default instance
_database: Optional[Database] = None

def get_database() -> Database:
    """Return the process-wide database built from the default configuration."""
    global _database
    
    if _database is None:
        _database = Database()
    
    return _database
