"""FastAPI application configuration module."""

import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Internal imports
from ..config.environment import IS_PRODUCTION_ENVIRONMENT # Environment must be imported first
from ..config.cors import CORS_CONFIG
from ..utils.logging_config import setup_logging
from ..db import SqlStorage, get_database
from ..importers.base import EventExtractor
from ..importers.openai_extractor import OpenAIEventExtractor
from ..store import EventStore
from .routes import (
    admin,
    health,
    public
)

# Set up logging
setup_logging()
logger = logging.getLogger(__name__)

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    # Startup
    database = None
    if app.state.store is None:
        try:
            database = get_database()
            database.ensure_tables_exist()
            app.state.store = EventStore.load(SqlStorage(database))
            logger.info("Event store initialized successfully")
        except Exception as e:
            logger.error(f"Startup failed: {e}")
            raise
    yield
    # Shutdown
    if database is not None:
        database.dispose()

def create_application(
    store: Optional[EventStore] = None,
    extractor: Optional[EventExtractor] = None
) -> FastAPI:
    """Create and configure the FastAPI application.
    
    Args:
        store: Pre-built store; when omitted one is loaded from the database on startup
        extractor: AI import backend; defaults to the OpenAI extractor
    """
    app = FastAPI(
        title="Housing Events Portal API",
        description="Community housing event listing, registration and administration",
        version="1.0.0",
        docs_url=None if IS_PRODUCTION_ENVIRONMENT else '/api/docs',
        redoc_url=None if IS_PRODUCTION_ENVIRONMENT else '/api/redoc',
        lifespan=lifespan
    )
    app.state.store = store
    app.state.extractor = extractor or OpenAIEventExtractor()

    # Configure CORS
    app.add_middleware(CORSMiddleware, **CORS_CONFIG)

    # Include health check router without prefix
    app.include_router(health.router)

    # Include routers with prefix
    app.include_router(public.router, prefix="/api")
    app.include_router(admin.router, prefix="/api")

    return app

# Create the application instance
app = create_application()
