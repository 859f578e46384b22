"""Request dependencies shared by the routers."""

from typing import Optional
from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from ..importers.base import EventExtractor
from ..store import EventStore
from ..views.admin import AdminDashboard

# Admin requests carry the password on every call; the username is ignored
admin_credentials = HTTPBasic(auto_error=False, realm="admin")

def get_store(request: Request) -> EventStore:
    store = getattr(request.app.state, 'store', None)
    if store is None:
        raise HTTPException(status_code=503, detail="Store not initialized")
    return store

def get_extractor(request: Request) -> Optional[EventExtractor]:
    return getattr(request.app.state, 'extractor', None)

def require_admin(
    credentials: Optional[HTTPBasicCredentials] = Depends(admin_credentials),
    store: EventStore = Depends(get_store)
) -> EventStore:
    """Check the admin password sent with this request."""
    if credentials is None or not store.admin_config.verify_password(credentials.password):
        raise HTTPException(
            status_code=401,
            detail="Admin login required",
            headers={"WWW-Authenticate": "Basic"}
        )
    return store

def get_dashboard(
    store: EventStore = Depends(require_admin),
    extractor: Optional[EventExtractor] = Depends(get_extractor)
) -> AdminDashboard:
    return AdminDashboard(store, extractor)
