"""Admin router module."""

import logging
from typing import Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from ...config.external_services.openai import MissingCredentialError
from ...importers.base import EventImportError
from ...store import EventNotFoundError, EventStore
from ...utils.csv_export import EmptyExportError
from ...views.admin import (
    IMPORT_FAILED_ALERT,
    LOGIN_ERROR_MESSAGE,
    NO_EVENTS_MESSAGE,
    AdminDashboard,
    EventFilter,
)
from ...views.card import build_card
from ...views.form_builder import DraftValidationError, EventDraft
from ..dependencies import get_dashboard, get_store
from ..schemas import EventIn, EventUpdate, ImportIn, LoginIn

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])

def _apply_to_draft(draft: EventDraft, values: dict) -> EventDraft:
    for name, value in values.items():
        if name == 'form_fields':
            value = [f.to_model() for f in value]
        draft.update(name, value)
    return draft

def _save(dashboard: AdminDashboard, draft: EventDraft):
    try:
        return dashboard.save_draft(draft)
    except DraftValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))

@router.post("/login")
async def login(payload: LoginIn, store: EventStore = Depends(get_store)):
    """
    Check a password before the client starts sending it as Basic credentials.
    
    Nothing is remembered server-side; every admin route checks the
    credentials of its own request.
    """
    if not store.admin_config.verify_password(payload.password):
        logger.warning("Admin login failed")
        raise HTTPException(status_code=401, detail=LOGIN_ERROR_MESSAGE)
    return {"status": "success", "isAdmin": True}

@router.get("/stats")
async def stats(dashboard: AdminDashboard = Depends(get_dashboard)):
    return dashboard.stats()

@router.get("/events")
async def list_events(
    filter: EventFilter = Query(EventFilter.ALL),
    dashboard: AdminDashboard = Depends(get_dashboard)
):
    """Events table rows for the selected filter."""
    dashboard.event_filter = filter
    rows = dashboard.event_rows()
    return {
        "filter": filter.value,
        "events": [
            {**row.to_dict(), "card": build_card(dashboard.store, row.event, is_admin_view=True).to_dict()}
            for row in rows
        ],
        "pastCount": len(dashboard.past_events()),
        "message": NO_EVENTS_MESSAGE if not rows else None
    }

@router.post("/events", status_code=201)
async def create_event(payload: EventIn, dashboard: AdminDashboard = Depends(get_dashboard)):
    values = payload.model_dump(exclude_unset=True)
    if values.get('image_url') is None:
        values.pop('image_url', None)
    if values.get('form_fields') is None:
        values.pop('form_fields', None)
    else:
        values['form_fields'] = payload.form_fields
    draft = _apply_to_draft(dashboard.open_create_draft(), values)
    return _save(dashboard, draft).to_dict()

@router.patch("/events/{event_id}")
async def update_event(
    event_id: str,
    payload: EventUpdate,
    dashboard: AdminDashboard = Depends(get_dashboard)
):
    try:
        draft = dashboard.open_edit_draft(event_id)
    except EventNotFoundError:
        raise HTTPException(status_code=404, detail="Event not found")
    
    values = {k: v for k, v in payload.model_dump(exclude_unset=True).items() if v is not None}
    if 'form_fields' in values:
        values['form_fields'] = payload.form_fields
    return _save(dashboard, _apply_to_draft(draft, values)).to_dict()

@router.post("/events/{event_id}/toggle")
async def toggle_event(event_id: str, dashboard: AdminDashboard = Depends(get_dashboard)):
    """Flip the manual open/closed flag."""
    try:
        return dashboard.toggle_status(event_id).to_dict()
    except EventNotFoundError:
        raise HTTPException(status_code=404, detail="Event not found")

@router.delete("/events/{event_id}")
async def delete_event(event_id: str, dashboard: AdminDashboard = Depends(get_dashboard)):
    """Delete one event; its registrations stay."""
    if not dashboard.delete_event(event_id):
        raise HTTPException(status_code=404, detail="Event not found")
    return {"status": "success", "deleted": event_id}

@router.post("/events/purge-past")
async def purge_past_events(dashboard: AdminDashboard = Depends(get_dashboard)):
    """Delete every event dated before today."""
    removed = dashboard.bulk_delete_past()
    return {"status": "success", "deleted": removed}

@router.post("/events/import", status_code=201)
async def import_events(payload: ImportIn, dashboard: AdminDashboard = Depends(get_dashboard)):
    """Extract events from free text and append them."""
    if not payload.text.strip():
        raise HTTPException(status_code=400, detail="Import text must not be empty")
    try:
        events = await dashboard.import_from_text(payload.text)
    except MissingCredentialError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except EventImportError as e:
        logger.error(f"AI import failed: {e}")
        raise HTTPException(status_code=502, detail=IMPORT_FAILED_ALERT)
    return {"imported": len(events), "events": [e.to_dict() for e in events]}

@router.get("/registrations")
async def list_registrations(
    event_id: Optional[str] = Query(None),
    dashboard: AdminDashboard = Depends(get_dashboard)
):
    dashboard.view_registrations(event_id)
    rows = dashboard.registration_rows()
    return {
        "heading": dashboard.registrations_heading,
        "count": len(rows),
        "registrations": [row.to_dict() for row in rows],
        "message": dashboard.empty_registrations_message if not rows else None
    }

@router.get("/registrations/export")
async def export_registrations(
    event_id: Optional[str] = Query(None),
    dashboard: AdminDashboard = Depends(get_dashboard)
):
    """CSV download of the (optionally filtered) registrations."""
    dashboard.view_registrations(event_id)
    try:
        filename, content = dashboard.export_csv()
    except EmptyExportError as e:
        raise HTTPException(status_code=400, detail=str(e))
    
    return Response(
        content=content.encode('utf-8'),
        media_type='text/csv; charset=utf-8',
        headers={"Content-Disposition": f"attachment; filename*=UTF-8''{quote(filename)}"}
    )
