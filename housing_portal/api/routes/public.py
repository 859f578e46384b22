"""Public listing and registration routes."""

import logging
from fastapi import APIRouter, Depends, HTTPException

from ...store import EventStore
from ...views.card import build_card
from ...views.public import (
    EMPTY_LISTING_MESSAGE,
    FlowState,
    RegistrationFlow,
    list_public_cards,
)
from ..dependencies import get_store
from ..schemas import RegistrationIn

logger = logging.getLogger(__name__)

router = APIRouter(tags=["public"])

@router.get("/events")
async def list_events(store: EventStore = Depends(get_store)):
    """All events as public cards."""
    cards = list_public_cards(store)
    return {
        "events": [card.to_dict() for card in cards],
        "message": EMPTY_LISTING_MESSAGE if not cards else None
    }

@router.get("/events/{event_id}")
async def get_event(event_id: str, store: EventStore = Depends(get_store)):
    """Get a single event card by ID."""
    event = store.get_event(event_id)
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    return build_card(store, event).to_dict()

@router.post("/events/{event_id}/registrations", status_code=201)
async def register(
    event_id: str,
    payload: RegistrationIn,
    store: EventStore = Depends(get_store)
):
    """
    Register for an event.
    
    Refused while the event is full, expired or closed. The check is
    advisory: concurrent submissions are not serialized.
    """
    event = store.get_event(event_id)
    if not event:
        raise HTTPException(status_code=404, detail="Event not found")
    
    flow = RegistrationFlow(store)
    flow.open(event)
    if flow.is_blocked:
        card = build_card(store, event)
        raise HTTPException(status_code=409, detail=card.button_label)
    
    for name, value in payload.form_data.items():
        flow.set_value(name, value)
    
    missing = flow.missing_required_fields()
    if missing:
        raise HTTPException(
            status_code=422,
            detail={"message": "請填寫必填欄位", "missingFields": missing}
        )
    
    if not await flow.submit():
        raise HTTPException(status_code=500, detail=flow.alert)
    
    return {
        "state": FlowState.SUCCESS.value,
        "registration": flow.registration.to_dict(),
        "confirmationEmail": flow.confirmation_email
    }
