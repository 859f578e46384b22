"""Public listing and the per-attempt registration flow."""

import logging
from datetime import date
from enum import Enum
from typing import Dict, List, Optional

from ..models.event import HousingEvent
from ..models.registration import Registration
from ..store import EventStore
from .card import EventCard, build_card

logger = logging.getLogger(__name__)

EMPTY_LISTING_MESSAGE = '目前沒有開放報名的活動。'
SUBMIT_FAILED_ALERT = '報名失敗，請稍後再試'
MISSING_FIELDS_ALERT = '請填寫必填欄位'

def list_public_cards(store: EventStore, today: Optional[date] = None) -> List[EventCard]:
    """Every event as a public card, closed ones included."""
    return [build_card(store, event, today=today) for event in store.events]

class FlowState(str, Enum):
    IDLE = 'IDLE'
    SUBMITTING = 'SUBMITTING'
    SUCCESS = 'SUCCESS'

class RegistrationFlow:
    """
    One registration attempt against one event.
    
    IDLE -> SUBMITTING -> SUCCESS, or back to IDLE with an alert when
    recording fails so the registrant can resubmit. Submitting is inert
    while the event is full, expired or closed. The checks are advisory:
    another process sharing the storage can still exceed capacity.
    """
    
    def __init__(self, store: EventStore, today: Optional[date] = None):
        self.store = store
        self.today = today
        self.selected_event: Optional[HousingEvent] = None
        self.form_data: Dict[str, str] = {}
        self.state = FlowState.IDLE
        self.alert: Optional[str] = None
        self.registration: Optional[Registration] = None
    
    def open(self, event: HousingEvent) -> None:
        self.selected_event = event
        self.form_data = {}
        self.state = FlowState.IDLE
        self.alert = None
        self.registration = None
    
    def set_value(self, name: str, value: str) -> None:
        self.form_data[name] = value
    
    def missing_required_fields(self) -> List[str]:
        if self.selected_event is None:
            return []
        return [
            f.name for f in self.selected_event.form_fields
            if f.required and not (self.form_data.get(f.name) or '').strip()
        ]
    
    @property
    def is_blocked(self) -> bool:
        if self.selected_event is None:
            return True
        return build_card(self.store, self.selected_event, today=self.today).is_disabled
    
    @property
    def confirmation_email(self) -> Optional[str]:
        """Address shown in the success message; no mail is sent."""
        return self.form_data.get('email')
    
    async def submit(self) -> bool:
        """
        Submit the form.
        
        Returns:
            bool: True once the registration is recorded
        """
        if self.state != FlowState.IDLE or self.is_blocked:
            return False
        
        missing = self.missing_required_fields()
        if missing:
            self.alert = MISSING_FIELDS_ALERT
            return False
        
        self.state = FlowState.SUBMITTING
        self.alert = None
        try:
            self.registration = await self.store.register_user(
                self.selected_event.id, self.form_data
            )
        except Exception as e:
            logger.error(f"Registration for event {self.selected_event.id} failed: {e}")
            self.alert = SUBMIT_FAILED_ALERT
            self.state = FlowState.IDLE
            return False
        
        self.state = FlowState.SUCCESS
        return True
    
    def close_and_reset(self) -> None:
        self.selected_event = None
        self.state = FlowState.IDLE
        self.form_data = {}
        self.alert = None
