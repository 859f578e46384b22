"""Admin dashboard: event management, registrations and exports."""

import logging
import math
from dataclasses import dataclass
from datetime import date, tzinfo
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from ..importers.ai_import import import_events_from_text
from ..importers.base import EventExtractor
from ..models.event import HousingEvent
from ..models.registration import Registration
from ..store import EventStore
from ..utils.csv_export import (
    UNKNOWN_EVENT_TITLE,
    export_filename,
    format_timestamp,
    registration_rows,
    rows_to_csv,
)
from ..utils.dates import is_past_event, is_upcoming_event
from ..utils.event_status import EventStatus
from .form_builder import EventDraft

logger = logging.getLogger(__name__)

LOGIN_ERROR_MESSAGE = '密碼錯誤，請重試。'
IMPORT_FAILED_ALERT = '生成失敗，請檢查 API Key 或重試。'
NO_EVENTS_MESSAGE = '沒有符合條件的活動。'

BASIC_FORM_KEYS = ('name', 'phone', 'email')

class EventFilter(str, Enum):
    ALL = 'all'
    UPCOMING = 'upcoming'
    PAST = 'past'

def fill_percent(event: HousingEvent, status: EventStatus) -> int:
    """Share of capacity taken, rounded half up; zero capacity reads as 100."""
    if event.max_participants <= 0:
        return 100
    taken = event.max_participants - status.remaining_spots
    return int(math.floor(taken / event.max_participants * 100 + 0.5))

@dataclass
class EventRow:
    """One line of the admin events table."""
    event: HousingEvent
    status: EventStatus
    is_past: bool

    @property
    def taken(self) -> int:
        return self.event.max_participants - self.status.remaining_spots

    @property
    def percent(self) -> int:
        return fill_percent(self.event, self.status)

    @property
    def tags(self) -> List[str]:
        tags = []
        if self.is_past:
            tags.append('活動已結束')
        if self.status.is_expired and not self.is_past:
            tags.append('已過截止日')
        if self.status.is_closed:
            tags.append('手動暫停')
        return tags

    def to_dict(self) -> Dict[str, Any]:
        return {
            'event': self.event.to_dict(),
            'status': self.status.to_dict(),
            'isPast': self.is_past,
            'taken': self.taken,
            'percent': self.percent,
            'tags': self.tags,
        }

@dataclass
class RegistrationRow:
    """One line of the admin registrations table."""
    registration: Registration
    event_title: str
    time_text: str

    @property
    def name(self) -> str:
        return self.registration.form_data.get('name', '')

    @property
    def contact(self) -> Dict[str, str]:
        data = self.registration.form_data
        return {'phone': data.get('phone', ''), 'email': data.get('email', '')}

    @property
    def other_info(self) -> str:
        return ', '.join(
            f"{key}: {value}"
            for key, value in self.registration.form_data.items()
            if key not in BASIC_FORM_KEYS
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'registration': self.registration.to_dict(),
            'eventTitle': self.event_title,
            'name': self.name,
            'contact': self.contact,
            'otherInfo': self.other_info,
            'time': self.time_text,
        }

class AdminDashboard:
    """
    Admin view over an EventStore.
    
    Holds the view state of one dashboard session: the event filter and
    the event whose registrations are being inspected.
    """
    
    def __init__(
        self,
        store: EventStore,
        extractor: Optional[EventExtractor] = None,
        tz: Optional[tzinfo] = None
    ):
        self.store = store
        self.extractor = extractor
        self.tz = tz
        self.event_filter = EventFilter.ALL
        self.filter_event_id: Optional[str] = None
        self.login_error = False
    
    # Access
    
    @property
    def is_admin(self) -> bool:
        return self.store.is_admin
    
    def login(self, password: str) -> bool:
        ok = self.store.login_admin(password)
        self.login_error = not ok
        return ok
    
    def logout(self) -> None:
        self.store.logout_admin()
    
    # Events tab
    
    def past_events(self, today: Optional[date] = None) -> List[HousingEvent]:
        return [e for e in self.store.events if is_past_event(e.date, today)]
    
    def filtered_events(self, today: Optional[date] = None) -> List[HousingEvent]:
        if self.event_filter == EventFilter.UPCOMING:
            return [e for e in self.store.events if is_upcoming_event(e.date, today)]
        if self.event_filter == EventFilter.PAST:
            return self.past_events(today)
        return self.store.events
    
    def event_rows(self, today: Optional[date] = None) -> List[EventRow]:
        return [
            EventRow(
                event=event,
                status=self.store.get_event_status(event, today),
                is_past=is_past_event(event.date, today)
            )
            for event in self.filtered_events(today)
        ]
    
    def bulk_delete_past(self, today: Optional[date] = None) -> int:
        """Delete every past event whatever the current filter shows."""
        ids = [e.id for e in self.past_events(today)]
        removed = self.store.delete_events_batch(ids)
        if self.event_filter == EventFilter.PAST:
            self.event_filter = EventFilter.ALL
        logger.info(f"Bulk deleted {removed} past events")
        return removed
    
    def toggle_status(self, event_id: str) -> HousingEvent:
        event = self.store.require_event(event_id)
        return self.store.update_event(event_id, {'is_open': not event.is_open})
    
    def delete_event(self, event_id: str) -> bool:
        return self.store.delete_event(event_id)
    
    def open_create_draft(self) -> EventDraft:
        return EventDraft.new()
    
    def open_edit_draft(self, event_id: str) -> EventDraft:
        return EventDraft.from_event(self.store.require_event(event_id))
    
    def save_draft(self, draft: EventDraft) -> HousingEvent:
        """
        Save a create or edit draft.
        
        Raises:
            DraftValidationError: If title or date is missing
        """
        draft.validate()
        if draft.is_editing and draft.id:
            return self.store.update_event(draft.id, draft.event_values())
        return self.store.add_event(draft.to_new_event())
    
    async def import_from_text(self, text: str) -> List[HousingEvent]:
        """
        Run the AI import.
        
        Raises:
            ValueError: If no extractor is configured or text is blank
            MissingCredentialError: If the extractor has no credential
            EventImportError: If extraction fails
        """
        if self.extractor is None:
            raise ValueError("No event extractor configured")
        return await import_events_from_text(text, self.extractor, self.store)
    
    # Registrations tab
    
    def view_registrations(self, event_id: Optional[str]) -> None:
        self.filter_event_id = event_id
    
    def clear_registration_filter(self) -> None:
        self.filter_event_id = None
    
    @property
    def filtered_event(self) -> Optional[HousingEvent]:
        if not self.filter_event_id:
            return None
        return self.store.get_event(self.filter_event_id)
    
    def filtered_registrations(self) -> List[Registration]:
        if self.filter_event_id:
            return self.store.registrations_for(self.filter_event_id)
        return self.store.registrations
    
    def registration_rows(self) -> List[RegistrationRow]:
        titles = {e.id: e.title for e in self.store.events}
        return [
            RegistrationRow(
                registration=reg,
                event_title=titles.get(reg.event_id, UNKNOWN_EVENT_TITLE),
                time_text=format_timestamp(reg.timestamp, self.tz)
            )
            for reg in self.filtered_registrations()
        ]
    
    @property
    def registrations_heading(self) -> str:
        event = self.filtered_event
        if self.filter_event_id and event:
            return f"{event.title} - 報名名單"
        return '所有報名資料'
    
    @property
    def empty_registrations_message(self) -> str:
        if self.filter_event_id:
            return '此活動目前尚無報名資料。'
        return '目前尚無任何報名資料。'
    
    def export_csv(self, today: Optional[date] = None) -> Tuple[str, str]:
        """
        Export the currently filtered registrations.
        
        Returns:
            Tuple of (filename, CSV text with byte-order mark)
        
        Raises:
            EmptyExportError: If there is nothing to export
        """
        rows = registration_rows(self.filtered_registrations(), self.store.events, self.tz)
        content = rows_to_csv(rows)
        on_day = today.isoformat() if today else None
        return export_filename(self.filtered_event, on_day), content
    
    def stats(self) -> Dict[str, int]:
        return self.store.stats()
