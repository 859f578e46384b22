"""In-process state for the portal: events, registrations and admin access.

The store is an explicit context object handed to the views and routes.
Every mutation re-serializes the affected collection in full and writes
it through the injected storage port; there is no delta persistence and
no grouping of multi-step changes. Before changing a collection the store
re-reads its stored document, so writes made by another process sharing
the storage (the maintenance scripts) are kept rather than overwritten.
"""

import asyncio
import dataclasses
import json
import logging
from datetime import date
from typing import Any, Dict, Iterable, List, Mapping, Optional

from .config.portal import AdminConfig, RegistrationConfig
from .db.storage import StorageBackend
from .models.event import FieldType, FormField, HousingEvent
from .models.ids import generate_id
from .models.registration import Registration, now_millis
from .utils.event_status import EventStatus, get_event_status

logger = logging.getLogger(__name__)

EVENTS_KEY = 'housing_events_v2'
REGISTRATIONS_KEY = 'housing_registrations_v2'

class EventNotFoundError(KeyError):
    """Raised when an event id does not match any stored event."""
    pass

def sample_events() -> List[HousingEvent]:
    """Events shown on a fresh install."""
    return [
        HousingEvent(
            id='1',
            title='社區中秋聯歡晚會',
            date='2023-09-29',
            time='18:00 - 21:00',
            location='A棟 1F 交誼廳',
            description='歡迎所有住戶參加，現場備有烤肉與茶點，請自備環保餐具。',
            image_url='https://picsum.photos/seed/bbq/600/400',
            deadline='2023-09-25',
            max_participants=50,
            is_open=True,
            form_fields=[
                FormField(name='name', label='姓名', type=FieldType.TEXT, required=True),
                FormField(name='phone', label='聯絡電話', type=FieldType.TEL, required=True),
                FormField(name='email', label='電子信箱', type=FieldType.EMAIL, required=True),
                FormField(name='dietary', label='飲食習慣 (葷/素)', type=FieldType.TEXT, required=False),
            ]
        ),
        HousingEvent(
            id='2',
            title='週末瑜珈工作坊',
            date='2023-10-07',
            time='09:00 - 11:00',
            location='B棟 頂樓花園',
            description='放鬆身心，適合初學者的瑜珈課程，請穿著輕便服裝。',
            image_url='https://picsum.photos/seed/yoga/600/400',
            deadline='2023-10-06',
            max_participants=10,
            is_open=True,
            form_fields=[
                FormField(name='name', label='姓名', type=FieldType.TEXT, required=True),
                FormField(name='phone', label='聯絡電話', type=FieldType.TEL, required=True),
                FormField(name='email', label='電子信箱', type=FieldType.EMAIL, required=True),
                FormField(name='experience', label='瑜珈經驗 (年)', type=FieldType.NUMBER, required=False),
            ]
        ),
    ]

class EventStore:
    """
    Holds the event and registration collections and mirrors them to storage.
    
    Args:
        storage: Persistence port the collections are written through
        events: Initial events, used until storage holds an event document
        registrations: Initial registrations, newest first
        admin_config: Admin password settings
        registration_config: Registration delay settings
    """
    
    def __init__(
        self,
        storage: StorageBackend,
        events: Optional[Iterable[HousingEvent]] = None,
        registrations: Optional[Iterable[Registration]] = None,
        admin_config: Optional[AdminConfig] = None,
        registration_config: Optional[RegistrationConfig] = None
    ):
        self.storage = storage
        self._events: List[HousingEvent] = list(events or [])
        self._registrations: List[Registration] = list(registrations or [])
        self.admin_config = admin_config or AdminConfig()
        self.registration_config = registration_config or RegistrationConfig()
        self.admin_config.validate()
        self.registration_config.validate()
        self.is_admin = False
    
    @classmethod
    def load(cls, storage: StorageBackend, **kwargs: Any) -> 'EventStore':
        """
        Build a store from the documents held in storage.
        
        With no event document the sample events are used. Events missing
        the open/closed flag are treated as open; nothing else is checked.
        """
        saved_events = storage.read(EVENTS_KEY)
        if saved_events:
            events = [HousingEvent.from_dict(e) for e in json.loads(saved_events)]
        else:
            logger.info("No stored events found, starting with sample events")
            events = sample_events()
        
        saved_registrations = storage.read(REGISTRATIONS_KEY)
        registrations = [
            Registration.from_dict(r) for r in json.loads(saved_registrations)
        ] if saved_registrations else []
        
        logger.info(f"Loaded {len(events)} events and {len(registrations)} registrations")
        return cls(storage, events=events, registrations=registrations, **kwargs)
    
    @property
    def events(self) -> List[HousingEvent]:
        return list(self._events)
    
    @property
    def registrations(self) -> List[Registration]:
        return list(self._registrations)
    
    def _reload_events(self) -> None:
        saved = self.storage.read(EVENTS_KEY)
        if saved is not None:
            self._events = [HousingEvent.from_dict(e) for e in json.loads(saved)]
    
    def _reload_registrations(self) -> None:
        saved = self.storage.read(REGISTRATIONS_KEY)
        if saved is not None:
            self._registrations = [Registration.from_dict(r) for r in json.loads(saved)]
    
    def _persist_events(self) -> None:
        payload = json.dumps([e.to_dict() for e in self._events], ensure_ascii=False)
        self.storage.write(EVENTS_KEY, payload)
    
    def _persist_registrations(self) -> None:
        payload = json.dumps([r.to_dict() for r in self._registrations], ensure_ascii=False)
        self.storage.write(REGISTRATIONS_KEY, payload)
    
    # Events
    
    def get_event(self, event_id: str) -> Optional[HousingEvent]:
        return next((e for e in self._events if e.id == event_id), None)
    
    def require_event(self, event_id: str) -> HousingEvent:
        event = self.get_event(event_id)
        if event is None:
            raise EventNotFoundError(event_id)
        return event
    
    def add_event(self, event: HousingEvent) -> HousingEvent:
        self._reload_events()
        self._events.append(event)
        self._persist_events()
        logger.info(f"Added event: {event.title}")
        return event
    
    def update_event(self, event_id: str, updates: Mapping[str, Any]) -> Optional[HousingEvent]:
        """
        Merge updates into the event with the given id.
        
        Args:
            event_id: Identifier of the event to update
            updates: Attribute name -> new value; unspecified attributes are kept
        
        Returns:
            The updated event, or None when no event has that id
        
        Raises:
            ValueError: If updates names an attribute events do not have
        """
        updates = {k: v for k, v in updates.items() if k != 'id'}
        self._reload_events()
        updated = None
        for index, event in enumerate(self._events):
            if event.id == event_id:
                try:
                    updated = dataclasses.replace(event, **updates)
                except TypeError as e:
                    raise ValueError(f"Invalid event update: {e}") from e
                self._events[index] = updated
        
        self._persist_events()
        return updated
    
    def add_events_batch(self, new_events: Iterable[HousingEvent]) -> List[HousingEvent]:
        new_events = list(new_events)
        self._reload_events()
        self._events.extend(new_events)
        self._persist_events()
        logger.info(f"Added {len(new_events)} events in batch")
        return new_events
    
    def delete_event(self, event_id: str) -> bool:
        """Remove one event; its registrations are left in place."""
        self._reload_events()
        before = len(self._events)
        self._events = [e for e in self._events if e.id != event_id]
        self._persist_events()
        return len(self._events) < before
    
    def delete_events_batch(self, event_ids: Iterable[str]) -> int:
        """Remove every event whose id is listed; registrations are left in place."""
        ids = set(event_ids)
        self._reload_events()
        before = len(self._events)
        self._events = [e for e in self._events if e.id not in ids]
        self._persist_events()
        removed = before - len(self._events)
        logger.info(f"Deleted {removed} events in batch")
        return removed
    
    # Registrations
    
    def registrations_for(self, event_id: str) -> List[Registration]:
        return [r for r in self._registrations if r.event_id == event_id]
    
    async def register_user(self, event_id: str, form_data: Mapping[str, str]) -> Registration:
        """
        Record a registration after the confirmation-mail delay.
        
        No confirmation mail is actually sent. Capacity and deadline are
        not checked here; callers decide whether registration is allowed.
        """
        await asyncio.sleep(self.registration_config.delay_seconds)
        self._reload_registrations()
        
        registration = Registration(
            id=generate_id(),
            event_id=event_id,
            form_data=dict(form_data),
            timestamp=now_millis()
        )
        self._registrations.insert(0, registration)
        self._persist_registrations()
        logger.info(f"Registered {registration.id} for event {event_id}")
        return registration
    
    # Status
    
    def get_event_status(self, event: HousingEvent, today: Optional[date] = None) -> EventStatus:
        return get_event_status(event, self._registrations, today)
    
    # Admin access
    
    def login_admin(self, password: str) -> bool:
        if self.admin_config.verify_password(password):
            self.is_admin = True
            return True
        logger.warning("Admin login failed")
        return False
    
    def logout_admin(self) -> None:
        self.is_admin = False
    
    def stats(self) -> Dict[str, int]:
        """Totals shown at the top of the admin dashboard."""
        return {
            'total_events': len(self._events),
            'total_registrations': len(self._registrations),
        }
