"""Shared fixtures for the portal tests."""

from datetime import date, timedelta
from typing import Any, Dict, List

import pytest

from housing_portal.config.portal import AdminConfig, RegistrationConfig
from housing_portal.db import InMemoryStorage
from housing_portal.importers.base import EventExtractor, EventImportError
from housing_portal.models import FieldType, FormField, HousingEvent, Registration
from housing_portal.store import EventStore

TODAY = date(2023, 9, 20)

def make_event(event_id: str = 'evt1', **overrides: Any) -> HousingEvent:
    values = dict(
        id=event_id,
        title=f'Event {event_id}',
        date='2023-09-29',
        time='18:00 - 21:00',
        location='A棟 1F 交誼廳',
        image_url='https://picsum.photos/seed/test/600/400',
        description='Test event',
        deadline='2023-09-25',
        max_participants=10,
        form_fields=[
            FormField(name='name', label='姓名', type=FieldType.TEXT, required=True),
            FormField(name='email', label='電子信箱', type=FieldType.EMAIL, required=False),
        ],
        is_open=True,
    )
    values.update(overrides)
    return HousingEvent(**values)

def make_registration(event_id: str, reg_id: str = 'reg1', **form_data: str) -> Registration:
    return Registration(
        id=reg_id,
        event_id=event_id,
        form_data=form_data or {'name': 'Alice'},
        timestamp=1695196800000,
    )

def days_from_today(days: int) -> str:
    return (date.today() + timedelta(days=days)).isoformat()

class FakeExtractor(EventExtractor):
    """Returns canned items, or raises the configured error."""
    
    def __init__(self, items: List[Dict[str, Any]] = None, error: Exception = None):
        self.items = items or []
        self.error = error
        self.calls: List[str] = []
    
    def name(self) -> str:
        return 'fake'
    
    async def extract_events(self, text: str) -> List[Dict[str, Any]]:
        self.calls.append(text)
        if self.error is not None:
            raise self.error
        return self.items

class FailingStorage(InMemoryStorage):
    """Storage whose writes to one key always fail."""
    
    def __init__(self, failing_key: str):
        super().__init__()
        self.failing_key = failing_key
    
    def write(self, key: str, value: str) -> None:
        if key == self.failing_key:
            raise OSError("disk full")
        super().write(key, value)

@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()

@pytest.fixture
def store(storage) -> EventStore:
    return EventStore(
        storage,
        events=[],
        admin_config=AdminConfig(password='admin'),
        registration_config=RegistrationConfig(delay_seconds=0),
    )

@pytest.fixture
def fake_extractor() -> FakeExtractor:
    return FakeExtractor(items=[{
        'title': '社區電影夜',
        'date': '2023-10-13',
        'location': '2F 交誼廳',
        'description': '一起看電影',
        'maxParticipants': 30,
        'customFields': [{'name': 'genre', 'label': '想看的電影類型', 'type': 'text'}],
    }])
