"""Create/edit event draft with its embedded form-field builder."""

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from ..models.event import FieldType, FormField, HousingEvent, default_form_fields
from ..models.ids import generate_id
from ..models.registration import now_millis

NEW_EVENT_IMAGE_URL = 'https://picsum.photos/seed/new/600/400'
NEW_FIELD_LABEL = '新欄位'
EMPTY_FIELDS_MESSAGE = '目前沒有設定欄位，請新增欄位。'
MISSING_REQUIRED_MESSAGE = '請填寫必填欄位'

class DraftValidationError(ValueError):
    """Raised when a draft lacks the fields needed to save it."""
    pass

def parse_options(text: str) -> List[str]:
    """Split a comma-separated option list into trimmed, non-empty values."""
    return [part.strip() for part in (text or '').split(',') if part.strip()]

@dataclass
class EventDraft:
    """
    Editable copy of an event before it is saved.
    
    New drafts start open with capacity 50, a placeholder image and the
    default name/phone/email fields. No minimum number of form fields is
    enforced.
    """
    id: Optional[str] = None
    title: str = ''
    date: str = ''
    time: str = ''
    location: str = ''
    image_url: str = NEW_EVENT_IMAGE_URL
    description: str = ''
    deadline: str = ''
    max_participants: int = 50
    form_fields: List[FormField] = field(default_factory=default_form_fields)
    is_open: bool = True
    is_editing: bool = False

    @classmethod
    def new(cls) -> 'EventDraft':
        return cls()

    @classmethod
    def from_event(cls, event: HousingEvent) -> 'EventDraft':
        values = {f.name: getattr(event, f.name) for f in dataclasses.fields(HousingEvent)}
        values['form_fields'] = [FormField.from_dict(f.to_dict()) for f in event.form_fields]
        return cls(is_editing=True, **values)

    def update(self, name: str, value: Any) -> None:
        if name not in self._event_attributes():
            raise ValueError(f"Unknown event attribute: {name}")
        setattr(self, name, value)

    # Form builder

    @property
    def empty_state_message(self) -> Optional[str]:
        return EMPTY_FIELDS_MESSAGE if not self.form_fields else None

    def add_field(self, now_ms: Optional[int] = None) -> FormField:
        new_field = FormField(
            name=f"field_{now_ms if now_ms is not None else now_millis()}",
            label=NEW_FIELD_LABEL,
            type=FieldType.TEXT,
            required=False
        )
        self.form_fields = [*self.form_fields, new_field]
        return new_field

    def remove_field(self, index: int) -> None:
        self.form_fields = [f for i, f in enumerate(self.form_fields) if i != index]

    def update_field(self, index: int, **updates: Any) -> FormField:
        if 'type' in updates:
            updates['type'] = FieldType.parse(updates['type'])
        current = self.form_fields[index]
        updated = dataclasses.replace(current, **updates)
        self.form_fields = [updated if i == index else f for i, f in enumerate(self.form_fields)]
        return updated

    def set_field_options(self, index: int, text: str) -> FormField:
        return self.update_field(index, options=parse_options(text))

    # Saving

    @staticmethod
    def _event_attributes() -> List[str]:
        return [f.name for f in dataclasses.fields(HousingEvent)]

    def validate(self) -> None:
        if not self.title or not self.date:
            raise DraftValidationError(MISSING_REQUIRED_MESSAGE)

    def event_values(self) -> Dict[str, Any]:
        """Attribute values to merge into the stored event on edit."""
        return {
            name: getattr(self, name)
            for name in self._event_attributes()
            if name != 'id'
        }

    def to_new_event(self, id_factory: Callable[[], str] = generate_id) -> HousingEvent:
        """A fresh event with a new id; new events always start open."""
        values = self.event_values()
        values['is_open'] = True
        return HousingEvent(id=id_factory(), **values)
