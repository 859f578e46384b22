"""Event and form-field model definitions."""

from enum import Enum
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field

class FieldType(str, Enum):
    """Input kinds a registration form field can take."""
    TEXT = 'text'
    TEL = 'tel'
    EMAIL = 'email'
    NUMBER = 'number'
    SELECT = 'select'

    @classmethod
    def parse(cls, value: Any) -> 'FieldType':
        """Lenient conversion; unknown kinds fall back to text."""
        try:
            return cls(value)
        except ValueError:
            return cls.TEXT

@dataclass
class FormField:
    """
    Admin-configured description of one input collected from registrants.
    
    Fields:
        name: Data key used in the registration's form data (e.g. 'dietary')
        label: Text shown next to the input
        type: Input kind
        required: Whether the registrant must fill it in
        options: Choice values, only meaningful for select fields
    """
    name: str
    label: str
    type: FieldType = FieldType.TEXT
    required: bool = False
    options: Optional[List[str]] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'name': self.name,
            'label': self.label,
            'type': self.type.value,
            'required': self.required,
        }
        if self.options is not None:
            data['options'] = list(self.options)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'FormField':
        options = data.get('options')
        return cls(
            name=data.get('name', ''),
            label=data.get('label', ''),
            type=FieldType.parse(data.get('type', 'text')),
            required=bool(data.get('required', False)),
            options=list(options) if options is not None else None,
        )

# Fields every event collects unless the admin removes them
DEFAULT_FORM_FIELDS = (
    FormField(name='name', label='姓名', type=FieldType.TEXT, required=True),
    FormField(name='phone', label='聯絡電話', type=FieldType.TEL, required=True),
    FormField(name='email', label='電子信箱', type=FieldType.EMAIL, required=True),
)

def default_form_fields() -> List[FormField]:
    """Fresh copies of the default name/phone/email fields."""
    return [FormField.from_dict(f.to_dict()) for f in DEFAULT_FORM_FIELDS]

@dataclass
class HousingEvent:
    """
    A schedulable community activity open for registration.
    
    Fields:
        id: Random identifier assigned on creation
        title: Event title
        date: Event day in YYYY-MM-DD format
        time: Free-form time range (e.g. '18:00 - 21:00')
        location: Where the event takes place
        image_url: Cover image reference
        description: Event description
        deadline: Last registration day in YYYY-MM-DD format
        max_participants: Capacity, a non-negative integer
        form_fields: Ordered inputs collected from registrants
        is_open: Manual registration toggle
    """
    id: str
    title: str
    date: str = ''
    time: str = ''
    location: str = ''
    image_url: str = ''
    description: str = ''
    deadline: str = ''
    max_participants: int = 50
    form_fields: List[FormField] = field(default_factory=list)
    is_open: bool = True

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the persisted JSON layout."""
        return {
            'id': self.id,
            'title': self.title,
            'date': self.date,
            'time': self.time,
            'location': self.location,
            'imageUrl': self.image_url,
            'description': self.description,
            'deadline': self.deadline,
            'maxParticipants': self.max_participants,
            'formFields': [f.to_dict() for f in self.form_fields],
            'isOpen': self.is_open,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'HousingEvent':
        """Build an event from its persisted JSON layout.
        
        Absent fields take the dataclass defaults; a missing 'isOpen'
        flag is treated as open.
        """
        is_open = data.get('isOpen')
        return cls(
            id=data.get('id', ''),
            title=data.get('title', ''),
            date=data.get('date', ''),
            time=data.get('time', ''),
            location=data.get('location', ''),
            image_url=data.get('imageUrl', ''),
            description=data.get('description', ''),
            deadline=data.get('deadline', ''),
            max_participants=data.get('maxParticipants', 50),
            form_fields=[FormField.from_dict(f) for f in data.get('formFields') or []],
            is_open=True if is_open is None else bool(is_open),
        )

    def __str__(self) -> str:
        return f"HousingEvent(id={self.id}, title={self.title}, date={self.date})"
