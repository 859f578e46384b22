"""Registration model definition."""

import time
from typing import Any, Dict
from dataclasses import dataclass, field

def now_millis() -> int:
    """Current time as epoch milliseconds."""
    return int(time.time() * 1000)

@dataclass
class Registration:
    """
    One submitted response tying a participant's answers to one event.
    
    The event reference is a plain key: deleting the event leaves the
    registration in place.
    
    Fields:
        id: Random identifier assigned on creation
        event_id: Identifier of the event registered for
        form_data: Field name -> submitted text value
        timestamp: Creation time in epoch milliseconds
    """
    id: str
    event_id: str
    form_data: Dict[str, str] = field(default_factory=dict)
    timestamp: int = field(default_factory=now_millis)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the persisted JSON layout."""
        return {
            'id': self.id,
            'eventId': self.event_id,
            'formData': dict(self.form_data),
            'timestamp': self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Registration':
        return cls(
            id=data.get('id', ''),
            event_id=data.get('eventId', ''),
            form_data=dict(data.get('formData') or {}),
            timestamp=data.get('timestamp', 0),
        )
