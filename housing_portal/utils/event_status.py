"""Registration status derived from an event and the registrations for it."""

from datetime import date
from typing import Iterable, NamedTuple, Optional

from ..models.event import HousingEvent
from ..models.registration import Registration
from .dates import is_deadline_passed

class EventStatus(NamedTuple):
    """Independent registration flags for one event.
    
    Presentation code decides precedence between the flags; nothing here
    makes them mutually exclusive.
    """
    is_full: bool
    is_expired: bool
    is_closed: bool
    remaining_spots: int

    @property
    def accepts_registrations(self) -> bool:
        return not (self.is_full or self.is_expired or self.is_closed)

    def to_dict(self):
        return {
            'isFull': self.is_full,
            'isExpired': self.is_expired,
            'isClosed': self.is_closed,
            'remainingSpots': self.remaining_spots,
        }

def count_registrations(event_id: str, registrations: Iterable[Registration]) -> int:
    """Number of registrations referencing event_id."""
    return sum(1 for r in registrations if r.event_id == event_id)

def get_event_status(
    event: HousingEvent,
    registrations: Iterable[Registration],
    today: Optional[date] = None
) -> EventStatus:
    """
    Compute the registration flags for an event.
    
    Args:
        event: The event to evaluate
        registrations: The full registration collection
        today: Reference day, defaults to the current local day
    
    Returns:
        EventStatus with is_full (count >= capacity), is_expired
        (today > deadline), is_closed (manual flag unset) and the
        remaining spots floored at zero.
    """
    count = count_registrations(event.id, registrations)
    return EventStatus(
        is_full=count >= event.max_participants,
        is_expired=is_deadline_passed(event.deadline, today),
        is_closed=not event.is_open,
        remaining_spots=max(0, event.max_participants - count),
    )
