"""Event card shown in the public listing and the admin views."""

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional

from ..models.event import HousingEvent
from ..store import EventStore
from ..utils.event_status import EventStatus

DEFAULT_ACTION_LABEL = '立即報名'
OPEN_BADGE = '報名中'

# Status texts in precedence order: closed > expired > full
CLOSED_LABELS = ('暫停報名', '暫停報名')
EXPIRED_LABELS = ('已截止', '報名已截止')
FULL_LABELS = ('已額滿', '名額已滿')

LOW_SPOTS_THRESHOLD = 5

@dataclass
class EventCard:
    """Badge, button and capacity texts for one event."""
    event: HousingEvent
    status: EventStatus
    is_admin_view: bool = False
    action_label: str = DEFAULT_ACTION_LABEL

    @property
    def is_disabled(self) -> bool:
        """Public cards stop accepting clicks once any flag is set."""
        return not self.is_admin_view and not self.status.accepts_registrations

    def _status_labels(self):
        if self.status.is_closed:
            return CLOSED_LABELS
        if self.status.is_expired:
            return EXPIRED_LABELS
        if self.status.is_full:
            return FULL_LABELS
        return None

    @property
    def badge(self) -> Optional[str]:
        if self.status.accepts_registrations:
            return OPEN_BADGE
        if self.is_admin_view:
            return None
        return self._status_labels()[0]

    @property
    def button_label(self) -> str:
        if self.is_admin_view or self.status.accepts_registrations:
            return self.action_label
        return self._status_labels()[1]

    @property
    def spots_low(self) -> bool:
        return self.status.remaining_spots < LOW_SPOTS_THRESHOLD

    @property
    def capacity_text(self) -> str:
        return f"剩餘名額: {self.status.remaining_spots} / {self.event.max_participants}"

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'event': self.event.to_dict(),
            'status': self.status.to_dict(),
            'badge': self.badge,
            'buttonLabel': self.button_label,
            'disabled': self.is_disabled,
            'deadlineText': f"截止日期: {self.event.deadline}",
        }
        if not self.is_admin_view:
            data['capacityText'] = self.capacity_text
            data['spotsLow'] = self.spots_low
        return data

def build_card(
    store: EventStore,
    event: HousingEvent,
    is_admin_view: bool = False,
    today: Optional[date] = None,
    action_label: str = DEFAULT_ACTION_LABEL
) -> EventCard:
    return EventCard(
        event=event,
        status=store.get_event_status(event, today),
        is_admin_view=is_admin_view,
        action_label=action_label,
    )
