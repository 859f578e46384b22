"""Map extracted items onto new event records."""

import logging
from typing import Any, Callable, Dict, Iterable, List

from ..models.event import FieldType, FormField, HousingEvent, default_form_fields
from ..models.ids import generate_id
from .base import EventImportError

logger = logging.getLogger(__name__)

DEFAULT_TIME = 'TBD'
DEFAULT_CAPACITY = 50
DEFAULT_IMAGE_KEYWORD = 'event'
IMAGE_URL_TEMPLATE = 'https://picsum.photos/seed/{keyword}/600/400'

def image_url_for(keyword: str) -> str:
    """Placeholder image seeded by keyword, or the generic one."""
    return IMAGE_URL_TEMPLATE.format(keyword=keyword or DEFAULT_IMAGE_KEYWORD)

def merge_custom_fields(custom_fields: Any) -> List[FormField]:
    """
    Default name/phone/email fields followed by the suggested ones.
    
    Suggestions whose name is taken (or missing) are skipped; the rest are
    always optional, whatever the model said.
    """
    fields = default_form_fields()
    if not isinstance(custom_fields, list):
        return fields
    
    for suggestion in custom_fields:
        if not isinstance(suggestion, dict) or not suggestion.get('name'):
            logger.warning(f"Skipping unnamed custom field: {suggestion}")
            continue
        if any(existing.name == suggestion['name'] for existing in fields):
            continue
        options = suggestion.get('options')
        fields.append(FormField(
            name=suggestion['name'],
            label=suggestion.get('label') or suggestion['name'],
            type=FieldType.parse(suggestion.get('type', 'text')),
            required=False,
            options=[str(o) for o in options] if isinstance(options, list) else None,
        ))
    return fields

def _capacity(value: Any) -> int:
    # Zero counts as unspecified, like any other falsy value
    if not value:
        return DEFAULT_CAPACITY
    if isinstance(value, bool):
        raise EventImportError(f"Invalid capacity: {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise EventImportError(f"Capacity must be a whole number: {value!r}")
        value = int(value)
    try:
        capacity = int(value)
    except (TypeError, ValueError) as e:
        raise EventImportError(f"Invalid capacity: {value!r}") from e
    if capacity < 0:
        raise EventImportError(f"Capacity must not be negative: {capacity}")
    return capacity

def build_event(item: Dict[str, Any], id_factory: Callable[[], str] = generate_id) -> HousingEvent:
    """Build one open event from an extracted item, filling in defaults."""
    event_date = item.get('date') or ''
    return HousingEvent(
        id=id_factory(),
        title=item.get('title') or '',
        date=event_date,
        time=item.get('time') or DEFAULT_TIME,
        location=item.get('location') or '',
        description=item.get('description') or '',
        image_url=image_url_for(item.get('imageKeyword') or ''),
        deadline=item.get('deadline') or event_date,
        max_participants=_capacity(item.get('maxParticipants')),
        form_fields=merge_custom_fields(item.get('customFields')),
        is_open=True,
    )

def build_events_from_extraction(
    items: Iterable[Dict[str, Any]],
    id_factory: Callable[[], str] = generate_id
) -> List[HousingEvent]:
    """
    Build events for every extracted item.
    
    Raises:
        EventImportError: If any item is unusable; no events are returned
    """
    return [build_event(item, id_factory) for item in items]
