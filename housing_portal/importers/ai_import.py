"""Admin import action: free text in, new events appended to the store."""

import logging
from typing import List

from ..models.event import HousingEvent
from ..store import EventStore
from .base import EventExtractor, EventImportError
from .event_builder import build_events_from_extraction

logger = logging.getLogger(__name__)

async def import_events_from_text(
    text: str,
    extractor: EventExtractor,
    store: EventStore
) -> List[HousingEvent]:
    """
    Extract events from text and append them to the store as one batch.
    
    Either every extracted event is appended or none is. Overlapping
    imports are not deduplicated.
    
    Raises:
        ValueError: If text is blank
        MissingCredentialError: If the extractor has no credential
        EventImportError: If extraction or mapping fails
    """
    if not text or not text.strip():
        raise ValueError("Import text must not be empty")
    
    items = await extractor.extract_events(text)
    try:
        events = build_events_from_extraction(items)
    except EventImportError:
        raise
    except Exception as e:
        raise EventImportError(f"Failed to build events from extraction: {e}") from e
    
    store.add_events_batch(events)
    logger.info(f"Imported {len(events)} events via {extractor.name()}")
    return events
