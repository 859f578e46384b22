"""Event importers turning free text into event records."""

from .base import EventExtractor, EventImportError
from .openai_extractor import OpenAIEventExtractor
from .event_builder import build_event, build_events_from_extraction, merge_custom_fields
from .ai_import import import_events_from_text

__all__ = [
    'EventExtractor',
    'EventImportError',
    'OpenAIEventExtractor',
    'build_event',
    'build_events_from_extraction',
    'merge_custom_fields',
    'import_events_from_text',
]
