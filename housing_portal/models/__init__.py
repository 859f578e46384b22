"""Models package initialization."""

from .base import Base
from .event import FieldType, FormField, HousingEvent, DEFAULT_FORM_FIELDS
from .registration import Registration
from .storage_entry import StorageEntry
from .ids import generate_id

__all__ = [
    'Base',
    'FieldType',
    'FormField',
    'HousingEvent',
    'DEFAULT_FORM_FIELDS',
    'Registration',
    'StorageEntry',
    'generate_id',
]
