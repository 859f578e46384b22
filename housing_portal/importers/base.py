"""Base interface for turning free text into event data."""

from abc import ABC, abstractmethod
from typing import Any, Dict, List

class EventImportError(Exception):
    """Raised when extraction fails; nothing from the attempt is kept."""
    pass

class EventExtractor(ABC):
    """
    Base interface for event extractors.
    
    Each extractor is responsible for:
    1. Sending free text to some structured-extraction backend
    2. Returning one raw item per event found, in the extraction layout
       (title, date, time, location, description, imageKeyword, deadline,
       maxParticipants, customFields)
    
    Required Methods:
        extract_events(text: str) -> List[Dict[str, Any]]: Extract raw event items
    """
    
    @abstractmethod
    async def extract_events(self, text: str) -> List[Dict[str, Any]]:
        """
        Extract raw event items from text.
        
        Args:
            text: Free-form announcement text
        
        Returns:
            List[Dict[str, Any]]: One item per event found
        
        Raises:
            MissingCredentialError: If the backend has no credential configured
            EventImportError: If the call or the response parsing fails
        """
        pass
    
    @abstractmethod
    def name(self) -> str:
        """
        Return the name/identifier of this extractor.
        
        Returns:
            str: The extractor's identifier (e.g., 'openai')
        """
        pass
