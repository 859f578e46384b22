"""Event extraction through OpenAI's chat completions with a JSON schema.

The model is asked for every event in a free-form announcement and for
any extra registration fields the description calls for.
"""

import json
import logging
from typing import Any, Dict, List, Optional

from ..config.external_services.openai import OpenAIConfig, init_openai_client
from .base import EventExtractor, EventImportError

logger = logging.getLogger(__name__)

EXTRACTION_PROMPT = """Extract event information from the following text and format it into a structured JSON list.
The text may contain multiple events.

For 'imageKeyword', suggest a single English keyword describing the event.
For 'deadline', if not specified, default to 1 day before the event date.
For 'maxParticipants', if not specified, default to 50.

Identify if any specific extra information is needed from the user based on the description (e.g. "dietary restrictions" for food events, "age" for kids events) and add them to 'customFields'.

Raw Text:
{text}"""

CUSTOM_FIELD_SCHEMA = {
    "type": "object",
    "properties": {
        "name": {"type": "string", "description": "key for data (english)"},
        "label": {"type": "string", "description": "Label shown to user"},
        "type": {"type": "string", "enum": ["text", "number", "select"]},
        "options": {
            "type": "array",
            "items": {"type": "string"},
            "description": "Options if type is select"
        }
    }
}

EVENT_ITEM_SCHEMA = {
    "type": "object",
    "properties": {
        "title": {"type": "string"},
        "date": {"type": "string", "description": "YYYY-MM-DD format"},
        "time": {"type": "string", "description": "e.g., 14:00-16:00"},
        "location": {"type": "string"},
        "description": {"type": "string"},
        "imageKeyword": {"type": "string"},
        "deadline": {"type": "string", "description": "YYYY-MM-DD"},
        "maxParticipants": {"type": "integer"},
        "customFields": {"type": "array", "items": CUSTOM_FIELD_SCHEMA}
    },
    "required": ["title", "date", "location", "description"]
}

# Structured output needs an object at the top level, so the list is wrapped
RESPONSE_SCHEMA = {
    "type": "object",
    "properties": {
        "events": {"type": "array", "items": EVENT_ITEM_SCHEMA}
    },
    "required": ["events"]
}

def _extract_json_from_response(response_text: str) -> Optional[Any]:
    """Extract JSON from a response that might be wrapped in markdown code blocks."""
    # First try parsing as-is
    try:
        return json.loads(response_text)
    except json.JSONDecodeError:
        pass
    
    # Try extracting from markdown code block
    if "```" in response_text:
        try:
            start = response_text.find("```") + 3
            end = response_text.rfind("```")
            # Skip language identifier if present
            if "json" in response_text[start:start+10]:
                start = response_text.find("\n", start) + 1
            json_str = response_text[start:end].strip()
            return json.loads(json_str)
        except (json.JSONDecodeError, ValueError):
            pass
    
    return None

def parse_extraction_response(response_text: str) -> List[Dict[str, Any]]:
    """
    Turn the model's reply into a list of raw event items.
    
    Accepts either the wrapped {"events": [...]} object or a bare list.
    
    Raises:
        EventImportError: If the reply is not JSON or any item is not an object
    """
    result = _extract_json_from_response(response_text or "[]")
    if isinstance(result, dict):
        result = result.get('events')
    if not isinstance(result, list):
        logger.error(f"Invalid response format: {response_text}")
        raise EventImportError("Invalid response format from event extraction")
    if not all(isinstance(item, dict) for item in result):
        raise EventImportError("Every extracted event must be a JSON object")
    return result

class OpenAIEventExtractor(EventExtractor):
    """Extractor backed by an OpenAI chat model."""
    
    def __init__(self, config: Optional[OpenAIConfig] = None):
        self._config = config
    
    def name(self) -> str:
        return 'openai'
    
    async def extract_events(self, text: str) -> List[Dict[str, Any]]:
        # Credential is checked per call so a key set after startup is used
        config = self._config or OpenAIConfig()
        config.validate()
        openai = init_openai_client(config)
        
        try:
            response = await openai.chat.completions.create(
                model=config.model,
                temperature=config.temperature,
                max_tokens=config.max_tokens,
                response_format={
                    "type": "json_schema",
                    "json_schema": {"name": "extracted_events", "schema": RESPONSE_SCHEMA}
                },
                messages=[
                    {
                        "role": "system",
                        "content": (
                            "You are a helpful assistant that extracts community events "
                            "from announcements. Always respond with a valid JSON object."
                        )
                    },
                    {
                        "role": "user",
                        "content": EXTRACTION_PROMPT.format(text=text)
                    }
                ]
            )
            response_text = (response.choices[0].message.content or "").strip()
        except Exception as e:
            logger.error(f"Error calling OpenAI for event extraction: {e}")
            raise EventImportError(f"Event extraction request failed: {e}") from e
        
        items = parse_extraction_response(response_text)
        logger.info(f"Model extracted {len(items)} events")
        return items
