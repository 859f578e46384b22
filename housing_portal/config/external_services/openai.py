"""OpenAI service configuration."""

import os
from typing import Dict, Optional, Tuple
import httpx
from openai import AsyncOpenAI
from dataclasses import dataclass

class MissingCredentialError(ValueError):
    """Raised when no API key is available for the generative model."""
    pass

@dataclass
class OpenAIConfig:
    """OpenAI configuration settings."""
    
    # API configuration
    api_key: str = ""
    model: str = ""
    temperature: float = 0.2
    max_tokens: int = 4000
    timeout: float = 60.0
    
    def __post_init__(self):
        """Load API key and model from environment if not provided."""
        if not self.api_key:
            self.api_key = os.environ.get('OPENAI_API_KEY', '')
        if not self.model:
            self.model = os.environ.get('OPENAI_MODEL', 'gpt-4o-mini')
    
    def validate(self) -> bool:
        """Validate the configuration."""
        if not self.api_key:
            raise MissingCredentialError(
                "API Key is missing. Please set OPENAI_API_KEY in the environment."
            )
        return True

# Clients keyed by (api_key, timeout) so a rotated key gets its own client
_clients: Dict[Tuple[str, float], AsyncOpenAI] = {}

def init_openai_client(config: Optional[OpenAIConfig] = None) -> AsyncOpenAI:
    """Return the async OpenAI client for a configuration, creating it once.
    
    Returns:
        AsyncOpenAI: Configured OpenAI client instance
    
    Raises:
        MissingCredentialError: If OPENAI_API_KEY environment variable is not set
    """
    config = config or OpenAIConfig()
    config.validate()
    
    key = (config.api_key, config.timeout)
    if key not in _clients:
        # Create a custom httpx client without any proxy settings
        http_client = httpx.AsyncClient(
            base_url="https://api.openai.com/v1",
            headers={"Authorization": f"Bearer {config.api_key}"},
            timeout=config.timeout
        )
        _clients[key] = AsyncOpenAI(api_key=config.api_key, http_client=http_client)
    
    return _clients[key]
