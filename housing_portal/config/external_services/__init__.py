"""External service configurations."""

from .openai import (
    OpenAIConfig,
    MissingCredentialError,
    init_openai_client
)

__all__ = [
    'OpenAIConfig',
    'MissingCredentialError',
    'init_openai_client'
]
