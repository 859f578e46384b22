"""Identifier generation for events and registrations."""

import secrets
import string

_ALPHABET = string.ascii_lowercase + string.digits

def generate_id(length: int = 9) -> str:
    """Return a random base-36 identifier, e.g. 'k3j9x0a2m'."""
    return ''.join(secrets.choice(_ALPHABET) for _ in range(length))
