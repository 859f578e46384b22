"""Routes package initialization."""

from . import (
    admin,
    health,
    public
)

__all__ = [
    'admin',
    'health',
    'public'
]
