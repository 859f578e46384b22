"""Community housing event registration portal."""

__version__ = "1.0.0"
