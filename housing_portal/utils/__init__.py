"""Shared helpers for the housing events portal."""
