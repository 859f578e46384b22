"""Configuration package for the housing events portal."""
