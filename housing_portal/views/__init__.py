"""Presentation view-models for the public listing and the admin dashboard."""
