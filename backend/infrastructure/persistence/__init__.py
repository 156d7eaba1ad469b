"""Persistence adapters for the activity repository."""
