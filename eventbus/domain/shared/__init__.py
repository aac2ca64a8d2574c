"""Contracts shared by event bus implementations."""
