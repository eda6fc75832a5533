"""Ports describing the persistence operations used by the application."""

from .ports import EntryNotFoundError, EntryRepository, ProfileRepository

__all__ = ["EntryNotFoundError", "EntryRepository", "ProfileRepository"]
