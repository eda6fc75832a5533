"""Firestore adapters implementing the persistence ports."""

from .entry_repository import FirestoreEntryAdapter, create_firestore_entry_adapter
from .profile_repository import FirestoreProfileAdapter, create_firestore_profile_adapter

__all__ = [
    "FirestoreEntryAdapter",
    "FirestoreProfileAdapter",
    "create_firestore_entry_adapter",
    "create_firestore_profile_adapter",
]
