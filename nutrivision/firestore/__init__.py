"""Firestore persistence for entries and profiles."""
