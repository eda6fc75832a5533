"""Clients for the external services the application depends on."""
