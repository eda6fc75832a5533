"""Framework wiring shared by the HTTP layer."""
