"""Pure domain logic with no framework dependencies."""
