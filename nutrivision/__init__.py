"""NutriVision food logging service."""
