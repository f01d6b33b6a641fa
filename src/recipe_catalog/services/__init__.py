"""Service layer for the recipe catalog."""
