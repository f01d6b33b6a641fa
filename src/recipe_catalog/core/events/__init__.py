"""Application lifecycle events."""

from recipe_catalog.core.events.lifespan import lifespan


__all__ = ["lifespan"]
