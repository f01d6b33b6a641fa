"""Observability helpers (structured logging)."""

from recipe_catalog.observability.logging import get_logger, setup_logging


__all__ = ["get_logger", "setup_logging"]
