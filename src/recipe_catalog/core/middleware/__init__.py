"""Custom middleware components."""

from recipe_catalog.core.middleware.logging import LoggingMiddleware
from recipe_catalog.core.middleware.request_id import RequestIDMiddleware


__all__ = [
    "LoggingMiddleware",
    "RequestIDMiddleware",
]
