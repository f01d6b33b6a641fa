"""Access logging.

Every request produces two entries, "Request started" and "Request
completed"; the second carries ``status_code`` and ``duration_ms``. Liveness
and readiness probes are not logged.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from recipe_catalog.observability.logging import bind_context, get_logger


if TYPE_CHECKING:
    from collections.abc import Collection

    from starlette.requests import Request
    from starlette.responses import Response
    from starlette.types import ASGIApp

logger = get_logger(__name__)

DEFAULT_EXCLUDED_PATHS = frozenset({"/health", "/ready", "/favicon.ico"})


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log request arrival and outcome with the request's context bound."""

    def __init__(self, app: ASGIApp, *, exclude_paths: Collection[str] | None = None) -> None:
        super().__init__(app)
        self.exclude_paths = DEFAULT_EXCLUDED_PATHS if exclude_paths is None else exclude_paths

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        # Suffix match so probes under an API prefix are skipped too.
        if any(path.endswith(excluded) for excluded in self.exclude_paths):
            return await call_next(request)

        bind_context(method=request.method, path=path, client_ip=self._get_client_ip(request))
        query = str(request.query_params) or None
        logger.info("Request started", query_params=query)

        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        logger.info(
            "Request completed",
            status_code=response.status_code,
            duration_ms=round(elapsed_ms, 2),
        )
        return response

    @staticmethod
    def _get_client_ip(request: Request) -> str:
        """First hop of X-Forwarded-For, then X-Real-IP, then the socket peer."""
        if forwarded := request.headers.get("x-forwarded-for"):
            return forwarded.split(",", 1)[0].strip()
        if real_ip := request.headers.get("x-real-ip"):
            return real_ip
        return request.client.host if request.client else "unknown"
