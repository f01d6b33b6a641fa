"""Builds the FastAPI application.

``create_app`` is used by ``recipe_catalog.main`` and by the tests, which pass
their own ``Settings``.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from recipe_catalog.api.v1.router import router as v1_router
from recipe_catalog.core.config import Settings, get_settings
from recipe_catalog.core.events import lifespan
from recipe_catalog.core.exceptions import setup_exception_handlers
from recipe_catalog.core.middleware.logging import LoggingMiddleware
from recipe_catalog.core.middleware.request_id import REQUEST_ID_HEADER, RequestIDMiddleware


def create_app(settings: Settings | None = None) -> FastAPI:
    """Return a configured application.

    Args:
        settings: Settings to use; the cached ``get_settings()`` when omitted.
            Stored on ``app.state.settings`` for the lifespan.
    """
    settings = settings or get_settings()
    docs = settings.docs_enabled

    app = FastAPI(
        title=settings.app.name,
        version=settings.app.version,
        description="Recipes and categories with filtering, pagination and soft delete",
        debug=settings.app.debug,
        lifespan=lifespan,
        docs_url="/docs" if docs else None,
        redoc_url="/redoc" if docs else None,
        openapi_url="/openapi.json" if docs else None,
    )
    app.state.settings = settings

    setup_exception_handlers(app)
    _add_middleware(app, settings)
    _include_routers(app, settings)
    return app


def _add_middleware(app: FastAPI, settings: Settings) -> None:
    """Install middleware; the last one added runs first on a request.

    Resulting request order: request id, request logging, CORS.
    """
    if settings.api.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.api.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=[REQUEST_ID_HEADER],
        )
    app.add_middleware(LoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)


def _include_routers(app: FastAPI, settings: Settings) -> None:
    app.include_router(v1_router, prefix=settings.api.v1_prefix)

    @app.get("/", include_in_schema=False)
    async def service_info() -> dict[str, str]:
        return {
            "service": settings.app.name,
            "version": settings.app.version,
            "docs": "/docs" if settings.docs_enabled else "disabled",
        }
