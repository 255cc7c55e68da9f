"""
Application entry point.

Creates the FastAPI application and wires together:
- Routers
- The central error pipeline (hooks, diagnostics, error boundary)
- Logging configuration

No business logic belongs here.
"""

from collections.abc import Sequence
from typing import Optional

from fastapi import FastAPI

from ssr_server.core.config import Settings, settings as default_settings
from ssr_server.domain.http.ports import (
    AssetManifestPort,
    ErrorHook,
    FallbackComponent,
    LoggerPort,
)
from ssr_server.interfaces.dependencies import get_handle_error_use_case
from ssr_server.interfaces.health import router as health_router
from ssr_server.shared.errors.handlers import register_error_handlers
from ssr_server.shared.logging import configure_logging


def create_app(
    settings: Optional[Settings] = None,
    *,
    fallback: Optional[FallbackComponent] = None,
    manifest: Optional[AssetManifestPort] = None,
    log: Optional[LoggerPort] = None,
    before_error: Optional[Sequence[ErrorHook]] = None,
    after_error: Optional[Sequence[ErrorHook]] = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Registers routers and the central error handler.
    This is the composition root of the application.

    Args:
        settings: Settings to use instead of the environment-loaded ones.
        fallback: Root error boundary; loaded from settings when omitted.
        manifest: Asset manifest source; the stats file from settings when omitted.
        log: Diagnostic logger; a stdlib-backed StructuredLogger when omitted.
        before_error: Hooks run before any default error handling.
        after_error: Hooks run after the diagnostic log, before the error page.

    Returns:
        A fully configured FastAPI application instance.
    """
    settings = settings or default_settings
    configure_logging(level=settings.log_level)

    app = FastAPI(
        title=settings.project_name,
        version=settings.version,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    # --- Error Handlers ---
    use_case = get_handle_error_use_case(
        settings,
        fallback=fallback,
        manifest=manifest,
        log=log,
        before_error=before_error,
        after_error=after_error,
    )
    register_error_handlers(app, use_case)
    app.state.error_boundary = use_case.has_fallback

    # --- Routers ---
    app.include_router(health_router, prefix="/api/v1")

    return app


app = create_app()
