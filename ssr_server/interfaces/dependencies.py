"""
Dependency wiring for the error pipeline.

Builds the infrastructure adapters from application settings and
injects them into the error-handling use case.
These are the composition root for the http context.
"""

import logging
from collections.abc import Sequence
from typing import Optional

from ssr_server.application.error_handling.handle_error import HandleErrorUseCase
from ssr_server.application.error_handling.render_fallback import FallbackRenderer
from ssr_server.core.config import Settings
from ssr_server.domain.http.ports import (
    AssetManifestPort,
    ErrorHook,
    FallbackComponent,
    LoggerPort,
)
from ssr_server.infrastructure.rendering.asset_manifest import FileAssetManifestFetcher
from ssr_server.infrastructure.rendering.template_fallback import Jinja2TemplateFallback
from ssr_server.shared.logging import StructuredLogger

logger = logging.getLogger(__name__)


def get_fallback_component(settings: Settings) -> Optional[FallbackComponent]:
    """Load the root error boundary template, if one is configured.

    A missing template is not an error: the server then lets the host
    framework answer failed requests.
    """
    path = settings.error_boundary_template
    if path is None:
        return None
    if not path.is_file():
        logger.warning("Error boundary template %s does not exist, ignoring it", path)
        return None
    return Jinja2TemplateFallback.from_path(path)


def get_handle_error_use_case(
    settings: Settings,
    *,
    fallback: Optional[FallbackComponent] = None,
    manifest: Optional[AssetManifestPort] = None,
    log: Optional[LoggerPort] = None,
    before_error: Optional[Sequence[ErrorHook]] = None,
    after_error: Optional[Sequence[ErrorHook]] = None,
) -> HandleErrorUseCase:
    """Build HandleErrorUseCase with its infrastructure dependencies.

    Explicit arguments take precedence over what the settings describe.
    """
    log = log or StructuredLogger()
    renderer = FallbackRenderer(
        manifest_port=manifest or FileAssetManifestFetcher(settings.assets_manifest_path),
        log=log,
        entrypoint=settings.error_boundary_entrypoint,
        public_path=settings.assets_public_path,
    )
    return HandleErrorUseCase(
        log=log,
        renderer=renderer,
        fallback=fallback if fallback is not None else get_fallback_component(settings),
        before_error=before_error,
        after_error=after_error,
    )
