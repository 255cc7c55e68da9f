"""
Use case: Render the root error boundary for a failed request.

Input: FallbackComponent, SerializedError, request URL
Output: RenderedFallback (HTML document and UTF-8 body), or None when rendering is not possible.
Side effects: Fetches the asset manifest, logs render-fallback / failed-fallback-render.
Failure cases: None surface to the caller; every failure is logged and contained.
"""

import logging
from typing import Optional

from ssr_server.domain.http.assets import AssetBundle
from ssr_server.domain.http.entities import RenderedFallback, SerializedError
from ssr_server.domain.http.ports import AssetManifestPort, FallbackComponent, LoggerPort
from ssr_server.shared.serialization import parse_url, safe_json_dumps

logger = logging.getLogger(__name__)

HEAD_CLOSE_TAG = "</head>"


def _client_state_script(url: dict, error: SerializedError) -> str:
    return (
        "<script>"
        f"window.serverUrl = {safe_json_dumps(url)};"
        f"window.serverError = new Error({safe_json_dumps(error.message)});"
        f"Object.assign(window.serverError, {safe_json_dumps(error.to_dict())});"
        "</script>"
    )


class FallbackRenderer:
    """Renders the root error boundary with its assets and client state.

    The markup produced by the component gets, right before its closing
    head tag, a script restoring the URL and error on `window`, followed
    by the style and script tags of the error boundary entrypoint.
    """

    def __init__(
        self,
        manifest_port: AssetManifestPort,
        log: LoggerPort,
        entrypoint: str = "rootErrorBoundary",
        public_path: str = "/",
    ) -> None:
        self._manifest_port = manifest_port
        self._log = log
        self._entrypoint = entrypoint
        self._public_path = public_path

    async def render(
        self,
        component: FallbackComponent,
        error: SerializedError,
        url: str,
    ) -> Optional[RenderedFallback]:
        """Render the error page.

        Args:
            component: The root error boundary.
            error: Serialized error passed to the component and the client.
            url: URL of the failed request.

        Returns:
            The HTML document and its encoded body, or None if any step failed.
        """
        try:
            manifest = await self._manifest_port.fetch()
            assets = AssetBundle.from_manifest(
                manifest, self._entrypoint, default_public_path=self._public_path
            )
            parsed_url = parse_url(url)

            markup = await component.render(error=error, url=parsed_url)
            injection = "\n".join(
                part
                for part in (
                    _client_state_script(parsed_url, error),
                    assets.style_tags(),
                    assets.script_tags(),
                    HEAD_CLOSE_TAG,
                )
                if part
            )
            page = markup.replace(HEAD_CLOSE_TAG, injection, 1)
            rendered = RenderedFallback(markup=page, body=page.encode("utf-8"))
        except Exception as exc:
            self._log.warn(
                event="failed-fallback-render",
                message="Root error boundary rendering failed",
                error=exc,
            )
            return None

        logger.debug("Rendered %d bytes of error boundary markup", rendered.content_length)
        self._log.info(
            event="render-fallback",
            message="Render root error boundary for the client",
        )
        return rendered
