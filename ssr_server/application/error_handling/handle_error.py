"""
Use case: Handle an error that reached the top of the request-handling stack.

Input: caught error, request, reply
Output: The response body (hook result or rendered error page), or None
    after a redirect was issued on the reply.
Side effects: Runs error hooks, logs one diagnostic record, mutates the reply.
Failure cases: Re-raises the original error when no error page can be rendered.
    Exceptions raised by hooks propagate unchanged.
"""

from collections.abc import Sequence
from typing import Any, Optional

from ssr_server.application.error_handling.diagnostics import emit_diagnostics
from ssr_server.application.error_handling.hook_chain import run_chain
from ssr_server.application.error_handling.render_fallback import FallbackRenderer
from ssr_server.domain.http.classifier import classify
from ssr_server.domain.http.entities import RequestInfo, SerializedError
from ssr_server.domain.http.errors import ErrorKind, error_kind
from ssr_server.domain.http.ports import ErrorHook, FallbackComponent, LoggerPort

DEFAULT_REDIRECT_STATUS = 307
NO_CACHE = "no-store, no-cache, must-revalidate"
REQUEST_ID_HEADER = "x-request-id"


def request_info_from(request: Any) -> RequestInfo:
    """Take the logging snapshot of an inbound request."""
    client = getattr(request, "client", None)
    return RequestInfo(
        ip=client.host if client else None,
        request_id=request.headers.get(REQUEST_ID_HEADER),
        url=str(request.url),
    )


class HandleErrorUseCase:
    """Central error handler for server-rendered requests.

    Sequence: before-error hooks, redirect short-circuit, classification,
    diagnostic log, after-error hooks, response status, error boundary
    rendering. Either a response value is returned or the original
    error is raised again, never neither.
    """

    def __init__(
        self,
        log: LoggerPort,
        renderer: FallbackRenderer,
        fallback: Optional[FallbackComponent] = None,
        before_error: Optional[Sequence[ErrorHook]] = None,
        after_error: Optional[Sequence[ErrorHook]] = None,
    ) -> None:
        self._log = log
        self._renderer = renderer
        self._fallback = fallback
        self._before_error = before_error
        self._after_error = after_error

    @property
    def has_fallback(self) -> bool:
        """Whether a root error boundary is configured."""
        return self._fallback is not None

    async def execute(self, error: BaseException, request: Any, reply: Any) -> Any:
        """Run the error pipeline for one request.

        Args:
            error: The unhandled error.
            request: The failed request.
            reply: Reply exposing status(), header() and redirect().

        Returns:
            The response body, or None after a redirect.

        Raises:
            BaseException: The original error when no error page is available.
        """
        request_info = request_info_from(request)
        fallback = self._fallback

        before_result = await run_chain(self._before_error, error, request, reply)
        if before_result is not None:
            return before_result

        if error_kind(error) is ErrorKind.REDIRECT:
            self._log.info(
                event="redirect-found-error",
                message=(
                    f"RedirectFoundError, redirect to {error.next_url}, "
                    "action execution will be aborted."
                ),
                error=error,
                request_info=request_info,
            )
            reply.header("cache-control", NO_CACHE)
            reply.redirect(
                getattr(error, "http_status", None) or DEFAULT_REDIRECT_STATUS,
                error.next_url,
            )
            return None

        classification = classify(error)
        emit_diagnostics(
            self._log, classification, request_info, error, fallback is not None
        )

        after_result = await run_chain(self._after_error, error, request, reply)
        if after_result is not None:
            return after_result

        reply.status(classification.http_status)

        if fallback is not None:
            serialized = SerializedError.from_error(error, classification.http_status)
            rendered = await self._renderer.render(
                fallback, serialized, request_info.url
            )
            if rendered is not None:
                reply.header("Content-Type", "text/html; charset=utf-8")
                reply.header("Content-Length", str(rendered.content_length))
                reply.header("Cache-Control", NO_CACHE)
                return rendered.body

        raise error
