"""
Central error handler registration for FastAPI.

Routes every unhandled request error through HandleErrorUseCase.
When the pipeline gives up and re-raises the original error, the
host framework's default handling produces the response.
"""

import logging
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.exception_handlers import (
    http_exception_handler,
    request_validation_exception_handler,
)
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import PlainTextResponse, Response

from ssr_server.application.error_handling.handle_error import HandleErrorUseCase
from ssr_server.domain.http.errors import HttpError
from ssr_server.interfaces.http.reply import Reply

logger = logging.getLogger(__name__)

REQUEST_VALIDATION_STATUS = 422
REQUEST_VALIDATION_CODE = "REQUEST_VALIDATION_ERROR"


def _status_phrase(status_code: int) -> str:
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return "Error"


def register_error_handlers(app: FastAPI, use_case: HandleErrorUseCase) -> None:
    """Register the error pipeline on the FastAPI application.

    Args:
        app: The FastAPI application instance.
        use_case: The configured error-handling use case.
    """

    async def _run(request: Request, exc: Exception, reply: Reply) -> Response:
        result = await use_case.execute(exc, request, reply)
        return reply.to_response(result)

    async def handle_http_exception(
        request: Request, exc: StarletteHTTPException
    ) -> Response:
        """Handle errors raised by the HTTP layer (routing, validation of methods)."""
        reply = Reply()
        for name, value in (exc.headers or {}).items():
            reply.header(name, value)
        try:
            return await _run(request, exc, reply)
        except StarletteHTTPException as rethrown:
            if rethrown is not exc:
                raise
            return await http_exception_handler(request, exc)

    async def handle_http_error(request: Request, exc: HttpError) -> Response:
        """Handle redirect, not-found and other domain HTTP errors."""
        reply = Reply()
        try:
            return await _run(request, exc, reply)
        except HttpError as rethrown:
            if rethrown is not exc:
                raise
            logger.debug("No error page for %s, sending plain response", type(exc).__name__)
            return PlainTextResponse(
                _status_phrase(reply.status_code), status_code=reply.status_code
            )

    async def handle_request_validation(
        request: Request, exc: RequestValidationError
    ) -> Response:
        """Handle malformed requests rejected by parameter and body validation."""
        # tag it like an HTTP-layer 4xx so it is classified as a client error
        exc.status_code = REQUEST_VALIDATION_STATUS
        exc.code = REQUEST_VALIDATION_CODE
        try:
            return await _run(request, exc, Reply())
        except RequestValidationError as rethrown:
            if rethrown is not exc:
                raise
            return await request_validation_exception_handler(request, exc)

    async def handle_unexpected(request: Request, exc: Exception) -> Response:
        """Catch-all for unexpected errors. Re-raises to the ASGI server."""
        return await _run(request, exc, Reply())

    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(HttpError, handle_http_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(Exception, handle_unexpected)
