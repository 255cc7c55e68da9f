"""
Error classification for the http bounded context.

Maps a caught error to the response status and the severity, event
and operator-facing message of its diagnostic record.
Pure functions, no IO.
"""

from http import HTTPStatus
from typing import Optional

from ssr_server.domain.http.entities import Classification, LogLevel
from ssr_server.domain.http.errors import ErrorKind, error_kind

DEFAULT_NOT_FOUND_STATUS = 404
DEFAULT_SERVER_ERROR_STATUS = 500

NOT_FOUND_MESSAGE = """NotFoundError, action execution will be aborted.
A custom Not Found page is the common use-case for this error, register a wildcard route or a before-error hook to serve it"""

HTTP_5XX_MESSAGE = """This is an expected server error, here are the most common cases:
- Router guard blocked the request
- Page error boundary was forced to render with a 5xx code in a guard or action"""

HTTP_4XX_MESSAGE = """This is an expected server error, here are the most common cases:
  - Route is not found
  - Page error boundary was forced to render with a 4xx code in a guard or action
  - Request limiter blocked the request with a 429 code"""

GENERIC_5XX_MESSAGE = """This is a 5xx error raised by the HTTP layer itself, check the {code} code of the server framework"""

GENERIC_4XX_MESSAGE = """This is a 4xx error raised by the HTTP layer itself, check the {code} code of the server framework
Most likely the client sent a malformed request or an unsupported content type"""

UNEXPECTED_MESSAGE = """Unexpected server error. Error cause will be in "error" parameter.
  Most likely an error has occurred in the rendering of the current page component
  You can try to find relative logs by using "x-request-id" header"""


def _error_code(error: BaseException, status_code: Optional[int]) -> str:
    """Return the symbolic code of an HTTP-layer error."""
    code = getattr(error, "code", None)
    if code:
        return str(code)
    try:
        return HTTPStatus(status_code).name
    except (TypeError, ValueError):
        return type(error).__name__


def _classify_not_found(error: BaseException) -> Classification:
    return Classification(
        http_status=getattr(error, "http_status", None) or DEFAULT_NOT_FOUND_STATUS,
        log_level=LogLevel.INFO,
        log_event="not-found-error",
        log_message=NOT_FOUND_MESSAGE,
    )


def _classify_http(error: BaseException) -> Classification:
    http_status = getattr(error, "http_status", None) or DEFAULT_SERVER_ERROR_STATUS
    if http_status >= 500:
        return Classification(
            http_status=http_status,
            log_level=LogLevel.ERROR,
            log_event="send-server-error",
            log_message=HTTP_5XX_MESSAGE,
        )
    return Classification(
        http_status=http_status,
        log_level=LogLevel.INFO,
        log_event="http-error",
        log_message=HTTP_4XX_MESSAGE,
    )


def _classify_generic(error: BaseException) -> Classification:
    status_code = getattr(error, "status_code", None)
    http_status = status_code or DEFAULT_SERVER_ERROR_STATUS

    if status_code is not None and status_code >= 500:
        return Classification(
            http_status=http_status,
            log_level=LogLevel.ERROR,
            log_event="send-server-error",
            log_message=GENERIC_5XX_MESSAGE.format(code=_error_code(error, status_code)),
        )
    if status_code is not None and status_code >= 400:
        # scanners sending unsupported content types produce a lot of these
        return Classification(
            http_status=http_status,
            log_level=LogLevel.INFO,
            log_event="generic-error-4xx",
            log_message=GENERIC_4XX_MESSAGE.format(code=_error_code(error, status_code)),
        )
    # no status at all, or a success status that still reached the error handler
    return Classification(
        http_status=http_status,
        log_level=LogLevel.ERROR,
        log_event="send-server-error",
        log_message=UNEXPECTED_MESSAGE,
    )


def classify(error: BaseException) -> Classification:
    """Classify a caught error.

    Args:
        error: The error that reached the top of the request-handling stack.

    Returns:
        The response status and diagnostic parameters for the error.

    Raises:
        ValueError: If the error is a redirect, which is never classified.
    """
    kind = error_kind(error)
    if kind is ErrorKind.REDIRECT:
        raise ValueError("Redirect errors are not classified")
    if kind is ErrorKind.NOT_FOUND:
        return _classify_not_found(error)
    if kind is ErrorKind.HTTP:
        return _classify_http(error)
    return _classify_generic(error)
