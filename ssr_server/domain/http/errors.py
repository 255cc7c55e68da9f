"""
Domain-specific errors for the http bounded context.

Errors raised by request-processing code (guards, actions, page loaders)
to steer the error pipeline. Each error carries an ErrorKind tag that
the classifier matches on, so third-party errors can opt in by exposing
the same `kind` attribute.
No framework imports allowed.
"""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Closed set of error variants understood by the error pipeline."""

    REDIRECT = "redirect"
    NOT_FOUND = "not-found"
    HTTP = "http"
    GENERIC = "generic"


def error_kind(error: BaseException) -> ErrorKind:
    """Return the variant tag of a caught error.

    Errors without a `kind` attribute are generic server errors.
    """
    kind = getattr(error, "kind", None)
    if isinstance(kind, ErrorKind):
        return kind
    return ErrorKind.GENERIC


class HttpError(Exception):
    """Base error for all errors carrying an HTTP status for the response."""

    kind = ErrorKind.HTTP

    def __init__(self, message: str = "", http_status: Optional[int] = None) -> None:
        self.message = message
        self.http_status = http_status
        super().__init__(self.message)


class NotFoundError(HttpError):
    """Raised when the requested page or resource does not exist."""

    kind = ErrorKind.NOT_FOUND

    def __init__(
        self, message: str = "Not Found", http_status: Optional[int] = None
    ) -> None:
        super().__init__(message, http_status=http_status)


class RedirectFoundError(HttpError):
    """Raised to abort the current request and redirect the client.

    This is a control-flow signal, not a fault.
    """

    kind = ErrorKind.REDIRECT

    def __init__(self, next_url: str, http_status: Optional[int] = None) -> None:
        super().__init__(f"Redirect to {next_url}", http_status=http_status)
        self.next_url = next_url


class AssetManifestError(Exception):
    """Raised when the bundler stats cannot describe an entrypoint."""

    def __init__(self, entrypoint: str, reason: str) -> None:
        super().__init__(f"Cannot resolve assets for entrypoint {entrypoint!r}: {reason}")
        self.entrypoint = entrypoint
        self.reason = reason
