"""
Value objects for the http bounded context.

They contain no framework imports and no IO operations.
"""

import traceback
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class LogLevel(Enum):
    """Severity chosen for a diagnostic record."""

    INFO = "info"
    WARN = "warn"
    ERROR = "error"


@dataclass(frozen=True)
class RequestInfo:
    """Read-only snapshot of the request that failed."""

    ip: Optional[str]
    request_id: Optional[str]
    url: str

    def to_dict(self) -> dict[str, Optional[str]]:
        return {"ip": self.ip, "requestId": self.request_id, "url": self.url}


@dataclass(frozen=True)
class Classification:
    """Outcome of classifying a caught error."""

    http_status: int
    log_level: LogLevel
    log_event: str
    log_message: str


@dataclass(frozen=True)
class SerializedError:
    """Subset of a caught error that is safe to send to the client."""

    status: int
    message: str
    stack: str

    @classmethod
    def from_error(cls, error: BaseException, status: int) -> "SerializedError":
        """Build a serialized copy of `error` with the response status."""
        message = getattr(error, "message", None) or str(error)
        stack = "".join(
            traceback.format_exception(type(error), error, error.__traceback__)
        )
        return cls(status=status, message=message, stack=stack)

    def to_dict(self) -> dict[str, Any]:
        return {"status": self.status, "message": self.message, "stack": self.stack}


@dataclass(frozen=True)
class RenderedFallback:
    """Error boundary page ready to be sent, with its UTF-8 encoded body."""

    markup: str
    body: bytes

    @property
    def content_length(self) -> int:
        return len(self.body)
