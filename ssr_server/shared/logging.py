"""
Logging configuration for the application.

Sets up structured logging with a consistent format.
Logging must not change program behavior.
Never logs sensitive data (request bodies, secrets, raw payloads).
"""

import logging
import sys
from typing import Optional

from ssr_server.domain.http.entities import RequestInfo
from ssr_server.domain.http.ports import LoggerPort

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO") -> None:
    """Configure structured logging for the application.

    Args:
        level: The log level string (DEBUG, INFO, WARNING, ERROR).
    """
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        stream=sys.stdout,
        force=True,
    )

    # Suppress noisy third-party loggers
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


class StructuredLogger(LoggerPort):
    """LoggerPort adapter on top of a stdlib logger.

    The event name and request snapshot travel in `extra` so that
    handlers and formatters can pick them up. Tracebacks are attached
    to warn and error records only.
    """

    def __init__(self, name: str = "ssr_server.errors") -> None:
        self._logger = logging.getLogger(name)

    def _log(
        self,
        level: int,
        event: str,
        message: str,
        error: Optional[BaseException],
        request_info: Optional[RequestInfo],
    ) -> None:
        exc_info = error if error is not None and level >= logging.WARNING else None
        self._logger.log(
            level,
            "%s: %s",
            event,
            message,
            exc_info=exc_info,
            extra={
                "event": event,
                "request_info": request_info.to_dict() if request_info else None,
            },
        )

    def info(
        self,
        *,
        event: str,
        message: str,
        error: Optional[BaseException] = None,
        request_info: Optional[RequestInfo] = None,
    ) -> None:
        self._log(logging.INFO, event, message, error, request_info)

    def warn(
        self,
        *,
        event: str,
        message: str,
        error: Optional[BaseException] = None,
        request_info: Optional[RequestInfo] = None,
    ) -> None:
        self._log(logging.WARNING, event, message, error, request_info)

    def error(
        self,
        *,
        event: str,
        message: str,
        error: Optional[BaseException] = None,
        request_info: Optional[RequestInfo] = None,
    ) -> None:
        self._log(logging.ERROR, event, message, error, request_info)
